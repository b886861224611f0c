"""Command: open files or URLs with a remembered or picked handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from browdi.commands._base import BrowdiCommand

if TYPE_CHECKING:
    from browdi.commands._context import AppContext
    from browdi.domain.registry import HandlerRegistry
    from browdi.services.dispatch import DispatchEngine
    from browdi.services.result import ServiceResult

# End of piped input, Escape. Ctrl-C and Ctrl-D arrive as exceptions.
_QUIT_CHARS = frozenset({"", "\x1b"})


def _find_handler(registry: HandlerRegistry, wanted: str) -> int | None:
    """Index of the handler whose name or id is *wanted*."""
    for index, app in enumerate(registry):
        if wanted in (app.name, app.id):
            return index
    folded = wanted.casefold()
    for index, app in enumerate(registry):
        if app.name.casefold() == folded:
            return index
    return None


def _run_interactive(engine: DispatchEngine, results: list[ServiceResult]) -> None:
    while not engine.is_terminated:
        try:
            key = click.getchar()
        except (KeyboardInterrupt, EOFError):
            results.append(engine.quit())
            break
        if key in _QUIT_CHARS:
            results.append(engine.quit())
        else:
            results.append(engine.key_input(key))


def _run_scripted(
    engine: DispatchEngine,
    index: int,
    remember: bool,
    results: list[ServiceResult],
) -> None:
    while not engine.is_terminated:
        if remember:
            results.append(engine.toggle_remember(True))
        results.append(engine.select_handler(index))


@click.command(
    "open",
    cls=BrowdiCommand,
    examples="""\
  browdi open https://example.com/docs
  browdi open ./report.pdf https://example.com
  browdi open --handler Firefox --remember https://example.com
  browdi open            # pick a handler and start it without a target""",
)
@click.argument("targets", nargs=-1)
@click.option(
    "-H",
    "--handler",
    "handler_name",
    default=None,
    help="Open every pending target with this handler (name or id) without prompting.",
)
@click.option(
    "--remember",
    is_flag=True,
    help="With --handler: make it the default for each web target's domain.",
)
@click.pass_obj
def open_cmd(
    app: AppContext,
    targets: tuple[str, ...],
    handler_name: str | None,
    remember: bool,
) -> None:
    """Open TARGETS (files or URLs) one at a time.

    Targets whose site has a remembered handler open right away. For the
    rest, press a handler's letter; q quits, d toggles remembering the
    choice for the site, s toggles the full URL, h shows key help.
    """
    from browdi.domain.targets import target_from_argument
    from browdi.services.result import ServiceResult, failure

    if remember and handler_name is None:
        msg = "--remember needs --handler; press d in the picker instead"
        raise click.UsageError(msg)

    op = "open"
    engine = app.create_engine()

    index: int | None = None
    if handler_name is not None:
        index = _find_handler(engine.registry, handler_name)
        if index is None:
            app.emit(
                failure(
                    op,
                    "UNKNOWN_HANDLER",
                    f"No handler named {handler_name!r}",
                    available=engine.registry.names(),
                )
            )
            return

    if len(engine.registry) == 0:
        app.emit(failure(op, "NO_HANDLERS", "No handler applications are configured"))
        return

    interactive = index is None and not app.settings.no_interact
    picker = None
    if interactive:
        from browdi.output.picker import TerminalPicker

        picker = TerminalPicker(engine)
        app.plugins.register_plugin(picker, name="terminal-picker")

    results: list[ServiceResult] = []
    if targets:
        results.append(engine.enqueue([target_from_argument(t) for t in targets]))
    elif picker is not None:
        picker.show()

    if not engine.is_terminated:
        if index is not None:
            _run_scripted(engine, index, remember, results)
        elif picker is not None:
            _run_interactive(engine, results)
        else:
            pending = [t.uri for t in engine.queue.snapshot()]
            app.emit(
                failure(
                    op,
                    "SELECTION_REQUIRED",
                    "Targets need a handler pick; pass --handler in non-interactive mode",
                    pending=pending,
                )
            )
            return

    final: dict[str, Any] = results[-1].data if results else {}
    warnings = [w for r in results for w in r.warnings]
    app.emit(
        ServiceResult(
            ok=True,
            op=op,
            data={
                "launched": engine.launches,
                "reason": final.get("reason", ""),
                "discarded": final.get("discarded", 0),
            },
            warnings=warnings,
        )
    )
