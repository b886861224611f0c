"""TerminalPicker — keyboard-driven picker rendered with Rich.

Registered as a plugin, it redraws whenever the engine reports a new
current target or a changed toggle. Key presses are read by the ``open``
command and fed back to the engine as ``KeyInput`` events.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click
from rich.text import Text

from browdi.output.console import create_console, get_output
from browdi.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from browdi.services.dispatch import DispatchEngine


def _echo_err(text: str) -> None:
    click.echo(text, err=True)


class TerminalPicker:
    """Renders the engine's current view to the terminal."""

    def __init__(
        self,
        engine: DispatchEngine,
        *,
        write: Callable[[str], None] | None = None,
        width: int | None = None,
    ) -> None:
        self._engine = engine
        self._write = write or _echo_err
        self._width = width

    def render(self) -> str:
        """Return the picker screen as text."""
        engine = self._engine
        session = engine.session
        console = create_console(width=self._width)

        if session.current is None:
            console.print(Text("No target: pick a handler to start it.", style="browdi.key"))
        else:
            shown = session.current.uri
            if session.domain_key is not None and not engine.show_full_url:
                shown = session.domain_key
            line = Text(shown, style="browdi.target")
            pending = len(engine.queue)
            if pending > 1:
                line.append(f"  ({pending - 1} more queued)", style="browdi.key")
            console.print(line)

        for index, app in enumerate(engine.registry):
            letter = engine.hotkeys.letter_for(index)
            label = Text(f"  [{letter}] " if letter else "      ", style="browdi.hotkey")
            label.append(app.name, style="browdi.handler")
            console.print(label)

        if session.domain_visible:
            state = "on" if session.remember else "off"
            console.print(
                Text("  [d] remember for ", style="browdi.key"),
                Text(session.domain_key or "", style="browdi.target"),
                Text(f": {state}", style=f"browdi.toggle.{state}"),
                sep="",
            )

        if engine.shortcut_help:
            console.print(
                Text(
                    "  q quit   s toggle full url   d remember domain   h hide help",
                    style="browdi.key",
                )
            )
        return get_output(console).rstrip("\n")

    def show(self) -> None:
        self._write(self.render())

    @hookimpl
    def current_changed(
        self,
        uri: str,
        domain_visible: bool,
        domain_key: str | None,
        pending: int,
    ) -> None:
        self.show()

    @hookimpl
    def preference_changed(self, name: str, value: Any) -> None:
        self.show()

    @hookimpl
    def handler_launched(self, handler_name: str, uris: list[str], ok: bool) -> None:
        if not ok:
            self._write(f"WARNING: {handler_name} could not be started")
