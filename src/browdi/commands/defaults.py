"""Command group: inspect and prune remembered per-domain defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from browdi.commands._base import BrowdiGroup

if TYPE_CHECKING:
    from browdi.commands._context import AppContext


@click.group(
    cls=BrowdiGroup,
    examples="""\
  browdi defaults list
  browdi -v defaults list
  browdi defaults forget https://example.com""",
)
def defaults() -> None:
    """Remembered handler per site."""


@defaults.command(
    "list",
    examples="""\
  browdi defaults list
  browdi --json defaults list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """Show which handler each remembered domain opens with."""
    from browdi.services.catalog import list_defaults

    app.emit(list_defaults(app.defaults, app.registry))


@defaults.command(
    examples="""\
  browdi defaults forget https://example.com
  browdi defaults forget https://example.com/some/page""",
)
@click.argument("domain")
@click.pass_obj
def forget(app: AppContext, domain: str) -> None:
    """Stop auto-opening DOMAIN (a URL or scheme://host key)."""
    from browdi.domain.targets import OpenTarget, web_domain_key
    from browdi.services.result import failure

    key = web_domain_key(OpenTarget.from_uri(domain))
    if key is None:
        app.emit(
            failure(
                "forget_default",
                "INVALID_DOMAIN",
                f"Not an http(s) URL or domain key: {domain!r}",
            )
        )
        return
    app.emit(app.defaults.forget(key))
