"""Command: list the handler applications browdi can pick from."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from browdi.commands._base import BrowdiCommand

if TYPE_CHECKING:
    from browdi.commands._context import AppContext


@click.command(
    cls=BrowdiCommand,
    examples="""\
  browdi handlers
  browdi --json handlers""",
)
@click.pass_obj
def handlers(app: AppContext) -> None:
    """List handlers in picker order with their hotkeys."""
    from browdi.services.catalog import list_handlers

    app.emit(list_handlers(app.registry, app.hotkeys))
