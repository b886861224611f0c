"""Subcommand modules for browdi.

Provides register_commands(), which uses deferred imports to keep
``browdi --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``defaults`` group and the standalone commands."""
    from browdi.commands.defaults import defaults
    from browdi.commands.handlers import handlers
    from browdi.commands.open_cmd import open_cmd

    cli.add_command(open_cmd)
    cli.add_command(handlers)
    cli.add_command(defaults)
