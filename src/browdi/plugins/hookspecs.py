"""Pluggy hook specifications for browdi.

One provider hook supplies extra handler applications; four notification
hooks let renderers and other observers follow the dispatch engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from browdi.domain.registry import HandlerApp

PROJECT_NAME = "browdi"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class BrowdiHookSpec:
    """Hook specifications for the browdi plugin system."""

    @hookspec
    def browdi_handlers(self, scheme: str) -> list[HandlerApp] | None:
        """Return handler applications able to open *scheme* targets."""

    @hookspec
    def current_changed(
        self,
        uri: str,
        domain_visible: bool,
        domain_key: str | None,
        pending: int,
    ) -> None:
        """Called when a new target becomes the one awaiting selection."""

    @hookspec
    def handler_launched(self, handler_name: str, uris: list[str], ok: bool) -> None:
        """Called after a handler was asked to open *uris*."""

    @hookspec
    def preference_changed(self, name: str, value: Any) -> None:
        """Called when a display preference or session toggle changes."""

    @hookspec
    def terminated(self, reason: str) -> None:
        """Called once when the engine reaches its terminal state."""
