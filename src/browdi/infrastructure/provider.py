"""HandlerProvider — where candidate handler applications come from.

Configured ``[[handlers]]`` entries come first, in file order, followed by
whatever plugins return from the ``browdi_handlers`` hook.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from browdi.domain.registry import SELF_IDS, HandlerApp, HandlerRegistry
from browdi.infrastructure.launcher import SubprocessLauncher

if TYPE_CHECKING:
    from browdi.config.models import HandlerConfig
    from browdi.config.settings import BrowdiSettings
    from browdi.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


def handler_from_config(entry: HandlerConfig) -> HandlerApp:
    """Build a HandlerApp that spawns *entry*'s command."""
    return HandlerApp(
        id=entry.id,
        name=entry.name,
        icon=entry.icon,
        launcher=SubprocessLauncher(entry.name, entry.command),
    )


class HandlerProvider:
    """Answer "which handlers can open scheme *x*"."""

    def __init__(
        self,
        configured: Sequence[HandlerConfig],
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self._configured = tuple(configured)
        self._pm = plugin_manager

    def handlers_for(self, scheme: str) -> list[HandlerApp]:
        """Ordered candidates for *scheme*; duplicates by id keep the first."""
        candidates = [handler_from_config(e) for e in self._configured if e.accepts(scheme)]
        if self._pm is not None:
            candidates.extend(self._pm.collect_handlers(scheme))

        seen: set[str] = set()
        unique: list[HandlerApp] = []
        for app in candidates:
            if app.id in seen:
                logger.debug("Skipping duplicate handler id %s", app.id)
                continue
            seen.add(app.id)
            unique.append(app)
        return unique


def build_registry(
    settings: BrowdiSettings,
    plugin_manager: PluginManager | None = None,
) -> HandlerRegistry:
    """Query the provider and apply the exclusion set once."""
    provider = HandlerProvider(settings.handlers, plugin_manager)
    candidates = provider.handlers_for(settings.dispatch.scheme)
    excluded = SELF_IDS | set(settings.dispatch.excluded_ids)
    registry = HandlerRegistry.build(candidates, excluded)
    logger.debug("Handler registry: %s", registry.names())
    return registry
