"""Synchronous notification dispatch via pluggy.

The engine processes one event at a time, so notifications are delivered
inline, in the same thread, before the next event is accepted.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from browdi.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Deliver notification hooks to every registered plugin.

    Parameters:
        plugin_manager: PluginManager whose hook relay receives the calls.
    """

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager

    @property
    def plugin_manager(self) -> PluginManager:
        return self._pm

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> str | None:
        """Call *hook_name* with *payload*.

        Returns a warning message if a plugin raised, else None.
        """
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            logger.debug("No hook named %s", hook_name)
            return None
        try:
            hook_fn(**payload)
        except Exception:
            logger.warning("Hook %s failed", hook_name, exc_info=True)
            return f"Notification {hook_name} failed"
        return None
