"""Extension layer — plugin system via pluggy.

Plugins contribute handler applications and subscribe to dispatch
notifications. INVARIANT: Plugin failures are warnings, never errors.
"""

from browdi.plugins.event_bus import EventBus
from browdi.plugins.manager import PluginManager

__all__ = ["EventBus", "PluginManager"]
