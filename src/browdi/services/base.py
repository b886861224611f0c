"""BaseService — shared notification plumbing for browdi services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from browdi.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)


class BaseService:
    """Base for services that notify plugins of what they did.

    Usage::

        class DispatchEngine(BaseService):
            def quit(self) -> ServiceResult:
                warnings: list[str] = []
                self._dispatch_event("terminated", {"reason": "quit"}, warnings)
                ...
    """

    def __init__(self, bus: EventBus | None = None) -> None:
        self._bus = bus

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a notification. No-op without an event bus.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._bus is None:
            return
        warning = self._bus.dispatch(hook_name, payload)
        if warning is not None:
            warnings.append(warning)
