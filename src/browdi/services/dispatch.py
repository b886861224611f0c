"""DispatchEngine — the state machine behind a browdi invocation.

States: ``idle`` → ``awaiting_selection`` → ``terminated`` (absorbing).
While awaiting selection the live :class:`DispatchSession` holds the
current target, its domain key, and the remember flag.

Events are processed one at a time. Each operation returns a ServiceResult
whose ``data`` carries the new ``state``, the ``changed`` field names, and
a view of the ``current`` session, so a renderer can redraw only what moved.

Launch and persistence failures are logged and reported as warnings; they
never stop a transition.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from browdi.domain.errors import InvalidIndexError
from browdi.domain.events import (
    DispatchState,
    DisplayPreferenceToggled,
    InboundEvent,
    KeyInput,
    OpenRequested,
    Quit,
    RememberToggled,
    SelectionMade,
)
from browdi.domain.hotkeys import CONTROL_KEYS, ControlKey
from browdi.domain.targets import OpenTarget, web_domain_key
from browdi.infrastructure.kvstore import SHOW_FULL_URL
from browdi.services.base import BaseService
from browdi.services.queue import RequestQueue
from browdi.services.result import ServiceResult, failure

if TYPE_CHECKING:
    from browdi.domain.hotkeys import HotkeyMap
    from browdi.domain.registry import HandlerApp, HandlerId, HandlerRegistry
    from browdi.infrastructure.kvstore import KeyValueStore
    from browdi.plugins.event_bus import EventBus
    from browdi.services.defaults import DomainDefaultStore

logger = logging.getLogger(__name__)

_SESSION_FIELDS = ["current", "domain_visible", "domain_key", "remember"]


@dataclass
class DispatchSession:
    """Selection state for the target currently on screen."""

    current: OpenTarget | None = None
    remember: bool = False
    domain_visible: bool = False
    domain_key: str | None = None

    @classmethod
    def for_target(cls, target: OpenTarget | None) -> DispatchSession:
        """Fresh session for *target*: remember off, affordance per domain key."""
        key = web_domain_key(target) if target is not None else None
        return cls(current=target, domain_visible=key is not None, domain_key=key)

    def view(self) -> dict[str, Any]:
        return {
            "uri": self.current.uri if self.current else None,
            "domain_visible": self.domain_visible,
            "domain_key": self.domain_key,
            "remember": self.remember,
        }


class DispatchEngine(BaseService):
    """Sequences auto-resolution, selection, persistence, and termination."""

    def __init__(
        self,
        registry: HandlerRegistry,
        hotkeys: HotkeyMap,
        defaults: DomainDefaultStore,
        kv: KeyValueStore,
        *,
        bus: EventBus | None = None,
    ) -> None:
        super().__init__(bus)
        self._registry = registry
        self._hotkeys = hotkeys
        self._defaults = defaults
        self._kv = kv
        self._queue = RequestQueue()
        self._state = DispatchState.IDLE
        self._session = DispatchSession()
        self._show_full_url: bool = kv.get(SHOW_FULL_URL)
        self._shortcut_help = False
        self._launches: list[dict[str, Any]] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> DispatchState:
        return self._state

    @property
    def session(self) -> DispatchSession:
        return self._session

    @property
    def queue(self) -> RequestQueue:
        return self._queue

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    @property
    def hotkeys(self) -> HotkeyMap:
        return self._hotkeys

    @property
    def show_full_url(self) -> bool:
        return self._show_full_url

    @property
    def shortcut_help(self) -> bool:
        return self._shortcut_help

    @property
    def launches(self) -> list[dict[str, Any]]:
        """Every launch attempted so far, in order."""
        return list(self._launches)

    @property
    def is_terminated(self) -> bool:
        return self._state is DispatchState.TERMINATED

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    def handle(self, event: InboundEvent) -> ServiceResult:
        """Route a typed inbound event to its operation."""
        if isinstance(event, OpenRequested):
            return self.enqueue(event.targets)
        if isinstance(event, SelectionMade):
            return self.select_handler(event.index)
        if isinstance(event, RememberToggled):
            return self.toggle_remember(event.value)
        if isinstance(event, DisplayPreferenceToggled):
            return self.toggle_show_full_url(event.value)
        if isinstance(event, KeyInput):
            return self.key_input(event.char)
        if isinstance(event, Quit):
            return self.quit()
        msg = f"Unsupported event: {event!r}"
        raise TypeError(msg)

    def enqueue(self, targets: Sequence[OpenTarget]) -> ServiceResult:
        """Auto-open remembered targets and queue the rest for selection."""
        op = "enqueue"
        if self.is_terminated:
            return self._rejected(op)

        warnings: list[str] = []
        launched: list[dict[str, Any]] = []
        unresolved: list[OpenTarget] = []
        for target in targets:
            handler = self._remembered_handler(target)
            if handler is None:
                unresolved.append(target)
                continue
            launched.append(self._launch(handler, [target], warnings))

        self._queue.extend(unresolved)
        if not self._queue:
            reason = "all_resolved" if launched else "empty"
            return self._terminate(op, reason, warnings, launched=launched)

        self._state = DispatchState.AWAITING_SELECTION
        self._activate_current(warnings)
        return self._result(op, ["state", *_SESSION_FIELDS], warnings, launched=launched)

    def select_handler(self, index: int) -> ServiceResult:
        """Open the current target (or nothing) with the handler at *index*."""
        op = "select_handler"
        if self.is_terminated:
            return self._rejected(op)
        try:
            handler = self._registry.get(index)
        except InvalidIndexError as exc:
            logger.debug("Ignoring selection: %s", exc)
            return failure(op, "INVALID_INDEX", str(exc), index=index)
        return self._select(op, handler)

    def select_handler_id(self, handler_id: HandlerId) -> ServiceResult:
        """Like :meth:`select_handler`, addressed by stable handler id."""
        op = "select_handler"
        if self.is_terminated:
            return self._rejected(op)
        try:
            handler = self._registry.by_id(handler_id)
        except InvalidIndexError as exc:
            logger.debug("Ignoring selection: %s", exc)
            return failure(
                op,
                "INVALID_INDEX",
                str(exc),
                slot=handler_id.slot,
                generation=handler_id.generation,
            )
        return self._select(op, handler)

    def toggle_remember(self, value: bool) -> ServiceResult:
        """Set the session remember flag; forced off without a domain key."""
        op = "toggle_remember"
        if self.is_terminated:
            return self._rejected(op)
        warnings: list[str] = []
        effective = value and self._session.domain_visible
        changed: list[str] = []
        if effective != self._session.remember:
            self._session.remember = effective
            changed.append("remember")
            self._dispatch_event(
                "preference_changed", {"name": "remember", "value": effective}, warnings
            )
        return self._result(op, changed, warnings)

    def toggle_show_full_url(self, value: bool) -> ServiceResult:
        """Switch between domain and full-URL display and persist the choice."""
        op = "toggle_show_full_url"
        if self.is_terminated:
            return self._rejected(op)
        warnings: list[str] = []
        changed: list[str] = []
        if value != self._show_full_url:
            changed.append("show_full_url")
        self._show_full_url = value
        saved = self._kv.set(SHOW_FULL_URL, value)
        if not saved.ok:
            message = saved.error.message if saved.error else "unknown error"
            logger.warning("Display preference not persisted: %s", message)
            warnings.append(f"Display preference not persisted: {message}")
        self._dispatch_event(
            "preference_changed", {"name": "show_full_url", "value": value}, warnings
        )
        return self._result(op, changed, warnings)

    def toggle_shortcut_help(self, value: bool) -> ServiceResult:
        """Show or hide hotkey labels."""
        op = "toggle_shortcut_help"
        if self.is_terminated:
            return self._rejected(op)
        warnings: list[str] = []
        changed = ["shortcut_help"] if value != self._shortcut_help else []
        self._shortcut_help = value
        self._dispatch_event(
            "preference_changed", {"name": "shortcut_help", "value": value}, warnings
        )
        return self._result(op, changed, warnings)

    def key_input(self, char: str) -> ServiceResult:
        """Translate a key press: control keys first, then handler hotkeys."""
        op = "key_input"
        if self.is_terminated:
            return self._rejected(op)

        control = CONTROL_KEYS.get(char)
        if control is ControlKey.QUIT:
            return self.quit()
        if control is ControlKey.TOGGLE_FULL_URL:
            return self.toggle_show_full_url(not self._show_full_url)
        if control is ControlKey.TOGGLE_SHORTCUT_HELP:
            return self.toggle_shortcut_help(not self._shortcut_help)
        if control is ControlKey.TOGGLE_REMEMBER:
            return self.toggle_remember(not self._session.remember)

        index = self._hotkeys.lookup(char) if char else None
        if index is None:
            return self._result(op, [], [])
        return self.select_handler(index)

    def quit(self) -> ServiceResult:
        """Terminate from any state."""
        op = "quit"
        if self.is_terminated:
            return self._result(op, [], [])
        return self._terminate(op, "quit", [])

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _select(self, op: str, handler: HandlerApp) -> ServiceResult:
        warnings: list[str] = []
        target = self._queue.current
        if target is None:
            launched = self._launch(handler, [], warnings)
            return self._terminate(op, "launched", warnings, launched=[launched])

        launched = self._launch(handler, [target], warnings)
        remembered: str | None = None
        if self._session.remember and self._session.domain_key is not None:
            remembered = self._session.domain_key
            saved = self._defaults.record(handler.name, remembered)
            if not saved.ok:
                message = saved.error.message if saved.error else "unknown error"
                warnings.append(f"Default for {remembered} not persisted: {message}")

        self._queue.pop_current()
        if not self._queue:
            return self._terminate(
                op, "queue_drained", warnings, launched=[launched], remembered=remembered
            )

        self._activate_current(warnings)
        return self._result(
            op, _SESSION_FIELDS, warnings, launched=[launched], remembered=remembered
        )

    def _remembered_handler(self, target: OpenTarget) -> HandlerApp | None:
        name = self._defaults.resolve(target)
        if name is None:
            return None
        for app in self._registry:
            if app.name == name:
                return app
        return None

    def _launch(
        self,
        handler: HandlerApp,
        targets: list[OpenTarget],
        warnings: list[str],
    ) -> dict[str, Any]:
        uris = [t.uri for t in targets]
        try:
            outcome = handler.launch(targets)
        except Exception as exc:
            logger.warning("Launcher for %s raised", handler.name, exc_info=True)
            outcome = failure("launch", "LAUNCH_FAILED", f"{handler.name}: {exc}")
        if not outcome.ok:
            message = outcome.error.message if outcome.error else "unknown error"
            logger.warning("Launch of %s failed: %s", handler.name, message)
            warnings.append(f"Launch failed: {message}")
        entry = {"handler": handler.name, "uris": uris, "ok": outcome.ok}
        self._launches.append(entry)
        self._dispatch_event(
            "handler_launched",
            {"handler_name": handler.name, "uris": uris, "ok": outcome.ok},
            warnings,
        )
        return entry

    def _activate_current(self, warnings: list[str]) -> None:
        self._session = DispatchSession.for_target(self._queue.current)
        current = self._session.current
        assert current is not None
        self._dispatch_event(
            "current_changed",
            {
                "uri": current.uri,
                "domain_visible": self._session.domain_visible,
                "domain_key": self._session.domain_key,
                "pending": len(self._queue),
            },
            warnings,
        )

    def _terminate(
        self,
        op: str,
        reason: str,
        warnings: list[str],
        **extra: Any,
    ) -> ServiceResult:
        discarded = self._queue.clear()
        self._state = DispatchState.TERMINATED
        self._session = DispatchSession()
        self._dispatch_event("terminated", {"reason": reason}, warnings)
        return self._result(
            op, ["state"], warnings, reason=reason, discarded=discarded, **extra
        )

    def _rejected(self, op: str) -> ServiceResult:
        return failure(op, "TERMINATED", "Dispatch has already terminated")

    def _result(
        self,
        op: str,
        changed: list[str],
        warnings: list[str],
        **extra: Any,
    ) -> ServiceResult:
        data: dict[str, Any] = {
            "state": self._state.value,
            "changed": list(changed),
            "current": self._session.view(),
            "pending": len(self._queue),
        }
        data.update(extra)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
