"""Tests for synchronous notification dispatch."""

from __future__ import annotations

from typing import Any

from browdi.plugins.event_bus import EventBus
from browdi.plugins.hookspecs import hookimpl
from browdi.plugins.manager import PluginManager
from tests.helpers import RecordingPlugin


class ExplodingPlugin:
    @hookimpl
    def terminated(self, reason: str) -> None:
        raise RuntimeError("observer crashed")


class TestEventBus:
    def test_delivers_payload(self) -> None:
        pm = PluginManager()
        recorder = RecordingPlugin()
        pm.register_plugin(recorder)
        bus = EventBus(pm)

        assert bus.dispatch("preference_changed", {"name": "remember", "value": True}) is None
        assert recorder.named("preference_changed") == [{"name": "remember", "value": True}]

    def test_failure_becomes_warning(self) -> None:
        pm = PluginManager()
        pm.register_plugin(ExplodingPlugin())
        warning = EventBus(pm).dispatch("terminated", {"reason": "quit"})
        assert warning == "Notification terminated failed"

    def test_unknown_hook_ignored(self) -> None:
        bus = EventBus(PluginManager())
        payload: dict[str, Any] = {}
        assert bus.dispatch("no_such_hook", payload) is None

    def test_no_plugins_is_noop(self) -> None:
        assert EventBus(PluginManager()).dispatch("terminated", {"reason": "quit"}) is None
