"""Shared pytest fixtures for browdi tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from browdi.domain.hotkeys import DEFAULT_HOTKEYS, HotkeyMap
from browdi.domain.registry import HandlerApp, HandlerRegistry
from browdi.infrastructure.kvstore import KeyValueStore
from browdi.services.defaults import DomainDefaultStore
from browdi.services.dispatch import DispatchEngine
from tests.helpers import HANDLERS_TOML, FakePopen, RecordingPlugin, make_handler


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG dirs at tmp_path and clear browdi env overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("BROWDI_CONFIG", raising=False)
    monkeypatch.delenv("BROWDI_STORE__PATH", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    browdi = logging.getLogger("browdi")
    browdi_level = browdi.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    browdi.setLevel(browdi_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def kv(tmp_path: Path) -> Iterator[KeyValueStore]:
    """Preference store on a temp database."""
    store = KeyValueStore.open(tmp_path / "prefs" / "browdi.db")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def handlers() -> list[HandlerApp]:
    return [make_handler("Firefox"), make_handler("Chromium"), make_handler("Epiphany")]


@pytest.fixture
def registry(handlers: list[HandlerApp]) -> HandlerRegistry:
    return HandlerRegistry.build(handlers, excluded_ids=())


@pytest.fixture
def hotkeys(registry: HandlerRegistry) -> HotkeyMap:
    return HotkeyMap.build(list(registry), DEFAULT_HOTKEYS)


@pytest.fixture
def defaults(kv: KeyValueStore, registry: HandlerRegistry) -> DomainDefaultStore:
    return DomainDefaultStore.load(kv, registry)


@pytest.fixture
def recorder() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def engine(
    registry: HandlerRegistry,
    hotkeys: HotkeyMap,
    defaults: DomainDefaultStore,
    kv: KeyValueStore,
    recorder: RecordingPlugin,
) -> DispatchEngine:
    """Engine with recording handlers and a recording notification plugin."""
    from browdi.plugins.event_bus import EventBus
    from browdi.plugins.manager import PluginManager

    pm = PluginManager()
    pm.register_plugin(recorder, name="recorder")
    return DispatchEngine(registry, hotkeys, defaults, kv, bus=EventBus(pm))


@pytest.fixture
def spawned(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Capture handler spawns made by SubprocessLauncher."""
    FakePopen.spawned = []
    FakePopen.fail_for = set()
    monkeypatch.setattr("browdi.infrastructure.launcher.subprocess.Popen", FakePopen)
    return FakePopen.spawned


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """browdi.toml with two usable handlers plus browdi itself (excluded)."""
    path = tmp_path / "browdi.toml"
    db = (tmp_path / "cli-data" / "browdi.db").as_posix()
    path.write_text(HANDLERS_TOML.format(db=db), encoding="utf-8")
    return path
