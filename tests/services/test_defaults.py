"""Tests for DomainDefaultStore."""

from __future__ import annotations

import pytest

from browdi.domain.registry import HandlerRegistry
from browdi.infrastructure.kvstore import DEFAULTS_FOR_DOMAINS, KeyValueStore
from browdi.services.defaults import DomainDefaultStore
from browdi.services.result import failure
from tests.helpers import web


class TestResolve:
    def test_unknown_domain(self, defaults: DomainDefaultStore) -> None:
        assert defaults.resolve(web("https://example.com/")) is None

    def test_non_web_never_resolves(self, kv: KeyValueStore, registry: HandlerRegistry) -> None:
        store = DomainDefaultStore(kv, registry, {"Firefox": ["file://"]})
        assert store.resolve(web("file:///tmp/x")) is None

    def test_registry_order_wins(self, kv: KeyValueStore, registry: HandlerRegistry) -> None:
        store = DomainDefaultStore(
            kv,
            registry,
            {"Epiphany": ["https://a.org"], "Firefox": ["https://a.org"]},
        )
        assert store.resolve(web("https://a.org/page")) == "Firefox"


class TestRecord:
    def test_persists(self, defaults: DomainDefaultStore, kv: KeyValueStore) -> None:
        result = defaults.record("Firefox", "https://a.org")
        assert result.ok
        assert result.op == "record_default"
        assert kv.get(DEFAULTS_FOR_DOMAINS) == {"Firefox": ["https://a.org"]}

    def test_append_only(self, defaults: DomainDefaultStore) -> None:
        defaults.record("Firefox", "https://a.org")
        defaults.record("Firefox", "https://a.org")
        assert defaults.as_dict() == {"Firefox": ["https://a.org", "https://a.org"]}

    def test_persist_failure_returned(
        self, defaults: DomainDefaultStore, kv: KeyValueStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            kv, "set", lambda key, value: failure("set_preference", "PERSIST_FAILED", "nope")
        )
        result = defaults.record("Firefox", "https://a.org")
        assert not result.ok
        assert result.op == "record_default"
        assert result.error is not None
        assert result.error.code == "PERSIST_FAILED"


class TestForget:
    def test_removes_every_occurrence(
        self, defaults: DomainDefaultStore, kv: KeyValueStore
    ) -> None:
        defaults.record("Firefox", "https://a.org")
        defaults.record("Firefox", "https://a.org")
        defaults.record("Firefox", "https://b.org")
        defaults.record("Chromium", "https://a.org")

        result = defaults.forget("https://a.org")

        assert result.data == {"domain_key": "https://a.org", "removed": 3}
        assert defaults.as_dict() == {"Firefox": ["https://b.org"]}
        assert kv.get(DEFAULTS_FOR_DOMAINS) == {"Firefox": ["https://b.org"]}

    def test_missing_key_is_noop(self, defaults: DomainDefaultStore) -> None:
        result = defaults.forget("https://nowhere.org")
        assert result.ok
        assert result.data["removed"] == 0

    def test_as_dict_is_copy(self, defaults: DomainDefaultStore) -> None:
        defaults.record("Firefox", "https://a.org")
        snapshot = defaults.as_dict()
        snapshot["Firefox"].append("https://x.org")
        assert defaults.as_dict() == {"Firefox": ["https://a.org"]}


def test_load_reads_store(kv: KeyValueStore, registry: HandlerRegistry) -> None:
    kv.set(DEFAULTS_FOR_DOMAINS, {"Chromium": ["https://c.org"]})
    store = DomainDefaultStore.load(kv, registry)
    assert store.resolve(web("https://c.org/x")) == "Chromium"
