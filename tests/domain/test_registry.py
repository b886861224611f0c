"""Tests for HandlerRegistry and HandlerId."""

from __future__ import annotations

import pytest

from browdi.domain.errors import InvalidIndexError
from browdi.domain.registry import SELF_IDS, HandlerId, HandlerRegistry
from tests.helpers import make_handler


class TestBuild:
    def test_excludes_self_ids_by_default(self) -> None:
        registry = HandlerRegistry.build(
            [
                make_handler("Firefox"),
                make_handler("browdi", app_id="browdi.desktop"),
                make_handler("Chromium"),
            ]
        )
        assert registry.names() == ["Firefox", "Chromium"]
        assert "browdi.desktop" in SELF_IDS

    def test_custom_exclusions(self) -> None:
        registry = HandlerRegistry.build(
            [make_handler("Firefox"), make_handler("Chromium")],
            excluded_ids=["chromium.desktop"],
        )
        assert registry.names() == ["Firefox"]

    def test_keeps_order(self) -> None:
        names = ["Zed", "Alpha", "Mid"]
        registry = HandlerRegistry.build([make_handler(n) for n in names], excluded_ids=())
        assert [app.name for app in registry] == names
        assert len(registry) == 3


class TestGet:
    def test_valid_index(self) -> None:
        registry = HandlerRegistry([make_handler("Firefox"), make_handler("Chromium")])
        assert registry.get(1).name == "Chromium"

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_out_of_range(self, index: int) -> None:
        registry = HandlerRegistry([make_handler("Firefox"), make_handler("Chromium")])
        with pytest.raises(InvalidIndexError):
            registry.get(index)

    def test_invalid_index_is_index_error(self) -> None:
        with pytest.raises(IndexError):
            HandlerRegistry([]).get(0)


class TestHandlerId:
    def test_round_trip(self) -> None:
        registry = HandlerRegistry([make_handler("Firefox"), make_handler("Chromium")])
        handler_id = registry.id_at(1)
        assert handler_id == HandlerId(slot=1, generation=registry.generation)
        assert registry.index_of(handler_id) == 1
        assert registry.by_id(handler_id).name == "Chromium"

    def test_stale_generation_rejected(self) -> None:
        old = HandlerRegistry([make_handler("Firefox")])
        new = HandlerRegistry([make_handler("Firefox")])
        assert old.generation != new.generation
        with pytest.raises(InvalidIndexError, match="Stale"):
            new.by_id(old.id_at(0))

    def test_out_of_range_slot_rejected(self) -> None:
        registry = HandlerRegistry([make_handler("Firefox")])
        with pytest.raises(InvalidIndexError):
            registry.index_of(HandlerId(slot=5, generation=registry.generation))
