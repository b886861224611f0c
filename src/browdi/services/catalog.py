"""Read-only listings of handlers and remembered defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from browdi.services.result import ServiceResult

if TYPE_CHECKING:
    from browdi.domain.hotkeys import HotkeyMap
    from browdi.domain.registry import HandlerRegistry
    from browdi.services.defaults import DomainDefaultStore


def list_handlers(registry: HandlerRegistry, hotkeys: HotkeyMap) -> ServiceResult:
    """Registry entries in order with their hotkeys."""
    items = [
        {
            "index": index,
            "hotkey": hotkeys.letter_for(index),
            "name": app.name,
            "id": app.id,
            "icon": app.icon,
        }
        for index, app in enumerate(registry)
    ]
    return ServiceResult(ok=True, op="list_handlers", data={"items": items, "count": len(items)})


def list_defaults(defaults: DomainDefaultStore, registry: HandlerRegistry) -> ServiceResult:
    """One row per (domain, handler) pair, sorted by domain.

    ``count`` is the number of stored entries for the pair, which exceeds
    one when the same domain was remembered repeatedly. ``active`` tells
    whether the handler is the one :meth:`DomainDefaultStore.resolve`
    would pick for the domain.
    """
    mapping = defaults.as_dict()
    order = {name: i for i, name in enumerate(registry.names())}
    items: list[dict[str, Any]] = []
    for handler, keys in mapping.items():
        counts: dict[str, int] = {}
        for key in keys:
            counts[key] = counts.get(key, 0) + 1
        for key, count in counts.items():
            items.append({"domain_key": key, "handler": handler, "count": count})

    winners: dict[str, str] = {}
    for item in sorted(items, key=lambda i: order.get(i["handler"], len(order))):
        if item["handler"] in order:
            winners.setdefault(item["domain_key"], item["handler"])
    for item in items:
        item["active"] = winners.get(item["domain_key"]) == item["handler"]

    items.sort(key=lambda i: (i["domain_key"], order.get(i["handler"], len(order))))
    return ServiceResult(ok=True, op="list_defaults", data={"items": items, "count": len(items)})
