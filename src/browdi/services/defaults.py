"""DomainDefaultStore — remembered handler per site.

The mapping is ``handler name -> [domain key, ...]`` and lives in the
key-value store under ``browsers-default-for-domains``. It is loaded once;
every mutation writes the whole mapping back.

``record`` is append-only: remembering the same domain twice stores the
key twice. A key may also sit under several handlers, in which case the
first handler in registry order wins.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from browdi.domain.targets import web_domain_key
from browdi.infrastructure.kvstore import DEFAULTS_FOR_DOMAINS
from browdi.services.result import ServiceResult

if TYPE_CHECKING:
    from browdi.domain.registry import HandlerRegistry
    from browdi.domain.targets import OpenTarget
    from browdi.infrastructure.kvstore import KeyValueStore

logger = logging.getLogger(__name__)


class DomainDefaultStore:
    """In-memory view of remembered defaults, persisted on every change."""

    def __init__(
        self,
        kv: KeyValueStore,
        registry: HandlerRegistry,
        defaults: dict[str, list[str]] | None = None,
    ) -> None:
        self._kv = kv
        self._registry = registry
        self._defaults: dict[str, list[str]] = defaults if defaults is not None else {}

    @classmethod
    def load(cls, kv: KeyValueStore, registry: HandlerRegistry) -> DomainDefaultStore:
        """Read the mapping from *kv*."""
        return cls(kv, registry, kv.get(DEFAULTS_FOR_DOMAINS))

    def resolve(self, target: OpenTarget) -> str | None:
        """Name of the first registry handler remembered for *target*'s domain."""
        key = web_domain_key(target)
        if key is None:
            return None
        for name in self._registry.names():
            if key in self._defaults.get(name, ()):
                return name
        return None

    def record(self, handler_name: str, domain_key: str) -> ServiceResult:
        """Remember *handler_name* for *domain_key* and persist the mapping."""
        self._defaults.setdefault(handler_name, []).append(domain_key)
        logger.debug("Remembered %s for %s", handler_name, domain_key)
        return self._persist("record_default")

    def forget(self, domain_key: str) -> ServiceResult:
        """Drop *domain_key* from every handler and persist the mapping."""
        removed = 0
        for name, keys in list(self._defaults.items()):
            kept = [k for k in keys if k != domain_key]
            removed += len(keys) - len(kept)
            if kept:
                self._defaults[name] = kept
            else:
                del self._defaults[name]
        if removed == 0:
            return ServiceResult(
                ok=True,
                op="forget_default",
                data={"domain_key": domain_key, "removed": 0},
            )
        result = self._persist("forget_default")
        if not result.ok:
            return result
        return ServiceResult(
            ok=True,
            op="forget_default",
            data={"domain_key": domain_key, "removed": removed},
        )

    def as_dict(self) -> dict[str, list[str]]:
        """Copy of the current mapping."""
        return copy.deepcopy(self._defaults)

    def _persist(self, op: str) -> ServiceResult:
        result = self._kv.set(DEFAULTS_FOR_DOMAINS, self._defaults)
        if not result.ok:
            logger.warning(
                "Domain defaults not persisted: %s",
                result.error.message if result.error else "unknown error",
            )
            return result.model_copy(update={"op": op})
        return ServiceResult(ok=True, op=op, data={"handlers": len(self._defaults)})
