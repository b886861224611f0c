"""KeyValueStore — typed persisted preferences in SQLite.

Only declared keys may be read or written. Each key has a pydantic
``TypeAdapter``: values are validated on read (an invalid stored value is
logged and replaced by the key's default) and serialized to JSON on write.

Writes replace the whole value of a key. There is no locking, so two
browdi processes writing the same key race and the last writer wins.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError

from browdi.infrastructure.database.engine import init_database
from browdi.infrastructure.database.schema import preferences
from browdi.services._helpers import now_iso
from browdi.services.result import ServiceResult, failure

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SHOW_FULL_URL = "show-full-url"
DEFAULTS_FOR_DOMAINS = "browsers-default-for-domains"

_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    SHOW_FULL_URL: TypeAdapter(bool),
    DEFAULTS_FOR_DOMAINS: TypeAdapter(dict[str, list[str]]),
}

_DEFAULTS: dict[str, Any] = {
    SHOW_FULL_URL: False,
    DEFAULTS_FOR_DOMAINS: {},
}


class StoreUnavailableError(RuntimeError):
    """The persisted store could not be opened."""


class KeyValueStore:
    """Get/set access to the ``preferences`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def open(cls, db_path: Path) -> KeyValueStore:
        """Open (creating if needed) the store at *db_path*.

        Raises:
            StoreUnavailableError: The database cannot be created or read.
        """
        try:
            engine = init_database(db_path)
            with engine.connect() as conn:
                conn.execute(select(preferences.c.key).limit(1)).all()
        except (OSError, SQLAlchemyError) as exc:
            msg = f"Cannot open preference store at {db_path}: {exc}"
            raise StoreUnavailableError(msg) from exc
        logger.debug("Opened preference store at %s", db_path)
        return cls(engine)

    @staticmethod
    def keys() -> list[str]:
        """All declared preference keys."""
        return list(_ADAPTERS)

    def get(self, key: str) -> Any:
        """Return the typed value of *key*, or its default when unset or invalid.

        Raises:
            KeyError: *key* is not a declared preference.
        """
        adapter = _adapter_for(key)
        with self._engine.connect() as conn:
            raw = conn.execute(
                select(preferences.c.value).where(preferences.c.key == key)
            ).scalar_one_or_none()
        if raw is None:
            return copy.deepcopy(_DEFAULTS[key])
        try:
            return adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring invalid stored value for %s", key, exc_info=True)
            return copy.deepcopy(_DEFAULTS[key])

    def set(self, key: str, value: Any) -> ServiceResult:
        """Validate and persist *value* under *key*, replacing any previous value."""
        op = "set_preference"
        try:
            adapter = _adapter_for(key)
        except KeyError as exc:
            return failure(op, "UNKNOWN_KEY", str(exc), key=key)
        try:
            payload = adapter.dump_json(adapter.validate_python(value)).decode("utf-8")
        except ValidationError as exc:
            return failure(op, "INVALID_VALUE", str(exc), key=key)

        stmt = insert(preferences).values(key=key, value=payload, modified=now_iso())
        stmt = stmt.on_conflict_do_update(
            index_elements=[preferences.c.key],
            set_={"value": stmt.excluded.value, "modified": stmt.excluded.modified},
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            logger.warning("Failed to persist %s: %s", key, exc)
            return failure(op, "PERSIST_FAILED", f"Failed to persist {key}", key=key)
        return ServiceResult(ok=True, op=op, data={"key": key})

    def close(self) -> None:
        """Dispose of the underlying engine."""
        self._engine.dispose()


def _adapter_for(key: str) -> TypeAdapter[Any]:
    try:
        return _ADAPTERS[key]
    except KeyError:
        msg = f"Unknown preference key: {key!r}"
        raise KeyError(msg) from None
