"""Tests for the SQLite engine setup."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import inspect, text

from browdi.infrastructure.database import create_db_engine, init_database


class TestEngine:
    def test_wal_mode(self, tmp_path: Path) -> None:
        engine = create_db_engine(tmp_path / "wal.db")
        with engine.connect() as conn:
            mode = conn.execute(text("PRAGMA journal_mode")).scalar()
        engine.dispose()
        assert mode == "wal"

    def test_init_creates_preferences_table(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "nested" / "browdi.db")
        try:
            columns = {c["name"] for c in inspect(engine).get_columns("preferences")}
        finally:
            engine.dispose()
        assert columns == {"key", "value", "modified"}

    def test_init_idempotent(self, tmp_path: Path) -> None:
        db = tmp_path / "browdi.db"
        init_database(db).dispose()
        init_database(db).dispose()
        assert db.exists()
