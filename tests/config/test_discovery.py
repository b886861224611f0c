"""Tests for XDG config and data discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from browdi.config.discovery import config_dir, data_dir, default_store_path, find_config


class TestDirs:
    def test_xdg_dirs(self, tmp_path: Path) -> None:
        assert config_dir() == tmp_path / "config" / "browdi"
        assert data_dir() == tmp_path / "data" / "browdi"
        assert default_store_path() == tmp_path / "data" / "browdi" / "browdi.db"

    def test_home_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_DATA_HOME")
        assert data_dir() == Path.home() / ".local" / "share" / "browdi"


class TestFindConfig:
    def test_none(self) -> None:
        assert find_config() is None

    def test_xdg_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config" / "browdi" / "browdi.toml"
        path.parent.mkdir(parents=True)
        path.write_text("", encoding="utf-8")
        assert find_config() == path

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        xdg = tmp_path / "config" / "browdi" / "browdi.toml"
        xdg.parent.mkdir(parents=True)
        xdg.write_text("", encoding="utf-8")
        custom = tmp_path / "custom.toml"
        custom.write_text("", encoding="utf-8")
        monkeypatch.setenv("BROWDI_CONFIG", str(custom))
        assert find_config() == custom

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BROWDI_CONFIG", str(tmp_path / "gone.toml"))
        assert find_config() is None
