"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, browdi.toml only contains
overrides plus the ``[[handlers]]`` the user wants to pick from.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from browdi.domain.hotkeys import DEFAULT_HOTKEYS, normalize_letters


class HandlerConfig(BaseModel):
    """One ``[[handlers]]`` entry."""

    model_config = {"frozen": True}

    id: str
    name: str
    command: list[str] = Field(min_length=1)
    icon: str | None = None
    schemes: list[str] = Field(default_factory=lambda: ["http", "https"])

    def accepts(self, scheme: str) -> bool:
        """Whether this handler is offered for *scheme* (``*`` matches all)."""
        return "*" in self.schemes or scheme.lower() in (s.lower() for s in self.schemes)


class DispatchConfig(BaseModel):
    """[dispatch] section."""

    model_config = {"frozen": True}

    scheme: str = "http"
    excluded_ids: list[str] = Field(default_factory=list)
    hotkeys: list[str] = Field(default_factory=lambda: list(DEFAULT_HOTKEYS))

    @field_validator("hotkeys")
    @classmethod
    def _check_hotkeys(cls, value: list[str]) -> list[str]:
        return list(normalize_letters(value))


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: Path | None = None


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    local_dir: Path | None = None
