"""Dispatch states and the inbound events the engine accepts.

The UI layer translates clicks and key presses into these events and feeds
them to :meth:`DispatchEngine.handle`, one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from browdi.domain.targets import OpenTarget


class DispatchState(StrEnum):
    """Engine states. ``terminated`` is absorbing."""

    IDLE = "idle"
    AWAITING_SELECTION = "awaiting_selection"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class OpenRequested:
    targets: tuple[OpenTarget, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SelectionMade:
    index: int


@dataclass(frozen=True)
class RememberToggled:
    value: bool


@dataclass(frozen=True)
class DisplayPreferenceToggled:
    value: bool


@dataclass(frozen=True)
class KeyInput:
    char: str


@dataclass(frozen=True)
class Quit:
    pass


InboundEvent = (
    OpenRequested | SelectionMade | RememberToggled | DisplayPreferenceToggled | KeyInput | Quit
)
