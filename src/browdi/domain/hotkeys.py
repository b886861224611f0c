"""Single-key shortcuts: handler hotkeys and the fixed control keys.

Handler hotkeys are upper-case letters bound positionally to the registry.
The default supply skips D, H, M and S, whose lower-case forms are control
keys. Control keys match the exact character typed, before any hotkey
normalization, so ``q`` quits while ``Q`` selects the handler bound to Q.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import StrEnum

DEFAULT_HOTKEYS: tuple[str, ...] = tuple("ABCEFGIJKLNOPQRTUVWXYZ")


class ControlKey(StrEnum):
    """Keys that drive the picker rather than select a handler."""

    QUIT = "q"
    TOGGLE_FULL_URL = "s"
    TOGGLE_SHORTCUT_HELP = "h"
    TOGGLE_REMEMBER = "d"


CONTROL_KEYS: dict[str, ControlKey] = {key.value: key for key in ControlKey}


def normalize_letters(letters: Iterable[str]) -> tuple[str, ...]:
    """Upper-case and validate a letter supply.

    Raises:
        ValueError: An entry is not exactly one character, or a letter repeats.
    """
    result: list[str] = []
    for letter in letters:
        if len(letter) != 1:
            msg = f"Hotkey must be a single character, got {letter!r}"
            raise ValueError(msg)
        upper = letter.upper()
        if upper in result:
            msg = f"Duplicate hotkey {upper!r}"
            raise ValueError(msg)
        result.append(upper)
    return tuple(result)


class HotkeyMap:
    """Positional pairing of handler indices with letters."""

    def __init__(self, letters: Sequence[str]) -> None:
        self._letters: tuple[str, ...] = tuple(letters)
        self._index_by_letter: dict[str, int] = {
            letter: i for i, letter in enumerate(self._letters)
        }

    @classmethod
    def build(cls, handlers: Sequence[object], letters: Iterable[str]) -> HotkeyMap:
        """Bind the first ``min(len(handlers), len(letters))`` handlers."""
        supply = normalize_letters(letters)
        return cls(supply[: len(handlers)])

    def __len__(self) -> int:
        return len(self._letters)

    def lookup(self, char: str) -> int | None:
        """Return the handler index bound to *char* (case-insensitive)."""
        return self._index_by_letter.get(char.upper())

    def letter_for(self, index: int) -> str | None:
        """Return the letter bound to handler *index*, if any."""
        if 0 <= index < len(self._letters):
            return self._letters[index]
        return None

    def assignments(self) -> list[tuple[int, str]]:
        """``(index, letter)`` pairs in registry order."""
        return list(enumerate(self._letters))
