"""RequestQueue — targets waiting for a handler pick.

Consumed LIFO: the most recently appended target is the current one.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from browdi.domain.targets import OpenTarget


class RequestQueue:
    """Ordered, mutable sequence of pending :class:`OpenTarget`."""

    def __init__(self) -> None:
        self._items: list[OpenTarget] = []

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[OpenTarget]:
        return iter(self._items)

    def extend(self, targets: Iterable[OpenTarget]) -> None:
        """Append *targets* in order."""
        self._items.extend(targets)

    @property
    def current(self) -> OpenTarget | None:
        """The tail target, or None when empty."""
        return self._items[-1] if self._items else None

    def pop_current(self) -> OpenTarget | None:
        """Remove and return the tail target."""
        return self._items.pop() if self._items else None

    def snapshot(self) -> tuple[OpenTarget, ...]:
        """Immutable copy, oldest first."""
        return tuple(self._items)

    def clear(self) -> int:
        """Discard every pending target; return how many were dropped."""
        dropped = len(self._items)
        self._items.clear()
        return dropped
