"""HandlerRegistry — the immutable, ordered list of candidate handlers.

Entries are addressable two ways: by position (what the picker shows and
hotkeys bind to) and by :class:`HandlerId`, a slot plus the generation of
the registry that issued it. Callbacks hold ids, so an id kept past a
registry rebuild is rejected instead of silently addressing another entry.

INVARIANT: A registry is never mutated after :meth:`HandlerRegistry.build`.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from browdi.domain.errors import InvalidIndexError

if TYPE_CHECKING:
    from browdi.domain.targets import OpenTarget
    from browdi.services.result import ServiceResult

Launcher = Callable[[Sequence["OpenTarget"]], "ServiceResult"]

# Desktop ids under which browdi itself may be registered as a handler.
SELF_IDS: frozenset[str] = frozenset(
    {
        "com.Nosterx.BrowDi",
        "com.Nosterx.BrowDiIced",
        "browdi.desktop",
        "browdi-iced.desktop",
    }
)

_generations = itertools.count(1)


@dataclass(frozen=True)
class HandlerApp:
    """An external application able to open targets.

    Attributes:
        id: Provider-unique identifier (e.g. a desktop file id).
        name: Display name; also the key under which domain defaults live.
        icon: Opaque icon reference, passed through to renderers.
        launcher: Spawns the application and returns a ServiceResult. The
            engine treats an exception from it as a failed launch.
    """

    id: str
    name: str
    launcher: Launcher = field(repr=False, compare=False)
    icon: str | None = None

    def launch(self, targets: Sequence[OpenTarget]) -> ServiceResult:
        """Open *targets* (possibly none) with this handler."""
        return self.launcher(targets)


@dataclass(frozen=True)
class HandlerId:
    """Stable identity of a registry entry."""

    slot: int
    generation: int


class HandlerRegistry:
    """Ordered, immutable collection of :class:`HandlerApp`."""

    def __init__(self, handlers: Sequence[HandlerApp]) -> None:
        self._handlers: tuple[HandlerApp, ...] = tuple(handlers)
        self._generation = next(_generations)

    @classmethod
    def build(
        cls,
        candidates: Iterable[HandlerApp],
        excluded_ids: Iterable[str] = SELF_IDS,
    ) -> HandlerRegistry:
        """Drop candidates whose id is excluded, keeping input order."""
        excluded = frozenset(excluded_ids)
        return cls([app for app in candidates if app.id not in excluded])

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[HandlerApp]:
        return iter(self._handlers)

    @property
    def generation(self) -> int:
        return self._generation

    def get(self, index: int) -> HandlerApp:
        """Return the handler at *index*.

        Raises:
            InvalidIndexError: *index* is negative or ``>= len(self)``.
        """
        if index < 0 or index >= len(self._handlers):
            msg = f"Handler index {index} out of range (have {len(self._handlers)})"
            raise InvalidIndexError(msg)
        return self._handlers[index]

    def id_at(self, index: int) -> HandlerId:
        """Return the stable id of the entry at *index*."""
        self.get(index)
        return HandlerId(slot=index, generation=self._generation)

    def index_of(self, handler_id: HandlerId) -> int:
        """Resolve *handler_id* back to a position.

        Raises:
            InvalidIndexError: The id was issued by another registry or its
                slot is out of range.
        """
        if handler_id.generation != self._generation:
            msg = f"Stale handler id {handler_id} (registry generation {self._generation})"
            raise InvalidIndexError(msg)
        self.get(handler_id.slot)
        return handler_id.slot

    def by_id(self, handler_id: HandlerId) -> HandlerApp:
        """Return the handler addressed by *handler_id*."""
        return self._handlers[self.index_of(handler_id)]

    def names(self) -> list[str]:
        """Handler names in registry order."""
        return [app.name for app in self._handlers]
