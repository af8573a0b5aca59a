"""In-Memory Store: concurrency-safe keyed collection, generic over entity type.

Invariants:
    - One asyncio.Lock per store instance serializes every operation
    - No await happens while the lock is held: each mutation is a single
      synchronous step, so a cancelled caller never leaves a partial write
    - Enumeration order is insertion order; upserting an existing id keeps
      its position (stable pagination)
    - Entities must expose an `id` attribute; the store never builds entities

Design Decisions:
    - Explicit instance passed to services (dependency injection) instead of
      module-level dicts: each app / test gets its own isolated state
    - locked() exposes a StoreView so services can run check-then-act sequences
      (e.g. email uniqueness then insert) atomically under one acquisition
    - Dict-based not DB: durability is out of scope, state lost on restart
"""

import asyncio
import logging
from collections.abc import Callable, Iterator
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generic, TypeVar
from uuid import UUID

from taskboard.core.errors import StoreError

logger = logging.getLogger(__name__)

E = TypeVar("E")
Predicate = Callable[[E], bool]


class StoreView(Generic[E]):
    """Synchronous operations over the store's map. Only valid under the lock."""

    def __init__(self, name: str, items: dict[UUID, E]):
        self._name = name
        self._items = items

    def save(self, entity: E) -> E:
        self._items[self._key(entity)] = entity
        return entity

    def find_by_id(self, entity_id: UUID) -> E | None:
        return self._items.get(entity_id)

    def find_by_field(self, predicate: Predicate) -> E | None:
        return next(self._matching(predicate), None)

    def find_all(
        self, limit: int, offset: int, predicate: Predicate | None = None,
    ) -> list[E]:
        if limit <= 0:
            return []
        start = max(offset, 0)
        matched = list(self._matching(predicate))
        return matched[start:start + limit]

    def count(self, predicate: Predicate | None = None) -> int:
        return sum(1 for _ in self._matching(predicate))

    def update(self, entity: E) -> E | None:
        key = self._key(entity)
        if key not in self._items:
            return None
        self._items[key] = entity
        return entity

    def delete(self, entity_id: UUID) -> bool:
        return self._items.pop(entity_id, None) is not None

    def _matching(self, predicate: Predicate | None) -> Iterator[E]:
        if predicate is None:
            return iter(list(self._items.values()))
        return (e for e in list(self._items.values()) if predicate(e))

    def _key(self, entity: E) -> UUID:
        key = getattr(entity, "id", None)
        if key is None:
            raise StoreError(
                f"{type(entity).__name__} has no id", f"{self._name}.save",
            )
        return key


class InMemoryStore(Generic[E]):
    """Keyed entity collection. Every public method is atomic."""

    def __init__(self, name: str):
        self.name = name
        self._items: dict[UUID, E] = {}
        self._lock = asyncio.Lock()
        self._view: StoreView[E] = StoreView(name, self._items)

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[StoreView[E]]:
        """Hold exclusive access for a multi-step read-modify-write sequence."""
        async with self._lock:
            yield self._view

    async def save(self, entity: E) -> E:
        async with self.locked() as view:
            saved = view.save(entity)
        logger.debug(
            f"{self.name}: saved", extra={"entity_id": str(saved.id)},
        )
        return saved

    async def find_by_id(self, entity_id: UUID) -> E | None:
        async with self.locked() as view:
            return view.find_by_id(entity_id)

    async def find_by_field(self, predicate: Predicate) -> E | None:
        async with self.locked() as view:
            return view.find_by_field(predicate)

    async def find_all(
        self, limit: int, offset: int, predicate: Predicate | None = None,
    ) -> list[E]:
        async with self.locked() as view:
            return view.find_all(limit, offset, predicate)

    async def find_page(
        self, limit: int, offset: int, predicate: Predicate | None = None,
    ) -> tuple[list[E], int]:
        """Slice and total count read under one acquisition (consistent pair)."""
        async with self.locked() as view:
            return view.find_all(limit, offset, predicate), view.count(predicate)

    async def count(self, predicate: Predicate | None = None) -> int:
        async with self.locked() as view:
            return view.count(predicate)

    async def update(self, entity: E) -> E | None:
        async with self.locked() as view:
            return view.update(entity)

    async def delete(self, entity_id: UUID) -> bool:
        async with self.locked() as view:
            existed = view.delete(entity_id)
        logger.debug(
            f"{self.name}: delete existed={existed}",
            extra={"entity_id": str(entity_id)},
        )
        return existed
