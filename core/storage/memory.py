"""
In-memory item store.

Holds all items in a dict guarded by a single lock. Nothing survives a
restart. A threading lock is used rather than an asyncio one because no
operation awaits anything, and route handlers may run on worker threads.
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID

from core.logging import get_logger
from core.storage.base import (
    BaseItemStore,
    Item,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    ItemNotModifiedError,
    Snapshot,
    StoreEntry,
)


logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryItemStore(BaseItemStore):
    """
    Dict-backed implementation of BaseItemStore.

    Every operation, reads included, runs under one mutex for its whole
    duration, which makes the store linearizable. Items are copied on the
    way in and on the way out, so neither the caller's input nor any
    returned value shares state with what the store holds.

    Iteration order is insertion order. A put keeps the key's position.

    Usage:
        store = InMemoryItemStore()
        created = store.create(Item(id=uuid4(), fields={"name": "a"}))
        store.get(created.id, if_newer=created.modified)  # ItemNotModifiedError
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize an empty store.

        Args:
            clock: Source of modification timestamps. Defaults to UTC now.
        """
        self._entries: dict[UUID, StoreEntry] = {}
        self._clock = clock or utc_now
        self._lock = threading.Lock()

    def create(self, item: Item) -> Item:
        key = item.id
        with self._lock:
            if key in self._entries:
                raise ItemAlreadyExistsError(key)
            stored = item.with_modified(self._clock())
            self._entries[key] = StoreEntry(key=key, item=stored, modified=stored.modified)

        logger.debug("Item created", item_id=str(key))
        return stored.copy()

    def get(self, item_id: UUID, if_newer: Optional[datetime] = None) -> Item:
        with self._lock:
            entry = self._entries.get(item_id)
            if entry is None:
                raise ItemNotFoundError(item_id)
            if if_newer is not None and entry.modified <= if_newer:
                raise ItemNotModifiedError(item_id)
            return entry.item.copy()

    def put(self, item_id: UUID, item: Item) -> Item:
        with self._lock:
            entry = self._entries.get(item_id)
            if entry is None:
                raise ItemNotFoundError(item_id)
            # The key is immutable; the replacement always lives under it
            stored = replace(item, id=item_id).with_modified(self._clock())
            entry.item = stored
            entry.modified = stored.modified

        logger.debug("Item replaced", item_id=str(item_id))
        return stored.copy()

    def delete(self, item_id: UUID) -> None:
        with self._lock:
            if self._entries.pop(item_id, None) is None:
                raise ItemNotFoundError(item_id)

        logger.debug("Item deleted", item_id=str(item_id))

    def snapshot(self) -> Snapshot:
        with self._lock:
            return tuple((key, entry.item.copy()) for key, entry in self._entries.items())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
