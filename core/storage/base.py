"""
Abstract base classes for item storage backends.

This module defines the item record, the contract that every item store
must follow, and the exceptions a store raises. The request dispatcher
is the only caller and translates these exceptions into result kinds.
"""

from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional
from uuid import UUID


@dataclass(frozen=True)
class Item:
    """
    A stored resource.

    `id` is the immutable key. `modified` is owned by the store: whatever
    the caller supplies is overwritten on every create and put. `fields`
    holds the caller's arbitrary attributes.
    """
    id: Optional[UUID]
    fields: dict[str, Any] = field(default_factory=dict)
    modified: Optional[datetime] = None

    def copy(self) -> "Item":
        """Return an independent copy; nested field values are copied too."""
        return replace(self, fields=deepcopy(self.fields))

    def with_modified(self, modified: datetime) -> "Item":
        """Return a copy stamped with the given modification time."""
        return replace(self, fields=deepcopy(self.fields), modified=modified)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary for serialization."""
        return {
            **self.fields,
            "id": self.id,
            "modified": self.modified,
        }


@dataclass
class StoreEntry:
    """Internal record held by a store for each key."""
    key: UUID
    item: Item
    modified: datetime


# Point-in-time, ordered view of the store used for listing
Snapshot = tuple[tuple[UUID, Item], ...]


class BaseItemStore(ABC):
    """
    Abstract base class for item storage.

    Every operation is atomic with respect to concurrent callers: the
    observable effect of concurrent calls equals some sequential order.
    Operations never suspend, so they are plain synchronous methods.
    """

    @abstractmethod
    def create(self, item: Item) -> Item:
        """
        Store a new item under `item.id`.

        Returns:
            The stored item with `modified` set

        Raises:
            ItemAlreadyExistsError: If the key is already present
        """
        pass

    @abstractmethod
    def get(self, item_id: UUID, if_newer: Optional[datetime] = None) -> Item:
        """
        Fetch an item by key.

        Existence is checked before freshness.

        Raises:
            ItemNotFoundError: If the key is absent
            ItemNotModifiedError: If `if_newer` is given and the stored
                item was not modified after it
        """
        pass

    @abstractmethod
    def put(self, item_id: UUID, item: Item) -> Item:
        """
        Replace an existing item wholesale. Never creates.

        Raises:
            ItemNotFoundError: If the key is absent
        """
        pass

    @abstractmethod
    def delete(self, item_id: UUID) -> None:
        """
        Remove an item.

        Raises:
            ItemNotFoundError: If the key is absent
        """
        pass

    @abstractmethod
    def snapshot(self) -> Snapshot:
        """Return an ordered, point-in-time copy of all (key, item) pairs."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every item."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class ItemStoreError(Exception):
    """Base exception for item store operations."""

    def __init__(self, item_id: Optional[UUID], message: str):
        super().__init__(message)
        self.item_id = item_id


class ItemNotFoundError(ItemStoreError):
    """Key doesn't exist in the store."""

    def __init__(self, item_id: Optional[UUID]):
        super().__init__(item_id, f"Item not found: {item_id}")


class ItemAlreadyExistsError(ItemStoreError):
    """Key is already present on create."""

    def __init__(self, item_id: Optional[UUID]):
        super().__init__(item_id, f"Already exists: {item_id}")


class ItemNotModifiedError(ItemStoreError):
    """Stored item is not newer than the caller's copy."""

    def __init__(self, item_id: Optional[UUID]):
        super().__init__(item_id, f"Item not modified: {item_id}")
