"""
Storage abstraction layer.

Provides the item store contract and its backends.

Supported backends:
- memory (process-lifetime, no persistence)
"""

from core.storage.base import (
    BaseItemStore,
    Item,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    ItemNotModifiedError,
    ItemStoreError,
    Snapshot,
    StoreEntry,
)
from core.storage.factory import (
    create_item_store,
    get_storage_backend,
    StorageBackend,
)
from core.storage.memory import InMemoryItemStore

__all__ = [
    # Abstract interface and records
    "BaseItemStore",
    "Item",
    "Snapshot",
    "StoreEntry",
    # Errors
    "ItemStoreError",
    "ItemNotFoundError",
    "ItemAlreadyExistsError",
    "ItemNotModifiedError",
    # Implementations
    "InMemoryItemStore",
    # Factory functions
    "create_item_store",
    "get_storage_backend",
    "StorageBackend",
]
