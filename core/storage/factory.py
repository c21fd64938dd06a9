"""
Storage factory for creating item store instances.

This module provides factory functions to create the appropriate
storage implementation based on configuration.
"""

from enum import Enum
from typing import TYPE_CHECKING

from core.logging import get_logger
from core.storage.base import BaseItemStore


if TYPE_CHECKING:
    from core.config import Settings


logger = get_logger(__name__)


class StorageBackend(str, Enum):
    """Supported storage backends."""
    MEMORY = "memory"


def get_storage_backend(settings: "Settings") -> StorageBackend:
    """
    Determine which storage backend to use based on settings.

    Args:
        settings: Application settings

    Returns:
        The configured storage backend
    """
    backend_str = settings.storage_backend.lower()

    try:
        return StorageBackend(backend_str)
    except ValueError:
        raise ValueError(
            f"Unsupported storage backend: {backend_str}. "
            f"Supported backends: {[b.value for b in StorageBackend]}"
        )


def create_item_store(settings: "Settings") -> BaseItemStore:
    """
    Create an item store instance based on settings.

    Args:
        settings: Application settings

    Returns:
        Empty, ready-to-use item store
    """
    backend = get_storage_backend(settings)

    if backend == StorageBackend.MEMORY:
        from core.storage.memory import InMemoryItemStore

        logger.info("Creating in-memory item store")
        return InMemoryItemStore()

    raise ValueError(f"Unsupported backend: {backend}")
