"""
Cursor-based pagination over store snapshots.

A page's `next` is the key of the first item it did not return; passing
it back as `skip` resumes the listing at that item. Resuming from a key
tolerates inserts and deletes of other items between pages. If the
cursor's own item is gone from the snapshot, the page is empty and
`next` is None; callers should treat that as the end of the traversal.
"""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from core.storage.base import Item, Snapshot


DEFAULT_LIST_LIMIT = 10


@dataclass(frozen=True)
class Page:
    """A bounded slice of a snapshot plus the cursor to continue from."""
    items: list[Item] = field(default_factory=list)
    next: Optional[UUID] = None


def paginate(
    snapshot: Snapshot,
    skip: Optional[UUID] = None,
    limit: Optional[int] = DEFAULT_LIST_LIMIT,
) -> Page:
    """
    Produce one page from a snapshot.

    Args:
        snapshot: Ordered (key, item) pairs
        skip: Cursor from a previous page; entries before it are skipped
        limit: Page size. None or non-positive falls back to DEFAULT_LIST_LIMIT

    Returns:
        Page whose `next` is the key of the first unreturned entry, or None
    """
    if limit is None or limit <= 0:
        limit = DEFAULT_LIST_LIMIT

    items: list[Item] = []
    for key, item in snapshot:
        if skip is not None:
            if key != skip:
                continue
            skip = None
        if len(items) == limit:
            return Page(items=items, next=key)
        items.append(item)

    return Page(items=items, next=None)
