"""
Tests for cursor pagination over store snapshots.
"""

from uuid import uuid4

import pytest

from core.pagination import DEFAULT_LIST_LIMIT, Page, paginate
from core.storage import Item


def seed(store, n):
    return [store.create(Item(id=uuid4(), fields={"n": i})) for i in range(n)]


def walk(store, limit):
    """Follow `next` cursors from the start until exhausted."""
    seen = []
    cursor = None
    while True:
        page = paginate(store.snapshot(), skip=cursor, limit=limit)
        seen.extend(page.items)
        if page.next is None:
            return seen
        cursor = page.next


def test_empty_snapshot():
    """Test paging an empty snapshot."""
    assert paginate((), limit=5) == Page(items=[], next=None)


def test_first_page_and_next_cursor(store):
    """Test that next names the first unreturned item."""
    items = seed(store, 5)

    page = paginate(store.snapshot(), limit=2)

    assert page.items == items[:2]
    assert page.next == items[2].id


def test_exact_fit_has_no_next(store):
    """Test that an exactly full page has no next cursor."""
    items = seed(store, 4)

    page = paginate(store.snapshot(), limit=4)

    assert page.items == items
    assert page.next is None


def test_skip_resumes_at_cursor(store):
    """Test that a skip cursor resumes at its own item."""
    items = seed(store, 5)

    page = paginate(store.snapshot(), skip=items[2].id, limit=2)

    assert page.items == items[2:4]
    assert page.next == items[4].id


def test_skip_last_key_yields_final_item(store):
    """Test resuming at the last item."""
    items = seed(store, 3)

    page = paginate(store.snapshot(), skip=items[-1].id, limit=2)

    assert page == Page(items=[items[-1]], next=None)


@pytest.mark.parametrize("n, limit", [(0, 3), (1, 1), (7, 3), (9, 3), (25, 10)])
def test_traversal_covers_every_item_once(store, n, limit):
    """Test that a full traversal returns each item exactly once."""
    items = seed(store, n)

    seen = walk(store, limit)

    assert [i.id for i in seen] == [i.id for i in items]


def test_missing_cursor_yields_empty_page(store):
    """Test that a deleted cursor item ends the traversal."""
    seed(store, 5)
    first = paginate(store.snapshot(), limit=2)
    cursor = first.next

    store.delete(cursor)
    page = paginate(store.snapshot(), skip=cursor, limit=2)

    assert page.items == []
    assert page.next is None


def test_resume_tolerates_unrelated_changes(store):
    """Test that deletes and inserts elsewhere don't disturb resumption."""
    items = seed(store, 6)
    first = paginate(store.snapshot(), limit=2)

    store.delete(items[0].id)
    store.delete(items[3].id)
    late = store.create(Item(id=uuid4(), fields={"n": 99}))

    second = paginate(store.snapshot(), skip=first.next, limit=10)

    assert [i.id for i in second.items] == [items[2].id, items[4].id, items[5].id, late.id]


@pytest.mark.parametrize("limit", [None, 0, -4])
def test_non_positive_limit_uses_default(store, limit):
    """Test that a missing or non-positive limit falls back to ten."""
    items = seed(store, DEFAULT_LIST_LIMIT + 2)

    page = paginate(store.snapshot(), limit=limit)

    assert len(page.items) == DEFAULT_LIST_LIMIT
    assert page.next == items[DEFAULT_LIST_LIMIT].id
