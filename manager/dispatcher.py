"""
Request dispatcher - maps the five item operations onto the store.

Sits between any transport (the FastAPI routes here) and the item store.
Performs field-presence validation, calls the store or the paginator,
and returns every outcome as a value: Ok(value) or Err(kind, detail).
No store exception escapes from here.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union
from uuid import UUID

from core.config import settings
from core.logging import get_logger
from core.pagination import Page, paginate
from core.storage import (
    BaseItemStore,
    Item,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    ItemNotModifiedError,
)


logger = get_logger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Every way an operation can fail."""
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    NOT_MODIFIED = "not_modified"
    ALREADY_EXISTS = "already_exists"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok = True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    detail: Optional[str] = None
    ok = False


Outcome = Union[Ok[T], Err]


# =========================================
# Request / response values
# =========================================

@dataclass(frozen=True)
class CreateItemRequest:
    item: Optional[Item]


@dataclass(frozen=True)
class GetItemRequest:
    id: Optional[UUID]
    if_newer: Optional[datetime] = None


@dataclass(frozen=True)
class GetItemResponse:
    item: Item
    modified: datetime


@dataclass(frozen=True)
class PutItemRequest:
    id: Optional[UUID]
    item: Optional[Item]


@dataclass(frozen=True)
class DeleteItemRequest:
    id: Optional[UUID]


@dataclass(frozen=True)
class ListItemsRequest:
    skip: Optional[UUID] = None
    limit: Optional[int] = None


_STORE_ERRORS: dict[type, ErrorKind] = {
    ItemNotFoundError: ErrorKind.NOT_FOUND,
    ItemAlreadyExistsError: ErrorKind.ALREADY_EXISTS,
    ItemNotModifiedError: ErrorKind.NOT_MODIFIED,
}


class RequestDispatcher:
    """
    Stateless front door to an item store.

    Usage:
        dispatcher = RequestDispatcher(InMemoryItemStore())
        outcome = dispatcher.create_item(CreateItemRequest(item=item))
        if outcome.ok:
            created = outcome.value
        else:
            print(outcome.kind, outcome.detail)
    """

    def __init__(
        self,
        store: BaseItemStore,
        default_limit: Optional[int] = None,
    ):
        """
        Args:
            store: Backing item store
            default_limit: Page size used when a list request has none
                (default from config)
        """
        self.store = store
        self.default_limit = default_limit or settings.list_default_limit

    def create_item(self, req: CreateItemRequest) -> Outcome[Item]:
        if req.item is None:
            return self._reject("Missing item")
        if req.item.id is None:
            return self._reject("Missing required field: id")

        return self._call("create_item", lambda: self.store.create(req.item))

    def get_item(self, req: GetItemRequest) -> Outcome[GetItemResponse]:
        if req.id is None:
            return self._reject("Missing required field: id")

        # Stored timestamps are UTC; a naive if_newer is read as UTC too
        if_newer = req.if_newer
        if if_newer is not None and if_newer.tzinfo is None:
            if_newer = if_newer.replace(tzinfo=timezone.utc)

        def run() -> GetItemResponse:
            item = self.store.get(req.id, if_newer=if_newer)
            return GetItemResponse(item=item, modified=item.modified)

        return self._call("get_item", run)

    def put_item(self, req: PutItemRequest) -> Outcome[Item]:
        if req.id is None:
            return self._reject("Missing required field: id")
        if req.item is None:
            return self._reject("Missing item")
        if req.item.id is not None and req.item.id != req.id:
            return self._reject(
                f"Item id {req.item.id} does not match request id {req.id}"
            )

        return self._call("put_item", lambda: self.store.put(req.id, req.item))

    def delete_item(self, req: DeleteItemRequest) -> Outcome[None]:
        if req.id is None:
            return self._reject("Missing required field: id")

        return self._call("delete_item", lambda: self.store.delete(req.id))

    def list_items(self, req: ListItemsRequest) -> Outcome[Page]:
        limit = req.limit if req.limit and req.limit > 0 else self.default_limit

        # The snapshot is taken under the store lock; paging runs without it
        return self._call(
            "list_items",
            lambda: paginate(self.store.snapshot(), skip=req.skip, limit=limit),
        )

    def _call(self, operation: str, fn: Callable[[], Any]) -> Outcome:
        try:
            return Ok(fn())
        except (ItemNotFoundError, ItemAlreadyExistsError, ItemNotModifiedError) as e:
            kind = _STORE_ERRORS[type(e)]
            if kind != ErrorKind.NOT_MODIFIED:
                logger.info(
                    "Request rejected by store",
                    operation=operation,
                    kind=kind.value,
                    item_id=str(e.item_id),
                )
            return Err(kind, str(e))
        except Exception as e:
            logger.error(
                "Unexpected store failure",
                operation=operation,
                error=str(e),
                exc_info=True,
            )
            return Err(ErrorKind.INTERNAL, str(e))

    def _reject(self, detail: str) -> Err:
        logger.info("Bad request", detail=detail)
        return Err(ErrorKind.BAD_REQUEST, detail)
