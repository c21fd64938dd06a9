"""
Item endpoints.

Thin HTTP adapter over the request dispatcher:
- POST /items - Create item
- GET /items - List items (cursor pagination)
- GET /items/{item_id} - Get item, optionally conditional on If-Modified-Since
- PUT /items/{item_id} - Replace item
- DELETE /items/{item_id} - Delete item
"""

from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Query, Response
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError

from api.dependencies import get_dispatcher
from api.schemas.item import ErrorResponse, ItemBody, ItemListResponse
from core.logging import get_logger
from manager.dispatcher import (
    CreateItemRequest,
    DeleteItemRequest,
    Err,
    ErrorKind,
    GetItemRequest,
    ListItemsRequest,
    PutItemRequest,
    RequestDispatcher,
)


logger = get_logger(__name__)
router = APIRouter(prefix="/items", tags=["Items"])

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NOT_MODIFIED: 304,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.INTERNAL: 500,
}

_datetime_adapter = TypeAdapter(datetime)


def error_response(err: Err) -> Response:
    """Render a dispatcher error as an HTTP response."""
    status_code = STATUS_BY_KIND[err.kind]
    if status_code == 304:
        return Response(status_code=304)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=err.kind.value, detail=err.detail).model_dump(),
    )


def parse_http_timestamp(value: str) -> datetime:
    """
    Parse an If-Modified-Since value.

    Accepts ISO-8601 as well as the RFC 7231 HTTP-date form.
    """
    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid timestamp: {value}") from None
    return parsed


@router.post(
    "",
    status_code=201,
    response_model=ItemBody,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_item(
    body: ItemBody,
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    """Create a new item. The body must carry an `id`."""
    outcome = dispatcher.create_item(CreateItemRequest(item=body.to_item()))
    if not outcome.ok:
        return error_response(outcome)

    logger.info("Item created", item_id=str(outcome.value.id))
    return ItemBody.from_item(outcome.value)


@router.get("", response_model=ItemListResponse)
async def list_items(
    limit: Optional[int] = Query(default=None, description="Maximum items per page (default 10)"),
    skip: Optional[UUID] = Query(default=None, description="Cursor from a previous page's `next`"),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    """
    List items one page at a time.

    Follow `next` until it is null. If the cursor's item was deleted in
    between, the page comes back empty with `next` null.
    """
    outcome = dispatcher.list_items(ListItemsRequest(skip=skip, limit=limit))
    if not outcome.ok:
        return error_response(outcome)

    page = outcome.value
    return ItemListResponse(
        items=[ItemBody.from_item(item) for item in page.items],
        next=page.next,
    )


@router.get(
    "/{item_id}",
    response_model=ItemBody,
    responses={304: {"description": "Not modified"}, 404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: UUID,
    response: Response,
    if_modified_since: Optional[str] = Header(default=None, alias="If-Modified-Since"),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    """
    Get an item.

    With `If-Modified-Since`, answers 304 unless the item changed after
    that time. The item's modification time is returned in `Modified`.
    """
    if_newer = None
    if if_modified_since is not None:
        try:
            if_newer = parse_http_timestamp(if_modified_since)
        except ValueError as e:
            return error_response(Err(ErrorKind.BAD_REQUEST, str(e)))

    outcome = dispatcher.get_item(GetItemRequest(id=item_id, if_newer=if_newer))
    if not outcome.ok:
        return error_response(outcome)

    response.headers["Modified"] = outcome.value.modified.isoformat()
    return ItemBody.from_item(outcome.value.item)


@router.put(
    "/{item_id}",
    response_model=ItemBody,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def put_item(
    item_id: UUID,
    body: ItemBody,
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    """Replace an existing item wholesale. Never creates."""
    outcome = dispatcher.put_item(PutItemRequest(id=item_id, item=body.to_item()))
    if not outcome.ok:
        return error_response(outcome)

    logger.info("Item replaced", item_id=str(item_id))
    return ItemBody.from_item(outcome.value)


@router.delete(
    "/{item_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: UUID,
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    """Delete an item."""
    outcome = dispatcher.delete_item(DeleteItemRequest(id=item_id))
    if not outcome.ok:
        return error_response(outcome)

    logger.info("Item deleted", item_id=str(item_id))
    return Response(status_code=204)
