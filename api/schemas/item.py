"""
Item-related request and response schemas.

These Pydantic models define the JSON contract. Items are open-ended:
apart from `id` and `modified`, any field the client sends is kept and
echoed back.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from core.storage import Item


class ItemBody(BaseModel):
    """An item as sent and received over the wire."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {
                    "id": "1f3a6c1e-27f4-4a57-9d4c-0c3a8f7c9a11",
                    "modified": "2024-01-15T10:00:00Z",
                    "data": "hello",
                }
            ]
        },
    )

    id: Optional[UUID] = Field(
        default=None,
        description="Unique item key; required on create",
    )
    modified: Optional[datetime] = Field(
        default=None,
        description="Last modification time, set by the server (ignored on input)",
    )

    def to_item(self) -> Item:
        """Build the domain item; a client-supplied `modified` is dropped."""
        return Item(id=self.id, fields=dict(self.model_extra or {}))

    @classmethod
    def from_item(cls, item: Item) -> "ItemBody":
        return cls.model_validate(item.to_dict())


class ItemListResponse(BaseModel):
    """One page of items."""

    items: list[ItemBody] = Field(
        default_factory=list,
        description="Items in store order",
    )
    next: Optional[UUID] = Field(
        default=None,
        description="Pass as `skip` to fetch the following page; null at the end",
    )


class ErrorResponse(BaseModel):
    """Body of every non-2xx response except 304."""

    error: str = Field(..., examples=["not_found"])
    detail: Optional[str] = Field(default=None, examples=["Item not found: ..."])
