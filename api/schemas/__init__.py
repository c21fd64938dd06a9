"""
Pydantic schemas for API request/response validation.
"""

from api.schemas.item import (
    ErrorResponse,
    ItemBody,
    ItemListResponse,
)

__all__ = [
    "ErrorResponse",
    "ItemBody",
    "ItemListResponse",
]
