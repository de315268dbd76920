"""Wishlist schemas.

Item kind travels as ``type`` on the wire; ``item_type`` is used internally
to avoid shadowing the builtin.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.schemas.base import ApiModel


class WishlistItemCreate(ApiModel):
    item_type: str = Field(alias="type")
    item_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    details: dict[str, Any] = Field(default_factory=dict)


class WishlistItemRemove(ApiModel):
    item_type: str = Field(alias="type")
    item_id: str = Field(min_length=1)


class WishlistItemRead(ApiModel):
    item_type: str = Field(alias="type")
    item_id: str
    name: str
    details: dict[str, Any]
    added_at: datetime


class WishlistRead(ApiModel):
    customer_id: str
    items: list[WishlistItemRead]


class WishlistEnvelope(ApiModel):
    wishlist: WishlistRead


class WishlistResponse(ApiModel):
    message: str
    wishlist: WishlistRead
