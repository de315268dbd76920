"""Customer wishlists of saved restaurants and menu items."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.wishlist import WishlistItem
from app.utils.time import utcnow

WISHLIST_ITEM_TYPES: tuple[str, ...] = ("restaurant", "menuItem")


def _check_item_type(item_type: str) -> None:
    if item_type not in WISHLIST_ITEM_TYPES:
        raise ValidationError(f"Invalid wishlist item type: {item_type}")


def list_items(db: Session, customer_id: str) -> list[WishlistItem]:
    return (
        db.query(WishlistItem)
        .filter(WishlistItem.customer_id == customer_id)
        .order_by(WishlistItem.added_at.asc(), WishlistItem.id.asc())
        .all()
    )


def _find_item(db: Session, customer_id: str, item_type: str, item_id: str) -> WishlistItem | None:
    return (
        db.query(WishlistItem)
        .filter(
            WishlistItem.customer_id == customer_id,
            WishlistItem.item_type == item_type,
            WishlistItem.item_id == item_id,
        )
        .one_or_none()
    )


def add_item(
    db: Session,
    customer_id: str,
    item_type: str,
    item_id: str,
    name: str,
    details: dict[str, Any] | None = None,
) -> list[WishlistItem]:
    """Save an item; saving it again refreshes its name and details."""
    _check_item_type(item_type)
    item = _find_item(db, customer_id, item_type, item_id)
    if item is None:
        item = WishlistItem(customer_id=customer_id, item_type=item_type, item_id=item_id, added_at=utcnow())
        db.add(item)
    item.name = name
    item.details = dict(details or {})
    db.commit()
    return list_items(db, customer_id)


def remove_item(db: Session, customer_id: str, item_id: str, item_type: str) -> list[WishlistItem]:
    _check_item_type(item_type)
    item = _find_item(db, customer_id, item_type, item_id)
    if item is not None:
        db.delete(item)
        db.commit()
    return list_items(db, customer_id)


def clear(db: Session, customer_id: str) -> int:
    removed = db.query(WishlistItem).filter(WishlistItem.customer_id == customer_id).delete(synchronize_session=False)
    db.commit()
    return removed
