"""Customer wishlist endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.endpoints.serializers import serialize_wishlist
from app.db.session import get_db
from app.schemas.wishlist import WishlistEnvelope, WishlistItemCreate, WishlistItemRemove, WishlistResponse
from app.services import wishlist_service

router: APIRouter = APIRouter()


@router.get("/{customer_id}", response_model=WishlistEnvelope)
def get_wishlist(customer_id: str, db: Session = Depends(get_db)) -> WishlistEnvelope:
    items = wishlist_service.list_items(db, customer_id)
    return WishlistEnvelope(wishlist=serialize_wishlist(customer_id, items))


@router.post("/{customer_id}/add", response_model=WishlistResponse)
def add_wishlist_item(
    customer_id: str,
    payload: WishlistItemCreate,
    db: Session = Depends(get_db),
) -> WishlistResponse:
    items = wishlist_service.add_item(
        db,
        customer_id,
        item_type=payload.item_type,
        item_id=payload.item_id,
        name=payload.name,
        details=payload.details,
    )
    return WishlistResponse(message="Item added to wishlist", wishlist=serialize_wishlist(customer_id, items))


@router.delete("/{customer_id}/remove", response_model=WishlistResponse)
def remove_wishlist_item(
    customer_id: str,
    payload: WishlistItemRemove,
    db: Session = Depends(get_db),
) -> WishlistResponse:
    items = wishlist_service.remove_item(db, customer_id, payload.item_id, payload.item_type)
    return WishlistResponse(message="Item removed from wishlist", wishlist=serialize_wishlist(customer_id, items))


@router.delete("/{customer_id}/clear", response_model=WishlistResponse)
def clear_wishlist(customer_id: str, db: Session = Depends(get_db)) -> WishlistResponse:
    wishlist_service.clear(db, customer_id)
    return WishlistResponse(message="Wishlist cleared", wishlist=serialize_wishlist(customer_id, []))
