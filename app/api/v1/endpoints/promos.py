"""Restaurant promotion endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.endpoints.serializers import serialize_promo
from app.db.session import get_db
from app.schemas.base import MessageResponse
from app.schemas.promo import PromoCreate, PromoListResponse, PromoResponse, PromoUpdate
from app.services import promo_service

logger = logging.getLogger(__name__)
router: APIRouter = APIRouter()


@router.get("/active", response_model=PromoListResponse)
def get_active_promos(db: Session = Depends(get_db)) -> PromoListResponse:
    promos = promo_service.list_active_promos(db)
    return PromoListResponse(promos=[serialize_promo(promo) for promo in promos], count=len(promos))


@router.get("/restaurant/{restaurant_id}", response_model=PromoListResponse)
def get_restaurant_promos(restaurant_id: str, db: Session = Depends(get_db)) -> PromoListResponse:
    promos = promo_service.list_restaurant_promos(db, restaurant_id)
    return PromoListResponse(promos=[serialize_promo(promo) for promo in promos], count=len(promos))


@router.post("", response_model=PromoResponse, status_code=status.HTTP_201_CREATED)
def create_promo(payload: PromoCreate, db: Session = Depends(get_db)) -> PromoResponse:
    promo = promo_service.create_promo(db, payload.model_dump(by_alias=False))
    logger.info("Promo %s (%s) created for restaurant %s", promo.id, promo.code, promo.restaurant_id)
    return PromoResponse(message="Promo created successfully", promo=serialize_promo(promo))


@router.put("/{promo_id}", response_model=PromoResponse)
def update_promo(promo_id: str, payload: PromoUpdate, db: Session = Depends(get_db)) -> PromoResponse:
    promo = promo_service.require_promo(db, promo_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True, by_alias=False).items()
        if value is not None
    }
    promo = promo_service.update_promo(db, promo, changes)
    return PromoResponse(message="Promo updated successfully", promo=serialize_promo(promo))


@router.patch("/{promo_id}/deactivate", response_model=PromoResponse)
def deactivate_promo(promo_id: str, db: Session = Depends(get_db)) -> PromoResponse:
    promo = promo_service.deactivate_promo(db, promo_service.require_promo(db, promo_id))
    return PromoResponse(message="Promo deactivated successfully", promo=serialize_promo(promo))


@router.delete("/{promo_id}", response_model=MessageResponse)
def delete_promo(promo_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    promo_service.delete_promo(db, promo_service.require_promo(db, promo_id))
    logger.info("Promo %s deleted", promo_id)
    return MessageResponse(message="Promo deleted successfully")
