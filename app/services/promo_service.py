"""Restaurant promotions: creation, lookup and lifecycle."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.promo import Promo
from app.utils.time import as_utc, utcnow

PROMO_CODE_PATTERN = re.compile(r"^[A-Z0-9]{3,32}$")
MIN_DISCOUNT_PERCENT = 1
MAX_DISCOUNT_PERCENT = 100


def normalize_code(code: str | None) -> str:
    """Return the upper-case promo code or raise for anything but 3-32 letters/digits."""
    normalized = (code or "").strip().upper()
    if not PROMO_CODE_PATTERN.match(normalized):
        raise ValidationError("Promo code must be 3-32 letters or digits")
    return normalized


def _check_discount(discount_percent: int) -> None:
    if not MIN_DISCOUNT_PERCENT <= discount_percent <= MAX_DISCOUNT_PERCENT:
        raise ValidationError("discountPercent must be between 1 and 100")


def is_current(promo: Promo, now: datetime | None = None) -> bool:
    return promo.active and as_utc(promo.valid_until) >= (now or utcnow())


def create_promo(db: Session, data: dict[str, Any]) -> Promo:
    values = dict(data)
    values["code"] = normalize_code(values.get("code"))
    _check_discount(values["discount_percent"])
    now = utcnow()
    promo = Promo(**values, active=True, created_at=now, updated_at=now)
    db.add(promo)
    db.commit()
    db.refresh(promo)
    return promo


def get_promo(db: Session, promo_id: str) -> Promo | None:
    return db.get(Promo, promo_id)


def require_promo(db: Session, promo_id: str) -> Promo:
    promo = get_promo(db, promo_id)
    if promo is None:
        raise NotFoundError("Promo not found")
    return promo


def list_active_promos(db: Session, now: datetime | None = None) -> list[Promo]:
    """Return active promos that have not expired, soonest expiry first."""
    current = now or utcnow()
    promos = db.query(Promo).filter(Promo.active.is_(True)).all()
    # SQLite hands back naive timestamps, so expiry is compared in Python.
    live = [promo for promo in promos if is_current(promo, current)]
    return sorted(live, key=lambda promo: as_utc(promo.valid_until))


def list_restaurant_promos(db: Session, restaurant_id: str) -> list[Promo]:
    return db.query(Promo).filter(Promo.restaurant_id == restaurant_id).order_by(Promo.created_at.desc()).all()


def update_promo(db: Session, promo: Promo, changes: dict[str, Any]) -> Promo:
    values = dict(changes)
    if "code" in values:
        values["code"] = normalize_code(values["code"])
    if "discount_percent" in values:
        _check_discount(values["discount_percent"])
    for field, value in values.items():
        setattr(promo, field, value)
    promo.updated_at = utcnow()
    db.commit()
    db.refresh(promo)
    return promo


def deactivate_promo(db: Session, promo: Promo) -> Promo:
    promo.active = False
    promo.updated_at = utcnow()
    db.commit()
    db.refresh(promo)
    return promo


def delete_promo(db: Session, promo: Promo) -> None:
    db.delete(promo)
    db.commit()
