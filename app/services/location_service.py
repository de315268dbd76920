"""Latest-fix storage for delivery riders."""

from sqlalchemy.orm import Session

from app.core.errors import MissingRiderIdError, ValidationError
from app.models.location import DeliveryLocation
from app.utils.time import utcnow


def set_location(
    db: Session,
    rider_id: str | None,
    lat: float | None = None,
    lng: float | None = None,
    order_id: str | None = None,
) -> DeliveryLocation:
    """Upsert the rider's current fix; arguments left as None keep stored values."""
    if not rider_id:
        raise MissingRiderIdError

    location: DeliveryLocation | None = db.get(DeliveryLocation, rider_id)
    if location is None:
        if lat is None or lng is None:
            raise ValidationError("lat and lng are required for a rider's first location")
        location = DeliveryLocation(rider_id=rider_id)
        db.add(location)

    if lat is not None:
        location.lat = lat
    if lng is not None:
        location.lng = lng
    if order_id is not None:
        location.order_id = order_id
    location.updated_at = utcnow()

    db.commit()
    db.refresh(location)
    return location


def get_location_by_rider_id(db: Session, rider_id: str | None) -> DeliveryLocation | None:
    if not rider_id:
        return None
    return db.get(DeliveryLocation, rider_id)


def get_location_by_order_id(db: Session, order_id: str) -> DeliveryLocation | None:
    """Return the fix of the rider currently tagged with order_id."""
    return (
        db.query(DeliveryLocation)
        .filter(DeliveryLocation.order_id == order_id)
        .order_by(DeliveryLocation.updated_at.desc())
        .first()
    )
