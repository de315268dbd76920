"""User service operations."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.models.order import Order
from app.models.user import User, normalize_user_role
from app.services.order_status import ACTIVE_STATUSES


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email).limit(1))


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def create_user(db: Session, name: str, email: str, role: str, user_id: str | None = None) -> User:
    canonical_role = normalize_user_role(role)
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email already registered")
    if user_id is not None and get_user_by_id(db, user_id) is not None:
        raise ConflictError("User ID already exists")

    user = User(name=name, email=email, role=canonical_role, is_active=True)
    if user_id is not None:
        user.id = user_id
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def list_users_by_role(db: Session, role: str) -> list[User]:
    canonical_role = normalize_user_role(role)
    return list(db.scalars(select(User).where(User.role == canonical_role).order_by(User.name.asc())).all())


def is_rider_busy(db: Session, rider_id: str) -> bool:
    """Return whether rider is assigned to an order that is still active."""
    active_values = [status.value for status in ACTIVE_STATUSES]
    return (
        db.scalar(
            select(Order.id)
            .where(Order.delivery_partner_id == rider_id, Order.status.in_(active_values))
            .limit(1)
        )
        is not None
    )


def find_free_riders(db: Session) -> list[User]:
    """Return active delivery riders with no active order assigned."""
    active_values = [status.value for status in ACTIVE_STATUSES]
    busy_ids = select(Order.delivery_partner_id).where(
        Order.delivery_partner_id.is_not(None),
        Order.status.in_(active_values),
    )
    return list(
        db.scalars(
            select(User)
            .where(User.role == "DELIVERY", User.is_active.is_(True), User.id.not_in(busy_ids))
            .order_by(User.name.asc())
        ).all()
    )
