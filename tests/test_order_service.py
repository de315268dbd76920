"""Order store tests against a real SQLite session."""

from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import AlreadyRatedError, InvalidTransitionError, NotFoundError, ValidationError
from app.db.base import Base
from app.models.order import Order, OrderRating
from app.services import location_service, order_service
from app.services.order_status import OrderStatus


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _session(tmp_path: Path) -> Session:
    engine = _build_test_engine(tmp_path / "test_order_store.db")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)()


def _create(session: Session, **overrides) -> Order:
    values = {
        "customer_id": "c1",
        "restaurant_id": "r1",
        "items": [
            {"item_id": "i1", "name": "Curry", "price": Decimal("12.50"), "quantity": 2},
            {"item_id": "i2", "name": "Naan", "price": Decimal("3.25"), "quantity": 1},
        ],
        "total_amount": Decimal("28.25"),
        "delivery_address": {"street": "1 Main St", "city": "Raleigh"},
    }
    values.update(overrides)
    return order_service.create_order(session, **values)


def test_create_order_persists_items_in_order(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        order = _create(session)

        assert order.status == "pending"
        assert order.total_amount == Decimal("28.25")
        assert [item.item_id for item in order.items] == ["i1", "i2"]
        assert order.created_at is not None
        assert order.delivered_at is None


@pytest.mark.parametrize("field", ["customer_id", "restaurant_id", "items", "total_amount", "delivery_address"])
def test_create_order_requires_fields(tmp_path: Path, field: str) -> None:
    with _session(tmp_path) as session:
        with pytest.raises(ValidationError, match=field):
            _create(session, **{field: None})
        assert session.query(Order).count() == 0


def test_create_order_checks_total(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        with pytest.raises(ValidationError, match="does not match"):
            _create(session, total_amount=Decimal("30.00"))


def test_calculate_items_total_defaults_quantity() -> None:
    assert order_service.calculate_items_total([{"price": 4}, {"price": "1.10", "quantity": 3}]) == Decimal("7.30")


def test_require_order_raises_for_missing(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        assert order_service.get_order(session, "missing") is None
        with pytest.raises(NotFoundError):
            order_service.require_order(session, "missing")


def test_find_orders_by_customer_and_restaurant(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        _create(session)
        _create(session, customer_id="c2")
        _create(session, restaurant_id="r2")

        assert len(order_service.list_orders_for_customer(session, "c1")) == 2
        assert len(order_service.list_orders_for_restaurant(session, "r1")) == 2
        assert order_service.list_orders_for_customer(session, "nobody") == []


def test_pending_orders_exclude_progressed_ones(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        waiting = _create(session)
        started = _create(session)
        order_service.update_status(session, started, OrderStatus.CONFIRMED)

        assert [order.id for order in order_service.get_pending_orders(session)] == [waiting.id]


def test_update_status_follows_transition_table(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        order = _create(session)
        with pytest.raises(InvalidTransitionError):
            order_service.update_status(session, order, OrderStatus.OUT_FOR_DELIVERY)

        order_service.update_status(session, order, OrderStatus.CANCELLED)
        assert session.get(Order, order.id).status == "cancelled"


def test_assign_delivery_partner_and_location(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        order = _create(session)
        assert order_service.get_delivery_partner_location(session, order) is None

        order_service.assign_delivery_partner(session, order, "rider123")
        assert order.delivery_partner_id == "rider123"
        assert order_service.get_delivery_partner_location(session, order) is None

        location_service.set_location(session, rider_id="rider123", lat=10, lng=20)
        location = order_service.get_delivery_partner_location(session, order)
        assert (location.lat, location.lng) == (10, 20)

        with pytest.raises(ValidationError):
            order_service.assign_delivery_partner(session, order, "")


def test_add_rating_is_unique_per_role(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        order = _create(session)
        order_service.add_rating(session, order, "customer", 5, "Great!")
        order_service.add_rating(session, order, "restaurant", 4)

        with pytest.raises(AlreadyRatedError):
            order_service.add_rating(session, order, "customer", 1, "changed my mind")

        ratings = {rating.role: rating for rating in session.query(OrderRating).all()}
        assert ratings["customer"].rating == 5
        assert ratings["customer"].review == "Great!"
        assert ratings["restaurant"].review == ""
        assert order_service.get_rating(order, "customer").rating == 5


def test_add_rating_validates_role_and_score(tmp_path: Path) -> None:
    with _session(tmp_path) as session:
        order = _create(session)
        with pytest.raises(ValidationError):
            order_service.add_rating(session, order, "rider", 5)
        with pytest.raises(ValidationError):
            order_service.add_rating(session, order, "customer", 0)
