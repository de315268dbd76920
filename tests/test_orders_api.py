"""Order API integration tests."""

from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.db import session as db_session
from app.db.base import Base
from app.main import app
from app.models.order import Order
from app.models.quest import QuestProgress
from app.services import location_service, quest_service


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup_database(tmp_path: Path, monkeypatch) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "test_orders.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    return testing_session_local


def _order_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "customerId": "c1",
        "restaurantId": "r1",
        "items": [{"id": "i1", "name": "Soup", "price": 10, "quantity": 2}],
        "totalAmount": 20,
        "deliveryAddress": {"street": "x"},
    }
    payload.update(overrides)
    return payload


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _advance(client: TestClient, order_id: str, *statuses: str) -> None:
    for status in statuses:
        response = client.put(f"/api/v1/orders/{order_id}/status", json={"status": status})
        assert response.status_code == 200, response.text


def test_create_order_returns_pending_order(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post("/api/v1/orders", json=_order_payload())

    assert response.status_code == 201
    order = response.json()["order"]
    assert order["status"] == "pending"
    assert order["customerId"] == "c1"
    assert order["totalAmount"] == 20.0
    assert order["deliveredAt"] is None
    assert order["deliveryPartnerId"] is None
    assert order["items"] == [{"itemId": "i1", "name": "Soup", "price": 10.0, "quantity": 2}]
    assert order["ratings"] == {}


@pytest.mark.parametrize("missing", ["customerId", "restaurantId", "items", "totalAmount", "deliveryAddress"])
def test_create_order_missing_field_is_rejected_without_write(tmp_path: Path, monkeypatch, missing: str) -> None:
    testing_session_local = _setup_database(tmp_path, monkeypatch)
    payload = _order_payload()
    del payload[missing]

    with TestClient(app) as client:
        response = client.post("/api/v1/orders", json=payload)

    assert response.status_code == 400
    with testing_session_local() as session:
        assert session.query(Order).count() == 0


def test_create_order_rejects_total_mismatch(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post("/api/v1/orders", json=_order_payload(totalAmount=25))

    assert response.status_code == 400
    assert "does not match" in response.json()["detail"]
    with testing_session_local() as session:
        assert session.query(Order).count() == 0


def test_create_order_advances_quest_progress(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post("/api/v1/orders", json=_order_payload())
        quests = client.get("/api/v1/quests/c1")

    assert response.status_code == 201
    with testing_session_local() as session:
        first_order = (
            session.query(QuestProgress)
            .filter(QuestProgress.customer_id == "c1", QuestProgress.quest_key == "first_order")
            .one()
        )
        assert first_order.progress == 1
        assert first_order.completed_at is not None
    by_key = {quest["key"]: quest for quest in quests.json()["quests"]}
    assert by_key["first_order"]["completed"] is True
    assert by_key["regular"]["progress"] == 1


def test_quest_failure_does_not_fail_order(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup_database(tmp_path, monkeypatch)

    def _broken(db: Session, customer_id: str) -> None:
        raise RuntimeError("Quest error")

    monkeypatch.setattr(quest_service, "update_quest_progress", _broken)

    with TestClient(app) as client:
        response = client.post("/api/v1/orders", json=_order_payload())

    assert response.status_code == 201
    with testing_session_local() as session:
        assert session.query(Order).count() == 1


def test_list_customer_orders(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        client.post("/api/v1/orders", json=_order_payload())
        client.post("/api/v1/orders", json=_order_payload(customerId="c2"))
        response = client.get("/api/v1/orders/customer", params={"customerId": "c1"})
        missing = client.get("/api/v1/orders/customer")

    assert response.status_code == 200
    assert response.json()["count"] == 1
    assert response.json()["orders"][0]["customerId"] == "c1"
    assert missing.status_code == 400
    assert missing.json()["detail"] == "Customer ID required"


def test_list_restaurant_orders(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        client.post("/api/v1/orders", json=_order_payload())
        client.post("/api/v1/orders", json=_order_payload(restaurantId="r2"))
        response = client.get("/api/v1/orders/restaurant", params={"restaurantId": "r2"})
        missing = client.get("/api/v1/orders/restaurant")

    assert response.status_code == 200
    assert [order["restaurantId"] for order in response.json()["orders"]] == ["r2"]
    assert missing.status_code == 400
    assert missing.json()["detail"] == "Restaurant ID required"


def test_pending_and_partner_orders(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        first = client.post("/api/v1/orders", json=_order_payload()).json()["order"]
        second = client.post("/api/v1/orders", json=_order_payload()).json()["order"]
        client.put(f"/api/v1/orders/{first['id']}/assign-delivery", json={"deliveryPartnerId": "rider1"})
        _advance(client, second["id"], "confirmed")

        pending = client.get("/api/v1/orders/pending")
        partner = client.get("/api/v1/orders/delivery", params={"deliveryPartnerId": "rider1"})
        no_partner = client.get("/api/v1/orders/delivery")

    assert [order["id"] for order in pending.json()["orders"]] == [first["id"]]
    assert [order["id"] for order in partner.json()["orders"]] == [first["id"]]
    assert no_partner.json() == {"orders": [], "count": 0}


def test_get_order_not_found(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.get("/api/v1/orders/unknown")

    assert response.status_code == 404


def test_get_order_includes_live_location(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order = client.post("/api/v1/orders", json=_order_payload()).json()["order"]
        client.put(f"/api/v1/orders/{order['id']}/assign-delivery", json={"deliveryPartnerId": "rider1"})
        before_fix = client.get(f"/api/v1/orders/{order['id']}")

        with testing_session_local() as session:
            location_service.set_location(session, rider_id="rider1", lat=10, lng=20)

        after_fix = client.get(f"/api/v1/orders/{order['id']}")

    assert before_fix.status_code == 200
    assert before_fix.json()["liveLocation"] is None
    live = after_fix.json()["liveLocation"]
    assert live["lat"] == 10
    assert live["lng"] == 20
    assert live["riderId"] == "rider1"


def test_live_location_hidden_once_delivery_finished(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order = client.post("/api/v1/orders", json=_order_payload()).json()["order"]
        client.put(f"/api/v1/orders/{order['id']}/assign-delivery", json={"deliveryPartnerId": "rider1"})
        with testing_session_local() as session:
            location_service.set_location(session, rider_id="rider1", lat=1, lng=1)
        _advance(client, order["id"], "cancelled")
        response = client.get(f"/api/v1/orders/{order['id']}")

    assert response.json()["liveLocation"] is None


def test_update_status_rejects_unknown_status(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order = client.post("/api/v1/orders", json=_order_payload()).json()["order"]
        invalid = client.put(f"/api/v1/orders/{order['id']}/status", json={"status": "invalidStatus"})
        missing = client.put(f"/api/v1/orders/{order['id']}/status", json={})
        unknown_order = client.put("/api/v1/orders/nope/status", json={"status": "bogus"})
        current = client.get(f"/api/v1/orders/{order['id']}")

    assert invalid.status_code == 400
    assert missing.status_code == 400
    # status is validated before the order lookup
    assert unknown_order.status_code == 400
    assert current.json()["order"]["status"] == "pending"


def test_update_status_rejects_illegal_transition(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order = client.post("/api/v1/orders", json=_order_payload()).json()["order"]
        skip_ahead = client.put(f"/api/v1/orders/{order['id']}/status", json={"status": "delivered"})
        _advance(client, order["id"], "cancelled")
        reopen = client.put(f"/api/v1/orders/{order['id']}/status", json={"status": "pending"})

    assert skip_ahead.status_code == 400
    assert "Cannot change status" in skip_ahead.json()["detail"]
    assert reopen.status_code == 400


def test_update_status_unknown_order(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.put("/api/v1/orders/missing/status", json={"status": "confirmed"})

    assert response.status_code == 404


def test_delivered_sets_delivered_at_once(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order = client.post("/api/v1/orders", json=_order_payload()).json()["order"]
        _advance(client, order["id"], "confirmed", "preparing", "ready", "out_for_delivery", "delivered")
        first = client.get(f"/api/v1/orders/{order['id']}").json()["order"]
        repeat = client.put(f"/api/v1/orders/{order['id']}/status", json={"status": "delivered"})
        second = client.get(f"/api/v1/orders/{order['id']}").json()["order"]

    assert first["status"] == "delivered"
    assert first["deliveredAt"] is not None
    assert _parse_ts(first["deliveredAt"]) >= _parse_ts(first["createdAt"])
    assert repeat.status_code == 200
    assert second["deliveredAt"] == first["deliveredAt"]


def test_assign_delivery_partner(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order = client.post("/api/v1/orders", json=_order_payload()).json()["order"]
        response = client.put(
            f"/api/v1/orders/{order['id']}/assign-delivery",
            json={"deliveryPartnerId": "riderX"},
        )
        missing = client.put(f"/api/v1/orders/{order['id']}/assign-delivery", json={})
        blank = client.put(f"/api/v1/orders/{order['id']}/assign-delivery", json={"deliveryPartnerId": "  "})
        unknown = client.put("/api/v1/orders/nope/assign-delivery", json={"deliveryPartnerId": "riderX"})

    assert response.status_code == 200
    assert response.json()["order"]["deliveryPartnerId"] == "riderX"
    assert missing.status_code == 400
    assert blank.status_code == 400
    assert unknown.status_code == 404
