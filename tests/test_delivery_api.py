"""Delivery tracking and rider assignment endpoint tests."""

from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.clients.tracking import TrackingClient
from app.db import session as db_session
from app.db.base import Base
from app.main import app


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup_database(tmp_path: Path, monkeypatch) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "test_delivery.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    return testing_session_local


def _create_order(client: TestClient) -> dict[str, Any]:
    response = client.post(
        "/api/v1/orders",
        json={
            "customerId": "c1",
            "restaurantId": "r1",
            "items": [{"id": "i1", "price": 7.5, "quantity": 2}],
            "totalAmount": 15,
            "deliveryAddress": {"street": "x", "lat": 35.78, "lng": -78.64},
        },
    )
    assert response.status_code == 201
    return response.json()["order"]


def _create_rider(client: TestClient, rider_id: str, name: str) -> None:
    response = client.post(
        "/api/v1/users",
        json={"id": rider_id, "name": name, "email": f"{rider_id}@example.com", "role": "delivery"},
    )
    assert response.status_code == 201


def test_update_location_requires_rider_id(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.put("/api/v1/delivery/location", json={"lat": 1, "lng": 2})

    assert response.status_code == 400
    assert response.json()["detail"] == "riderId required"


def test_update_location_rejects_out_of_range_coordinates(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.put("/api/v1/delivery/location", json={"riderId": "r1", "lat": 91, "lng": 2})

    assert response.status_code == 400


def test_rider_location_roundtrip(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        missing = client.get("/api/v1/delivery/location/r1")
        stored = client.put("/api/v1/delivery/location", json={"riderId": "r1", "lat": 10, "lng": 20})
        fetched = client.get("/api/v1/delivery/location/r1")

    assert missing.status_code == 404
    assert stored.status_code == 200
    assert fetched.json()["location"]["lat"] == 10
    assert fetched.json()["location"]["lng"] == 20
    assert fetched.json()["location"]["orderId"] is None


def test_track_order_error_cases(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order = _create_order(client)
        unknown = client.get("/api/v1/delivery/track/unknown")
        no_rider = client.get(f"/api/v1/delivery/track/{order['id']}")
        client.put(f"/api/v1/orders/{order['id']}/assign-delivery", json={"deliveryPartnerId": "rider1"})
        no_fix = client.get(f"/api/v1/delivery/track/{order['id']}")

    assert unknown.status_code == 404
    assert no_rider.status_code == 400
    assert no_rider.json()["detail"] == "No delivery partner assigned"
    assert no_fix.status_code == 200
    assert no_fix.json() == {"location": None}


def test_track_order_returns_latest_fix(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order = _create_order(client)
        client.put(f"/api/v1/orders/{order['id']}/assign-delivery", json={"deliveryPartnerId": "rider1"})
        client.put("/api/v1/delivery/location", json={"riderId": "rider1", "orderId": order["id"], "lat": 1, "lng": 2})
        client.put("/api/v1/delivery/location", json={"riderId": "rider1", "lat": 3, "lng": 4})
        response = client.get(f"/api/v1/delivery/track/{order['id']}")

    location = response.json()["location"]
    assert (location["lat"], location["lng"]) == (3, 4)
    assert location["orderId"] == order["id"]


def test_available_orders_exclude_assigned(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        open_order = _create_order(client)
        taken = _create_order(client)
        client.put(f"/api/v1/orders/{taken['id']}/assign-delivery", json={"deliveryPartnerId": "rider1"})
        response = client.get("/api/v1/delivery/available-orders")

    assert response.status_code == 200
    assert [order["id"] for order in response.json()["orders"]] == [open_order["id"]]


def test_free_riders_and_accept(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        _create_rider(client, "rider-a", "Alex")
        _create_rider(client, "rider-b", "Blake")
        first = _create_order(client)
        second = _create_order(client)

        accepted = client.post(f"/api/v1/delivery/orders/{first['id']}/accept", json={"riderId": "rider-a"})
        free = client.get("/api/v1/delivery/riders/free")
        busy = client.post(f"/api/v1/delivery/orders/{second['id']}/accept", json={"riderId": "rider-a"})
        taken = client.post(f"/api/v1/delivery/orders/{first['id']}/accept", json={"riderId": "rider-b"})
        unknown = client.post("/api/v1/delivery/orders/nope/accept", json={"riderId": "rider-b"})
        missing_rider = client.post(f"/api/v1/delivery/orders/{second['id']}/accept", json={})

    assert accepted.status_code == 200
    assert accepted.json()["order"]["deliveryPartnerId"] == "rider-a"
    assert [rider["id"] for rider in free.json()["users"]] == ["rider-b"]
    assert busy.status_code == 400
    assert taken.status_code == 400
    assert unknown.status_code == 404
    assert missing_rider.status_code == 400


def test_rider_is_free_again_after_delivery(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        _create_rider(client, "rider-a", "Alex")
        order = _create_order(client)
        client.post(f"/api/v1/delivery/orders/{order['id']}/accept", json={"riderId": "rider-a"})
        busy = client.get("/api/v1/delivery/riders/free").json()["count"]
        client.put(f"/api/v1/orders/{order['id']}/status", json={"status": "cancelled"})
        free = client.get("/api/v1/delivery/riders/free").json()["count"]
        late_accept = client.post(f"/api/v1/delivery/orders/{order['id']}/accept", json={"riderId": "rider-a"})

    assert busy == 0
    assert free == 1
    assert late_accept.status_code == 400


def test_tracking_snapshot_follows_status_changes(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app, base_url="http://testserver/api/v1") as client:
        tracker = TrackingClient(client)
        order = _create_order(client)
        _create_rider(client, "rider1", "Ravi")

        pending = tracker.snapshot(order["id"])
        client.put(f"/orders/{order['id']}/assign-delivery", json={"deliveryPartnerId": "rider1"})
        client.put(f"/orders/{order['id']}/status", json={"status": "confirmed"})
        client.put("/delivery/location", json={"riderId": "rider1", "lat": 35.77, "lng": -78.63})
        confirmed = tracker.snapshot(order["id"])
        missing = tracker.snapshot("unknown")

    assert pending.status == "pending"
    assert pending.location is None
    assert confirmed.status == "confirmed"
    assert confirmed.location.lat == 35.77
    assert missing is None
