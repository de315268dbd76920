"""Restaurant catalogue and geo helper tests."""

from pathlib import Path

import pygeohash
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.db import session as db_session
from app.db.base import Base
from app.main import app
from app.utils.geo import encode_geohash, haversine_km, is_valid_coordinate


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup_database(tmp_path: Path, monkeypatch) -> None:
    engine = _build_test_engine(tmp_path / "test_restaurants.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)


def test_encode_geohash_known_value() -> None:
    assert encode_geohash(57.64911, 10.40744, precision=11) == "u4pruydqqvj"
    assert encode_geohash(57.64911, 10.40744, precision=5) == "u4pru"


def test_haversine_distance() -> None:
    assert haversine_km(0, 0, 0, 0) == 0
    # one degree of latitude is roughly 111 km
    assert haversine_km(0, 0, 1, 0) == pytest.approx(111.2, abs=0.1)


def test_geohash_decodes_back_to_coordinate() -> None:
    lat, lng = pygeohash.decode(encode_geohash(35.7796, -78.6382))

    assert lat == pytest.approx(35.7796, abs=1e-3)
    assert lng == pytest.approx(-78.6382, abs=1e-3)
    assert haversine_km(35.7796, -78.6382, lat, lng) < 0.01


def test_is_valid_coordinate() -> None:
    assert is_valid_coordinate(10, 20)
    assert not is_valid_coordinate(None, 20)
    assert not is_valid_coordinate(95, 20)


def test_create_restaurant_derives_geohash(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post(
            "/api/v1/restaurants",
            json={
                "name": "Spice Route",
                "cuisine": "Indian",
                "ownerId": "owner1",
                "location": {"lat": 57.64911, "lng": 10.40744},
                "menu": [{"id": "i1", "name": "Curry", "price": 12.5}],
            },
        )
        fetched = client.get(f"/api/v1/restaurants/{response.json()['restaurant']['id']}")
        missing = client.get("/api/v1/restaurants/unknown")

    assert response.status_code == 201
    restaurant = response.json()["restaurant"]
    assert restaurant["geohash"] == "u4pruydqq"
    assert restaurant["rating"] == 0
    assert restaurant["isLocalLegend"] is False
    assert restaurant["deliveryTime"] == "30-45 min"
    assert fetched.json()["restaurant"]["menu"][0]["name"] == "Curry"
    assert missing.status_code == 404


def test_create_restaurant_requires_name(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post("/api/v1/restaurants", json={"cuisine": "Thai"})

    assert response.status_code == 400


def test_update_restaurant_location_and_flags(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        created = client.post(
            "/api/v1/restaurants",
            json={"name": "Pasta Palace", "location": {"lat": 1, "lng": 1}},
        ).json()["restaurant"]
        moved = client.put(
            f"/api/v1/restaurants/{created['id']}",
            json={"location": {"lat": 57.64911, "lng": 10.40744}, "isLocalLegend": True},
        )
        renamed = client.put(f"/api/v1/restaurants/{created['id']}", json={"name": "Pasta House"})
        cleared = client.put(f"/api/v1/restaurants/{created['id']}", json={"location": None})

    assert moved.json()["restaurant"]["geohash"] == "u4pruydqq"
    assert moved.json()["restaurant"]["isLocalLegend"] is True
    assert renamed.json()["restaurant"]["name"] == "Pasta House"
    assert renamed.json()["restaurant"]["geohash"] == "u4pruydqq"
    assert cleared.json()["restaurant"]["location"] is None
    assert cleared.json()["restaurant"]["geohash"] is None


def test_update_menu(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        created = client.post("/api/v1/restaurants", json={"name": "Taco Stand"}).json()["restaurant"]
        response = client.put(
            f"/api/v1/restaurants/{created['id']}/menu",
            json={"menu": [{"id": "t1", "name": "Taco", "price": 3}, {"id": "t2", "name": "Burrito", "price": 9}]},
        )

    assert [item["name"] for item in response.json()["restaurant"]["menu"]] == ["Taco", "Burrito"]


def test_list_and_nearby_restaurants(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch)

    with TestClient(app) as client:
        client.post("/api/v1/restaurants", json={"name": "Near", "location": {"lat": 35.7800, "lng": -78.6400}})
        client.post("/api/v1/restaurants", json={"name": "Nearer", "location": {"lat": 35.7797, "lng": -78.6383}})
        client.post("/api/v1/restaurants", json={"name": "Far", "location": {"lat": 36.0, "lng": -79.0}})
        client.post("/api/v1/restaurants", json={"name": "Nowhere"})
        client.post("/api/v1/restaurants", json={"name": "Closed", "isActive": False, "ownerId": "o1"})

        listed = client.get("/api/v1/restaurants")
        owned = client.get("/api/v1/restaurants", params={"ownerId": "o1"})
        nearby = client.get("/api/v1/restaurants/nearby", params={"lat": 35.7796, "lng": -78.6382, "radiusKm": 2})
        invalid = client.get("/api/v1/restaurants/nearby", params={"lat": 100, "lng": 0})

    assert listed.json()["count"] == 4
    assert [restaurant["name"] for restaurant in owned.json()["restaurants"]] == ["Closed"]
    names = [restaurant["name"] for restaurant in nearby.json()["restaurants"]]
    assert names == ["Nearer", "Near"]
    assert nearby.json()["restaurants"][0]["distanceKm"] < nearby.json()["restaurants"][1]["distanceKm"]
    assert invalid.status_code == 400
