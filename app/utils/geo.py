"""Coordinate validation, geohash encoding and great-circle distance."""

from __future__ import annotations

import pygeohash
from haversine import Unit, haversine

GEOHASH_PRECISION: int = 9


def is_valid_coordinate(lat: float | None, lng: float | None) -> bool:
    if lat is None or lng is None:
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def encode_geohash(lat: float, lng: float, precision: int = GEOHASH_PRECISION) -> str:
    return pygeohash.encode(lat, lng, precision=precision)


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    return haversine((lat1, lng1), (lat2, lng2), unit=Unit.KILOMETERS)
