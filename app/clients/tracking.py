"""Live delivery tracking client.

``TrackingPoller`` polls ``GET /delivery/track/{order_id}`` on a fixed
cadence for as long as a tracking view is open. The poll loop is an explicit
``asyncio.Task`` owned by the poller: ``start()`` binds it to the view and
``stop()`` cancels it together with any request still in flight.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

NO_LOCATION_STATUSES: frozenset[int] = frozenset({400, 404})


@dataclass(frozen=True)
class LiveLocation:
    lat: float
    lng: float
    rider_id: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> LiveLocation | None:
        if not payload:
            return None
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected location payload: {payload!r}")
        return cls(
            lat=float(payload["lat"]),
            lng=float(payload["lng"]),
            rider_id=payload.get("riderId"),
            updated_at=payload.get("updatedAt"),
        )


@dataclass(frozen=True)
class TrackingSnapshot:
    order: dict[str, Any]
    location: LiveLocation | None

    @property
    def status(self) -> str:
        return self.order["status"]


def _parse_track_response(response: httpx.Response) -> LiveLocation | None:
    # 404: order gone, 400: no rider assigned yet. Neither is a failure.
    if response.status_code in NO_LOCATION_STATUSES:
        return None
    response.raise_for_status()
    body = response.json()
    if not isinstance(body, dict):
        raise ValueError(f"Unexpected tracking response: {body!r}")
    return LiveLocation.from_payload(body.get("location"))


class TrackingClient:
    """Synchronous client used by server-rendered views."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def fetch_order(self, order_id: str) -> dict[str, Any] | None:
        response = self._client.get(f"/orders/{order_id}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()["order"]

    def fetch_restaurant(self, restaurant_id: str) -> dict[str, Any] | None:
        response = self._client.get(f"/restaurants/{restaurant_id}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()["restaurant"]

    def fetch_location(self, order_id: str) -> LiveLocation | None:
        return _parse_track_response(self._client.get(f"/delivery/track/{order_id}"))

    def snapshot(self, order_id: str) -> TrackingSnapshot | None:
        """Fetch the current order status together with the rider's latest fix."""
        order = self.fetch_order(order_id)
        if order is None:
            return None
        return TrackingSnapshot(order=order, location=self.fetch_location(order_id))


async def fetch_location_async(client: httpx.AsyncClient, order_id: str) -> LiveLocation | None:
    return _parse_track_response(await client.get(f"/delivery/track/{order_id}"))


def backoff_delay(interval: float, failures: int, max_backoff: float) -> float:
    """Return the wait before the next tick after `failures` consecutive errors."""
    if failures <= 0:
        return interval
    return min(interval * (2 ** failures), max_backoff)


class TrackingPoller:
    """Poll one order's live location until stopped.

    A tick is skipped while the previous request is still outstanding, and
    consecutive transport or server errors stretch the interval exponentially
    up to ``max_backoff``. Once ``stop()`` has been called no further update
    reaches ``on_update``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        order_id: str,
        on_update: Callable[[LiveLocation | None], Awaitable[None] | None],
        interval: float | None = None,
        max_backoff: float | None = None,
    ) -> None:
        self.client = client
        self.order_id = order_id
        self.on_update = on_update
        self.interval: float = interval if interval is not None else settings.tracking_poll_interval_seconds
        self.max_backoff: float = max_backoff if max_backoff is not None else settings.tracking_max_backoff_seconds
        self.failures: int = 0
        self.skipped_ticks: int = 0
        self._task: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[None] | None = None
        self._stopped: bool = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task[None]:
        if self.running:
            raise RuntimeError("Poller already running")
        self._stopped = False
        self._task = asyncio.create_task(self._run(), name=f"tracking-{self.order_id}")
        return self._task

    async def stop(self) -> None:
        self._stopped = True
        tasks = [task for task in (self._inflight, self._task) if task is not None and not task.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._inflight = None

    async def __aenter__(self) -> TrackingPoller:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    def next_delay(self) -> float:
        return backoff_delay(self.interval, self.failures, self.max_backoff)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        while not self._stopped:
            tick_started = loop.time()
            if self._inflight is None or self._inflight.done():
                self._inflight = asyncio.create_task(self._poll_once())
            else:
                self.skipped_ticks += 1
                logger.debug("Skipping tick for order %s; previous request still pending", self.order_id)
            # The delay depends on this tick's outcome, so let the request settle first.
            await asyncio.wait({self._inflight}, timeout=self.interval)
            remaining = self.next_delay() - (loop.time() - tick_started)
            if remaining > 0:
                await asyncio.sleep(remaining)

    async def _poll_once(self) -> None:
        try:
            location = await fetch_location_async(self.client, self.order_id)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            self.failures += 1
            logger.warning(
                "Tracking poll for order %s failed (%d in a row): %s",
                self.order_id,
                self.failures,
                exc,
            )
            return

        self.failures = 0
        if self._stopped:
            return
        try:
            result = self.on_update(location)
            if asyncio.iscoroutine(result):
                await result
        except Exception:
            logger.exception("Tracking update handler failed for order %s", self.order_id)


def build_map_points(
    order: dict[str, Any],
    location: LiveLocation | None,
    restaurant: dict[str, Any] | None,
) -> dict[str, Any]:
    """Return markers for rider, restaurant and customer plus the rider route line.

    Customer coordinates are read from ``deliveryAddress.lat``/``lng`` when the
    address carries them.
    """
    markers: list[dict[str, Any]] = []
    if restaurant and restaurant.get("location"):
        markers.append(
            {
                "kind": "restaurant",
                "label": restaurant.get("name", "Restaurant"),
                "lat": restaurant["location"]["lat"],
                "lng": restaurant["location"]["lng"],
            }
        )

    address = order.get("deliveryAddress") or {}
    customer_point: tuple[float, float] | None = None
    if isinstance(address.get("lat"), (int, float)) and isinstance(address.get("lng"), (int, float)):
        customer_point = (float(address["lat"]), float(address["lng"]))
        markers.append({"kind": "customer", "label": "Delivery address", "lat": customer_point[0], "lng": customer_point[1]})

    route: list[list[float]] = []
    if location is not None:
        markers.append({"kind": "rider", "label": "Rider", "lat": location.lat, "lng": location.lng})
        if customer_point is not None:
            # pydeck paths are [lng, lat] pairs
            route = [[location.lng, location.lat], [customer_point[1], customer_point[0]]]

    return {"markers": markers, "route": route}
