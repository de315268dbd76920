"""Customer live tracking page."""

from datetime import timedelta

import httpx
import pydeck as pdk
import streamlit as st

from app.clients.tracking import TrackingClient, build_map_points
from app.core.config import settings
from streamlit_app.common import get_api_client, now_string

MARKER_COLORS: dict[str, list[int]] = {
    "rider": [220, 53, 69],
    "restaurant": [255, 159, 28],
    "customer": [13, 110, 253],
}

st.set_page_config(page_title="Track order", layout="centered")
st.title("Track your order")

order_id = st.text_input("Order ID", value=st.query_params.get("order", ""))
if not order_id:
    st.info("Enter an order ID to start tracking.")
    st.stop()

with get_api_client() as http:
    client = TrackingClient(http)
    try:
        order = client.fetch_order(order_id)
    except httpx.HTTPError as exc:
        st.error(f"Could not load order: {exc}")
        st.stop()
    if order is None:
        st.error("Order not found.")
        st.stop()
    restaurant = client.fetch_restaurant(order["restaurantId"])

if restaurant:
    st.caption(restaurant["name"])


@st.fragment(run_every=timedelta(seconds=settings.tracking_poll_interval_seconds))
def live_map() -> None:
    with get_api_client() as http:
        try:
            snapshot = TrackingClient(http).snapshot(order_id)
        except httpx.HTTPError as exc:
            st.warning(f"Tracking unavailable: {exc}")
            return

    if snapshot is None:
        st.error("Order not found.")
        return
    location = snapshot.location

    st.subheader(f"Status: {snapshot.status.replace('_', ' ')}")

    points = build_map_points(snapshot.order, location, restaurant)
    if location is None:
        st.info("Waiting for the rider to share their location.")
    if not points["markers"]:
        return

    for marker in points["markers"]:
        marker["color"] = MARKER_COLORS[marker["kind"]]
    layers = [
        pdk.Layer(
            "ScatterplotLayer",
            data=points["markers"],
            get_position="[lng, lat]",
            get_fill_color="color",
            get_radius=40,
            pickable=True,
        )
    ]
    if points["route"]:
        layers.append(
            pdk.Layer(
                "PathLayer",
                data=[{"path": points["route"]}],
                get_path="path",
                get_color=MARKER_COLORS["rider"],
                width_min_pixels=3,
            )
        )
    center = points["markers"][-1]
    st.pydeck_chart(
        pdk.Deck(
            layers=layers,
            initial_view_state=pdk.ViewState(latitude=center["lat"], longitude=center["lng"], zoom=13),
            tooltip={"text": "{label}"},
        )
    )
    st.caption(f"Last refreshed {now_string()}")


live_map()
