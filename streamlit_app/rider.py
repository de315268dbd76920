"""Delivery rider page: accept orders and share location."""

import httpx
import streamlit as st

from streamlit_app.common import get_api_client

st.set_page_config(page_title="Rider", layout="centered")
st.title("Rider / Deliveries")

rider_id = st.text_input("Rider ID")
if not rider_id:
    st.stop()

with get_api_client() as http:
    available = http.get("/delivery/available-orders").json()["orders"]
    mine = http.get("/orders/delivery", params={"deliveryPartnerId": rider_id}).json()["orders"]

st.subheader("Available orders")
if not available:
    st.caption("No orders waiting for a rider.")
for order in available:
    cols = st.columns([3, 1])
    cols[0].write(f"#{order['id'][:8]} · {order['totalAmount']:.2f} · {order['status']}")
    if cols[1].button("Accept", key=f"accept_{order['id']}"):
        with get_api_client() as http:
            response = http.post(f"/delivery/orders/{order['id']}/accept", json={"riderId": rider_id})
        if response.status_code == 200:
            st.success("Order accepted.")
        else:
            st.error(response.json().get("detail", "Could not accept order."))

st.subheader("Share location")
active_ids = [order["id"] for order in mine if order["status"] not in {"delivered", "cancelled"}]
order_id = st.selectbox("Order", active_ids) if active_ids else None
lat = st.number_input("Latitude", min_value=-90.0, max_value=90.0, value=0.0, format="%.6f")
lng = st.number_input("Longitude", min_value=-180.0, max_value=180.0, value=0.0, format="%.6f")
if st.button("Send location"):
    try:
        with get_api_client() as http:
            response = http.put(
                "/delivery/location",
                json={"riderId": rider_id, "orderId": order_id, "lat": lat, "lng": lng},
            )
            response.raise_for_status()
    except httpx.HTTPError as exc:
        st.error(f"Location not sent: {exc}")
    else:
        st.success("Location updated.")
