"""Shared API helpers for the Streamlit tracking and rider apps."""

from datetime import datetime

import httpx

from app.core.config import settings


def get_api_client() -> httpx.Client:
    return httpx.Client(
        base_url=settings.tracking_api_base_url,
        timeout=settings.tracking_request_timeout_seconds,
    )


def now_string() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")
