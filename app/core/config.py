"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Food Delivery Orders API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./food_delivery.db")
    api_prefix: str = getenv("API_PREFIX", "/api/v1")
    log_level: str = getenv("LOG_LEVEL", "INFO")
    seed_demo_data: bool = getenv("SEED_DEMO_DATA", "0") == "1"
    tracking_api_base_url: str = getenv("TRACKING_API_BASE_URL", "http://127.0.0.1:8000/api/v1")
    tracking_poll_interval_seconds: float = float(getenv("TRACKING_POLL_INTERVAL_SECONDS", "5"))
    tracking_max_backoff_seconds: float = float(getenv("TRACKING_MAX_BACKOFF_SECONDS", "60"))
    tracking_request_timeout_seconds: float = float(getenv("TRACKING_REQUEST_TIMEOUT_SECONDS", "10"))


settings: Settings = Settings()
