# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Adapter settings loaded from environment variables."""

from functools import lru_cache

from dotenv import find_dotenv
from pydantic_settings import BaseSettings

# Find .env file by searching up from current working directory
_ENV_FILE = find_dotenv(usecwd=True)


class Settings(BaseSettings):
    """Adapter settings loaded from environment variables."""

    # Bidder registration
    bidder_code: str = "stroeerCore"

    # Vendor endpoint defaults (overridable per bid via params)
    default_host: str = "hb.adscale.de"
    default_path: str = "/dsh"
    default_port: str = ""

    # User sync
    user_sync_url: str = "https://js.adscale.de/pbsync.html"

    # Normalized bid constants
    bid_ttl: int = 300  # 5 minutes
    bid_currency: str = "EUR"
    net_revenue: bool = True

    # Payload defaults
    default_ssat: int = 2
    yield_test_storage_key: str = "sdgYieldtest"
    ab_global_key: str = "yieldlove_ab"

    # Tracking endpoint (tep) calls
    tracking_timeout: float = 5.0
    tracking_scheme: str = "https"

    # Upper bound on frame chain traversal
    max_frame_depth: int = 64

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    model_config = {
        "env_file": _ENV_FILE if _ENV_FILE else None,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
