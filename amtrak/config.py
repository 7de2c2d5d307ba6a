import logging
import os
from dataclasses import dataclass


LOGGER = logging.getLogger("amtrak-config")

DEFAULT_BASE_URL = "https://api-v3.amtraker.com/v3"
DEFAULT_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class ClientSettings:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def load_settings() -> ClientSettings:
    """Read client settings from ``AMTRAKER_BASE_URL`` and ``AMTRAKER_TIMEOUT``."""
    base_url = os.getenv("AMTRAKER_BASE_URL") or DEFAULT_BASE_URL

    raw_timeout = os.getenv("AMTRAKER_TIMEOUT")
    timeout_seconds = DEFAULT_TIMEOUT_SECONDS
    if raw_timeout:
        try:
            timeout_seconds = float(raw_timeout)
        except ValueError:
            LOGGER.warning(
                "Ignoring invalid AMTRAKER_TIMEOUT %r; using %s seconds.", raw_timeout, DEFAULT_TIMEOUT_SECONDS)

    return ClientSettings(base_url=base_url, timeout_seconds=timeout_seconds)
