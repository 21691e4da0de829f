import json
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from edge_cache import EdgeCache
from errors import ConfigError, NotFoundError, StatusProxyError, UnexpectedError, ValidationError
from settings import Settings
from upstream import fetch_monitor

log = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "https://cache-internal/status/"
UNKNOWN_LOCATION = "unknown location"


class MonitorStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    uptime: float | None = None
    average_response_time: float
    location: str


def cache_key(monitor_id: str) -> str:
    return f"{CACHE_KEY_PREFIX}{monitor_id}"


def average_response_time(locations: Any) -> float:
    """Mean of response_time over every location entry, 0 when there are none."""
    values = list(locations.values() if isinstance(locations, dict) else locations)
    if not values:
        return 0
    # a location without a reading counts as 0
    total = sum(float((loc or {}).get("response_time") or 0) for loc in values)
    return total / len(values)


def format_location(resolve_address_info: dict | None) -> str:
    info = resolve_address_info or {}
    city, country = info.get("City"), info.get("Country")
    return f"{city}, {country}" if city and country else UNKNOWN_LOCATION


def build_monitor_status(payload: Any) -> MonitorStatus:
    """
    Reduce the uptime-monitors payload to the three fields the dashboard shows.
    Raises NotFoundError when there is no monitor record or it has no locations.
    """
    monitors = payload.get("monitors") if isinstance(payload, dict) else None
    monitor = monitors[0] if isinstance(monitors, list) and monitors else None
    if not isinstance(monitor, dict) or monitor.get("locations") is None:
        raise NotFoundError()

    return MonitorStatus(
        uptime=monitor.get("uptime"),
        average_response_time=average_response_time(monitor["locations"]),
        location=format_location(monitor.get("resolve_address_info")),
    )


async def get_status(
    monitor_id: str | None,
    settings: Settings,
    cache: EdgeCache,
    client: httpx.AsyncClient,
) -> tuple[str, str]:
    """
    Cache-aside lookup for one monitor. Returns (json_body, cache_state) where
    cache_state is 'HIT' or 'MISS'. Failures raise a StatusProxyError subclass.
    """
    if not monitor_id:
        raise ValidationError(
            'The "monitor" parameter is required. Example: /api/get-status?monitor=MONITOR_ID'
        )

    key = cache_key(monitor_id)
    cached = cache.get(key)
    if cached is not None:
        log.debug("cache_hit monitor=%s", monitor_id)
        return cached, "HIT"

    try:
        if settings.api_key is None:
            raise ConfigError(
                "HT_API_KEY is not configured. Set the HT_API_KEY environment variable "
                "(or add it to .env) and restart the server."
            )

        payload = await fetch_monitor(client, settings, monitor_id)
        body = json.dumps(build_monitor_status(payload).model_dump())
        cache.put(key, body, ttl=settings.cache_ttl_seconds)
    except StatusProxyError:
        raise
    except Exception as e:
        log.exception("status_fetch_failed monitor=%s", monitor_id)
        raise UnexpectedError() from e

    log.debug("cache_miss monitor=%s ttl=%d", monitor_id, settings.cache_ttl_seconds)
    return body, "MISS"
