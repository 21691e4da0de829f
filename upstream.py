import logging
from typing import Any

import httpx

from errors import UpstreamError
from settings import Settings

log = logging.getLogger(__name__)


async def fetch_monitor(client: httpx.AsyncClient, settings: Settings, monitor_id: str) -> Any:
    """
    GET {api_server}/uptime-monitors?id=<monitor_id> with the bearer key and
    return the decoded JSON body. Non-2xx answers raise UpstreamError.
    """
    url = f"{settings.api_server}/uptime-monitors"
    headers = {"Authorization": f"Bearer {settings.api_key.get_secret_value()}"}
    r = await client.get(url, params={"id": monitor_id}, headers=headers)
    if not r.is_success:
        log.warning("upstream_error status=%d monitor=%s", r.status_code, monitor_id)
        raise UpstreamError(r.status_code)
    return r.json()
