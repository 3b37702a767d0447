"""
JSON-over-HTTP helpers for the NHTSA services.

fetch_json() is the single GET capability the lookup services depend on.
It performs exactly one request (no retries) and maps every failure onto
the NetworkError / UpstreamStatusError / MalformedResponseError taxonomy.
"""

import logging
from typing import Any

import httpx

from vinlookup.config import settings
from vinlookup.errors import MalformedResponseError, NetworkError, UpstreamStatusError

logger = logging.getLogger(__name__)

_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "vinlookup/1.0",
}


async def _get(url: str, params: dict[str, str] | None, timeout: float | None) -> httpx.Response:
    try:
        async with httpx.AsyncClient(
            timeout=timeout or settings.request_timeout,
            follow_redirects=True,
            headers=_HEADERS,
        ) as client:
            return await client.get(url, params=params)
    except httpx.HTTPError as e:
        logger.error(f"Request to {url} failed: {e!r}")
        raise NetworkError(f"Network error contacting {httpx.URL(url).host}: {e}") from e


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(
            f"Response from {response.url.host} is not valid JSON",
            status_code=response.status_code,
        ) from e


async def fetch_json(url: str, params: dict[str, str] | None = None, timeout: float | None = None) -> Any:
    """
    GET a URL and return its decoded JSON body.

    Raises NetworkError when no response arrives, UpstreamStatusError for
    any non-2xx status and MalformedResponseError when the body is not JSON.
    """
    response = await _get(url, params, timeout)
    if not response.is_success:
        logger.warning(f"{response.url} returned HTTP {response.status_code}")
        raise UpstreamStatusError(response.status_code)
    return _parse_body(response)


async def fetch_json_with_status(
    url: str,
    params: dict[str, str] | None = None,
    timeout: float | None = None,
) -> tuple[Any, int]:
    """
    GET a URL and return (json_data, status_code) without judging the status.

    Used by the recall proxy, which relays the upstream status verbatim.
    """
    response = await _get(url, params, timeout)
    return _parse_body(response), response.status_code
