"""
Highspot Search Client

One authenticated GET against the Highspot item search endpoint.
The parsed JSON body is returned as-is.
"""

import base64
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .base import RemoteError
from .config import DEFAULT_HIGHSPOT_TIMEOUT, HIGHSPOT_SEARCH_URL, HighspotCredentials

logger = logging.getLogger(__name__)

SEARCH_START = 0
SEARCH_LIMIT = 10
SEARCH_SORT = "relevancy"

# Characters left unescaped when encoding the query string component
_QUERY_SAFE = "-_.!~*'()"


def build_search_url(query: str) -> str:
    """Embed the encoded query in the fixed search URL template."""
    encoded = quote(query, safe=_QUERY_SAFE)
    return (
        f"{HIGHSPOT_SEARCH_URL}?query-string={encoded}"
        f"&start={SEARCH_START}&limit={SEARCH_LIMIT}&sortby={SEARCH_SORT}"
    )


def build_headers(credentials: HighspotCredentials) -> Dict[str, str]:
    token = base64.b64encode(
        f"{credentials.username}:{credentials.password}".encode("utf-8")
    ).decode("ascii")
    return {
        "accept": "application/json",
        "Authorization": f"Basic {token}",
    }


async def search_items(
    query: str,
    credentials: HighspotCredentials,
    *,
    timeout: float = DEFAULT_HIGHSPOT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """
    Search Highspot items.

    Args:
        query: Free-text search query
        credentials: Basic Auth credentials, resolved by the caller
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport (used in tests)

    Returns:
        The decoded JSON response body.

    Raises:
        RemoteError: the endpoint answered with a non-2xx status
    """
    url = build_search_url(query)
    headers = build_headers(credentials)

    logger.info(f"Searching Highspot: {query!r}")
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        resp = await client.get(url, headers=headers)

    if not resp.is_success:
        logger.error(f"Highspot API error: {resp.status_code} {resp.reason_phrase}")
        raise RemoteError(resp.status_code, resp.reason_phrase, service="Highspot")

    return resp.json()
