from __future__ import annotations

import logging
from typing import Any

import httpx

from sncf_mcp.domain.exceptions import ApiError, MalformedResponseError, NetworkError
from sncf_mcp.infrastructure.headers import make_headers

logger = logging.getLogger(__name__)

BASE_URL = "https://api.sncf.com/v1"
COVERAGE = "sncf"
DEFAULT_TIMEOUT = 15.0  # seconds, used by the server's shared client

STOP_AREA_PREFIX = "stop_area:SNCF:"


def stop_area_uri(station_id: str) -> str:
    """Return the Navitia stop-area id for a bare UIC code.

    "87286005" -> "stop_area:SNCF:87286005"; ids that are already qualified
    (as returned by the places lookup) pass through unchanged.
    """
    if station_id.isdigit():
        return f"{STOP_AREA_PREFIX}{station_id}"
    return station_id


class SncfClient:
    """HTTP client for the SNCF (Navitia) API.

    Returns decoded JSON objects as-is; mapping to domain entities happens in
    the application layer. No caching and no retries: every call is exactly
    one GET.
    """

    def __init__(self, api_key: str, http_client: httpx.AsyncClient) -> None:
        self._api_key = api_key
        self._http = http_client  # Owned by the caller unless close() is used

    async def get_departures(
        self,
        stop_area_id: str,
        count: int,
        from_datetime: str,  # YYYYMMDDTHHMMSS, coverage-local time
    ) -> dict[str, Any]:
        """GET /coverage/sncf/stop_areas/{id}/departures.

        Always asks for realtime data with depth=3 so that display
        informations and stop points are embedded in each departure.
        """
        url = (
            f"{BASE_URL}/coverage/{COVERAGE}/stop_areas/"
            f"{stop_area_uri(stop_area_id)}/departures"
        )
        params: dict[str, Any] = {
            "count": count,
            "from_datetime": from_datetime,
            "data_freshness": "realtime",
            "depth": 3,
        }
        return await self._get(url, params)

    async def search_places(self, query: str) -> dict[str, Any]:
        """GET /coverage/sncf/places restricted to stop areas."""
        url = f"{BASE_URL}/coverage/{COVERAGE}/places"
        params: dict[str, Any] = {"q": query, "type[]": "stop_area"}
        return await self._get(url, params)

    async def _get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """Internal GET helper.

        1. Send the request with Basic-auth headers.
        2. Wrap transport failures in NetworkError.
        3. Raise ApiError on non-2xx status.
        4. Decode the body, raising MalformedResponseError if it is not a JSON object.
        """
        headers = make_headers(self._api_key)
        try:
            response = await self._http.get(url, params=params, headers=headers)
        except httpx.TransportError as exc:
            raise NetworkError(f"SNCF API request failed: {exc}") from exc

        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("SNCF API response was not valid JSON") from exc
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"SNCF API response was {type(data).__name__}, expected an object"
            )
        return data

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise ApiError for non-2xx responses, keeping the body for diagnosis."""
        if response.is_success:
            return
        body = response.text
        logger.debug("SNCF API returned %s for %s", response.status_code, response.url)
        if response.status_code == 404:
            raise ApiError(404, body, f"Resource not found (404): {response.url}")
        raise ApiError(response.status_code, body)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
