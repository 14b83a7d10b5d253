from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from sncf_mcp.application.departure_service import (
    DEFAULT_LIMIT,
    DEFAULT_STATION_ID,
    DepartureService,
)
from sncf_mcp.domain.entities import Departure, Station
from sncf_mcp.infrastructure.sncf_client import SncfClient


@asynccontextmanager
async def _service(
    api_key: str, http_client: httpx.AsyncClient | None
) -> AsyncIterator[DepartureService]:
    if http_client is not None:
        yield DepartureService(SncfClient(api_key, http_client))
        return
    async with httpx.AsyncClient() as owned:
        yield DepartureService(SncfClient(api_key, owned))


async def fetch_departures(
    api_key: str,
    station_id: str = DEFAULT_STATION_ID,
    limit: int = DEFAULT_LIMIT,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> list[Departure]:
    """Return upcoming departures for station_id, earliest first.

    Issues a single request. Without http_client a private httpx.AsyncClient
    is opened for the call and closed afterwards.

    Raises ValidationError for limit < 1, then ApiError, NetworkError or
    MalformedResponseError.
    """
    async with _service(api_key, http_client) as service:
        return await service.fetch_departures(station_id=station_id, limit=limit)


async def search_stations(
    api_key: str,
    query: str,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> list[Station]:
    """Return stop areas matching query; an empty list on any failure."""
    async with _service(api_key, http_client) as service:
        return await service.search_stations(query)
