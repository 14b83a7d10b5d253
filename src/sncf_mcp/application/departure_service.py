from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from sncf_mcp.domain.entities import Departure, Station
from sncf_mcp.domain.exceptions import ValidationError
from sncf_mcp.domain.normalizer import normalize
from sncf_mcp.domain.raw import parse_disruptions
from sncf_mcp.infrastructure.sncf_client import SncfClient
from sncf_mcp.infrastructure.time_utils import (
    encode_timestamp,
    minutes_since_midnight,
    now_paris,
)

logger = logging.getLogger(__name__)

DEFAULT_STATION_ID = "87286005"  # Lille Flandres
DEFAULT_LIMIT = 20
MAX_COUNT = 50  # Largest count the departures endpoint is asked for
LOOKBACK_MINUTES = 30
OVER_FETCH = 2


def departure_sort_key(departure: Departure) -> tuple[int, int]:
    """Sort key: minutes since midnight, unparseable times last.

    There is no day rollover, so "00:10" sorts before "23:50" even when the
    former is tomorrow's train.
    """
    minutes = minutes_since_midnight(departure.scheduled_departure)
    if minutes is None:
        return (1, 0)
    return (0, minutes)


class DepartureService:
    """Orchestrates departure fetching, normalization, sorting and station lookup."""

    def __init__(
        self,
        client: SncfClient,
        lookback_minutes: int = LOOKBACK_MINUTES,
        over_fetch: int = OVER_FETCH,
        max_count: int = MAX_COUNT,
    ) -> None:
        self._client = client
        self._lookback = timedelta(minutes=lookback_minutes)
        self._over_fetch = over_fetch
        self._max_count = max_count

    async def fetch_departures(
        self,
        station_id: str = DEFAULT_STATION_ID,
        limit: int = DEFAULT_LIMIT,
    ) -> list[Departure]:
        """Fetch, normalize, sort and truncate departures for a stop area.

        Steps:
        1. Start the board lookback_minutes before now (Europe/Paris).
        2. Ask for limit * over_fetch records, capped at max_count.
        3. Normalize every element of "departures" against "disruptions".
        4. Sort by scheduled time as minutes since midnight.
        5. Truncate to limit.

        Raises ValidationError when limit is below 1, before any request.
        ApiError, NetworkError and MalformedResponseError propagate.
        """
        if limit < 1:
            raise ValidationError(f"limit must be at least 1, got {limit}")

        from_datetime = encode_timestamp(now_paris() - self._lookback)
        count = min(limit * self._over_fetch, self._max_count)

        data = await self._client.get_departures(
            stop_area_id=station_id,
            count=count,
            from_datetime=from_datetime,
        )

        departures = self._map_departures(data)
        departures.sort(key=departure_sort_key)
        return departures[:limit]

    async def search_stations(self, query: str) -> list[Station]:
        """Look up stop areas by name.

        A secondary feature, so any failure is logged and yields an empty list.
        """
        try:
            data = await self._client.search_places(query)
            places = data.get("places")
            if not isinstance(places, list):
                return []
            return [self._map_station(place) for place in places if isinstance(place, dict)]
        except Exception as exc:
            logger.warning("Station search for %r failed: %s", query, exc)
            return []

    def _map_departures(self, data: dict[str, Any]) -> list[Departure]:
        raw_departures = data.get("departures")
        if not isinstance(raw_departures, list):
            return []

        disruptions = parse_disruptions(data.get("disruptions"))
        if disruptions:
            logger.debug("%d disruptions in departures response", len(disruptions))

        return [
            normalize(raw, disruptions)
            for raw in raw_departures
            if isinstance(raw, dict)
        ]

    def _map_station(self, raw: dict[str, Any]) -> Station:
        """Map a raw place to a Station entity."""
        return Station(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            type=str(raw.get("embedded_type") or ""),
        )
