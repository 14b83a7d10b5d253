from __future__ import annotations

import json
import logging

from mcp import types
from mcp.server.fastmcp import FastMCP

from sncf_mcp.application.departure_service import (
    DEFAULT_LIMIT,
    DEFAULT_STATION_ID,
    MAX_COUNT,
    DepartureService,
)
from sncf_mcp.domain.exceptions import (
    ApiError,
    MalformedResponseError,
    NetworkError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_RESULT_URI = "mcp://sncf-mcp/result"


def _as_resource(json_str: str) -> list[types.EmbeddedResource]:
    """Wrap a JSON string as an embedded resource so the LLM does not narrate it."""
    return [
        types.EmbeddedResource(
            type="resource",
            resource=types.TextResourceContents(
                uri=_RESULT_URI,  # type: ignore[arg-type]
                mimeType="application/json",
                text=json_str,
            ),
        )
    ]


def _error_json(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


def _handle_exception(exc: Exception) -> list[types.EmbeddedResource]:
    if isinstance(exc, ValidationError):
        return _as_resource(_error_json(str(exc)))
    if isinstance(exc, ApiError):
        if exc.status_code in (401, 403):
            return _as_resource(_error_json("Invalid or unauthorized SNCF API key."))
        if exc.status_code == 404:
            return _as_resource(_error_json("Resource not found."))
        if exc.status_code >= 500:
            return _as_resource(
                _error_json(f"Upstream API error ({exc.status_code}). Please try again later.")
            )
        return _as_resource(_error_json(f"Upstream API error ({exc.status_code})."))
    if isinstance(exc, NetworkError):
        return _as_resource(_error_json("Could not reach the SNCF API. Please try again."))
    if isinstance(exc, MalformedResponseError):
        return _as_resource(_error_json("The SNCF API returned an unreadable response."))
    logger.exception("Unexpected error in MCP tool: %s", exc)
    return _as_resource(_error_json("An unexpected error occurred."))


def _validate_station_id(station_id: str | None, default: str) -> str:
    if station_id is None:
        return default
    station_id = station_id.strip()
    if not station_id:
        raise ValidationError("station_id cannot be empty")
    return station_id


def _validate_limit(max_results: int | None, default: int) -> int:
    if max_results is None:
        return default
    if not 1 <= max_results <= MAX_COUNT:
        raise ValidationError(f"max_results must be between 1 and {MAX_COUNT}")
    return max_results


def register_tools(
    mcp: FastMCP,
    departure_svc: DepartureService,
    default_station_id: str = DEFAULT_STATION_ID,
    default_limit: int = DEFAULT_LIMIT,
) -> None:
    """Bind all @mcp.tool decorators. Called once during server setup."""

    @mcp.tool()
    async def get_departures(
        station_id: str | None = None,
        max_results: int | None = None,
    ) -> list[types.EmbeddedResource]:
        """Get upcoming train departures from an SNCF station, earliest first.

        Args:
            station_id: UIC code (e.g. "87286005") or stop-area id as returned by
                        search_stations. Defaults to the configured station.
            max_results: Maximum number of departures to return (1-50).
        """
        try:
            station = _validate_station_id(station_id, default_station_id)
            limit = _validate_limit(max_results, default_limit)

            departures = await departure_svc.fetch_departures(station_id=station, limit=limit)

            result = {
                "stationId": station,
                "departures": [d.to_dict() for d in departures],
                "count": len(departures),
            }
            return _as_resource(json.dumps(result, ensure_ascii=False))
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def search_stations(query: str) -> list[types.EmbeddedResource]:
        """Search SNCF stations (stop areas) by name.

        Args:
            query: Free-text station name, e.g. "Lille".
        """
        try:
            if not query.strip():
                raise ValidationError("query cannot be empty")
            stations = await departure_svc.search_stations(query.strip())
            result = {
                "stations": [s.to_dict() for s in stations],
                "count": len(stations),
            }
            return _as_resource(json.dumps(result, ensure_ascii=False))
        except Exception as exc:
            return _handle_exception(exc)
