"""Tests for MCP tool functions — input validation, success and error paths."""
from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from sncf_mcp.application.departure_service import DepartureService
from sncf_mcp.domain.entities import Departure, Station
from sncf_mcp.domain.exceptions import ApiError, NetworkError, ValidationError
from sncf_mcp.domain.value_objects import DepartureStatus
from sncf_mcp.mcp.tools import (
    _validate_limit,
    _validate_station_id,
    register_tools,
)


def make_departure(departure_id: str = "d1") -> Departure:
    return Departure(
        id=departure_id,
        number="TGV 8421",
        destination="Paris Nord",
        scheduled_departure="14:07",
        platform="4",
        status=DepartureStatus.DELAYED,
        delay=7,
        delay_reason="Incident technique",
    )


def build_tool_functions(departure_svc: MagicMock) -> dict:  # type: ignore[type-arg]
    """Register tools on a mock MCP and extract the tool functions."""
    registered: dict = {}  # type: ignore[type-arg]

    class MockMcp:
        def tool(self, meta: dict | None = None):  # type: ignore[type-arg]
            def decorator(fn):  # type: ignore[type-arg]
                registered[fn.__name__] = fn
                return fn
            return decorator

    mock_mcp = MockMcp()
    register_tools(mock_mcp, departure_svc, default_station_id="87286005", default_limit=20)  # type: ignore[arg-type]
    return registered


def parse(result: list) -> dict:  # type: ignore[type-arg]
    return json.loads(result[0].resource.text)  # type: ignore[no-any-return]


# ---------------------------------------------------------------------------
# validation helpers
# ---------------------------------------------------------------------------

def test_validate_station_id_default() -> None:
    assert _validate_station_id(None, "87286005") == "87286005"


def test_validate_station_id_strips() -> None:
    assert _validate_station_id("  87391003 ", "87286005") == "87391003"


def test_validate_station_id_blank_raises() -> None:
    with pytest.raises(ValidationError, match="station_id"):
        _validate_station_id("   ", "87286005")


def test_validate_limit_default() -> None:
    assert _validate_limit(None, 20) == 20


@pytest.mark.parametrize("value", [0, 51, -3])
def test_validate_limit_out_of_range(value: int) -> None:
    with pytest.raises(ValidationError, match="between 1 and 50"):
        _validate_limit(value, 20)


# ---------------------------------------------------------------------------
# get_departures tool
# ---------------------------------------------------------------------------

async def test_get_departures_returns_resource() -> None:
    departure_svc = MagicMock(spec=DepartureService)
    departure_svc.fetch_departures = AsyncMock(return_value=[make_departure()])

    tools = build_tool_functions(departure_svc)
    parsed = parse(await tools["get_departures"]())

    assert parsed["stationId"] == "87286005"
    assert parsed["count"] == 1
    assert parsed["departures"][0]["scheduledDeparture"] == "14:07"
    assert parsed["departures"][0]["delayReason"] == "Incident technique"
    departure_svc.fetch_departures.assert_awaited_once_with(station_id="87286005", limit=20)


async def test_get_departures_passes_arguments() -> None:
    departure_svc = MagicMock(spec=DepartureService)
    departure_svc.fetch_departures = AsyncMock(return_value=[])

    tools = build_tool_functions(departure_svc)
    await tools["get_departures"]("87391003", 5)

    departure_svc.fetch_departures.assert_awaited_once_with(station_id="87391003", limit=5)


async def test_get_departures_invalid_limit_returns_error() -> None:
    departure_svc = MagicMock(spec=DepartureService)
    tools = build_tool_functions(departure_svc)

    parsed = parse(await tools["get_departures"](None, 500))
    assert "max_results" in parsed["error"]


async def test_get_departures_forbidden_key_message() -> None:
    departure_svc = MagicMock(spec=DepartureService)
    departure_svc.fetch_departures = AsyncMock(side_effect=ApiError(403, "Forbidden"))

    tools = build_tool_functions(departure_svc)
    parsed = parse(await tools["get_departures"]())
    assert "API key" in parsed["error"]


async def test_api_error_5xx_returns_friendly_message() -> None:
    departure_svc = MagicMock(spec=DepartureService)
    departure_svc.fetch_departures = AsyncMock(side_effect=ApiError(502))

    tools = build_tool_functions(departure_svc)
    parsed = parse(await tools["get_departures"]())
    assert "502" in parsed["error"]


async def test_network_error_returns_message() -> None:
    departure_svc = MagicMock(spec=DepartureService)
    departure_svc.fetch_departures = AsyncMock(
        side_effect=NetworkError("timed out")
    )

    tools = build_tool_functions(departure_svc)
    parsed = parse(await tools["get_departures"]())
    assert "reach" in parsed["error"]


async def test_tool_service_exception_returns_resource_not_exception() -> None:
    """Exception from service must NOT propagate — must return error resource."""
    departure_svc = MagicMock(spec=DepartureService)
    departure_svc.fetch_departures = AsyncMock(side_effect=RuntimeError("Unexpected internal error"))

    tools = build_tool_functions(departure_svc)
    result = await tools["get_departures"]()

    assert isinstance(result, list)
    assert parse(result)["error"] == "An unexpected error occurred."


# ---------------------------------------------------------------------------
# search_stations tool
# ---------------------------------------------------------------------------

async def test_search_stations_returns_resource() -> None:
    departure_svc = MagicMock(spec=DepartureService)
    departure_svc.search_stations = AsyncMock(
        return_value=[Station(id="stop_area:SNCF:87286005", name="Lille Flandres", type="stop_area")]
    )

    tools = build_tool_functions(departure_svc)
    parsed = parse(await tools["search_stations"](" Lille "))

    assert parsed["count"] == 1
    assert parsed["stations"][0]["name"] == "Lille Flandres"
    departure_svc.search_stations.assert_awaited_once_with("Lille")


async def test_search_stations_empty_query_returns_error() -> None:
    departure_svc = MagicMock(spec=DepartureService)
    tools = build_tool_functions(departure_svc)

    parsed = parse(await tools["search_stations"]("  "))
    assert "query" in parsed["error"]
