"""Shared pytest fixtures for the SNCF MCP Server test suite."""
from __future__ import annotations

import pytest


@pytest.fixture
def sample_departure_raw() -> dict:  # type: ignore[type-arg]
    """Sample raw departure matching the SNCF /departures response schema (depth=3)."""
    return {
        "id": "dep-8421",
        "display_informations": {
            "commercial_mode": "TGV INOUI",
            "trip_short_name": "8421",
            "direction": "Paris Nord (Paris)",
            "headsign": "8421",
            "network": "SNCF",
        },
        "stop_date_time": {
            "departure_date_time": "20240115T140700",
            "base_departure_date_time": "20240115T140000",
            "data_freshness": "realtime",
            "platform": "",
        },
        "stop_point": {
            "name": "Lille Flandres",
            "platform": "",
            "platform_code": "4",
        },
    }


@pytest.fixture
def sample_disruption_raw() -> dict:  # type: ignore[type-arg]
    """Sample raw disruption matching the top-level disruptions list."""
    return {
        "id": "disruption-1",
        "cause": "Panne d'un aiguillage",
        "message": {"text": "Retard dû à une panne d'aiguillage"},
        "severity": {"name": "trip delayed"},
    }


@pytest.fixture
def sample_place_raw() -> dict:  # type: ignore[type-arg]
    """Sample raw place matching the /places response schema."""
    return {
        "id": "stop_area:SNCF:87286005",
        "name": "Lille Flandres (Lille)",
        "embedded_type": "stop_area",
        "quality": 90,
    }

