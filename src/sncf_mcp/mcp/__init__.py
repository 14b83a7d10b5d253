from __future__ import annotations

import httpx
from mcp.server.fastmcp import FastMCP

from sncf_mcp.application.departure_service import DepartureService
from sncf_mcp.config import Settings, require_api_key
from sncf_mcp.infrastructure.sncf_client import SncfClient
from sncf_mcp.mcp.tools import register_tools


def create_mcp_app(settings: Settings) -> FastMCP:
    """Create and configure the FastMCP application with all services wired.

    Raises ConfigurationError when no API key is configured.
    """
    api_key = require_api_key(settings)
    http_client = httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True)
    sncf_client = SncfClient(api_key=api_key, http_client=http_client)

    departure_svc = DepartureService(sncf_client, lookback_minutes=settings.lookback_minutes)

    mcp = FastMCP("SNCF Departures MCP", stateless_http=True)
    register_tools(
        mcp,
        departure_svc,
        default_station_id=settings.station_id,
        default_limit=settings.departure_limit,
    )
    return mcp
