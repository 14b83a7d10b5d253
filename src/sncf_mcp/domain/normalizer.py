from __future__ import annotations

from typing import Any
from uuid import uuid4

from sncf_mcp.domain.entities import Departure
from sncf_mcp.domain.raw import RawDeparture, RawDisruption, parse_disruptions
from sncf_mcp.domain.services import (
    resolve_destination,
    resolve_platform,
    resolve_status,
    resolve_train_number,
)
from sncf_mcp.infrastructure.time_utils import (
    decode_timestamp,
    format_display_time,
    slice_display_time,
)


def synthesize_departure_id() -> str:
    """Return a throwaway id for departures the API sent without one."""
    return f"departure-{uuid4().hex[:7]}"


def scheduled_display_time(raw_timestamp: str) -> str:
    """Return "HH:MM" for a compact timestamp, falling back to fixed offsets."""
    decoded = decode_timestamp(raw_timestamp)
    if decoded is not None:
        return format_display_time(decoded)
    return slice_display_time(raw_timestamp)


def normalize(
    raw: RawDeparture | dict[str, Any],
    disruptions: list[RawDisruption | dict[str, Any]] | None,
) -> Departure:
    """Map one raw departure to a display-ready Departure.

    Never raises on incomplete data: each field has its own fallback chain,
    so a departure carrying no fields at all still yields an on-time "Train"
    entry with empty destination, time and platform.

    Disruptions may be wrapped records or the raw JSON objects from the
    response; anything else in the list is ignored.
    """
    if not isinstance(raw, RawDeparture):
        raw = RawDeparture.from_json(raw)
    wrapped_disruptions = parse_disruptions(disruptions)

    info = raw.display_informations
    status, delay, reason = resolve_status(raw, wrapped_disruptions)

    return Departure(
        id=raw.id or synthesize_departure_id(),
        number=resolve_train_number(info.commercial_mode, info.trip_short_name, info.headsign),
        destination=resolve_destination(info.direction),
        scheduled_departure=scheduled_display_time(raw.stop_date_time.departure_date_time),
        platform=resolve_platform(raw),
        status=status,
        delay=delay,
        delay_reason=reason,
    )
