from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sncf_mcp.domain.value_objects import DepartureStatus


@dataclass(frozen=True)
class Station:
    """A stop area returned by the places lookup."""

    id: str  # Provider stop-area id, e.g. "stop_area:SNCF:87286005"
    name: str
    type: str  # Provider place kind (embedded_type), e.g. "stop_area"

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "type": self.type}


@dataclass(frozen=True)
class Departure:
    """A single display-ready departure board entry."""

    id: str
    number: str  # e.g. "TGV 8421"
    destination: str  # Parenthetical qualifier stripped
    scheduled_departure: str  # "HH:MM", empty when unparseable
    platform: str  # Empty when unknown
    status: DepartureStatus
    delay: int | None = None  # Minutes; set iff status is DELAYED
    delay_reason: str | None = None  # Only for DELAYED or CANCELLED

    def __post_init__(self) -> None:
        if (self.delay is not None) != (self.status is DepartureStatus.DELAYED):
            raise ValueError("delay must be set if and only if status is delayed")
        if self.delay is not None and self.delay < 0:
            raise ValueError("delay must be non-negative")
        if self.delay_reason is not None:
            if self.status is DepartureStatus.ON_TIME:
                raise ValueError("delay_reason is only allowed for delayed or cancelled departures")
            if not self.delay_reason:
                raise ValueError("delay_reason must be non-empty when set")

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase display form; unset optional fields are omitted."""
        result: dict[str, Any] = {
            "id": self.id,
            "number": self.number,
            "destination": self.destination,
            "scheduledDeparture": self.scheduled_departure,
            "platform": self.platform,
            "status": self.status.value,
        }
        if self.delay is not None:
            result["delay"] = self.delay
        if self.delay_reason is not None:
            result["delayReason"] = self.delay_reason
        return result
