from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _obj(data: Any, key: str) -> dict[str, Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _str(data: Any, key: str) -> str:
    value = data.get(key) if isinstance(data, dict) else None
    if isinstance(value, str):
        return value
    # Platform codes and trip numbers occasionally arrive as JSON numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _list(data: Any, key: str) -> list[Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, list) else []


@dataclass(frozen=True)
class RawDisplayInformations:
    commercial_mode: str = ""
    trip_short_name: str = ""
    direction: str = ""
    headsign: str = ""
    platform: str = ""

    @classmethod
    def from_json(cls, data: Any) -> RawDisplayInformations:
        return cls(
            commercial_mode=_str(data, "commercial_mode"),
            trip_short_name=_str(data, "trip_short_name"),
            direction=_str(data, "direction"),
            headsign=_str(data, "headsign"),
            platform=_str(data, "platform"),
        )


@dataclass(frozen=True)
class RawStopDateTime:
    departure_date_time: str = ""  # realtime value when data_freshness is "realtime"
    base_departure_date_time: str = ""  # originally scheduled value
    data_freshness: str = ""
    platform: str = ""

    @classmethod
    def from_json(cls, data: Any) -> RawStopDateTime:
        return cls(
            departure_date_time=_str(data, "departure_date_time"),
            base_departure_date_time=_str(data, "base_departure_date_time"),
            data_freshness=_str(data, "data_freshness"),
            platform=_str(data, "platform"),
        )


@dataclass(frozen=True)
class RawStopPoint:
    name: str = ""
    platform: str = ""
    platform_code: str = ""

    @classmethod
    def from_json(cls, data: Any) -> RawStopPoint:
        return cls(
            name=_str(data, "name"),
            platform=_str(data, "platform"),
            platform_code=_str(data, "platform_code"),
        )


@dataclass(frozen=True)
class RawMessage:
    text: str = ""

    @classmethod
    def from_json(cls, data: Any) -> RawMessage:
        return cls(text=_str(data, "text"))


@dataclass(frozen=True)
class RawDisruption:
    """A disruption record from the response's top-level disruptions list."""

    id: str = ""
    cause: str = ""
    message_text: str = ""  # message.text
    severity_name: str = ""  # severity.name

    @classmethod
    def from_json(cls, data: Any) -> RawDisruption:
        return cls(
            id=_str(data, "id"),
            cause=_str(data, "cause"),
            message_text=_str(_obj(data, "message"), "text"),
            severity_name=_str(_obj(data, "severity"), "name"),
        )


@dataclass(frozen=True)
class RawDeparture:
    """One element of the departures array.

    Every field the normalizer reads has an explicit fallback: strings default
    to "" and nested records to an empty instance. Absent, null or wrongly
    typed JSON values are treated as absent.
    """

    id: str = ""
    status: str = ""
    disruption_id: str = ""
    display_informations: RawDisplayInformations = field(default_factory=RawDisplayInformations)
    stop_date_time: RawStopDateTime = field(default_factory=RawStopDateTime)
    stop_point: RawStopPoint = field(default_factory=RawStopPoint)
    messages: list[RawMessage] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> RawDeparture:
        return cls(
            id=_str(data, "id"),
            status=_str(data, "status"),
            disruption_id=_str(data, "disruption_id"),
            display_informations=RawDisplayInformations.from_json(
                _obj(data, "display_informations")
            ),
            stop_date_time=RawStopDateTime.from_json(_obj(data, "stop_date_time")),
            stop_point=RawStopPoint.from_json(_obj(data, "stop_point")),
            messages=[RawMessage.from_json(m) for m in _list(data, "messages")],
        )


def parse_disruptions(data: Any) -> list[RawDisruption]:
    """Wrap a raw disruptions list; non-list input yields an empty list.

    Already-wrapped records are kept as-is, JSON objects are wrapped and
    anything else is skipped.
    """
    if not isinstance(data, list):
        return []
    disruptions: list[RawDisruption] = []
    for item in data:
        if isinstance(item, RawDisruption):
            disruptions.append(item)
        elif isinstance(item, dict):
            disruptions.append(RawDisruption.from_json(item))
    return disruptions
