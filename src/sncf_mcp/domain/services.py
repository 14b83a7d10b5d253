from __future__ import annotations

import math
import re
from datetime import datetime

from sncf_mcp.domain.raw import RawDeparture, RawDisruption
from sncf_mcp.domain.value_objects import DataFreshness, DepartureStatus
from sncf_mcp.infrastructure.time_utils import decode_timestamp

# (substring searched in commercial_mode / headsign, label shown on the board)
LINE_MARKERS: tuple[tuple[str, str], ...] = (
    ("TGV", "TGV"),
    ("Intercités", "INTERCITÉS"),
    ("TER", "TER"),
)

DEFAULT_TRAIN_LABEL = "Train"
UNKNOWN_REASON = "Raison inconnue"

# Order matters: the canned reason is picked by index.
DELAY_REASONS: tuple[str, ...] = (
    "Régulation du trafic",
    "Intervention des forces de l'ordre",
    "Incident technique",
    "Panne de signalisation",
    "Conditions météorologiques",
    "Incident affectant la voie",
    "Train précédent en retard",
    "Affluence voyageurs",
    "Attente de correspondance",
    "Incident à bord",
    "Obstacle sur la voie",
    "Défaut d'alimentation électrique",
    "Mouvement social",
    "Présence d'animaux sur les voies",
)

CANCELLATION_REASONS: tuple[str, ...] = (
    "Mouvement social",
    "Incident technique sur le train",
    "Indisponibilité du matériel",
    "Travaux sur la voie",
    "Panne de signalisation",
    "Conditions météorologiques",
    "Accident de personne",
    "Défaut d'alimentation électrique",
    "Absence de personnel de bord",
    "Incident affectant la voie",
)

_PLATFORM_IN_NAME = re.compile(r"(?:voie|quai)\s+(\d+[A-Za-z]?)", re.IGNORECASE)


def resolve_train_number(commercial_mode: str, trip_short_name: str, headsign: str) -> str:
    """Build the human train label, e.g. "TGV 8421" or "TER 860123".

    The first marker found in the commercial mode or the headsign wins;
    without a marker the most specific non-empty field is used.
    """
    number = ""
    for marker, label in LINE_MARKERS:
        if marker in commercial_mode or marker in headsign:
            number = f"{label} {trip_short_name or headsign}"
            break
    else:
        number = trip_short_name or headsign or commercial_mode or DEFAULT_TRAIN_LABEL

    number = number.strip()
    if not number:
        number = headsign.strip() or DEFAULT_TRAIN_LABEL
    return number


def resolve_destination(direction: str) -> str:
    """Strip the parenthetical qualifier: "Paris (75)" -> "Paris"."""
    return direction.split(" (", 1)[0]


def resolve_platform(raw: RawDeparture) -> str:
    """Return the first non-empty platform from the known locations, or ""."""
    candidates = (
        raw.stop_date_time.platform,
        raw.stop_point.platform,
        raw.stop_point.platform_code,
        raw.display_informations.platform,
    )
    for candidate in candidates:
        if candidate:
            return candidate

    match = _PLATFORM_IN_NAME.search(raw.stop_point.name)
    if match:
        return match.group(1)
    return ""


def delay_minutes(base: datetime, realtime: datetime) -> int:
    """Return the delay in whole minutes, rounding halves up.

    May be zero or negative for trains running early; callers decide what
    that means for the status.
    """
    return math.floor((realtime - base).total_seconds() / 60 + 0.5)


def reason_index(departure_id: str, pool_size: int) -> int:
    """Deterministic pool index: sum of the id's code points modulo pool size.

    The same id always maps to the same entry, e.g. "abc" -> 294 % pool_size.
    """
    return sum(ord(char) for char in departure_id) % pool_size


def resolve_reason(
    raw: RawDeparture,
    disruptions: list[RawDisruption],
    pool: tuple[str, ...],
) -> str:
    """Pick a human-readable reason for a delay or a cancellation.

    1. The referenced disruption: cause, else message text, else severity name.
    2. The first attached message with text.
    3. A canned entry from pool chosen by reason_index on the raw id.
    """
    if raw.disruption_id:
        for disruption in disruptions:
            if disruption.id == raw.disruption_id:
                return (
                    disruption.cause
                    or disruption.message_text
                    or disruption.severity_name
                    or UNKNOWN_REASON
                )

    for message in raw.messages:
        if message.text:
            return message.text

    return pool[reason_index(raw.id, len(pool))]


def resolve_status(
    raw: RawDeparture,
    disruptions: list[RawDisruption],
) -> tuple[DepartureStatus, int | None, str | None]:
    """Return (status, delay, delay_reason) for a departure.

    Cancellation is checked first, then a realtime delay; anything else is
    on time. Early or zero-delay realtime trains stay on time with no reason.
    """
    stop_time = raw.stop_date_time

    if raw.status == "cancelled" or stop_time.data_freshness == DataFreshness.CANCELED.value:
        return (
            DepartureStatus.CANCELLED,
            None,
            resolve_reason(raw, disruptions, CANCELLATION_REASONS),
        )

    if stop_time.data_freshness == DataFreshness.REALTIME.value:
        base_raw = stop_time.base_departure_date_time
        realtime_raw = stop_time.departure_date_time
        if base_raw and realtime_raw and base_raw != realtime_raw:
            base = decode_timestamp(base_raw)
            realtime = decode_timestamp(realtime_raw)
            if base is not None and realtime is not None:
                delay = delay_minutes(base, realtime)
                if delay > 0:
                    return (
                        DepartureStatus.DELAYED,
                        delay,
                        resolve_reason(raw, disruptions, DELAY_REASONS),
                    )

    return DepartureStatus.ON_TIME, None, None
