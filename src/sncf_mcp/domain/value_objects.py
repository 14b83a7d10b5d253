from __future__ import annotations

from enum import Enum


class DepartureStatus(str, Enum):
    """Display status of a departure.

    Using (str, Enum) for Python 3.10 compatibility (StrEnum requires 3.11+).
    """

    ON_TIME = "on-time"
    DELAYED = "delayed"
    CANCELLED = "cancelled"


class DataFreshness(str, Enum):
    """Values of stop_date_time.data_freshness sent by the SNCF API.

    Note the American spelling of "canceled" here, unlike the departure-level
    status flag which uses "cancelled".
    """

    BASE_SCHEDULE = "base_schedule"
    REALTIME = "realtime"
    CANCELED = "canceled"
