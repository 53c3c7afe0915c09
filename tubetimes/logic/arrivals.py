"""Selection of the arrivals worth showing."""

from __future__ import annotations

from datetime import datetime

from tubetimes.data.models import ArrivalPrediction
from tubetimes.logic.timefmt import parse_timestamp, utc_now


def _is_current(arrival: ArrivalPrediction, now: datetime) -> bool:
    if arrival.expected_arrival is None or arrival.time_to_live is None:
        return False
    return arrival.expected_arrival >= now and arrival.time_to_live >= now


def select_display_arrivals(
    arrivals: list[ArrivalPrediction] | None,
    limit: int,
    now: datetime | None = None,
) -> list[ArrivalPrediction]:
    """Drop past or expired predictions, order by expected arrival, keep ``limit``."""
    if not isinstance(arrivals, list):
        return []

    current = parse_timestamp(now) if now is not None else utc_now()
    upcoming = [arrival for arrival in arrivals if _is_current(arrival, current)]
    upcoming.sort(key=lambda arrival: arrival.expected_arrival)
    return upcoming[:limit]


__all__ = ["select_display_arrivals"]
