"""Arrival and line-status records parsed from TfL API payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tubetimes.logic.timefmt import parse_timestamp

GOOD = "good"
WARNING = "warning"
SEVERE = "severe"
TUBE_STATUSES = (GOOD, WARNING, SEVERE)


@dataclass(frozen=True)
class ArrivalPrediction:
    """One predicted vehicle arrival at the configured stop."""

    id: str
    line_id: str
    line_name: str
    platform_name: str
    direction: str
    destination_name: str
    expected_arrival: datetime | None
    time_to_live: datetime | None
    time_to_station: int = 0
    vehicle_id: str = ""
    naptan_id: str = ""
    station_name: str = ""
    towards: str = ""
    current_location: str = ""


@dataclass(frozen=True)
class DisruptionMessage:
    """One line-status message."""

    text: str
    status_severity: int
    status_severity_description: str
    category: str | None = None
    category_description: str | None = None


@dataclass(frozen=True)
class LineStatusSnapshot:
    """Line-wide status and the disruption messages behind it."""

    tube_status: str = GOOD
    tube_status_description: str | None = None
    messages: tuple[DisruptionMessage, ...] = field(default_factory=tuple)


def _text(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value)


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_arrival(raw: Any) -> ArrivalPrediction | None:
    """Build an ArrivalPrediction from one TfL Arrivals entry; None for non-mappings."""
    if not isinstance(raw, dict):
        return None
    return ArrivalPrediction(
        id=_text(raw, "id"),
        line_id=_text(raw, "lineId"),
        line_name=_text(raw, "lineName"),
        platform_name=_text(raw, "platformName"),
        direction=_text(raw, "direction"),
        destination_name=_text(raw, "destinationName"),
        expected_arrival=parse_timestamp(raw.get("expectedArrival")),
        time_to_live=parse_timestamp(raw.get("timeToLive")),
        time_to_station=_int(raw.get("timeToStation")),
        vehicle_id=_text(raw, "vehicleId"),
        naptan_id=_text(raw, "naptanId"),
        station_name=_text(raw, "stationName"),
        towards=_text(raw, "towards"),
        current_location=_text(raw, "currentLocation"),
    )


def parse_arrivals(payload: Any) -> list[ArrivalPrediction] | None:
    """Parse a TfL Arrivals response body; anything but a list yields None."""
    if not isinstance(payload, list):
        return None
    arrivals = []
    for item in payload:
        arrival = parse_arrival(item)
        if arrival is not None:
            arrivals.append(arrival)
    return arrivals


__all__ = [
    "GOOD",
    "WARNING",
    "SEVERE",
    "TUBE_STATUSES",
    "ArrivalPrediction",
    "DisruptionMessage",
    "LineStatusSnapshot",
    "parse_arrival",
    "parse_arrivals",
]
