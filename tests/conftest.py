from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tubetimes.data.models import ArrivalPrediction, DisruptionMessage

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_arrival(
    arrival_id: str,
    minutes: float,
    ttl_minutes: float | None = None,
    destination: str = "Ealing Broadway Underground Station",
    now: datetime = NOW,
) -> ArrivalPrediction:
    expected = now + timedelta(minutes=minutes)
    ttl = now + timedelta(minutes=ttl_minutes if ttl_minutes is not None else minutes + 1)
    return ArrivalPrediction(
        id=arrival_id,
        line_id="central",
        line_name="Central",
        platform_name="westbound - Platform 1",
        direction="outbound",
        destination_name=destination,
        expected_arrival=expected,
        time_to_live=ttl,
        time_to_station=int(minutes * 60),
    )


def make_message(text: str, severity: int = 9) -> DisruptionMessage:
    return DisruptionMessage(
        text=text,
        status_severity=severity,
        status_severity_description="Minor Delays",
    )


@pytest.fixture()
def now() -> datetime:
    return NOW
