"""Timestamp parsing and human-readable arrival times."""

from __future__ import annotations

from datetime import datetime, timezone
import math
import re

_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse a TfL ISO-8601 timestamp into an aware UTC datetime, or None."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        # TfL sends up to seven fractional digits; fromisoformat wants at most six.
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def minutes_to_arrival(target: str | datetime, now: datetime | None = None) -> str:
    """Describe how far away ``target`` is: "Due", "1 min", "in N mins" or "H hr M min"."""
    arrival = parse_timestamp(target)
    if arrival is None:
        raise ValueError(f"Unparseable arrival time: {target!r}")
    current = parse_timestamp(now) if now is not None else utc_now()

    diff_seconds = (arrival - current).total_seconds()
    minutes = math.floor(diff_seconds / 60)

    if minutes <= 1:
        return "Due" if math.floor(diff_seconds) <= 30 else "1 min"
    if minutes < 60:
        return f"in {minutes} mins"
    hours, remainder = divmod(minutes, 60)
    return f"{hours} hr {remainder} min"


def format_clock(value: str | datetime) -> str:
    """Local wall-clock time as HH:MM; empty string when the value cannot be parsed."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    return parsed.astimezone().strftime("%H:%M")


__all__ = ["format_clock", "minutes_to_arrival", "parse_timestamp", "utc_now"]
