"""Text clean-up for station names and disruption messages."""

from __future__ import annotations

import re

ELLIPSIS = "..."
STATION_SUFFIX = re.compile(r"(Rail Station|Underground Station)")


def remove_station_suffix(value: str | None) -> str | None:
    """Strip "Rail Station" / "Underground Station" from a destination name."""
    if not value:
        return value
    return STATION_SUFFIX.sub("", value).strip()


def capitalize_first(value: str) -> str:
    if not value:
        return value
    return value[0].upper() + value[1:]


def truncate_at_sentence(text: str | None, max_length: int = 200) -> str | None:
    """Shorten long text, preferring to cut at the end of a sentence.

    The search for a full stop starts at ``min(100, max_length / 2)`` so the
    result is never cut too early. A full stop sitting exactly at
    ``max_length`` still counts.
    """
    if not text or len(text) <= max_length:
        return text

    search_start = max(int(min(100, max_length / 2)), 0)
    period_index = text.find(".", search_start)
    if period_index != -1 and period_index <= max_length:
        return text[: period_index + 1] + ELLIPSIS

    return text[:max_length] + ELLIPSIS


__all__ = ["ELLIPSIS", "capitalize_first", "remove_station_suffix", "truncate_at_sentence"]
