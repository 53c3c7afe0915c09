"""Rotation through active disruption messages."""

from __future__ import annotations

from typing import Sequence

from tubetimes.data.models import DisruptionMessage


def advance_message_index(index: int, message_count: int) -> int:
    """Move to the next message, wrapping to 0 at the end (or when there are none)."""
    if index + 1 >= message_count:
        return 0
    return index + 1


def active_message(
    messages: Sequence[DisruptionMessage], index: int
) -> DisruptionMessage | None:
    if not messages or index < 0 or index >= len(messages):
        return None
    return messages[index]


__all__ = ["active_message", "advance_message_index"]
