"""Data structures handed to the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field

from tubetimes.data.models import ArrivalPrediction, DisruptionMessage


@dataclass(frozen=True)
class DisplayData:
    """Display-ready view of the widget state."""

    label: str
    journeys: list[ArrivalPrediction]
    loaded: bool
    active_message: int
    tube_status: str
    tube_status_description: str | None
    status_messages: list[DisruptionMessage] = field(default_factory=list)


@dataclass(frozen=True)
class JourneyRow:
    """Single formatted arrival line."""

    destination: str
    platform: str
    due: str
    clock_time: str


@dataclass(frozen=True)
class FrameData:
    """Fully formatted frame contents."""

    title: str
    rows: list[JourneyRow]
    status_text: str
    tube_status: str
    loading: bool = False


__all__ = ["DisplayData", "FrameData", "JourneyRow"]
