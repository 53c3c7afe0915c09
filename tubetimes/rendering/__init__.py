"""Rendering utilities for the arrivals board."""

from tubetimes.rendering.composer import build_frame_data, compose_frame
from tubetimes.rendering.emulator import FrameRenderer, save_frame
from tubetimes.rendering.frame_data import DisplayData, FrameData, JourneyRow

__all__ = [
    "DisplayData",
    "FrameData",
    "FrameRenderer",
    "JourneyRow",
    "build_frame_data",
    "compose_frame",
    "save_frame",
]
