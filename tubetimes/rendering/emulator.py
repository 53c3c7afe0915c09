"""Frame output for the board emulator."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from tubetimes.rendering.composer import DISPLAY_HEIGHT, DISPLAY_WIDTH, build_frame_data, compose_frame
from tubetimes.rendering.frame_data import DisplayData

logger = logging.getLogger(__name__)


def save_frame(image: Image.Image, path: str = "emulator_output/frame.png") -> None:
    """Save a frame to disk as a PNG image."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format="PNG")


class FrameRenderer:
    """Turns display data into a frame and writes it out."""

    def __init__(
        self,
        path: str = "emulator_output/frame.png",
        width: int = DISPLAY_WIDTH,
        height: int = DISPLAY_HEIGHT,
    ) -> None:
        self._path = path
        self._width = width
        self._height = height

    def render(self, display: DisplayData) -> Image.Image:
        frame = build_frame_data(display)
        image = compose_frame(frame, width=self._width, height=self._height)
        save_frame(image, self._path)
        logger.info("Rendered %s arrivals (status %s) to %s", len(frame.rows), frame.tube_status, self._path)
        return image


__all__ = ["FrameRenderer", "save_frame"]
