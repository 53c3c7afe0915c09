"""Frame building and composition for the arrivals board."""

from __future__ import annotations

from datetime import datetime

from PIL import Image, ImageDraw, ImageFont

from tubetimes.data.models import GOOD, SEVERE, WARNING
from tubetimes.logic.status import active_message
from tubetimes.logic.text import capitalize_first, remove_station_suffix, truncate_at_sentence
from tubetimes.logic.timefmt import format_clock, minutes_to_arrival, utc_now
from tubetimes.rendering.frame_data import DisplayData, FrameData, JourneyRow

DISPLAY_WIDTH = 192
DISPLAY_HEIGHT = 128
MIN_WIDTH = 64
MIN_HEIGHT = 64

MARGIN = 2
HEADER_HEIGHT = 14
ROW_HEIGHT = 12
STATUS_STRIP_HEIGHT = 26
STATUS_BAR_WIDTH = 3
STATUS_MAX_LENGTH = 200
STATUS_MAX_LINES = 2

LOADING_TEXT = "Loading..."
NO_ARRIVALS_TEXT = "No arrivals"
GOOD_SERVICE_TEXT = "Good service"

COLOR_BACKGROUND = (0, 0, 0)
COLOR_TEXT = (255, 255, 255)
COLOR_HEADER = (255, 210, 0)
COLOR_CLOCK = (136, 136, 136)
COLOR_PLATFORM = (96, 96, 96)
COLOR_DIM_TEXT = (72, 72, 72)
SEPARATOR_COLOR = (42, 42, 42)

STATUS_COLORS = {
    GOOD: (0, 200, 0),
    WARNING: (220, 180, 0),
    SEVERE: (200, 0, 0),
}

FONT = ImageFont.load_default()


def _status_text(display: DisplayData) -> str:
    message = active_message(display.status_messages, display.active_message)
    if message is not None:
        return truncate_at_sentence(message.text, STATUS_MAX_LENGTH) or ""
    if display.tube_status_description:
        return capitalize_first(display.tube_status_description)
    return GOOD_SERVICE_TEXT


def build_frame_data(display: DisplayData, now: datetime | None = None) -> FrameData:
    """Format display data the way the board shows it."""
    current = now if now is not None else utc_now()
    rows = []
    for journey in display.journeys:
        if journey.expected_arrival is None:
            continue
        rows.append(
            JourneyRow(
                destination=remove_station_suffix(journey.destination_name) or "",
                platform=capitalize_first(journey.platform_name),
                due=minutes_to_arrival(journey.expected_arrival, now=current),
                clock_time=format_clock(journey.expected_arrival),
            )
        )
    return FrameData(
        title=display.label,
        rows=rows,
        status_text=_status_text(display),
        tube_status=display.tube_status,
        loading=not display.loaded,
    )


def _text_width(draw: ImageDraw.ImageDraw, text: str) -> int:
    bbox = draw.textbbox((0, 0), text, font=FONT)
    return bbox[2] - bbox[0]


def _clip(draw: ImageDraw.ImageDraw, text: str, max_width: int) -> str:
    while text and _text_width(draw, text) > max_width:
        text = text[:-1]
    return text


def _wrap(draw: ImageDraw.ImageDraw, text: str, max_width: int, max_lines: int) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if _text_width(draw, candidate) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        current = _clip(draw, word, max_width)
        if len(lines) == max_lines:
            break
    if current and len(lines) < max_lines:
        lines.append(current)
    return lines[:max_lines]


def _draw_row(draw: ImageDraw.ImageDraw, row: JourneyRow, top: int, width: int) -> None:
    due_width = _text_width(draw, row.due)
    due_x = width - MARGIN - due_width
    clock_width = _text_width(draw, row.clock_time)
    clock_x = due_x - MARGIN * 2 - clock_width

    destination = _clip(draw, row.destination, clock_x - MARGIN * 3)
    draw.text((MARGIN, top), destination, font=FONT, fill=COLOR_TEXT)
    if row.platform:
        platform_x = MARGIN + _text_width(draw, destination) + MARGIN * 2
        platform = _clip(draw, row.platform, clock_x - MARGIN * 2 - platform_x)
        if platform:
            draw.text((platform_x, top), platform, font=FONT, fill=COLOR_PLATFORM)
    draw.text((clock_x, top), row.clock_time, font=FONT, fill=COLOR_CLOCK)
    draw.text((due_x, top), row.due, font=FONT, fill=COLOR_HEADER)


def compose_frame(data: FrameData, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> Image.Image:
    """Compose an RGB frame: header, arrival rows, and a colour-coded status strip."""
    if width < MIN_WIDTH:
        raise ValueError(f"Width must be at least {MIN_WIDTH}, got {width}.")
    if height < MIN_HEIGHT:
        raise ValueError(f"Height must be at least {MIN_HEIGHT}, got {height}.")

    image = Image.new("RGB", (width, height), COLOR_BACKGROUND)
    draw = ImageDraw.Draw(image)

    draw.text((MARGIN, MARGIN), _clip(draw, data.title, width - MARGIN * 2), font=FONT, fill=COLOR_HEADER)
    draw.line((0, HEADER_HEIGHT - 1, width - 1, HEADER_HEIGHT - 1), fill=SEPARATOR_COLOR)

    strip_top = height - STATUS_STRIP_HEIGHT
    rows_area = strip_top - HEADER_HEIGHT

    if data.loading:
        draw.text((MARGIN, HEADER_HEIGHT + MARGIN), LOADING_TEXT, font=FONT, fill=COLOR_DIM_TEXT)
    elif not data.rows:
        draw.text((MARGIN, HEADER_HEIGHT + MARGIN), NO_ARRIVALS_TEXT, font=FONT, fill=COLOR_DIM_TEXT)
    else:
        max_rows = rows_area // ROW_HEIGHT
        for idx, row in enumerate(data.rows[:max_rows]):
            _draw_row(draw, row, HEADER_HEIGHT + MARGIN + idx * ROW_HEIGHT, width)

    status_color = STATUS_COLORS.get(data.tube_status, STATUS_COLORS[GOOD])
    draw.line((0, strip_top, width - 1, strip_top), fill=SEPARATOR_COLOR)
    draw.rectangle((0, strip_top + 1, STATUS_BAR_WIDTH - 1, height - 1), fill=status_color)
    text_left = STATUS_BAR_WIDTH + MARGIN
    lines = _wrap(draw, data.status_text, width - text_left - MARGIN, STATUS_MAX_LINES)
    for idx, line in enumerate(lines):
        draw.text((text_left, strip_top + MARGIN + idx * ROW_HEIGHT), line, font=FONT, fill=COLOR_TEXT)

    return image


__all__ = ["build_frame_data", "compose_frame"]
