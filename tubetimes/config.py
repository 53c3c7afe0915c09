"""Configuration loader for the Tube Times display."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

DEFAULT_TITLE = "Tube Times"
DEFAULT_UPDATE_INTERVAL_MS = 20 * 1000
DEFAULT_STATUS_UPDATE_INTERVAL_MS = 60 * 60 * 1000
DEFAULT_LINE_ID = "central"
DEFAULT_STOP_POINT_ID = "940GZZLUOXC"
DEFAULT_DIRECTION = "all"
DEFAULT_LIMIT = 8

DIRECTIONS = ("all", "inbound", "outbound")


@dataclass(frozen=True)
class WidgetConfig:
    """Options recognised by the arrivals widget."""

    title: str = DEFAULT_TITLE
    update_interval: int = DEFAULT_UPDATE_INTERVAL_MS
    status_update_interval: int = DEFAULT_STATUS_UPDATE_INTERVAL_MS
    line_id: str = DEFAULT_LINE_ID
    stop_point_id: str = DEFAULT_STOP_POINT_ID
    direction: str = DEFAULT_DIRECTION
    limit: int = DEFAULT_LIMIT


@dataclass(frozen=True)
class TflConfig:
    """TfL API credentials."""

    app_key: str


@dataclass(frozen=True)
class DisplayConfig:
    """Frame output configuration."""

    width: int
    height: int
    output_path: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    widget: WidgetConfig
    tfl: TflConfig
    display: DisplayConfig
    log: LoggingConfig


def coerce_limit(value: Any) -> int:
    """Return a usable result limit; anything missing or below 1 becomes the default."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return DEFAULT_LIMIT
    return value


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _interval(mapping: dict[str, Any], key: str, default: int) -> int:
    value = mapping.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"'{key}' in widget config must be a positive integer (milliseconds)")
    return value


def build_widget_config(section: dict[str, Any]) -> WidgetConfig:
    """Build a WidgetConfig from a raw mapping, applying defaults and validation."""
    direction = str(section.get("direction", DEFAULT_DIRECTION)).lower()
    if direction not in DIRECTIONS:
        raise ValueError(
            f"'direction' in widget config must be one of {', '.join(DIRECTIONS)}, got '{direction}'"
        )

    line_id = section.get("line_id", DEFAULT_LINE_ID)
    if isinstance(line_id, (list, tuple)):
        line_id = ",".join(str(item) for item in line_id)

    return WidgetConfig(
        title=str(section.get("title", DEFAULT_TITLE)),
        update_interval=_interval(section, "update_interval", DEFAULT_UPDATE_INTERVAL_MS),
        status_update_interval=_interval(
            section, "status_update_interval", DEFAULT_STATUS_UPDATE_INTERVAL_MS
        ),
        line_id=str(line_id),
        stop_point_id=str(section.get("stop_point_id", DEFAULT_STOP_POINT_ID)),
        direction=direction,
        limit=coerce_limit(section.get("limit")),
    )


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    app_key = os.environ.get("TFL_APP_KEY", "")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    widget_section = _require_key(data, "widget", "widget")
    display_section = _require_key(data, "display", "display")
    logging_section = _require_key(data, "logging", "logging")

    if not isinstance(widget_section, dict):
        raise ValueError("'widget' config must be a mapping")
    if not isinstance(display_section, dict):
        raise ValueError("'display' config must be a mapping")
    if not isinstance(logging_section, dict):
        raise ValueError("'logging' config must be a mapping")

    widget = build_widget_config(widget_section)

    display = DisplayConfig(
        width=_require_key(display_section, "width", "display"),
        height=_require_key(display_section, "height", "display"),
        output_path=display_section.get("output_path", "emulator_output/frame.png"),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(widget=widget, tfl=TflConfig(app_key=app_key), display=display, log=logging)


__all__ = [
    "AppConfig",
    "DisplayConfig",
    "LoggingConfig",
    "TflConfig",
    "WidgetConfig",
    "DIRECTIONS",
    "DEFAULT_LIMIT",
    "build_widget_config",
    "coerce_limit",
    "load_config",
]
