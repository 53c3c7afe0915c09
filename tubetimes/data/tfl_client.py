"""TfL unified API client."""

from __future__ import annotations

from typing import Any

import requests

from tubetimes.data.models import (
    GOOD,
    SEVERE,
    WARNING,
    ArrivalPrediction,
    DisruptionMessage,
    LineStatusSnapshot,
    parse_arrivals,
)

TFL_API_BASE = "https://api.tfl.gov.uk"

# statusSeverity codes from /Line/Meta/Severity
GOOD_SEVERITIES = frozenset({10, 18, 19})
SEVERE_SEVERITIES = frozenset({1, 2, 3, 4, 5, 6, 11, 16, 20})


class TflClientError(Exception):
    """Raised when a TfL API request fails or returns a non-200 response."""


def arrivals_url(line_id: str, stop_point_id: str, direction: str) -> str:
    return f"{TFL_API_BASE}/Line/{line_id}/Arrivals/{stop_point_id}?direction={direction}"


def line_status_url(line_id: str) -> str:
    return f"{TFL_API_BASE}/Line/{line_id}/Status"


def _message_from_status(status: dict[str, Any]) -> DisruptionMessage | None:
    disruption = status.get("disruption") or {}
    if not isinstance(disruption, dict):
        disruption = {}
    text = status.get("reason") or disruption.get("description")
    if not text:
        return None
    try:
        severity = int(status.get("statusSeverity"))
    except (TypeError, ValueError):
        severity = 0
    return DisruptionMessage(
        text=str(text).strip(),
        status_severity=severity,
        status_severity_description=str(status.get("statusSeverityDescription") or ""),
        category=disruption.get("category"),
        category_description=disruption.get("categoryDescription"),
    )


def summarize_line_statuses(lines: Any) -> LineStatusSnapshot:
    """Collapse a TfL /Line/{ids}/Status response into one snapshot.

    Any severity in SEVERE_SEVERITIES makes the whole snapshot severe; any
    other code outside GOOD_SEVERITIES makes it a warning. Messages are
    de-duplicated by text and ordered most severe first (lowest code).
    """
    if not isinstance(lines, list):
        return LineStatusSnapshot()

    tube_status = GOOD
    descriptions: list[str] = []
    messages: dict[str, DisruptionMessage] = {}

    for line in lines:
        if not isinstance(line, dict):
            continue
        for status in line.get("lineStatuses") or []:
            if not isinstance(status, dict):
                continue
            try:
                severity = int(status.get("statusSeverity"))
            except (TypeError, ValueError):
                continue
            if severity in GOOD_SEVERITIES:
                continue

            if severity in SEVERE_SEVERITIES:
                tube_status = SEVERE
            elif tube_status != SEVERE:
                tube_status = WARNING

            description = status.get("statusSeverityDescription")
            if description and description not in descriptions:
                descriptions.append(description)

            message = _message_from_status(status)
            if message is not None and message.text not in messages:
                messages[message.text] = message

    ordered = sorted(messages.values(), key=lambda message: message.status_severity)
    return LineStatusSnapshot(
        tube_status=tube_status,
        tube_status_description=", ".join(descriptions) or None,
        messages=tuple(ordered),
    )


class TflClient:
    """Thin wrapper around the TfL unified API using requests."""

    def __init__(self, app_key: str = "") -> None:
        self._app_key = app_key
        self._timeout_seconds = 10

    def get_arrivals(self, url: str) -> list[ArrivalPrediction] | None:
        """Fetch arrival predictions; None when the body is not a list."""
        return parse_arrivals(self._get(url))

    def get_line_status(self, url: str) -> LineStatusSnapshot:
        """Fetch and summarise the status of the line(s) in ``url``."""
        return summarize_line_statuses(self._get(url))

    def _get(self, url: str) -> Any:
        params = {"app_key": self._app_key} if self._app_key else None
        try:
            response = requests.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise TflClientError(f"TfL API request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text[:200]}"
            raise TflClientError(f"TfL API request failed: {detail}")

        try:
            return response.json()
        except ValueError as exc:
            raise TflClientError("TfL API response was not valid JSON") from exc


__all__ = [
    "TFL_API_BASE",
    "TflClient",
    "TflClientError",
    "arrivals_url",
    "line_status_url",
    "summarize_line_statuses",
]
