"""Fetch helper: performs TfL requests off the loop thread and reports back."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Any, Callable

from tubetimes.data.models import ArrivalPrediction, LineStatusSnapshot
from tubetimes.data.tfl_client import TflClient, TflClientError

logger = logging.getLogger(__name__)

GET_TUBE_TIMES = "GET-TUBE-TIMES"
GET_TUBE_LINE_STATUS = "GET-TUBE-LINE-STATUS"
GOT_TUBE_TIMES = "GOT-TUBE-TIMES"
GOT_TUBE_LINE_STATUS = "GOT-TUBE-LINE-STATUS"

Deliver = Callable[[str, Any], None]


@dataclass(frozen=True)
class ArrivalsResult:
    """Arrivals response, echoing the URL it was requested with."""

    url: str
    result: list[ArrivalPrediction] | None


@dataclass(frozen=True)
class LineStatusResult:
    """Line-status response, echoing the service URL it was requested with."""

    service_url: str
    snapshot: LineStatusSnapshot


class FetchHelper:
    """Runs each request on a daemon thread and hands the result to ``deliver``.

    Failed requests are logged and produce no notification.
    """

    def __init__(self, client: TflClient, deliver: Deliver) -> None:
        self._client = client
        self._deliver = deliver

    def send(self, notification: str, url: str) -> None:
        """Accept an outbound request notification."""
        if notification == GET_TUBE_TIMES:
            target = self._fetch_arrivals
        elif notification == GET_TUBE_LINE_STATUS:
            target = self._fetch_line_status
        else:
            raise ValueError(f"Unknown notification: {notification}")
        thread = threading.Thread(target=target, args=(url,), daemon=True)
        thread.start()

    def _fetch_arrivals(self, url: str) -> None:
        try:
            result = self._client.get_arrivals(url)
        except TflClientError as exc:
            logger.warning("Arrivals fetch failed for %s: %s", url, exc)
            return
        logger.debug("Fetched %s arrivals from %s", len(result or []), url)
        self._deliver(GOT_TUBE_TIMES, ArrivalsResult(url=url, result=result))

    def _fetch_line_status(self, url: str) -> None:
        try:
            snapshot = self._client.get_line_status(url)
        except TflClientError as exc:
            logger.warning("Line status fetch failed for %s: %s", url, exc)
            return
        logger.debug("Fetched line status %s from %s", snapshot.tube_status, url)
        self._deliver(GOT_TUBE_LINE_STATUS, LineStatusResult(service_url=url, snapshot=snapshot))


__all__ = [
    "GET_TUBE_TIMES",
    "GET_TUBE_LINE_STATUS",
    "GOT_TUBE_TIMES",
    "GOT_TUBE_LINE_STATUS",
    "ArrivalsResult",
    "FetchHelper",
    "LineStatusResult",
]
