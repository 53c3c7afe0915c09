"""Arrivals widget: polls for data on two timers and reconciles the results."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
import logging
from typing import Any, Callable

from tubetimes.config import WidgetConfig, coerce_limit
from tubetimes.data.event_loop import EventLoop, TimerHandle
from tubetimes.data.fetch_helper import (
    GET_TUBE_LINE_STATUS,
    GET_TUBE_TIMES,
    GOT_TUBE_LINE_STATUS,
    GOT_TUBE_TIMES,
    ArrivalsResult,
    LineStatusResult,
)
from tubetimes.data.models import GOOD, ArrivalPrediction, DisruptionMessage
from tubetimes.data.tfl_client import arrivals_url, line_status_url
from tubetimes.logic.arrivals import select_display_arrivals
from tubetimes.logic.status import advance_message_index
from tubetimes.rendering.frame_data import DisplayData

logger = logging.getLogger(__name__)

Send = Callable[[str, str], None]
Render = Callable[[DisplayData], None]


@dataclass
class DisplayState:
    """Everything the widget remembers between polls.

    ``None`` marks a field that has never been set.
    """

    loaded: bool | None = None
    result: list[ArrivalPrediction] | None = None
    tube_status: str | None = None
    tube_status_description: str | None = None
    combined_messages: list[DisruptionMessage] | None = None
    active_message: int | None = None

    def has_arrivals(self) -> bool:
        return isinstance(self.result, list) and len(self.result) > 0


class TubeTimesWidget:
    """Polls arrivals and line status on independent timers.

    Every method runs on the event-loop thread, so state updates never
    overlap each other or a render.
    """

    def __init__(
        self,
        config: WidgetConfig,
        loop: EventLoop,
        send: Send,
        render: Render,
        state: DisplayState | None = None,
    ) -> None:
        self._loop = loop
        self._send = send
        self._render = render
        self._state = state if state is not None else DisplayState()
        self._url = ""
        self._service_url = ""
        self._apply_config(config)
        self._arrivals_timer: TimerHandle | None = None
        self._status_timer: TimerHandle | None = None

    @property
    def config(self) -> WidgetConfig:
        return self._config

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def url(self) -> str:
        return self._url

    @property
    def service_url(self) -> str:
        return self._service_url

    def start(self) -> None:
        """Initialise state without clobbering existing data, then start both timers."""
        logger.info("Starting widget: %s", self._config.title)
        state = self._state

        state.loaded = bool(state.loaded) or state.has_arrivals()
        if state.tube_status is None:
            state.tube_status = GOOD
        if state.combined_messages is None:
            state.combined_messages = []
        if state.active_message is None:
            state.active_message = 0

        self._apply_config(self._config)

        for timer in (self._arrivals_timer, self._status_timer):
            if timer is not None:
                timer.cancel()

        self._get_arrivals_data()
        self._get_line_status_data()

    def update_config(self, config: WidgetConfig) -> None:
        """Switch to a new configuration; responses for the old URLs are dropped."""
        self._apply_config(config)
        logger.info("Widget reconfigured for %s", self._url)

    def _apply_config(self, config: WidgetConfig) -> None:
        limit = coerce_limit(config.limit)
        if limit != config.limit:
            config = replace(config, limit=limit)
        self._config = config
        self._url = arrivals_url(config.line_id, config.stop_point_id, config.direction)
        self._service_url = line_status_url(config.line_id)

    def _get_arrivals_data(self) -> None:
        self._send(GET_TUBE_TIMES, self._url)
        self._arrivals_timer = self._loop.call_later(
            self._config.update_interval / 1000, self._get_arrivals_data
        )

    def _get_line_status_data(self) -> None:
        self._send(GET_TUBE_LINE_STATUS, self._service_url)
        self._status_timer = self._loop.call_later(
            self._config.status_update_interval / 1000, self._get_line_status_data
        )

    def notification_received(self, notification: str, payload: Any) -> None:
        """Apply an inbound result if it answers the currently configured request."""
        state = self._state

        if notification == GOT_TUBE_TIMES and isinstance(payload, ArrivalsResult):
            if payload.url != self._url:
                logger.debug("Dropping stale arrivals response for %s", payload.url)
                return
            state.loaded = True
            state.result = payload.result
            state.active_message = advance_message_index(
                state.active_message or 0, len(state.combined_messages or [])
            )
            self._request_view_update()
            return

        if notification == GOT_TUBE_LINE_STATUS and isinstance(payload, LineStatusResult):
            if payload.service_url != self._service_url:
                logger.debug("Dropping stale line status response for %s", payload.service_url)
                return
            snapshot = payload.snapshot
            state.tube_status = snapshot.tube_status
            state.tube_status_description = snapshot.tube_status_description
            state.combined_messages = list(snapshot.messages)
            # Without arrivals the next arrivals response renders instead.
            if state.loaded and state.has_arrivals():
                self._request_view_update()

    def _request_view_update(self) -> None:
        self._loop.call_soon(self._update_view)

    def _update_view(self) -> None:
        self._render(self.display_data())

    def display_data(self, now: datetime | None = None) -> DisplayData:
        """Snapshot of what the renderer should show right now."""
        state = self._state
        return DisplayData(
            label=self._config.title,
            journeys=select_display_arrivals(state.result, self._config.limit, now=now),
            loaded=bool(state.loaded),
            active_message=state.active_message or 0,
            tube_status=state.tube_status or GOOD,
            tube_status_description=state.tube_status_description,
            status_messages=list(state.combined_messages or []),
        )


__all__ = ["DisplayState", "TubeTimesWidget"]
