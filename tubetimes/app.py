"""Run the Tube Times board against the live TfL API."""

from __future__ import annotations

import argparse
import logging

from tubetimes.config import load_config
from tubetimes.data.event_loop import EventLoop
from tubetimes.data.fetch_helper import FetchHelper
from tubetimes.data.poller import TubeTimesWidget
from tubetimes.data.tfl_client import TflClient
from tubetimes.logging_setup import configure_logging
from tubetimes.rendering import DisplayData, FrameRenderer

logger = logging.getLogger("tubetimes.app")


def build_widget(
    config_path: str,
    output: str | None = None,
    once: bool = False,
) -> tuple[EventLoop, TubeTimesWidget]:
    """Wire the loop, fetch helper, renderer and widget together."""
    config = load_config(config_path)
    configure_logging(config.log)

    loop = EventLoop()
    renderer = FrameRenderer(
        path=output or config.display.output_path,
        width=config.display.width,
        height=config.display.height,
    )

    def render(display: DisplayData) -> None:
        renderer.render(display)
        if once and display.loaded:
            loop.stop()

    widget: TubeTimesWidget | None = None

    def deliver(notification: str, payload: object) -> None:
        loop.post(widget.notification_received, notification, payload)

    helper = FetchHelper(TflClient(config.tfl.app_key), deliver)
    widget = TubeTimesWidget(config.widget, loop, send=helper.send, render=render)
    return loop, widget


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml", help="Path to the YAML config")
    parser.add_argument("--output", default=None, help="Override the PNG frame output path")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Exit after the first frame with arrival data has been rendered",
    )
    args = parser.parse_args()

    loop, widget = build_widget(args.config, args.output, once=args.once)
    widget.start()
    try:
        loop.run_forever()
    except KeyboardInterrupt:
        logger.info("Stopping")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
