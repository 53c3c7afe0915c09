"""Render a preview frame from saved TfL API responses."""

from __future__ import annotations

import argparse
import json
from typing import Any

from tubetimes.config import DEFAULT_LIMIT, DEFAULT_TITLE, coerce_limit
from tubetimes.data.models import parse_arrivals
from tubetimes.data.tfl_client import summarize_line_statuses
from tubetimes.logic.arrivals import select_display_arrivals
from tubetimes.rendering import DisplayData, build_frame_data, compose_frame, save_frame


def _load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("arrivals", help="Saved /Line/{id}/Arrivals/{stop} response")
    parser.add_argument("--status", default=None, help="Saved /Line/{id}/Status response")
    parser.add_argument("--title", default=DEFAULT_TITLE)
    parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT)
    parser.add_argument("--output", default="emulator_output/frame.png")
    args = parser.parse_args()

    arrivals = parse_arrivals(_load_json(args.arrivals))
    snapshot = summarize_line_statuses(_load_json(args.status) if args.status else [])

    display = DisplayData(
        label=args.title,
        journeys=select_display_arrivals(arrivals, coerce_limit(args.limit)),
        loaded=True,
        active_message=0,
        tube_status=snapshot.tube_status,
        tube_status_description=snapshot.tube_status_description,
        status_messages=list(snapshot.messages),
    )
    frame = compose_frame(build_frame_data(display))
    save_frame(frame, args.output)
    print(f"Wrote {len(display.journeys)} arrivals to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
