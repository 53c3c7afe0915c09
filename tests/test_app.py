from __future__ import annotations

import textwrap

from conftest import make_arrival
from tubetimes.app import build_widget
from tubetimes.data.fetch_helper import GOT_TUBE_TIMES, ArrivalsResult


def _config(tmp_path) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(
        textwrap.dedent(
            f"""
            widget:
              title: "Bank"
              line_id: "central"
              stop_point_id: "940GZZLUBNK"
            display:
              width: 192
              height: 128
            logging:
              level: "WARNING"
              log_dir: "{tmp_path / 'logs'}"
            """
        )
    )
    return str(path)


def test_build_widget_renders_to_output(tmp_path) -> None:
    output = tmp_path / "frame.png"
    loop, widget = build_widget(_config(tmp_path), output=str(output), once=True)

    assert widget.config.title == "Bank"
    assert widget.config.limit == 8

    widget.notification_received(GOT_TUBE_TIMES, ArrivalsResult(url=widget.url, result=[make_arrival("a", 3)]))
    loop.run_pending()

    assert output.exists()
    assert loop._stop_event.is_set()
