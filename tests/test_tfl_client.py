from __future__ import annotations

from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from conftest import NOW
from tubetimes.data.models import GOOD, SEVERE, WARNING, parse_arrivals
from tubetimes.data.tfl_client import (
    TflClient,
    TflClientError,
    arrivals_url,
    line_status_url,
    summarize_line_statuses,
)

ARRIVAL = {
    "id": "-1234",
    "vehicleId": "201",
    "naptanId": "940GZZLUOXC",
    "stationName": "Oxford Circus Underground Station",
    "lineId": "central",
    "lineName": "Central",
    "platformName": "Westbound - Platform 1",
    "direction": "outbound",
    "destinationName": "Ealing Broadway Underground Station",
    "timeToStation": 180,
    "currentLocation": "At Tottenham Court Road",
    "towards": "Ealing Broadway",
    "expectedArrival": "2024-05-01T12:03:00Z",
    "timeToLive": "2024-05-01T12:03:30Z",
}


def _status(severity: int, description: str, reason: str | None = None, category: str | None = None) -> dict:
    status: dict[str, Any] = {
        "statusSeverity": severity,
        "statusSeverityDescription": description,
    }
    if reason is not None:
        status["reason"] = reason
    if category is not None:
        status["disruption"] = {"category": category, "categoryDescription": category, "description": reason}
    return status


@pytest.fixture()
def tfl_client() -> TflClient:
    return TflClient("test-key")


def _mock_response(status_code: int, json_data: Any = None, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("Invalid JSON")
    return response


def test_urls() -> None:
    assert (
        arrivals_url("central", "940GZZLUOXC", "inbound")
        == "https://api.tfl.gov.uk/Line/central/Arrivals/940GZZLUOXC?direction=inbound"
    )
    assert line_status_url("central,victoria") == "https://api.tfl.gov.uk/Line/central,victoria/Status"


def test_parse_arrivals_maps_fields() -> None:
    arrivals = parse_arrivals([ARRIVAL, "junk", None])

    assert arrivals is not None
    assert len(arrivals) == 1
    arrival = arrivals[0]
    assert arrival.id == "-1234"
    assert arrival.destination_name == "Ealing Broadway Underground Station"
    assert arrival.time_to_station == 180
    assert arrival.expected_arrival.minute == 3
    assert arrival.time_to_live.second == 30


def test_parse_arrivals_non_list_is_none() -> None:
    assert parse_arrivals({"message": "error"}) is None
    assert parse_arrivals(None) is None


def test_parse_arrival_bad_timestamps_become_none() -> None:
    arrivals = parse_arrivals([{**ARRIVAL, "expectedArrival": "soon", "timeToStation": "x"}])

    assert arrivals[0].expected_arrival is None
    assert arrivals[0].time_to_station == 0


def test_get_arrivals_returns_predictions(tfl_client: TflClient) -> None:
    url = arrivals_url("central", "940GZZLUOXC", "all")
    response = _mock_response(200, [ARRIVAL])
    with patch("requests.get", return_value=response) as mock_get:
        arrivals = tfl_client.get_arrivals(url)

    assert [a.id for a in arrivals] == ["-1234"]
    mock_get.assert_called_once()
    args, kwargs = mock_get.call_args
    assert args[0] == url
    assert kwargs["params"] == {"app_key": "test-key"}


def test_get_arrivals_without_app_key_sends_no_params() -> None:
    response = _mock_response(200, [])
    with patch("requests.get", return_value=response) as mock_get:
        arrivals = TflClient().get_arrivals("https://api.tfl.gov.uk/Line/central/Arrivals/x")

    assert arrivals == []
    assert mock_get.call_args.kwargs["params"] is None


def test_get_line_status_good_service(tfl_client: TflClient) -> None:
    body = [{"id": "central", "lineStatuses": [_status(10, "Good Service")]}]
    with patch("requests.get", return_value=_mock_response(200, body)):
        snapshot = tfl_client.get_line_status(line_status_url("central"))

    assert snapshot.tube_status == GOOD
    assert snapshot.tube_status_description is None
    assert snapshot.messages == ()


def test_summarize_minor_delays_is_warning() -> None:
    body = [
        {
            "id": "central",
            "lineStatuses": [
                _status(9, "Minor Delays", "Central Line: Minor delays due to train cancellations.", "RealTime")
            ],
        }
    ]

    snapshot = summarize_line_statuses(body)

    assert snapshot.tube_status == WARNING
    assert snapshot.tube_status_description == "Minor Delays"
    assert len(snapshot.messages) == 1
    message = snapshot.messages[0]
    assert message.text == "Central Line: Minor delays due to train cancellations."
    assert message.status_severity == 9
    assert message.category == "RealTime"


def test_summarize_severe_wins_and_messages_sorted() -> None:
    body = [
        {"id": "central", "lineStatuses": [_status(9, "Minor Delays", "Minor delays on Central.")]},
        {
            "id": "victoria",
            "lineStatuses": [
                _status(6, "Severe Delays", "Severe delays on Victoria."),
                _status(9, "Minor Delays", "Minor delays on Central."),
            ],
        },
        {"id": "jubilee", "lineStatuses": [_status(10, "Good Service")]},
    ]

    snapshot = summarize_line_statuses(body)

    assert snapshot.tube_status == SEVERE
    assert snapshot.tube_status_description == "Minor Delays, Severe Delays"
    assert [m.text for m in snapshot.messages] == [
        "Severe delays on Victoria.",
        "Minor delays on Central.",
    ]


def test_summarize_tolerates_garbage() -> None:
    assert summarize_line_statuses({"oops": True}).tube_status == GOOD
    snapshot = summarize_line_statuses([None, {"lineStatuses": [None, {"statusSeverity": "?"}]}])
    assert snapshot.tube_status == GOOD


def test_non_200_raises_client_error(tfl_client: TflClient) -> None:
    response = _mock_response(500, {"message": "boom"}, text="Internal error")
    with patch("requests.get", return_value=response):
        with pytest.raises(TflClientError) as exc_info:
            tfl_client.get_arrivals("https://api.tfl.gov.uk/Line/central/Arrivals/x")

    assert "500" in str(exc_info.value)


def test_network_error_raises_client_error(tfl_client: TflClient) -> None:
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("boom")):
        with pytest.raises(TflClientError):
            tfl_client.get_line_status(line_status_url("central"))


def test_invalid_json_raises_client_error(tfl_client: TflClient) -> None:
    with patch("requests.get", return_value=_mock_response(200, None)):
        with pytest.raises(TflClientError):
            tfl_client.get_arrivals("https://api.tfl.gov.uk/Line/central/Arrivals/x")


def test_parsed_times_are_aware() -> None:
    arrival = parse_arrivals([ARRIVAL])[0]

    assert arrival.expected_arrival > NOW
