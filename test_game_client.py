"""
Tests for the HTTP game client, with the requests session mocked out.
"""
from unittest.mock import Mock, patch

import pytest
import requests

from cubistgames.errors import SiteNotConfiguredError, TransportError
from cubistgames.game_client import GameClient, game_payload

API_URL = "https://games.example"


def make_response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def client():
    game_client = GameClient(api_url=API_URL + "/", api_key="secret", retries=0)
    yield game_client
    game_client.close()


def test_requires_api_url(monkeypatch):
    monkeypatch.delenv("CUBIST_API_URL", raising=False)
    with pytest.raises(ValueError):
        GameClient()


def test_reads_api_url_from_environment(monkeypatch):
    monkeypatch.setenv("CUBIST_API_URL", API_URL)
    monkeypatch.delenv("CUBIST_API_KEY", raising=False)
    with GameClient() as game_client:
        assert game_client.api_url == API_URL
        assert "X-API-Key" not in game_client.headers


def test_api_key_is_sent_as_header(client):
    assert client.api_url == API_URL
    assert client._session.headers["X-API-Key"] == "secret"


def test_fetch_games_posts_ids(client):
    payload = {"games": [
        {"data": {"gameId": 25, "openTime": 1, "closeTime": 2}, "cached": {"definition": {"title": "Final"}}},
        {"data": {"gameId": 23, "settled": True}},
    ]}
    with patch.object(client._session, "request", return_value=make_response(payload=payload)) as request:
        games = client.fetch_games([25, 24, 23], "authority")

    request.assert_called_once_with(
        "POST",
        f"{API_URL}/api/games/batch",
        timeout=client.timeout,
        json={"authority": "authority", "gameIds": [25, 24, 23]},
    )
    assert [game.game_id for game in games] == [25, 23]
    assert games[0].title == "Final"
    assert games[1].data.settled


def test_fetch_games_skips_request_for_empty_batch(client):
    with patch.object(client._session, "request") as request:
        assert client.fetch_games([], "authority") == []
    request.assert_not_called()


def test_fetch_games_http_error_raises_transport_error(client):
    response = make_response(status_code=502, text="bad gateway")
    with patch.object(client._session, "request", return_value=response):
        with pytest.raises(TransportError) as exc_info:
            client.fetch_games([1], "authority")

    assert exc_info.value.status_code == 502
    assert exc_info.value.response_body == "bad gateway"
    assert exc_info.value.endpoint == "/api/games/batch"


def test_connection_failure_raises_transport_error(client):
    failure = requests.ConnectionError("connection refused")
    with patch.object(client._session, "request", side_effect=failure):
        with pytest.raises(TransportError) as exc_info:
            client.fetch_games([1], "authority")

    assert exc_info.value.cause is failure
    assert "connection refused" in str(exc_info.value)


def test_non_json_body_raises_transport_error(client):
    response = make_response(payload=ValueError("no json"), text="<html>")
    with patch.object(client._session, "request", return_value=response):
        with pytest.raises(TransportError):
            client.fetch_games([1], "authority")


def test_malformed_game_raises_transport_error(client):
    response = make_response(payload={"games": [{"data": {"gameId": "not-a-number"}}]})
    with patch.object(client._session, "request", return_value=response):
        with pytest.raises(TransportError):
            client.fetch_games([1], "authority")


@pytest.mark.parametrize("payload", [
    {"games": None},
    {"games": 5},
    {"games": "abc"},
    [{"data": {"gameId": 1}}],
    None,
])
def test_malformed_games_envelope_raises_transport_error(client, payload):
    response = make_response(payload=payload)
    with patch.object(client._session, "request", return_value=response):
        with pytest.raises(TransportError) as exc_info:
            client.fetch_games([1], "authority")
    assert exc_info.value.endpoint == "/api/games/batch"


def test_missing_games_key_means_no_games(client):
    with patch.object(client._session, "request", return_value=make_response(payload={})):
        assert client.fetch_games([1, 2], "authority") == []


def test_get_stats(client):
    response = make_response(payload={"totalGames": 42})
    with patch.object(client._session, "request", return_value=response) as request:
        stats = client.get_stats("authority")

    request.assert_called_once_with("GET", f"{API_URL}/api/stats/authority", timeout=client.timeout)
    assert stats.total_games == 42


def test_get_stats_not_found_means_site_not_configured(client):
    with patch.object(client._session, "request", return_value=make_response(status_code=404)):
        with pytest.raises(SiteNotConfiguredError) as exc_info:
            client.get_stats("authority")
    assert exc_info.value.authority == "authority"


def test_get_stats_server_error(client):
    with patch.object(client._session, "request", return_value=make_response(status_code=500)):
        with pytest.raises(TransportError) as exc_info:
            client.get_stats("authority")
    assert exc_info.value.status_code == 500


def test_game_payload_uses_wire_names(game_factory):
    payload = game_payload(game_factory(5, "Settled", title="Derby"))
    assert payload["data"]["gameId"] == 5
    assert payload["data"]["settled"] is True
    assert payload["cached"]["definition"]["title"] == "Derby"
