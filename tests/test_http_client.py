import pytest
import requests

from college_hockey import http_client
from college_hockey.errors import FetchError
from college_hockey.http_client import HttpFetcher, SportradarClient


class FakeResponse:
    def __init__(self, status_code=200, text="", payload=None):
        self.status_code = status_code
        self.text = text
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        return self._payload


def test_fetch_retries_strategies_until_one_succeeds(monkeypatch):
    responses = [FakeResponse(403), FakeResponse(403), FakeResponse(200, "<html>ok</html>")]
    seen = []

    def fake_get(url, headers, timeout):
        seen.append((url, headers["User-Agent"], timeout))
        return responses.pop(0)

    pauses = []
    monkeypatch.setattr(http_client.requests, "get", fake_get)

    html = HttpFetcher(retry_pause_seconds=1.0, sleep=pauses.append).fetch("https://example.edu/schedule")

    assert html == "<html>ok</html>"
    assert [timeout for _, _, timeout in seen] == [15, 20, 25]
    assert len({ua for _, ua, _ in seen}) == 3
    assert pauses == [1.0, 1.0]


def test_fetch_raises_after_all_strategies_fail(monkeypatch):
    def fake_get(url, headers, timeout):
        raise requests.ConnectionError("connection refused")

    pauses = []
    monkeypatch.setattr(http_client.requests, "get", fake_get)

    with pytest.raises(FetchError) as exc:
        HttpFetcher(sleep=pauses.append).fetch("https://example.edu/schedule")

    assert exc.value.url == "https://example.edu/schedule"
    assert exc.value.context == {"url": "https://example.edu/schedule"}
    assert len(pauses) == 2


def test_sportradar_client_sends_key(monkeypatch):
    seen = {}

    def fake_get(url, timeout, headers):
        seen.update(url=url, headers=headers)
        return FakeResponse(payload={"teams": []})

    monkeypatch.setattr(http_client.requests, "get", fake_get)
    client = SportradarClient("https://api.example/ncaamh/v3/en/", "secret")

    assert client.league_teams() == {"teams": []}
    assert seen["url"] == "https://api.example/ncaamh/v3/en/league/teams.json"
    assert seen["headers"]["x-api-key"] == "secret"

    client.team_profile("abc-123")
    assert seen["url"].endswith("/teams/abc-123/profile.json")
