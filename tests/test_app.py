import pytest
import requests

from app import create_app
from college_hockey.config import AppConfig

UCONN_URL = "https://www.collegehockeynews.com/schedules/team/Connecticut/17"


class StubVendor:
    def __init__(self, teams=None, error=None):
        self.teams = teams or []
        self.error = error
        self.calls = 0

    def league_teams(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return {"teams": self.teams}

    def team_profile(self, team_id):
        return {"id": team_id, "name": "Huskies"}


class RateLimited:
    status_code = 429

    def json(self):
        return {"message": "Too Many Requests"}


@pytest.fixture
def cfg():
    return AppConfig(target_season="2025-26", sportradar_api_key=None)


@pytest.fixture
def make_client(cfg, fake_fetcher, now):
    def _make(pages=None, default=None, vendor=None):
        fetcher = fake_fetcher(pages, default=default)
        app = create_app(cfg=cfg, fetcher=fetcher, vendor=vendor, now=lambda: now)
        app.config["TESTING"] = True
        return app.test_client(), fetcher

    return _make


def test_schedule_for_directory_team(make_client, uconn_page):
    client, fetcher = make_client({UCONN_URL: uconn_page})

    resp = client.get("/api/schedule?team=UConn")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["teamName"] == "UConn"
    assert body["season"] == "2025-26"
    assert len(body["games"]) == 2

    bc, shu = body["games"]
    assert bc["opponent"] == "Boston College"
    assert bc["date"] == "2025-10-03"
    assert bc["isHome"] is True and bc["conference"] is True
    assert bc["result"] == {"score": "4-2", "won": True}
    assert shu["isHome"] is False and shu["conference"] is False
    assert shu["time"] == "7:00 PM"

    client.get("/api/schedule?team=UConn")
    assert fetcher.calls == [UCONN_URL]


def test_schedule_requires_team(make_client):
    client, _ = make_client()
    resp = client.get("/api/schedule")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Team name is required"


def test_schedule_unknown_team_points_at_team_list(make_client):
    client, fetcher = make_client()
    resp = client.get("/api/schedule?team=Springfield%20Tech")
    assert resp.status_code == 404
    assert "/api/teams/list" in resp.get_json()["error"]
    assert fetcher.calls == []


def test_schedule_site_down_is_500(make_client):
    client, _ = make_client()
    resp = client.get("/api/schedule?team=Maine")
    assert resp.status_code == 500
    assert "unavailable" in resp.get_json()["error"]


def test_scrape_schedule_unmapped_team(make_client):
    client, _ = make_client()
    resp = client.get("/api/scrape-schedule?team=Springfield%20Tech")
    assert resp.status_code == 404
    assert resp.get_json()["error"].startswith("Schedule not available for Springfield Tech")


def test_scrape_schedule_post_requires_url(make_client):
    client, _ = make_client()
    resp = client.post("/api/scrape-schedule", json={"teamName": "Maine"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "URL is required"


def test_scrape_schedule_post_stale_page(make_client):
    client, _ = make_client(default="<html><title>2024-25 Schedule</title><body></body></html>")
    resp = client.post("/api/scrape-schedule", json={"url": "https://example.edu/hockey", "teamName": "Maine"})
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["isOffseason"] is True
    assert body["expectedSeason"] == "2025-26"


def test_scoreboard_without_matching_section(make_client, cfg):
    page = "<table><tr><td>Friday, October 3, 2025</td></tr></table>"
    client, _ = make_client({cfg.scoreboard_url("men"): page})

    resp = client.get("/api/scoreboard?date=2025-10-04")

    assert resp.status_code == 200
    assert resp.get_json()["games"] == []
    assert resp.get_json()["date"] == "2025-10-04"


@pytest.mark.parametrize("query", ["date=2025-13-01", "date=10/03/2025", "date=", "date=2025-10-03&gender=boys"])
def test_scoreboard_bad_params(make_client, query):
    client, fetcher = make_client()
    assert client.get(f"/api/scoreboard?{query}").status_code == 400
    assert fetcher.calls == []


@pytest.mark.parametrize("query", ["", "?gender=boys"])
def test_polls_require_gender(make_client, query):
    client, _ = make_client()
    resp = client.get(f"/api/polls{query}")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == 'Invalid gender parameter. Must be "men" or "women"'


def test_polls_upstream_failure(make_client):
    client, _ = make_client(default="<html>maintenance</html>")
    resp = client.get("/api/polls?gender=men")
    assert resp.status_code == 500


def test_teams_list(make_client):
    client, fetcher = make_client()
    body = client.get("/api/teams/list?gender=women").get_json()
    assert body["gender"] == "women"
    assert "WCHA" in body["conferences"]
    assert fetcher.calls == []


def test_vendor_teams_without_key(make_client):
    client, _ = make_client()
    resp = client.get("/api/teams")
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "API key not configured"


def test_vendor_teams_filtered_and_sorted(make_client):
    vendor = StubVendor(
        teams=[
            {"market": "Connecticut", "name": "Huskies"},
            {"market": "Springfield", "name": "Pride"},
            {"market": "Boston College", "name": "Eagles"},
        ]
    )
    client, _ = make_client(vendor=vendor)

    body = client.get("/api/teams").get_json()

    assert body["season"] == "2025-26"
    assert [t["market"] for t in body["teams"]] == ["Boston College", "Connecticut"]


def test_vendor_rate_limit(make_client):
    vendor = StubVendor(error=requests.HTTPError("429 Client Error", response=RateLimited()))
    client, _ = make_client(vendor=vendor)

    resp = client.get("/api/teams")

    assert resp.status_code == 429
    assert resp.get_json()["error"] == "Rate limit exceeded. Please try again in a few minutes."
    assert resp.get_json()["apiError"] == {"message": "Too Many Requests"}


def test_team_profile(make_client):
    client, _ = make_client(vendor=StubVendor())
    assert client.get("/api/teams/abc-123/profile").get_json() == {"id": "abc-123", "name": "Huskies"}


def test_health(make_client):
    client, _ = make_client()
    assert client.get("/health").get_json() == {"ok": True}
