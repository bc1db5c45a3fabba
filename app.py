# app.py
"""
Flask entrypoint for the college hockey scraping service.

Routes (JSON):
  - /api/schedule                 ?team=Boston College&gender=men|women
  - /api/scrape-schedule          GET ?team=...   |   POST {"url": ..., "teamName": ...}
  - /api/scoreboard               ?date=YYYY-MM-DD&gender=men|women (no date = live page)
  - /api/polls                    ?gender=men|women
  - /api/teams/list               ?gender=men|women
  - /api/teams                    (vendor API, needs SPORTRADAR_API_KEY)
  - /api/teams/<team_id>/profile  (vendor API)
  - /health

Notes:
  - Everything is scraped per request; the only shared state is the TTL cache.
  - Handlers return (payload, status); routes only parse params and jsonify.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from typing import Callable, Optional

from dateutil import tz
from flask import Flask, jsonify, request

from college_hockey.cache import TTLCache
from college_hockey.config import AppConfig
from college_hockey.handlers.api_handler import ApiHandler
from college_hockey.http_client import HttpFetcher, SportradarClient
from college_hockey.services import PollService, ScheduleService, ScoreboardService
from college_hockey.team_directory import TeamDirectory


def create_app(
    cfg: Optional[AppConfig] = None,
    fetcher: Optional[HttpFetcher] = None,
    vendor: Optional[SportradarClient] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> Flask:
    """
    App factory.

    Builds shared dependencies (fetcher + cache + directory + services) once per
    process. fetcher, vendor and now can be injected for tests.
    """
    cfg = cfg or AppConfig()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cache = TTLCache()
    fetcher = fetcher or HttpFetcher(retry_pause_seconds=cfg.fetch_retry_pause_seconds)
    directory = TeamDirectory(cfg.chn_base_url)
    if vendor is None and cfg.sportradar_api_key:
        vendor = SportradarClient(cfg.sportradar_api_base, cfg.sportradar_api_key)

    handler = ApiHandler(
        schedules=ScheduleService(
            fetcher=fetcher,
            directory=directory,
            tz_name=cfg.tz,
            target_season=cfg.target_season,
            now=now,
        ),
        scoreboards=ScoreboardService(fetcher=fetcher, config=cfg, now=now),
        polls=PollService(fetcher=fetcher, config=cfg, today=(lambda: now().date()) if now else None),
        directory=directory,
        cache=cache,
        cfg=cfg,
        vendor=vendor,
    )

    app = Flask(__name__)

    # -------------------------
    # Shared parsing helpers
    # -------------------------

    def parse_gender(default: Optional[str] = "men") -> Optional[str]:
        """Lower-cased ?gender=; None when it is not men/women."""
        raw = (request.args.get("gender") or default or "").strip().lower()
        return raw if handler.is_valid_gender(raw) else None

    def parse_date(raw: str) -> Optional[date]:
        """Parse a strict YYYY-MM-DD value; None when invalid."""
        try:
            return datetime.strptime(raw.strip(), "%Y-%m-%d").date()
        except ValueError:
            return None

    def today() -> date:
        if now is not None:
            return now().date()
        return datetime.now(tz=tz.gettz(cfg.tz)).date()

    def reply(result):
        payload, status = result
        return jsonify(payload), status

    # -------------------------
    # Schedules
    # -------------------------

    @app.get("/api/schedule")
    def api_schedule():
        """
        College Hockey News schedule for a Team Directory entry.

        Query:
          - team=Boston College (required)
          - gender=men|women
        """
        team = (request.args.get("team") or "").strip()
        if not team:
            return jsonify({"error": "Team name is required"}), 400
        gender = parse_gender()
        if gender is None:
            return jsonify({"error": 'Invalid gender parameter. Must be "men" or "women"'}), 400
        return reply(handler.schedule(team, gender))

    @app.get("/api/scrape-schedule")
    def api_scrape_schedule():
        """Athletics-site schedule for a team in the schedule URL map (?team=...)."""
        team = (request.args.get("team") or "").strip()
        if not team:
            return jsonify({"error": "Team name is required"}), 400
        return reply(handler.scrape_team_site(team))

    @app.post("/api/scrape-schedule")
    def api_scrape_schedule_url():
        """Schedule from any page: body {"url": ..., "teamName": ...}."""
        body = request.get_json(silent=True) or {}
        url = str(body.get("url") or "").strip()
        if not url:
            return jsonify({"error": "URL is required"}), 400
        team_name = str(body.get("teamName") or "").strip() or None
        return reply(handler.scrape_url(url, team_name))

    # -------------------------
    # Scoreboard / polls
    # -------------------------

    @app.get("/api/scoreboard")
    def api_scoreboard():
        """
        Scoreboard for one day.

        Query:
          - date=YYYY-MM-DD (optional; omitted = today's live page)
          - gender=men|women
        """
        gender = parse_gender()
        if gender is None:
            return jsonify({"error": 'Invalid gender parameter. Must be "men" or "women"'}), 400

        raw_date = request.args.get("date")
        day = None
        if raw_date is not None:
            day = parse_date(raw_date)
            if day is None:
                return jsonify({"error": "Invalid date parameter. Use YYYY-MM-DD"}), 400
        return reply(handler.scoreboard(day, gender))

    @app.get("/api/polls")
    def api_polls():
        """USCHO poll (?gender=men|women, required)."""
        gender = parse_gender(default=None)
        if gender is None:
            return jsonify({"error": 'Invalid gender parameter. Must be "men" or "women"'}), 400
        return reply(handler.poll(gender))

    # -------------------------
    # Teams
    # -------------------------

    @app.get("/api/teams/list")
    def api_teams_list():
        """Team Directory summary; no network access."""
        gender = parse_gender()
        if gender is None:
            return jsonify({"error": 'Invalid gender parameter. Must be "men" or "women"'}), 400
        return reply(handler.teams_list(gender))

    @app.get("/api/teams")
    def api_teams():
        return reply(handler.vendor_teams(today()))

    @app.get("/api/teams/<team_id>/profile")
    def api_team_profile(team_id: str):
        return reply(handler.team_profile(team_id))

    # -------------------------
    # Health
    # -------------------------

    @app.get("/health")
    def health():
        """Simple health endpoint for Docker/monitoring checks."""
        return {"ok": True}

    return app


# WSGI entrypoint for gunicorn (app:app)
app = create_app()

if __name__ == "__main__":
    # Dev server (not for production).
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8000")), debug=True)
