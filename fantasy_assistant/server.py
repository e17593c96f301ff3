"""
JSON endpoints for the assistant front-end.

The browser UI calls these routes and decides how to present results and
failures; nothing here renders HTML.
"""

import logging
from typing import Optional

import requests
from flask import Flask, jsonify, request

from . import settings
from .aggregates import AggregateFetcher
from .errors import RemoteRequestError
from .sleeper_api import SleeperAPI

logger = logging.getLogger(__name__)


def _failure(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class FantasyAssistant:
    """Flask wrapper around one shared SleeperAPI client."""

    def __init__(self, client: Optional[SleeperAPI] = None, league_id: Optional[str] = None):
        self.app = Flask(__name__)
        self.client = client or SleeperAPI.from_settings()
        self.fetcher = AggregateFetcher(self.client)
        self.league_id = league_id if league_id is not None else settings.LEAGUE_ID

        self._setup_error_handlers()
        self._setup_routes()

    # ------------------------------------------------------------------ #
    # Errors
    # ------------------------------------------------------------------ #
    def _setup_error_handlers(self):
        @self.app.after_request
        def add_header(response):
            response.cache_control.no_cache = True
            response.cache_control.must_revalidate = True
            response.cache_control.no_store = True
            return response

        @self.app.errorhandler(ValueError)
        def invalid_parameter(exc):
            return _failure(str(exc), 400)

        @self.app.errorhandler(RemoteRequestError)
        def upstream_status(exc):
            payload = {"success": False, "error": str(exc), "upstream_status": exc.status_code}
            return jsonify(payload), 502

        @self.app.errorhandler(requests.RequestException)
        def upstream_unreachable(exc):
            logger.warning("Sleeper API unreachable: %s", exc)
            return _failure(f"Sleeper API unreachable: {exc}", 502)

    def _resolve_league_id(self, league_id: Optional[str]) -> str:
        resolved = league_id or self.league_id
        if not resolved:
            raise ValueError("No league configured. Set SLEEPER_LEAGUE_ID or pass a league id.")
        return resolved

    # ------------------------------------------------------------------ #
    # Routes
    # ------------------------------------------------------------------ #
    def _setup_routes(self):
        @self.app.route("/api/league", defaults={"league_id": None})
        @self.app.route("/api/league/<league_id>")
        def league_data(league_id):
            envelope = self.fetcher.get_league_data(self._resolve_league_id(league_id))
            return jsonify(envelope.as_dict())

        @self.app.route("/api/draft", defaults={"league_id": None})
        @self.app.route("/api/draft/<league_id>")
        def draft_data(league_id):
            envelope = self.fetcher.get_draft_data(self._resolve_league_id(league_id))
            return jsonify(envelope.as_dict())

        @self.app.route("/api/players/<player_id>")
        def player(player_id):
            found = self.client.get_player(player_id)
            if found is None:
                return _failure("Player not found", 404)
            return jsonify(found)

        @self.app.route("/api/trending/<trend_type>")
        def trending(trend_type):
            lookback_hours = _int_arg("lookback_hours", 24)
            limit = _int_arg("limit", 25)
            return jsonify(self.client.get_trending_players(trend_type, lookback_hours, limit))

        @self.app.route("/api/state")
        def nfl_state():
            return jsonify(self.client.get_nfl_state())

        @self.app.route("/api/cache/clear", methods=["POST"])
        def clear_cache():
            self.client.clear_cache()
            return jsonify({"success": True})

    def run(self, host="0.0.0.0", port: Optional[int] = None, debug: bool = False):
        if port is None:
            port = settings.PORT
        self.app.run(host=host, port=port, debug=debug)
