"""
Sleeper API client for fantasy football data.

All reads go through ``fetch_resource`` so every endpoint shares the same
response cache and the same error surfacing.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

import requests

from . import settings
from .cache import CacheKey, FreshnessClass, FreshnessPolicy, ResponseCache
from .errors import RemoteRequestError

logger = logging.getLogger(__name__)

Identifier = Union[str, int]

TREND_TYPES = ("add", "drop")
PLAYERS_PATH = "/players/nfl"


def _require_identifier(name: str, value: Identifier) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"{name} must be a string or integer, got {type(value).__name__}")
    text = str(value).strip()
    if not text:
        raise ValueError(f"{name} is required")
    return text


def _path_segment(name: str, value: Identifier) -> str:
    """Validate an identifier and escape it for use as one URL path segment."""
    return quote(_require_identifier(name, value), safe="")


def _require_positive_int(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


class SleeperAPI:
    """
    Sleeper API client with per-path response memoization.

    Construct one instance and hand it to every consumer; the cache lives as
    long as the instance does. A caller-supplied session is shared with the
    worker threads of the aggregate fetchers and is never modified; the
    User-Agent travels with each request instead.
    """

    def __init__(
        self,
        base_url: str = "https://api.sleeper.app/v1",
        session: Optional[requests.Session] = None,
        policy: Optional[FreshnessPolicy] = None,
        clock: Optional[Callable[[], float]] = None,
        timeout: Optional[float] = None,
        user_agent: str = "Fantasy-Football-Assistant/1.0",
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"User-Agent": user_agent}
        self.cache = ResponseCache(policy, clock=clock or time.time)

    @classmethod
    def from_settings(cls, session: Optional[requests.Session] = None) -> "SleeperAPI":
        return cls(
            base_url=settings.BASE_URL,
            session=session,
            policy=FreshnessPolicy(
                standard_ttl=settings.CACHE_TTL,
                bulk_ttl=settings.PLAYERS_CACHE_TTL,
            ),
            timeout=settings.REQUEST_TIMEOUT,
            user_agent=settings.USER_AGENT,
        )

    # ------------------------------------------------------------------ #
    # Transport & caching
    # ------------------------------------------------------------------ #
    def fetch_resource(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        use_cache: bool = True,
        freshness: FreshnessClass = FreshnessClass.STANDARD,
    ) -> Any:
        """GET ``base_url + path`` and return the decoded JSON body.

        A fresh cached payload is returned without touching the network when
        ``use_cache`` is set. Every successful fetch replaces the entry.
        """
        key = CacheKey.for_request(path, params)

        if use_cache:
            entry = self.cache.get_fresh(key, freshness)
            if entry is not None:
                logger.debug("Using cached data for %s", key.target())
                return entry.payload

        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(
                url,
                params=dict(key.params) or None,
                headers=self.headers,
                timeout=self.timeout,
            )
            if not response.ok:
                raise RemoteRequestError(response.status_code, response.reason or "", url=url)
            data = response.json()
        except Exception as exc:
            logger.error("Sleeper API error for %s: %s", key.target(), exc)
            raise

        self.cache.store(key, data)
        return data

    def clear_cache(self) -> None:
        """Drop every cached response."""
        self.cache.clear()
        logger.info("Sleeper API cache cleared")

    # ------------------------------------------------------------------ #
    # League resources
    # ------------------------------------------------------------------ #
    def get_league(self, league_id: Identifier, use_cache: bool = True) -> Dict:
        league_id = _path_segment("league_id", league_id)
        return self.fetch_resource(f"/league/{league_id}", use_cache=use_cache)

    def get_rosters(self, league_id: Identifier, use_cache: bool = True) -> List[Dict]:
        league_id = _path_segment("league_id", league_id)
        return self.fetch_resource(f"/league/{league_id}/rosters", use_cache=use_cache)

    def get_users(self, league_id: Identifier, use_cache: bool = True) -> List[Dict]:
        league_id = _path_segment("league_id", league_id)
        return self.fetch_resource(f"/league/{league_id}/users", use_cache=use_cache)

    def get_matchups(self, league_id: Identifier, week: int, use_cache: bool = True) -> List[Dict]:
        league_id = _path_segment("league_id", league_id)
        week = _require_positive_int("week", week)
        return self.fetch_resource(f"/league/{league_id}/matchups/{week}", use_cache=use_cache)

    def get_transactions(self, league_id: Identifier, week: int, use_cache: bool = True) -> List[Dict]:
        league_id = _path_segment("league_id", league_id)
        week = _require_positive_int("week", week)
        return self.fetch_resource(f"/league/{league_id}/transactions/{week}", use_cache=use_cache)

    # ------------------------------------------------------------------ #
    # Drafts
    # ------------------------------------------------------------------ #
    def get_drafts(self, league_id: Identifier, use_cache: bool = True) -> List[Dict]:
        league_id = _path_segment("league_id", league_id)
        return self.fetch_resource(f"/league/{league_id}/drafts", use_cache=use_cache)

    def get_draft(self, draft_id: Identifier, use_cache: bool = True) -> Dict:
        draft_id = _path_segment("draft_id", draft_id)
        return self.fetch_resource(f"/draft/{draft_id}", use_cache=use_cache)

    def get_draft_picks(self, draft_id: Identifier, use_cache: bool = True) -> List[Dict]:
        draft_id = _path_segment("draft_id", draft_id)
        return self.fetch_resource(f"/draft/{draft_id}/picks", use_cache=use_cache)

    def get_traded_picks(self, draft_id: Identifier, use_cache: bool = True) -> List[Dict]:
        draft_id = _path_segment("draft_id", draft_id)
        return self.fetch_resource(f"/draft/{draft_id}/traded_picks", use_cache=use_cache)

    # ------------------------------------------------------------------ #
    # Players, users and season state
    # ------------------------------------------------------------------ #
    def get_all_players(self, use_cache: bool = True) -> Dict[str, Dict]:
        """Get all NFL players (large dataset, kept for the bulk TTL)."""
        return self.fetch_resource(PLAYERS_PATH, use_cache=use_cache, freshness=FreshnessClass.BULK)

    def get_player(self, player_id: Identifier, use_cache: bool = True) -> Optional[Dict]:
        """Look a player up in the directory; ``None`` when the id is unknown."""
        player_id = _require_identifier("player_id", player_id)
        players = self.get_all_players(use_cache=use_cache) or {}
        return players.get(player_id)

    def get_user_by_username(self, username: str, use_cache: bool = True) -> Optional[Dict]:
        username = _path_segment("username", username)
        return self.fetch_resource(f"/user/{username}", use_cache=use_cache)

    def get_trending_players(
        self,
        trend_type: str = "add",
        lookback_hours: int = 24,
        limit: int = 25,
        use_cache: bool = True,
    ) -> List[Dict]:
        """Get trending players (adds/drops) over the lookback window."""
        if trend_type not in TREND_TYPES:
            raise ValueError(f"trend_type must be one of {TREND_TYPES}, got {trend_type!r}")
        lookback_hours = _require_positive_int("lookback_hours", lookback_hours)
        limit = _require_positive_int("limit", limit)
        return self.fetch_resource(
            f"/players/nfl/trending/{trend_type}",
            params={"lookback_hours": lookback_hours, "limit": limit},
            use_cache=use_cache,
        )

    def get_nfl_state(self, use_cache: bool = True) -> Dict:
        """Get current NFL state (week, season, etc.)"""
        return self.fetch_resource("/state/nfl", use_cache=use_cache)
