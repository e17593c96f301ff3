"""
Composite reads that combine several Sleeper requests into one result.

These never raise: any failure from the underlying requests is logged and
reported in-band through a ``ResultEnvelope``.
"""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .sleeper_api import Identifier, SleeperAPI

logger = logging.getLogger(__name__)

NO_DRAFTS_MESSAGE = "No drafts found for this league"


@dataclass
class ResultEnvelope:
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, **data: Any) -> "ResultEnvelope":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "ResultEnvelope":
        return cls(success=False, error=error)

    def __getitem__(self, name: str) -> Any:
        if self.data is None:
            raise KeyError(name)
        return self.data[name]

    def as_dict(self) -> Dict:
        if self.success:
            return {"success": True, **(self.data or {})}
        return {"success": False, "error": self.error}


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class AggregateFetcher:
    """Runs the multi-request flows on top of a shared SleeperAPI."""

    def __init__(self, client: SleeperAPI):
        self.client = client

    def get_league_data(self, league_id: Identifier) -> ResultEnvelope:
        """Fetch league info, rosters and users concurrently.

        All three must succeed; the first failure observed wins and no
        partial data is returned.
        """
        pool = ThreadPoolExecutor(max_workers=3, thread_name_prefix="league-data")
        try:
            futures = [
                pool.submit(self.client.get_league, league_id),
                pool.submit(self.client.get_rosters, league_id),
                pool.submit(self.client.get_users, league_id),
            ]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()

            league, rosters, users = (future.result() for future in futures)
            return ResultEnvelope.ok(league=league, rosters=rosters, users=users)
        except Exception as exc:
            logger.error("Error fetching league data for %s: %s", league_id, exc)
            return ResultEnvelope.failure(_describe(exc))
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def get_draft_data(self, league_id: Identifier) -> ResultEnvelope:
        """Fetch the league's first listed draft and its picks."""
        try:
            drafts = self.client.get_drafts(league_id)
            if not drafts:
                return ResultEnvelope.failure(NO_DRAFTS_MESSAGE)

            # Sleeper lists the most recent draft first
            draft = drafts[0]
            picks = self.client.get_draft_picks(draft["draft_id"])
            return ResultEnvelope.ok(draft=draft, picks=picks)
        except Exception as exc:
            logger.error("Error fetching draft data for %s: %s", league_id, exc)
            return ResultEnvelope.failure(_describe(exc))
