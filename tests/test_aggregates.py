"""
Unit tests for the composite league and draft fetchers.
"""

import threading
import time
from unittest.mock import Mock

import pytest
import requests

from fantasy_assistant import AggregateFetcher, RemoteRequestError, ResultEnvelope

from conftest import make_response

BASE = "https://api.example.test/v1"

LEAGUE = {"league_id": "L1", "name": "Sunday Funday", "total_rosters": 10}
ROSTERS = [{"roster_id": 1, "owner_id": "u1"}, {"roster_id": 2, "owner_id": "u2"}]
USERS = [{"user_id": "u1", "display_name": "alpha"}, {"user_id": "u2", "display_name": "bravo"}]


def route(responses):
    """Answer session.get by URL; values may be payloads or exceptions."""

    def fake_get(url, params=None, headers=None, timeout=None):
        outcome = responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return fake_get


@pytest.fixture
def fetcher(client):
    return AggregateFetcher(client)


class TestResultEnvelope:
    def test_ok_flattens_data(self):
        envelope = ResultEnvelope.ok(draft={"draft_id": "D1"}, picks=[])
        assert envelope.as_dict() == {"success": True, "draft": {"draft_id": "D1"}, "picks": []}
        assert envelope["draft"] == {"draft_id": "D1"}

    def test_failure_has_only_error(self):
        assert ResultEnvelope.failure("boom").as_dict() == {"success": False, "error": "boom"}

    def test_defaults_match_declared_fields(self):
        envelope = ResultEnvelope(success=False)

        assert envelope.data is None
        assert envelope.error is None
        assert ResultEnvelope.failure("boom").data is None
        with pytest.raises(KeyError):
            envelope["league"]


class TestLeagueData:
    def league_responses(self):
        return {
            f"{BASE}/league/L1": make_response(LEAGUE),
            f"{BASE}/league/L1/rosters": make_response(ROSTERS),
            f"{BASE}/league/L1/users": make_response(USERS),
        }

    def test_success_populates_all_three(self, fetcher, session):
        session.get.side_effect = route(self.league_responses())

        envelope = fetcher.get_league_data("L1")

        assert envelope.success is True
        assert envelope.as_dict() == {
            "success": True,
            "league": LEAGUE,
            "rosters": ROSTERS,
            "users": USERS,
        }
        assert session.get.call_count == 3

    @pytest.mark.parametrize("failing_path", ["/league/L1", "/league/L1/rosters", "/league/L1/users"])
    def test_any_single_failure_fails_whole_operation(self, fetcher, session, failing_path):
        responses = self.league_responses()
        responses[f"{BASE}{failing_path}"] = make_response(status_code=500, reason="Internal Server Error")
        session.get.side_effect = route(responses)

        envelope = fetcher.get_league_data("L1")

        assert envelope.as_dict() == {"success": False, "error": "API Error: 500 Internal Server Error"}

    def test_transport_failure_is_reported_in_band(self, fetcher, session):
        responses = self.league_responses()
        responses[f"{BASE}/league/L1/users"] = requests.ConnectionError("Name or service not known")
        session.get.side_effect = route(responses)

        envelope = fetcher.get_league_data("L1")

        assert envelope.success is False
        assert envelope.error == "Name or service not known"

    def test_empty_exception_message_still_reports_error(self):
        client = Mock()
        client.get_league.side_effect = requests.Timeout()
        client.get_rosters.return_value = ROSTERS
        client.get_users.return_value = USERS

        envelope = AggregateFetcher(client).get_league_data("L1")

        assert envelope.success is False
        assert envelope.error == "Timeout"

    def test_requests_are_in_flight_together(self):
        barrier = threading.Barrier(3, timeout=2)

        def arrive(payload):
            def call(league_id):
                barrier.wait()
                return payload

            return call

        client = Mock()
        client.get_league.side_effect = arrive(LEAGUE)
        client.get_rosters.side_effect = arrive(ROSTERS)
        client.get_users.side_effect = arrive(USERS)

        envelope = AggregateFetcher(client).get_league_data("L1")

        assert envelope.as_dict() == {
            "success": True,
            "league": LEAGUE,
            "rosters": ROSTERS,
            "users": USERS,
        }

    def test_first_failure_returns_without_waiting_for_the_rest(self):
        release = threading.Event()

        def slow_league(league_id):
            release.wait(5)
            return LEAGUE

        client = Mock()
        client.get_league.side_effect = slow_league
        client.get_rosters.side_effect = RemoteRequestError(500, "Internal Server Error")
        client.get_users.return_value = USERS

        started = time.monotonic()
        try:
            envelope = AggregateFetcher(client).get_league_data("L1")
            elapsed = time.monotonic() - started
        finally:
            release.set()

        assert envelope.as_dict() == {"success": False, "error": "API Error: 500 Internal Server Error"}
        assert elapsed < 2

    def test_invalid_league_id_is_reported_in_band(self, fetcher, session):
        envelope = fetcher.get_league_data("")

        assert envelope.success is False
        assert envelope.error
        session.get.assert_not_called()


class TestDraftData:
    def test_no_drafts(self, fetcher, session):
        session.get.side_effect = route({f"{BASE}/league/L1/drafts": make_response([])})

        envelope = fetcher.get_draft_data("L1")

        assert envelope.as_dict() == {"success": False, "error": "No drafts found for this league"}
        session.get.assert_called_once()

    def test_first_draft_is_selected(self, fetcher, session):
        drafts = [{"draft_id": "D1", "season": "2025"}, {"draft_id": "D2", "season": "2024"}]
        picks = [{"pick_no": 1, "player_id": "4046", "draft_id": "D1"}]
        session.get.side_effect = route(
            {
                f"{BASE}/league/L1/drafts": make_response(drafts),
                f"{BASE}/draft/D1/picks": make_response(picks),
            }
        )

        envelope = fetcher.get_draft_data("L1")

        assert envelope.as_dict() == {"success": True, "draft": drafts[0], "picks": picks}
        requested = [call.args[0] for call in session.get.call_args_list]
        assert requested == [f"{BASE}/league/L1/drafts", f"{BASE}/draft/D1/picks"]

    def test_drafts_failure(self, fetcher, session):
        session.get.side_effect = route(
            {f"{BASE}/league/L1/drafts": make_response(status_code=404, reason="Not Found")}
        )

        envelope = fetcher.get_draft_data("L1")

        assert envelope.as_dict() == {"success": False, "error": "API Error: 404 Not Found"}

    def test_picks_failure(self, fetcher, session):
        session.get.side_effect = route(
            {
                f"{BASE}/league/L1/drafts": make_response([{"draft_id": "D1"}]),
                f"{BASE}/draft/D1/picks": requests.ConnectionError("connection reset by peer"),
            }
        )

        envelope = fetcher.get_draft_data("L1")

        assert envelope.success is False
        assert envelope.error == "connection reset by peer"

    def test_never_raises(self):
        client = Mock()
        client.get_drafts.side_effect = RemoteRequestError(429, "Too Many Requests")

        envelope = AggregateFetcher(client).get_draft_data("L1")

        assert envelope.error == "API Error: 429 Too Many Requests"
