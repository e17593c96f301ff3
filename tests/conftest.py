"""Shared fixtures: a fake clock and a mocked requests session."""

from unittest.mock import Mock

import pytest

from fantasy_assistant import FreshnessPolicy, SleeperAPI


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_response(payload=None, status_code=200, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.ok = 200 <= status_code < 400
    response.json.return_value = payload
    return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    mock_session = Mock()
    mock_session.headers = {}
    mock_session.get.return_value = make_response({})
    return mock_session


@pytest.fixture
def client(session, clock):
    return SleeperAPI(
        base_url="https://api.example.test/v1",
        session=session,
        policy=FreshnessPolicy(standard_ttl=300, bulk_ttl=86400),
        clock=clock,
    )
