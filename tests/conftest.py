"""
Pytest configuration and shared fixtures.

This module provides feed bodies, station directories and fake transports
used across all tests.
"""

from pathlib import Path

import pytest
import requests

from stateair.errors import FeedNotFound
from stateair.locations import LocationDirectory

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir():
    """Return path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def stateair_fixtures_dir(fixtures_dir):
    """Return path to StateAir feed fixtures."""
    return fixtures_dir / "stateair"


# ============================================================================
# Feed Bodies
# ============================================================================


@pytest.fixture
def pm25_body(stateair_fixtures_dir):
    """New Delhi PM2.5 feed with three hourly readings."""
    return (stateair_fixtures_dir / "new_delhi_pm25.xml").read_text(encoding="utf-8")


@pytest.fixture
def o3_body(stateair_fixtures_dir):
    """New Delhi ozone feed with two hourly readings."""
    return (stateair_fixtures_dir / "new_delhi_o3.xml").read_text(encoding="utf-8")


@pytest.fixture
def unknown_station_body(stateair_fixtures_dir):
    """PM2.5 feed from a station missing from the directory."""
    return (stateair_fixtures_dir / "unknown_station_pm25.xml").read_text(
        encoding="utf-8"
    )


@pytest.fixture
def malformed_body(stateair_fixtures_dir):
    """Feed that is not well-formed XML."""
    return (stateair_fixtures_dir / "malformed.xml").read_text(encoding="utf-8")


@pytest.fixture
def single_item_body():
    """The smallest useful feed: one New Delhi reading."""
    return (
        "<rss><channel><title>New Delhi</title>"
        "<item><Conc>12.3</Conc>"
        "<ReadingDateTime>2023-06-01 08:00:00</ReadingDateTime></item>"
        "</channel></rss>"
    )


# ============================================================================
# Directories
# ============================================================================


@pytest.fixture
def small_directory():
    """Directory with two stations and one timezone-only entry."""
    return LocationDirectory(
        {
            "New Delhi": "Asia/Kolkata",
            "Sarajevo": "Europe/Sarajevo",
            "Nowhere": "Africa/Accra",
        },
        {
            "New Delhi": {"latitude": 28.63576, "longitude": 77.22445},
            "Sarajevo": {"latitude": 43.856667, "longitude": 18.398205},
        },
    )


# ============================================================================
# Fake Transports
# ============================================================================


def http_error(status: int) -> requests.exceptions.HTTPError:
    """Build an HTTPError carrying a response with the given status."""
    response = requests.Response()
    response.status_code = status
    return requests.exceptions.HTTPError(f"{status} Error", response=response)


class FakeTransport:
    """
    Transport returning canned responses by URL.

    Values may be a body string or an exception instance to raise.
    Unknown URLs raise FeedNotFound. Every requested URL is recorded.
    """

    def __init__(self, responses: dict):
        self.responses = dict(responses)
        self.calls = []

    def __call__(self, url: str) -> str:
        self.calls.append(url)
        response = self.responses.get(url, FeedNotFound(url))
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def fake_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


def assert_has_columns(df, columns: list[str]):
    """Assert that DataFrame has all specified columns."""
    missing = set(columns) - set(df.columns)
    assert not missing, f"Missing columns: {missing}"


# Make helpers available to tests
pytest.http_error = http_error
pytest.assert_has_columns = assert_has_columns
