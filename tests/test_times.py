"""
Tests for times.py - reading time resolution.
"""

import pandas as pd
import pytest

from stateair.errors import FeedParseError, TimestampError
from stateair.locations import DEFAULT_DIRECTORY, STATION_TIMEZONES
from stateair.times import TimeResolution, resolve, resolve_timestamp


class TestResolveTimestamp:
    """Test resolution at known stations."""

    def test_new_delhi(self):
        result = resolve_timestamp("2023-06-01 08:00:00", "New Delhi", DEFAULT_DIRECTORY)

        assert result == {
            "utc": "2023-06-01T02:30:00Z",
            "local": "2023-06-01T08:00:00+05:30",
        }

    def test_evening_west_of_greenwich_is_next_utc_day(self):
        """Evening readings west of Greenwich fall on the next UTC day."""
        result = resolve_timestamp("2023-06-01 20:00:00", "Lima", DEFAULT_DIRECTORY)

        assert result == {
            "utc": "2023-06-02T01:00:00Z",
            "local": "2023-06-01T20:00:00-05:00",
        }

    def test_quarter_hour_offset(self):
        result = resolve_timestamp("2023-06-01 12:00:00", "Embassy Kathmandu", DEFAULT_DIRECTORY)

        assert result["local"] == "2023-06-01T12:00:00+05:45"
        assert result["utc"] == "2023-06-01T06:15:00Z"

    def test_daylight_saving_time(self):
        summer = resolve_timestamp("2023-07-01 12:00:00", "Sarajevo", DEFAULT_DIRECTORY)
        winter = resolve_timestamp("2023-01-01 12:00:00", "Sarajevo", DEFAULT_DIRECTORY)

        assert summer["local"].endswith("+02:00")
        assert winter["local"].endswith("+01:00")

    def test_nonexistent_time_shifts_forward(self):
        """02:30 does not exist in Sarajevo on the spring-forward night."""
        result = resolve_timestamp("2023-03-26 02:30:00", "Sarajevo", DEFAULT_DIRECTORY)

        assert result["local"] == "2023-03-26T03:00:00+02:00"
        assert result["utc"] == "2023-03-26T01:00:00Z"

    def test_no_fractional_seconds(self):
        result = resolve_timestamp("2023-06-01 08:00:59", "Hanoi", DEFAULT_DIRECTORY)

        assert result["local"] == "2023-06-01T08:00:59+07:00"
        assert "." not in result["utc"]

    @pytest.mark.parametrize("station", sorted(STATION_TIMEZONES))
    def test_utc_and_local_are_same_instant(self, station):
        """Every zone in the built-in table resolves."""
        result = resolve_timestamp("2023-06-01 08:00:00", station, DEFAULT_DIRECTORY)

        local = pd.Timestamp(result["local"])
        utc = pd.Timestamp(result["utc"])

        assert local == utc
        assert local.tz_convert(DEFAULT_DIRECTORY.timezone(station)).strftime(
            "%Y-%m-%d %H:%M:%S"
        ) == "2023-06-01 08:00:00"


class TestUnknownStation:
    """Test the UTC fallback for stations missing from the directory."""

    def test_assumes_utc(self):
        result = resolve("2023-06-01 08:00:00", "Atlantis", DEFAULT_DIRECTORY)

        assert result == TimeResolution(
            utc="2023-06-01T08:00:00Z",
            local="2023-06-01T08:00:00+00:00",
            timezone="UTC",
            assumed_utc=True,
        )

    def test_empty_station_name(self):
        result = resolve("2023-06-01 08:00:00", "", DEFAULT_DIRECTORY)

        assert result.assumed_utc
        assert result.utc == "2023-06-01T08:00:00Z"

    def test_known_station_not_marked(self):
        assert not resolve("2023-06-01 08:00:00", "Accra", DEFAULT_DIRECTORY).assumed_utc

    def test_as_dict_drops_marker(self):
        result = resolve("2023-06-01 08:00:00", "Atlantis", DEFAULT_DIRECTORY)

        assert result.as_dict() == {
            "utc": "2023-06-01T08:00:00Z",
            "local": "2023-06-01T08:00:00+00:00",
        }


class TestInvalidTimestamp:
    """Test rejection of malformed reading times."""

    @pytest.mark.parametrize(
        "raw",
        ["", "2023-06-01", "06/01/2023 08:00:00 AM", "2023-06-01T08:00:00", "2023-13-01 08:00:00"],
    )
    def test_raises(self, raw):
        with pytest.raises(TimestampError, match="Invalid reading time"):
            resolve_timestamp(raw, "New Delhi", DEFAULT_DIRECTORY)

    def test_is_feed_parse_error(self):
        with pytest.raises(FeedParseError):
            resolve_timestamp("yesterday", "New Delhi", DEFAULT_DIRECTORY)
