"""
Tests for transforms.py - composable DataFrame transforms and tabular export.
"""

import math

import pandas as pd
import pytest

from stateair.transforms import (
    add_column,
    compose,
    convert_timestamps,
    measurements_to_dataframe,
    pipe,
    rename_columns,
    select_columns,
)
from stateair.types import DATA_COLUMNS


@pytest.fixture
def sample_df():
    return pd.DataFrame(
        {
            "parameter": ["pm25", "o3"],
            "value": [12.3, 0.035],
            "utc": ["2023-06-01T02:30:00Z", "2023-06-01T02:30:00Z"],
        }
    )


@pytest.fixture
def sample_measurements():
    return [
        {
            "location": "US Diplomatic Post: New Delhi",
            "parameter": "pm25",
            "unit": "µg/m³",
            "value": 12.3,
            "averagingPeriod": {"value": 1, "unit": "hours"},
            "attribution": [],
            "coordinates": {"latitude": 28.63576, "longitude": 77.22445},
            "date": {
                "utc": "2023-06-01T02:30:00Z",
                "local": "2023-06-01T08:00:00+05:30",
            },
        },
        {
            "location": "US Diplomatic Post: Atlantis",
            "parameter": "o3",
            "unit": "ppm",
            "value": math.nan,
            "averagingPeriod": {"value": 1, "unit": "hours"},
            "attribution": [],
            "date": {
                "utc": "2023-06-01T08:00:00Z",
                "local": "2023-06-01T08:00:00+00:00",
            },
        },
    ]


# ============================================================================
# Transform Primitives
# ============================================================================


class TestPrimitives:
    """Test the individual transformer functions."""

    def test_rename_columns(self, sample_df):
        result = rename_columns({"parameter": "measurand"})(sample_df)

        assert "measurand" in result.columns
        assert "parameter" not in result.columns

    def test_add_static_column(self, sample_df):
        result = add_column("source_network", "StateAir")(sample_df)

        assert (result["source_network"] == "StateAir").all()

    def test_add_computed_column(self, sample_df):
        result = add_column("double", lambda df: df["value"] * 2)(sample_df)

        assert result["double"].tolist() == [24.6, 0.07]

    def test_add_column_does_not_mutate_input(self, sample_df):
        add_column("x", 1)(sample_df)

        assert "x" not in sample_df.columns

    def test_convert_timestamps(self, sample_df):
        result = convert_timestamps("utc", utc=True)(sample_df)

        assert result["utc"].iloc[0] == pd.Timestamp("2023-06-01 02:30:00", tz="UTC")

    def test_select_columns_ignores_missing(self, sample_df):
        result = select_columns("value", "missing", "parameter")(sample_df)

        assert list(result.columns) == ["value", "parameter"]

    def test_pipe_and_compose_agree(self, sample_df):
        steps = (rename_columns({"value": "v"}), add_column("k", 1))

        pd.testing.assert_frame_equal(pipe(sample_df, *steps), compose(*steps)(sample_df))

    def test_pipe_without_functions(self, sample_df):
        assert pipe(sample_df) is sample_df


# ============================================================================
# measurements_to_dataframe()
# ============================================================================


class TestMeasurementsToDataFrame:
    """Test conversion of adapter output to the standard table."""

    def test_columns(self, sample_measurements):
        df = measurements_to_dataframe(sample_measurements)

        pytest.assert_has_columns(df, DATA_COLUMNS)
        assert list(df.columns) == DATA_COLUMNS

    def test_values(self, sample_measurements):
        df = measurements_to_dataframe(sample_measurements)
        row = df.iloc[0]

        assert row["site_code"] == "New Delhi"
        assert row["measurand"] == "PM2.5"
        assert row["units"] == "µg/m³"
        assert row["value"] == 12.3
        assert row["latitude"] == 28.63576
        assert row["longitude"] == 77.22445
        assert row["date_time"] == pd.Timestamp("2023-06-01 02:30:00", tz="UTC")
        assert row["date_time_local"] == "2023-06-01T08:00:00+05:30"
        assert row["source_network"] == "StateAir"
        assert row["ratification"] == "Provisional"

    def test_unknown_station_row(self, sample_measurements):
        row = measurements_to_dataframe(sample_measurements).iloc[1]

        assert row["site_code"] == "Atlantis"
        assert row["measurand"] == "O3"
        assert pd.isna(row["latitude"])
        assert pd.isna(row["value"])

    def test_empty(self):
        df = measurements_to_dataframe([])

        assert df.empty
        assert list(df.columns) == DATA_COLUMNS
