# StateAir: fetch and standardise US diplomatic post air quality data
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Composable DataFrame transformation functions.

This module provides small, pure functions that transform DataFrames in
predictable ways, and uses them to turn a list of measurement records into
the long-format table used by the rest of the aggregation pipeline.

All transformer functions follow the pattern:
    - Take configuration as arguments
    - Return a function that transforms a DataFrame
    - Are pure (no side effects)
    - Are composable

Example:
    >>> normalise = compose(
    ...     rename_columns({"parameter": "measurand"}),
    ...     add_column("source_network", "StateAir"),
    ...     convert_timestamps("date_time", utc=True)
    ... )
    >>> df_normalised = normalise(df_raw)
"""

from functools import reduce
from typing import Any, Callable

import pandas as pd

from .builder import LOCATION_PREFIX
from .types import DATA_COLUMNS, MeasurementRecord, Transformer

SOURCE_NETWORK = "StateAir"

# StateAir kinds -> standard measurand names
MEASURAND_MAP = {
    "pm25": "PM2.5",
    "o3": "O3",
}


def pipe(df: pd.DataFrame, *functions: Transformer) -> pd.DataFrame:
    """
    Apply a series of transformation functions to a DataFrame in sequence.

    Args:
        df: Input DataFrame
        *functions: Variable number of transformer functions to apply

    Returns:
        pd.DataFrame: Transformed DataFrame after all functions applied
    """
    return reduce(lambda data, func: func(data), functions, df)


def compose(*functions: Transformer) -> Transformer:
    """
    Compose multiple transformer functions into a single function.

    Args:
        *functions: Variable number of transformer functions to compose

    Returns:
        Transformer: A new function that applies all transformations
    """

    def composed(df: pd.DataFrame) -> pd.DataFrame:
        return pipe(df, *functions)

    return composed


def rename_columns(mapping: dict[str, str]) -> Transformer:
    """Return a function that renames DataFrame columns."""

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.rename(columns=mapping)

    return transform


def add_column(name: str, value: Any | Callable[[pd.DataFrame], Any]) -> Transformer:
    """
    Return a function that adds (or replaces) a DataFrame column.

    The value can be either:
    - A static value (string, number, etc.) applied to all rows
    - A callable that takes the DataFrame and returns a value or Series

    Example:
        >>> transform = add_column("source_network", "StateAir")
        >>> transform = add_column("year", lambda df: df["date_time"].dt.year)
    """

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        if callable(value):
            return df.assign(**{name: value(df)})
        else:
            return df.assign(**{name: value})

    return transform


def convert_timestamps(column: str, **kwargs) -> Transformer:
    """
    Return a function that converts a column to datetime type.

    Args:
        column: Name of the column to convert
        **kwargs: Additional arguments passed to pd.to_datetime()
    """

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.assign(**{column: pd.to_datetime(df[column], **kwargs)})

    return transform


def select_columns(*columns: str) -> Transformer:
    """
    Return a function that selects only specified columns, in that order.

    Silently ignores columns that don't exist.
    """

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        cols_to_select = [col for col in columns if col in df.columns]
        return df[cols_to_select]

    return transform


def _flatten(measurement: MeasurementRecord) -> dict:
    coordinates = measurement.get("coordinates") or {}
    return {
        "location": measurement["location"],
        "parameter": measurement["parameter"],
        "value": measurement["value"],
        "unit": measurement["unit"],
        "latitude": coordinates.get("latitude"),
        "longitude": coordinates.get("longitude"),
        "utc": measurement["date"]["utc"],
        "local": measurement["date"]["local"],
    }


def create_measurement_normalizer() -> Transformer:
    """
    Create the pipeline turning flattened records into the standard schema.

    date_time is a UTC datetime column. date_time_local keeps the station
    ISO string, since one table may hold several offsets.
    """
    return compose(
        rename_columns(
            {
                "location": "site_code",
                "parameter": "measurand",
                "unit": "units",
                "utc": "date_time",
                "local": "date_time_local",
            }
        ),
        add_column(
            "site_code", lambda df: df["site_code"].str.removeprefix(LOCATION_PREFIX)
        ),
        add_column(
            "measurand",
            lambda df: df["measurand"].map(MEASURAND_MAP).fillna(df["measurand"]),
        ),
        convert_timestamps("date_time", utc=True),
        add_column("source_network", SOURCE_NETWORK),
        add_column("ratification", "Provisional"),
        select_columns(*DATA_COLUMNS),
    )


def measurements_to_dataframe(measurements: list[MeasurementRecord]) -> pd.DataFrame:
    """
    Convert measurement records into a long-format DataFrame.

    Args:
        measurements: Records returned by the adapter

    Returns:
        pd.DataFrame: One row per record with columns DATA_COLUMNS

    Example:
        >>> result = fetch_data({"url": "http://.../Hanoi-PM2.5.xml"})
        >>> df = measurements_to_dataframe(result["measurements"])
    """
    if not measurements:
        return pd.DataFrame(columns=DATA_COLUMNS)

    df = pd.DataFrame([_flatten(m) for m in measurements])
    return create_measurement_normalizer()(df)
