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
Core type definitions for StateAir.

This module defines the record schemas and function type aliases shared by
the fetcher, parser, builder and adapter modules. Records are plain
dictionaries so they can be handed straight to the aggregation pipeline.
"""

from typing import Awaitable, Callable, TypeAlias, TypedDict

import pandas as pd


class SourceDescriptor(TypedDict, total=False):
    """
    A StateAir source as configured in the aggregation pipeline.

    Required fields:
        url: PM2.5 feed URL. It must contain the literal token "PM2.5",
            which is substituted to derive the ozone feed URL.

    Optional fields:
        name: Source name (informational only)
        city: City of the diplomatic post
        country: Country code of the diplomatic post
    """
    url: str
    name: str
    city: str
    country: str


class Coordinates(TypedDict):
    """Station position in decimal degrees."""
    latitude: float
    longitude: float


class ResolvedTimestamp(TypedDict):
    """
    A reading time rendered twice, as second-precision ISO-8601 strings.

    Both strings always represent the same instant.
    """
    utc: str
    local: str


class AveragingPeriod(TypedDict):
    value: int
    unit: str


class Attribution(TypedDict):
    name: str
    url: str


class ParsedItem(TypedDict):
    """One <item> element from a feed, before enrichment."""
    value: float
    raw_timestamp: str
    station_name: str


class MeasurementRecord(TypedDict, total=False):
    """
    Canonical measurement record consumed by the aggregation pipeline.

    Fields:
        location: "US Diplomatic Post: " followed by the station name
        parameter: "pm25" or "o3"
        unit: Unit of value (fixed per parameter before unit conversion)
        value: Measured concentration (NaN if the feed value was malformed)
        averagingPeriod: Always {"value": 1, "unit": "hours"}
        attribution: Data provider credits
        coordinates: Station position. Absent for an unknown station.
        date: Reading time in UTC and station local time
    """
    location: str
    parameter: str
    unit: str
    value: float
    averagingPeriod: AveragingPeriod
    attribution: list[Attribution]
    coordinates: Coordinates
    date: ResolvedTimestamp


class PipelineResult(TypedDict):
    """Successful adapter output."""
    name: str
    measurements: list[MeasurementRecord]


# Mapping from kind ("pm25", "o3") to raw feed body ("" when the feed is absent)
FetchResult: TypeAlias = dict[str, str | bytes]

Transport: TypeAlias = Callable[[str], str | bytes]
"""
A function that returns the body at a URL.

Args:
    url: Feed URL

Returns:
    str | bytes: Response body. Bytes are decoded by the parser using the
        encoding in the XML declaration.

Raises:
    FeedNotFound or requests.HTTPError (status 404): the feed does not exist
    Exception: any other retrieval failure
"""

UnitConverter: TypeAlias = Callable[[list[MeasurementRecord]], list[MeasurementRecord]]
"""
A function that rewrites measurement values and units.

Args:
    measurements: Every record built in one adapter invocation

Returns:
    list: Records of the same shape, values/units possibly rewritten
"""

DataFetcher: TypeAlias = Callable[..., PipelineResult]
AsyncDataFetcher: TypeAlias = Callable[..., Awaitable[PipelineResult]]

Transformer: TypeAlias = Callable[[pd.DataFrame], pd.DataFrame]
"""
A function that transforms a DataFrame (e.g., renaming columns, adding fields).

Args:
    df: Input DataFrame

Returns:
    pd.DataFrame: Transformed DataFrame
"""


class AdapterSpec(TypedDict):
    """
    Functions and metadata the aggregation pipeline needs to run an adapter
    and export its output.
    """
    name: str
    fetch_data: DataFetcher
    fetch_data_async: AsyncDataFetcher
    to_dataframe: Callable[[list[MeasurementRecord]], pd.DataFrame]
    requires_api_key: bool


# Standard column names of the tabular export - for reference and validation
DATA_COLUMNS = [
    "site_code",
    "date_time",
    "date_time_local",
    "measurand",
    "value",
    "units",
    "latitude",
    "longitude",
    "source_network",
    "ratification",
]
