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
StateAir Data Source.

This module is the adapter entry point for the US Department of State
air quality monitors at diplomatic posts ("StateAir"). Each post publishes
hourly PM2.5 and ozone readings as two RSS feeds. The adapter fetches both
concurrently, parses them, attaches station coordinates and timezone-aware
reading times, and converts units.

Either feed may be missing (HTTP 404); that kind then contributes no
measurements. Any other fetch failure, or malformed feed content, fails the
whole invocation with an AdapterError and no partial results.

Data Coverage: US embassies and consulates worldwide
Data Provider: EPA AirNow Department of State program
"""

import asyncio
from enum import Enum
from logging import getLogger

from .builder import build_records
from .decorators import with_logging
from .errors import (
    FeedParseError,
    FetchError,
    FetchFailure,
    ParseError,
    UnknownAdapterError,
)
from .fetcher import derive_feed_urls, fetch_feeds, http_get
from .locations import LocationDirectory, get_default_directory
from .parser import parse_feed
from .transforms import measurements_to_dataframe
from .types import (
    AdapterSpec,
    FetchResult,
    MeasurementRecord,
    PipelineResult,
    SourceDescriptor,
    Transport,
    UnitConverter,
)
from .units import convert_units

logger = getLogger(__name__)

# Opaque name expected in the result by the aggregation pipeline
RESULT_NAME = "unused"


class State(Enum):
    FETCHING = "fetching"
    NORMALISING = "normalising"
    DONE = "done"
    FAILED = "failed"


def _transition(state: State, url: str) -> None:
    logger.debug(f"StateAir adapter {state.value}: {url}")


# ============================================================================
# NORMALISATION
# ============================================================================


def normalise_feeds(
    results: FetchResult, directory: LocationDirectory
) -> list[MeasurementRecord]:
    """
    Turn fetched feed bodies into measurement records.

    Args:
        results: Mapping from kind to feed body ("" for a missing feed)
        directory: Station directory

    Returns:
        list[MeasurementRecord]: Records in kind order, then feed order

    Raises:
        FeedParseError: If a body or one of its timestamps is malformed
    """
    measurements: list[MeasurementRecord] = []

    for kind, body in results.items():
        station, items = parse_feed(body, kind)
        measurements.extend(build_records(kind, items, station, directory))

    return measurements


# ============================================================================
# DATA FETCHER
# ============================================================================


@with_logging()
async def fetch_data_async(
    source: SourceDescriptor,
    *,
    transport: Transport = http_get,
    directory: LocationDirectory | None = None,
    convert: UnitConverter = convert_units,
) -> PipelineResult:
    """
    Fetch and normalise the PM2.5 and ozone feeds of one post.

    Args:
        source: Source descriptor whose url is the post's PM2.5 feed
        transport: Function returning the body at a URL (default: requests)
        directory: Station directory. If None, the default directory
            (with any configured overrides) is used.
        convert: Unit converter, called once with every record

    Returns:
        PipelineResult: {"name": "unused", "measurements": [...]}

    Raises:
        FetchError: A feed could not be retrieved (other than "not found")
        ParseError: A feed could not be parsed
        UnknownAdapterError: Any other failure while normalising

    Example:
        >>> result = await fetch_data_async(
        ...     {"url": "http://dosairnowdata.org/dos/RSS/NewDelhi/NewDelhi-PM2.5.xml"}
        ... )
        >>> result["measurements"][0]["parameter"]
        'pm25'
    """
    url = source.get("url")
    if not url:
        logger.warning("StateAir source has no url")
        raise FetchError()

    _transition(State.FETCHING, url)
    try:
        results = await fetch_feeds(derive_feed_urls(url), transport=transport)
    except FetchFailure as e:
        _transition(State.FAILED, url)
        raise FetchError() from e

    _transition(State.NORMALISING, url)
    try:
        if directory is None:
            directory = get_default_directory()
        measurements = convert(normalise_feeds(results, directory))
    except FeedParseError as e:
        _transition(State.FAILED, url)
        logger.warning(f"Failed to parse StateAir feeds for {url}: {e}")
        raise ParseError() from e
    except Exception as e:
        _transition(State.FAILED, url)
        logger.exception(f"Unexpected error normalising StateAir feeds for {url}")
        raise UnknownAdapterError() from e

    if measurements is None:
        _transition(State.FAILED, url)
        raise ParseError()

    _transition(State.DONE, url)
    return {"name": RESULT_NAME, "measurements": measurements}


def fetch_data(
    source: SourceDescriptor,
    *,
    transport: Transport = http_get,
    directory: LocationDirectory | None = None,
    convert: UnitConverter = convert_units,
) -> PipelineResult:
    """
    Synchronous wrapper around fetch_data_async().

    Must not be called from inside a running event loop; await
    fetch_data_async() there instead.
    """
    return asyncio.run(
        fetch_data_async(
            source, transport=transport, directory=directory, convert=convert
        )
    )


# ============================================================================
# ADAPTER
# ============================================================================

# Imported by name by the aggregation pipeline
ADAPTER: AdapterSpec = {
    "name": "StateAir",
    "fetch_data": fetch_data,
    "fetch_data_async": fetch_data_async,
    "to_dataframe": measurements_to_dataframe,
    "requires_api_key": False,
}
