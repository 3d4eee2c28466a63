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
Measurement record construction.

Every record from one feed starts as a deep copy of the same base record
(station, kind, unit, attribution, coordinates) and then gets its own value
and reading time.
"""

from copy import deepcopy
from logging import getLogger, warning

from .locations import LocationDirectory
from .times import resolve
from .types import Attribution, AveragingPeriod, MeasurementRecord, ParsedItem

logger = getLogger(__name__)

# ============================================================================
# CONSTANTS
# ============================================================================

LOCATION_PREFIX = "US Diplomatic Post: "

# Units as published, before unit conversion
UNITS = {
    "pm25": "µg/m³",
    "o3": "ppb",
}

AVERAGING_PERIOD: AveragingPeriod = {"value": 1, "unit": "hours"}

ATTRIBUTION: list[Attribution] = [
    {
        "name": "EPA AirNow DOS",
        "url": "http://airnow.gov/index.cfm?action=airnow.global_summary",
    }
]


# ============================================================================
# BUILDERS
# ============================================================================


def base_record(
    kind: str, station: str, directory: LocationDirectory
) -> MeasurementRecord:
    """
    Build the fields shared by every record from one feed.

    Args:
        kind: "pm25" or "o3"
        station: Station display name (may be "")
        directory: Station directory for coordinates

    Returns:
        MeasurementRecord: Record without value or date. "coordinates" is
            left out when the station has none.

    Raises:
        ValueError: If kind is not a known measurement kind
    """
    if kind not in UNITS:
        raise ValueError(f"Unknown measurement kind: {kind!r}")

    record: MeasurementRecord = {
        "location": LOCATION_PREFIX + station,
        "parameter": kind,
        "unit": UNITS[kind],
        "averagingPeriod": deepcopy(AVERAGING_PERIOD),
        "attribution": deepcopy(ATTRIBUTION),
    }

    coordinates = directory.coordinates(station)
    if coordinates is not None:
        record["coordinates"] = coordinates

    return record


def build_records(
    kind: str,
    items: list[ParsedItem],
    station: str,
    directory: LocationDirectory,
) -> list[MeasurementRecord]:
    """
    Build measurement records for one feed.

    Args:
        kind: "pm25" or "o3"
        items: Parsed readings, in feed order
        station: Station display name from the feed title
        directory: Station directory for timezone and coordinates

    Returns:
        list[MeasurementRecord]: One independent record per item, in order

    Raises:
        ValueError: If kind is unknown
        TimestampError: If an item's reading time is malformed
    """
    base = base_record(kind, station, directory)

    if items:
        if directory.timezone(station) is None:
            warning(f"No timezone for station {station!r}, reading times assumed UTC")
        if "coordinates" not in base:
            warning(f"No coordinates for station {station!r}")

    records = []
    for item in items:
        record = deepcopy(base)
        record["value"] = item["value"]
        record["date"] = resolve(item["raw_timestamp"], station, directory).as_dict()
        records.append(record)

    return records
