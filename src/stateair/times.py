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
Reading time resolution.

Feeds report wall-clock time at the station with no offset. The station's
zone comes from the LocationDirectory; a station missing from the directory
is treated as already reporting UTC.
"""

from dataclasses import dataclass
from datetime import datetime
from logging import getLogger

import pandas as pd

from .errors import TimestampError
from .locations import LocationDirectory
from .types import ResolvedTimestamp

logger = getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
FALLBACK_TIMEZONE = "UTC"


@dataclass(frozen=True)
class TimeResolution:
    """
    A resolved reading time.

    Attributes:
        utc: ISO-8601 UTC time with a "Z" suffix
        local: ISO-8601 station time with its numeric offset
        timezone: Zone used to interpret the wall-clock time
        assumed_utc: True if the station was unknown and UTC was assumed
    """
    utc: str
    local: str
    timezone: str
    assumed_utc: bool = False

    def as_dict(self) -> ResolvedTimestamp:
        return {"utc": self.utc, "local": self.local}


def localize(naive: datetime, zone: str) -> pd.Timestamp:
    """
    Attach a zone to a wall-clock time.

    Times repeated by a DST change resolve to their first occurrence; times
    skipped by one are shifted forward to the first valid instant.
    """
    return pd.Timestamp(naive).tz_localize(
        zone, ambiguous=True, nonexistent="shift_forward"
    )


def resolve(raw: str, station: str, directory: LocationDirectory) -> TimeResolution:
    """
    Resolve a feed timestamp at a station.

    Args:
        raw: Wall-clock time as "YYYY-MM-DD HH:MM:SS"
        station: Station display name
        directory: Station directory used to find the zone

    Returns:
        TimeResolution: UTC and local renderings of the same instant

    Raises:
        TimestampError: If `raw` does not match TIMESTAMP_FORMAT
    """
    try:
        naive = datetime.strptime(raw, TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as e:
        raise TimestampError(f"Invalid reading time {raw!r}: {e}") from e

    zone = directory.timezone(station)
    assumed_utc = zone is None
    if assumed_utc:
        logger.debug(f"No timezone for station {station!r}, assuming UTC")
        zone = FALLBACK_TIMEZONE

    local = localize(naive, zone)
    utc = local.tz_convert("UTC")

    return TimeResolution(
        utc=utc.strftime("%Y-%m-%dT%H:%M:%SZ"),
        local=local.to_pydatetime().isoformat(timespec="seconds"),
        timezone=zone,
        assumed_utc=assumed_utc,
    )


def resolve_timestamp(
    raw: str, station: str, directory: LocationDirectory
) -> ResolvedTimestamp:
    """
    Resolve a feed timestamp to its {"utc", "local"} pair.

    Example:
        >>> resolve_timestamp("2023-06-01 08:00:00", "New Delhi", DEFAULT_DIRECTORY)
        {'utc': '2023-06-01T02:30:00Z', 'local': '2023-06-01T08:00:00+05:30'}
    """
    return resolve(raw, station, directory).as_dict()
