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
Station directory for US diplomatic post monitors.

StateAir feeds identify their station only by a display name in the channel
title. This module maps those names to an IANA timezone and a coordinate
pair. Names missing from a table resolve to None for that attribute.

Coordinates mostly come from https://www.dosairnowdata.org/dos/AllPosts24Hour.json;
where that file had no entry the embassy location was used.
"""

import json
from logging import getLogger
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .config import get_locations_file
from .types import Coordinates

logger = getLogger(__name__)

# ============================================================================
# STATION TABLES
# ============================================================================

STATION_TIMEZONES: dict[str, str] = {
    "Chennai": "Asia/Kolkata",
    "Hyderabad": "Asia/Kolkata",
    "Kolkata": "Asia/Kolkata",
    "Mumbai": "Asia/Kolkata",
    "New Delhi": "Asia/Kolkata",
    "Hanoi": "Asia/Ho_Chi_Minh",
    "Ho Chi Minh City": "Asia/Ho_Chi_Minh",
    "Ulaanbaatar": "Asia/Ulaanbaatar",
    "Lima": "America/Lima",
    "Dhaka": "Asia/Dhaka",
    "Jakarta South": "Asia/Jakarta",
    "Jakarta Central": "Asia/Jakarta",
    "Bogota": "America/Bogota",
    # Skopje shares Pristina's offsets
    "Pristina": "Europe/Skopje",
    "Addis Ababa Central": "Africa/Addis_Ababa",
    "Addis Ababa School": "Africa/Addis_Ababa",
    "Manama": "Asia/Bahrain",
    "Kuwait City": "Asia/Kuwait",
    "Kampala": "Africa/Kampala",
    "Embassy Kathmandu": "Asia/Kathmandu",
    "Phora Durbar Kathmandu": "Asia/Kathmandu",
    "Colombo": "Asia/Colombo",
    "Abu Dhabi": "Asia/Dubai",
    "Dubai": "Asia/Dubai",
    "Sarajevo": "Europe/Sarajevo",
    "Astana": "Asia/Almaty",
    "Curacao": "America/Curacao",
    "Tashkent": "Asia/Tashkent",
    "Bishkek": "Asia/Bishkek",
    "Baghdad": "Asia/Baghdad",
    "Islamabad": "Asia/Karachi",
    "Karachi": "Asia/Karachi",
    "Lahore": "Asia/Karachi",
    "Peshawar": "Asia/Karachi",
    "Vientiane": "Asia/Vientiane",
    "Algiers": "Africa/Algiers",
    "Rangoon": "Asia/Rangoon",
    "Kabul": "Asia/Kabul",
    "Dharan": "Asia/Riyadh",
    "Ashgabat": "Asia/Ashgabat",
    "Guatemala City": "America/Guatemala",
    "Amman": "Asia/Amman",
    "Dushanbe": "Asia/Dushanbe",
    "San Jose": "America/Costa_Rica",
    "Bamako": "Africa/Bamako",
    "Abidjan": "Africa/Abidjan",
    "N'Djamena": "Africa/Ndjamena",
    "Khartoum Embassy": "Africa/Khartoum",
    "Khartoum Residential": "Africa/Khartoum",
    "Conakry": "Africa/Conakry",
    "Accra": "Africa/Accra",
}

# (latitude, longitude)
_STATION_POSITIONS: dict[str, tuple[float, float]] = {
    "Chennai": (13.08784, 80.27847),
    "Hyderabad": (17.38405, 78.45636),
    "Kolkata": (22.56263, 88.36304),
    "Mumbai": (19.07283, 72.88261),
    "New Delhi": (28.63576, 77.22445),
    "Hanoi": (21.021938, 105.81881),
    "Ho Chi Minh City": (10.782773, 106.700035),
    "Ulaanbaatar": (47.928387, 106.92947),
    "Jakarta South": (-6.236704, 106.79324),
    "Jakarta Central": (-6.182536, 106.834236),
    # Embassy
    "Lima": (-12.099398, -76.96888),
    # American Center
    "Dhaka": (23.796373, 90.424614),
    "Bogota": (4.637735, -74.09486),
    "Pristina": (42.661995, 21.15055),
    "Addis Ababa Central": (9.058498, 38.761642),
    "Addis Ababa School": (8.996519, 38.725433),
    "Manama": (26.204697, 50.57083),
    "Kuwait City": (29.292316, 48.04768),
    "Kampala": (0.300225, 32.591553),
    "Phora Durbar Kathmandu": (27.712463, 85.315704),
    "Embassy Kathmandu": (27.738703, 85.336205),
    # Embassy
    "Colombo": (6.913253, 79.848684),
    # Embassy
    "Abu Dhabi": (24.424399, 54.433746),
    "Sarajevo": (43.856667, 18.398205),
    "Dubai": (25.25848, 55.309166),
    "Astana": (51.125286, 71.46722),
    "Curacao": (12.1696, -68.99),
    # Embassy
    "Tashkent": (41.3672, 69.2725),
    "Bishkek": (42.8273, 74.5833),
    # Embassy
    "Baghdad": (33.298722, 44.395917),
    "Lahore": (31.560078, 74.33589),
    "Karachi": (24.8415, 67.0091),
    "Islamabad": (33.7235, 73.11822),
    "Peshawar": (34.00585, 71.53775),
    "Vientiane": (17.896122, 102.64),
    "Algiers": (36.7558, 3.039114),
    "Rangoon": (16.8256, 96.1445),
    "Kabul": (34.535812, 69.190514),
    "Dharan": (26.304855, 50.154302),
    "Ashgabat": (37.941857, 58.387945),
    "Guatemala City": (14.607198, -90.514255),
    "Amman": (31.945388, 35.880556),
    "Dushanbe": (38.579708, 68.712176),
    "San Jose": (9.949488, -84.142876),
    "Bamako": (12.629813, -8.018847),
    "Abidjan": (5.335049, -3.976023),
    "N'Djamena": (12.1348, 15.0557),
    # Embassy
    "Khartoum Embassy": (15.526226, 32.607622),
    "Khartoum Residential": (15.5007, 32.5599),
    "Conakry": (9.594805, -13.636629),
    "Accra": (5.579447, -0.170699),
}

STATION_COORDINATES: dict[str, Coordinates] = {
    name: {"latitude": lat, "longitude": lon}
    for name, (lat, lon) in _STATION_POSITIONS.items()
}


# ============================================================================
# DIRECTORY
# ============================================================================


class LocationDirectory:
    """
    Read-only lookup from station display name to timezone and coordinates.

    The two tables are independent: a station may have a timezone but no
    coordinates, or the reverse.

    Example:
        >>> directory = LocationDirectory(
        ...     {"New Delhi": "Asia/Kolkata"},
        ...     {"New Delhi": {"latitude": 28.63576, "longitude": 77.22445}},
        ... )
        >>> directory.timezone("New Delhi")
        'Asia/Kolkata'
        >>> directory.coordinates("Atlantis") is None
        True
    """

    def __init__(
        self,
        timezones: Mapping[str, str],
        coordinates: Mapping[str, Coordinates],
    ):
        self._timezones = MappingProxyType(dict(timezones))
        self._coordinates = MappingProxyType(
            {
                name: {
                    "latitude": float(coords["latitude"]),
                    "longitude": float(coords["longitude"]),
                }
                for name, coords in coordinates.items()
            }
        )

    def __contains__(self, name: object) -> bool:
        return name in self._timezones or name in self._coordinates

    def __len__(self) -> int:
        return len(self.stations)

    def __repr__(self) -> str:
        return f"LocationDirectory({len(self)} stations)"

    @property
    def stations(self) -> list[str]:
        """Sorted names known to either table."""
        return sorted(set(self._timezones) | set(self._coordinates))

    def timezone(self, name: str) -> str | None:
        return self._timezones.get(name)

    def coordinates(self, name: str) -> Coordinates | None:
        """Return a copy of the station's coordinates, or None."""
        coords = self._coordinates.get(name)
        if coords is None:
            return None
        return dict(coords)

    def lookup(self, name: str) -> tuple[str | None, Coordinates | None]:
        return self.timezone(name), self.coordinates(name)

    def merged(self, other: "LocationDirectory") -> "LocationDirectory":
        """
        Return a new directory with entries from `other` taking precedence.

        Args:
            other: Directory whose entries override this one's

        Returns:
            LocationDirectory: Combined directory
        """
        return LocationDirectory(
            {**self._timezones, **other._timezones},
            {**self._coordinates, **other._coordinates},
        )

    @classmethod
    def from_json(cls, path: str | Path) -> "LocationDirectory":
        """
        Load a directory from a JSON file.

        The file holds two optional objects:

            {
                "timezones": {"Accra": "Africa/Accra"},
                "coordinates": {"Accra": {"latitude": 5.58, "longitude": -0.17}}
            }

        Args:
            path: JSON file path

        Returns:
            LocationDirectory: Directory built from the file

        Raises:
            ValueError: If the file is not a JSON object or an entry is malformed
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Station file must contain a JSON object: {path}")

        timezones = data.get("timezones", {})
        coordinates = data.get("coordinates", {})

        try:
            return cls(timezones, coordinates)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Malformed station file {path}: {e}") from e


DEFAULT_DIRECTORY = LocationDirectory(STATION_TIMEZONES, STATION_COORDINATES)


def get_default_directory() -> LocationDirectory:
    """
    Get the directory used when none is passed to the adapter.

    If STATEAIR_LOCATIONS_FILE is set, its entries override the built-in
    table.

    Returns:
        LocationDirectory: Station directory
    """
    path = get_locations_file()
    if path is None:
        return DEFAULT_DIRECTORY

    logger.info(f"Loading station overrides from {path}")
    return DEFAULT_DIRECTORY.merged(LocationDirectory.from_json(path))
