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
Unit conversion into the aggregation pipeline's canonical units.

Gas mixing ratios are reported in ppm and mass concentrations in µg/m³.
Units are matched case-insensitively. Any other unit is passed through
unchanged.
"""

from typing import Callable

from .types import MeasurementRecord

CANONICAL_UNITS = ("ppm", "µg/m³")

# Lowercase source unit -> (canonical unit, value conversion)
UNIT_CONVERSIONS: dict[str, tuple[str, Callable[[float], float]]] = {
    "pphm": ("ppm", lambda v: v / 100),
    "ppb": ("ppm", lambda v: v / 1000),
    "ppt": ("ppm", lambda v: v / 1_000_000),
    "ug/m3": ("µg/m³", lambda v: v),
    "ug/m³": ("µg/m³", lambda v: v),
    "µg/m3": ("µg/m³", lambda v: v),
    "mg/m3": ("µg/m³", lambda v: v * 1000),
    "mg/m³": ("µg/m³", lambda v: v * 1000),
}


def convert_units(measurements: list[MeasurementRecord]) -> list[MeasurementRecord]:
    """
    Rewrite measurement values and units in place.

    Args:
        measurements: Records to convert

    Returns:
        list[MeasurementRecord]: The same list, for chaining

    Example:
        >>> convert_units([{"parameter": "o3", "unit": "ppb", "value": 35.0}])
        [{'parameter': 'o3', 'unit': 'ppm', 'value': 0.035}]
    """
    for measurement in measurements:
        conversion = UNIT_CONVERSIONS.get(measurement.get("unit", "").lower())
        if conversion is None:
            continue

        unit, convert = conversion
        measurement["unit"] = unit
        measurement["value"] = convert(measurement["value"])

    return measurements
