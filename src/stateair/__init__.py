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

"""StateAir diplomatic post air quality adapter"""

from .adapter import ADAPTER, fetch_data, fetch_data_async, normalise_feeds
from .errors import AdapterError, FetchError, ParseError, UnknownAdapterError
from .locations import DEFAULT_DIRECTORY, LocationDirectory
from .transforms import measurements_to_dataframe

__version__ = "0.1.0"

__all__ = [
    "ADAPTER",
    "fetch_data",
    "fetch_data_async",
    "normalise_feeds",
    "measurements_to_dataframe",
    "LocationDirectory",
    "DEFAULT_DIRECTORY",
    "AdapterError",
    "FetchError",
    "ParseError",
    "UnknownAdapterError",
]
