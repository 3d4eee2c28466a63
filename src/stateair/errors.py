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
Exceptions raised by StateAir.

Internal layers raise FetchFailure, FeedNotFound and FeedParseError. The
adapter translates these into one of the AdapterError subclasses, whose
messages are fixed so callers never see internal diagnostic detail.
"""


class StateAirError(Exception):
    """Base class for all StateAir exceptions."""


class FeedNotFound(StateAirError):
    """Raised by a transport when a feed does not exist at its URL."""


class FetchFailure(StateAirError):
    """
    Raised when one or more feeds could not be retrieved.

    Attributes:
        failures: Mapping from kind to the exception raised fetching it
    """

    def __init__(self, failures: dict[str, BaseException]):
        self.failures = dict(failures)
        kinds = ", ".join(self.failures)
        super().__init__(f"Failed to fetch feeds: {kinds}")


class FeedParseError(StateAirError):
    """Raised when a feed body cannot be parsed into readings."""


class TimestampError(FeedParseError):
    """Raised when a reading time does not match the feed's format."""


class AdapterError(StateAirError):
    """
    Structured adapter failure returned to callers.

    Attributes:
        kind: Failure category ("FetchError", "ParseError", "UnknownError")
        message: Fixed human-readable message
    """

    kind = "UnknownError"
    message = "Unknown adapter error."

    def __init__(self):
        super().__init__(self.message)

    def as_dict(self) -> dict[str, str]:
        return {"message": self.message}


class FetchError(AdapterError):
    kind = "FetchError"
    message = "Failure to load data urls."


class ParseError(AdapterError):
    kind = "ParseError"
    message = "Failure to parse data."


class UnknownAdapterError(AdapterError):
    pass
