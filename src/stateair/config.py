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
Runtime configuration from environment variables.

Values are read at call time rather than import time so tests can change
them with monkeypatch.

Variables:
    STATEAIR_TIMEOUT: HTTP timeout in seconds (default 30)
    STATEAIR_LOCATIONS_FILE: JSON file of station timezone/coordinate overrides
    STATEAIR_LOG_LEVEL: Level used by configure_logging() (default WARNING)
"""

import logging
import os
from pathlib import Path

DEFAULT_TIMEOUT = 30
DEFAULT_LOG_LEVEL = "WARNING"


def get_timeout() -> float:
    """
    Get the HTTP request timeout.

    Returns:
        float: Timeout in seconds

    Raises:
        ValueError: If STATEAIR_TIMEOUT is not a positive number
    """
    raw = os.getenv("STATEAIR_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT

    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(
            f"STATEAIR_TIMEOUT must be a number of seconds, got {raw!r}"
        ) from None

    if timeout <= 0:
        raise ValueError(f"STATEAIR_TIMEOUT must be positive, got {raw!r}")
    return timeout


def get_locations_file() -> Path | None:
    """
    Get the optional station overrides file.

    Returns:
        Path | None: Path to the JSON file, or None if not configured

    Raises:
        ValueError: If STATEAIR_LOCATIONS_FILE names a file that does not exist
    """
    raw = os.getenv("STATEAIR_LOCATIONS_FILE")
    if not raw:
        return None

    path = Path(raw).expanduser()
    if not path.is_file():
        raise ValueError(f"STATEAIR_LOCATIONS_FILE does not exist: {path}")
    return path


def configure_logging(level: str | int | None = None) -> None:
    """
    Configure the "stateair" logger.

    Args:
        level: Logging level. If None, STATEAIR_LOG_LEVEL is used.
    """
    if level is None:
        level = os.getenv("STATEAIR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    logger = logging.getLogger("stateair")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s")
        )
        logger.addHandler(handler)
