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
StateAir feed parser.

A feed is a small RSS document. The station name is the channel title and
each <item> carries one hourly reading:

    <rss version="2.0">
      <channel>
        <title>New Delhi</title>
        <item>
          <Param>PM2.5</Param>
          <Conc>12.3</Conc>
          <ReadingDateTime>2023-06-01 08:00:00</ReadingDateTime>
        </item>
      </channel>
    </rss>

Tag names are matched exactly; the feeds never vary their case.
"""

import math
import re
import xml.etree.ElementTree as ET
from logging import getLogger, warning

from .errors import FeedParseError
from .types import ParsedItem

logger = getLogger(__name__)

CHANNEL_TAG = "channel"
TITLE_TAG = "title"
ITEM_TAG = "item"
VALUE_TAG = "Conc"
TIMESTAMP_TAG = "ReadingDateTime"

# Plain decimal numbers only. Rejects "inf", "nan" and "1_000".
VALUE_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _text(element: ET.Element | None) -> str:
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


def _parse_value(raw: str, kind: str, station: str) -> float:
    if not VALUE_PATTERN.fullmatch(raw):
        warning(f"Non-numeric {kind} value {raw!r} for station {station!r}")
        return math.nan
    return float(raw)


def parse_station_name(root: ET.Element) -> str:
    """Return the title of the first channel, or "" if there is none."""
    channel = next(root.iter(CHANNEL_TAG), None)
    if channel is None:
        return ""
    return _text(channel.find(TITLE_TAG))


def parse_feed(body: str | bytes, kind: str) -> tuple[str, list[ParsedItem]]:
    """
    Parse one feed body into its station name and readings.

    Args:
        body: Raw feed markup. Bytes are decoded using the encoding named in
            the XML declaration (UTF-8 if there is none). An empty body means
            the feed does not exist.
        kind: Measurement kind the feed was fetched for (used in log messages)

    Returns:
        tuple: (station_name, items). An empty body gives ("", []).
            Items are in document order. A missing or non-numeric
            concentration is kept as NaN.

    Raises:
        FeedParseError: If the body is not well-formed XML

    Example:
        >>> station, items = parse_feed(body, "pm25")
        >>> station
        'New Delhi'
        >>> items[0]["value"], items[0]["raw_timestamp"]
        (12.3, '2023-06-01 08:00:00')
    """
    if not body or not body.strip():
        return "", []

    try:
        root = ET.fromstring(body.strip())
    except ET.ParseError as e:
        raise FeedParseError(f"Malformed {kind} feed: {e}") from e

    station = parse_station_name(root)

    items: list[ParsedItem] = []
    for element in root.iter(ITEM_TAG):
        items.append(
            {
                "value": _parse_value(_text(element.find(VALUE_TAG)), kind, station),
                "raw_timestamp": _text(element.find(TIMESTAMP_TAG)),
                "station_name": station,
            }
        )

    logger.debug(f"Parsed {len(items)} {kind} items for station {station!r}")
    return station, items
