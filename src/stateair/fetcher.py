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
Concurrent retrieval of StateAir feeds.

Each post publishes one feed per kind. The PM2.5 URL is configured and the
ozone URL is derived from it. All feeds are fetched at once and joined
before anything is parsed. A feed that does not exist (HTTP 404) is returned
as an empty body; any other failure aborts the whole set.
"""

import asyncio
import inspect
from logging import getLogger, warning

import requests

from .config import get_timeout
from .decorators import with_timeout
from .errors import FeedNotFound, FetchFailure
from .types import FetchResult, Transport

logger = getLogger(__name__)

# Token in the configured URL identifying the PM2.5 feed, and the
# replacement for each kind
PM25_TOKEN = "PM2.5"
KIND_TOKENS = {
    "pm25": "PM2.5",
    "o3": "OZONE",
}


# ============================================================================
# URLS
# ============================================================================


def derive_feed_urls(url: str) -> dict[str, str]:
    """
    Derive the feed URL for every kind from the configured PM2.5 URL.

    Args:
        url: PM2.5 feed URL containing the token "PM2.5"

    Returns:
        dict: Mapping from kind to feed URL, in kind order

    Example:
        >>> derive_feed_urls("http://dosairnowdata.org/dos/RSS/Hanoi/Hanoi-PM2.5.xml")
        {'pm25': 'http://dosairnowdata.org/dos/RSS/Hanoi/Hanoi-PM2.5.xml',
         'o3': 'http://dosairnowdata.org/dos/RSS/Hanoi/Hanoi-OZONE.xml'}
    """
    if PM25_TOKEN not in url:
        warning(f"Feed URL has no {PM25_TOKEN} token, using it for every kind: {url}")

    return {kind: url.replace(PM25_TOKEN, token) for kind, token in KIND_TOKENS.items()}


# ============================================================================
# TRANSPORT
# ============================================================================


@with_timeout(get_timeout)
def http_get(url: str, **kwargs) -> bytes:
    """
    Default transport: GET a feed with requests.

    Args:
        url: Feed URL
        **kwargs: Passed to requests.get (timeout is added from configuration)

    Returns:
        bytes: Raw response body. The parser decodes it from the XML
            declaration, since the feeds are served without a charset.

    Raises:
        requests.HTTPError: If the server returns an error status
        requests.RequestException: On connection errors and timeouts
    """
    response = requests.get(url, **kwargs)
    response.raise_for_status()
    return response.content


def _is_not_found(error: BaseException) -> bool:
    if isinstance(error, FeedNotFound):
        return True
    if isinstance(error, requests.exceptions.HTTPError):
        return error.response is not None and error.response.status_code == 404
    return False


async def _fetch_one(kind: str, url: str, transport: Transport) -> str | bytes:
    logger.debug(f"Fetching {kind} feed: {url}")

    try:
        if inspect.iscoroutinefunction(transport):
            body = await transport(url)
        else:
            body = await asyncio.to_thread(transport, url)
    except Exception as e:
        if _is_not_found(e):
            logger.info(f"No {kind} feed at {url}")
            return ""
        raise

    return body or ""


# ============================================================================
# FETCHER
# ============================================================================


async def fetch_feeds(
    urls: dict[str, str], transport: Transport = http_get
) -> FetchResult:
    """
    Fetch every feed concurrently.

    All fetches run to completion before the results are examined, so one
    failure never leaves another request running.

    Args:
        urls: Mapping from kind to feed URL
        transport: Function returning the body at a URL. May be a plain
            function (run in a worker thread) or a coroutine function.

    Returns:
        FetchResult: Mapping from kind to body, in the order of `urls`.
            A missing feed maps to "".

    Raises:
        FetchFailure: If any feed failed for a reason other than "not found"
    """
    kinds = list(urls)
    bodies = await asyncio.gather(
        *(_fetch_one(kind, urls[kind], transport) for kind in kinds),
        return_exceptions=True,
    )

    failures = {
        kind: body for kind, body in zip(kinds, bodies) if isinstance(body, BaseException)
    }
    if failures:
        for kind, error in failures.items():
            warning(f"Failed to fetch {kind} feed {urls[kind]}: {error}")
        raise FetchFailure(failures) from next(iter(failures.values()))

    return dict(zip(kinds, bodies))
