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
Function decorators for cross-cutting concerns.

This module provides decorators that add request timeouts and logging to
functions without modifying their core logic. Both work on plain functions
and on coroutine functions.
"""

import inspect
import logging
from functools import wraps
from typing import Callable, TypeVar

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable)

logger = logging.getLogger(__name__)


def with_timeout(seconds: float | Callable[[], float]) -> Callable[[F], F]:
    """
    Decorator to ensure requests have a timeout.

    This decorator adds a 'timeout' keyword argument to function calls if not
    already present.

    Args:
        seconds: Timeout in seconds, or a callable returning it. A callable is
            evaluated on every call so configuration changes take effect.

    Returns:
        Callable: Decorated function with timeout parameter

    Example:
        >>> @with_timeout(30)
        ... def fetch_body(url, **kwargs):
        ...     return requests.get(url, **kwargs).text
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            if "timeout" not in kwargs:
                kwargs["timeout"] = seconds() if callable(seconds) else seconds
            return func(*args, **kwargs)

        return wrapper

    return decorator


def with_logging(logger_name: str | None = None) -> Callable[[F], F]:
    """
    Decorator to add logging to function entry and exit.

    Logs function calls at INFO level. Errors are logged at ERROR level
    before being re-raised.

    Args:
        logger_name: Name of logger to use. If None, uses the module name.

    Returns:
        Callable: Decorated function with logging

    Example:
        >>> @with_logging("stateair.adapter")
        ... async def fetch_data_async(source):
        ...     ...

    Note:
        Only argument counts and keyword names are logged, not their values.
    """

    def decorator(func: F) -> F:
        func_logger = logging.getLogger(logger_name or func.__module__)

        def log_call(args, kwargs):
            func_logger.info(
                f"Calling {func.__name__}",
                extra={
                    "function": func.__name__,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )

        def log_error(e):
            func_logger.error(
                f"Error in {func.__name__}: {e}",
                extra={
                    "function": func.__name__,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                log_call(args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    log_error(e)
                    raise
                func_logger.info(
                    f"Completed {func.__name__}", extra={"function": func.__name__}
                )
                return result

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            log_call(args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log_error(e)
                raise
            func_logger.info(
                f"Completed {func.__name__}", extra={"function": func.__name__}
            )
            return result

        return wrapper

    return decorator
