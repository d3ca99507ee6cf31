"""Retrying an operation with exponential backoff."""

from __future__ import annotations

from typing import Callable, TypeVar

import backoff

T = TypeVar("T")

DEFAULT_MAX_TIME = 10.0


def with_backoff(operation: Callable[[], T], max_time: float = DEFAULT_MAX_TIME) -> T:
    """Call ``operation`` until it succeeds, retrying with growing, jittered waits.

    Gives up after ``max_time`` seconds and re-raises the last error.
    """
    retrying = backoff.on_exception(
        backoff.expo,
        Exception,
        max_time=max_time,
        base=1.5,
        factor=0.5,
        max_value=60,
    )(operation)
    return retrying()