"""Small helpers shared by the domain layer."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from datetime import datetime


def contains(values: Iterable[int], x: int) -> bool:
    """Return True when ``x`` is one of ``values``."""
    return x in values


def remove(values: Sequence[int], value: int) -> tuple[list[int], int]:
    """Drop the first occurrence of ``value``.

    Returns the resulting list and the removed value; the removed value is 0
    when ``value`` was not present, in which case the list is unchanged.
    """
    items = list(values)
    try:
        items.remove(value)
    except ValueError:
        return items, 0
    return items, value


def current_datetime() -> datetime:
    """Return the current local time with a UTC offset, truncated to seconds."""
    return datetime.now().astimezone().replace(microsecond=0)


def getenv(key: str, fallback: str) -> str:
    """Read an environment variable, using ``fallback`` when it is unset or empty."""
    value = os.environ.get(key, "")
    return value or fallback