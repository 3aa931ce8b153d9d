"""Small generic helpers."""

from __future__ import annotations

import random
from typing import Iterable, TypeVar

T = TypeVar("T")


def shuffled(items: Iterable[T]) -> list[T]:
    """Return a new list with the items in random order."""
    result = list(items)
    random.shuffle(result)
    return result


def clamp_min(value, minimum):
    return minimum if value < minimum else value


def clamp_max(value, maximum):
    return maximum if value > maximum else value


def clamp(value, minimum, maximum):
    if minimum > maximum:
        raise ValueError("min must be less than or equal to max")
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value