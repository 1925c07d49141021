"""Helpers shared by the version parsers: integers and numeric components."""

import re
from collections.abc import Sequence
from itertools import zip_longest

_INTEGER = re.compile(r"[+-]?[0-9]+")


def to_int(text: str) -> int | None:
    """Parse a base-10 integer with an optional sign, or return None."""
    if _INTEGER.fullmatch(text) is None:
        return None
    return int(text)


def fetch_component(components: Sequence[int], n: int) -> int:
    """Return the n-th component, treating missing components as zero."""
    if n < len(components):
        return components[n]
    return 0


def compare_components(a: Sequence[int], b: Sequence[int]) -> int:
    """Compare two numeric component lists, padding the shorter with zeros."""
    for left, right in zip_longest(a, b, fillvalue=0):
        if left != right:
            return -1 if left < right else 1
    return 0