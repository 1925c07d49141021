"""RubyGems version parsing and ordering."""

from dataclasses import dataclass, field
from itertools import zip_longest

from vulnscout.semantic.components import to_int

_DIGITS = "0123456789"


def _fits_int64(text: str) -> bool:
    value = to_int(text)
    return value is not None and -(2**63) <= value < 2**63


def _canonicalize(text: str) -> str:
    result = []
    check_previous = False
    previous_was_digit = True

    for char in text:
        if char == ".":
            check_previous = False
            result.append(".")
            continue

        is_digit = char in _DIGITS
        if check_previous and previous_was_digit != is_digit:
            result.append(".")
        result.append(char)

        previous_was_digit = is_digit
        check_previous = True

    return "".join(result)


def _group_segments(segments: list[str]) -> tuple[list[str], list[str]]:
    numbers: list[str] = []
    build: list[str] = []

    for segment in segments:
        if build or to_int(segment) is None:
            build.append(segment)
        else:
            numbers.append(segment)

    return numbers, build


def _remove_trailing_zeros(segments: list[str]) -> list[str]:
    trimmed = list(segments)
    while trimmed and trimmed[-1] == "0":
        trimmed.pop()
    return trimmed


def _canonical_segments(segments: list[str]) -> list[str]:
    numbers, build = _group_segments(segments)
    return _remove_trailing_zeros(numbers) + _remove_trailing_zeros(build)


def _compare_segments(a: list[str], b: list[str]) -> int:
    for left, right in zip_longest(a, b, fillvalue="0"):
        left_number, right_number = to_int(left), to_int(right)

        if left_number is not None and right_number is not None:
            result = (left_number > right_number) - (left_number < right_number)
        elif left_number is None and right_number is None:
            result = (left > right) - (left < right)
        elif left_number is not None:
            result = 1
        else:
            result = -1

        if result:
            return result

    if len(a) > len(b):
        return 1 if _fits_int64(a[len(b)]) else -1
    if len(a) < len(b):
        return -1 if _fits_int64(b[len(a)]) else 1
    return 0


@dataclass(frozen=True)
class RubyGemsVersion:
    """A RubyGems version with its canonical segments."""

    original: str
    segments: list[str] = field(default_factory=list)

    def compare(self, other: "RubyGemsVersion") -> int:
        """Return -1, 0 or 1 as this version is below, equal to or above other."""
        return _compare_segments(self.segments, other.segments)

    def compare_str(self, text: str) -> int:
        """Compare with a version given as a string."""
        return self.compare(parse_rubygems_version(text))


def parse_rubygems_version(text: str) -> RubyGemsVersion:
    """Parse a RubyGems version."""
    return RubyGemsVersion(text, _canonical_segments(_canonicalize(text).split(".")))