"""Packagist (PHP version_compare style) version parsing and ordering."""

import re
from dataclasses import dataclass, field

from vulnscout.semantic.components import to_int

_SEPARATORS = re.compile(r"[-_+]")
_LETTER_THEN_DIGIT = re.compile(r"([^0-9.])([0-9])")
_DIGIT_THEN_LETTER = re.compile(r"([0-9])([^0-9.])")

_SPECIALS = ("dev", "a", "b", "rc", "#", "p")


def _fits_int64(text: str) -> bool:
    value = to_int(text)
    return value is not None and -(2**63) <= value < 2**63


def canonicalize_packagist_version(text: str) -> str:
    """Strip a leading v, and dot-separate every letter/digit transition."""
    text = text.removeprefix("v").removeprefix("V")
    text = _SEPARATORS.sub(".", text)
    text = _LETTER_THEN_DIGIT.sub(r"\1.\2", text)
    return _DIGIT_THEN_LETTER.sub(r"\1.\2", text)


def _weigh(text: str) -> int:
    if text.startswith("RC"):
        return 3
    return next(
        (weight for weight, special in enumerate(_SPECIALS) if text.startswith(special)),
        0,
    )


def _compare_special(a: str, b: str) -> int:
    a_weight, b_weight = _weigh(a), _weigh(b)
    return (a_weight > b_weight) - (a_weight < b_weight)


def _compare_components(a: list[str], b: list[str]) -> int:
    for left, right in zip(a, b):
        left_number, right_number = to_int(left), to_int(right)

        if left_number is not None and right_number is not None:
            result = (left_number > right_number) - (left_number < right_number)
        elif left_number is None and right_number is None:
            result = _compare_special(left, right)
        elif left_number is not None:
            result = _compare_special("#", right)
        else:
            result = _compare_special(left, "#")

        if result:
            return result

    if len(a) > len(b):
        if _fits_int64(a[len(b)]):
            return 1
        return _compare_components(a[len(b):], ["#"])

    if len(a) < len(b):
        if _fits_int64(b[len(a)]):
            return -1
        return _compare_components(["#"], b[len(a):])

    return 0


@dataclass(frozen=True)
class PackagistVersion:
    """A Packagist version with its dot-separated canonical components."""

    original: str
    components: list[str] = field(default_factory=list)

    def compare(self, other: "PackagistVersion") -> int:
        """Return -1, 0 or 1 as this version is below, equal to or above other."""
        return _compare_components(self.components, other.components)

    def compare_str(self, text: str) -> int:
        """Compare with a version given as a string."""
        return self.compare(parse_packagist_version(text))


def parse_packagist_version(text: str) -> PackagistVersion:
    """Parse a Packagist version."""
    return PackagistVersion(text, canonicalize_packagist_version(text).split("."))