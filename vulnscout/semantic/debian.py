"""Debian package version parsing and ordering (deb-version rules)."""

import re
from dataclasses import dataclass
from itertools import zip_longest

from vulnscout.semantic.components import to_int

_DIGIT_PREFIX = re.compile(r"[0-9]*")
_NON_DIGIT_PREFIX = re.compile(r"[^0-9]*")


def _split_digit_prefix(text: str) -> tuple[int, str]:
    digits = _DIGIT_PREFIX.match(text).group()
    if not digits:
        return 0, text
    return int(digits), text[len(digits):]


def _split_non_digit_prefix(text: str) -> tuple[str, str]:
    prefix = _NON_DIGIT_PREFIX.match(text).group()
    return prefix, text[len(prefix):]


def _weigh(char: str) -> int:
    # Tilde sorts before everything, even the end of the string.
    if char == "~":
        return 1
    if char == "":
        return 2

    code = char.encode()[0]
    # Letters sort before non-letters.
    if code < 65 or 90 < code < 97 or code > 122:
        code += 122
    return code


def compare_debian_strings(a: str, b: str) -> int:
    """Compare two upstream or revision strings by the deb-version algorithm."""
    while a or b:
        a_prefix, a = _split_non_digit_prefix(a)
        b_prefix, b = _split_non_digit_prefix(b)

        if a_prefix != b_prefix:
            for a_char, b_char in zip_longest(a_prefix, b_prefix, fillvalue=""):
                a_weight, b_weight = _weigh(a_char), _weigh(b_char)
                if a_weight != b_weight:
                    return -1 if a_weight < b_weight else 1

        a_number, a = _split_digit_prefix(a)
        b_number, b = _split_digit_prefix(b)

        if a_number != b_number:
            return -1 if a_number < b_number else 1

    return 0


@dataclass(frozen=True)
class DebianVersion:
    """A Debian version split into epoch, upstream version and revision."""

    epoch: int
    upstream: str
    revision: str

    def compare(self, other: "DebianVersion") -> int:
        """Return -1, 0 or 1 as this version is below, equal to or above other."""
        if self.epoch != other.epoch:
            return -1 if self.epoch < other.epoch else 1
        return compare_debian_strings(self.upstream, other.upstream) or compare_debian_strings(
            self.revision, other.revision
        )

    def compare_str(self, text: str) -> int:
        """Compare with a version given as a string."""
        return self.compare(parse_debian_version(text))


def parse_debian_version(text: str) -> DebianVersion:
    """Parse a Debian version; raises ValueError on a non-numeric epoch."""
    text = text.strip()
    epoch = 0

    if ":" in text:
        raw_epoch, _, text = text.partition(":")
        parsed = to_int(raw_epoch)
        if parsed is None:
            raise ValueError(f"failed to convert {raw_epoch} to a number")
        epoch = parsed

    if "-" in text:
        upstream, _, revision = text.rpartition("-")
    else:
        upstream, revision = text, "0"

    return DebianVersion(epoch, upstream, revision)