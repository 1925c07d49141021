"""Maven version parsing and ordering, following Maven's ComparableVersion."""

import re
from dataclasses import dataclass, field
from itertools import pairwise, zip_longest

from vulnscout.semantic.components import to_int

_DIGITS = "0123456789"
_SEPARATORS = re.compile(r"([-.])")

# Qualifiers with a fixed order; unknown qualifiers sort after all of them.
_KEYWORD_ORDER = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")

_SHORT_QUALIFIERS = {"a": "alpha", "b": "beta", "m": "milestone"}


def _keyword_index(keyword: str) -> int:
    if keyword in _KEYWORD_ORDER:
        return _KEYWORD_ORDER.index(keyword)
    return len(_KEYWORD_ORDER)


@dataclass(frozen=True)
class _Token:
    prefix: str
    value: str
    is_null: bool = field(default=False, compare=False)

    def qualifier_order(self) -> int:
        is_number = to_int(self.value) is not None
        if is_number:
            if self.prefix == "-":
                return 2
            if self.prefix == ".":
                return 3
        if self.prefix == "-":
            return 1
        if self.prefix == ".":
            return 0
        raise ValueError(f"unknown prefix '{self.prefix}'")

    def should_trim(self) -> bool:
        return self.value in ("0", "", "final", "ga")

    def less_than(self, other: "_Token") -> bool:
        if self.prefix != other.prefix:
            # ".qualifier" < "-qualifier" < "-number" < ".number"
            return self.qualifier_order() < other.qualifier_order()

        left, right = to_int(self.value), to_int(other.value)
        if left is not None and right is not None:
            return left < right

        # Numbers sort after qualifiers, unless they are padding.
        if left is not None and not self.is_null:
            return False
        if right is not None and not other.is_null:
            return True

        left_index = _keyword_index(self.value)
        right_index = _keyword_index(other.value)
        if left_index == right_index == len(_KEYWORD_ORDER):
            return self.value < other.value
        return left_index < right_index


def _null_token(token: _Token) -> _Token:
    if token.prefix == ".":
        # "sp" is the only qualifier that sorts after an empty value.
        return _Token(".", "" if token.value == "sp" else "0", True)
    if token.prefix == "-":
        return _Token("-", "", True)
    raise ValueError(f"unknown prefix '{token.prefix}' (value: '{token.value}')")


def _normalize(piece: str, followed_by_more: bool) -> str:
    current = piece.lower() or "0"
    if current == "cr":
        current = "rc"
    if current in ("ga", "final", "release"):
        current = ""
    if followed_by_more:
        current = _SHORT_QUALIFIERS.get(current, current)
    number = to_int(current)
    if number is not None:
        current = str(number)
    return current


def _tokenize(text: str) -> list[_Token]:
    raw = _SEPARATORS.split(text)
    tokens: list[_Token] = []

    for position in range(0, len(raw), 2):
        prefix = raw[position - 1] if position else ""
        chunk = raw[position]

        # Split further wherever digits and non-digits meet.
        bounds = [0]
        bounds += [
            k
            for k in range(1, len(chunk))
            if (chunk[k - 1] in _DIGITS) != (chunk[k] in _DIGITS)
        ]
        bounds.append(len(chunk))

        for index, (start, end) in enumerate(pairwise(bounds)):
            if index:
                prefix = "-"
            tokens.append(_Token(prefix, _normalize(chunk[start:end], end != len(chunk))))

    return tokens


def _trim(tokens: list[_Token]) -> list[_Token]:
    # Trailing null values are trimmed, repeated at each hyphen from the end.
    i = len(tokens) - 1
    while i > 0:
        if tokens[i].should_trim():
            del tokens[i]
            i -= 1
            continue
        while i >= 0 and tokens[i].prefix != "-":
            i -= 1
        i -= 1
    return tokens


def _less_than(a: tuple[_Token, ...], b: tuple[_Token, ...]) -> bool:
    for left, right in zip_longest(a, b):
        if left is None:
            left = _null_token(right)
        if right is None:
            right = _null_token(left)
        if left == right:
            continue
        return left.less_than(right)
    return False


@dataclass(frozen=True)
class MavenVersion:
    """A Maven version as its normalised list of tokens."""

    tokens: tuple[_Token, ...] = ()

    def compare(self, other: "MavenVersion") -> int:
        """Return -1, 0 or 1 as this version is below, equal to or above other."""
        if self.tokens == other.tokens:
            return 0
        if _less_than(self.tokens, other.tokens):
            return -1
        return 1

    def compare_str(self, text: str) -> int:
        """Compare with a version given as a string."""
        return self.compare(parse_maven_version(text))


def parse_maven_version(text: str) -> MavenVersion:
    """Parse a Maven version."""
    return MavenVersion(tuple(_trim(_tokenize(text))))