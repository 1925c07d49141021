"""Semantic-version-like parsing, plus the semver and NuGet orderings."""

from dataclasses import dataclass, field
from itertools import zip_longest

from vulnscout.semantic.components import compare_components, to_int

_DIGITS = "0123456789"


@dataclass(frozen=True)
class SemverLikeVersion:
    """A version like semver, but with any number of numeric components."""

    leading_v: bool = False
    components: list[int] = field(default_factory=list)
    build: str = ""
    original: str = ""


def _parse_semver_like(line: str) -> SemverLikeVersion:
    original = line
    leading_v = line.startswith("v")
    if leading_v:
        line = line[1:]

    components: list[int] = []
    current = ""
    found_build = False
    empty_component = False

    for char in line:
        if found_build or char in _DIGITS:
            current += char
            continue

        # Anything else terminates the component being read.
        if current:
            components.append(int(current))
            current = ""
            empty_component = False

        if char == ".":
            empty_component = True
            continue

        found_build = True
        current = char

    if not found_build and current:
        components.append(int(current))
        current = ""
        empty_component = False

    if empty_component:
        current = "." + current

    # Without any components the "v" was not a prefix after all.
    if not components and leading_v:
        leading_v = False
        current = "v" + current

    return SemverLikeVersion(leading_v, components, current, original)


def _parse_limited(line: str, max_components: int, cls: type) -> SemverLikeVersion:
    parsed = _parse_semver_like(line)
    components, build = parsed.components, parsed.build

    if max_components != -1 and len(components) > max_components:
        extra = components[max_components:]
        components = components[:max_components]
        build += "".join(f".{number}" for number in extra)

    return cls(parsed.leading_v, components, build, parsed.original)


def parse_semver_like_version(line: str, max_components: int) -> SemverLikeVersion:
    """Parse a semver-like version; extra components beyond the limit go to the build.

    A limit of -1 keeps every component.
    """
    return _parse_limited(line, max_components, SemverLikeVersion)


def _compare_prerelease(a: list[str], b: list[str]) -> int:
    for left, right in zip(a, b):
        left_number, right_number = to_int(left), to_int(right)

        if left_number is not None and right_number is not None:
            result = (left_number > right_number) - (left_number < right_number)
        elif left_number is None and right_number is None:
            result = (left > right) - (left < right)
        elif left_number is not None:
            # Numeric identifiers have lower precedence than non-numeric ones.
            result = -1
        else:
            result = 1

        if result:
            return result

    return (len(a) > len(b)) - (len(a) < len(b))


def compare_build_components(a: str, b: str) -> int:
    """Compare pre-release strings, ignoring build metadata after '+'."""
    a = a.split("+", 1)[0].removeprefix("-")
    b = b.split("+", 1)[0].removeprefix("-")

    # A version with a pre-release sorts before one without.
    if not a and b:
        return 1
    if a and not b:
        return -1

    return _compare_prerelease(a.split("."), b.split("."))


@dataclass(frozen=True)
class SemverVersion(SemverLikeVersion):
    """A semantic version with at most three numeric components."""

    def compare(self, other: "SemverVersion") -> int:
        """Return -1, 0 or 1 as this version is below, equal to or above other."""
        diff = compare_components(self.components, other.components)
        if diff:
            return diff
        return compare_build_components(self.build, other.build)

    def compare_str(self, text: str) -> int:
        """Compare with a version given as a string."""
        return self.compare(parse_semver_version(text))


@dataclass(frozen=True)
class NuGetVersion(SemverLikeVersion):
    """A NuGet version: four numeric components and a case-insensitive label."""

    def compare(self, other: "NuGetVersion") -> int:
        """Return -1, 0 or 1 as this version is below, equal to or above other."""
        diff = compare_components(self.components, other.components)
        if diff:
            return diff
        return compare_build_components(self.build.lower(), other.build.lower())

    def compare_str(self, text: str) -> int:
        """Compare with a version given as a string."""
        return self.compare(parse_nuget_version(text))


def parse_semver_version(text: str) -> SemverVersion:
    """Parse a semantic version."""
    return _parse_limited(text, 3, SemverVersion)


def parse_nuget_version(text: str) -> NuGetVersion:
    """Parse a NuGet version."""
    return _parse_limited(text, 4, NuGetVersion)


__all__ = [
    "NuGetVersion",
    "SemverLikeVersion",
    "SemverVersion",
    "compare_build_components",
    "parse_nuget_version",
    "parse_semver_like_version",
    "parse_semver_version",
    "zip_longest",
]