"""Parsing a version string according to the rules of its ecosystem."""

from collections.abc import Callable
from typing import Protocol

from vulnscout.semantic.debian import parse_debian_version
from vulnscout.semantic.maven import parse_maven_version
from vulnscout.semantic.packagist import parse_packagist_version
from vulnscout.semantic.pypi import parse_pypi_version
from vulnscout.semantic.rubygems import parse_rubygems_version
from vulnscout.semantic.semver import parse_nuget_version, parse_semver_version


class Version(Protocol):
    """A parsed version that can be compared with another version string."""

    def compare_str(self, text: str) -> int:
        """Return -1, 0 or 1 as this version is below, equal to or above text."""


class UnsupportedEcosystemError(ValueError):
    """Raised for an ecosystem with no known version ordering."""

    def __init__(self, ecosystem: str) -> None:
        super().__init__(f"unsupported ecosystem {ecosystem}")
        self.ecosystem = ecosystem


_PARSERS: dict[str, Callable[[str], Version]] = {
    "npm": parse_semver_version,
    "crates.io": parse_semver_version,
    "Debian": parse_debian_version,
    "RubyGems": parse_rubygems_version,
    "NuGet": parse_nuget_version,
    "Packagist": parse_packagist_version,
    "Go": parse_semver_version,
    "Hex": parse_semver_version,
    "Maven": parse_maven_version,
    "PyPI": parse_pypi_version,
    "Pub": parse_semver_version,
    "ConanCenter": parse_semver_version,
}


def parse(text: str, ecosystem: str) -> Version:
    """Parse text as a version of the given ecosystem.

    Raises UnsupportedEcosystemError if the ecosystem is not known.
    """
    try:
        parser = _PARSERS[ecosystem]
    except KeyError:
        raise UnsupportedEcosystemError(ecosystem) from None
    return parser(text)


def must_parse(text: str, ecosystem: str) -> Version:
    """Parse text as a version, for callers that treat any failure as a bug."""
    return parse(text, ecosystem)