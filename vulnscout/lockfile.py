"""Reading package lists from Alpine "installed" databases and CSV rows."""

import csv
import io
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TextIO

ALPINE_ECOSYSTEM = "Alpine"

_UNKNOWN_PACKAGE_NAME = "<unknown>"

_NOT_ENOUGH_FIELDS = "not enough fields (expected at least four)"
_MISSING_PACKAGE_FIELD = "field 3 is empty (must be the name of a package)"
_MISSING_COMMIT_FIELD = "field 4 is empty (must be a commit)"


class LockfileError(Exception):
    """Raised when a lockfile cannot be read or parsed."""


@dataclass(frozen=True)
class PackageDetails:
    """A single package found in a lockfile."""

    name: str
    version: str = ""
    ecosystem: str = ""
    compare_as: str = ""
    commit: str = ""


@dataclass
class Lockfile:
    """The packages read from one file, and how the file was parsed."""

    file_path: str
    parsed_as: str
    packages: list[PackageDetails] = field(default_factory=list)


def _sort_packages(packages: Iterable[PackageDetails]) -> list[PackageDetails]:
    return sorted(packages, key=lambda pkg: (pkg.name, pkg.version))


def _group_apk_lines(lines: Iterable[str]) -> Iterator[list[str]]:
    group: list[str] = []
    for raw in lines:
        line = raw.removesuffix("\n").removesuffix("\r")
        if line:
            group.append(line)
            continue
        if group:
            yield group
        group = []
    if group:
        yield group


def _parse_apk_group(group: list[str], path: str) -> PackageDetails:
    name = version = commit = ""

    # Record fields are described by the apk database spec.
    for line in group:
        if line.startswith("P:"):
            name = line[2:]
        elif line.startswith("V:"):
            version = line[2:]
        elif line.startswith("c:"):
            commit = line[2:]

    if not version:
        print(
            "warning: malformed APK installed file. Found no version number in record. "
            f"Package {name or _UNKNOWN_PACKAGE_NAME}. File: {path}",
            file=sys.stderr,
        )

    return PackageDetails(
        name=name,
        version=version,
        ecosystem=ALPINE_ECOSYSTEM,
        compare_as=ALPINE_ECOSYSTEM,
        commit=commit,
    )


def parse_apk_installed(path: str) -> list[PackageDetails]:
    """Read the packages from an apk "installed" database, in file order."""
    try:
        handle = open(path, encoding="utf-8", errors="replace", newline="\n")
    except OSError as err:
        raise LockfileError(f"could not open {path}: {err}") from err

    packages = []
    with handle:
        for group in _group_apk_lines(handle):
            pkg = _parse_apk_group(group, path)
            if not pkg.name:
                print(
                    "warning: malformed APK installed file. "
                    f"Found no package name in record. File: {path}",
                    file=sys.stderr,
                )
                continue
            packages.append(pkg)

    return packages


def from_apk_installed(path: str) -> Lockfile:
    """Read an apk "installed" database as a lockfile, sorted by name and version."""
    packages = _sort_packages(parse_apk_installed(path))
    return Lockfile(file_path=path, parsed_as="apk-installed", packages=packages)


def _from_csv_record(record: list[str]) -> PackageDetails:
    if len(record) < 4:
        raise LockfileError(_NOT_ENOUGH_FIELDS)

    ecosystem, compare_as, name, version = record[:4]
    commit = ""

    if not compare_as:
        compare_as = ecosystem

    if not ecosystem:
        if not version:
            raise LockfileError(_MISSING_COMMIT_FIELD)
        commit, version = version, ""

    if not name:
        raise LockfileError(_MISSING_PACKAGE_FIELD)

    return PackageDetails(
        name=name,
        version=version,
        ecosystem=ecosystem,
        compare_as=compare_as,
        commit=commit,
    )


def _from_csv(stream: TextIO) -> list[PackageDetails]:
    reader = csv.reader(stream)
    packages = []
    expected_fields: int | None = None

    try:
        records = (record for record in reader if record)
        for row_number, record in enumerate(records, start=1):
            if expected_fields is None:
                expected_fields = len(record)
            elif len(record) != expected_fields:
                raise LockfileError(
                    f"record on line {reader.line_num}: wrong number of fields"
                )

            try:
                packages.append(_from_csv_record(record))
            except LockfileError as err:
                raise LockfileError(f"row {row_number}: {err}") from None
    except csv.Error as err:
        raise LockfileError(str(err)) from err

    return _sort_packages(packages)


def from_csv_rows(file_path: str, parse_as: str, rows: Iterable[str] | None) -> Lockfile:
    """Build a lockfile from CSV rows of ecosystem, compare-as, name and version."""
    stream = io.StringIO("\n".join(rows or []), newline="")
    return Lockfile(file_path=file_path, parsed_as=parse_as, packages=_from_csv(stream))


def from_csv_file(path_to_csv: str, parse_as: str) -> Lockfile:
    """Build a lockfile from a CSV file of ecosystem, compare-as, name and version."""
    try:
        handle = open(path_to_csv, encoding="utf-8", newline="")
    except OSError as err:
        raise LockfileError(f"could not read {path_to_csv}: {err}") from err

    with handle:
        try:
            packages = _from_csv(handle)
        except LockfileError as err:
            raise LockfileError(f"{path_to_csv}: {err}") from None

    return Lockfile(file_path=path_to_csv, parsed_as=parse_as, packages=packages)