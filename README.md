# vulnscout

Building blocks for checking project dependencies against vulnerability data:

- **Version comparison** by each ecosystem's own rules: npm, crates.io, Go, Hex,
  Pub and ConanCenter (semver-like), NuGet, Debian, RubyGems, Packagist, Maven
  and PyPI (PEP 440, with a fallback for legacy version strings).
- **Lockfile reading** for Alpine `apk` "installed" databases and simple CSV
  package lists.
- **SBOM reading** for CycloneDX (JSON and XML) and SPDX 2.3 (JSON, RDF/XML and
  tag-value) documents. Package URLs are pulled out of them.
- **Grouping** of vulnerability records that share IDs or aliases.
- **Configuration** through TOML files that list vulnerabilities to ignore,
  each optionally until a given time.

The package has no runtime dependencies beyond the standard library.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Comparing versions

`vulnscout.semantic.parse.parse(text, ecosystem)` parses a version string with
the rules of the named ecosystem and returns an object whose `compare_str(text)`
returns `-1`, `0` or `1`:

```python
from vulnscout.semantic.parse import parse, UnsupportedEcosystemError

parse("1.2.3-beta.1", "npm").compare_str("1.2.3")   # -1: pre-releases sort first
parse("1:2.0-1", "Debian").compare_str("2.0-1")     # 1: the epoch wins
parse("1.0.dev0", "PyPI").compare_str("1.0a0")      # -1
parse("1.0-SNAPSHOT", "Maven").compare_str("1.0")   # -1

try:
    parse("1.0", "<unknown>")
except UnsupportedEcosystemError as exc:
    print(exc)   # unsupported ecosystem <unknown>
```

`UnsupportedEcosystemError` is a `ValueError`. `must_parse` does the same as
`parse`. A Debian version whose epoch is not a number raises `ValueError`.

The parsers can also be used directly, and each parsed class has a `compare`
method that takes a parsed version of the same kind:

| Module                         | Parser                    | Class               |
| ------------------------------ | ------------------------- | ------------------- |
| `vulnscout.semantic.semver`    | `parse_semver_version`    | `SemverVersion`     |
| `vulnscout.semantic.semver`    | `parse_nuget_version`     | `NuGetVersion`      |
| `vulnscout.semantic.debian`    | `parse_debian_version`    | `DebianVersion`     |
| `vulnscout.semantic.rubygems`  | `parse_rubygems_version`  | `RubyGemsVersion`   |
| `vulnscout.semantic.packagist` | `parse_packagist_version` | `PackagistVersion`  |
| `vulnscout.semantic.maven`     | `parse_maven_version`     | `MavenVersion`      |
| `vulnscout.semantic.pypi`      | `parse_pypi_version`      | `PyPIVersion`       |

`vulnscout.semantic.semver.parse_semver_like_version(line, max_components)`
keeps at most `max_components` numeric components and moves the rest into the
build string (`-1` keeps them all). `compare_build_components` compares two
pre-release strings, ignoring build metadata after `+`.
`vulnscout.semantic.debian.compare_debian_strings` compares upstream or
revision strings by the deb-version algorithm.
`vulnscout.semantic.components` holds the small helpers they share:
`to_int`, `fetch_component` and `compare_components`.

## Reading lockfiles

```python
from vulnscout.lockfile import from_apk_installed, from_csv_rows, LockfileError

lock = from_csv_rows("-", "csv-row", ["npm,,left-pad,1.3.0"])
for pkg in lock.packages:
    print(pkg.ecosystem, pkg.name, pkg.version)

apk = from_apk_installed("/lib/apk/db/installed")
```

A `Lockfile` holds `file_path`, `parsed_as` and a list of `PackageDetails`
(`name`, `version`, `ecosystem`, `compare_as`, `commit`), sorted by name and
then version.

CSV rows hold ecosystem, compare-as ecosystem, name and version. An empty
compare-as takes the ecosystem's value. A row that leaves the ecosystem empty
treats its fourth field as a commit hash. `from_csv_file(path_to_csv, parse_as)`
reads the same format from a file. Rows with too few fields, a missing name or
a missing commit, or a differing number of fields raise `LockfileError`, with
the row number in the message.

`parse_apk_installed(path)` returns the packages in file order.
`from_apk_installed(path)` returns them as a sorted `Lockfile` with
`parsed_as="apk-installed"`. Records with no name are skipped, and records with
no version are kept. Both cases print a warning to standard error. A file that
cannot be opened raises `LockfileError`.

## Reading SBOMs

```python
from vulnscout.sbom import CycloneDX, SPDX, InvalidFormatError

reader = CycloneDX()
if reader.matches_recognized_file_names("bom.json"):
    with open("bom.json", "rb") as stream:
        for identifier in reader.get_packages(stream):
            print(identifier.purl)
```

`CycloneDX` recognises `bom.json`, `bom.xml`, `*.cdx.json` and `*.cdx.xml`. It
returns the package URLs of all components, nested ones included. `SPDX`
recognises any file name that contains `.spdx`. It returns the `purl` external
references of each package. `get_packages` tries each supported form in turn.
When none of them works it raises `InvalidFormatError`, whose `errs` lists why
each one failed. `vulnscout.sbom.PROVIDERS` holds one reader of each kind.

## Grouping vulnerabilities

```python
from vulnscout.grouper import IDAliases, group

groups = group([
    IDAliases("CVE-1", ["FOO-1"]),
    IDAliases("FOO-1", []),
    IDAliases("BAR-1", []),
])
# [GroupInfo(ids=['CVE-1', 'FOO-1']), GroupInfo(ids=['BAR-1'])]
```

Two records are grouped when their aliases intersect or when one names the
other. Groups come out in the order of their first member.

## Ignoring vulnerabilities

A configuration file named by `vulnscout.config.CONFIG_FILE_NAME`
(`osv-scanner.toml`) sits next to the scanned manifest:

```toml
[[IgnoredVulns]]
id = "GO-2022-0968"
ignoreUntil = 2030-01-01T00:00:00Z
reason = "not reachable from our code"
```

```python
from vulnscout.config import load_config, config_path_for

config = load_config(config_path_for("path/to/go.mod"))
ignored, entry = config.should_ignore("GO-2022-0968")
```

`config_path_for` takes a file or a directory and returns the path of the
configuration file for it. `should_ignore` returns whether the ID is ignored
now, and the matching `IgnoreEntry`. Without `ignoreUntil` the entry never
expires. A time with no timezone counts as local time. A missing or unreadable
file raises `ConfigError`.

`ConfigManager.get(target_path)` finds and caches the configuration for each
directory. It falls back to `default_config` where no file exists, and to an
empty `Config` for targets that do not exist on disk. `use_override(config_path)`
loads one file that then applies everywhere. Each file it loads is announced
through the manager's `report` callable, which writes to standard output by
default.

## What this package does not do

It has no command-line program. It does not walk directories, query a
vulnerability database or print scan reports. These are the pieces such a
scanner is built from. Of lockfile formats, only `apk` installed databases and
CSV lists are read.