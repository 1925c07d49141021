"""PyPI version parsing and ordering (PEP 440, with a legacy fallback)."""

import re
from dataclasses import dataclass

from vulnscout.semantic.components import compare_components, to_int

_PEP440 = re.compile(
    r"^\s*v?(?:(?:(?P<epoch>[0-9]+)!)?(?P<release>[0-9]+(?:\.[0-9]+)*)"
    r"(?P<pre>[-_\.]?(?P<pre_l>(a|b|c|rc|alpha|beta|pre|preview))[-_\.]?(?P<pre_n>[0-9]+)?)?"
    r"(?P<post>(?:-(?P<post_n1>[0-9]+))|(?:[-_\.]?(?P<post_l>post|rev|r)[-_\.]?(?P<post_n2>[0-9]+)?))?"
    r"(?P<dev>[-_\.]?(?P<dev_l>dev)[-_\.]?(?P<dev_n>[0-9]+)?)?)"
    r"(?:\+(?P<local>[a-z0-9]+(?:[-_\.][a-z0-9]+)*))?\s*\Z",
    re.ASCII,
)
_LOCAL_SEPARATORS = re.compile(r"[._-]")
_LEGACY_PARTS = re.compile(r"([0-9]+|[a-z]+|\.|-)")

_LETTER_ALIASES = {
    "alpha": "a",
    "beta": "b",
    "c": "rc",
    "pre": "rc",
    "preview": "rc",
    "rev": "post",
    "r": "post",
}
_LEGACY_ALIASES = {
    "pre": "c",
    "preview": "c",
    "-": "final-",
    "rc": "c",
    "dev": "@",
}
_PRE_ORDER = ("a", "b", "rc")


@dataclass(frozen=True)
class _Tagged:
    """A release phase letter with its number; no number means no such segment."""

    letter: str = ""
    number: int | None = None


def _parse_letter_version(letter: str, number: str) -> _Tagged:
    if letter:
        # A letter without a numeral carries an implicit 0.
        letter = letter.lower()
        return _Tagged(_LETTER_ALIASES.get(letter, letter), int(number or "0"))
    if number:
        # A bare number is the implicit post-release syntax, e.g. 1.0-1.
        return _Tagged("post", int(number))
    return _Tagged()


def _normalize_legacy_part(part: str) -> str:
    part = _LEGACY_ALIASES.get(part, part)
    if part[:1].isdigit() and part[:1].isascii():
        # Pad for numeric comparison.
        return part.rjust(8, "0")
    return "*" + part


def _legacy_parts(text: str) -> tuple[str, ...]:
    parts: list[str] = []

    for raw in [*_LEGACY_PARTS.findall(text), "final"]:
        if raw in ("", "."):
            continue
        part = _normalize_legacy_part(raw)

        if part.startswith("*"):
            if part < "*final":
                while parts and parts[-1] == "*final-":
                    parts.pop()
            while parts and parts[-1] == "00000000":
                parts.pop()

        parts.append(part)

    return tuple(parts)


def _sign(a, b) -> int:
    return (a > b) - (a < b)


@dataclass(frozen=True)
class PyPIVersion:
    """A PEP 440 version; legacy versions keep only their normalised parts."""

    epoch: int = 0
    release: tuple[int, ...] = ()
    pre: _Tagged = _Tagged()
    post: _Tagged = _Tagged()
    dev: _Tagged = _Tagged()
    local: tuple[str, ...] = ()
    legacy: tuple[str, ...] = ()

    def _pre_index(self) -> int:
        if self.pre.letter not in _PRE_ORDER:
            raise ValueError(f"unknown prefix {self.pre.letter}")
        return _PRE_ORDER.index(self.pre.letter)

    def _applies_pre_trick(self) -> bool:
        # Makes e.g. 1.0.dev0 sort before 1.0a0.
        return self.pre.number is None and self.post.number is None and self.dev.number is not None

    def _compare_legacy(self, other: "PyPIVersion") -> int:
        if not self.legacy and not other.legacy:
            return 0
        if not self.legacy:
            return 1
        if not other.legacy:
            return -1
        return _sign("".join(self.legacy), "".join(other.legacy))

    def _compare_pre(self, other: "PyPIVersion") -> int:
        mine, theirs = self._applies_pre_trick(), other._applies_pre_trick()
        if mine and theirs:
            return 0
        if mine:
            return -1
        if theirs:
            return 1
        if self.pre.number is None and other.pre.number is None:
            return 0
        if self.pre.number is None:
            return 1
        if other.pre.number is None:
            return -1

        left, right = self._pre_index(), other._pre_index()
        if left == right:
            return _sign(self.pre.number, other.pre.number)
        return _sign(left, right)

    def _compare_post(self, other: "PyPIVersion") -> int:
        if self.post.number is None and other.post.number is None:
            return 0
        if self.post.number is None:
            return -1
        if other.post.number is None:
            return 1
        return _sign(self.post.number, other.post.number)

    def _compare_dev(self, other: "PyPIVersion") -> int:
        if self.dev.number is None and other.dev.number is None:
            return 0
        if self.dev.number is None:
            return 1
        if other.dev.number is None:
            return -1
        return _sign(self.dev.number, other.dev.number)

    def _compare_local(self, other: "PyPIVersion") -> int:
        for left, right in zip(self.local, other.local):
            left_number, right_number = to_int(left), to_int(right)

            if left_number is not None and right_number is not None:
                result = _sign(left_number, right_number)
            elif left_number is None and right_number is None:
                result = _sign(left, right)
            elif left_number is not None:
                # Numeric segments sort after lexicographic ones.
                result = 1
            else:
                result = -1

            if result:
                return result

        return _sign(len(self.local), len(other.local))

    def compare(self, other: "PyPIVersion") -> int:
        """Return -1, 0 or 1 as this version is below, equal to or above other."""
        return (
            self._compare_legacy(other)
            or _sign(self.epoch, other.epoch)
            or compare_components(self.release, other.release)
            or self._compare_pre(other)
            or self._compare_post(other)
            or self._compare_dev(other)
            or self._compare_local(other)
        )

    def compare_str(self, text: str) -> int:
        """Compare with a version given as a string."""
        return self.compare(parse_pypi_version(text))


def parse_pypi_version(text: str) -> PyPIVersion:
    """Parse a PyPI version, falling back to legacy parsing for non-PEP 440 strings."""
    text = text.lower()
    match = _PEP440.match(text)

    if match is None:
        return PyPIVersion(epoch=-1, legacy=_legacy_parts(text))

    groups = {name: value or "" for name, value in match.groupdict().items()}

    return PyPIVersion(
        epoch=int(groups["epoch"]) if groups["epoch"] else 0,
        release=tuple(int(part) for part in groups["release"].split(".")),
        pre=_parse_letter_version(groups["pre_l"], groups["pre_n"]),
        post=_parse_letter_version(groups["post_l"], groups["post_n1"] or groups["post_n2"]),
        dev=_parse_letter_version(groups["dev_l"], groups["dev_n"]),
        local=tuple(part.lower() for part in _LOCAL_SEPARATORS.split(groups["local"])),
    )