"""Grouping vulnerabilities that refer to each other through aliases."""

from dataclasses import dataclass, field
from itertools import combinations


@dataclass
class IDAliases:
    """A vulnerability identifier together with its aliases."""

    id: str
    aliases: list[str] = field(default_factory=list)


@dataclass
class GroupInfo:
    """The identifiers of vulnerabilities that describe the same issue."""

    ids: list[str] = field(default_factory=list)


def _intersects(first: IDAliases, second: IDAliases) -> bool:
    if any(alias in second.aliases for alias in first.aliases):
        return True
    return second.id in first.aliases or first.id in second.aliases


def group(vulns: list[IDAliases]) -> list[GroupInfo]:
    """Group vulnerabilities whose aliases intersect or name each other.

    Groups come out in the order of their first member in ``vulns``.
    """
    # Each vulnerability maps to a group id, which is the index of a representative.
    groups = list(range(len(vulns)))

    for i, j in combinations(range(len(vulns)), 2):
        if _intersects(vulns[i], vulns[j]):
            groups[i] = min(groups[i], groups[j])
            groups[j] = groups[i]

    extracted: dict[int, list[str]] = {}
    for vuln, group_id in zip(vulns, groups):
        extracted.setdefault(group_id, []).append(vuln.id)

    return [GroupInfo(ids=extracted[key]) for key in sorted(extracted)]