import functools
import random

import pytest

from vulnscout.semantic.maven import parse_maven_version


def _cmp(a, b):
    return parse_maven_version(a).compare_str(b)


@pytest.mark.parametrize(
    "a, b",
    [
        ("1.0", "1"),
        ("1.0.0", "1"),
        ("1-ga", "1"),
        ("1.final", "1"),
        ("1.0.RELEASE", "1"),
        ("1-cr", "1-rc"),
        ("1a1", "1-alpha-1"),
        ("1b2", "1-beta-2"),
        ("1m3", "1-milestone-3"),
        ("1.01", "1.1"),
        ("1-ALPHA", "1-alpha"),
    ],
)
def test_equivalent_versions(a, b):
    assert _cmp(a, b) == 0
    assert _cmp(b, a) == 0
    assert parse_maven_version(a) == parse_maven_version(b)


@pytest.mark.parametrize(
    "lower, higher",
    [
        ("1-alpha", "1-beta"),
        ("1-beta", "1-milestone"),
        ("1-milestone", "1-rc"),
        ("1-rc", "1-snapshot"),
        ("1-snapshot", "1"),
        ("1", "1-sp"),
        ("1.9", "1.10"),
        ("1.0-SNAPSHOT", "1.0"),
        ("1.foo", "1-foo"),
        ("1-foo", "1-1"),
        ("1-1", "1.1"),
        ("1-sp", "1-zzz"),
        ("1-abc", "1-abd"),
    ],
)
def test_ordering_is_antisymmetric(lower, higher):
    assert _cmp(lower, higher) == -1
    assert _cmp(higher, lower) == 1


def test_keyword_order_sorts_consistently():
    expected = ["1-alpha", "1-beta", "1-milestone", "1-rc", "1-snapshot", "1", "1-sp"]
    shuffled = list(expected)
    random.Random(7).shuffle(shuffled)
    key = functools.cmp_to_key(lambda a, b: parse_maven_version(a).compare_str(b))
    assert sorted(shuffled, key=key) == expected


def test_compare_str_matches_compare():
    versions = ["1.0", "2.0-rc1", "1.2.3", "1-sp", "0.9-beta"]
    for a in versions:
        for b in versions:
            parsed = parse_maven_version(a)
            assert parsed.compare_str(b) == parsed.compare(parse_maven_version(b))


def test_every_version_equals_itself():
    for text in ["", "1", "1.2.3-alpha-4", "2.0.0.Final", "3-SNAPSHOT"]:
        assert _cmp(text, text) == 0


def test_shorthand_qualifier_only_expands_before_number():
    assert _cmp("1-a", "1-alpha") != 0
    assert _cmp("1a1", "1-alpha-1") == 0
    assert parse_maven_version("1-a") != parse_maven_version("1-alpha")