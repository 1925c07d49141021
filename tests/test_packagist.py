import random
from functools import cmp_to_key

import pytest

from vulnscout.semantic.packagist import (
    canonicalize_packagist_version,
    parse_packagist_version,
)


def _sorted_versions(versions):
    shuffled = list(versions)
    random.Random(5).shuffle(shuffled)
    return sorted(
        shuffled, key=cmp_to_key(lambda a, b: parse_packagist_version(a).compare_str(b))
    )


def test_canonicalize_splits_labels_and_numbers():
    assert canonicalize_packagist_version("v1.0.0-beta2") == "1.0.0.beta.2"


def test_canonicalize_strips_leading_v():
    assert canonicalize_packagist_version("V1.2") == "1.2"
    assert canonicalize_packagist_version("v1.2") == "1.2"


def test_parse_components():
    parsed = parse_packagist_version("2.0.4")
    assert parsed.original == "2.0.4"
    assert parsed.components == ["2", "0", "4"]


def test_special_version_ordering():
    versions = ["1.0-dev", "1.0-alpha1", "1.0-beta1", "1.0-RC1", "1.0", "1.0-pl1"]
    assert _sorted_versions(versions) == versions


def test_alias_spellings_are_equal():
    assert parse_packagist_version("1.0-alpha1").compare_str("1.0-a1") == 0
    assert parse_packagist_version("1.0-RC1").compare_str("1.0-rc1") == 0


def test_numeric_ordering():
    versions = ["1.0", "1.2", "1.10", "2.0"]
    assert _sorted_versions(versions) == versions


@pytest.mark.parametrize(
    "a,b", [("1.0", "1.0.1"), ("1.0-beta", "1.0"), ("1.0-p1", "1.0"), ("2.0_RC2", "2.0-rc1")]
)
def test_compare_is_antisymmetric(a, b):
    assert parse_packagist_version(a).compare_str(b) == -parse_packagist_version(b).compare_str(a)