import random
from functools import cmp_to_key

import pytest

from vulnscout.semantic.rubygems import parse_rubygems_version


def _sorted_versions(versions):
    shuffled = list(versions)
    random.Random(11).shuffle(shuffled)
    return sorted(
        shuffled, key=cmp_to_key(lambda a, b: parse_rubygems_version(a).compare_str(b))
    )


def test_trailing_zeros_removed():
    assert parse_rubygems_version("1.2.0.0").segments == ["1", "2"]


def test_original_is_kept():
    assert parse_rubygems_version("3.1.4").original == "3.1.4"


def test_letters_split_from_digits():
    assert parse_rubygems_version("1.0a1").segments == ["1", "a", "1"]


def test_prerelease_ordering():
    versions = ["1.0.a", "1.0.b", "1.0", "1.0.1", "1.1"]
    assert _sorted_versions(versions) == versions


def test_zero_padding_is_equal():
    assert parse_rubygems_version("1.0.0").compare_str("1") == 0


def test_canonical_prerelease_equality():
    assert parse_rubygems_version("1.a").compare_str("1.0.a") == 0


def test_numeric_segments_compare_numerically():
    assert parse_rubygems_version("1.10").compare_str("1.9") == 1


@pytest.mark.parametrize(
    "a,b", [("1.0.a", "1.0"), ("2.0.rc1", "2.0.beta2"), ("1.2.3", "1.2.3.1"), ("0.1", "0.0.9")]
)
def test_compare_is_antisymmetric(a, b):
    assert parse_rubygems_version(a).compare_str(b) == -parse_rubygems_version(b).compare_str(a)