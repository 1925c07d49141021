import pytest

from vulnscout.semantic.pypi import PyPIVersion, parse_pypi_version


def test_full_pep440_version_fields():
    version = parse_pypi_version("1!2.3a4.post5.dev6+abc.7")
    assert version.epoch == 1
    assert version.release == (2, 3)
    assert (version.pre.letter, version.pre.number) == ("a", 4)
    assert (version.post.letter, version.post.number) == ("post", 5)
    assert (version.dev.letter, version.dev.number) == ("dev", 6)
    assert version.local == ("abc", "7")
    assert version.legacy == ()


def test_implicit_post_release_syntax():
    version = parse_pypi_version("1.0-1")
    assert (version.post.letter, version.post.number) == ("post", 1)


def test_letter_without_number_has_implicit_zero():
    version = parse_pypi_version("1.0a")
    assert version.pre.number == 0


def test_non_pep440_is_legacy():
    version = parse_pypi_version("foo")
    assert version.epoch == -1
    assert version.legacy == ("*foo", "*final")


@pytest.mark.parametrize(
    "a, b",
    [
        ("1.0a1", "1.0alpha1"),
        ("1.0b2", "1.0beta2"),
        ("1.0rc1", "1.0c1"),
        ("1.0rc1", "1.0pre1"),
        ("1.0rc1", "1.0preview1"),
        ("1.0-1", "1.0.post1"),
        ("1.0.post1", "1.0.rev1"),
        ("1.0.post1", "1.0r1"),
        ("v1.0", "1.0"),
        ("1.0", "1.0.0"),
        ("1.0A1", "1.0a1"),
        ("  1.0  ", "1.0"),
    ],
)
def test_equivalent_spellings_compare_equal(a, b):
    assert parse_pypi_version(a).compare_str(b) == 0
    assert parse_pypi_version(b).compare_str(a) == 0


ORDERED = [
    "foo",
    "0.9",
    "1.0.dev0",
    "1.0a0",
    "1.0a1",
    "1.0b1",
    "1.0rc1",
    "1.0",
    "1.0+abc",
    "1.0+1",
    "1.0.post1",
    "1.1",
    "1!0.1",
]


@pytest.mark.parametrize("index", range(len(ORDERED) - 1))
def test_ordering_is_strict_and_antisymmetric(index):
    lower, higher = ORDERED[index], ORDERED[index + 1]
    assert parse_pypi_version(lower).compare_str(higher) < 0
    assert parse_pypi_version(higher).compare_str(lower) > 0


def test_sorting_by_compare_matches_expected_order():
    import functools

    shuffled = list(reversed(ORDERED))
    result = sorted(
        shuffled,
        key=functools.cmp_to_key(lambda a, b: parse_pypi_version(a).compare_str(b)),
    )
    assert result == ORDERED


def test_compare_with_itself_is_zero():
    for text in ORDERED:
        version = parse_pypi_version(text)
        assert version.compare(version) == 0


def test_unknown_pre_letter_raises():
    weird = PyPIVersion(release=(1,), pre=type(parse_pypi_version("1a1").pre)("zz", 1))
    with pytest.raises(ValueError):
        weird.compare(parse_pypi_version("1a1"))