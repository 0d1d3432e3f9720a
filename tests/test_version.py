from __future__ import annotations

import pytest

from pom_verifier.exceptions import VersionParseError
from pom_verifier.version import Version, compare


def test_parse_components() -> None:
    assert Version.parse("2.10.3").components == (2, 10, 3)
    assert Version.parse("2").components == (2,)
    assert Version.parse(" 4.0.0 ").components == (4, 0, 0)


def test_str_round_trips_normalized_numbers() -> None:
    assert str(Version.parse("2.10.3")) == "2.10.3"
    assert str(Version.parse("02.010")) == "2.10"
    assert str(Version.parse("2.10.0")) == "2.10.0"


def test_trailing_zeros_compare_equal() -> None:
    assert compare(Version.parse("2.10"), Version.parse("2.10.0")) == 0
    assert Version.parse("2") == Version.parse("2.0.0")
    assert hash(Version.parse("2")) == hash(Version.parse("2.0.0"))
    assert len({Version.parse("2"), Version.parse("2.0"), Version.parse("2.0.0")}) == 1


def test_numeric_not_lexical_ordering() -> None:
    assert Version.parse("2.9") < Version.parse("2.10")
    assert Version.parse("1.999") < Version.parse("2")
    assert Version.parse("2.164.3") > Version.parse("2.164")
    assert Version.parse("4.0.0") >= Version.of(4)
    assert Version.parse("3.57") <= Version.of(4, 0, 0)


@pytest.mark.parametrize(
    "a, b",
    [("1.9", "4.0.0"), ("2", "2.0.1"), ("2.164.3", "2.332.1"), ("0", "0.0.0.1")],
)
def test_compare_is_antisymmetric(a: str, b: str) -> None:
    va, vb = Version.parse(a), Version.parse(b)
    assert compare(va, vb) == -1
    assert compare(vb, va) == 1
    assert compare(va, vb) == -compare(vb, va)


def test_compare_is_transitive() -> None:
    versions = [Version.parse(s) for s in ("3.1", "1.0.5", "2", "2.0.1", "1.10", "0.9")]
    ordered = sorted(versions)
    for i, low in enumerate(ordered):
        for high in ordered[i + 1:]:
            assert compare(low, high) <= 0
    assert [str(v) for v in ordered] == ["0.9", "1.0.5", "1.10", "2", "2.0.1", "3.1"]


@pytest.mark.parametrize(
    "text",
    ["", "   ", "2.10-beta", "1..2", "2.", ".2", "v2", "${jenkins.version}", "1.0-SNAPSHOT", "-1", "٢.١٦٤", "²", "1.３"],
)
def test_parse_rejects_non_numeric(text: str) -> None:
    with pytest.raises(VersionParseError):
        Version.parse(text)


def test_parse_rejects_none() -> None:
    with pytest.raises(VersionParseError):
        Version.parse(None)


def test_version_parse_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Version.parse("latest")


def test_version_is_immutable() -> None:
    v = Version.of(1, 2)
    with pytest.raises(Exception):
        v.components = (3,)  # type: ignore[misc]


def test_negative_components_rejected() -> None:
    with pytest.raises(ValueError):
        Version.of(1, -2)
