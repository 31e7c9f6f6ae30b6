from __future__ import annotations

import pytest

from lib_log_hub.domain.levels import Severity


def test_severities_are_totally_ordered() -> None:
    ordered = [Severity.TRACE, Severity.INFO, Severity.WARN, Severity.ERROR, Severity.FATAL]
    assert sorted(reversed(ordered)) == ordered
    assert Severity.TRACE < Severity.INFO < Severity.WARN < Severity.ERROR < Severity.FATAL
    assert Severity.WARN >= Severity.WARN
    assert not Severity.ERROR <= Severity.WARN


def test_comparison_with_foreign_types_is_rejected() -> None:
    with pytest.raises(TypeError):
        Severity.INFO < 3  # noqa: B015


@pytest.mark.parametrize(
    "name, expected",
    [
        ("trace", Severity.TRACE),
        ("INFO", Severity.INFO),
        ("Warn", Severity.WARN),
        ("warning", Severity.WARN),
        (" error ", Severity.ERROR),
        ("FATAL", Severity.FATAL),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: Severity) -> None:
    assert Severity.from_name(name) is expected


def test_from_name_rejects_unknown_severity() -> None:
    with pytest.raises(ValueError, match="Unknown severity"):
        Severity.from_name("verbose")


@pytest.mark.parametrize("number, expected", [(0, Severity.TRACE), (2, Severity.WARN), (4, Severity.FATAL)])
def test_from_numeric_maps_ordinals(number: int, expected: Severity) -> None:
    assert Severity.from_numeric(number) is expected


@pytest.mark.parametrize("number", [-1, 5, 10])
def test_from_numeric_rejects_out_of_range(number: int) -> None:
    with pytest.raises(ValueError, match="Unsupported severity numeric"):
        Severity.from_numeric(number)


@pytest.mark.parametrize("value, valid", [(Severity.ERROR, True), (3, False), ("error", False), (None, False)])
def test_is_valid_only_accepts_members(value: object, valid: bool) -> None:
    assert Severity.is_valid(value) is valid


def test_label_is_upper_case_name() -> None:
    assert [severity.label for severity in Severity] == ["TRACE", "INFO", "WARN", "ERROR", "FATAL"]
