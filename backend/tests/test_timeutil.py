import pytest

from app.core.exceptions import InvalidInputError
from app.services.timeutil import intervals_overlap, to_minutes, validate_date, validate_interval


def test_to_minutes_parses_wall_clock():
    assert to_minutes("00:00") == 0
    assert to_minutes("09:30") == 570
    assert to_minutes("23:59") == 1439


def test_to_minutes_lenient_defaults_bad_components_to_zero():
    assert to_minutes("9") == 540
    assert to_minutes("xx:15") == 15
    assert to_minutes("10:yy") == 600
    assert to_minutes("") == 0
    assert to_minutes(None) == 0
    assert to_minutes("9am:30") == 570


def test_to_minutes_strict_rejects_malformed_values():
    assert to_minutes("07:05", strict=True) == 425
    for value in ("9", "24:00", "9:5", "xx:15", ""):
        with pytest.raises(InvalidInputError):
            to_minutes(value, strict=True)


def test_overlap_is_half_open():
    assert intervals_overlap(540, 600, 570, 630)
    assert intervals_overlap(540, 600, 540, 600)
    assert intervals_overlap(540, 660, 570, 600)
    # Touching endpoints do not overlap.
    assert not intervals_overlap(540, 600, 600, 660)
    assert not intervals_overlap(600, 660, 540, 600)


def test_overlap_rule_applies_to_degenerate_intervals():
    # Zero-length interval strictly inside another one still intersects it.
    assert intervals_overlap(570, 570, 540, 600)
    assert not intervals_overlap(540, 540, 540, 600)
    # Inverted interval compared under the same rule.
    assert intervals_overlap(600, 540, 500, 700)


def test_validate_interval_requires_start_before_end():
    assert validate_interval("09:00", "10:00") == (540, 600)
    with pytest.raises(InvalidInputError):
        validate_interval("10:00", "10:00")
    with pytest.raises(InvalidInputError):
        validate_interval("11:00", "10:00")


def test_validate_date_format():
    assert validate_date("2024-05-01") == "2024-05-01"
    with pytest.raises(InvalidInputError):
        validate_date("01/05/2024")
