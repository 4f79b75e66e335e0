"""Tests for sample offset layout."""

import pytest

from spot_check import InvalidSampleCountError, compute_sample_offsets


def test_default_layout_uses_quarter_marks():
    assert compute_sample_offsets(1000) == [0, 250, 500, 750, 999]


def test_default_layout_truncates_interior_points():
    # 0.25 * 1003 = 250.75, 0.5 * 1003 = 501.5, 0.75 * 1003 = 752.25
    assert compute_sample_offsets(1003, 5) == [0, 250, 501, 752, 1002]


def test_three_samples_over_900_bytes():
    assert compute_sample_offsets(900, 3) == [0, 300, 899]


def test_single_sample_is_first_byte_not_last():
    assert compute_sample_offsets(900, 1) == [0]


def test_two_samples_are_first_and_last():
    assert compute_sample_offsets(10_000, 2) == [0, 9_999]


def test_general_layout_truncates_unit_multiples():
    # unit = 10 / 3
    assert compute_sample_offsets(10, 3) == [0, 3, 9]
    # unit = 10 / 6, interior points 1.67, 3.33, 5.0, 6.67
    assert compute_sample_offsets(10, 6) == [0, 1, 3, 5, 6, 9]


@pytest.mark.parametrize("length,count", [(10_000, 7), (5_001, 64), (12_345, 100), (8, 8)])
def test_offsets_are_in_range_and_non_decreasing(length, count):
    offsets = compute_sample_offsets(length, count)

    assert len(offsets) == count
    assert offsets[0] == 0
    assert offsets[-1] == length - 1
    assert offsets == sorted(offsets)
    assert all(0 <= offset < length for offset in offsets)


def test_count_equal_to_length_covers_every_byte():
    assert compute_sample_offsets(8, 8) == list(range(8))


@pytest.mark.parametrize("count", [0, -1])
def test_non_positive_count_is_rejected(count):
    with pytest.raises(InvalidSampleCountError, match="at least 1"):
        compute_sample_offsets(1000, count)


def test_count_larger_than_length_is_rejected():
    with pytest.raises(InvalidSampleCountError, match="exceeds file length"):
        compute_sample_offsets(4, 5)


def test_empty_file_is_rejected():
    with pytest.raises(InvalidSampleCountError):
        compute_sample_offsets(0, 1)


@pytest.mark.parametrize("count", [2.5, "5", True])
def test_non_integer_count_is_rejected(count):
    with pytest.raises(InvalidSampleCountError, match="integer"):
        compute_sample_offsets(1000, count)


def test_invalid_count_is_also_a_value_error():
    with pytest.raises(ValueError):
        compute_sample_offsets(10, 11)
