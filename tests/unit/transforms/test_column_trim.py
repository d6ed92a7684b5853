"""Unit tests for the column trimming transform."""

from __future__ import annotations

import pytest

from core.errors import PipeConfigError
from transforms.column_trim import column_trim


def test_column_trim_keeps_requested_window() -> None:
    """Trim should keep columns from start up to but excluding end."""
    assert column_trim(1, 4)(1, "abcdef") == "bcd"


def test_column_trim_returns_rest_when_end_exceeds_length() -> None:
    """An end past the line length should keep the whole remainder."""
    assert column_trim(0, 5)(1, "abc") == "abc"
    assert column_trim(2, 50)(1, "abcdef") == "cdef"


@pytest.mark.parametrize("start,end", [(5, 5), (3, 1), (10, 2)])
def test_column_trim_returns_empty_for_empty_range(start: int, end: int) -> None:
    """An end at or before start should yield an empty line."""
    assert column_trim(start, end)(1, "abcdefgh") == ""


def test_column_trim_returns_empty_when_start_is_past_line() -> None:
    """A start beyond the line should not raise."""
    assert column_trim(8, 12)(1, "abc") == ""


def test_column_trim_counts_code_points_not_bytes() -> None:
    """Multi-byte characters should count as a single column."""
    assert column_trim(0, 3)(1, "日本語テスト") == "日本語"
    assert column_trim(1, 2)(1, "a😀b") == "😀"


def test_column_trim_rejects_negative_offsets() -> None:
    """Negative offsets should fail when the transform is built."""
    with pytest.raises(PipeConfigError):
        column_trim(-1, 3)
