"""Unit tests for line transform composition."""

from __future__ import annotations

from transforms.column_trim import column_trim
from transforms.composition import compose, compose_all, describe_transform, identity
from transforms.escaping import escape_line

SAMPLE_LINES = ["", "plain", "hello, 世界", 'tab\there "quoted"', "a\\b"]


def _suffix(marker: str):
    def transform(line_number: int, text: str) -> str:
        return f"{text}<{marker}{line_number}>"

    return transform


def test_compose_all_of_nothing_is_identity() -> None:
    """An empty chain should leave every line untouched."""
    composed = compose_all([])

    assert composed is identity
    assert [composed(index, text) for index, text in enumerate(SAMPLE_LINES, 1)] == SAMPLE_LINES


def test_compose_applies_first_then_second() -> None:
    """The second transform should receive the output of the first."""
    composed = compose(_suffix("a"), _suffix("b"))

    assert composed(3, "x") == "x<a3><b3>"


def test_compose_with_identity_returns_other_transform() -> None:
    """Identity should be neutral on both sides."""
    transform = _suffix("a")

    assert compose(identity, transform) is transform
    assert compose(transform, identity) is transform


def test_compose_all_is_associative() -> None:
    """Grouping should not change the produced text."""
    first, second, third = _suffix("a"), _suffix("b"), _suffix("c")
    flat = compose_all([first, second, third])
    left = compose(compose(first, second), third)
    right = compose(first, compose(second, third))

    for line_number, text in enumerate(SAMPLE_LINES, 1):
        expected = flat(line_number, text)
        assert left(line_number, text) == expected
        assert right(line_number, text) == expected


def test_composition_order_changes_output() -> None:
    """Trimming before escaping should differ from escaping before trimming."""
    trim = column_trim(0, 8)
    trim_then_escape = compose_all([trim, escape_line])
    escape_then_trim = compose_all([escape_line, trim])

    assert trim_then_escape(1, "hello, 世界") == "hello, \\u4E16"
    assert escape_then_trim(1, "hello, 世界") == "hello, \\"


def test_describe_transform_names_composed_chain() -> None:
    """Composed transforms should carry a readable chain name."""
    composed = compose_all([column_trim(0, 5), escape_line])

    assert describe_transform(composed) == "column_trim(0, 5) | escape_line"
