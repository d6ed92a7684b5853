"""Line transform composition.

A line transform is any callable taking a one-based line number and the
line text and returning replacement text. Transforms form a monoid under
``compose`` with ``identity`` as the neutral element, so an ordered list
of transforms reduces to a single transform applied left to right.
"""

from __future__ import annotations

from functools import reduce
from typing import Callable, Iterable

LineTransform = Callable[[int, str], str]


def identity(line_number: int, text: str) -> str:
    """Return the line text unchanged."""
    return text


def compose(first: LineTransform, second: LineTransform) -> LineTransform:
    """Sequence two transforms so ``second`` sees the output of ``first``.

    Args:
        first: Transform applied first.
        second: Transform applied to the output of ``first``.

    Returns:
        Transform equivalent to ``second(n, first(n, text))``.
    """
    if first is identity:
        return second
    if second is identity:
        return first

    def composed(line_number: int, text: str) -> str:
        return second(line_number, first(line_number, text))

    composed.__name__ = f"{describe_transform(first)} | {describe_transform(second)}"
    return composed


def compose_all(transforms: Iterable[LineTransform]) -> LineTransform:
    """Reduce an ordered sequence of transforms into one.

    Args:
        transforms: Transforms in application order.

    Returns:
        Composed transform, or ``identity`` for an empty sequence.
    """
    return reduce(compose, transforms, identity)


def describe_transform(transform: LineTransform) -> str:
    """Return a readable name for a transform for log events."""
    name = getattr(transform, "__name__", None)
    if isinstance(name, str):
        return name
    return type(transform).__name__
