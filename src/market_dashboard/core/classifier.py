"""Directional classification of intraday samples."""
from __future__ import annotations

from typing import Sequence

from .domain import validate_reference
from .models import Classification, Direction, Sample

# Changing this changes which values render as flat, keep it overridable.
EQUAL_EPSILON = 0.001


def compare_to_anchor(value: float, anchor: float, epsilon: float = EQUAL_EPSILON) -> Direction:
    diff = value - anchor
    if diff > epsilon:
        return Direction.ABOVE
    if diff < -epsilon:
        return Direction.BELOW
    return Direction.EQUAL


def classify(
    samples: Sequence[Sample],
    reference_price: float,
    *,
    epsilon: float = EQUAL_EPSILON,
) -> list[Classification]:
    """Classify every sample against the reference price and its predecessor.

    A tie with the predecessor counts as ``above`` so a held price after an
    uptick keeps the up color. The first sample has no predecessor and reuses
    its reference classification.
    """

    reference = validate_reference(reference_price)
    result: list[Classification] = []
    previous: Sample | None = None
    for sample in samples:
        vs_reference = compare_to_anchor(sample.price, reference, epsilon)
        if previous is None:
            vs_previous = vs_reference
        elif sample.price >= previous.price:
            vs_previous = Direction.ABOVE
        else:
            vs_previous = Direction.BELOW
        result.append(Classification(vs_reference=vs_reference, vs_previous=vs_previous))
        previous = sample
    return result


def volume_color(classification: Classification, up_color: str, down_color: str) -> str:
    if classification.vs_previous is Direction.BELOW:
        return down_color
    return up_color
