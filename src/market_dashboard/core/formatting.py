"""Label formatting rules shared by axes, header and tooltip."""
from __future__ import annotations

from typing import Iterable

from .classifier import compare_to_anchor
from .models import AxisLabelRule, Direction, VolumeTier


def signed(value: float, decimals: int = 2) -> str:
    """Format with an explicit ``+`` for non-negative values."""

    text = f"{value:.{decimals}f}"
    if text.startswith("-"):
        if float(text) != 0:
            return text
        # tiny negatives round to "-0.00"
        text = text[1:]
    return "+" + text


def format_volume(value: float, tiers: Iterable[VolumeTier], decimals: int = 1) -> str:
    """Abbreviate a volume with the first tier whose threshold it reaches."""

    for tier in tiers:
        if value >= tier.threshold:
            return f"{value / tier.divisor:.{decimals}f}{tier.suffix}"
    if float(value).is_integer():
        return str(int(value))
    return str(float(value))


def axis_label(value: float, rule: AxisLabelRule) -> str:
    if rule.signed:
        text = signed(value, rule.decimals)
    else:
        text = f"{value:.{rule.decimals}f}"
    return text + rule.suffix


def axis_color(value: float, rule: AxisLabelRule) -> str:
    direction = compare_to_anchor(value, rule.anchor, rule.epsilon)
    if direction is Direction.ABOVE:
        return rule.up_color
    if direction is Direction.BELOW:
        return rule.down_color
    return rule.flat_color


def session_time_label(time: str, labels: dict[str, str]) -> str:
    """Label for a time bucket on the x axis, blank unless it is a key time."""

    return labels.get(time, "")
