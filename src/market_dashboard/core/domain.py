"""Symmetric value domains for the intraday chart.

The price axis is centred on the previous close and the percentage axis on
zero. Both use the same half-width, so a given height on the chart reads as
the same move on either axis.
"""
from __future__ import annotations

import logging
from math import isfinite
from typing import Sequence

from ..errors import InvalidReferenceError
from .models import Domain, Domains, Sample

logger = logging.getLogger(__name__)

DEVIATION_FLOOR_RATIO = 0.005
DOMAIN_MARGIN = 1.1


def validate_reference(reference_price: float) -> float:
    """Return the reference price as a float or raise InvalidReferenceError."""

    try:
        value = float(reference_price)
    except (TypeError, ValueError):
        raise InvalidReferenceError(reference_price) from None
    if not isfinite(value) or value <= 0:
        raise InvalidReferenceError(reference_price)
    return value


def deviation_floor(reference_price: float, floor_ratio: float = DEVIATION_FLOOR_RATIO) -> float:
    """Smallest half-width allowed for the price domain."""

    return validate_reference(reference_price) * floor_ratio


def max_deviation(
    samples: Sequence[Sample],
    reference_price: float,
    floor_ratio: float = DEVIATION_FLOOR_RATIO,
) -> float:
    reference = validate_reference(reference_price)
    if not samples:
        raise ValueError("cannot size a domain without samples")
    deviation = reference * floor_ratio
    for sample in samples:
        deviation = max(deviation, abs(sample.price - reference), abs(sample.avg_price - reference))
    return deviation


def compute_domains(
    samples: Sequence[Sample],
    reference_price: float,
    *,
    floor_ratio: float = DEVIATION_FLOOR_RATIO,
    margin: float = DOMAIN_MARGIN,
) -> Domains:
    """Derive the price domain and its locked percentage domain."""

    reference = validate_reference(reference_price)
    deviation = max_deviation(samples, reference, floor_ratio)
    half_width = deviation * margin
    max_change_pct = (deviation / reference) * 100.0 * margin

    domains = Domains(
        price=Domain(min=reference - half_width, max=reference + half_width),
        pct=Domain(min=-max_change_pct, max=max_change_pct),
        max_deviation=deviation,
    )
    logger.debug(
        "Domains for %d samples around %.4f: price=[%.4f, %.4f] pct=±%.4f",
        len(samples),
        reference,
        domains.price.min,
        domains.price.max,
        max_change_pct,
    )
    return domains
