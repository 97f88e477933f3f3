"""Exceptions raised by the chart engine."""
from __future__ import annotations


class ChartError(Exception):
    """Base class for chart engine failures."""


class InvalidReferenceError(ChartError, ValueError):
    """Raised when the previous-close reference price is not a positive number."""

    def __init__(self, reference_price: object) -> None:
        self.reference_price = reference_price
        super().__init__(f"reference price must be > 0, got {reference_price!r}")
