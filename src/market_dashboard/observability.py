"""Prometheus metrics for chart rendering."""
from __future__ import annotations

import time
from contextlib import contextmanager

from prometheus_client import Counter, Histogram


_CHART_RENDERS = Counter(
    "dashboard_chart_renders_total",
    "Number of time-series chart render requests by outcome.",
    ["outcome"],
)
_CHART_RENDER_LATENCY = Histogram(
    "dashboard_chart_render_seconds",
    "Time spent building a time-series chart description.",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)


def record_render(outcome: str, enabled: bool = True) -> None:
    if not enabled:
        return
    _CHART_RENDERS.labels(outcome=outcome).inc()


@contextmanager
def record_render_latency(enabled: bool = True):
    if not enabled:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        _CHART_RENDER_LATENCY.observe(max(time.perf_counter() - start, 0.0))
