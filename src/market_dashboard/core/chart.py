"""Assembly of the declarative time-series chart description.

``render_chart`` is the entry point used by the HTTP layer: it short-circuits
empty input, sizes the axes, classifies the samples and builds the
description. Every step is a pure function, so calling it twice with the same
samples and reference price gives identical output.
"""
from __future__ import annotations

from datetime import date
import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..config import ChartSettings, get_settings
from ..errors import InvalidReferenceError
from ..observability import record_render, record_render_latency
from .classifier import classify, volume_color
from .domain import compute_domains, validate_reference
from .formatting import axis_color, axis_label, format_volume, session_time_label, signed
from .models import (
    AxisLabelRule,
    AxisTick,
    ChartDescription,
    ChartHeader,
    Classification,
    ClassifiedSample,
    Domain,
    Domains,
    EmptyChart,
    Sample,
    Summary,
    Tooltip,
    TooltipLine,
    VolumeTier,
)

logger = logging.getLogger(__name__)

SERIES_ORDER = ("price", "avg_price", "volume")


def volume_tiers(settings: ChartSettings) -> list[VolumeTier]:
    return [VolumeTier(**tier) for tier in settings.volume_tiers]


def summarize(samples: Sequence[Sample], reference_price: float) -> Summary:
    """Latest price, change and volume taken from the last sample."""

    reference = validate_reference(reference_price)
    last = samples[-1]
    change = last.price - reference
    return Summary(
        latest_price=last.price,
        latest_change_abs=change,
        latest_change_pct=change / reference * 100.0,
        latest_volume=last.volume,
    )


def build_header(
    summary: Summary,
    settings: ChartSettings,
    stock_name: Optional[str] = None,
    stock_code: Optional[str] = None,
) -> Optional[ChartHeader]:
    """Header line above the chart, only drawn when the stock is named."""

    if not stock_name:
        return None
    title = f"{stock_name} [{stock_code}]" if stock_code else stock_name
    rising = summary.latest_change_abs >= 0
    decimals = settings.price_decimals
    text = settings.header_template.format(
        price=f"{summary.latest_price:.{decimals}f}",
        sign="+" if rising else "",
        pct=f"{summary.latest_change_pct:.{decimals}f}",
        volume=summary.latest_volume,
    )
    return ChartHeader(title=title, text=text, color=settings.up_color if rising else settings.down_color)


def value_ticks(domain: Domain, rule: AxisLabelRule, split_number: int) -> list[AxisTick]:
    """Evenly spaced ticks across a domain, each labelled and colored by ``rule``."""

    ticks = []
    for step in range(split_number + 1):
        value = domain.min + domain.width * step / split_number
        ticks.append(AxisTick(value=value, label=axis_label(value, rule), color=axis_color(value, rule)))
    return ticks


def volume_ticks(samples: Sequence[Sample], tiers: Sequence[VolumeTier], settings: ChartSettings) -> list[AxisTick]:
    peak = max(sample.volume for sample in samples)
    if peak <= 0:
        return [AxisTick(value=0.0, label=format_volume(0, tiers), color=settings.volume_label_color)]
    split = settings.volume_split_number
    ticks = []
    for step in range(split + 1):
        value = peak * step / split
        ticks.append(AxisTick(value=value, label=format_volume(value, tiers), color=settings.volume_label_color))
    return ticks


def _axis_rules(reference: float, settings: ChartSettings) -> tuple[AxisLabelRule, AxisLabelRule]:
    colors = {
        "up_color": settings.up_color,
        "down_color": settings.down_color,
        "flat_color": settings.flat_color,
    }
    price_rule = AxisLabelRule(anchor=reference, epsilon=settings.equal_epsilon, decimals=settings.price_decimals, **colors)
    pct_rule = AxisLabelRule(
        anchor=0.0,
        epsilon=settings.equal_epsilon,
        decimals=settings.price_decimals,
        signed=True,
        suffix="%",
        **colors,
    )
    return price_rule, pct_rule


def build_chart(
    samples: Sequence[Sample],
    reference_price: float,
    domains: Domains,
    classifications: Sequence[Classification],
    *,
    stock_name: Optional[str] = None,
    stock_code: Optional[str] = None,
    style: Optional[Mapping[str, Any]] = None,
    settings: Optional[ChartSettings] = None,
) -> ChartDescription:
    """Combine domains, classifications and summary into a chart description."""

    settings = settings or get_settings()
    reference = validate_reference(reference_price)
    if not samples:
        raise ValueError("cannot build a chart description without samples")
    if len(classifications) != len(samples):
        raise ValueError(
            f"expected {len(samples)} classifications, got {len(classifications)}"
        )

    summary = summarize(samples, reference)
    price_rule, pct_rule = _axis_rules(reference, settings)
    tiers = volume_tiers(settings)

    classified = [
        ClassifiedSample(
            sample=sample,
            classification=classification,
            volume_color=volume_color(classification, settings.volume_up_color, settings.volume_down_color),
        )
        for sample, classification in zip(samples, classifications)
    ]

    return ChartDescription(
        reference_price=reference,
        price_domain=domains.price,
        pct_domain=domains.pct,
        samples=classified,
        summary=summary,
        header=build_header(summary, settings, stock_name, stock_code),
        time_labels=[session_time_label(sample.time, settings.time_axis_labels) for sample in samples],
        price_axis=price_rule,
        pct_axis=pct_rule,
        price_ticks=value_ticks(domains.price, price_rule, settings.split_number),
        pct_ticks=value_ticks(domains.pct, pct_rule, settings.split_number),
        volume_ticks=volume_ticks(samples, tiers, settings),
        volume_tiers=tiers,
        series_names=dict(settings.series_names),
        avg_color=settings.avg_color,
        tooltip_volume_decimals=settings.tooltip_volume_decimals,
        style=dict(style or {}),
    )


def render_chart(
    samples: Sequence[Sample],
    reference_price: float,
    *,
    stock_name: Optional[str] = None,
    stock_code: Optional[str] = None,
    style: Optional[Mapping[str, Any]] = None,
    settings: Optional[ChartSettings] = None,
) -> ChartDescription | EmptyChart:
    """Run the full pipeline, returning an EmptyChart marker for empty input."""

    settings = settings or get_settings()
    if not samples:
        logger.debug("No samples to chart, returning empty-state marker")
        record_render("empty", settings.metrics_enabled)
        return EmptyChart(placeholder=settings.empty_placeholder)

    try:
        with record_render_latency(settings.metrics_enabled):
            domains = compute_domains(
                samples,
                reference_price,
                floor_ratio=settings.deviation_floor_ratio,
                margin=settings.domain_margin,
            )
            classifications = classify(samples, reference_price, epsilon=settings.equal_epsilon)
            description = build_chart(
                samples,
                reference_price,
                domains,
                classifications,
                stock_name=stock_name,
                stock_code=stock_code,
                style=style,
                settings=settings,
            )
    except InvalidReferenceError:
        record_render("invalid", settings.metrics_enabled)
        raise

    record_render("chart", settings.metrics_enabled)
    return description


def tooltip_at(
    description: ChartDescription,
    index: int,
    *,
    series: Optional[Iterable[str]] = None,
    session_date: Optional[date] = None,
) -> Tooltip:
    """Tooltip for the bucket at ``index``, one line per requested series."""

    if not 0 <= index < len(description.samples):
        raise IndexError(f"no sample at position {index}")

    if series is None:
        wanted = list(SERIES_ORDER)
    else:
        requested = set(series)
        unknown = requested - set(SERIES_ORDER)
        if unknown:
            raise ValueError(f"unknown series: {', '.join(sorted(unknown))}")
        wanted = [name for name in SERIES_ORDER if name in requested]

    sample = description.samples[index].sample
    day = session_date or date.today()
    rule = description.price_axis
    names = description.series_names
    lines: list[TooltipLine] = []

    for name in wanted:
        if name == "price":
            change = sample.price - description.reference_price
            change_pct = change / description.reference_price * 100.0
            lines.append(
                TooltipLine(
                    series=name,
                    label=names[name],
                    text=f"{sample.price:.{rule.decimals}f}  {signed(change, rule.decimals)} ({signed(change_pct, rule.decimals)}%)",
                    color=rule.up_color if change >= 0 else rule.down_color,
                )
            )
        elif name == "avg_price":
            lines.append(
                TooltipLine(
                    series=name,
                    label=names[name],
                    text=f"{sample.avg_price:.{rule.decimals}f}",
                    color=description.avg_color,
                )
            )
        else:
            lines.append(
                TooltipLine(
                    series=name,
                    label=names[name],
                    text=format_volume(sample.volume, description.volume_tiers, description.tooltip_volume_decimals),
                )
            )

    return Tooltip(title=f"{day:%Y-%m-%d} {sample.time}", lines=lines)
