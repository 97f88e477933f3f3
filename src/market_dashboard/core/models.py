"""Data models for the intraday time-series chart."""
from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Position of a value relative to its anchor."""

    ABOVE = "above"
    BELOW = "below"
    EQUAL = "equal"


class Sample(BaseModel):
    """One time bucket of the intraday series, as delivered by the data source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time: str = Field(..., description="Wall-clock label of the bucket, e.g. 09:31.")
    price: float = Field(..., gt=0, description="Last traded price in the bucket.")
    volume: int = Field(0, ge=0, description="Traded volume in the bucket.")
    avg_price: float = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("avg_price", "avgPrice"),
        description="Session volume-weighted average price up to this bucket.",
    )


class Domain(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @property
    def width(self) -> float:
        return self.max - self.min


class Domains(BaseModel):
    """Price domain and the percentage domain locked to it."""

    model_config = ConfigDict(frozen=True)

    price: Domain
    pct: Domain
    max_deviation: float = Field(..., gt=0)


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    vs_reference: Direction
    vs_previous: Direction


class ClassifiedSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    sample: Sample
    classification: Classification
    volume_color: str


class Summary(BaseModel):
    """Latest-bucket figures shown in the chart header."""

    model_config = ConfigDict(frozen=True)

    latest_price: float
    latest_change_abs: float
    latest_change_pct: float
    latest_volume: int


class ChartHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    text: str
    color: str


class AxisLabelRule(BaseModel):
    """Coloring and formatting of value-axis labels, expressed as data."""

    model_config = ConfigDict(frozen=True)

    anchor: float
    epsilon: float
    up_color: str
    down_color: str
    flat_color: str
    decimals: int = 2
    signed: bool = False
    suffix: str = ""


class AxisTick(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float
    label: str
    color: str


class VolumeTier(BaseModel):
    model_config = ConfigDict(frozen=True)

    threshold: float
    divisor: float = Field(..., gt=0)
    suffix: str = ""


class TooltipLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    series: str
    label: str
    text: str
    color: Optional[str] = None


class Tooltip(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    lines: list[TooltipLine]


class ChartDescription(BaseModel):
    """Declarative description of the chart handed to the external renderer."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["chart"] = "chart"
    reference_price: float
    price_domain: Domain
    pct_domain: Domain
    samples: list[ClassifiedSample]
    summary: Summary
    header: Optional[ChartHeader] = None
    time_labels: list[str]
    price_axis: AxisLabelRule
    pct_axis: AxisLabelRule
    price_ticks: list[AxisTick]
    pct_ticks: list[AxisTick]
    volume_ticks: list[AxisTick]
    volume_tiers: list[VolumeTier]
    series_names: dict[str, str]
    avg_color: str
    tooltip_volume_decimals: int = 2
    style: dict[str, Any] = Field(default_factory=dict)


class EmptyChart(BaseModel):
    """Marker returned instead of a chart when there are no samples to draw."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"
    placeholder: str
