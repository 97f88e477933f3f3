"""Runtime settings for the market dashboard chart engine."""
from __future__ import annotations

from functools import lru_cache
import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_VOLUME_TIERS: list[dict[str, object]] = [
    {"threshold": 10_000, "divisor": 10_000, "suffix": "万"},
    {"threshold": 1_000, "divisor": 1_000, "suffix": "千"},
]

# Session key times shown on the x axis. The lunch break collapses into one label.
DEFAULT_TIME_AXIS_LABELS: dict[str, str] = {
    "09:30": "09:30",
    "10:30": "10:30",
    "11:30": "11:30/13:00",
    "13:00": "",
    "14:00": "14:00",
    "15:00": "15:00",
}


class ChartSettings(BaseSettings):
    """Strongly typed chart configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHART_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    equal_epsilon: float = Field(default=0.001, ge=0.0, description="Absolute tolerance for classifying a value as equal to its anchor.")
    deviation_floor_ratio: float = Field(default=0.005, gt=0.0, description="Minimum half-width of the price domain as a fraction of the reference.")
    domain_margin: float = Field(default=1.1, ge=1.0, description="Headroom multiplier applied to the largest observed deviation.")
    split_number: int = Field(default=6, ge=1, description="Number of intervals on the price and percentage axes.")
    volume_split_number: int = Field(default=2, ge=1, description="Number of intervals on the volume axis.")
    price_decimals: int = Field(default=2, ge=0, description="Decimals used for price and percentage labels.")
    volume_tiers: list[dict[str, object]] = Field(
        default_factory=lambda: [dict(tier) for tier in DEFAULT_VOLUME_TIERS],
        description="Volume abbreviation tiers, largest threshold first.",
    )
    tooltip_volume_decimals: int = Field(default=2, ge=0, description="Decimals for abbreviated volume inside tooltips.")

    up_color: str = Field(default="#dc2626", description="Color for values above the anchor.")
    down_color: str = Field(default="#16a34a", description="Color for values below the anchor.")
    flat_color: str = Field(default="#64748b", description="Color for values equal to the anchor.")
    volume_up_color: str = Field(default="rgba(220, 38, 38, 0.7)")
    volume_down_color: str = Field(default="rgba(22, 163, 74, 0.7)")
    avg_color: str = Field(default="#d97706", description="Color of the moving-average price line and tooltip row.")
    volume_label_color: str = Field(default="#94a3b8")

    series_names: dict[str, str] = Field(
        default_factory=lambda: {"price": "价格", "avg_price": "均价", "volume": "成交量"},
        description="Display names of the three chart series.",
    )
    time_axis_labels: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TIME_AXIS_LABELS))
    header_template: str = Field(
        default="价格:{price}  涨幅:{sign}{pct}%  成交量:{volume}",
        description="Header line rendered above the chart.",
    )
    empty_placeholder: str = Field(default="暂无分时数据", description="Text shown when no samples are available.")

    metrics_enabled: bool = Field(default=True, description="Expose Prometheus metrics endpoint.")
    log_level: str = Field(default="INFO")

    @field_validator("volume_tiers", mode="before")
    @classmethod
    def _coerce_tiers(cls, value):
        if value in (None, "", []):
            return []
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("volume_tiers must be a JSON list") from exc
        if not isinstance(value, (list, tuple)):
            raise ValueError("volume_tiers must be a list of tier objects")
        tiers = []
        for item in value:
            if isinstance(item, (list, tuple)) and len(item) == 3:
                item = {"threshold": item[0], "divisor": item[1], "suffix": item[2]}
            if not isinstance(item, dict) or "threshold" not in item or "divisor" not in item:
                raise ValueError("each volume tier needs threshold, divisor and suffix")
            divisor = float(item["divisor"])
            if divisor <= 0:
                raise ValueError("volume tier divisor must be positive")
            tiers.append({"threshold": float(item["threshold"]), "divisor": divisor, "suffix": str(item.get("suffix", ""))})
        tiers.sort(key=lambda tier: tier["threshold"], reverse=True)
        return tiers

    @field_validator("series_names")
    @classmethod
    def _validate_series(cls, value: dict[str, str]) -> dict[str, str]:
        missing = {"price", "avg_price", "volume"} - set(value)
        if missing:
            raise ValueError(f"series_names missing keys: {', '.join(sorted(missing))}")
        return value


@lru_cache(maxsize=1)
def get_settings() -> ChartSettings:
    """Return a cached settings instance to avoid repeated environment parsing."""

    return ChartSettings()
