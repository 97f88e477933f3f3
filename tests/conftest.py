import pytest

from market_dashboard.core.models import Sample


@pytest.fixture
def scenario_samples() -> list[Sample]:
    """Three buckets around a 10.00 previous close."""
    return [
        Sample(time="09:30", price=10.00, volume=800, avg_price=10.00),
        Sample(time="09:31", price=10.05, volume=12_345, avg_price=10.00),
        Sample(time="09:32", price=9.98, volume=300, avg_price=10.00),
    ]
