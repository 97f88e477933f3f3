import pytest

from market_dashboard.core.domain import compute_domains, deviation_floor, max_deviation
from market_dashboard.errors import InvalidReferenceError

from factories import make_sample


def test_scenario_domain(scenario_samples):
    domains = compute_domains(scenario_samples, 10.0)
    assert domains.max_deviation == pytest.approx(0.05)
    assert domains.price.min == pytest.approx(9.945)
    assert domains.price.max == pytest.approx(10.055)
    assert domains.pct.max == pytest.approx(0.55)


@pytest.mark.parametrize(
    "prices, reference",
    [
        ([10.0, 10.3, 9.4, 10.1], 10.0),
        ([101.25], 98.7),
        ([0.51, 0.49, 0.5], 0.5),
        ([3210.0, 3198.5, 3250.75], 3200.0),
    ],
)
def test_domains_are_symmetric_and_locked(prices, reference):
    samples = [make_sample(f"09:{30 + i}", p, avg_price=(p + reference) / 2) for i, p in enumerate(prices)]
    domains = compute_domains(samples, reference)
    assert domains.price.max - reference == pytest.approx(reference - domains.price.min)
    assert domains.pct.max == -domains.pct.min
    assert domains.pct.max == pytest.approx((domains.price.max - reference) / reference * 100)
    assert domains.price.width > 0


def test_flat_series_uses_floor():
    reference = 25.0
    samples = [make_sample(f"10:0{i}", reference) for i in range(5)]
    assert max_deviation(samples, reference) == reference * 0.005
    domains = compute_domains(samples, reference)
    assert domains.max_deviation == deviation_floor(reference)
    assert domains.price.width > 0


def test_avg_price_can_set_the_deviation():
    samples = [make_sample("09:30", 10.0, avg_price=10.4)]
    assert max_deviation(samples, 10.0) == pytest.approx(0.4)


def test_single_sample_domain():
    domains = compute_domains([make_sample("09:30", 11.0)], 10.0)
    assert domains.max_deviation == pytest.approx(1.0)
    assert domains.price.max == pytest.approx(11.1)
    assert domains.pct.max == pytest.approx(11.0)


def test_custom_floor_and_margin():
    samples = [make_sample("09:30", 10.0)]
    domains = compute_domains(samples, 10.0, floor_ratio=0.01, margin=1.0)
    assert domains.price.min == pytest.approx(9.9)
    assert domains.price.max == pytest.approx(10.1)


@pytest.mark.parametrize("reference", [0, -1.5, float("nan"), float("inf")])
def test_invalid_reference(reference):
    with pytest.raises(InvalidReferenceError):
        compute_domains([make_sample("09:30", 10.0)], reference)


def test_invalid_reference_is_a_value_error():
    with pytest.raises(ValueError):
        compute_domains([make_sample("09:30", 10.0)], 0)


def test_empty_samples_rejected():
    with pytest.raises(ValueError):
        compute_domains([], 10.0)
