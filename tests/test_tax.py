import pytest

from vf_billing.backend.aggregator.tax import compute_tax, round_half_up, split_amount


@pytest.mark.parametrize('value, expected', [
    (2.5, 3),
    (3.5, 4),
    (4.5, 5),
    (4.4999, 4),
    (0, 0),
    (499.5, 500),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize('amount, expected', [
    (5000, 500),
    (45, 5),      # 4.5 rounds up, not to even
    (25, 3),      # 2.5 rounds up, not to even
    (15, 2),
    (4994, 499),
    (4995, 500),
    (2250.0, 225),
    (1, 0),
])
def test_compute_tax_rounds_half_up(amount, expected):
    assert compute_tax(amount) == expected


def test_compute_tax_custom_rate():
    assert compute_tax(1000, tax_rate=0.2) == 200


def test_split_amount():
    tax, pay = split_amount(4500)
    assert tax == 450
    assert pay == 4050
    assert tax + pay == 4500
