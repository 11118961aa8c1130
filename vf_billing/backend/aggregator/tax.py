"""
Tax deduction helpers
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

from ...config import TAX_RATE


def round_half_up(value) -> int:
    """
    Round to a whole number, .5 going up

    The built-in round() rounds half to even, which would bill 2 instead of
    3 on an amount of 25.
    """
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def compute_tax(amount, tax_rate: float = TAX_RATE) -> int:
    """
    Tax deduction for one amount

    Args:
        amount: billed amount
        tax_rate: withholding rate (default 10%)

    Returns:
        int: rounded deduction
    """
    return round_half_up(Decimal(str(amount)) * Decimal(str(tax_rate)))


def split_amount(amount, tax_rate: float = TAX_RATE) -> Tuple[int, float]:
    """Return (tax, pay) for an amount"""
    tax = compute_tax(amount, tax_rate)
    return tax, amount - tax
