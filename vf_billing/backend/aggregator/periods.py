"""
Period and search filters for bill entries
"""
from typing import Iterable, List, Optional

from ...config import MONTHS
from ..models import BillEntry


def month_index(month: str) -> int:
    """Calendar position of a month name (January=0), -1 when unknown"""
    try:
        return MONTHS.index(month)
    except ValueError:
        return -1


def bills_in_period(
    bills: Iterable[BillEntry],
    start_month: str,
    end_month: str,
    year: int
) -> List[BillEntry]:
    """
    Bills of `year` whose month lies in [start_month, end_month]

    No wraparound: an end month before the start month selects nothing.
    """
    start_idx = month_index(start_month)
    end_idx = month_index(end_month)
    if start_idx < 0 or end_idx < 0 or end_idx < start_idx:
        return []

    selected = []
    for bill in bills:
        if bill.year != year:
            continue
        idx = month_index(bill.month)
        if start_idx <= idx <= end_idx:
            selected.append(bill)
    return selected


def bills_for_month(bills: Iterable[BillEntry], month: str, year: int) -> List[BillEntry]:
    """Bills of exactly one month"""
    return [b for b in bills if b.month == month and b.year == year]


def filter_bills(
    bills: Iterable[BillEntry],
    month: Optional[str] = None,
    year: Optional[int] = None,
    search: Optional[str] = None
) -> List[BillEntry]:
    """
    Admin list filter

    Args:
        bills: bill entries
        month: month name, ignored when empty
        year: year, ignored when empty
        search: case-insensitive match on faculty name or faculty id

    Returns:
        List[BillEntry]: matching bills in input order
    """
    query = (search or '').lower()
    result = []
    for bill in bills:
        if month and bill.month != month:
            continue
        if year and bill.year != int(year):
            continue
        if query and query not in bill.faculty_name.lower() \
                and query not in bill.faculty_id.lower():
            continue
        result.append(bill)
    return result
