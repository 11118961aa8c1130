"""
Personal summary aggregation
Totals per faculty over a month range
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
import logging

from ...config import TAX_RATE
from ..models import BillEntry, FacultyRecord
from .ledger import BillingTotals
from .periods import bills_in_period
from .tax import split_amount

logger = logging.getLogger(__name__)


@dataclass
class FacultyTotal:
    """Honorarium of one faculty member for the period"""
    faculty: FacultyRecord
    amount: float = 0
    tax: int = 0
    pay: float = 0

    def to_dict(self, sno: int) -> dict:
        return {
            'sno': sno,
            'name': self.faculty.name.upper(),
            'bankDetails': self.faculty.bank_name,
            'panNumber': self.faculty.pan_number,
            'amount': self.amount,
            'tax': self.tax,
            'totalPay': self.pay
        }


@dataclass
class PersonalSummaryResult:
    """Personal summary aggregation result"""
    start_month: str
    end_month: str
    year: int
    faculty_totals: List[FacultyTotal] = field(default_factory=list)
    totals: BillingTotals = field(default_factory=BillingTotals)

    def to_dict(self) -> dict:
        """On-screen form: rows plus grand totals"""
        return {
            'rows': [ft.to_dict(i) for i, ft in enumerate(self.faculty_totals, start=1)],
            'totals': {
                'amount': self.totals.amount,
                'tax': self.totals.tax,
                'totalPay': self.totals.pay
            }
        }


class PersonalSummaryAggregator:
    """
    Per-faculty totals for a month range of one year

    Usage:
        aggregator = PersonalSummaryAggregator(bills, faculty, 'January', 'May', 2024)
        result = aggregator.aggregate()
    """

    def __init__(
        self,
        bills: Iterable[BillEntry],
        faculty: Iterable[FacultyRecord],
        start_month: str,
        end_month: str,
        year: int,
        tax_rate: float = TAX_RATE
    ):
        self.bills = list(bills)
        self.faculty_by_id: Dict[str, FacultyRecord] = {f.id: f for f in faculty}
        self.start_month = start_month
        self.end_month = end_month
        self.year = year
        self.tax_rate = tax_rate
        self.result: Optional[PersonalSummaryResult] = None

    def aggregate(self) -> PersonalSummaryResult:
        self.result = PersonalSummaryResult(self.start_month, self.end_month, self.year)
        filtered = bills_in_period(self.bills, self.start_month, self.end_month, self.year)
        logger.info(
            f"Personal summary {self.start_month}-{self.end_month} {self.year}: "
            f"{len(filtered)} of {len(self.bills)} bills in period"
        )

        # running total per faculty, first-encountered order
        totals: Dict[str, FacultyTotal] = {}
        for bill in filtered:
            faculty = self.faculty_by_id.get(bill.faculty_id)
            if faculty is None:
                logger.warning(f"Skipping bill {bill.id}: faculty {bill.faculty_id} not found")
                continue
            entry = totals.get(bill.faculty_id)
            if entry is None:
                entry = FacultyTotal(faculty=faculty)
                totals[bill.faculty_id] = entry
                self.result.faculty_totals.append(entry)
            entry.amount += bill.total_amount

        for entry in self.result.faculty_totals:
            entry.tax, entry.pay = split_amount(entry.amount, self.tax_rate)
            self.result.totals.add(entry.amount, entry.tax, entry.pay)

        return self.result


def group_for_personal_summary(
    bills: Iterable[BillEntry],
    faculty: Iterable[FacultyRecord],
    start_month: str,
    end_month: str,
    year: int,
    tax_rate: float = TAX_RATE
) -> PersonalSummaryResult:
    """Group bills per faculty for the personal summary"""
    return PersonalSummaryAggregator(
        bills, faculty, start_month, end_month, year, tax_rate
    ).aggregate()
