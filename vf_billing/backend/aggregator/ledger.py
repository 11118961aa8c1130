"""
Ledger aggregation
Groups bill entries by faculty / subject / class and computes
per-entry tax deductions and group subtotals
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from ...config import TAX_RATE
from ..models import BillEntry, FacultyRecord
from .tax import split_amount

logger = logging.getLogger(__name__)


@dataclass
class BillingTotals:
    """Summed hours, amount, tax and pay"""
    hours: float = 0
    amount: float = 0
    tax: int = 0
    pay: float = 0

    def add(self, amount, tax, pay, hours=0) -> None:
        self.hours += hours
        self.amount += amount
        self.tax += tax
        self.pay += pay

    def to_dict(self) -> dict:
        return {
            'hours': self.hours,
            'amount': self.amount,
            'tax': self.tax,
            'pay': self.pay
        }


@dataclass
class LedgerEntryRow:
    """One bill entry with its deduction"""
    bill: BillEntry
    tax: int
    pay: float


@dataclass
class LedgerGroup:
    """Entries sharing faculty, subject and class"""
    faculty_id: str
    subject: str
    class_name: str
    faculty: Optional[FacultyRecord] = None
    entries: List[LedgerEntryRow] = field(default_factory=list)
    subtotal: BillingTotals = field(default_factory=BillingTotals)

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.faculty_id, self.subject, self.class_name)

    @property
    def display_name(self) -> str:
        # name captured on the first bill, not re-synced from the profile
        if self.entries:
            return self.entries[0].bill.faculty_name
        return self.faculty.name if self.faculty else ''

    @property
    def pan_number(self) -> str:
        return self.faculty.pan_number if self.faculty else ''


@dataclass
class LedgerResult:
    """Ledger aggregation result"""
    groups: List[LedgerGroup] = field(default_factory=list)
    totals: BillingTotals = field(default_factory=BillingTotals)

    @property
    def entry_count(self) -> int:
        return sum(len(g.entries) for g in self.groups)


class LedgerAggregator:
    """
    Ledger aggregation

    Usage:
        aggregator = LedgerAggregator(bills, faculty)
        result = aggregator.aggregate()
    """

    def __init__(
        self,
        bills: Iterable[BillEntry],
        faculty: Iterable[FacultyRecord],
        tax_rate: float = TAX_RATE
    ):
        """
        Args:
            bills: bill entries, already filtered by the caller
            faculty: faculty records, looked up by id
            tax_rate: withholding rate
        """
        self.bills = list(bills)
        self.faculty_by_id: Dict[str, FacultyRecord] = {f.id: f for f in faculty}
        self.tax_rate = tax_rate
        self.result: Optional[LedgerResult] = None

    def aggregate(self) -> LedgerResult:
        """
        Group the bills and compute subtotals

        Returns:
            LedgerResult: groups in first-encountered order
        """
        self.result = LedgerResult()
        groups: Dict[Tuple[str, str, str], LedgerGroup] = {}

        for bill in self.bills:
            key = (bill.faculty_id, bill.subject, bill.class_name)
            group = groups.get(key)
            if group is None:
                faculty = self.faculty_by_id.get(bill.faculty_id)
                if faculty is None:
                    logger.warning(f"Faculty not found for bill {bill.id}: {bill.faculty_id}")
                group = LedgerGroup(
                    faculty_id=bill.faculty_id,
                    subject=bill.subject,
                    class_name=bill.class_name,
                    faculty=faculty
                )
                groups[key] = group
                self.result.groups.append(group)

            tax, pay = split_amount(bill.total_amount, self.tax_rate)
            group.entries.append(LedgerEntryRow(bill=bill, tax=tax, pay=pay))
            # subtotal tax is the sum of rounded entry taxes
            group.subtotal.add(bill.total_amount, tax, pay, bill.total_hours)
            self.result.totals.add(bill.total_amount, tax, pay, bill.total_hours)

        logger.info(
            f"Ledger aggregation: {len(self.result.groups)} groups, "
            f"{self.result.entry_count} entries, amount {self.result.totals.amount:,.0f}"
        )
        return self.result


def group_for_ledger(
    bills: Iterable[BillEntry],
    faculty: Iterable[FacultyRecord],
    tax_rate: float = TAX_RATE
) -> LedgerResult:
    """Group bills for the detailed ledger"""
    return LedgerAggregator(bills, faculty, tax_rate).aggregate()
