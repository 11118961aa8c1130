"""
Report layouts
Turns aggregation results into fixed-column tables for on-screen
display and spreadsheet export
"""
import pandas as pd
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional
import logging

from ...config import (
    LEDGER_HEADER_LINES,
    LEDGER_TITLE,
    PERSONAL_SUMMARY_HEADER_LINES,
    PERSONAL_SUMMARY_BANK_LINE,
)
from ..models import FacultyRecord
from .ledger import BillingTotals, LedgerResult
from .personal import PersonalSummaryResult

logger = logging.getLogger(__name__)

BLANK = ''

ROW_ENTRY = 'entry'
ROW_SUBTOTAL = 'subtotal'
ROW_TOTAL = 'total'

LEDGER_COLUMNS = [
    'S.No.',
    'Name/Class',
    'Month',
    'No. of Lectures',
    'Rate',
    'Amount',
    'PAN No.',
    '10% Tax Deduction',
    'Total Pay Amount',
    'Bills ref. page',
]
LEDGER_COLUMN_WIDTHS = [6, 25, 10, 15, 8, 10, 15, 18, 18, 15]

PERSONAL_SUMMARY_COLUMNS = [
    'S.No',
    'Name of Faculty',
    'Bank Details',
    'PAN Number',
    'Amount Paid (in Rupees)',
    'TAX Deduction (10%)',
    'Total Pay Amount',
]
PERSONAL_SUMMARY_COLUMN_WIDTHS = [8, 25, 15, 15, 22, 20, 18]

FACULTY_LIST_COLUMNS = [
    'Name',
    'Email',
    'Phone',
    'Bank Account',
    'IFSC Code',
    'Bank Name',
    'PAN Number',
    'Aadhar Number',
    'Registered On',
]
FACULTY_LIST_COLUMN_WIDTHS = [20] * len(FACULTY_LIST_COLUMNS)


@dataclass
class ReportTable:
    """Formatted report: title lines, header row and data rows"""
    title_lines: List[str]
    columns: List[str]
    column_widths: List[int]
    rows: List[list] = field(default_factory=list)
    row_kinds: List[str] = field(default_factory=list)
    totals: BillingTotals = field(default_factory=BillingTotals)

    @property
    def width(self) -> int:
        return len(self.columns)

    def append(self, row: list, kind: str = ROW_ENTRY) -> None:
        if len(row) != self.width:
            raise ValueError(f"Row has {len(row)} cells, expected {self.width}")
        self.rows.append(row)
        self.row_kinds.append(kind)

    def to_matrix(self) -> List[list]:
        """
        Full 2-D cell array

        Title lines padded to the row width, one blank row,
        the column header row, then the data rows.
        """
        padding = [BLANK] * (self.width - 1)
        matrix = [[line] + padding for line in self.title_lines]
        if self.title_lines:
            matrix.append([BLANK] * self.width)
        matrix.append(list(self.columns))
        matrix.extend(list(row) for row in self.rows)
        return matrix

    def to_dataframe(self) -> pd.DataFrame:
        """Data rows as a DataFrame with the report columns"""
        return pd.DataFrame(self.rows, columns=self.columns)

    def to_dict(self) -> dict:
        return {
            'titleLines': list(self.title_lines),
            'columns': list(self.columns),
            'rows': [list(row) for row in self.rows],
            'rowKinds': list(self.row_kinds),
            'totals': self.totals.to_dict()
        }


def ledger_title(period_label: Optional[str] = None) -> str:
    """Third header line of the ledger, e.g. "Visiting Faculty Salary Bill March 2024" """
    label = period_label if period_label else str(datetime.now().year)
    return f"{LEDGER_TITLE} {label}"


def build_ledger_report(result: LedgerResult, title: Optional[str] = None) -> ReportTable:
    """
    Detailed ledger layout

    Within a group the first row carries the serial number, faculty name
    and PAN; the second row carries the subject, the third the class name,
    later rows leave the name blank. A subtotal row closes every group.

    Args:
        result: ledger aggregation result
        title: report title line (default: current year ledger title)

    Returns:
        ReportTable: 10-column table
    """
    table = ReportTable(
        title_lines=LEDGER_HEADER_LINES + [title or ledger_title()],
        columns=list(LEDGER_COLUMNS),
        column_widths=list(LEDGER_COLUMN_WIDTHS)
    )

    page_ref = 1
    for serial_no, group in enumerate(result.groups, start=1):
        for index, entry in enumerate(group.entries):
            bill = entry.bill
            if index == 0:
                sno, name, pan = serial_no, group.display_name, group.pan_number
            elif index == 1:
                sno, name, pan = BLANK, group.subject, BLANK
            elif index == 2:
                sno, name, pan = BLANK, group.class_name, BLANK
            else:
                sno, name, pan = BLANK, BLANK, BLANK

            table.append([
                sno,
                name,
                bill.month_year,
                bill.total_hours,
                bill.rate_per_hour,
                bill.total_amount,
                pan,
                entry.tax,
                entry.pay,
                page_ref
            ])
            page_ref += 1

        subtotal = group.subtotal
        table.append([
            BLANK, BLANK, BLANK,
            subtotal.hours,
            BLANK,
            subtotal.amount,
            BLANK,
            subtotal.tax,
            subtotal.pay,
            BLANK
        ], ROW_SUBTOTAL)

    table.totals = result.totals
    logger.info(f"Ledger report: {len(table.rows)} rows")
    return table


def build_personal_summary_report(result: PersonalSummaryResult) -> ReportTable:
    """
    Faculty-wise honorarium summary

    One row per faculty followed by a TOTAL row.

    Returns:
        ReportTable: 7-column table
    """
    period = f"for the Period of {result.start_month} - {result.end_month} {result.year}"
    table = ReportTable(
        title_lines=PERSONAL_SUMMARY_HEADER_LINES + [period, PERSONAL_SUMMARY_BANK_LINE],
        columns=list(PERSONAL_SUMMARY_COLUMNS),
        column_widths=list(PERSONAL_SUMMARY_COLUMN_WIDTHS)
    )

    for serial_no, ft in enumerate(result.faculty_totals, start=1):
        table.append([
            serial_no,
            ft.faculty.name.upper(),
            ft.faculty.bank_name,
            ft.faculty.pan_number,
            ft.amount,
            ft.tax,
            ft.pay
        ])

    totals = result.totals
    table.append(
        ['TOTAL', BLANK, BLANK, BLANK, totals.amount, totals.tax, totals.pay],
        ROW_TOTAL
    )
    table.totals = totals
    return table


def build_faculty_list_report(faculty: Iterable[FacultyRecord]) -> ReportTable:
    """Registered faculty with bank and identity details"""
    table = ReportTable(
        title_lines=[],
        columns=list(FACULTY_LIST_COLUMNS),
        column_widths=list(FACULTY_LIST_COLUMN_WIDTHS)
    )
    for f in faculty:
        table.append([
            f.name,
            f.email,
            f.phone,
            f.bank_account_number,
            f.ifsc_code,
            f.bank_name,
            f.pan_number,
            f.aadhar_number,
            f.created_at.strftime('%d/%m/%Y')
        ])
    return table
