"""
Billing aggregation and report layouts
"""

from .tax import compute_tax, round_half_up
from .periods import bills_for_month, bills_in_period, filter_bills, month_index
from .ledger import LedgerAggregator, LedgerResult, group_for_ledger
from .personal import PersonalSummaryAggregator, PersonalSummaryResult, group_for_personal_summary
from .report import (
    ReportTable,
    build_faculty_list_report,
    build_ledger_report,
    build_personal_summary_report,
    ledger_title,
)
from .excel_output import ExcelExporter

__all__ = [
    'compute_tax',
    'round_half_up',
    'bills_for_month',
    'bills_in_period',
    'filter_bills',
    'month_index',
    'LedgerAggregator',
    'LedgerResult',
    'group_for_ledger',
    'PersonalSummaryAggregator',
    'PersonalSummaryResult',
    'group_for_personal_summary',
    'ReportTable',
    'build_faculty_list_report',
    'build_ledger_report',
    'build_personal_summary_report',
    'ledger_title',
    'ExcelExporter',
]
