"""
Report service
Loads records, runs the aggregation and writes workbooks
"""
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from ..aggregator import (
    ExcelExporter,
    ReportTable,
    bills_for_month,
    build_faculty_list_report,
    build_ledger_report,
    build_personal_summary_report,
    filter_bills,
    group_for_ledger,
    group_for_personal_summary,
    ledger_title,
)
from ..aggregator.personal import PersonalSummaryResult
from .db_service import DatabaseService

logger = logging.getLogger(__name__)


class ExportService:
    """
    Ledger, monthly and personal summary reports

    Usage:
        service = ExportService(db_service, output_dir)
        path = service.export_bills(month='March', year=2024)
    """

    def __init__(self, db_service: DatabaseService, output_dir: Path):
        self.db = db_service
        self.output_dir = Path(output_dir)

    # ========== tables ==========

    def ledger_table(
        self,
        month: Optional[str] = None,
        year: Optional[int] = None,
        search: Optional[str] = None
    ) -> ReportTable:
        """Ledger of the bills matching the admin filters"""
        bills = filter_bills(self.db.list_bills(), month, year, search)
        result = group_for_ledger(bills, self.db.list_faculty())
        return build_ledger_report(result)

    def monthly_table(self, month: str, year: int) -> ReportTable:
        """Ledger layout restricted to one month"""
        bills = bills_for_month(self.db.list_bills(), month, year)
        result = group_for_ledger(bills, self.db.list_faculty())
        return build_ledger_report(result, ledger_title(f"{month} {year}"))

    def personal_summary(self, start_month: str, end_month: str, year: int) -> PersonalSummaryResult:
        return group_for_personal_summary(
            self.db.list_bills(), self.db.list_faculty(), start_month, end_month, year
        )

    # ========== workbooks ==========

    def export_bills(
        self,
        month: Optional[str] = None,
        year: Optional[int] = None,
        search: Optional[str] = None
    ) -> Path:
        """
        Ledger workbook of the filtered bills

        Raises:
            ValueError: no bill matches the filters
        """
        table = self.ledger_table(month, year, search)
        if not table.rows:
            raise ValueError('No bills to export')
        filename = f"VF_Bills_{datetime.now().strftime('%Y-%m-%d')}.xlsx"
        return ExcelExporter(table, self.output_dir, filename, sheet_name='Bills').export()

    def export_monthly_summary(self, month: str, year: int) -> Path:
        if not month or not year:
            raise ValueError('Please select month and year')
        table = self.monthly_table(month, year)
        filename = f"VF_Monthly_Summary_{month}_{year}.xlsx"
        return ExcelExporter(table, self.output_dir, filename, sheet_name='Monthly Summary').export()

    def export_personal_summary(self, start_month: str, end_month: str, year: int) -> Path:
        if not start_month or not end_month or not year:
            raise ValueError('Please select start month, end month, and year')
        table = build_personal_summary_report(self.personal_summary(start_month, end_month, year))
        filename = f"Personal_Summary_VF_{start_month}_{end_month}_{year}.xlsx"
        return ExcelExporter(table, self.output_dir, filename, sheet_name='Personal Summary').export()

    def export_faculty_list(self) -> Path:
        faculty = self.db.list_faculty()
        if not faculty:
            raise ValueError('No faculty to export')
        table = build_faculty_list_report(faculty)
        return ExcelExporter(table, self.output_dir, 'Faculty_List.xlsx', sheet_name='Faculty List').export()
