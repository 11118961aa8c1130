"""
Excel output
Writes a ReportTable to an .xlsx workbook
"""
import pandas as pd
from pathlib import Path
from typing import Optional
import logging
from datetime import datetime

from openpyxl.styles import Font, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from .report import BLANK, ROW_SUBTOTAL, ROW_TOTAL, ReportTable

logger = logging.getLogger(__name__)


class ExcelExporter:
    """
    Excel output

    Usage:
        exporter = ExcelExporter(table, output_dir=Path.home() / "Downloads")
        filepath = exporter.export()
    """

    def __init__(
        self,
        report: ReportTable,
        output_dir: Optional[Path] = None,
        filename: Optional[str] = None,
        sheet_name: str = 'Bills'
    ):
        """
        Args:
            report: formatted report
            output_dir: output directory (default: ~/Downloads)
            filename: output file name (default: VF_Bills_YYYY-MM-DD.xlsx)
            sheet_name: worksheet name
        """
        self.report = report
        self.output_dir = Path(output_dir) if output_dir else Path.home() / "Downloads"
        self.sheet_name = sheet_name

        if filename:
            self.filename = filename
        else:
            self.filename = f"VF_Bills_{datetime.now().strftime('%Y-%m-%d')}.xlsx"

        self.filepath = self.output_dir / self.filename

    @property
    def header_row(self) -> int:
        """0-based row of the column header (title lines + one blank row above it)"""
        if not self.report.title_lines:
            return 0
        return len(self.report.title_lines) + 1

    def export(self) -> Path:
        """
        Write the workbook

        Returns:
            Path: output file path
        """
        logger.info(f"Excel export started: {self.filepath}")

        self.output_dir.mkdir(parents=True, exist_ok=True)

        # blank cells stay empty instead of holding empty strings
        rows = [[None if cell == BLANK else cell for cell in row] for row in self.report.rows]
        df = pd.DataFrame(rows, columns=self.report.columns)

        with pd.ExcelWriter(self.filepath, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=self.sheet_name, index=False, startrow=self.header_row)
            worksheet = writer.sheets[self.sheet_name]
            self._write_title_lines(worksheet)
            self._apply_styles(worksheet)

        logger.info(f"Excel export finished: {self.filepath} ({len(df)} rows)")
        return self.filepath

    def _write_title_lines(self, worksheet) -> None:
        """Title lines merged across the full row width"""
        width = self.report.width
        for index, line in enumerate(self.report.title_lines, start=1):
            cell = worksheet.cell(row=index, column=1, value=line)
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal='center')
            worksheet.merge_cells(
                start_row=index, start_column=1,
                end_row=index, end_column=width
            )

    def _apply_styles(self, worksheet) -> None:
        """Header, subtotal and total rows in bold, thin borders, fixed column widths"""
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        width = self.report.width
        header = self.header_row + 1  # 1-based

        for cell in worksheet[header][:width]:
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal='center', wrap_text=True)
            cell.border = thin_border

        for offset, kind in enumerate(self.report.row_kinds, start=1):
            row_cells = worksheet[header + offset][:width]
            for cell in row_cells:
                cell.border = thin_border
                if kind in (ROW_SUBTOTAL, ROW_TOTAL):
                    cell.font = Font(bold=True)

        for index, column_width in enumerate(self.report.column_widths, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = column_width
