from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Sequence

import xlsxwriter

from .layout import ComparisonView, Table

LOGGER = logging.getLogger(__name__)

COLUMN_WIDTHS = (12, 4, 4, 4, 30, 60, 60, 10, 50, 50)


def sanitize_for_excel(val) -> str:
    """Prevent formula injection in Excel."""
    if val is None:
        return ""
    s = str(val)
    if s.startswith(("=", "+", "-", "@")):
        return "'" + s
    return s


def _write_table(worksheet, table: Table, fmt_header, fmt_cell) -> int:
    for col_idx, cell in enumerate(table.header.cells):
        worksheet.write(0, col_idx, cell.text, fmt_header)
    for col_idx, width in enumerate(COLUMN_WIDTHS):
        worksheet.set_column(col_idx, col_idx, width)
    worksheet.freeze_panes(1, 0)

    # column -> last worksheet row covered by an earlier rowspan
    covered: Dict[int, int] = {}
    excel_row = 0
    for row in table.rows:
        excel_row += 1
        col = 0
        for cell in row.cells:
            while covered.get(col, -1) >= excel_row:
                col += 1
            text = sanitize_for_excel(cell.text)
            span = cell.rowspan or 1
            if span > 1:
                worksheet.merge_range(excel_row, col, excel_row + span - 1, col, text, fmt_cell)
                covered[col] = excel_row + span - 1
            else:
                worksheet.write(excel_row, col, text, fmt_cell)
            col += 1
    return excel_row


def write_excel_report(views: Sequence[ComparisonView], output_path: Path) -> Path:
    """Write one worksheet per view, merging cells that span several rows."""

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    LOGGER.info("Writing Excel report to %s...", output_path)

    with xlsxwriter.Workbook(str(output_path)) as workbook:
        fmt_header = workbook.add_format({"bold": True, "bg_color": "#D3D3D3", "border": 1})
        fmt_cell = workbook.add_format({"text_wrap": True, "valign": "top", "border": 1})
        for view in views:
            worksheet = workbook.add_worksheet(view.title)
            rows = _write_table(worksheet, view.table(), fmt_header, fmt_cell)
            LOGGER.debug("Sheet '%s': %d row(s)", view.title, rows)

    LOGGER.info("Excel report generated successfully.")
    return output_path
