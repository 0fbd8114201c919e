from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from invoicedesk.core.settings import Settings
from invoicedesk.export.base import Exporter, ExportFormat

SHEET_TITLE = "Invoice"
HEADERS = ["No.", "Description", "Qty", "Unit price", "VAT %", "Amount"]
COLUMN_WIDTHS = [6, 48, 10, 14, 10, 14]
MONEY_FORMAT = '#,##0.00'

HEADER_FILL = PatternFill(start_color="1F3A68", end_color="1F3A68", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
BORDER = Border(
    left=Side(style="thin"), right=Side(style="thin"),
    top=Side(style="thin"), bottom=Side(style="thin"),
)


def _party_rows(p: Dict[str, Any]) -> list:
    rows = [p.get("name", ""), p.get("address", ""), p.get("country_name", "")]
    rows += [f"{t['label']}: {t['value']}" for t in p.get("tax_ids") or []]
    rows += [p.get("email", ""), p.get("phone", "")]
    return [r for r in rows if r]


class ExcelExporter(Exporter):
    fmt = ExportFormat.EXCEL
    suffix = "xlsx"

    def write(self, path: Path, payload: Dict[str, Any], settings: Settings) -> None:
        inv = payload["invoice"]
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        ws.merge_cells("A1:F1")
        ws["A1"] = f"Invoice {inv['number']}"
        ws["A1"].font = Font(bold=True, size=14)

        ws["A3"] = "Issue date:"
        ws["B3"] = inv.get("issue_date")
        ws["A4"] = "Due date:"
        ws["B4"] = inv.get("due_date")
        ws["A5"] = "Status:"
        ws["B5"] = inv.get("status")
        for ref in ("B3", "B4"):
            ws[ref].number_format = "yyyy-mm-dd"
            ws[ref].alignment = Alignment(horizontal="left")

        # Seller in column B, buyer in column D
        ws["B7"] = "Seller"
        ws["D7"] = "Buyer"
        ws["B7"].font = ws["D7"].font = Font(bold=True)
        for i, text in enumerate(_party_rows(payload["seller"]), 8):
            ws.cell(row=i, column=2, value=text)
        for i, text in enumerate(_party_rows(payload["buyer"]), 8):
            ws.cell(row=i, column=4, value=text)

        start_row = max(ws.max_row + 2, 15)
        for col, header in enumerate(HEADERS, 1):
            cell = ws.cell(row=start_row, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center")
            cell.border = BORDER

        row = start_row + 1
        for line in payload["lines"]:
            values = [
                line["position"], line["description"], line["quantity"],
                line["unit_price"], line["vat_rate"], line["line_total"],
            ]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = BORDER
                if col in (4, 6):
                    cell.number_format = MONEY_FORMAT
            row += 1

        totals = payload["totals"]
        row += 1
        for label, key in (("Net", "net"), ("VAT", "vat"), ("Total", "gross")):
            ws.cell(row=row, column=5, value=label).font = Font(bold=True)
            cell = ws.cell(row=row, column=6, value=totals[key])
            cell.number_format = MONEY_FORMAT
            cell.border = BORDER
            if key == "gross":
                cell.font = Font(bold=True)
            row += 1

        pay = payload["payment"]
        row += 1
        for label, value in (("Currency", inv.get("currency")), ("IBAN", pay.get("iban")), ("BIC", pay.get("bic"))):
            if value:
                ws.cell(row=row, column=1, value=f"{label}:")
                ws.cell(row=row, column=2, value=value)
                row += 1

        for col, width in enumerate(COLUMN_WIDTHS, 1):
            ws.column_dimensions[get_column_letter(col)].width = width

        wb.save(str(path))
