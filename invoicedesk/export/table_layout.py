from __future__ import annotations

from typing import Any, Dict, List

from reportlab.platypus import Table, TableStyle
from reportlab.lib import colors
from reportlab.lib.units import mm

from invoicedesk.core.currency import fmt_money

# Column widths; Description absorbs the remainder
COL_W_NO = 10 * mm
COL_W_QTY = 16 * mm
COL_W_PRICE = 26 * mm
COL_W_VAT = 16 * mm
COL_W_AMOUNT = 28 * mm

W_GRID = 0.5
W_HEAVY = 0.9

BODY_ROW_H = 6 * mm
PADDING_V = (3, 3)   # top, bottom
PADDING_H = (5, 5)   # left, right

BRAND = colors.HexColor("#1F3A68")
HEADER_BG = colors.HexColor("#E8EEF8")

HEADERS = ["No.", "Description", "Qty", "Unit price", "VAT %", "Amount"]


def _col_widths(content_width: float) -> List[float]:
	fixed = COL_W_NO + COL_W_QTY + COL_W_PRICE + COL_W_VAT + COL_W_AMOUNT
	# Ensure Description gets at least a practical minimum
	desc = max(120.0, content_width - fixed)
	return [COL_W_NO, desc, COL_W_QTY, COL_W_PRICE, COL_W_VAT, COL_W_AMOUNT]


def fmt_qty(qty: float) -> str:
	"""Format quantity with up to 3 decimals, no trailing zeros."""
	s = f"{float(qty):.3f}".rstrip("0").rstrip(".")
	return s if s else "0"


def fmt_rate(rate: float) -> str:
	return fmt_qty(rate)


def build_lines_table(lines: List[Dict[str, Any]], totals: Dict[str, float], content_width: float,
					  font: str = "Helvetica", bold_font: str = "Helvetica-Bold") -> Table:
	"""
	Line items table followed by net / VAT / gross summary rows.
	lines: dicts with position, description, quantity, unit_price, vat_rate, line_total
	totals: {"net", "vat", "gross"}
	"""
	data: List[List[Any]] = [list(HEADERS)]
	for row in lines:
		data.append([
			str(row["position"]),
			row["description"],
			fmt_qty(row["quantity"]),
			fmt_money(row["unit_price"]),
			fmt_rate(row["vat_rate"]),
			fmt_money(row["line_total"]),
		])
	last_body_i = len(data) - 1

	data.append(["", "", "", "", "Net:", fmt_money(totals["net"])])
	data.append(["", "", "", "", "VAT:", fmt_money(totals["vat"])])
	data.append(["", "", "", "", "Total:", fmt_money(totals["gross"])])
	net_i = last_body_i + 1
	gross_i = len(data) - 1

	t = Table(data, colWidths=_col_widths(content_width), rowHeights=[BODY_ROW_H] * len(data), repeatRows=1)

	ts = TableStyle()
	# Grid over header and body only; summary rows stay open on the left
	ts.add("GRID", (0, 0), (-1, last_body_i), W_GRID, BRAND)
	ts.add("BOX", (4, net_i), (-1, gross_i), W_GRID, BRAND)

	# Header
	ts.add("BACKGROUND", (0, 0), (-1, 0), HEADER_BG)
	ts.add("FONTNAME", (0, 0), (-1, 0), bold_font)
	ts.add("FONTSIZE", (0, 0), (-1, 0), 9)
	ts.add("TEXTCOLOR", (0, 0), (-1, 0), BRAND)
	ts.add("ALIGN", (0, 0), (0, 0), "CENTER")
	ts.add("ALIGN", (2, 0), (-1, 0), "CENTER")
	ts.add("LINEBELOW", (0, 0), (-1, 0), W_HEAVY, BRAND)

	if last_body_i >= 1:
		ts.add("FONTNAME", (0, 1), (-1, last_body_i), font)
		ts.add("FONTSIZE", (0, 1), (-1, last_body_i), 9)
		ts.add("ALIGN", (0, 1), (0, last_body_i), "CENTER")
		ts.add("ALIGN", (2, 1), (-1, last_body_i), "RIGHT")

	# Summary rows
	ts.add("FONTNAME", (4, net_i), (-1, gross_i), font)
	ts.add("FONTSIZE", (4, net_i), (-1, gross_i), 9)
	ts.add("ALIGN", (4, net_i), (-1, gross_i), "RIGHT")
	ts.add("FONTNAME", (4, gross_i), (-1, gross_i), bold_font)
	ts.add("FONTSIZE", (4, gross_i), (-1, gross_i), 11)
	ts.add("TEXTCOLOR", (4, gross_i), (-1, gross_i), BRAND)
	ts.add("LINEABOVE", (4, gross_i), (-1, gross_i), W_HEAVY, BRAND)

	ts.add("LEFTPADDING", (0, 0), (-1, -1), PADDING_H[0])
	ts.add("RIGHTPADDING", (0, 0), (-1, -1), PADDING_H[1])
	ts.add("TOPPADDING", (0, 0), (-1, -1), PADDING_V[0])
	ts.add("BOTTOMPADDING", (0, 0), (-1, -1), PADDING_V[1])
	ts.add("VALIGN", (0, 0), (-1, -1), "MIDDLE")

	t.setStyle(ts)
	return t
