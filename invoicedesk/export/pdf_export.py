from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Tuple
import logging

from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from invoicedesk.core.currency import format_currency
from invoicedesk.core.paths import resource_path
from invoicedesk.core.settings import Settings
from invoicedesk.export.base import Exporter, ExportFormat, fmt_date
from invoicedesk.export.table_layout import BRAND, build_lines_table

logger = logging.getLogger(__name__)

# ===== Layout constants =====
PAGE_SIZE = A4
PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE

MARGIN_LEFT = 18 * mm
MARGIN_RIGHT = 18 * mm
MARGIN_TOP = 18 * mm
MARGIN_BOTTOM = 18 * mm
CONTENT_WIDTH = PAGE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT

TITLE_FONT_SIZE = 22
TEXT_FONT_SIZE = 9
LABEL_FONT_SIZE = 10


def _register_fonts() -> Tuple[str, str]:
	"""Return (regular_font_name, bold_font_name)."""
	regular = "Helvetica"
	bold = "Helvetica-Bold"
	try:
		reg = resource_path("assets/fonts/NotoSans-Regular.ttf")
		bld = resource_path("assets/fonts/NotoSans-Bold.ttf")
		if reg.exists():
			pdfmetrics.registerFont(TTFont("NotoSans", str(reg)))
			regular = "NotoSans"
		if bld.exists():
			pdfmetrics.registerFont(TTFont("NotoSans-Bold", str(bld)))
			bold = "NotoSans-Bold"
	except Exception:
		logger.warning("Could not register NotoSans; using Helvetica", exc_info=True)
	return regular, bold


def _esc(text: Any) -> str:
	s = str(text or "")
	return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace("\n", "<br/>")


def _party_lines(heading: str, p: Dict[str, Any]) -> List[str]:
	lines = [f"<b>{heading}</b>", f"<b>{_esc(p.get('name'))}</b>"]
	if p.get("address"):
		lines.append(_esc(p["address"]))
	if p.get("country_name"):
		lines.append(_esc(p["country_name"]))
	for tid in p.get("tax_ids") or []:
		lines.append(f"{_esc(tid['label'])}: {_esc(tid['value'])}")
	if p.get("email"):
		lines.append(_esc(p["email"]))
	if p.get("phone"):
		lines.append(_esc(p["phone"]))
	return lines


class PdfExporter(Exporter):
	fmt = ExportFormat.PDF
	suffix = "pdf"

	def write(self, path: Path, payload: Dict[str, Any], settings: Settings) -> None:
		regular, bold = _register_fonts()
		text = ParagraphStyle("text", fontName=regular, fontSize=TEXT_FONT_SIZE, leading=TEXT_FONT_SIZE + 3)
		title = ParagraphStyle("title", fontName=bold, fontSize=TITLE_FONT_SIZE, leading=TITLE_FONT_SIZE + 4, textColor=BRAND)
		right = ParagraphStyle("right", parent=text, alignment=2)

		inv = payload["invoice"]
		totals = payload["totals"]
		pay = payload["payment"]
		currency = inv.get("currency") or settings.currency
		df = settings.date_format

		story: List[Any] = []

		# Header: title left, number and dates right
		meta = "<br/>".join([
			f"<b>No.</b> {_esc(inv['number'])}",
			f"<b>Issue date:</b> {fmt_date(inv['issue_date'], df)}",
			f"<b>Due date:</b> {fmt_date(inv['due_date'], df)}",
		])
		header = Table(
			[[Paragraph("INVOICE", title), Paragraph(meta, right)]],
			colWidths=[CONTENT_WIDTH * 0.5, CONTENT_WIDTH * 0.5],
		)
		header.setStyle(TableStyle([
			("VALIGN", (0, 0), (-1, -1), "TOP"),
			("LINEBELOW", (0, 0), (-1, 0), 0.9, BRAND),
			("BOTTOMPADDING", (0, 0), (-1, -1), 6),
		]))
		story.append(header)
		story.append(Spacer(1, 6 * mm))

		# Seller / buyer blocks
		seller = Paragraph("<br/>".join(_party_lines("Seller", payload["seller"])), text)
		buyer = Paragraph("<br/>".join(_party_lines("Buyer", payload["buyer"])), text)
		parties = Table([[seller, buyer]], colWidths=[CONTENT_WIDTH * 0.5, CONTENT_WIDTH * 0.5])
		parties.setStyle(TableStyle([
			("VALIGN", (0, 0), (-1, -1), "TOP"),
			("LEFTPADDING", (0, 0), (-1, -1), 0),
		]))
		story.append(parties)
		story.append(Spacer(1, 8 * mm))

		story.append(build_lines_table(payload["lines"], totals, CONTENT_WIDTH, font=regular, bold_font=bold))
		story.append(Spacer(1, 8 * mm))

		# Payment block
		pay_lines = [f"<b>Amount due:</b> {format_currency(totals['gross'], currency)}"]
		if pay.get("due_date"):
			pay_lines.append(f"<b>Pay by:</b> {fmt_date(pay['due_date'], df)}")
		if pay.get("iban"):
			pay_lines.append(f"<b>IBAN:</b> {_esc(pay['iban'])}")
		if pay.get("bic"):
			pay_lines.append(f"<b>BIC:</b> {_esc(pay['bic'])}")
		story.append(Paragraph("<br/>".join(pay_lines), text))

		if inv.get("notes"):
			story.append(Spacer(1, 6 * mm))
			story.append(Paragraph(_esc(inv["notes"]), text))

		doc = SimpleDocTemplate(
			str(path),
			pagesize=PAGE_SIZE,
			leftMargin=MARGIN_LEFT,
			rightMargin=MARGIN_RIGHT,
			topMargin=MARGIN_TOP,
			bottomMargin=MARGIN_BOTTOM,
			title=f"Invoice {inv['number']}",
			author=payload["seller"].get("name") or "",
		)
		doc.build(story)
