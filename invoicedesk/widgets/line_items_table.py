from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QTableWidget, QTableWidgetItem, QHeaderView

from invoicedesk.core.currency import compute_totals, fmt_money, line_total


class LineItemsTable(QTableWidget):
	"""Invoice line items table with auto numbering and totals signal."""

	totalsChanged = Signal(float, float, float)  # net, vat, gross

	COL_NO = 0
	COL_DESC = 1
	COL_QTY = 2
	COL_PRICE = 3
	COL_VAT = 4
	COL_AMT = 5

	def __init__(self, parent=None) -> None:
		super().__init__(0, 6, parent)
		self.setHorizontalHeaderLabels(["No.", "Description", "Qty", "Unit price", "VAT %", "Amount"])
		self.horizontalHeader().setSectionResizeMode(self.COL_DESC, QHeaderView.Stretch)
		self.verticalHeader().setVisible(False)
		self.setAlternatingRowColors(True)
		self.itemChanged.connect(self._on_item_changed)

	def _readonly(self, text: str) -> QTableWidgetItem:
		it = QTableWidgetItem(text)
		it.setFlags(Qt.ItemIsSelectable | Qt.ItemIsEnabled)
		return it

	def _number(self, text: str, editable: bool = True) -> QTableWidgetItem:
		it = QTableWidgetItem(text) if editable else self._readonly(text)
		it.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
		return it

	def add_row(self, description: str = "", qty: float = 1.0, price: float = 0.0, vat: float = 0.0) -> None:
		self.blockSignals(True)
		r = self.rowCount()
		self.insertRow(r)
		self.setItem(r, self.COL_NO, self._readonly(str(r + 1)))
		self.setItem(r, self.COL_DESC, QTableWidgetItem(description))
		self.setItem(r, self.COL_QTY, self._number(self._format_qty(qty)))
		self.setItem(r, self.COL_PRICE, self._number(fmt_money(price)))
		self.setItem(r, self.COL_VAT, self._number(self._format_qty(vat)))
		self.setItem(r, self.COL_AMT, self._number(fmt_money(line_total(qty, price)), editable=False))
		self.blockSignals(False)
		self._emit_totals()

	def set_lines(self, lines: Iterable[Dict[str, Any]]) -> None:
		self.setRowCount(0)
		for line in lines:
			self.add_row(
				description=str(line.get("description") or ""),
				qty=float(line.get("quantity") or 0),
				price=float(line.get("unit_price") or 0),
				vat=float(line.get("vat_rate") or 0),
			)
		self._emit_totals()

	def get_lines(self) -> List[Dict[str, Any]]:
		out: List[Dict[str, Any]] = []
		for r in range(self.rowCount()):
			desc = self.item(r, self.COL_DESC)
			out.append({
				"description": desc.text().strip() if desc else "",
				"quantity": self._parse_float(self.item(r, self.COL_QTY)),
				"unit_price": self._parse_float(self.item(r, self.COL_PRICE)),
				"vat_rate": self._parse_float(self.item(r, self.COL_VAT)),
			})
		return out

	def remove_selected_rows(self) -> None:
		rows = sorted({idx.row() for idx in self.selectedIndexes()}, reverse=True)
		if not rows:
			return
		for r in rows:
			self.removeRow(r)
		self._renumber()
		self._emit_totals()

	def _renumber(self) -> None:
		self.blockSignals(True)
		for i in range(self.rowCount()):
			self.setItem(i, self.COL_NO, self._readonly(str(i + 1)))
		self.blockSignals(False)

	def _on_item_changed(self, item: QTableWidgetItem) -> None:
		c = item.column()
		r = item.row()
		if c not in (self.COL_QTY, self.COL_PRICE, self.COL_VAT):
			return
		qty = self._parse_float(self.item(r, self.COL_QTY))
		price = self._parse_float(self.item(r, self.COL_PRICE))
		vat = self._parse_float(self.item(r, self.COL_VAT))
		# Normalize display
		self.blockSignals(True)
		self.setItem(r, self.COL_QTY, self._number(self._format_qty(qty)))
		self.setItem(r, self.COL_PRICE, self._number(fmt_money(price)))
		self.setItem(r, self.COL_VAT, self._number(self._format_qty(vat)))
		self.setItem(r, self.COL_AMT, self._number(fmt_money(line_total(qty, price)), editable=False))
		self.blockSignals(False)
		self._emit_totals()

	def _parse_float(self, item: Optional[QTableWidgetItem]) -> float:
		try:
			return float(item.text().replace(",", ".")) if item and item.text() else 0.0
		except ValueError:
			return 0.0

	def _format_qty(self, x: float) -> str:
		# Up to 3 decimals without trailing zeros
		s = f"{x:.3f}".rstrip("0").rstrip(".")
		return s if s else "0"

	def _emit_totals(self) -> None:
		t = compute_totals(self.get_lines())
		self.totalsChanged.emit(float(t.net), float(t.vat), float(t.gross))
