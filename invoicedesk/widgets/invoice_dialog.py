from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QLineEdit,
    QPlainTextEdit,
    QComboBox,
    QDateEdit,
    QPushButton,
    QLabel,
    QDialogButtonBox,
    QWidget,
)

from invoicedesk.core.currency import format_currency
from invoicedesk.core.forms import InvoiceForm
from invoicedesk.data.models import InvoiceStatus
from invoicedesk.widgets.line_items_table import LineItemsTable


def _qdate(d: date) -> QDate:
    return QDate(d.year, d.month, d.day)


class InvoiceDialog(QDialog):
    """Create or edit an invoice with its line items."""

    def __init__(
        self,
        form: InvoiceForm,
        clients: Sequence[Any],
        products: Sequence[Any],
        record: Any = None,
        currency: str = "EUR",
        next_number: str = "",
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.form = form
        self.products = list(products)
        self.currency = currency
        draft = form.open(record)
        self.setWindowTitle("Edit invoice" if form.is_editing else "New invoice")
        self.setModal(True)
        self.resize(820, 620)

        root = QVBoxLayout(self)
        fl = QFormLayout()
        self.ed_number = QLineEdit(str(draft["invoice_number"]))
        self.ed_number.setPlaceholderText(f"{next_number} (generated on save)" if next_number else "generated on save")
        self.cb_client = QComboBox()
        self.cb_client.addItem("Select a client…", None)
        for c in clients:
            self.cb_client.addItem(c.name, c.id)
        self.cb_client.setCurrentIndex(max(0, self.cb_client.findData(draft["client_id"])))
        self.de_issue = QDateEdit(_qdate(draft["issue_date"]))
        self.de_issue.setCalendarPopup(True)
        self.de_due = QDateEdit(_qdate(draft["due_date"]))
        self.de_due.setCalendarPopup(True)
        self.cb_status = QComboBox()
        for st in InvoiceStatus:
            self.cb_status.addItem(st.value.capitalize(), st.value)
        self.cb_status.setCurrentIndex(max(0, self.cb_status.findData(str(draft["status"]))))
        self.ed_notes = QPlainTextEdit(str(draft["notes"]))
        self.ed_notes.setFixedHeight(56)

        fl.addRow("Number", self.ed_number)
        fl.addRow("Client *", self.cb_client)
        fl.addRow("Issue date", self.de_issue)
        fl.addRow("Due date", self.de_due)
        fl.addRow("Status", self.cb_status)
        fl.addRow("Notes", self.ed_notes)
        root.addLayout(fl)

        # Line items
        title = QLabel("Line items")
        title.setObjectName("SectionTitle")
        root.addWidget(title)
        row = QHBoxLayout()
        self.cb_product = QComboBox()
        self.cb_product.addItem("Add from products…", None)
        for p in self.products:
            self.cb_product.addItem(p.name, p.id)
        self.btn_add_product = QPushButton("Add product")
        self.btn_add_line = QPushButton("Add line")
        self.btn_remove = QPushButton("Remove selected")
        row.addWidget(self.cb_product, 1)
        row.addWidget(self.btn_add_product)
        row.addWidget(self.btn_add_line)
        row.addWidget(self.btn_remove)
        root.addLayout(row)

        self.table = LineItemsTable()
        root.addWidget(self.table, 1)
        self.lbl_totals = QLabel()
        self.lbl_totals.setObjectName("Totals")
        root.addWidget(self.lbl_totals)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._save)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

        self.table.totalsChanged.connect(self._on_totals)
        self.btn_add_product.clicked.connect(self._add_product)
        self.btn_add_line.clicked.connect(lambda: self.table.add_row(vat=form.default_vat_rate))
        self.btn_remove.clicked.connect(self.table.remove_selected_rows)

        self.table.set_lines(form.lines)
        if not form.lines:
            self._on_totals(0.0, 0.0, 0.0)

    def _on_totals(self, net: float, vat: float, gross: float) -> None:
        c = self.currency
        self.lbl_totals.setText(
            f"Net: {format_currency(net, c)}    VAT: {format_currency(vat, c)}    Total: {format_currency(gross, c)}"
        )

    def _add_product(self) -> None:
        pid = self.cb_product.currentData()
        product = next((p for p in self.products if p.id == pid), None)
        if product is None:
            return
        self.form.draft["lines"] = self.table.get_lines()
        line = self.form.add_product_line(product)
        self.table.add_row(line["description"], line["quantity"], line["unit_price"], line["vat_rate"])
        self.cb_product.setCurrentIndex(0)

    def _collect(self) -> None:
        self.form.draft.update({
            "invoice_number": self.ed_number.text().strip(),
            "client_id": self.cb_client.currentData(),
            "issue_date": self.de_issue.date().toPython(),
            "due_date": self.de_due.date().toPython(),
            "status": self.cb_status.currentData(),
            "notes": self.ed_notes.toPlainText(),
            "lines": self.table.get_lines(),
        })

    def _save(self) -> None:
        self._collect()
        if self.form.save():
            self.accept()
