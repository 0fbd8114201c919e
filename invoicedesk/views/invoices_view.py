from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QToolButton,
    QMenu,
    QTableWidget,
    QTableWidgetItem,
)

from invoicedesk.core.actions import InvoiceActions, delete_record
from invoicedesk.core.currency import format_currency
from invoicedesk.core.forms import InvoiceForm
from invoicedesk.core.notify import Notifier
from invoicedesk.core.search import sort_newest_first
from invoicedesk.core.settings import Settings
from invoicedesk.data.models import InvoiceStatus
from invoicedesk.export.base import ExportFormat, fmt_date
from invoicedesk.printing.launch import open_file
from invoicedesk.styles.tokens import StatusColors
from invoicedesk.views.list_view import ask_confirm
from invoicedesk.widgets.invoice_dialog import InvoiceDialog
from invoicedesk.widgets.preview_dialog import PdfPreviewDialog


class InvoicesView(QWidget):
    HEADERS = ["Number", "Client", "Issue date", "Due date", "Total", "Status"]

    def __init__(
        self,
        invoices: Any,
        clients: Any,
        products: Any,
        company: Any,
        actions: InvoiceActions,
        notifier: Notifier,
        settings: Optional[Settings] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.invoices = invoices
        self.clients = clients
        self.products = products
        self.company = company
        self.actions = actions
        self.notifier = notifier
        self.settings = settings or Settings()
        self.confirm = ask_confirm
        self.form = InvoiceForm(
            invoices, notifier,
            payment_days=self.settings.payment_days,
            default_vat_rate=self.settings.default_vat_rate,
        )
        self._rows: List[Any] = []

        v = QVBoxLayout(self)
        head = QLabel("Invoices")
        head.setObjectName("ViewTitle")
        v.addWidget(head)

        bar = QHBoxLayout()
        self.btn_new = QPushButton("New invoice")
        self.btn_new.setObjectName("Primary")
        self.btn_view = QPushButton("View")
        self.btn_edit = QPushButton("Edit")
        self.btn_paid = QPushButton("Mark paid")
        self.btn_email = QPushButton("Email")
        self.btn_delete = QPushButton("Delete")
        self.btn_export = QToolButton()
        self.btn_export.setText("Export")
        self.btn_export.setPopupMode(QToolButton.InstantPopup)
        menu = QMenu(self.btn_export)
        for fmt in ExportFormat:
            act = menu.addAction(f"Export as {fmt.label}")
            act.triggered.connect(lambda _checked=False, f=fmt: self._export_current(f))
        self.btn_export.setMenu(menu)
        for b in (self.btn_new, self.btn_view, self.btn_edit, self.btn_paid, self.btn_export, self.btn_email, self.btn_delete):
            bar.addWidget(b)
        bar.addStretch(1)
        v.addLayout(bar)

        self.table = QTableWidget(0, len(self.HEADERS))
        self.table.setHorizontalHeaderLabels(self.HEADERS)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        v.addWidget(self.table, 1)

        self.btn_new.clicked.connect(lambda: self.open_editor(None))
        self.btn_view.clicked.connect(self._view_current)
        self.btn_edit.clicked.connect(lambda: self._with_current(self.open_editor))
        self.btn_paid.clicked.connect(lambda: self._with_current(lambda inv: self._after(self.actions.mark_paid(inv.id))))
        self.btn_email.clicked.connect(lambda: self._with_current(lambda inv: self.actions.send_email(inv.id)))
        self.btn_delete.clicked.connect(self._delete_current)
        self.table.itemDoubleClicked.connect(lambda _it: self._view_current())
        self.table.currentCellChanged.connect(lambda *_a: self._sync_buttons())
        self._sync_buttons()

    def refresh(self) -> None:
        self.invoices.refresh()
        self.clients.refresh()
        self.products.refresh()
        self.company.refresh()
        self.render()

    def render(self) -> None:
        self._rows = sort_newest_first(self.invoices.items)
        df = self.settings.date_format
        self.table.setRowCount(len(self._rows))
        for r, inv in enumerate(self._rows):
            client = self.clients.get(inv.client_id)
            status = QTableWidgetItem(str(inv.status).capitalize())
            status.setForeground(QColor(getattr(StatusColors, str(inv.status), StatusColors.cancelled)))
            cells = [
                QTableWidgetItem(inv.invoice_number),
                QTableWidgetItem(client.name if client else "-"),
                QTableWidgetItem(fmt_date(inv.issue_date, df)),
                QTableWidgetItem(fmt_date(inv.due_date, df)),
                QTableWidgetItem(format_currency(inv.total_gross or 0, self.settings.currency)),
                status,
            ]
            for c, item in enumerate(cells):
                self.table.setItem(r, c, item)
        self.table.resizeColumnsToContents()
        self._sync_buttons()

    def current_invoice(self) -> Optional[Any]:
        r = self.table.currentRow()
        if r < 0 or r >= len(self._rows):
            return None
        return self._rows[r]

    def _sync_buttons(self) -> None:
        inv = self.current_invoice()
        has = inv is not None
        for b in (self.btn_view, self.btn_edit, self.btn_export, self.btn_email, self.btn_delete):
            b.setEnabled(has)
        # Already paid invoices have nothing to mark
        self.btn_paid.setEnabled(has and inv.status != InvoiceStatus.PAID)

    def _with_current(self, fn) -> None:
        inv = self.current_invoice()
        if inv is not None:
            fn(inv)

    def _after(self, changed: bool) -> None:
        if changed:
            self.render()

    def open_editor(self, record: Any) -> None:
        next_number = "" if record is not None else self.invoices.peek_number(date.today().year)
        dlg = InvoiceDialog(
            self.form, self.clients.items, self.products.items, record,
            currency=self.settings.currency, next_number=next_number, parent=self,
        )
        if dlg.exec():
            self.render()

    def _view_current(self) -> None:
        inv = self.current_invoice()
        if inv is None:
            return
        client = self.clients.get(inv.client_id)
        if client is None or self.company.company is None:
            self.notifier.error("Client or company data is missing")
            return
        dlg = PdfPreviewDialog(self)
        if dlg.load_invoice(inv, self.company.company, client, self.settings):
            dlg.exec()
            return
        dlg.reject()
        # No in-app viewer: hand an exported copy to the system viewer
        path = self.actions.export(inv.id, ExportFormat.PDF)
        if path is not None:
            open_file(str(path))

    def _export_current(self, fmt: ExportFormat) -> None:
        self._with_current(lambda inv: self.actions.export(inv.id, fmt))

    def _delete_current(self) -> None:
        inv = self.current_invoice()
        if inv is None:
            return
        if not self.confirm(self, "Delete invoice", f"Delete invoice {inv.invoice_number}? This cannot be undone."):
            return
        delete_record(self.invoices, inv.id, self.notifier)
        self.render()
