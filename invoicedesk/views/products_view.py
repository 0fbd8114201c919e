from __future__ import annotations

from typing import Any, Optional

from PySide6.QtWidgets import QWidget

from invoicedesk.core.currency import fmt_money
from invoicedesk.core.forms import ProductForm
from invoicedesk.core.notify import Notifier
from invoicedesk.core.search import PRODUCT_SEARCH_FIELDS
from invoicedesk.views.list_view import RecordListView
from invoicedesk.widgets.product_dialog import ProductDialog


class ProductsView(RecordListView):
    title = "Products"
    search_fields = PRODUCT_SEARCH_FIELDS
    search_hint = "name, code or description"
    columns = (
        ("Code", lambda p: p.code or ""),
        ("Name", lambda p: p.name or ""),
        ("Unit price", lambda p: fmt_money(p.unit_price or 0)),
        ("VAT %", lambda p: f"{float(p.vat_rate or 0):g}"),
        ("Description", lambda p: p.description or ""),
    )

    def __init__(self, store: Any, notifier: Notifier, default_vat_rate: float = 21.0, parent: Optional[QWidget] = None) -> None:
        super().__init__(store, notifier, parent)
        self.form = ProductForm(store, notifier, default_vat_rate=default_vat_rate)

    def open_editor(self, record: Any) -> None:
        if ProductDialog(self.form, record, parent=self).exec():
            self.render()
