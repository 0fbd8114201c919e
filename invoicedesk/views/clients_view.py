from __future__ import annotations

from typing import Any, Optional

from PySide6.QtWidgets import QWidget

from invoicedesk.core.forms import ClientForm
from invoicedesk.core.jurisdiction import COUNTRIES, display_tax_id
from invoicedesk.core.notify import Notifier
from invoicedesk.core.search import CLIENT_SEARCH_FIELDS
from invoicedesk.views.list_view import RecordListView
from invoicedesk.widgets.client_dialog import ClientDialog


class ClientsView(RecordListView):
    title = "Clients"
    search_fields = CLIENT_SEARCH_FIELDS
    search_hint = "name, email, VAT or NIP"
    columns = (
        ("Name", lambda c: c.name or ""),
        ("Type", lambda c: (c.client_type or "").capitalize()),
        ("Country", lambda c: COUNTRIES.get(c.country, c.country or "")),
        ("Tax ID", display_tax_id),
        ("Email", lambda c: c.email or ""),
        ("Phone", lambda c: c.phone or ""),
    )

    def __init__(self, store: Any, notifier: Notifier, default_country: str = "PL", parent: Optional[QWidget] = None) -> None:
        super().__init__(store, notifier, parent)
        self.form = ClientForm(store, notifier, default_country=default_country)

    def open_editor(self, record: Any) -> None:
        if ClientDialog(self.form, record, parent=self).exec():
            self.render()
