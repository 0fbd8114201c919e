from __future__ import annotations

from typing import Any, Dict, Optional

from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QLineEdit,
    QPlainTextEdit,
    QComboBox,
    QDialogButtonBox,
    QWidget,
)

from invoicedesk.core.forms import ClientForm
from invoicedesk.core.jurisdiction import COUNTRIES
from invoicedesk.data.models import ClientType

TAX_FIELD_LABELS = {
    "nip_number": "NIP",
    "kvk_number": "KVK number",
    "vat_number": "VAT number",
}


class ClientDialog(QDialog):
    """Add/edit a client; tax identifier rows follow the selected country."""

    def __init__(self, form: ClientForm, record: Any = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.form = form
        draft = form.open(record)
        self.setWindowTitle("Edit client" if form.is_editing else "New client")
        self.setModal(True)
        self.resize(460, 0)

        root = QVBoxLayout(self)
        self.fl = QFormLayout()
        self.ed_name = QLineEdit(str(draft["name"]))
        self.cb_type = QComboBox()
        for t in ClientType:
            self.cb_type.addItem(t.value.capitalize(), t.value)
        self.cb_type.setCurrentIndex(max(0, self.cb_type.findData(draft["client_type"])))
        self.cb_country = QComboBox()
        for code, name in COUNTRIES.items():
            self.cb_country.addItem(f"{name} ({code})" if code != "Other" else name, code)
        idx = self.cb_country.findData(draft["country"])
        if idx < 0:
            self.cb_country.addItem(str(draft["country"]), draft["country"])
            idx = self.cb_country.count() - 1
        self.cb_country.setCurrentIndex(idx)
        self.ed_address = QPlainTextEdit(str(draft["address"]))
        self.ed_address.setFixedHeight(64)

        self.tax_edits: Dict[str, QLineEdit] = {f: QLineEdit(str(draft[f])) for f in TAX_FIELD_LABELS}
        self.ed_email = QLineEdit(str(draft["email"]))
        self.ed_phone = QLineEdit(str(draft["phone"]))
        self.ed_notes = QPlainTextEdit(str(draft["notes"]))
        self.ed_notes.setFixedHeight(64)

        self.fl.addRow("Name *", self.ed_name)
        self.fl.addRow("Type", self.cb_type)
        self.fl.addRow("Country", self.cb_country)
        self.fl.addRow("Address", self.ed_address)
        for field, label in TAX_FIELD_LABELS.items():
            self.fl.addRow(label, self.tax_edits[field])
        self.fl.addRow("Email", self.ed_email)
        self.fl.addRow("Phone", self.ed_phone)
        self.fl.addRow("Notes", self.ed_notes)
        root.addLayout(self.fl)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._save)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

        self.cb_country.currentIndexChanged.connect(self._on_country_changed)
        self._on_country_changed()

    def _on_country_changed(self, *_args) -> None:
        self.form.draft["country"] = self.cb_country.currentData()
        visible = self.form.visible_tax_fields()
        for field, edit in self.tax_edits.items():
            self.fl.setRowVisible(edit, field in visible)

    def _collect(self) -> None:
        visible = self.form.visible_tax_fields()
        data = {
            "name": self.ed_name.text(),
            "client_type": self.cb_type.currentData(),
            "country": self.cb_country.currentData(),
            "address": self.ed_address.toPlainText(),
            "email": self.ed_email.text(),
            "phone": self.ed_phone.text(),
            "notes": self.ed_notes.toPlainText(),
        }
        # Hidden identifier fields keep whatever the record already had
        for field, edit in self.tax_edits.items():
            if field in visible:
                data[field] = edit.text()
        self.form.draft.update(data)

    def _save(self) -> None:
        self._collect()
        if self.form.save():
            self.accept()
