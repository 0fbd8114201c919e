from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QComboBox,
    QPushButton,
)

from invoicedesk.core.jurisdiction import COUNTRIES
from invoicedesk.core.notify import Notifier
from invoicedesk.data.repo import COMPANY_FIELDS

logger = logging.getLogger(__name__)

LABELS = {
    "name": "Company name *",
    "vat_number": "VAT number",
    "kvk_number": "KVK number",
    "nip_number": "NIP",
    "email": "Email",
    "phone": "Phone",
    "iban": "IBAN",
    "bic": "BIC",
}


class CompanyView(QWidget):
    """Issuer details printed on every invoice."""

    def __init__(self, store: Any, notifier: Notifier, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store
        self.notifier = notifier

        v = QVBoxLayout(self)
        head = QLabel("Company")
        head.setObjectName("ViewTitle")
        v.addWidget(head)

        fl = QFormLayout()
        self.edits: Dict[str, QLineEdit] = {f: QLineEdit() for f in LABELS}
        self.ed_address = QPlainTextEdit()
        self.ed_address.setFixedHeight(64)
        self.cb_country = QComboBox()
        for code, name in COUNTRIES.items():
            self.cb_country.addItem(name, code)
        fl.addRow(LABELS["name"], self.edits["name"])
        fl.addRow("Address", self.ed_address)
        fl.addRow("Country", self.cb_country)
        for f in ("vat_number", "kvk_number", "nip_number", "email", "phone", "iban", "bic"):
            fl.addRow(LABELS[f], self.edits[f])
        v.addLayout(fl)

        row = QHBoxLayout()
        row.addStretch(1)
        self.btn_save = QPushButton("Save")
        self.btn_save.setObjectName("Primary")
        row.addWidget(self.btn_save)
        v.addLayout(row)
        v.addStretch(1)

        self.btn_save.clicked.connect(self.save)

    def refresh(self) -> None:
        company = self.store.refresh()
        for f, edit in self.edits.items():
            edit.setText(str(getattr(company, f, "") or "") if company else "")
        self.ed_address.setPlainText(str(getattr(company, "address", "") or "") if company else "")
        idx = self.cb_country.findData(getattr(company, "country", None) or "PL")
        self.cb_country.setCurrentIndex(max(0, idx))

    def data(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {f: edit.text() for f, edit in self.edits.items()}
        out["address"] = self.ed_address.toPlainText()
        out["country"] = self.cb_country.currentData()
        return {f: out.get(f, "") for f in COMPANY_FIELDS}

    def save(self) -> bool:
        try:
            self.store.save(self.data())
        except Exception as e:
            logger.exception("Saving company failed")
            self.notifier.error(f"Could not save company: {e}")
            return False
        self.notifier.success("Company details saved")
        return True
