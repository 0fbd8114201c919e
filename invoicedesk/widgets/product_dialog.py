from __future__ import annotations

from typing import Any, Optional

from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QLineEdit,
    QDoubleSpinBox,
    QDialogButtonBox,
    QWidget,
)

from invoicedesk.core.forms import ProductForm


class ProductDialog(QDialog):
    """Add/edit a product. Closes only when the form saved successfully."""

    def __init__(self, form: ProductForm, record: Any = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.form = form
        draft = form.open(record)
        self.setWindowTitle("Edit product" if form.is_editing else "New product")
        self.setModal(True)

        root = QVBoxLayout(self)
        fl = QFormLayout()
        self.ed_code = QLineEdit(str(draft["code"]))
        self.ed_name = QLineEdit(str(draft["name"]))
        self.ed_desc = QLineEdit(str(draft["description"]))
        self.sp_price = QDoubleSpinBox()
        self.sp_price.setDecimals(2)
        self.sp_price.setRange(0, 10_000_000)
        self.sp_price.setValue(float(draft["unit_price"]))
        self.sp_vat = QDoubleSpinBox()
        self.sp_vat.setDecimals(2)
        self.sp_vat.setRange(0, 100)
        self.sp_vat.setSuffix(" %")
        self.sp_vat.setValue(float(draft["vat_rate"]))
        fl.addRow("Code", self.ed_code)
        fl.addRow("Name *", self.ed_name)
        fl.addRow("Description", self.ed_desc)
        fl.addRow("Unit price", self.sp_price)
        fl.addRow("VAT rate", self.sp_vat)
        root.addLayout(fl)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._save)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

    def _collect(self) -> None:
        self.form.draft.update({
            "code": self.ed_code.text(),
            "name": self.ed_name.text(),
            "description": self.ed_desc.text(),
            "unit_price": self.sp_price.value(),
            "vat_rate": self.sp_vat.value(),
        })

    def _save(self) -> None:
        self._collect()
        if self.form.save():
            self.accept()
