from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QLineEdit,
    QPushButton,
    QDialogButtonBox,
    QFileDialog,
    QMessageBox,
    QSpinBox,
    QDoubleSpinBox,
    QComboBox,
    QCheckBox,
)

from invoicedesk.core.jurisdiction import COUNTRIES
from invoicedesk.core.paths import settings_path
from invoicedesk.core.settings import Settings, save_settings, load_settings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class SettingsDialog(QDialog):
    """Dialog to edit application settings (numbering, defaults, export)."""

    def __init__(self, settings: Settings, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self._orig = settings

        root = QVBoxLayout(self)
        form = QFormLayout()

        self.ed_prefix = QLineEdit()
        self.sp_payment_days = QSpinBox()
        self.sp_payment_days.setRange(0, 365)
        self.ed_currency = QLineEdit()
        self.ed_date_format = QLineEdit()
        self.ed_date_format.setPlaceholderText("e.g. %d-%m-%Y")
        self.cb_country = QComboBox()
        for code, name in COUNTRIES.items():
            self.cb_country.addItem(name, code)
        self.sp_vat = QDoubleSpinBox()
        self.sp_vat.setRange(0, 100)
        self.sp_vat.setSuffix(" %")

        self.ed_export_dir = QLineEdit()
        btn_browse = QPushButton("Browse…")
        btn_browse.clicked.connect(self._browse_export_dir)
        dir_row = QHBoxLayout()
        dir_row.addWidget(self.ed_export_dir)
        dir_row.addWidget(btn_browse)

        self.ed_file_tpl = QLineEdit()
        self.ed_file_tpl.setPlaceholderText("e.g. {number} - {client}")
        self.chk_dark = QCheckBox("Dark theme")
        self.cb_log_level = QComboBox()
        self.cb_log_level.addItems(LOG_LEVELS)

        form.addRow("Invoice Prefix", self.ed_prefix)
        form.addRow("Payment Days", self.sp_payment_days)
        form.addRow("Currency", self.ed_currency)
        form.addRow("Date Format", self.ed_date_format)
        form.addRow("Default Country", self.cb_country)
        form.addRow("Default VAT Rate", self.sp_vat)
        form.addRow("Export Folder", dir_row)
        form.addRow("File Name Template", self.ed_file_tpl)
        form.addRow("Display", self.chk_dark)
        form.addRow("Log Level", self.cb_log_level)
        root.addLayout(form)

        # Export / Import row (for settings.json)
        io_row = QHBoxLayout()
        self.btn_export = QPushButton("Export Settings")
        self.btn_import = QPushButton("Import Settings")
        self.btn_export.clicked.connect(self._export_settings)
        self.btn_import.clicked.connect(self._import_settings)
        io_row.addStretch(1)
        io_row.addWidget(self.btn_export)
        io_row.addWidget(self.btn_import)
        root.addLayout(io_row)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

        self.btn_reset = QPushButton("Reset to Defaults")
        self.btn_reset.clicked.connect(lambda: self._populate(Settings()))
        root.addWidget(self.btn_reset)

        self._populate(settings)

    def _populate(self, s: Settings) -> None:
        self.ed_prefix.setText(s.invoice_prefix)
        self.sp_payment_days.setValue(int(s.payment_days))
        self.ed_currency.setText(s.currency)
        self.ed_date_format.setText(s.date_format)
        self.cb_country.setCurrentIndex(max(0, self.cb_country.findData(s.default_country)))
        self.sp_vat.setValue(float(s.default_vat_rate))
        self.ed_export_dir.setText(s.export_dir or "")
        self.ed_file_tpl.setText(s.file_name_template)
        self.chk_dark.setChecked(bool(s.dark_mode))
        self.cb_log_level.setCurrentText(s.log_level.upper())

    def _browse_export_dir(self) -> None:
        path = QFileDialog.getExistingDirectory(
            self,
            "Select Export Folder",
            self.ed_export_dir.text() or str(Path.home()),
        )
        if path:
            self.ed_export_dir.setText(path)

    def _export_settings(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Export Settings",
            str(settings_path()),
            "JSON (*.json);;All Files (*.*)",
        )
        if not path:
            return
        try:
            save_settings(self.result_settings(), path)
            QMessageBox.information(self, "Export Settings", "Settings exported successfully.")
        except OSError as e:
            QMessageBox.warning(self, "Export Failed", f"Could not export settings:\n{e}")

    def _import_settings(self) -> None:
        # Fields are populated only; Save persists them
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Import Settings",
            str(Path.home()),
            "JSON (*.json);;All Files (*.*)",
        )
        if not path:
            return
        self._populate(load_settings(path))
        QMessageBox.information(self, "Import Settings", "Settings loaded. Click Save to apply.")

    def result_settings(self) -> Settings:
        """Return a Settings object based on current inputs."""
        return Settings(
            invoice_prefix=self.ed_prefix.text().strip() or self._orig.invoice_prefix,
            payment_days=self.sp_payment_days.value(),
            currency=self.ed_currency.text().strip() or self._orig.currency,
            date_format=self.ed_date_format.text().strip() or self._orig.date_format,
            default_country=self.cb_country.currentData(),
            default_vat_rate=self.sp_vat.value(),
            export_dir=(self.ed_export_dir.text().strip() or None),
            file_name_template=(self.ed_file_tpl.text().strip() or self._orig.file_name_template),
            dark_mode=self.chk_dark.isChecked(),
            log_level=self.cb_log_level.currentText(),
        )
