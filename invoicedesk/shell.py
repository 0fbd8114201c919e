from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal, QUrl
from PySide6.QtGui import QFont, QDesktopServices
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QPushButton, QLabel, QStackedWidget, QDialog
)

from invoicedesk.core.actions import InvoiceActions
from invoicedesk.core.notify import ERROR, Notifier
from invoicedesk.core.settings import Settings, save_settings
from invoicedesk.data.store import ClientStore, CompanyStore, InvoiceStore, ProductStore
from invoicedesk.styles.themes import light_qss, dark_qss
from invoicedesk.views.clients_view import ClientsView
from invoicedesk.views.company_view import CompanyView
from invoicedesk.views.invoices_view import InvoicesView
from invoicedesk.views.products_view import ProductsView

STATUS_TIMEOUT_MS = 5000


class StatusBarNotifier(Notifier):
    """Shows notifications in the window's status bar (and logs them)."""

    def __init__(self, window: QMainWindow) -> None:
        self.window = window

    def notify(self, level: str, message: str) -> None:
        super().notify(level, message)
        bar = self.window.statusBar()
        bar.setStyleSheet("color: #c53030;" if level == ERROR else "")
        bar.showMessage(message, STATUS_TIMEOUT_MS)


class NavRail(QWidget):
    navigate = Signal(int)

    PAGES = ("Invoices", "Clients", "Products", "Company")

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("NavRail")
        v = QVBoxLayout(self)
        v.setContentsMargins(8, 12, 8, 12)
        v.setSpacing(4)

        def make_btn(text: str, idx: int) -> QPushButton:
            b = QPushButton(text)
            b.setObjectName("NavButton")
            b.setCheckable(True)
            b.clicked.connect(lambda: self.navigate.emit(idx))
            b.setCursor(Qt.PointingHandCursor)
            b.setMinimumHeight(32)
            return b

        self.buttons = [make_btn(text, i) for i, text in enumerate(self.PAGES)]
        for b in self.buttons:
            v.addWidget(b)
        v.addStretch(1)
        self.select(0)

    def select(self, idx: int) -> None:
        for i, b in enumerate(self.buttons):
            b.setChecked(i == idx)


class AppWindow(QMainWindow):
    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.setWindowTitle("InvoiceDesk")
        self.resize(1100, 720)

        self.notifier = StatusBarNotifier(self)
        self.products = ProductStore()
        self.clients = ClientStore()
        self.invoices = InvoiceStore(prefix=self.settings.invoice_prefix)
        self.company = CompanyStore()
        self.actions = InvoiceActions(
            self.invoices, self.clients, self.company, self.notifier, self.settings,
            open_url=lambda url: QDesktopServices.openUrl(QUrl(url)),
        )

        root = QWidget(self)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        # Header
        header = QHBoxLayout()
        header.setContentsMargins(12, 8, 12, 8)
        title = QLabel("InvoiceDesk")
        f = QFont(); f.setPointSize(14); f.setBold(True)
        title.setFont(f)
        header.addWidget(title)
        header.addStretch(1)
        self.btn_settings = QPushButton("Settings")
        self.btn_settings.clicked.connect(self.open_settings)
        header.addWidget(self.btn_settings)
        layout.addLayout(header)

        # Body: Nav rail + routed views
        body = QHBoxLayout()
        body.setContentsMargins(0, 0, 0, 0)
        body.setSpacing(0)
        self.nav = NavRail()
        self.nav.navigate.connect(self._on_nav)
        body.addWidget(self.nav)

        self.stack = QStackedWidget()
        self.invoices_view = InvoicesView(
            self.invoices, self.clients, self.products, self.company,
            self.actions, self.notifier, self.settings,
        )
        self.clients_view = ClientsView(self.clients, self.notifier, default_country=self.settings.default_country)
        self.products_view = ProductsView(self.products, self.notifier, default_vat_rate=self.settings.default_vat_rate)
        self.company_view = CompanyView(self.company, self.notifier)
        self.views = [self.invoices_view, self.clients_view, self.products_view, self.company_view]
        for view in self.views:
            self.stack.addWidget(view)
        body.addWidget(self.stack, 1)
        layout.addLayout(body, 1)

        self.setCentralWidget(root)
        self.apply_theme(self.settings.dark_mode)
        self._on_nav(0)

    def _on_nav(self, idx: int) -> None:
        self.nav.select(idx)
        self.stack.setCurrentIndex(idx)
        # Reload from the database whenever a view is shown
        self.views[idx].refresh()

    def open_settings(self) -> None:
        from invoicedesk.widgets.settings_dialog import SettingsDialog
        dlg = SettingsDialog(self.settings, parent=self)
        if dlg.exec() != QDialog.Accepted:
            return
        new_settings = dlg.result_settings()
        save_settings(new_settings)
        # Views and actions hold this object; update it in place
        self.settings.__dict__.update(new_settings.__dict__)
        self.invoices.prefix = self.settings.invoice_prefix
        self.invoices_view.form.payment_days = self.settings.payment_days
        self.invoices_view.form.default_vat_rate = self.settings.default_vat_rate
        self.clients_view.form.default_country = self.settings.default_country
        self.products_view.form.default_vat_rate = self.settings.default_vat_rate
        self.apply_theme(self.settings.dark_mode)
        self.notifier.success("Settings saved")

    # Theme helpers
    def apply_theme(self, dark: bool) -> None:
        self.setStyleSheet(dark_qss() if dark else light_qss())
