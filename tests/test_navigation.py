from __future__ import annotations

from datetime import date

import pytest

pytest.importorskip("pytestqt")

from PySide6.QtWidgets import QApplication  # noqa: E402

from invoicedesk.core.settings import Settings  # noqa: E402
from invoicedesk.data import repo  # noqa: E402


def test_app_window_creation(qtbot, database, tmp_path):  # type: ignore[reportUnknownParameterType]
    app = QApplication.instance() or QApplication([])
    from invoicedesk.shell import AppWindow
    win = AppWindow(Settings(export_dir=str(tmp_path)))
    qtbot.addWidget(win)
    assert [b.text() for b in win.nav.buttons] == ["Invoices", "Clients", "Products", "Company"]
    # Invoices view at index 0
    assert win.stack.currentIndex() == 0
    win._on_nav(2)
    assert win.stack.currentWidget() is win.products_view
    assert win.nav.buttons[2].isChecked()


def test_notifications_reach_status_bar(qtbot, database):
    from invoicedesk.shell import AppWindow
    win = AppWindow(Settings())
    qtbot.addWidget(win)
    win.notifier.error("Could not save")
    assert win.statusBar().currentMessage() == "Could not save"


def test_products_view_search_filters_rows(qtbot, database):
    from invoicedesk.shell import AppWindow
    repo.create_product({"code": "A1", "name": "Widget", "description": "x"})
    repo.create_product({"code": "B2", "name": "Gadget", "description": "widget-like"})
    repo.create_product({"code": "C3", "name": "Sprocket", "description": ""})
    win = AppWindow(Settings())
    qtbot.addWidget(win)
    win._on_nav(2)
    view = win.products_view
    assert view.table.rowCount() == 3
    view.search_edit.setText("WIDGET")
    assert view.table.rowCount() == 2
    view.search_edit.setText("")
    assert view.table.rowCount() == 3


def test_delete_needs_confirmation(qtbot, database):
    from invoicedesk.shell import AppWindow
    repo.create_product({"name": "Widget"})
    win = AppWindow(Settings())
    qtbot.addWidget(win)
    win._on_nav(2)
    view = win.products_view
    view.table.setCurrentCell(0, 0)

    view.confirm = lambda *_a: False
    view.btn_delete.click()
    assert len(repo.list_products()) == 1

    view.confirm = lambda *_a: True
    view.btn_delete.click()
    assert repo.list_products() == []
    assert view.table.rowCount() == 0


def test_client_dialog_shows_country_fields(qtbot, notifier):
    from conftest import FakeStore
    from invoicedesk.core.forms import ClientForm
    from invoicedesk.widgets.client_dialog import ClientDialog

    store = FakeStore()
    dlg = ClientDialog(ClientForm(store, notifier))
    qtbot.addWidget(dlg)
    edits = dlg.tax_edits
    assert dlg.fl.isRowVisible(edits["nip_number"])
    assert not dlg.fl.isRowVisible(edits["kvk_number"])

    dlg.cb_country.setCurrentIndex(dlg.cb_country.findData("NL"))
    assert not dlg.fl.isRowVisible(edits["nip_number"])
    assert dlg.fl.isRowVisible(edits["kvk_number"]) and dlg.fl.isRowVisible(edits["vat_number"])

    dlg.ed_name.setText("Beta B.V.")
    edits["kvk_number"].setText("12345678")
    dlg._save()
    kind, data = store.calls[0]
    assert kind == "create"
    assert data["country"] == "NL"
    assert data["kvk_number"] == "12345678"


def test_mark_paid_follows_selected_invoice_status(qtbot, database, tmp_path):
    from invoicedesk.shell import AppWindow
    client = repo.create_client({"name": "Acme"})
    lines = [{"description": "Work", "quantity": 1, "unit_price": 10.0, "vat_rate": 21}]
    repo.create_invoice({"client_id": client.id, "issue_date": date(2026, 1, 5), "lines": lines})
    win = AppWindow(Settings(export_dir=str(tmp_path)))
    qtbot.addWidget(win)
    view = win.invoices_view
    assert view.table.rowCount() == 1
    view.table.setCurrentCell(-1, -1)
    assert not view.btn_paid.isEnabled()

    view.table.setCurrentCell(0, 0)
    assert view.btn_paid.isEnabled()
    view.btn_paid.click()
    assert repo.list_invoices()[0].status == "paid"
    assert not view.btn_paid.isEnabled()
    assert view.btn_delete.isEnabled()


def test_preview_file_is_removed_when_dialog_closes(qtbot, invoice, company, client):
    from invoicedesk.widgets.preview_dialog import PdfPreviewDialog
    dlg = PdfPreviewDialog()
    qtbot.addWidget(dlg)
    dlg.load_invoice(invoice, company, client, Settings())
    pdf = dlg._temp_pdf
    assert pdf is not None and pdf.exists()
    dlg.reject()
    assert not pdf.exists()
    assert not pdf.parent.exists()
