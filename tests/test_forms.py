from __future__ import annotations

from datetime import date
from types import SimpleNamespace

from conftest import FakeStore

from invoicedesk.core.forms import ClientForm, InvoiceForm, ProductForm
from invoicedesk.core.notify import ERROR, SUCCESS


def test_product_default_draft(notifier):
    form = ProductForm(FakeStore(), notifier)
    draft = form.open()
    assert draft == {"code": "", "name": "", "description": "", "unit_price": 0.0, "vat_rate": 21.0}
    assert not form.is_editing


def test_client_default_draft(notifier):
    draft = ClientForm(FakeStore(), notifier).open()
    assert draft["country"] == "PL"
    assert draft["client_type"] == "company"
    assert all(draft[f] == "" for f in ("name", "vat_number", "kvk_number", "nip_number", "email"))


def test_open_with_record_copies_fields_and_defaults_missing(notifier):
    record = SimpleNamespace(id=4, name="Acme", address=None, country="NL", client_type="individual",
                             vat_number="NL1", kvk_number="55", email="a@b.c", phone="", notes=None)
    form = ClientForm(FakeStore(), notifier)
    draft = form.open(record)
    assert form.editing_id == 4
    assert draft["name"] == "Acme"
    assert draft["country"] == "NL"
    assert draft["client_type"] == "individual"
    assert draft["address"] == ""
    assert draft["nip_number"] == ""
    assert form.visible_tax_fields() == ("kvk_number", "vat_number")


def test_save_with_empty_name_never_calls_store(notifier):
    store = FakeStore()
    form = ProductForm(store, notifier)
    form.open()
    form.draft["name"] = "   "
    assert form.save() is False
    assert store.calls == []
    assert notifier.levels() == [ERROR]
    assert form.is_open


def test_save_fresh_draft_creates_once(notifier):
    store = FakeStore()
    form = ProductForm(store, notifier)
    form.open()
    form.draft["name"] = "Widget"
    assert form.save() is True
    assert [c[0] for c in store.calls] == ["create"]
    assert notifier.levels() == [SUCCESS]
    assert not form.is_open


def test_save_while_editing_updates_once(notifier):
    store = FakeStore()
    form = ProductForm(store, notifier)
    form.open({"id": 9, "name": "Widget", "code": "W", "description": "", "unit_price": 2.5, "vat_rate": 9})
    form.draft["name"] = "Widget 2"
    assert form.save() is True
    assert store.calls == [("update", (9, form.draft))]


def test_store_failure_keeps_form_open(notifier):
    store = FakeStore(fail=RuntimeError("disk full"))
    form = ClientForm(store, notifier)
    form.open()
    form.draft["name"] = "Acme"
    assert form.save() is False
    assert len(store.calls) == 1
    assert notifier.levels() == [ERROR]
    assert "disk full" in notifier.messages[0][1]


def test_invoice_form_defaults_and_validation(notifier):
    store = FakeStore()
    form = InvoiceForm(store, notifier, payment_days=14, today=date(2026, 5, 1))
    draft = form.open()
    assert draft["issue_date"] == date(2026, 5, 1)
    assert draft["due_date"] == date(2026, 5, 15)
    assert draft["status"] == "unpaid"
    assert draft["lines"] == []

    assert form.save() is False  # no client
    form.draft["client_id"] = 1
    assert form.save() is False  # no lines
    assert store.calls == []

    form.add_product_line({"name": "Widget", "description": "blue", "unit_price": 10, "vat_rate": 21}, quantity=2)
    form.add_line("Shipping", 1, 5, 9)
    assert form.lines[0]["description"] == "Widget - blue"
    t = form.totals()
    assert (str(t.net), str(t.vat), str(t.gross)) == ("25.00", "4.65", "29.65")

    form.draft["due_date"] = date(2026, 4, 1)
    assert form.save() is False
    form.draft["due_date"] = date(2026, 5, 31)
    assert form.save() is True
    kind, payload = store.calls[0]
    assert kind == "create"
    assert len(payload["lines"]) == 2


def test_invoice_form_remove_line(notifier):
    form = InvoiceForm(FakeStore(), notifier)
    form.open()
    form.add_line("a")
    form.add_line("b")
    form.remove_line(0)
    form.remove_line(5)
    assert [l["description"] for l in form.lines] == ["b"]
