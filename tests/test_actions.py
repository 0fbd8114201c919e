from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from conftest import FakeStore, make_client, make_company, make_invoice

from invoicedesk.core.actions import InvoiceActions, delete_record
from invoicedesk.core.notify import ERROR, SUCCESS
from invoicedesk.core.settings import Settings
from invoicedesk.export.base import ExportFormat

NOW = datetime(2026, 6, 1, 12, 30, tzinfo=timezone.utc)


class RecordingExporter:
    def __init__(self, fail: Exception | None = None) -> None:
        self.calls = []
        self.fail = fail

    def export(self, invoice, company, client, out_dir, settings=None):
        self.calls.append((invoice, company, client, Path(out_dir)))
        if self.fail:
            raise self.fail
        return Path(out_dir) / f"{invoice.id}.out"


@pytest.fixture
def exporters():
    return {fmt: RecordingExporter() for fmt in ExportFormat}


def _actions(notifier, exporters, tmp_path, clients=None, company=..., opened=None):
    invoices = FakeStore([make_invoice()])
    clients = FakeStore([make_client()] if clients is None else clients)
    company_store = SimpleNamespace(company=make_company() if company is ... else company)
    settings = Settings(export_dir=str(tmp_path))
    return InvoiceActions(
        invoices, clients, company_store, notifier, settings,
        open_url=(opened.append if opened is not None else None),
        now=lambda: NOW, exporters=exporters,
    )


def test_mark_paid_dispatches_paid_status_and_call_time(notifier, exporters, tmp_path):
    actions = _actions(notifier, exporters, tmp_path)
    assert actions.mark_paid(3) is True
    assert actions.mark_paid(3) is True
    assert len(actions.invoices.calls) == 2
    kind, (record_id, data) = actions.invoices.calls[0]
    assert (kind, record_id) == ("update", 3)
    assert data["status"] == "paid"
    assert data["updated_at"] == NOW
    assert data["invoice_number"] == "FV/2026/0003"
    assert notifier.levels() == [SUCCESS, SUCCESS]


def test_mark_paid_unknown_invoice(notifier, exporters, tmp_path):
    actions = _actions(notifier, exporters, tmp_path)
    assert actions.mark_paid(999) is False
    assert actions.invoices.calls == []
    assert notifier.levels() == [ERROR]


@pytest.mark.parametrize("missing", ["client", "company"])
def test_export_without_client_or_company_makes_no_calls(notifier, exporters, tmp_path, missing):
    kw = {"clients": []} if missing == "client" else {"company": None}
    actions = _actions(notifier, exporters, tmp_path, **kw)
    assert actions.export(3, ExportFormat.PDF) is None
    assert all(e.calls == [] for e in exporters.values())
    assert notifier.levels() == [ERROR]
    assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize("missing", ["client", "company"])
def test_email_without_client_or_company_makes_no_calls(notifier, exporters, tmp_path, missing):
    opened = []
    kw = {"clients": []} if missing == "client" else {"company": None}
    actions = _actions(notifier, exporters, tmp_path, opened=opened, **kw)
    assert actions.send_email(3) is None
    assert all(e.calls == [] for e in exporters.values())
    assert opened == []
    assert notifier.levels() == [ERROR]


def test_export_dispatches_to_format_exporter(notifier, exporters, tmp_path):
    actions = _actions(notifier, exporters, tmp_path)
    path = actions.export(3, ExportFormat.CSV)
    assert path == tmp_path / "3.out"
    assert len(exporters[ExportFormat.CSV].calls) == 1
    assert exporters[ExportFormat.PDF].calls == []
    _inv, company, client, out_dir = exporters[ExportFormat.CSV].calls[0]
    assert company.name == "Acme Sp. z o.o."
    assert client.id == 7
    assert out_dir == tmp_path
    assert notifier.levels() == [SUCCESS]


def test_export_failure_is_reported(notifier, tmp_path):
    exporters = {fmt: RecordingExporter(fail=OSError("read-only")) for fmt in ExportFormat}
    actions = _actions(notifier, exporters, tmp_path)
    assert actions.export(3, "json") is None
    assert notifier.levels() == [ERROR]


def test_email_builds_pdf_then_opens_mailto(notifier, exporters, tmp_path):
    opened = []
    actions = _actions(notifier, exporters, tmp_path, opened=opened)
    url = actions.send_email(3)
    assert len(exporters[ExportFormat.PDF].calls) == 1
    assert opened == [url]
    assert url.startswith("mailto:billing@beta.example?subject=Invoice%20FV%2F2026%2F0003%20-%20Acme")
    assert notifier.levels() == [SUCCESS]


def test_email_requires_client_address(notifier, exporters, tmp_path):
    opened = []
    actions = _actions(notifier, exporters, tmp_path, clients=[make_client(email="")], opened=opened)
    assert actions.send_email(3) is None
    assert exporters[ExportFormat.PDF].calls == []
    assert opened == []
    assert notifier.levels() == [ERROR]


def test_delete_record_success_and_failure(notifier):
    store = FakeStore([SimpleNamespace(id=1), SimpleNamespace(id=2)])
    assert delete_record(store, 1, notifier) is True
    assert [r.id for r in store.items] == [2]
    assert delete_record(store, 1, notifier) is False
    assert notifier.levels() == [SUCCESS, ERROR]
