from __future__ import annotations

import os
from datetime import date
from types import SimpleNamespace
from typing import Any, Dict, List, Tuple

import pytest

# Widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from invoicedesk.core.notify import Notifier
from invoicedesk.data import db
from invoicedesk.errors import RecordNotFound


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def notify(self, level: str, message: str) -> None:
        super().notify(level, message)
        self.messages.append((level, message))

    def levels(self) -> List[str]:
        return [lvl for lvl, _ in self.messages]


class FakeStore:
    """Store double that records every collaborator call."""

    kind = "Record"

    def __init__(self, items: List[Any] | None = None, fail: Exception | None = None) -> None:
        self.items = list(items or [])
        self.loaded = True
        self.fail = fail
        self.calls: List[Tuple[str, Any]] = []

    def refresh(self) -> List[Any]:
        return self.items

    def get(self, record_id):
        return next((r for r in self.items if r.id == record_id), None)

    def create(self, data: Dict[str, Any]) -> Any:
        self.calls.append(("create", data))
        if self.fail:
            raise self.fail
        return SimpleNamespace(id=len(self.items) + 1, **data)

    def update(self, record_id: int, data: Dict[str, Any]) -> Any:
        self.calls.append(("update", (record_id, data)))
        if self.fail:
            raise self.fail
        return SimpleNamespace(id=record_id, **data)

    def delete(self, record_id: int) -> None:
        self.calls.append(("delete", record_id))
        if self.fail:
            raise self.fail
        if self.get(record_id) is None:
            raise RecordNotFound(self.kind, record_id)
        self.items = [r for r in self.items if r.id != record_id]


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def database(tmp_path):
    """Fresh SQLite database per test."""
    path = tmp_path / "invoicedesk.db"
    db.configure(path)
    db.create_db_and_tables()
    yield path
    db.get_engine().dispose()


def make_company(**kw) -> SimpleNamespace:
    data = dict(
        id=1, name="Acme Sp. z o.o.", address="ul. Prosta 1\n00-001 Warszawa", country="PL",
        vat_number="PL1234567890", kvk_number="", nip_number="123-456-78-90",
        email="office@acme.example", phone="+48 22 000 00 00",
        iban="PL61109010140000071219812874", bic="WBKPPLPP",
    )
    data.update(kw)
    return SimpleNamespace(**data)


def make_client(**kw) -> SimpleNamespace:
    data = dict(
        id=7, name="Beta B.V.", address="Damrak 1\nAmsterdam", country="NL", client_type="company",
        vat_number="NL123456789B01", kvk_number="12345678", nip_number="",
        email="billing@beta.example", phone="",
    )
    data.update(kw)
    return SimpleNamespace(**data)


def make_invoice(**kw) -> SimpleNamespace:
    data = dict(
        id=3, invoice_number="FV/2026/0003", client_id=7,
        issue_date=date(2026, 3, 2), due_date=date(2026, 3, 16),
        status="unpaid", notes="",
        lines=[
            SimpleNamespace(description="Consulting", quantity=2, unit_price=10.0, vat_rate=21.0),
            SimpleNamespace(description="Hosting", quantity=1, unit_price=5.0, vat_rate=9.0),
        ],
    )
    data.update(kw)
    return SimpleNamespace(**data)


@pytest.fixture
def company() -> SimpleNamespace:
    return make_company()


@pytest.fixture
def client() -> SimpleNamespace:
    return make_client()


@pytest.fixture
def invoice() -> SimpleNamespace:
    return make_invoice()
