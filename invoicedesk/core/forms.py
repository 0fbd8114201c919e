"""Draft state behind the edit dialogs.

A form is opened empty (default draft) or from an existing record, edited in
place by the dialog, then saved through the entity store. Only the save path
talks to the database.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional
import logging

from invoicedesk.core.currency import Totals, compute_totals
from invoicedesk.core.jurisdiction import DEFAULT_COUNTRY, tax_fields_for
from invoicedesk.core.notify import Notifier
from invoicedesk.data.models import ClientType, InvoiceStatus

logger = logging.getLogger(__name__)


def _value(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


class RecordForm:
    kind = "Record"

    def __init__(self, store: Any, notifier: Notifier) -> None:
        self.store = store
        self.notifier = notifier
        self.draft: Dict[str, Any] = {}
        self.editing_id: Optional[int] = None
        self.is_open = False

    def defaults(self) -> Dict[str, Any]:
        return {}

    def open(self, record: Any = None) -> Dict[str, Any]:
        """Reset the draft to defaults, or copy a record's fields into it."""
        draft = self.defaults()
        if record is None:
            self.editing_id = None
        else:
            self.editing_id = _value(record, "id")
            for key, default in draft.items():
                val = _value(record, key)
                draft[key] = default if (val is None or val == "") else val
        self.draft = draft
        self.is_open = True
        return self.draft

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def validate(self) -> Optional[str]:
        """Return a message for the first broken rule, or None."""
        if not str(self.draft.get("name") or "").strip():
            return f"{self.kind} name is required"
        return None

    def payload(self) -> Dict[str, Any]:
        return dict(self.draft)

    def save(self) -> bool:
        """Validate, then create or update through the store.

        Returns True when the dialog may close. Validation problems and store
        failures leave the form open and surface one error notification.
        """
        problem = self.validate()
        if problem:
            self.notifier.error(problem)
            return False
        data = self.payload()
        try:
            if self.is_editing:
                self.store.update(self.editing_id, data)
                message = f"{self.kind} updated"
            else:
                self.store.create(data)
                message = f"{self.kind} created"
        except Exception as e:
            logger.exception("Saving %s failed", self.kind.lower())
            self.notifier.error(f"Could not save {self.kind.lower()}: {e}")
            return False
        self.notifier.success(message)
        self.is_open = False
        return True


class ProductForm(RecordForm):
    kind = "Product"

    def __init__(self, store: Any, notifier: Notifier, default_vat_rate: float = 21.0) -> None:
        super().__init__(store, notifier)
        self.default_vat_rate = default_vat_rate

    def defaults(self) -> Dict[str, Any]:
        return {
            "code": "",
            "name": "",
            "description": "",
            "unit_price": 0.0,
            "vat_rate": self.default_vat_rate,
        }


class ClientForm(RecordForm):
    kind = "Client"

    def __init__(self, store: Any, notifier: Notifier, default_country: str = DEFAULT_COUNTRY) -> None:
        super().__init__(store, notifier)
        self.default_country = default_country

    def defaults(self) -> Dict[str, Any]:
        return {
            "name": "",
            "address": "",
            "country": self.default_country,
            "client_type": ClientType.COMPANY.value,
            "vat_number": "",
            "kvk_number": "",
            "nip_number": "",
            "email": "",
            "phone": "",
            "notes": "",
        }

    def visible_tax_fields(self) -> tuple:
        return tax_fields_for(self.draft.get("country"))


class InvoiceForm(RecordForm):
    kind = "Invoice"

    def __init__(self, store: Any, notifier: Notifier, payment_days: int = 14, today: Optional[date] = None,
                 default_vat_rate: float = 21.0) -> None:
        super().__init__(store, notifier)
        self.payment_days = payment_days
        self.default_vat_rate = default_vat_rate
        self._today = today

    def defaults(self) -> Dict[str, Any]:
        issued = self._today or date.today()
        return {
            "invoice_number": "",
            "client_id": None,
            "issue_date": issued,
            "due_date": issued + timedelta(days=self.payment_days),
            "status": InvoiceStatus.UNPAID.value,
            "notes": "",
        }

    def open(self, record: Any = None) -> Dict[str, Any]:
        draft = super().open(record)
        lines = _value(record, "lines") if record is not None else None
        draft["lines"] = [
            {
                "description": _value(line, "description") or "",
                "quantity": float(_value(line, "quantity") or 0),
                "unit_price": float(_value(line, "unit_price") or 0),
                "vat_rate": float(_value(line, "vat_rate") or 0),
            }
            for line in (lines or [])
        ]
        return draft

    @property
    def lines(self) -> List[Dict[str, Any]]:
        return self.draft.setdefault("lines", [])

    def add_line(self, description: str = "", quantity: float = 1.0, unit_price: float = 0.0, vat_rate: float = 0.0) -> Dict[str, Any]:
        line = {
            "description": description,
            "quantity": float(quantity),
            "unit_price": float(unit_price),
            "vat_rate": float(vat_rate),
        }
        self.lines.append(line)
        return line

    def add_product_line(self, product: Any, quantity: float = 1.0) -> Dict[str, Any]:
        """Copy a product's name, price and VAT rate into a new line."""
        name = _value(product, "name") or ""
        desc = _value(product, "description") or ""
        return self.add_line(
            description=f"{name} - {desc}" if desc else name,
            quantity=quantity,
            unit_price=float(_value(product, "unit_price") or 0),
            vat_rate=float(_value(product, "vat_rate") or 0),
        )

    def remove_line(self, index: int) -> None:
        if 0 <= index < len(self.lines):
            del self.lines[index]

    def totals(self) -> Totals:
        return compute_totals(self.lines)

    def validate(self) -> Optional[str]:
        if self.draft.get("client_id") is None:
            return "Select a client for the invoice"
        if not any(str(line.get("description") or "").strip() for line in self.lines):
            return "Add at least one line item"
        due = self.draft.get("due_date")
        issued = self.draft.get("issue_date")
        if isinstance(due, date) and isinstance(issued, date) and due < issued:
            return "Due date cannot be before the issue date"
        return None

    def payload(self) -> Dict[str, Any]:
        data = dict(self.draft)
        data["lines"] = [dict(line) for line in self.lines]
        return data
