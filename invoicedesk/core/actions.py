"""Row actions of the list views: delete, export, email and mark paid.

Everything here runs after the user confirmed in the UI. Failures are logged
and reported through the notifier; nothing is raised back to the caller.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
import logging

from invoicedesk.core.notify import Notifier
from invoicedesk.core.settings import Settings
from invoicedesk.data import repo
from invoicedesk.data.models import InvoiceStatus, utc_now
from invoicedesk.errors import MissingExportData
from invoicedesk.export.base import Exporter, ExportFormat, invoice_payload
from invoicedesk.export.email import build_mailto
from invoicedesk.export.registry import EXPORTERS

logger = logging.getLogger(__name__)


def delete_record(store: Any, record_id: int, notifier: Notifier) -> bool:
    """Delete through the store. No undo."""
    try:
        store.delete(record_id)
    except Exception as e:
        logger.exception("Deleting %s %s failed", getattr(store, "kind", "record").lower(), record_id)
        notifier.error(f"Could not delete {getattr(store, 'kind', 'record').lower()}: {e}")
        return False
    notifier.success(f"{getattr(store, 'kind', 'Record')} deleted")
    return True


class InvoiceActions:
    def __init__(
        self,
        invoices: Any,
        clients: Any,
        company: Any,
        notifier: Notifier,
        settings: Optional[Settings] = None,
        open_url: Optional[Callable[[str], Any]] = None,
        now: Callable[[], datetime] = utc_now,
        exporters: Optional[Dict[ExportFormat, Exporter]] = None,
    ) -> None:
        self.invoices = invoices
        self.clients = clients
        self.company = company
        self.notifier = notifier
        self.settings = settings or Settings()
        self.open_url = open_url
        self.now = now
        self.exporters = exporters if exporters is not None else EXPORTERS

    def _resolve(self, invoice_id: int) -> Tuple[Any, Any, Any]:
        """Invoice, client and company from the in-memory stores."""
        invoice = self.invoices.get(invoice_id)
        if invoice is None:
            raise MissingExportData(f"Invoice {invoice_id} not found")
        client = self.clients.get(invoice.client_id)
        company = self.company.company
        if client is None or company is None:
            raise MissingExportData("Client or company data is missing")
        return invoice, client, company

    def _write(self, fmt: ExportFormat, invoice: Any, client: Any, company: Any) -> Path:
        exporter = self.exporters[ExportFormat(fmt)]
        return exporter.export(invoice, company, client, self.settings.export_path(), self.settings)

    def export(self, invoice_id: int, fmt: ExportFormat) -> Optional[Path]:
        fmt = ExportFormat(fmt)
        try:
            invoice, client, company = self._resolve(invoice_id)
        except MissingExportData as e:
            self.notifier.error(str(e))
            return None
        try:
            path = self._write(fmt, invoice, client, company)
        except Exception as e:
            logger.exception("%s export of invoice %s failed", fmt.label, invoice_id)
            self.notifier.error(f"Failed to export {fmt.label}: {e}")
            return None
        self.notifier.success(f"{fmt.label} exported: {path}")
        return path

    def send_email(self, invoice_id: int) -> Optional[str]:
        """Write the PDF, then open a pre-filled email draft to the client."""
        try:
            invoice, client, company = self._resolve(invoice_id)
        except MissingExportData as e:
            self.notifier.error(str(e))
            return None
        to = str(getattr(client, "email", "") or "").strip()
        if not to:
            self.notifier.error("Client has no email address")
            return None
        try:
            self._write(ExportFormat.PDF, invoice, client, company)
            url = build_mailto(to, invoice_payload(invoice, company, client, self.settings), self.settings)
            if self.open_url is not None:
                self.open_url(url)
        except Exception as e:
            logger.exception("Preparing email for invoice %s failed", invoice_id)
            self.notifier.error(f"Could not prepare the email: {e}")
            return None
        self.notifier.success("Email draft opened")
        return url

    def mark_paid(self, invoice_id: int) -> bool:
        invoice = self.invoices.get(invoice_id)
        if invoice is None:
            self.notifier.error(f"Invoice {invoice_id} not found")
            return False
        data = {**repo.invoice_fields(invoice), "status": InvoiceStatus.PAID.value, "updated_at": self.now()}
        try:
            self.invoices.update(invoice_id, data)
        except Exception as e:
            logger.exception("Marking invoice %s paid failed", invoice_id)
            self.notifier.error(f"Could not update invoice: {e}")
            return False
        self.notifier.success(f"Invoice {invoice.invoice_number} marked as paid")
        return True
