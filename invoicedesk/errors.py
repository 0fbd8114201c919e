from __future__ import annotations


class InvoiceDeskError(Exception):
    """Base class for errors raised by InvoiceDesk."""


class ValidationError(InvoiceDeskError):
    """A record failed a field rule (for example an empty name)."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class RecordNotFound(InvoiceDeskError):
    def __init__(self, kind: str, record_id: object) -> None:
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class MissingExportData(InvoiceDeskError):
    """Client, company or client email could not be resolved for an export."""
