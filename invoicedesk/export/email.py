from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from invoicedesk.core.currency import format_currency
from invoicedesk.core.settings import Settings
from invoicedesk.export.base import fmt_date


def email_subject(payload: Dict[str, Any]) -> str:
    return f"Invoice {payload['invoice']['number']} - {payload['seller']['name']}"


def email_body(payload: Dict[str, Any], settings: Optional[Settings] = None) -> str:
    settings = settings or Settings()
    inv = payload["invoice"]
    pay = payload["payment"]
    df = settings.date_format
    currency = inv.get("currency") or settings.currency
    return (
        "Dear Sir or Madam,\n"
        "\n"
        f"Please find attached invoice no. {inv['number']} dated {fmt_date(inv['issue_date'], df)}.\n"
        "\n"
        f"Amount due: {format_currency(payload['totals']['gross'], currency)}\n"
        f"Due date: {fmt_date(inv['due_date'], df)}\n"
        "\n"
        "Payment details:\n"
        f"IBAN: {pay.get('iban') or ''}\n"
        f"BIC: {pay.get('bic') or ''}\n"
        "\n"
        "Kind regards,\n"
        f"{payload['seller']['name']}"
    )


def build_mailto(to: str, payload: Dict[str, Any], settings: Optional[Settings] = None) -> str:
    """mailto: URL with subject and body percent-encoded per RFC 3986."""
    subject = quote(email_subject(payload), safe="")
    body = quote(email_body(payload, settings), safe="")
    return f"mailto:{quote(to, safe='@')}?subject={subject}&body={body}"
