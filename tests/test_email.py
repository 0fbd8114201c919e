from __future__ import annotations

from urllib.parse import parse_qs, unquote, urlsplit

from invoicedesk.core.settings import Settings
from invoicedesk.export.base import invoice_payload
from invoicedesk.export.email import build_mailto, email_body, email_subject


def test_subject_and_body(invoice, company, client):
    p = invoice_payload(invoice, company, client, Settings())
    assert email_subject(p) == "Invoice FV/2026/0003 - Acme Sp. z o.o."
    body = email_body(p, Settings())
    assert "invoice no. FV/2026/0003 dated 02-03-2026" in body
    assert "Amount due: 29.65 EUR" in body
    assert "Due date: 16-03-2026" in body
    assert "IBAN: PL61109010140000071219812874" in body
    assert "BIC: WBKPPLPP" in body
    assert body.rstrip().endswith("Acme Sp. z o.o.")


def test_mailto_is_percent_encoded(invoice, company, client):
    p = invoice_payload(invoice, company, client, Settings())
    url = build_mailto("billing@beta.example", p)
    parts = urlsplit(url)
    assert parts.scheme == "mailto"
    assert parts.path == "billing@beta.example"
    assert " " not in url and "\n" not in url and "+" not in url
    query = parse_qs(parts.query)
    assert query["subject"] == [email_subject(p)]
    assert unquote(url.split("&body=")[1]) == email_body(p)
