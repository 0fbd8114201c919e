from __future__ import annotations

import datetime as _dt
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from invoicedesk.core.currency import compute_totals, line_total, round_money
from invoicedesk.core.jurisdiction import COUNTRIES, tax_ids_for
from invoicedesk.core.settings import Settings

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "xlsx"
    CSV = "csv"
    JSON = "json"
    XML = "xml"

    @property
    def label(self) -> str:
        return {
            ExportFormat.PDF: "PDF",
            ExportFormat.EXCEL: "Excel",
            ExportFormat.CSV: "CSV",
            ExportFormat.JSON: "JSON",
            ExportFormat.XML: "XML",
        }[self]


def fmt_date(val: Any, fmt: str = "%d-%m-%Y") -> str:
    # Expecting datetime.date; accept string fallback
    if isinstance(val, (_dt.date, _dt.datetime)):
        return val.strftime(fmt)
    return str(val) if val is not None else ""


def _get(record: Any, name: str, default: Any = "") -> Any:
    if record is None:
        return default
    val = record.get(name) if isinstance(record, dict) else getattr(record, name, None)
    return default if val is None else val


def party(record: Any) -> Dict[str, Any]:
    """Name, address and contact block for a seller or buyer."""
    ids = tax_ids_for(record)
    country = _get(record, "country")
    return {
        "name": _get(record, "name"),
        "address": _get(record, "address"),
        "country": country,
        "country_name": COUNTRIES.get(country, country),
        "email": _get(record, "email"),
        "phone": _get(record, "phone"),
        "client_type": _get(record, "client_type", None),
        "tax_ids": [
            {"label": label, "value": getattr(ids, field)}
            for field, label in zip(ids.fields, ids.labels)
            if getattr(ids, field)
        ],
    }


def invoice_payload(invoice: Any, company: Any, client: Any, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Everything an exporter needs, as plain data.

    Shape:
    {
      "invoice": {"number", "issue_date", "due_date", "status", "notes", "currency"},
      "seller": party(company), "buyer": party(client),
      "lines": [{"position", "description", "quantity", "unit_price", "vat_rate", "line_total"}],
      "totals": {"net", "vat", "gross"},
      "payment": {"iban", "bic", "due_date"},
    }
    Money values are floats rounded to cents; dates stay datetime.date.
    """
    settings = settings or Settings()
    lines: List[Dict[str, Any]] = []
    for pos, line in enumerate(_get(invoice, "lines", []) or [], 1):
        qty = _get(line, "quantity", 0)
        price = _get(line, "unit_price", 0)
        lines.append({
            "position": pos,
            "description": _get(line, "description"),
            "quantity": float(qty),
            "unit_price": round_money(price),
            "vat_rate": float(_get(line, "vat_rate", 0)),
            "line_total": float(line_total(qty, price)),
        })
    totals = compute_totals(lines)
    return {
        "invoice": {
            "number": _get(invoice, "invoice_number"),
            "issue_date": _get(invoice, "issue_date", None),
            "due_date": _get(invoice, "due_date", None),
            "status": _get(invoice, "status"),
            "notes": _get(invoice, "notes"),
            "currency": settings.currency,
        },
        "seller": party(company),
        "buyer": party(client),
        "lines": lines,
        "totals": {
            "net": float(totals.net),
            "vat": float(totals.vat),
            "gross": float(totals.gross),
        },
        "payment": {
            "iban": _get(company, "iban"),
            "bic": _get(company, "bic"),
            "due_date": _get(invoice, "due_date", None),
        },
    }


_UNSAFE = re.compile(r'[\\/:*?"<>|\r\n\t]+')


def safe_file_name(name: str) -> str:
    cleaned = _UNSAFE.sub("-", name).strip(" .-")
    return cleaned or "invoice"


def output_path(out_dir: Path, template: str, payload: Dict[str, Any], suffix: str) -> Path:
    """File path from the naming template ({number}, {client}, {date})."""
    inv = payload.get("invoice", {})
    values = {
        "number": inv.get("number", ""),
        "client": payload.get("buyer", {}).get("name", ""),
        "date": fmt_date(inv.get("issue_date"), "%Y-%m-%d"),
    }
    try:
        stem = template.format(**values)
    except (KeyError, IndexError, ValueError):
        logger.warning("Bad file name template %r; using the invoice number", template)
        stem = str(values["number"])
    return Path(out_dir) / f"{safe_file_name(stem)}.{suffix}"


class Exporter:
    """Writes one invoice into one file format."""

    fmt: ExportFormat
    suffix: str = ""

    def export(self, invoice: Any, company: Any, client: Any, out_dir: Path | str, settings: Optional[Settings] = None) -> Path:
        settings = settings or Settings()
        payload = invoice_payload(invoice, company, client, settings)
        path = output_path(Path(out_dir), settings.file_name_template, payload, self.suffix or self.fmt.value)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.write(path, payload, settings)
        logger.info("Exported invoice %s as %s: %s", payload["invoice"]["number"], self.fmt.label, path)
        return path

    def write(self, path: Path, payload: Dict[str, Any], settings: Settings) -> None:
        raise NotImplementedError
