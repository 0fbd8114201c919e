from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict

from invoicedesk.core.currency import fmt_money
from invoicedesk.core.settings import Settings
from invoicedesk.export.base import Exporter, ExportFormat, fmt_date


def _text(parent: ET.Element, tag: str, value: Any) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = "" if value is None else str(value)
    return el


def _party(parent: ET.Element, tag: str, p: Dict[str, Any]) -> None:
    el = ET.SubElement(parent, tag)
    for key, name in (("name", "Name"), ("address", "Address"), ("country", "Country"),
                      ("email", "Email"), ("phone", "Phone")):
        _text(el, name, p.get(key))
    ids = ET.SubElement(el, "TaxIds")
    for tid in p.get("tax_ids") or []:
        _text(ids, "TaxId", tid["value"]).set("type", tid["label"])


class XmlExporter(Exporter):
    fmt = ExportFormat.XML
    suffix = "xml"

    def write(self, path: Path, payload: Dict[str, Any], settings: Settings) -> None:
        inv = payload["invoice"]
        root = ET.Element("Invoice", number=str(inv["number"]), currency=str(inv.get("currency") or ""))
        _text(root, "IssueDate", fmt_date(inv["issue_date"], "%Y-%m-%d"))
        _text(root, "DueDate", fmt_date(inv["due_date"], "%Y-%m-%d"))
        _text(root, "Status", inv.get("status"))
        _party(root, "Seller", payload["seller"])
        _party(root, "Buyer", payload["buyer"])

        lines = ET.SubElement(root, "Lines")
        for line in payload["lines"]:
            el = ET.SubElement(lines, "Line", position=str(line["position"]))
            _text(el, "Description", line["description"])
            _text(el, "Quantity", line["quantity"])
            _text(el, "UnitPrice", fmt_money(line["unit_price"]))
            _text(el, "VatRate", line["vat_rate"])
            _text(el, "Amount", fmt_money(line["line_total"]))

        totals = ET.SubElement(root, "Totals")
        _text(totals, "Net", fmt_money(payload["totals"]["net"]))
        _text(totals, "Vat", fmt_money(payload["totals"]["vat"]))
        _text(totals, "Gross", fmt_money(payload["totals"]["gross"]))

        pay = ET.SubElement(root, "Payment")
        _text(pay, "IBAN", payload["payment"].get("iban"))
        _text(pay, "BIC", payload["payment"].get("bic"))

        tree = ET.ElementTree(root)
        ET.indent(tree)
        tree.write(path, encoding="utf-8", xml_declaration=True)
