from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict

from invoicedesk.core.currency import fmt_money
from invoicedesk.core.settings import Settings
from invoicedesk.export.base import Exporter, ExportFormat, fmt_date

CSV_HEADERS = ["No.", "Description", "Quantity", "Unit price", "VAT %", "Amount"]


class CsvExporter(Exporter):
    """One row per line item, then net/VAT/gross rows."""

    fmt = ExportFormat.CSV
    suffix = "csv"

    def write(self, path: Path, payload: Dict[str, Any], settings: Settings) -> None:
        inv = payload["invoice"]
        with open(path, "w", newline="", encoding="utf-8-sig") as f:
            writer = csv.writer(f)
            writer.writerow(["Invoice", inv["number"]])
            writer.writerow(["Issue date", fmt_date(inv["issue_date"], "%Y-%m-%d")])
            writer.writerow(["Due date", fmt_date(inv["due_date"], "%Y-%m-%d")])
            writer.writerow(["Seller", payload["seller"]["name"]])
            writer.writerow(["Buyer", payload["buyer"]["name"]])
            writer.writerow([])
            writer.writerow(CSV_HEADERS)
            for line in payload["lines"]:
                writer.writerow([
                    line["position"],
                    line["description"],
                    line["quantity"],
                    fmt_money(line["unit_price"]),
                    line["vat_rate"],
                    fmt_money(line["line_total"]),
                ])
            totals = payload["totals"]
            writer.writerow([])
            writer.writerow(["", "", "", "", "Net", fmt_money(totals["net"])])
            writer.writerow(["", "", "", "", "VAT", fmt_money(totals["vat"])])
            writer.writerow(["", "", "", "", "Total", fmt_money(totals["gross"])])
