from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
from types import SimpleNamespace
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invoicedesk.core.settings import Settings
from invoicedesk.export.registry import EXPORTERS

# Writes one redacted sample invoice in every export format for README/demo purposes.


def main() -> None:
    out_dir = ROOT / "assets" / "samples"
    today = date.today()
    company = SimpleNamespace(
        name="(Company Name)", address="(Street)\n(City)", country="PL",
        vat_number="", kvk_number="", nip_number="(redacted)",
        email="(redacted)", phone="(redacted)", iban="(redacted)", bic="(redacted)",
    )
    client = SimpleNamespace(
        name="(Client Name)", address="(Street)\n(City)", country="NL", client_type="company",
        vat_number="(redacted)", kvk_number="(redacted)", nip_number="", email="", phone="",
    )
    invoice = SimpleNamespace(
        invoice_number=f"FV/{today.year}/0001", issue_date=today, due_date=today + timedelta(days=14),
        status="unpaid", notes="",
        lines=[
            SimpleNamespace(description="Sample item A", quantity=1, unit_price=100.0, vat_rate=21),
            SimpleNamespace(description="Sample item B", quantity=2, unit_price=150.0, vat_rate=21),
            SimpleNamespace(description="Sample item C", quantity=3, unit_price=200.0, vat_rate=9),
        ],
    )
    settings = Settings(file_name_template="sample")
    for fmt, exporter in EXPORTERS.items():
        path = exporter.export(invoice, company, client, out_dir, settings)
        print(f"{fmt.label}: {path}")


if __name__ == "__main__":
    main()
