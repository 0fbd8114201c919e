from __future__ import annotations

import csv
import json
import math
import re
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from openpyxl import load_workbook
from pypdf import PdfReader

from invoicedesk.core.settings import Settings
from invoicedesk.export.base import ExportFormat, invoice_payload, output_path, safe_file_name
from invoicedesk.export.registry import EXPORTERS, get_exporter


def _a4_size_points() -> tuple[float, float]:
    # ReportLab A4 in points
    return (595.2755905511812, 841.8897637795277)


@pytest.fixture
def settings() -> Settings:
    return Settings(file_name_template="{number} - {client}")


def test_registry_has_one_exporter_per_format():
    assert set(EXPORTERS) == set(ExportFormat)
    for fmt in ExportFormat:
        assert get_exporter(fmt.value).fmt is fmt


def test_payload_shape(invoice, company, client, settings):
    p = invoice_payload(invoice, company, client, settings)
    assert p["invoice"]["number"] == "FV/2026/0003"
    assert p["totals"] == {"net": 25.0, "vat": 4.65, "gross": 29.65}
    assert [l["position"] for l in p["lines"]] == [1, 2]
    assert p["lines"][0]["line_total"] == 20.0
    assert p["seller"]["tax_ids"] == [{"label": "NIP", "value": "123-456-78-90"}]
    assert p["buyer"]["tax_ids"] == [
        {"label": "KVK", "value": "12345678"},
        {"label": "BTW", "value": "NL123456789B01"},
    ]
    assert p["payment"]["iban"] == company.iban


def test_file_names_are_sanitized(tmp_path, invoice, company, client, settings):
    p = invoice_payload(invoice, company, client, settings)
    path = output_path(tmp_path, settings.file_name_template, p, "pdf")
    assert path == tmp_path / "FV-2026-0003 - Beta B.V.pdf"
    assert output_path(tmp_path, "{nope}", p, "csv").name == "FV-2026-0003.csv"
    assert safe_file_name("///") == "invoice"


def test_pdf_export(tmp_path, invoice, company, client, settings):
    out = get_exporter(ExportFormat.PDF).export(invoice, company, client, tmp_path, settings)
    assert out.suffix == ".pdf"

    reader = PdfReader(str(out))
    assert len(reader.pages) == 1
    box = reader.pages[0].mediabox
    a4w, a4h = _a4_size_points()
    assert math.isclose(float(box.right - box.left), a4w, abs_tol=1.0)
    assert math.isclose(float(box.top - box.bottom), a4h, abs_tol=1.0)

    text = reader.pages[0].extract_text() or ""
    assert "INVOICE" in text
    assert "FV/2026/0003" in text
    assert "Acme Sp. z o.o." in text and "Beta B.V." in text
    assert "Qty" in text and "Unit price" in text and "Amount" in text
    # Allow potential newline between label and value in extracted text
    assert re.search(r"Total:\s*29\.65", text) is not None
    assert "PL61109010140000071219812874" in text


def test_excel_export(tmp_path, invoice, company, client, settings):
    out = get_exporter(ExportFormat.EXCEL).export(invoice, company, client, tmp_path, settings)
    wb = load_workbook(out)
    ws = wb["Invoice"]
    assert ws["A1"].value == "Invoice FV/2026/0003"
    values = [c.value for row in ws.iter_rows() for c in row if c.value is not None]
    assert "Consulting" in values and "Hosting" in values
    assert 29.65 in values
    assert "Beta B.V." in values


def test_csv_export(tmp_path, invoice, company, client, settings):
    out = get_exporter(ExportFormat.CSV).export(invoice, company, client, tmp_path, settings)
    with open(out, newline="", encoding="utf-8-sig") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Invoice", "FV/2026/0003"]
    header = rows.index(["No.", "Description", "Quantity", "Unit price", "VAT %", "Amount"])
    assert rows[header + 1][1] == "Consulting"
    assert rows[header + 1][5] == "20.00"
    assert rows[-1] == ["", "", "", "", "Total", "29.65"]


def test_json_export(tmp_path, invoice, company, client, settings):
    out = get_exporter(ExportFormat.JSON).export(invoice, company, client, tmp_path, settings)
    doc = json.loads(out.read_text(encoding="utf-8"))
    assert set(doc) >= {"invoice", "company", "client", "lines", "totals"}
    assert doc["invoice"]["issue_date"] == "2026-03-02"
    assert doc["totals"]["gross"] == 29.65
    assert doc["client"]["name"] == "Beta B.V."
    assert len(doc["lines"]) == 2


def test_xml_export(tmp_path, invoice, company, client, settings):
    out = get_exporter(ExportFormat.XML).export(invoice, company, client, tmp_path, settings)
    root = ET.parse(out).getroot()
    assert root.tag == "Invoice"
    assert root.get("number") == "FV/2026/0003"
    assert root.findtext("Seller/Name") == "Acme Sp. z o.o."
    assert root.findtext("Buyer/Name") == "Beta B.V."
    assert len(root.findall("Lines/Line")) == 2
    assert root.findtext("Totals/Gross") == "29.65"


def test_repeated_export_overwrites(tmp_path, invoice, company, client, settings):
    exporter = get_exporter(ExportFormat.JSON)
    first = exporter.export(invoice, company, client, tmp_path, settings)
    second = exporter.export(invoice, company, client, tmp_path, settings)
    assert first == second
    assert len(list(Path(tmp_path).iterdir())) == 1
