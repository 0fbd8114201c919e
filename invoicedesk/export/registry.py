from __future__ import annotations

from typing import Dict

from invoicedesk.export.base import Exporter, ExportFormat
from invoicedesk.export.csv_export import CsvExporter
from invoicedesk.export.excel_export import ExcelExporter
from invoicedesk.export.json_export import JsonExporter
from invoicedesk.export.pdf_export import PdfExporter
from invoicedesk.export.xml_export import XmlExporter

# One exporter per format; a new format only needs an entry here
EXPORTERS: Dict[ExportFormat, Exporter] = {
    ExportFormat.PDF: PdfExporter(),
    ExportFormat.EXCEL: ExcelExporter(),
    ExportFormat.CSV: CsvExporter(),
    ExportFormat.JSON: JsonExporter(),
    ExportFormat.XML: XmlExporter(),
}


def get_exporter(fmt: ExportFormat | str) -> Exporter:
    return EXPORTERS[ExportFormat(fmt)]
