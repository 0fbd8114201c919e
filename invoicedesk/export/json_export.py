from __future__ import annotations

import datetime as _dt
import json
from pathlib import Path
from typing import Any, Dict

from invoicedesk.core.settings import Settings
from invoicedesk.export.base import Exporter, ExportFormat


def _default(obj: Any) -> Any:
    if isinstance(obj, (_dt.date, _dt.datetime)):
        return obj.isoformat()
    return str(obj)


class JsonExporter(Exporter):
    fmt = ExportFormat.JSON
    suffix = "json"

    def write(self, path: Path, payload: Dict[str, Any], settings: Settings) -> None:
        doc = {
            "invoice": payload["invoice"],
            "company": payload["seller"],
            "client": payload["buyer"],
            "lines": payload["lines"],
            "totals": payload["totals"],
            "payment": payload["payment"],
        }
        path.write_text(json.dumps(doc, indent=2, ensure_ascii=False, default=_default), encoding="utf-8")
