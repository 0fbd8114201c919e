from __future__ import annotations

from pathlib import Path
from typing import Any, Optional
import logging
import tempfile

from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QPushButton, QLabel

from invoicedesk.core.settings import Settings
from invoicedesk.export.pdf_export import PdfExporter
from invoicedesk.printing.launch import open_file

logger = logging.getLogger(__name__)

ZOOM_STEP = 1.15


class PdfPreviewDialog(QDialog):
    """Read-only invoice view rendered from a temporary PDF."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Invoice")
        self.resize(900, 720)
        self._temp_pdf: Optional[Path] = None
        self._scratch = tempfile.TemporaryDirectory(prefix="invoicedesk_preview_", ignore_cleanup_errors=True)

        layout = QVBoxLayout(self)
        toolbar = QHBoxLayout()
        self.lbl_title = QLabel("")
        self.lbl_title.setObjectName("SectionTitle")
        toolbar.addWidget(self.lbl_title)
        toolbar.addStretch(1)
        self.btn_smaller = QPushButton("Zoom out")
        self.btn_larger = QPushButton("Zoom in")
        self.btn_fit = QPushButton("Fit width")
        self.btn_external = QPushButton("Open in viewer")
        self.btn_close = QPushButton("Close")
        for b in (self.btn_smaller, self.btn_larger, self.btn_fit, self.btn_external, self.btn_close):
            toolbar.addWidget(b)
        layout.addLayout(toolbar)

        self.btn_close.clicked.connect(self.reject)
        self.btn_external.clicked.connect(self._open_external)

        # QtPdf ships as an optional PySide6 add-on on some platforms
        self._viewer = None
        self._document = None
        try:
            from PySide6.QtPdf import QPdfDocument  # type: ignore
            from PySide6.QtPdfWidgets import QPdfView  # type: ignore
        except ImportError:
            note = QLabel("In-app preview is unavailable; use 'Open in viewer'.")
            note.setWordWrap(True)
            layout.addWidget(note, 1)
            for b in (self.btn_smaller, self.btn_larger, self.btn_fit):
                b.setEnabled(False)
            return

        self._document = QPdfDocument(self)
        self._viewer = QPdfView(self)
        self._viewer.setPageMode(QPdfView.PageMode.MultiPage)
        layout.addWidget(self._viewer, 1)
        self.btn_larger.clicked.connect(lambda: self._zoom(ZOOM_STEP))
        self.btn_smaller.clicked.connect(lambda: self._zoom(1 / ZOOM_STEP))
        self.btn_fit.clicked.connect(lambda: self._viewer.setZoomMode(QPdfView.ZoomMode.FitToWidth))

    def _zoom(self, factor: float) -> None:
        from PySide6.QtPdfWidgets import QPdfView  # type: ignore

        self._viewer.setZoomMode(QPdfView.ZoomMode.Custom)
        self._viewer.setZoomFactor(self._viewer.zoomFactor() * factor)

    def _open_external(self) -> None:
        if self._temp_pdf is not None:
            open_file(str(self._temp_pdf))

    def load_invoice(self, invoice: Any, company: Any, client: Any, settings: Optional[Settings] = None) -> bool:
        """Render the invoice to a temp PDF; True when it is shown in-app.

        The file lives until the dialog is closed.
        """
        number = getattr(invoice, "invoice_number", "")
        try:
            self._temp_pdf = PdfExporter().export(invoice, company, client, Path(self._scratch.name), settings)
        except Exception:
            logger.exception("Building preview for invoice %s failed", number)
            return False
        self.setWindowTitle(f"Invoice {number}")
        self.lbl_title.setText(f"Invoice {number}")
        if self._viewer is None:
            return False
        self._document.load(str(self._temp_pdf))
        self._viewer.setDocument(self._document)
        return True

    def done(self, result: int) -> None:
        # Release QtPdf's hold on the file before removing it
        if self._document is not None:
            self._document.close()
        self._scratch.cleanup()
        self._temp_pdf = None
        super().done(result)
