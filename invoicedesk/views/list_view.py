from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QMessageBox,
)

from invoicedesk.core.actions import delete_record
from invoicedesk.core.notify import Notifier
from invoicedesk.core.search import filter_records

# (header, value getter)
Column = Tuple[str, Callable[[Any], str]]


def ask_confirm(parent: QWidget, title: str, text: str) -> bool:
    res = QMessageBox.question(parent, title, text, QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
    return res == QMessageBox.Yes


class RecordListView(QWidget):
    """Searchable table over an entity store with New / Edit / Delete."""

    title = "Records"
    search_fields: Sequence[str] = ()
    search_hint = ""
    columns: Sequence[Column] = ()

    def __init__(self, store: Any, notifier: Notifier, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store
        self.notifier = notifier
        self.confirm: Callable[[QWidget, str, str], bool] = ask_confirm
        self._rows: List[Any] = []

        v = QVBoxLayout(self)
        head = QLabel(self.title)
        head.setObjectName("ViewTitle")
        v.addWidget(head)

        bar = QHBoxLayout()
        bar.addWidget(QLabel("Search"))
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText(self.search_hint)
        self.btn_new = QPushButton("New")
        self.btn_new.setObjectName("Primary")
        self.btn_edit = QPushButton("Edit")
        self.btn_delete = QPushButton("Delete")
        bar.addWidget(self.search_edit, 1)
        for b in (self.btn_new, self.btn_edit, self.btn_delete):
            bar.addWidget(b)
        v.addLayout(bar)

        self.table = QTableWidget(0, len(self.columns))
        self.table.setHorizontalHeaderLabels([c[0] for c in self.columns])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        v.addWidget(self.table, 1)
        self.empty_label = QLabel("Nothing here yet.")
        self.empty_label.setAlignment(Qt.AlignCenter)
        v.addWidget(self.empty_label)

        self.search_edit.textChanged.connect(lambda _t: self.render())
        self.btn_new.clicked.connect(lambda: self.open_editor(None))
        self.btn_edit.clicked.connect(self._edit_current)
        self.btn_delete.clicked.connect(self._delete_current)
        self.table.itemDoubleClicked.connect(lambda _it: self._edit_current())

    def refresh(self) -> None:
        self.store.refresh()
        self.render()

    def visible_records(self) -> List[Any]:
        records = self.store.items if self.store.loaded else None
        return list(filter_records(records, self.search_edit.text().strip(), self.search_fields))

    def render(self) -> None:
        self._rows = self.visible_records()
        self.table.setRowCount(len(self._rows))
        for r, rec in enumerate(self._rows):
            for c, (_header, getter) in enumerate(self.columns):
                self.table.setItem(r, c, QTableWidgetItem(getter(rec)))
        self.table.resizeColumnsToContents()
        self.empty_label.setVisible(not self._rows)

    def current_record(self) -> Optional[Any]:
        r = self.table.currentRow()
        if r < 0 or r >= len(self._rows):
            return None
        return self._rows[r]

    def open_editor(self, record: Any) -> None:
        raise NotImplementedError

    def _edit_current(self) -> None:
        rec = self.current_record()
        if rec is not None:
            self.open_editor(rec)

    def _delete_current(self) -> None:
        rec = self.current_record()
        if rec is None:
            return
        kind = self.store.kind.lower()
        if not self.confirm(self, f"Delete {kind}", f"Delete this {kind}? This cannot be undone."):
            return
        delete_record(self.store, rec.id, self.notifier)
        self.render()
