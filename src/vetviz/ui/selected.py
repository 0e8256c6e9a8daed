# src/vetviz/ui/selected.py
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QTextDocument
from PySide6.QtPrintSupport import QPrintDialog, QPrinter
from PySide6.QtWidgets import (QAbstractItemView, QHBoxLayout, QHeaderView, QLabel, QPushButton,
                               QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget)

from vetengine.report import HEADERS, dose_cell_text, render_summary_html
from vetengine.session import Session

from .plots import RangeChart

NOTES_COLUMN = HEADERS.index("Notes")


class SelectedPanel(QWidget):
    """
    The worksheet tab: selected drugs with editable notes, a range chart,
    "Clear all" and "Print sheet".
    """
    selectionChanged = Signal()

    def __init__(self, session: Session):
        super().__init__()
        self.session = session
        layout = QVBoxLayout(self)

        top = QHBoxLayout()
        self.heading = QLabel(); self.heading.setStyleSheet("font-size: 16px; font-weight: 600;")
        top.addWidget(self.heading, 1)
        self.clear_btn = QPushButton("Clear all"); top.addWidget(self.clear_btn)
        self.print_btn = QPushButton("Print sheet"); top.addWidget(self.print_btn)
        layout.addLayout(top)

        self.empty = QLabel("No meds selected yet. Use the checkboxes on any tab to add items here.")
        self.empty.setStyleSheet("color: gray;")
        layout.addWidget(self.empty)

        self.table = QTableWidget(0, len(HEADERS))
        self.table.setHorizontalHeaderLabels(list(HEADERS))
        self.table.horizontalHeader().setSectionResizeMode(NOTES_COLUMN, QHeaderView.Stretch)
        self.table.setEditTriggers(QAbstractItemView.AllEditTriggers)
        layout.addWidget(self.table, 1)

        self.chart = RangeChart()
        layout.addWidget(self.chart)

        self.clear_btn.clicked.connect(self._on_clear)
        self.print_btn.clicked.connect(self.print_sheet)
        self.table.itemChanged.connect(self._on_item_changed)

    def refresh(self):
        items = self.session.selected_items()
        self.heading.setText(f"Selected Medications ({len(items)})")
        self.empty.setVisible(not items)
        self.table.setVisible(bool(items))
        self.print_btn.setEnabled(bool(items))

        self.table.blockSignals(True)
        self.table.setRowCount(len(items))
        for r, it in enumerate(items):
            name = it.name + (f" ({it.presentation.label})" if it.presentation else "")
            values = (name, it.category, it.route or "—", dose_cell_text(it) or "—", it.result_text, it.notes or "")
            for c, text in enumerate(values):
                cell = QTableWidgetItem(text)
                if c != NOTES_COLUMN:
                    cell.setFlags(cell.flags() & ~Qt.ItemIsEditable)
                else:
                    cell.setToolTip("Directions / timing / cautions...")
                cell.setData(Qt.UserRole, it.id)
                self.table.setItem(r, c, cell)
        self.table.blockSignals(False)
        self.table.resizeColumnsToContents()

        self.chart.plot_items(items)

    def print_sheet(self):
        html = render_summary_html(self.session.selected_items(), self.session.summary())
        printer = QPrinter(QPrinter.HighResolution)
        dialog = QPrintDialog(printer, self)
        if dialog.exec() != QPrintDialog.Accepted:
            return
        doc = QTextDocument()
        doc.setHtml(html)
        doc.print_(printer)

    def _on_clear(self):
        self.session.clear_selection()
        self.selectionChanged.emit()

    def _on_item_changed(self, item: QTableWidgetItem):
        if item.column() != NOTES_COLUMN:
            return
        self.session.set_notes(item.data(Qt.UserRole), item.text())
