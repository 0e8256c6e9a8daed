# src/vetviz/ui/formulary.py
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (QCheckBox, QComboBox, QFrame, QGridLayout, QLabel, QLineEdit,
                               QScrollArea, QVBoxLayout, QWidget)

from vetengine.ranges import format_range
from vetengine.rows import RowResult
from vetengine.session import Session
from vetengine.types import Drug

_OUT_OF_RANGE_STYLE = "color: #dc2626;"
_OUT_OF_RANGE_FIELD = "border: 1px solid #ef4444;"


class DrugRow(QFrame):
    """
    One formulary line: select box, dose field, presentation, route, result.
    Edits go to the session; the row only displays what the session computed.
    """
    edited = Signal(str)      # drug id whose dose/presentation changed
    toggled = Signal(str)     # drug id checked/unchecked

    def __init__(self, session: Session, drug: Drug):
        super().__init__()
        self.session = session
        self.drug = drug
        self.setFrameShape(QFrame.StyledPanel)
        grid = QGridLayout(self)

        self.select = QCheckBox(); self.select.setAccessibleName(f"Select {drug.name}")
        grid.addWidget(self.select, 0, 0, 2, 1)

        name = QLabel(f"<b>{drug.name}</b>"); category = QLabel(drug.category)
        category.setStyleSheet("color: gray; font-size: 11px;")
        grid.addWidget(name, 0, 1)
        grid.addWidget(category, 1, 1)

        grid.addWidget(QLabel(f"Dose ({drug.dose_label})"), 0, 2)
        self.dose = QLineEdit(); self.dose.setInputMethodHints(Qt.ImhFormattedNumbersOnly)
        grid.addWidget(self.dose, 1, 2)
        self.range_hint = QLabel(); self.range_hint.setStyleSheet("color: gray; font-size: 11px;")
        grid.addWidget(self.range_hint, 1, 3)

        grid.addWidget(QLabel("Presentation"), 0, 4)
        self.presentation = QComboBox()
        if drug.has_presentations:
            for p in drug.presentations:
                self.presentation.addItem(p.label)
            grid.addWidget(self.presentation, 1, 4)
        else:
            grid.addWidget(QLabel("No preset presentations"), 1, 4)

        grid.addWidget(QLabel("Route"), 0, 5)
        grid.addWidget(QLabel(drug.route or "—"), 1, 5)

        grid.addWidget(QLabel("Result"), 0, 6, Qt.AlignRight)
        self.result = QLabel("—"); self.result.setAlignment(Qt.AlignRight)
        grid.addWidget(self.result, 1, 6)
        grid.setColumnStretch(1, 1)

        if drug.notes:
            note = QLabel(f"Note: {drug.notes}"); note.setWordWrap(True)
            note.setStyleSheet("color: gray; font-size: 11px;")
            grid.addWidget(note, 2, 1, 1, 6)

        self.select.clicked.connect(self._on_toggle)
        self.dose.textEdited.connect(self._on_dose)
        self.presentation.currentIndexChanged.connect(self._on_presentation)

    def show_result(self, result: RowResult):
        state = self.session.row_state(self.drug.id)
        for w in (self.select, self.dose, self.presentation):
            w.blockSignals(True)
        self.select.setChecked(self.session.is_selected(self.drug.id))
        if self.dose.text() != state.dose_text:
            self.dose.setText(state.dose_text)
        if self.drug.has_presentations:
            self.presentation.setCurrentIndex(state.presentation_index)
        for w in (self.select, self.dose, self.presentation):
            w.blockSignals(False)

        self.range_hint.setText(format_range(result.dose_range, self.drug.dose_label))
        self.result.setText(f"<b>{result.result_text}</b>")
        self.result.setStyleSheet(_OUT_OF_RANGE_STYLE if result.out_of_range else "")
        self.dose.setStyleSheet(_OUT_OF_RANGE_FIELD if result.out_of_range else "")

    def _on_toggle(self):
        self.session.toggle(self.drug.id)
        self.toggled.emit(self.drug.id)

    def _on_dose(self, text: str):
        self.show_result(self.session.edit_dose(self.drug.id, text))
        self.edited.emit(self.drug.id)

    def _on_presentation(self, index: int):
        self.show_result(self.session.select_presentation(self.drug.id, index))
        self.edited.emit(self.drug.id)


class FormularyView(QWidget):
    """A formulary tab: the filtered list of DrugRows for one catalog group."""
    selectionChanged = Signal()

    def __init__(self, session: Session, tab_key: str, title: str):
        super().__init__()
        self.session = session
        self.tab_key = tab_key
        self.title = title
        self.rows: dict[str, DrugRow] = {}

        layout = QVBoxLayout(self)
        self.heading = QLabel(title); self.heading.setStyleSheet("font-size: 16px; font-weight: 600;")
        layout.addWidget(self.heading)

        scroll = QScrollArea(); scroll.setWidgetResizable(True)
        self.body = QWidget(); self.body_layout = QVBoxLayout(self.body)
        self.body_layout.addStretch(1)
        scroll.setWidget(self.body)
        layout.addWidget(scroll, 1)

        self.empty = QLabel("No matches."); self.empty.setStyleSheet("color: gray;")
        layout.addWidget(self.empty)

    def refresh(self):
        drugs = self.session.visible_drugs(self.tab_key)
        if [d.id for d in drugs] != list(self.rows):
            self._rebuild(drugs)
        results = self.session.recompute(drugs)
        for drug_id, row in self.rows.items():
            row.show_result(results[drug_id])

        q = self.session.query.strip()
        self.heading.setText(f"Search results ({len(drugs)})" if q else self.title)
        self.empty.setVisible(not drugs)

    def _rebuild(self, drugs: list[Drug]):
        for row in self.rows.values():
            row.setParent(None)
            row.deleteLater()
        self.rows = {}
        for d in drugs:
            row = DrugRow(self.session, d)
            row.toggled.connect(lambda _id: self.selectionChanged.emit())
            row.edited.connect(lambda _id: self.selectionChanged.emit())
            self.body_layout.insertWidget(self.body_layout.count() - 1, row)
            self.rows[d.id] = row
