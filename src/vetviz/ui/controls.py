# src/vetviz/ui/controls.py
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (QCheckBox, QComboBox, QFrame, QGridLayout, QLabel, QLineEdit,
                               QPushButton)

from vetengine.session import Session
from vetengine.types import SPECIES, SPECIES_LABELS


class PatientPanel(QFrame):
    """
    Species, weight (+ unit), cross-tab search and the species-only switch.
    Writes straight into the session and announces what kind of change it was.
    """
    patientChanged = Signal()   # species / unit / weight -> doses change
    filterChanged = Signal()    # query / species-only -> visible rows change
    resetRequested = Signal()

    def __init__(self, session: Session):
        super().__init__()
        self.session = session
        self.setFrameShape(QFrame.StyledPanel)
        grid = QGridLayout(self)

        # --- Species ---
        grid.addWidget(QLabel("Species"), 0, 0)
        self.species = QComboBox()
        for sp in SPECIES:
            self.species.addItem(SPECIES_LABELS[sp], sp)
        grid.addWidget(self.species, 1, 0)

        # --- Weight ---
        grid.addWidget(QLabel("Weight"), 0, 1)
        self.weight = QLineEdit(); self.weight.setInputMethodHints(Qt.ImhFormattedNumbersOnly)
        grid.addWidget(self.weight, 1, 1)
        self.unit = QComboBox(); self.unit.addItems(["kg", "lb"])
        grid.addWidget(self.unit, 1, 2)

        # --- Search ---
        grid.addWidget(QLabel("Search name or category (all tabs)"), 0, 3)
        self.query = QLineEdit(); self.query.setPlaceholderText("e.g., Cerenia, opioid, epinephrine...")
        self.query.setClearButtonEnabled(True)
        grid.addWidget(self.query, 1, 3)

        self.only_species = QCheckBox("This species only")
        grid.addWidget(self.only_species, 1, 4)

        self.reset = QPushButton("Reset")
        grid.addWidget(self.reset, 1, 5)
        grid.setColumnStretch(3, 1)

        self.load_from_session()

        self.species.currentIndexChanged.connect(self._on_species)
        self.unit.currentTextChanged.connect(self._on_unit)
        self.weight.textEdited.connect(self._on_weight_edited)
        self.weight.editingFinished.connect(self._on_weight_committed)
        self.query.textChanged.connect(self._on_query)
        self.only_species.toggled.connect(self._on_only_species)
        self.reset.clicked.connect(self.resetRequested.emit)

    def load_from_session(self):
        """Push session values into the widgets without echoing signals back."""
        p = self.session.patient
        widgets = (self.species, self.unit, self.weight, self.query, self.only_species)
        for w in widgets:
            w.blockSignals(True)
        self.species.setCurrentIndex(SPECIES.index(p.species))
        self.unit.setCurrentText(p.unit)
        self.weight.setText(p.weight_text)
        self._update_weight_placeholder()
        self.query.setText(self.session.query)
        self.only_species.setChecked(self.session.only_my_species)
        for w in widgets:
            w.blockSignals(False)

    def _update_weight_placeholder(self):
        self.weight.setPlaceholderText("e.g., 5.2" if self.session.patient.unit == "kg" else "e.g., 12")

    def _on_species(self, index: int):
        self.session.set_species(self.species.itemData(index))
        self.patientChanged.emit()

    def _on_unit(self, unit: str):
        self.session.set_unit(unit)
        self._update_weight_placeholder()
        self.patientChanged.emit()

    def _on_weight_edited(self, text: str):
        cleaned = self.session.edit_weight(text)
        if cleaned != text:
            pos = min(self.weight.cursorPosition(), len(cleaned))
            self.weight.setText(cleaned)
            self.weight.setCursorPosition(pos)
        self.patientChanged.emit()

    def _on_weight_committed(self):
        committed = self.session.commit_weight()
        if committed != self.weight.text():
            self.weight.setText(committed)
        self.patientChanged.emit()

    def _on_query(self, text: str):
        self.session.set_query(text)
        self.filterChanged.emit()

    def _on_only_species(self, checked: bool):
        self.session.set_only_my_species(checked)
        self.filterChanged.emit()
