# src/vetviz/ui/main_window.py
import logging

from PySide6.QtWidgets import QLabel, QMainWindow, QStatusBar, QTabWidget, QVBoxLayout, QWidget

from vetengine.catalog import TABS
from vetengine.session import Session

from .controls import PatientPanel
from .formulary import FormularyView
from .selected import SelectedPanel

logger = logging.getLogger(__name__)

_TAB_LABELS = {"solids": "Solids", "inject": "Injectables", "anes": "Anesthesia"}

DISCLAIMER = ("<b>Clinical judgment required</b><br>These tools perform weight-based math and provide "
              "example ranges. Always verify doses and indications against your clinic protocols.")


class MainWindow(QMainWindow):
    def __init__(self, session: Session):
        super().__init__()
        self.session = session
        self.setWindowTitle("Vet Medication Suite")
        self.resize(1200, 800)

        central = QWidget(self); self.setCentralWidget(central)
        root = QVBoxLayout(central)

        self.patient = PatientPanel(session)
        root.addWidget(self.patient)

        self.tabs = QTabWidget()
        self.formularies: dict[str, FormularyView] = {}
        for key, tab in TABS.items():
            view = FormularyView(session, key, tab.title)
            view.selectionChanged.connect(self.on_selection_changed)
            self.formularies[key] = view
            self.tabs.addTab(view, _TAB_LABELS.get(key, tab.title))
        self.selected = SelectedPanel(session)
        self.selected.selectionChanged.connect(self.refresh)
        self.tabs.addTab(self.selected, "Selected")
        root.addWidget(self.tabs, 1)

        note = QLabel(DISCLAIMER); note.setWordWrap(True)
        root.addWidget(note)

        self.status = QStatusBar(); self.setStatusBar(self.status)

        # wire events
        self.patient.patientChanged.connect(self.refresh)
        self.patient.filterChanged.connect(self.refresh)
        self.patient.resetRequested.connect(self.on_reset)
        self.tabs.currentChanged.connect(lambda _i: self.refresh())

        self.refresh()

    def refresh(self):
        """Recompute the visible tab; every row sees the same committed patient."""
        try:
            current = self.tabs.currentWidget()
            if isinstance(current, FormularyView):
                current.refresh()
            self.selected.refresh()
            self.status.showMessage(
                f"{self.session.weight_kg:.2f} kg | {len(self.session.selection)} selected", 5000)
        except Exception as e:
            logger.exception("refresh failed")
            self.status.showMessage(f"Error: {e}", 8000)

    def on_selection_changed(self):
        self.selected.refresh()
        self.status.showMessage(f"{len(self.session.selection)} selected", 3000)

    def on_reset(self):
        self.session.reset()
        self.patient.load_from_session()
        self.refresh()
