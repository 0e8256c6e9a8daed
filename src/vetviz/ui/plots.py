# src/vetviz/ui/plots.py
import numpy as np
import pyqtgraph as pg
from PySide6.QtWidgets import QVBoxLayout, QWidget

from vetengine.types import SelectedItem


class RangeChart(QWidget):
    """
    Each selected dose against its range, as a fraction of the range max:
    grey band = [min/max, 1], marker = dose/max (red when out of range).
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground("w")
        self.plot_widget.setLabel("bottom", "Dose / range max")
        self.plot_widget.showGrid(x=True, y=False, alpha=0.3)
        self.plot_widget.setMinimumHeight(160)
        layout.addWidget(self.plot_widget)

    def plot_items(self, items: list[SelectedItem]):
        self.plot_widget.clear()
        items = [it for it in items
                 if it.dose is not None and it.dose_range is not None and it.dose_range.max > 0]
        if not items:
            self.plot_widget.getAxis("left").setTicks([[]])
            return

        y = np.arange(len(items), dtype=float)
        maxes = np.array([it.dose_range.max for it in items], dtype=float)
        lows = np.array([it.dose_range.min for it in items], dtype=float) / maxes
        ratio = np.array([it.dose for it in items], dtype=float) / maxes

        band = pg.BarGraphItem(x0=lows, y=y, width=1.0 - lows, height=0.5,
                               brush=pg.mkBrush(200, 200, 200), pen=pg.mkPen(150, 150, 150))
        self.plot_widget.addItem(band)

        brushes = [pg.mkBrush("#dc2626") if it.out_of_range else pg.mkBrush("#2563eb") for it in items]
        self.plot_widget.addItem(pg.ScatterPlotItem(x=ratio, y=y, size=12, brush=brushes, pen=None))

        self.plot_widget.getAxis("left").setTicks([list(zip(y.tolist(), (it.name for it in items)))])
        self.plot_widget.setXRange(0.0, max(1.2, float(ratio.max()) * 1.1))
        self.plot_widget.setYRange(-0.75, len(items) - 0.25)

    def clear(self):
        self.plot_widget.clear()
