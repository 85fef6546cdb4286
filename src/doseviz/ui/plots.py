# src/doseviz/ui/plots.py
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout
import pyqtgraph as pg

from doseviz.series import TimelineSeries


class PlotWidget(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)

        # Main plot area
        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setLabel("left", "Intensity")
        self.plot_widget.setLabel("bottom", "Time since ingestion", units="h")
        self.plot_widget.setYRange(0.0, 1.05)
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.addLegend()
        layout.addWidget(self.plot_widget)

        self.items = {}  # store references for updates

    def plot_timeline(self, label: str, series: TimelineSeries):
        self.plot_widget.clear()
        self.items = {}

        # Phase range outlines first so the curve draws over them
        for key, (x, y), color in (("comeup", series.comeup, (80, 160, 255)),
                                   ("offset", series.offset, (255, 140, 60))):
            self.items[key] = self.plot_widget.plot(
                x, y, pen=pg.mkPen(color=color, width=1), name=f"{key} range",
            )

        x, y = series.estimate
        self.items["estimate"] = self.plot_widget.plot(
            x, y, pen=pg.mkPen(width=1, style=Qt.PenStyle.DashLine), name="estimate",
        )

        t, E = series.curve
        self.items["curve"] = self.plot_widget.plot(t, E, pen=pg.mkPen(width=2), name=label)
