# src/doseviz/ui/main_window.py
from datetime import datetime, timezone

import structlog
from PySide6.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QStatusBar

from .controls import ControlsPanel, TimelineRequest
from .plots import PlotWidget
from doseengine.errors import DoseEngineError
from doseengine.helpers import routes_by_kind
from doseengine.types import Substance
from doseviz.series import build_timeline

logger = structlog.get_logger()


class MainWindow(QMainWindow):
    def __init__(self, substance: Substance):
        super().__init__()
        self.substance = substance
        self.setWindowTitle(f"Effect timeline: {substance.name}")
        self.resize(1100, 680)

        central = QWidget(self); self.setCentralWidget(central)
        root = QHBoxLayout(central)

        self.controls = ControlsPanel(routes=list(routes_by_kind(substance)))
        self.plot = PlotWidget()
        root.addWidget(self.controls, 0)
        root.addWidget(self.plot, 1)

        self.status = QStatusBar(); self.setStatusBar(self.status)

        # wire events
        self.controls.timelineRequested.connect(self.on_timeline)

        # first run using current control values
        self.controls._emit_request()

    def on_timeline(self, req: TimelineRequest):
        ingestion = self.substance.new_ingestion(req.amount, req.unit, datetime.now(timezone.utc), req.route)
        profile = ingestion.route_profile()
        if profile is None:
            self.status.showMessage(f"{self.substance.name} has no {req.route.value} data", 8000)
            return
        try:
            tier = ingestion.dosage_tier()
            series = build_timeline(profile, ingestion, dt_h=req.dt_h)
        except DoseEngineError as e:
            logger.warning("Timeline failed", substance=self.substance.name, error=e.message)
            self.status.showMessage(f"Error: {e.message}", 8000)
            return

        self.plot.plot_timeline(f"{req.amount:g} {req.unit} {req.route.value}", series)
        self.status.showMessage(f"Dosage: {tier.name.replace('_', ' ').lower()}", 5000)
