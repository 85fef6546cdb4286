# src/doseviz/ui/controls.py
from dataclasses import dataclass
from typing import Sequence

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QVBoxLayout, QPushButton, QDoubleSpinBox, QComboBox, QFrame, QLabel

from doseengine import config
from doseengine.types import RouteKind
from doseengine.units import MassUnit

# Units a user can enter a dose in. ml has no mass conversion, so it is left out.
DOSE_UNITS = (MassUnit.MG, MassUnit.UG, MassUnit.G)


@dataclass
class TimelineRequest:
    amount: float
    unit: MassUnit
    route: RouteKind
    dt_h: float = config.SAMPLE_DT_H


class ControlsPanel(QFrame):
    timelineRequested = Signal(TimelineRequest)

    def __init__(self, routes: Sequence[RouteKind] = ()):
        super().__init__()
        self.setFrameShape(QFrame.StyledPanel)
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Controls"))

        # --- Dose ---
        layout.addWidget(QLabel("Dose"))
        self.amount = QDoubleSpinBox(); self.amount.setDecimals(3)
        self.amount.setRange(0.0, 1e6); self.amount.setValue(100.0)
        layout.addWidget(QLabel("Amount"))
        layout.addWidget(self.amount)

        self.unit = QComboBox(); self.unit.addItems([str(u) for u in DOSE_UNITS])
        layout.addWidget(QLabel("Unit"))
        layout.addWidget(self.unit)

        self.route = QComboBox()
        self.set_routes(routes)
        layout.addWidget(QLabel("Route"))
        layout.addWidget(self.route)

        # Sampling parameter: dt (hours)
        self.dt = QDoubleSpinBox(); self.dt.setDecimals(2)
        self.dt.setRange(0.01, 1.0); self.dt.setValue(config.SAMPLE_DT_H)
        self.dt.setSuffix(" h")
        layout.addWidget(QLabel("Sampling dt (h)"))
        layout.addWidget(self.dt)

        go = QPushButton("Plot"); layout.addWidget(go)
        go.clicked.connect(self._emit_request)

    def set_routes(self, routes: Sequence[RouteKind]):
        """Only offer the routes the current substance documents."""
        self.route.clear()
        self.route.addItems([r.value for r in routes if r is not RouteKind.INVALID])

    def _emit_request(self):
        if self.route.count() == 0:
            return
        req = TimelineRequest(
            amount=float(self.amount.value()),
            unit=MassUnit.parse(self.unit.currentText()),
            route=RouteKind.parse(self.route.currentText()),
            dt_h=float(self.dt.value()),
        )
        self.timelineRequested.emit(req)
