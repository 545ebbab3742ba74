# src/concviz/ui/main_window.py
import logging
from datetime import datetime, timezone

from PySide6.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QStatusBar

from concengine.registry import Registry
from concengine.windows import resolve_preset
from concengine.projector import project_series
from concengine.metrics import cmax, tmax, auc_trapz, product_summary
from ..config import Settings
from .controls import ControlsPanel, ProjectRequest
from .plots import PlotWidget
from .registry_panel import RegistryPanel

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, registry: Registry, settings: Settings):
        super().__init__()
        self.setWindowTitle(settings.window_title)
        self.resize(1200, 720)
        self.registry = registry
        self._last_key = None

        central = QWidget(self); self.setCentralWidget(central)
        root = QHBoxLayout(central)

        self.controls = ControlsPanel(settings.default_window)
        self.registry_panel = RegistryPanel(registry)
        self.plot = PlotWidget()
        root.addWidget(self.controls, 0)
        root.addWidget(self.plot, 1)
        root.addWidget(self.registry_panel, 0)

        self.status = QStatusBar(); self.setStatusBar(self.status)

        # wire events: any change to the window or the registry re-projects
        self.controls.projectRequested.connect(self.on_project)
        self.registry_panel.changed.connect(self.refresh)
        self.registry_panel.failed.connect(lambda msg: self.status.showMessage(f"Error: {msg}", 8000))

        self.refresh()

    def refresh(self):
        self.on_project(self.controls.current_request())

    def on_project(self, req: ProjectRequest):
        try:
            window = resolve_preset(req.preset, datetime.now(timezone.utc), start=req.start, end=req.end)
        except ValueError as e:
            self.status.showMessage(f"Error: {e}", 8000)
            return

        products = tuple(self.registry.products())
        quantities = tuple(self.registry.quantities())

        # Same inputs give the same curve; don't redraw for nothing
        key = (products, quantities, window)
        if key == self._last_key:
            return
        self._last_key = key

        times, series = project_series(products, quantities, window)
        if not series:
            if not products:
                self.plot.show_empty("No data yet: add a product to get started.")
            else:
                self.plot.show_empty("No data yet: record a quantity to see the curve.")
            return

        styles = {}
        for p in products:
            n, total = product_summary(p, quantities)
            styles[p.id] = (f"{p.name} ({n} quantities, {total:g} mg total)", p.color)
        self.plot.plot_curves(times, series, styles)

        # quick peak read-out
        top_p = max(products, key=lambda p: cmax(series[p.id]))
        C = series[top_p.id]
        when = tmax(times, C).astimezone().strftime("%d %b %H:%M")
        self.status.showMessage(
            f"{len(times)} samples every {window.sample_interval_h:g} h | "
            f"peak {cmax(C):.2f} mg of {top_p.name} at {when} | AUC {auc_trapz(times, C):.1f} mg·h", 5000)
        logger.debug("plotted %d products over %.1f h", len(series), window.span_h)
