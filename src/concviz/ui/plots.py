# src/concviz/ui/plots.py
from PySide6.QtWidgets import QWidget, QVBoxLayout
import pyqtgraph as pg


class PlotWidget(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)

        # Main plot area, x axis in epoch seconds shown as dates
        self.plot_widget = pg.PlotWidget(axisItems={"bottom": pg.DateAxisItem(orientation="bottom")})
        self.plot_widget.setLabel("left", "Concentration", units="mg")
        self.plot_widget.setLabel("bottom", "Time")
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.addLegend()
        layout.addWidget(self.plot_widget)

        self.curves = {}  # store references for updates

    def plot_curves(self, times, series: dict, styles: dict[str, tuple[str, str]]):
        """
        times  : sample instants (datetimes)
        series : product id -> concentration array
        styles : product id -> (legend label, colour)
        """
        self.clear()
        x = [t.timestamp() for t in times]
        for pid, C in series.items():
            label, color = styles[pid]
            curve = self.plot_widget.plot(
                x, C,
                pen=pg.mkPen(color=color, width=2),
                symbol="o", symbolSize=5, symbolBrush=color, symbolPen=None,
                name=label
            )
            self.curves[pid] = curve

    def show_empty(self, message: str):
        self.clear()
        text = pg.TextItem(message, anchor=(0.5, 0.5))
        self.plot_widget.addItem(text)
        text.setPos(0.5, 0.5)
        self.plot_widget.setRange(xRange=(0, 1), yRange=(0, 1))

    def clear(self):
        self.plot_widget.clear()
        self.curves = {}
