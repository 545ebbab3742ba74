# src/concviz/ui/controls.py
from dataclasses import dataclass
from datetime import datetime

from PySide6.QtCore import Signal, QDateTime
from PySide6.QtWidgets import QVBoxLayout, QPushButton, QComboBox, QFrame, QLabel, QDateTimeEdit

from concengine.windows import PRESETS, CUSTOM


@dataclass
class ProjectRequest:
    preset: str = "recent"
    start: datetime | None = None   # only used for "custom"
    end: datetime | None = None


def to_aware(qdt: QDateTime) -> datetime:
    """QDateTime (local) -> timezone-aware datetime."""
    return qdt.toPython().astimezone()


class ControlsPanel(QFrame):
    projectRequested = Signal(ProjectRequest)

    def __init__(self, default_window: str = "recent"):
        super().__init__()
        self.setFrameShape(QFrame.StyledPanel)
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Time window"))

        self.preset = QComboBox(); self.preset.addItems([*PRESETS, CUSTOM])
        self.preset.setCurrentText(default_window)
        layout.addWidget(self.preset)

        # Custom range, only visible for "custom"
        now = QDateTime.currentDateTime()
        self.start = QDateTimeEdit(now.addDays(-3)); self.start.setCalendarPopup(True)
        self.end = QDateTimeEdit(now); self.end.setCalendarPopup(True)
        self.lbl_start = QLabel("From")
        self.lbl_end = QLabel("To")
        layout.addWidget(self.lbl_start)
        layout.addWidget(self.start)
        layout.addWidget(self.lbl_end)
        layout.addWidget(self.end)

        self.apply = QPushButton("Apply"); layout.addWidget(self.apply)
        layout.addStretch(1)

        self.preset.currentIndexChanged.connect(self._update_custom_visibility)
        self.preset.currentIndexChanged.connect(self._emit_request)
        self.apply.clicked.connect(self._emit_request)
        self._update_custom_visibility()

    def _update_custom_visibility(self):
        custom = (self.preset.currentText() == CUSTOM)
        for w in (self.lbl_start, self.start, self.lbl_end, self.end, self.apply):
            w.setVisible(custom)

    def current_request(self) -> ProjectRequest:
        name = self.preset.currentText()
        if name == CUSTOM:
            return ProjectRequest(preset=name,
                                  start=to_aware(self.start.dateTime()),
                                  end=to_aware(self.end.dateTime()))
        return ProjectRequest(preset=name)

    def _emit_request(self):
        self.projectRequested.emit(self.current_request())
