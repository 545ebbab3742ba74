# src/concviz/ui/registry_panel.py
from PySide6.QtCore import Signal, Qt, QDateTime
from PySide6.QtWidgets import (
    QFrame, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QDoubleSpinBox, QComboBox,
    QDateTimeEdit, QPushButton, QListWidget, QListWidgetItem,
)

from concengine.registry import Registry
from .controls import to_aware


class RegistryPanel(QFrame):
    """Forms to add products and quantities, and lists to delete them."""
    changed = Signal()
    failed = Signal(str)

    def __init__(self, registry: Registry):
        super().__init__()
        self.registry = registry
        self.setFrameShape(QFrame.StyledPanel)
        layout = QVBoxLayout(self)

        # --- Products ---
        layout.addWidget(QLabel("Products"))
        self.name = QLineEdit(); self.name.setPlaceholderText("Name")
        layout.addWidget(self.name)
        self.half_life = QDoubleSpinBox(); self.half_life.setDecimals(2)
        self.half_life.setRange(0.0, 1e5); self.half_life.setValue(24.0)
        self.half_life.setSuffix(" h")
        layout.addWidget(QLabel("Half-life (h)"))
        layout.addWidget(self.half_life)
        add_product = QPushButton("Add product"); layout.addWidget(add_product)
        add_product.clicked.connect(self._add_product)

        self.product_list = QListWidget(); layout.addWidget(self.product_list)
        del_product = QPushButton("Delete product"); layout.addWidget(del_product)
        del_product.clicked.connect(self._remove_product)

        # --- Quantities ---
        layout.addWidget(QLabel("Record quantity"))
        self.product_pick = QComboBox(); layout.addWidget(self.product_pick)
        row = QHBoxLayout()
        self.amount = QDoubleSpinBox(); self.amount.setDecimals(2)
        self.amount.setRange(0.0, 1e6); self.amount.setValue(10.0)
        self.amount.setSuffix(" mg")
        self.taken_at = QDateTimeEdit(QDateTime.currentDateTime()); self.taken_at.setCalendarPopup(True)
        row.addWidget(self.amount)
        row.addWidget(self.taken_at)
        layout.addLayout(row)
        add_quantity = QPushButton("Record"); layout.addWidget(add_quantity)
        add_quantity.clicked.connect(self._add_quantity)

        self.quantity_list = QListWidget(); layout.addWidget(self.quantity_list)
        del_quantity = QPushButton("Delete quantity"); layout.addWidget(del_quantity)
        del_quantity.clicked.connect(self._remove_quantity)

        self.refresh()

    def refresh(self):
        products = self.registry.products()
        names = {p.id: p.name for p in products}

        self.product_list.clear()
        self.product_pick.clear()
        for p in products:
            item = QListWidgetItem(f"{p.name}  (t½ {p.half_life_h:g} h)")
            item.setData(Qt.UserRole, p.id)
            self.product_list.addItem(item)
            self.product_pick.addItem(p.name, p.id)

        self.quantity_list.clear()
        for q in self.registry.quantities():
            when = q.timestamp.astimezone().strftime("%d %b %H:%M")
            item = QListWidgetItem(f"{when}  {q.amount_mg:g} mg  {names.get(q.product_id, '?')}")
            item.setData(Qt.UserRole, q.id)
            self.quantity_list.addItem(item)

    def _run(self, action):
        # Validation lives in the registry; report its complaints instead of crashing the UI
        try:
            action()
        except (ValueError, KeyError) as e:
            self.failed.emit(str(e))
            return
        self.refresh()
        self.changed.emit()

    def _add_product(self):
        def action():
            self.registry.add_product(self.name.text(), float(self.half_life.value()))
            self.name.clear()
        self._run(action)

    def _remove_product(self):
        item = self.product_list.currentItem()
        if item is None:
            return
        self._run(lambda: self.registry.remove_product(item.data(Qt.UserRole)))

    def _add_quantity(self):
        pid = self.product_pick.currentData()
        if pid is None:
            self.failed.emit("Add a product first.")
            return
        self._run(lambda: self.registry.add_quantity(
            pid, float(self.amount.value()), to_aware(self.taken_at.dateTime())))

    def _remove_quantity(self):
        item = self.quantity_list.currentItem()
        if item is None:
            return
        self._run(lambda: self.registry.remove_quantity(item.data(Qt.UserRole)))
