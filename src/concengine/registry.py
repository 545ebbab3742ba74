# src/concengine/registry.py
from __future__ import annotations

import logging
import random
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from .types import Product, QuantityEvent

logger = logging.getLogger(__name__)

PRODUCT_COLORS = (
    "#4f46e5", "#059669", "#dc2626", "#d97706",
    "#7c3aed", "#0891b2", "#be185d", "#65a30d",
)


def pick_color(used: set[str] | list[str]) -> str:
    """First palette colour nobody uses yet; a random one once they're all taken."""
    for c in PRODUCT_COLORS:
        if c not in used:
            return c
    return random.choice(PRODUCT_COLORS)


def _new_id() -> str:
    return uuid.uuid4().hex


class Registry:
    """
    In-memory store of products and the quantities taken of them.

    This is the only place values get validated: a Product that comes out of
    here has half_life_h > 0 and a QuantityEvent has amount_mg > 0, which is
    what the projector assumes.
    """

    def __init__(self):
        self._products: dict[str, Product] = {}   # insertion order = creation order
        self._quantities: dict[str, QuantityEvent] = {}

    # --------------------------
    # Products
    # --------------------------
    def add_product(self, name: str, half_life_h: float, color: str | None = None) -> Product:
        name = _validate_name(name)
        _validate_positive("half_life_h", half_life_h)
        if color is None:
            color = pick_color({p.color for p in self._products.values()})

        product = Product(id=_new_id(), name=name, half_life_h=float(half_life_h), color=color)
        self._products[product.id] = product
        logger.info("added product %s (t½=%.2f h)", product.name, product.half_life_h)
        return product

    def update_product(self, product_id: str, *, name: str | None = None,
                       half_life_h: float | None = None, color: str | None = None) -> Product:
        current = self.get_product(product_id)
        changes = {}
        if name is not None:
            changes["name"] = _validate_name(name)
        if half_life_h is not None:
            _validate_positive("half_life_h", half_life_h)
            changes["half_life_h"] = float(half_life_h)
        if color is not None:
            changes["color"] = color

        updated = replace(current, **changes)
        self._products[product_id] = updated
        logger.info("updated product %s", updated.name)
        return updated

    def remove_product(self, product_id: str) -> None:
        """Delete a product and every quantity recorded for it."""
        product = self._products.pop(product_id)
        orphans = [q.id for q in self._quantities.values() if q.product_id == product_id]
        for qid in orphans:
            del self._quantities[qid]
        logger.info("removed product %s and %d quantities", product.name, len(orphans))

    def get_product(self, product_id: str) -> Product:
        try:
            return self._products[product_id]
        except KeyError:
            raise KeyError(f"Unknown product_id '{product_id}'.") from None

    def products(self) -> list[Product]:
        return list(self._products.values())

    # --------------------------
    # Quantities
    # --------------------------
    def add_quantity(self, product_id: str, amount_mg: float,
                     timestamp: datetime | None = None) -> QuantityEvent:
        """
        Record an intake. timestamp defaults to now (UTC).
        """
        product = self.get_product(product_id)
        _validate_positive("amount_mg", amount_mg)
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)

        q = QuantityEvent(id=_new_id(), product_id=product_id,
                          amount_mg=float(amount_mg), timestamp=timestamp)
        self._quantities[q.id] = q
        logger.info("recorded %.2f mg of %s at %s", q.amount_mg, product.name, q.timestamp.isoformat())
        return q

    def remove_quantity(self, quantity_id: str) -> None:
        try:
            del self._quantities[quantity_id]
        except KeyError:
            raise KeyError(f"Unknown quantity_id '{quantity_id}'.") from None
        logger.info("removed quantity %s", quantity_id)

    def quantities(self) -> list[QuantityEvent]:
        """All recorded quantities, newest first."""
        return sorted(self._quantities.values(), key=lambda q: q.timestamp, reverse=True)


def demo_registry(now: datetime) -> Registry:
    """
    A registry pre-filled with two products and one intake each,
    handy for a first look at the dashboard.
    """
    reg = Registry()
    esc = reg.add_product("Escitalopram", 30.0)
    bup = reg.add_product("Bupiron", 24.0)
    reg.add_quantity(esc.id, 10.0, now - timedelta(hours=10))
    reg.add_quantity(bup.id, 20.0, now - timedelta(hours=6))
    return reg


# --------------------------
# Small input validators
# --------------------------
def _validate_positive(name: str, x: float) -> None:
    if not (x > 0):
        raise ValueError(f"{name} must be > 0 (got {x}).")

def _validate_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("name must not be empty.")
    return name
