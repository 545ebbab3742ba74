from datetime import datetime, timedelta, timezone

import pytest

from concengine.registry import Registry, PRODUCT_COLORS, pick_color, demo_registry
from concengine.windows import make_window
from concengine.projector import project

NOW = datetime(2025, 9, 3, 9, 30, tzinfo=timezone.utc)


def test_add_product_trims_name_and_assigns_first_free_colour():
    reg = Registry()
    a = reg.add_product("  Escitalopram ", 30)
    b = reg.add_product("Bupiron", 24.0)

    assert a.name == "Escitalopram"
    assert a.half_life_h == 30.0 and isinstance(a.half_life_h, float)
    assert (a.color, b.color) == PRODUCT_COLORS[:2]
    assert reg.products() == [a, b]
    assert a.id != b.id


def test_explicit_colour_is_kept():
    reg = Registry()
    assert reg.add_product("Caffeine", 5.0, color="hsl(200 80% 50%)").color == "hsl(200 80% 50%)"


def test_palette_falls_back_to_random_when_exhausted():
    assert pick_color(set(PRODUCT_COLORS[:3])) == PRODUCT_COLORS[3]
    assert pick_color(set(PRODUCT_COLORS)) in PRODUCT_COLORS


@pytest.mark.parametrize("half_life", [0, -1.0, float("nan")])
def test_non_positive_half_life_rejected(half_life):
    with pytest.raises(ValueError, match="half_life_h must be > 0"):
        Registry().add_product("Bad", half_life)


def test_empty_name_rejected():
    with pytest.raises(ValueError):
        Registry().add_product("   ", 10.0)


def test_update_product_validates_and_replaces():
    reg = Registry()
    p = reg.add_product("Bupiron", 24.0)

    updated = reg.update_product(p.id, half_life_h=12.0)
    assert updated.half_life_h == 12.0 and updated.name == "Bupiron" and updated.id == p.id
    assert reg.products() == [updated]

    with pytest.raises(ValueError):
        reg.update_product(p.id, half_life_h=0.0)
    with pytest.raises(KeyError):
        reg.update_product("nope", name="x")


def test_add_quantity_validation():
    reg = Registry()
    p = reg.add_product("Bupiron", 24.0)

    with pytest.raises(ValueError, match="amount_mg must be > 0"):
        reg.add_quantity(p.id, 0.0, NOW)
    with pytest.raises(KeyError):
        reg.add_quantity("unknown", 10.0, NOW)
    assert reg.quantities() == []


def test_add_quantity_defaults_to_now():
    reg = Registry()
    p = reg.add_product("Bupiron", 24.0)
    before = datetime.now(timezone.utc)
    q = reg.add_quantity(p.id, 20)
    assert before <= q.timestamp <= datetime.now(timezone.utc)
    assert q.amount_mg == 20.0


def test_quantities_newest_first_and_removable():
    reg = Registry()
    p = reg.add_product("Bupiron", 24.0)
    old = reg.add_quantity(p.id, 10.0, NOW - timedelta(hours=5))
    new = reg.add_quantity(p.id, 20.0, NOW)

    assert reg.quantities() == [new, old]
    reg.remove_quantity(new.id)
    assert reg.quantities() == [old]
    with pytest.raises(KeyError):
        reg.remove_quantity(new.id)


def test_removing_product_removes_its_quantities():
    reg = Registry()
    a = reg.add_product("Escitalopram", 30.0)
    b = reg.add_product("Bupiron", 24.0)
    reg.add_quantity(a.id, 10.0, NOW)
    keep = reg.add_quantity(b.id, 20.0, NOW)

    reg.remove_product(a.id)

    assert reg.products() == [b]
    assert reg.quantities() == [keep]


def test_demo_registry_feeds_the_projector():
    reg = demo_registry(NOW)
    names = [p.name for p in reg.products()]
    assert names == ["Escitalopram", "Bupiron"]
    assert sorted(q.amount_mg for q in reg.quantities()) == [10.0, 20.0]

    samples = project(reg.products(), reg.quantities(), make_window(NOW - timedelta(hours=24), NOW))
    last = samples[-1].values
    esc, bup = reg.products()
    assert last[esc.id] == pytest.approx(10.0 * 0.5 ** (10 / 30))
    assert last[bup.id] == pytest.approx(20.0 * 0.5 ** (6 / 24))
