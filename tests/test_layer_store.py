import pytest

from asphalt_core.units import SI_UNITS
from asphalt_viewer.model.layer_store import LayerStore
from asphalt_viewer.model.validation import ValidationError


def test_add_converts_form_units_to_si():
    store = LayerStore()

    layer = store.add("Asphalt surface course", "AC 11 D S", "2.3", "4")

    assert layer.density == pytest.approx(2300.0)
    assert layer.thickness == pytest.approx(0.04)
    assert layer.installed_weight == pytest.approx(92.0)


def test_add_with_si_units():
    store = LayerStore()

    layer = store.add("Base", "STS 0/32", 2200, 0.2, units=SI_UNITS)

    assert layer.installed_weight == pytest.approx(440.0)


@pytest.mark.parametrize(
    "name, recipe, density, thickness",
    [
        ("", "AC 11", 2.3, 4),
        ("Surface", "  ", 2.3, 4),
        ("Surface", "AC 11", "", 4),
        ("Surface", "AC 11", 2.3, "x"),
        ("Surface", "AC 11", 0, 4),
        ("Surface", "AC 11", 2.3, -1),
    ],
)
def test_add_rejects_incomplete_or_invalid_layers(name, recipe, density, thickness):
    store = LayerStore()

    with pytest.raises(ValidationError):
        store.add(name, recipe, density, thickness)

    assert len(store) == 0
    assert store.add("Surface", "AC 11", 2.3, 4).id == 1


def test_layers_keep_insertion_order():
    store = LayerStore()
    store.add("Top", "A", 2.3, 4)
    store.add("Middle", "B", 2.4, 8)
    store.add("Bottom", "C", 2.2, 20)

    assert [layer.name for layer in store.layers] == ["Top", "Middle", "Bottom"]


@pytest.mark.parametrize("field, value", [("density", "2.5"), ("thickness", 10)])
def test_update_recomputes_installed_weight(field, value):
    store = LayerStore()
    layer = store.add("Surface", "AC 11", 2.3, 4)

    updated = store.update(layer.id, field, value)

    assert updated.installed_weight == pytest.approx(updated.density * updated.thickness)
    assert store.get(layer.id) == updated


def test_update_text_fields():
    store = LayerStore()
    layer = store.add("Surface", "AC 11", 2.3, 4)

    store.update(layer.id, "name", "Wearing course")
    updated = store.update(layer.id, "recipe", "SMA 8")

    assert (updated.name, updated.recipe) == ("Wearing course", "SMA 8")
    assert updated.installed_weight == pytest.approx(92.0)


def test_update_rejects_invalid_value():
    store = LayerStore()
    layer = store.add("Surface", "AC 11", 2.3, 4)

    with pytest.raises(ValidationError):
        store.update(layer.id, "density", "abc")
    with pytest.raises(ValueError):
        store.update(layer.id, "installed_weight", 10)

    assert store.get(layer.id) == layer


def test_delete_layer():
    store = LayerStore()
    top = store.add("Top", "A", 2.3, 4)
    bottom = store.add("Bottom", "B", 2.2, 20)

    store.delete(top.id)

    assert store.layers == [bottom]
    with pytest.raises(KeyError):
        store.get(top.id)
