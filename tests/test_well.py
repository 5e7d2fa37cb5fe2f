"""Tests for Well volume and property tracking."""

import pytest

from pyautoprotocol import CapacityExceededError, InvalidArgumentError, Unit, UnitMismatchError


def test_new_well_is_empty(dummy_container):
    well = dummy_container.well(0)
    assert well.volume is None
    assert well.properties == {}
    assert well.name is None


def test_set_volume_converts_to_microliters(dummy_container):
    well = dummy_container.well(0).set_volume("0.1:milliliter")
    assert well.volume == Unit(100, "microliter")


def test_set_volume_over_capacity(dummy_container):
    well = dummy_container.well(0)
    with pytest.raises(CapacityExceededError):
        well.set_volume("201:microliter")
    assert well.volume is None


def test_set_volume_negative(dummy_container):
    with pytest.raises(InvalidArgumentError):
        dummy_container.well(0).set_volume("-1:microliter")


def test_set_volume_not_a_volume(dummy_container):
    with pytest.raises(UnitMismatchError):
        dummy_container.well(0).set_volume("10:second")


def test_properties_merge(dummy_container):
    well = dummy_container.well(0)
    well.set_properties({"buffer": "PBS", "conc": Unit(2, "millimolar")})
    well.add_properties({"buffer": "TE", "lot": 12})
    assert well.properties == {"buffer": "TE", "conc": Unit(2, "millimolar"), "lot": 12}


def test_nested_properties(dummy_container):
    well = dummy_container.well(0)
    well.set_properties({"reagent": {"name": "dye", "stock": {"conc": 10}}})
    assert well.properties["reagent"]["stock"]["conc"] == 10


@pytest.mark.parametrize("props", [
    {1: "x"},
    {"x": [1, 2]},
    {"x": {"y": object()}},
    {"x": {1: "y"}},
    {"x": 2j},
    ["x"],
])
def test_invalid_properties(dummy_container, props):
    with pytest.raises(InvalidArgumentError):
        dummy_container.well(0).set_properties(props)


def test_humanize_and_name(dummy_container):
    well = dummy_container.well(7).set_name("sample")
    assert well.humanize() == "B3"
    assert well.name == "sample"
