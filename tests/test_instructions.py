"""Tests for the instruction builders."""

import pytest

from pyautoprotocol import (
    Dispense,
    InvalidArgumentError,
    OpType,
    UnresolvedReferenceError,
)


def last_op(protocol):
    return protocol.as_dict()["instructions"][-1]


def test_op_names():
    assert Dispense.op_type is OpType.DISPENSE
    assert Dispense("plate", "water", []).op == "dispense"


class TestIncubate:
    def test_incubate(self, protocol, plate):
        protocol.incubate(plate, "warm_37", "30:minute", shaking=True, co2=5)
        assert last_op(protocol) == {
            "op": "incubate",
            "object": "plate",
            "where": "warm_37",
            "duration": "30.0:minute",
            "shaking": True,
            "co2_percent": 5,
        }

    def test_by_ref_name(self, protocol, plate):
        protocol.incubate("plate", "cold_4", "1:hour")
        assert last_op(protocol)["object"] == "plate"

    def test_invalid_where(self, protocol, plate):
        with pytest.raises(InvalidArgumentError):
            protocol.incubate(plate, "warm_42", "1:hour")

    def test_no_shaking_at_ambient(self, protocol, plate):
        with pytest.raises(InvalidArgumentError):
            protocol.incubate(plate, "ambient", "1:hour", shaking=True)

    def test_unknown_ref(self, protocol):
        with pytest.raises(UnresolvedReferenceError):
            protocol.incubate("missing", "ambient", "1:hour")


class TestDispense:
    def test_dispense(self, protocol, plate):
        protocol.dispense(plate, "water", [{"column": 0, "volume": "0.1:milliliter"}])
        assert last_op(protocol) == {
            "op": "dispense",
            "object": "plate",
            "reagent": "water",
            "columns": [{"column": 0, "volume": "100.0:microliter"}],
        }

    def test_speed_percentage(self, protocol, plate):
        protocol.dispense(plate, "water", [{"column": 1, "volume": "5:microliter"}], speed_percentage=50)
        assert last_op(protocol)["x_speed_percentage"] == 50

    @pytest.mark.parametrize("columns", [[], [{"column": 12, "volume": "5:microliter"}], [{"column": 0}]])
    def test_invalid_columns(self, protocol, plate, columns):
        with pytest.raises(InvalidArgumentError):
            protocol.dispense(plate, "water", columns)

    @pytest.mark.parametrize("speed", [0, 101, 50.5])
    def test_invalid_speed(self, protocol, plate, speed):
        with pytest.raises(InvalidArgumentError):
            protocol.dispense(plate, "water", [{"column": 0, "volume": "5:microliter"}], speed)

    def test_full_plate(self, protocol, plate):
        protocol.dispense_full_plate(plate, "buffer", "50:microliter")
        columns = last_op(protocol)["columns"]
        assert [c["column"] for c in columns] == list(range(12))
        assert all(c["volume"] == "50.0:microliter" for c in columns)


class TestCover:
    def test_cover_and_uncover(self, protocol, plate):
        protocol.cover(plate, lid="universal").uncover(plate)
        ops = protocol.as_dict()["instructions"]
        assert ops == [
            {"op": "cover", "object": "plate", "lid": "universal"},
            {"op": "uncover", "object": "plate"},
        ]

    def test_default_lid(self, protocol, plate):
        protocol.cover(plate)
        assert last_op(protocol)["lid"] == "standard"

    def test_invalid_lid(self, protocol, plate):
        with pytest.raises(InvalidArgumentError):
            protocol.cover(plate, lid="foil")


def test_luminescence(protocol, plate):
    protocol.luminescence(plate, plate.wells("A1", "B2"), "lum_reading")
    assert last_op(protocol) == {
        "op": "luminescence",
        "object": "plate",
        "wells": ["A1", "B2"],
        "dataref": "lum_reading",
    }


def test_luminescence_labels(protocol, plate):
    protocol.luminescence(plate, ["a1", 13], "lum_reading")
    assert last_op(protocol)["wells"] == ["A1", "B2"]


def test_flash_freeze(protocol, plate):
    protocol.flash_freeze(plate, "25:second")
    assert last_op(protocol) == {"op": "flash_freeze", "object": "plate", "duration": "25.0:second"}
