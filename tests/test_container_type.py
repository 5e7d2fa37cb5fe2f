"""Tests for well addressing and the container type catalogue."""

import pytest

from pyautoprotocol import (
    CONTAINER_TYPES,
    ContainerType,
    InvalidArgumentError,
    InvalidFormatError,
    OutOfRangeError,
    get_container_type,
)


class TestRobotize:
    def test_labels(self, dummy_type):
        assert dummy_type.robotize("A1") == 0
        assert dummy_type.robotize("B3") == 7
        assert dummy_type.robotize("c5") == 14

    def test_int_and_numeric_string(self, dummy_type):
        assert dummy_type.robotize(5) == 5
        assert dummy_type.robotize("5") == 5

    def test_well(self, dummy_container):
        well = dummy_container.well(8)
        assert dummy_container.container_type.robotize(well) == 8

    @pytest.mark.parametrize("ref", ["D1", "A6", "A0", 15, -1, "15"])
    def test_out_of_range(self, dummy_type, ref):
        with pytest.raises(OutOfRangeError):
            dummy_type.robotize(ref)

    @pytest.mark.parametrize("ref", ["AA1", "1A", "", "A1B"])
    def test_bad_format(self, dummy_type, ref):
        with pytest.raises(InvalidFormatError):
            dummy_type.robotize(ref)

    @pytest.mark.parametrize("ref", [1.0, None, True, ["A1"]])
    def test_bad_type(self, dummy_type, ref):
        with pytest.raises(InvalidArgumentError):
            dummy_type.robotize(ref)


class TestHumanize:
    def test_humanize(self, dummy_type):
        assert dummy_type.humanize(0) == "A1"
        assert dummy_type.humanize(7) == "B3"
        assert dummy_type.humanize(14) == "C5"

    def test_out_of_range(self, dummy_type):
        with pytest.raises(OutOfRangeError):
            dummy_type.humanize(15)

    def test_bad_type(self, dummy_type):
        with pytest.raises(InvalidArgumentError):
            dummy_type.humanize("A1")

    def test_round_trip(self):
        ct = get_container_type("384-flat")
        for i in range(ct.well_count):
            label = ct.humanize(i)
            assert ct.robotize(label) == i
            assert ct.humanize(ct.robotize(label)) == label


class TestDecompose:
    def test_decompose(self, dummy_type):
        assert dummy_type.decompose("C4") == (2, 3)

    def test_every_index(self, dummy_type):
        for i in range(dummy_type.well_count):
            assert dummy_type.decompose(i) == (i // 5, i % 5)


class TestCatalogue:
    def test_known_types(self):
        assert set(CONTAINER_TYPES) == {
            "384-flat", "384-pcr", "384-echo", "96-flat", "96-flat-uv", "96-pcr",
            "96-deep", "24-deep", "micro-2.0", "micro-1.5", "6-flat", "1-flat",
        }

    def test_lookup(self):
        ct = get_container_type("96-pcr")
        assert ct.well_count == 96
        assert ct.col_count == 12
        assert ct.row_count == 8
        assert ct.well_volume_ul == 160.0

    def test_passthrough(self, dummy_type):
        assert get_container_type(dummy_type) is dummy_type

    def test_unknown(self):
        with pytest.raises(InvalidArgumentError):
            get_container_type("97-flat")

    def test_read_only(self):
        with pytest.raises(TypeError):
            CONTAINER_TYPES["new"] = CONTAINER_TYPES["96-flat"]

    def test_col_count_must_divide(self):
        with pytest.raises(InvalidArgumentError):
            ContainerType(name="bad", well_count=10, col_count=3, well_volume_ul=1.0,
                          dead_volume_ul=0.0, shortname="bad")
