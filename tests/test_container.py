"""Tests for Container well selection."""

import pytest

from pyautoprotocol import (
    Container,
    InvalidArgumentError,
    OutOfRangeError,
    UnsupportedOperationError,
    get_container_type,
    quad_ind_to_num,
    quad_num_to_ind,
)


def indices(group):
    return [w.index for w in group]


class TestWell:
    def test_same_instance(self, dummy_container):
        assert dummy_container.well("B3") is dummy_container.well(7)

    def test_foreign_well(self, dummy_container, dummy_type):
        other = Container(dummy_type, name="other")
        with pytest.raises(InvalidArgumentError):
            dummy_container.well(other.well(0))

    def test_wells_flattens(self, dummy_container):
        assert indices(dummy_container.wells(["A1", "A2"], 7)) == [0, 1, 7]

    def test_wells_bad_type(self, dummy_container):
        with pytest.raises(InvalidArgumentError):
            dummy_container.wells(1.5)


class TestOrdering:
    def test_all_wells(self, dummy_container):
        assert indices(dummy_container.all_wells()) == list(range(15))

    def test_all_wells_columnwise(self, dummy_container):
        assert indices(dummy_container.all_wells(columnwise=True)) == [
            0, 5, 10, 1, 6, 11, 2, 7, 12, 3, 8, 13, 4, 9, 14,
        ]

    def test_columnwise_is_reordering(self, dummy_container):
        rowwise = indices(dummy_container.all_wells())
        columnwise = indices(dummy_container.all_wells(columnwise=True))
        assert sorted(columnwise) == rowwise
        assert columnwise == sorted(rowwise, key=lambda i: (i % 5, i // 5))

    def test_inner_wells(self, dummy_container):
        assert indices(dummy_container.inner_wells()) == [6, 7, 8]
        plate = Container(get_container_type("96-flat"))
        inner = plate.inner_wells(columnwise=True)
        assert len(inner) == 60
        assert indices(inner)[:3] == [13, 25, 37]


class TestWellsFrom:
    def test_rowwise(self, dummy_container):
        assert indices(dummy_container.wells_from("B3", 4)) == [7, 8, 9, 10]

    def test_columnwise(self, dummy_container):
        assert indices(dummy_container.wells_from("B3", 6, columnwise=True)) == [7, 12, 3, 8, 13, 4]
        assert indices(dummy_container.wells_from("A1", 6, columnwise=True)) == [0, 5, 10, 1, 6, 11]

    def test_exact_length(self, dummy_container):
        for n in range(16):
            assert len(dummy_container.wells_from(0, n)) == n

    def test_overflow(self, dummy_container):
        with pytest.raises(OutOfRangeError):
            dummy_container.wells_from("C4", 3)
        with pytest.raises(OutOfRangeError):
            dummy_container.wells_from("B5", 6, columnwise=True)

    def test_bad_count(self, dummy_container):
        with pytest.raises(InvalidArgumentError):
            dummy_container.wells_from(0, -1)
        with pytest.raises(InvalidArgumentError):
            dummy_container.wells_from(0, 2.0)


class TestQuadrant:
    def test_384_quadrants(self):
        plate = Container(get_container_type("384-flat"))
        starts = {0: 0, 1: 1, 2: 24, 3: 25}
        seen = set()
        for quad, start in starts.items():
            wells = indices(plate.quadrant(quad))
            assert len(wells) == 96
            assert wells[0] == start
            assert wells[1] == start + 2
            assert wells[12] == start + 48
            seen.update(wells)
        assert seen == set(range(384))

    def test_label(self):
        plate = Container(get_container_type("384-pcr"))
        assert indices(plate.quadrant("B2")) == indices(plate.quadrant(3))

    def test_96_well(self):
        plate = Container(get_container_type("96-flat"))
        assert indices(plate.quadrant("A1")) == list(range(96))
        with pytest.raises(InvalidArgumentError):
            plate.quadrant(1)

    def test_small_container(self, dummy_container):
        with pytest.raises(UnsupportedOperationError):
            dummy_container.quadrant(0)

    def test_small_container_checked_before_quadrant(self):
        plate = Container(get_container_type("24-deep"))
        with pytest.raises(UnsupportedOperationError):
            plate.quadrant(7)

    @pytest.mark.parametrize("quad", [4, -1, "C1", True])
    def test_invalid(self, quad):
        plate = Container(get_container_type("384-flat"))
        with pytest.raises(InvalidArgumentError):
            plate.quadrant(quad)


def test_quadrant_numbers():
    assert [quad_num_to_ind(q) for q in range(4)] == [0, 1, 24, 25]
    assert quad_num_to_ind(2, human=True) == "B1"
    assert quad_ind_to_num("a2") == 1
    with pytest.raises(InvalidArgumentError):
        quad_num_to_ind(4)
