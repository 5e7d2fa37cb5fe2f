"""Shared fixtures for pyautoprotocol tests."""

import pytest

from pyautoprotocol import Container, ContainerType, Protocol


@pytest.fixture
def dummy_type():
    """A 3x5 container type with 200 µL wells."""
    return ContainerType(
        name="dummy",
        well_count=15,
        col_count=5,
        well_volume_ul=200.0,
        dead_volume_ul=15.0,
        shortname="dummy",
    )


@pytest.fixture
def dummy_container(dummy_type):
    return Container(dummy_type, name="dummy")


@pytest.fixture
def protocol():
    return Protocol()


@pytest.fixture
def plate(protocol):
    """A discarded 96-flat plate registered as "plate"."""
    return protocol.ref("plate", cont_type="96-flat", discard=True)
