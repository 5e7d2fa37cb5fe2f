"""
A single addressable location within a container.
"""

from numbers import Real
from typing import Any, Dict, Optional, Union

from .errors import CapacityExceededError, InvalidArgumentError
from .unit import Unit
from .util import convert_to_ul


def _check_property_value(key, value):
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise InvalidArgumentError(f"Property keys must be strings, got {k!r} in {key!r}")
            _check_property_value(k, v)
    elif not isinstance(value, (str, Real, Unit)):
        raise InvalidArgumentError(
            f"Property {key!r} must be a str, number, Unit or dict, got {type(value).__name__}"
        )


class Well:
    """
    A Well describes a single location within a container.

    Do not construct a Well directly; retrieve it from the related Container.

    Args:
        container: The Container this well belongs to
        index: Rowwise index of this well within the container
    """

    def __init__(self, container, index: int):
        self.container = container
        self.index = index
        self.name: Optional[str] = None
        self._volume: Optional[Unit] = None
        self._properties: Dict[str, Any] = {}

    @property
    def volume(self) -> Optional[Unit]:
        """Theoretical volume of liquid in this well, in microliters."""
        return self._volume

    @property
    def properties(self) -> Dict[str, Any]:
        return self._properties

    def set_volume(self, vol: Union[str, Unit]) -> "Well":
        """
        Set the theoretical volume of liquid in this well.

        Args:
            vol: Volume such as "20:microliter"; converted to microliters

        Raises:
            CapacityExceededError: If the volume exceeds the well capacity
        """
        self._volume = self.validate_volume(vol)
        return self

    def track_volume(self, vol: Union[str, Unit]) -> "Well":
        """
        Record a volume computed by transfer bookkeeping.

        Only the capacity is checked: a source drawn past empty keeps a
        negative balance.
        """
        v = convert_to_ul(vol)
        self._check_capacity(v)
        self._volume = v
        return self

    def validate_volume(self, vol: Union[str, Unit]) -> Unit:
        """Convert vol to microliters and check it fits in this well."""
        v = convert_to_ul(vol)
        if v.value < 0:
            raise InvalidArgumentError(f"Well volume cannot be negative: {v}")
        return self._check_capacity(v)

    def _check_capacity(self, v: Unit) -> Unit:
        capacity = self.container.container_type.well_volume_ul
        if v.value > capacity:
            raise CapacityExceededError(
                f"Volume {v} exceeds the maximum volume of {capacity} microliter "
                f"for well {self.index} of {self.container}"
            )
        return v

    def set_properties(self, properties: Dict[str, Any]) -> "Well":
        """
        Set properties of this well. New keys are merged into the existing
        properties; existing keys are overwritten.
        """
        return self.add_properties(properties)

    def add_properties(self, properties: Dict[str, Any]) -> "Well":
        """Merge a dict of properties into this well's properties."""
        if not isinstance(properties, dict):
            raise InvalidArgumentError("properties must be a dict")
        for key, value in properties.items():
            if not isinstance(key, str):
                raise InvalidArgumentError(f"Property keys must be strings, got {key!r}")
            _check_property_value(key, value)
        self._properties.update(properties)
        return self

    def set_name(self, name: str) -> "Well":
        self.name = name
        return self

    def humanize(self) -> str:
        """Return the human readable label of this well, e.g. "B3"."""
        return self.container.humanize(self.index)

    def __repr__(self) -> str:
        return f"Well({self.container}, {self.index}, {self.volume})"
