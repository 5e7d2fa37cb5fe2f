"""
Logical groupings of wells.
"""

from typing import Any, Dict, Iterable, Iterator, List, Union

from .errors import HeterogeneousGroupError, InvalidOperandError
from .unit import Unit
from .well import Well


class WellGroup:
    """
    An ordered collection of Wells.

    Wells in a WellGroup do not need to belong to the same container, and
    the same well may appear more than once.

    Args:
        wells: A Well, a WellGroup or an iterable of Wells
    """

    def __init__(self, wells: Union[Well, "WellGroup", Iterable[Well]] = ()):
        if isinstance(wells, Well):
            wells = [wells]
        elif isinstance(wells, WellGroup):
            wells = wells.wells
        self.wells: List[Well] = list(wells)
        for w in self.wells:
            if not isinstance(w, Well):
                raise InvalidOperandError(f"WellGroup members must be Wells, got {type(w).__name__}")

    def set_properties(self, properties: Dict[str, Any]) -> "WellGroup":
        """Merge the same properties into every well in the group."""
        for w in self.wells:
            w.set_properties(properties)
        return self

    def add_properties(self, properties: Dict[str, Any]) -> "WellGroup":
        for w in self.wells:
            w.add_properties(properties)
        return self

    def set_volume(self, vol: Union[str, Unit]) -> "WellGroup":
        """
        Set the volume of every well in the group.

        Every well is checked before any volume is changed.
        """
        checked = [w.validate_volume(vol) for w in self.wells]
        for w, v in zip(self.wells, checked):
            w.set_volume(v)
        return self

    def indices(self) -> List[str]:
        """
        Return the human readable labels of the wells, in group order.

        Raises:
            HeterogeneousGroupError: If the wells span more than one container
        """
        if self.wells:
            container = self.wells[0].container
            if any(w.container is not container for w in self.wells):
                raise HeterogeneousGroupError(
                    "All wells in a WellGroup must belong to the same container to get their indices"
                )
        return [w.humanize() for w in self.wells]

    def append(self, other: Well) -> "WellGroup":
        """Append a single Well to this group."""
        if not isinstance(other, Well):
            raise InvalidOperandError(f"Can only append a Well, got {type(other).__name__}")
        self.wells.append(other)
        return self

    def extend(self, other: Union["WellGroup", Iterable[Well]]) -> "WellGroup":
        for w in WellGroup(other).wells:
            self.wells.append(w)
        return self

    def __add__(self, other: Union[Well, "WellGroup"]) -> "WellGroup":
        if isinstance(other, Well):
            return WellGroup(self.wells + [other])
        if isinstance(other, WellGroup):
            return WellGroup(self.wells + other.wells)
        raise InvalidOperandError("You can only add a Well or WellGroup to a WellGroup")

    def __getitem__(self, key):
        if isinstance(key, slice):
            return WellGroup(self.wells[key])
        return self.wells[key]

    def __len__(self) -> int:
        return len(self.wells)

    def __iter__(self) -> Iterator[Well]:
        return iter(self.wells)

    def __repr__(self) -> str:
        return f"WellGroup({self.wells})"
