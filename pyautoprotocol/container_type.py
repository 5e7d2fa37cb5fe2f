"""
Container type definitions.

This module describes the physical layout of plates and tubes and provides
the mapping between integer well indices, human readable labels ("A1") and
(row, column) pairs.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .constants import ROW_LETTERS
from .errors import InvalidArgumentError, InvalidFormatError, OutOfRangeError
from .well import Well

_LABEL_PATTERN = re.compile(r"([A-Za-z])(\d+)")
_INDEX_PATTERN = re.compile(r"\d+")

WellRef = Union[int, str, Well]


@dataclass(frozen=True)
class ContainerType:
    """
    Capabilities and properties of a particular container type.

    Wells are indexed rowwise: left-to-right, top-to-bottom, starting at
    0 = A1.
    """
    name: str
    well_count: int
    col_count: int
    well_volume_ul: float
    dead_volume_ul: float
    shortname: str
    is_tube: bool = False
    well_depth_mm: Optional[float] = None
    well_coating: Optional[str] = None
    sterile: Optional[bool] = None
    capabilities: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.well_count, int) or self.well_count <= 0:
            raise InvalidArgumentError(f"well_count must be a positive integer, got {self.well_count!r}")
        if not isinstance(self.col_count, int) or self.col_count <= 0:
            raise InvalidArgumentError(f"col_count must be a positive integer, got {self.col_count!r}")
        if self.well_count % self.col_count:
            raise InvalidArgumentError(
                f"col_count {self.col_count} does not divide well_count {self.well_count}"
            )
        object.__setattr__(self, "capabilities", frozenset(self.capabilities))

    @property
    def row_count(self) -> int:
        """Number of rows of this container type."""
        return self.well_count // self.col_count

    def robotize(self, well_ref: WellRef) -> int:
        """
        Return the integer index of a well reference.

        Example:
            ct.robotize("A1")      # => 0
            ct.robotize("5")       # => 5
            ct.robotize(a_well)    # => a_well.index

        Args:
            well_ref: Integer index, label such as "B3", or a Well

        Returns:
            Rowwise integer index

        Raises:
            OutOfRangeError: If the reference exceeds the container dimensions
            InvalidFormatError: If a string is neither a label nor an index
        """
        if isinstance(well_ref, Well):
            well_ref = well_ref.index
        if isinstance(well_ref, bool) or not isinstance(well_ref, (int, str)):
            raise InvalidArgumentError(
                f"Well reference must be an int, str or Well, got {type(well_ref).__name__}"
            )

        if isinstance(well_ref, int):
            return self._check_index(well_ref)

        text = well_ref.strip()
        m = _LABEL_PATTERN.fullmatch(text)
        if m:
            row = ord(m.group(1).upper()) - ord("A")
            col = int(m.group(2)) - 1
            if row >= self.row_count:
                raise OutOfRangeError(f"Row {m.group(1)} exceeds container dimensions ({self.row_count} rows)")
            if not 0 <= col < self.col_count:
                raise OutOfRangeError(f"Column {m.group(2)} exceeds container dimensions ({self.col_count} columns)")
            return self._check_index(row * self.col_count + col)

        if _INDEX_PATTERN.fullmatch(text):
            return self._check_index(int(text))

        raise InvalidFormatError(f"Well must be in 'A1' format or be an integer, got {well_ref!r}")

    def humanize(self, well_ref: int) -> str:
        """
        Return the label of an integer well index, e.g. 0 -> "A1".

        Raises:
            OutOfRangeError: If the index is outside the container
        """
        if isinstance(well_ref, bool) or not isinstance(well_ref, int):
            raise InvalidArgumentError(f"Well index must be an int, got {type(well_ref).__name__}")
        self._check_index(well_ref)
        row, col = divmod(well_ref, self.col_count)
        if row >= len(ROW_LETTERS):
            raise OutOfRangeError(f"Row {row} cannot be expressed as a single letter")
        return f"{ROW_LETTERS[row]}{col + 1}"

    def decompose(self, well_ref: WellRef) -> Tuple[int, int]:
        """Return the (row, col) of a well reference."""
        idx = self.robotize(well_ref)
        return idx // self.col_count, idx % self.col_count

    def _check_index(self, idx: int) -> int:
        if not 0 <= idx < self.well_count:
            raise OutOfRangeError(
                f"Well index {idx} exceeds container dimensions ({self.well_count} wells)"
            )
        return idx


def _plate(name, shortname, well_count, col_count, well_volume_ul, dead_volume_ul,
           sterile=False, is_tube=False):
    return ContainerType(
        name=name,
        shortname=shortname,
        well_count=well_count,
        col_count=col_count,
        well_volume_ul=well_volume_ul,
        dead_volume_ul=dead_volume_ul,
        sterile=sterile,
        is_tube=is_tube,
    )


# Read-only catalogue of known container types, keyed by shortname
CONTAINER_TYPES: Mapping[str, ContainerType] = MappingProxyType({
    ct.shortname: ct
    for ct in (
        _plate("384-well UV flat-bottom plate", "384-flat", 384, 24, 112.0, 12),
        _plate("384-well PCR plate", "384-pcr", 384, 24, 50.0, 8, sterile=None),
        _plate("384-well Echo plate", "384-echo", 384, 24, 65.0, 5, sterile=None),
        _plate("96-well flat-bottom plate", "96-flat", 96, 12, 340.0, 25),
        _plate("96-well flat-bottom UV transparent plate", "96-flat-uv", 96, 12, 340.0, 25),
        _plate("96-well PCR plate", "96-pcr", 96, 12, 160.0, 15, sterile=None),
        _plate("96-well extended capacity plate", "96-deep", 96, 12, 2000.0, 15),
        _plate("24-well extended capacity plate", "24-deep", 24, 6, 10000.0, 15),
        _plate("2mL Microcentrifuge tube", "micro-2.0", 1, 1, 2000.0, 15, is_tube=True),
        _plate("1.5mL Microcentrifuge tube", "micro-1.5", 1, 1, 1500.0, 15, is_tube=True),
        _plate("6-well cell culture plate", "6-flat", 6, 3, 1500.0, 15),
        _plate("1-well flat-bottom plate", "1-flat", 1, 1, 80000.0, 36000),
    )
})


def get_container_type(shortname: Union[str, ContainerType]) -> ContainerType:
    """
    Look up a ContainerType by shortname. ContainerType objects pass through.

    Raises:
        InvalidArgumentError: If the shortname is not in the catalogue
    """
    if isinstance(shortname, ContainerType):
        return shortname
    if isinstance(shortname, str) and shortname in CONTAINER_TYPES:
        return CONTAINER_TYPES[shortname]
    raise InvalidArgumentError(
        f"Unknown container type {shortname!r} (known types={sorted(CONTAINER_TYPES)})"
    )
