"""
Containers and well selection.

This module provides the Container class, which owns the Wells of a plate
or tube and offers helpers for selecting subsets of them as WellGroups.
"""

from typing import List, Optional, Tuple, Union

from .container_type import ContainerType, WellRef
from .errors import InvalidArgumentError, OutOfRangeError, UnsupportedOperationError
from .util import quad_ind_to_num
from .well import Well
from .well_group import WellGroup


class Container:
    """
    A reference to a specific physical container (e.g. a tube or 96-well
    microplate).

    Every Container has a ContainerType, which defines the well count and
    arrangement. Containers are usually declared with ``Protocol.ref``.

    Args:
        container_type: Layout of this container
        id: Identifier of an existing container, if any
        name: Name of the ref this container belongs to
        storage: Storage condition after the run
    """

    def __init__(
        self,
        container_type: ContainerType,
        id: Optional[str] = None,
        name: Optional[str] = None,
        storage: Optional[str] = None
    ):
        if not isinstance(container_type, ContainerType):
            raise InvalidArgumentError("container_type must be a ContainerType")
        self.container_type = container_type
        self.id = id
        self.name = name
        self.storage = storage
        self._wells: List[Well] = [Well(self, idx) for idx in range(container_type.well_count)]

    # ========================================================================
    # ADDRESSING
    # ========================================================================

    def robotize(self, well_ref: WellRef) -> int:
        """Return the integer index of a well reference. See ContainerType.robotize."""
        return self.container_type.robotize(well_ref)

    def humanize(self, well_ref: int) -> str:
        """Return the label of an integer well index. See ContainerType.humanize."""
        return self.container_type.humanize(well_ref)

    def decompose(self, well_ref: WellRef) -> Tuple[int, int]:
        """Return the (row, col) of a well reference."""
        return self.container_type.decompose(well_ref)

    # ========================================================================
    # WELL SELECTION
    # ========================================================================

    def well(self, i: WellRef) -> Well:
        """
        Return the Well at the given index or label.

        The same Well instance is returned every time.
        """
        if isinstance(i, Well) and i.container is not self:
            raise InvalidArgumentError(f"{i} does not belong to {self}")
        return self._wells[self.robotize(i)]

    def wells(self, *args) -> WellGroup:
        """
        Return a WellGroup of the wells referenced, in the order given.

        Example:
            plate.wells("A1", "A2")
            plate.wells([0, 1, 2])
            plate.wells(["A1", "B1"], "C1")
        """
        refs = []
        for a in args:
            if isinstance(a, (list, tuple)):
                refs.extend(a)
            else:
                refs.append(a)
        for ref in refs:
            if isinstance(ref, bool) or not isinstance(ref, (int, str, Well)):
                raise InvalidArgumentError(
                    f"Well reference given is not of type int, str or Well: {ref!r}"
                )
        return WellGroup([self.well(ref) for ref in refs])

    def all_wells(self, columnwise: bool = False) -> WellGroup:
        """
        Return a WellGroup of every well in this container.

        Args:
            columnwise: Order down each column first instead of by index
        """
        if not columnwise:
            return WellGroup(self._wells)
        num_cols = self.container_type.col_count
        num_rows = self.container_type.row_count
        return WellGroup([
            self._wells[row * num_cols + col]
            for col in range(num_cols)
            for row in range(num_rows)
        ])

    def inner_wells(self, columnwise: bool = False) -> WellGroup:
        """
        Return a WellGroup of all wells except those on the plate edge
        (first and last row, first and last column).
        """
        num_cols = self.container_type.col_count
        num_rows = self.container_type.row_count
        rows = range(1, num_rows - 1)
        cols = range(1, num_cols - 1)
        if columnwise:
            indices = [r * num_cols + c for c in cols for r in rows]
        else:
            indices = [r * num_cols + c for r in rows for c in cols]
        return WellGroup([self._wells[i] for i in indices])

    def wells_from(self, start: WellRef, num: int, columnwise: bool = False) -> WellGroup:
        """
        Return num consecutive wells, starting at start.

        Wells are counted rowwise unless columnwise is True.

        Raises:
            OutOfRangeError: If fewer than num wells follow start
        """
        if isinstance(num, bool) or not isinstance(num, int) or num < 0:
            raise InvalidArgumentError(f"Number of wells must be a non-negative int, got {num!r}")

        start = self.robotize(start)
        if columnwise:
            row, col = self.decompose(start)
            start = col * self.container_type.row_count + row
        if start + num > self.container_type.well_count:
            raise OutOfRangeError(
                f"Cannot take {num} wells starting at position {start}; "
                f"{self} has {self.container_type.well_count} wells"
            )
        return self.all_wells(columnwise)[start:start + num]

    def quadrant(self, quad: Union[int, str]) -> WellGroup:
        """
        Return the wells of one quadrant of a 384-well plate.

        A quadrant is every other well of every other row, starting at
        A1, A2, B1 or B2. For a 96-well plate only quadrant 0 is valid and
        returns every well.

        Args:
            quad: Quadrant number (0-3) or label ("A1", "A2", "B1", "B2")
        """
        well_count = self.container_type.well_count
        if well_count < 96:
            raise UnsupportedOperationError(
                "Cannot return quadrant for a container type with less than 96 wells"
            )
        quad = quad_ind_to_num(quad)
        if well_count == 96:
            if quad != 0:
                raise InvalidArgumentError("0 or 'A1' is the only valid quadrant for a 96-well plate")
            return self.all_wells()

        num_cols = self.container_type.col_count
        start_row, start_col = divmod(quad, 2)
        return WellGroup([
            self._wells[row * num_cols + col]
            for row in range(start_row, self.container_type.row_count, 2)
            for col in range(start_col, num_cols, 2)
        ])

    def __repr__(self) -> str:
        return f"Container({self.name})"
