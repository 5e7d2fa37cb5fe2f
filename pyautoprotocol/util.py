"""Helpers shared by containers and the protocol builder."""

from typing import Union

from .constants import (
    MICROLITER,
    MICROLITERS_PER_MILLILITER,
    MILLILITER,
    NANOLITER,
    NANOLITERS_PER_MICROLITER,
    QUADRANT_LABELS,
)
from .errors import InvalidArgumentError, UnitMismatchError
from .unit import Unit


def convert_to_ul(vol: Union[str, Unit]) -> Unit:
    """
    Convert a volume Unit or string into microliters.

    Args:
        vol: Volume such as "0.2:milliliter" or Unit(200, "nanoliter")

    Returns:
        Equivalent Unit in microliters
    """
    v = Unit.fromstring(vol)
    if v.unit == MICROLITER:
        return v
    if v.unit == NANOLITER:
        return Unit(v.value / NANOLITERS_PER_MICROLITER, MICROLITER)
    if v.unit == MILLILITER:
        return Unit(v.value * MICROLITERS_PER_MILLILITER, MICROLITER)
    raise UnitMismatchError(
        f"Cannot convert {v} to microliters; expected nanoliter, microliter or milliliter"
    )


def quad_ind_to_num(q: Union[int, str]) -> int:
    """
    Convert a 384-well quadrant reference into its quadrant number.

    "A1" -> 0, "A2" -> 1, "B1" -> 2, "B2" -> 3. Integers 0-3 pass through.
    """
    if isinstance(q, str):
        label = q.strip().upper()
        if label in QUADRANT_LABELS:
            return QUADRANT_LABELS.index(label)
        raise InvalidArgumentError(f"Invalid quadrant index {q!r}")
    if isinstance(q, int) and not isinstance(q, bool) and 0 <= q < len(QUADRANT_LABELS):
        return q
    raise InvalidArgumentError(f"Invalid quadrant index {q!r}")


def quad_num_to_ind(q: int, human: bool = False) -> Union[int, str]:
    """
    Convert a quadrant number into the index of its first well on a
    384-well plate: 0 -> 0, 1 -> 1, 2 -> 24, 3 -> 25.

    Args:
        q: Quadrant number (0-3)
        human: Return the label ("A1", "A2", "B1", "B2") instead
    """
    if isinstance(q, bool) or not isinstance(q, int) or not 0 <= q < len(QUADRANT_LABELS):
        raise InvalidArgumentError(f"Invalid quadrant number {q!r}")
    if human:
        return QUADRANT_LABELS[q]
    return (q // 2) * 24 + q % 2
