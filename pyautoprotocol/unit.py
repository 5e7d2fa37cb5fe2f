"""
Measured quantities for protocol parameters.

A Unit pairs a numeric value with a unit name (e.g. volume, duration,
temperature or concentration) and serializes as ``"<value>:<unit>"``.
"""

import warnings
from dataclasses import dataclass
from numbers import Real
from typing import Union

from .errors import InvalidArgumentError, InvalidFormatError, UnitMismatchError


@dataclass(frozen=True)
class Unit:
    """
    A value with a unit of measure.

    Addition, subtraction and ordering only work between Units with the
    same unit string. Multiplication and division are scalar only.

    Example:
        >>> Unit.fromstring("10:microliter") + Unit(5, "microliter")
        Unit(value=15.0, unit='microliter')
    """
    value: float
    unit: str

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (Real, str)):
            raise InvalidArgumentError(f"Unit value must be a number, got {self.value!r}")
        try:
            object.__setattr__(self, "value", float(self.value))
        except ValueError:
            raise InvalidFormatError(f"Unit value is not numeric: {self.value!r}") from None
        if not isinstance(self.unit, str) or not self.unit:
            raise InvalidArgumentError(f"Unit name must be a non-empty string, got {self.unit!r}")

    @classmethod
    def fromstring(cls, s: Union[str, "Unit"]) -> "Unit":
        """
        Parse a ``"value:unit"`` string. Units are returned unchanged.

        Args:
            s: String such as "10:microliter", or a Unit

        Returns:
            Unit instance
        """
        if isinstance(s, Unit):
            return s
        if not isinstance(s, str):
            raise InvalidArgumentError(f"Expected a 'value:unit' string or Unit, got {s!r}")

        parts = s.strip().split(":")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidFormatError(f"Unit string must look like 'value:unit', got {s!r}")
        return cls(parts[0], parts[1])

    def __str__(self) -> str:
        return f"{self.value}:{self.unit}"

    def _check_type(self, other):
        if not isinstance(other, Unit):
            raise InvalidArgumentError("Both operands must be of type Unit")
        if self.unit != other.unit:
            raise UnitMismatchError(f"unit {self.unit} is not {other.unit}")

    def __add__(self, other: "Unit") -> "Unit":
        self._check_type(other)
        return Unit(self.value + other.value, self.unit)

    def __sub__(self, other: "Unit") -> "Unit":
        self._check_type(other)
        return Unit(self.value - other.value, self.unit)

    def __lt__(self, other: "Unit") -> bool:
        self._check_type(other)
        return self.value < other.value

    def __le__(self, other: "Unit") -> bool:
        self._check_type(other)
        return self.value <= other.value

    def __gt__(self, other: "Unit") -> bool:
        self._check_type(other)
        return self.value > other.value

    def __ge__(self, other: "Unit") -> bool:
        self._check_type(other)
        return self.value >= other.value

    def _scalar(self, other) -> float:
        if isinstance(other, Unit):
            warnings.warn(
                f"Unit multiplication and division only support scalars. "
                f"Converting {other} to {other.value}",
                stacklevel=3,
            )
            return other.value
        if isinstance(other, bool) or not isinstance(other, Real):
            raise InvalidArgumentError(f"Cannot scale a Unit by {other!r}")
        return other

    def __mul__(self, other) -> "Unit":
        return Unit(self.value * self._scalar(other), self.unit)

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Unit":
        return Unit(self.value / self._scalar(other), self.unit)
