"""Exceptions raised while building a protocol.

Every error derives from :class:`AutoprotocolError` and from the closest
built-in exception, so callers may catch either.
"""


class AutoprotocolError(Exception):
    """Base class for all pyautoprotocol errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(AutoprotocolError, TypeError, ValueError):
    """A value of the wrong kind was given, e.g. a float well index."""


class InvalidOperandError(InvalidArgumentError):
    """Only Wells and WellGroups can be combined into a WellGroup."""


class OutOfRangeError(AutoprotocolError, ValueError):
    """A well coordinate lies outside the container."""


class InvalidFormatError(AutoprotocolError, ValueError):
    """A well label or unit string could not be parsed."""


class UnitMismatchError(AutoprotocolError, ValueError):
    """Arithmetic or comparison between incompatible units."""


class CapacityExceededError(AutoprotocolError, ValueError):
    """A volume exceeds what a well can hold."""


class ShapeMismatchError(AutoprotocolError, ValueError):
    """Source and destination counts of a transfer cannot be paired."""


class VolumeCountMismatchError(AutoprotocolError, ValueError):
    """A list of volumes does not match the number of destinations."""


class InsufficientVolumeError(AutoprotocolError, ValueError):
    """Source wells do not hold enough liquid for the transfer."""


class HeterogeneousGroupError(AutoprotocolError, RuntimeError):
    """The operation needs every well of a group to share a container."""


class DuplicateNameError(AutoprotocolError, ValueError):
    """A ref with this name already exists in the protocol."""


class InvalidRefSpecError(AutoprotocolError, ValueError):
    """A ref was declared without a valid container type or disposition."""


class UnresolvedReferenceError(AutoprotocolError, LookupError):
    """A container used by an instruction has no ref in the protocol."""


class UnsupportedOperationError(AutoprotocolError, RuntimeError):
    """The operation is not defined for this container type."""
