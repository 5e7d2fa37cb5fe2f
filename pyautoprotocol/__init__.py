"""pyautoprotocol - Python library for building Autoprotocol documents."""

__version__ = "0.1.0"

from .errors import (
    AutoprotocolError,
    CapacityExceededError,
    DuplicateNameError,
    HeterogeneousGroupError,
    InsufficientVolumeError,
    InvalidArgumentError,
    InvalidFormatError,
    InvalidOperandError,
    InvalidRefSpecError,
    OutOfRangeError,
    ShapeMismatchError,
    UnitMismatchError,
    UnresolvedReferenceError,
    UnsupportedOperationError,
    VolumeCountMismatchError,
)
from .unit import Unit
from .container_type import CONTAINER_TYPES, ContainerType, get_container_type
from .container import Container
from .well import Well
from .well_group import WellGroup
from .ref import Ref
from .instruction import (
    Cover,
    Dispense,
    FlashFreeze,
    Incubate,
    Instruction,
    Luminescence,
    OpType,
    Pipette,
    Uncover,
)
from .protocol import Protocol
from .util import convert_to_ul, quad_ind_to_num, quad_num_to_ind

__all__ = [
    # Protocol
    "Protocol",
    "Ref",
    # Containers
    "Container",
    "ContainerType",
    "CONTAINER_TYPES",
    "get_container_type",
    "Well",
    "WellGroup",
    # Units
    "Unit",
    "convert_to_ul",
    # Instructions
    "Instruction",
    "OpType",
    "Pipette",
    "Incubate",
    "Dispense",
    "Cover",
    "Uncover",
    "Luminescence",
    "FlashFreeze",
    # Quadrants
    "quad_ind_to_num",
    "quad_num_to_ind",
    # Errors
    "AutoprotocolError",
    "InvalidArgumentError",
    "InvalidOperandError",
    "OutOfRangeError",
    "InvalidFormatError",
    "UnitMismatchError",
    "CapacityExceededError",
    "ShapeMismatchError",
    "VolumeCountMismatchError",
    "InsufficientVolumeError",
    "HeterogeneousGroupError",
    "DuplicateNameError",
    "InvalidRefSpecError",
    "UnresolvedReferenceError",
    "UnsupportedOperationError",
    # Version
    "__version__",
]
