"""
Instruction types for Autoprotocol.

Each instruction kind is a dataclass with a fixed set of fields. ``to_dict``
converts any of them into the generic ``{"op": ..., **fields}`` shape that
Protocol serialization walks.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional


class OpType(Enum):
    """Types of protocol instructions."""
    PIPETTE = "pipette"
    INCUBATE = "incubate"
    DISPENSE = "dispense"
    COVER = "cover"
    UNCOVER = "uncover"
    LUMINESCENCE = "luminescence"
    FLASH_FREEZE = "flash_freeze"


@dataclass
class Instruction:
    """Base class for an instruction that is to later be encoded as JSON."""
    op_type: ClassVar[OpType]

    @property
    def op(self) -> str:
        return self.op_type.value

    def to_dict(self) -> dict:
        """
        Convert to dictionary.

        Fields are emitted under their ``key`` metadata name when present.
        Optional fields left as None are omitted.
        """
        data: Dict[str, Any] = {"op": self.op}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.metadata.get("optional"):
                continue
            data[f.metadata.get("key", f.name)] = value
        return data


@dataclass
class Pipette(Instruction):
    """
    A pipette instruction is a list of groups, executed in order. One
    disposable tip is used for each group.
    """
    op_type = OpType.PIPETTE
    groups: List[dict] = field(default_factory=list)


@dataclass
class Incubate(Instruction):
    """Store a container in a specific environment for a given duration."""
    op_type = OpType.INCUBATE
    object: Any
    where: str
    duration: Any
    shaking: bool = False
    co2_percent: float = 0


@dataclass
class Dispense(Instruction):
    """Dispense a reagent to columns of a container."""
    op_type = OpType.DISPENSE
    object: Any
    reagent: str
    columns: List[dict]
    speed_percentage: Optional[int] = field(
        default=None, metadata={"key": "x_speed_percentage", "optional": True}
    )


@dataclass
class Cover(Instruction):
    """Place a lid on a container."""
    op_type = OpType.COVER
    object: Any
    lid: str = "standard"


@dataclass
class Uncover(Instruction):
    """Remove the lid from a container."""
    op_type = OpType.UNCOVER
    object: Any


@dataclass
class Luminescence(Instruction):
    """Read luminescence of the indicated wells."""
    op_type = OpType.LUMINESCENCE
    object: Any
    wells: List[str]
    dataref: str


@dataclass
class FlashFreeze(Instruction):
    """Flash freeze a container for a given duration."""
    op_type = OpType.FLASH_FREEZE
    object: Any
    duration: Any
