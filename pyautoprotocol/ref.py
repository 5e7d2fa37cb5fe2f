"""Named bindings between a protocol and its containers."""

from dataclasses import dataclass, field
from typing import Any, Dict

from .container import Container


@dataclass
class Ref:
    """
    Link a ref name to a Container instance.

    ``opts`` holds the serialized ref directives: ``{"new": shortname}`` or
    ``{"id": id}``, plus ``{"store": {"where": ...}}`` or ``{"discard": True}``.
    """
    name: str
    container: Container
    opts: Dict[str, Any] = field(default_factory=dict)
