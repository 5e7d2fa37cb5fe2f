"""
Protocol management for Autoprotocol.

This module provides the Protocol class, which holds the refs and the
ordered instruction list of a protocol, builds instructions (most notably
liquid transfers) and serializes everything to an Autoprotocol document.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from .constants import (
    VALID_INCUBATION_TEMPERATURES,
    VALID_LIDS,
    VALID_STORAGE_CONDITIONS,
    DEFAULT_LID,
)
from .container import Container
from .container_type import ContainerType, get_container_type
from .errors import (
    DuplicateNameError,
    InvalidArgumentError,
    InvalidRefSpecError,
    UnresolvedReferenceError,
)
from .instruction import (
    Cover,
    Dispense,
    FlashFreeze,
    Incubate,
    Instruction,
    Luminescence,
    Pipette,
    Uncover,
)
from .ref import Ref
from .transfer import (
    TransferStep,
    apportion_one_source,
    first_given,
    mix_spec,
    normalize_volumes,
    normalize_wells,
    plan_volume_changes,
    split_oversized,
)
from .unit import Unit
from .util import convert_to_ul
from .well import Well
from .well_group import WellGroup

logger = logging.getLogger(__name__)

ContainerRef = Union[Container, str]


class Protocol:
    """
    Represents an Autoprotocol protocol.

    A protocol is a set of named container refs and a sequence of
    instructions operating on them.

    Example:
        p = Protocol()
        plate = p.ref("plate", cont_type="96-flat", discard=True)
        p.transfer(plate.well("A1"), plate.well("A2"), "20:microliter")
        doc = p.as_dict()
    """

    def __init__(
        self,
        refs: Optional[Dict[str, Ref]] = None,
        instructions: Optional[List[Instruction]] = None
    ):
        """
        Initialize a protocol.

        Args:
            refs: Existing refs, keyed by name
            instructions: Existing instructions
        """
        self.refs: Dict[str, Ref] = refs if refs is not None else {}
        self.instructions: List[Instruction] = instructions if instructions is not None else []
        self.tip_type: Optional[str] = None

    def set_tip_type(self, tip_type: Optional[str]):
        """Set the default tip type for transfers."""
        self.tip_type = tip_type
        return self

    # ========================================================================
    # REFS
    # ========================================================================

    def container_type(self, shortname: Union[str, ContainerType]) -> ContainerType:
        """Convert a ContainerType shortname into a ContainerType object."""
        return get_container_type(shortname)

    def ref(
        self,
        name: str,
        id: Optional[str] = None,
        cont_type: Union[str, ContainerType, None] = None,
        storage: Optional[str] = None,
        discard: Optional[bool] = None
    ) -> Container:
        """
        Add a Ref to this protocol and return its Container.

        Example:
            # a new container, discarded after the run
            plate = p.ref("sample_plate", cont_type="96-pcr", discard=True)

            # an existing container, stored after the run
            tube = p.ref("sample_tube", id="ct1cxae33lkj",
                         cont_type="micro-1.5", storage="ambient")

        Args:
            name: Name of the ref, unique within the protocol
            id: Id of an existing container; a new container is used if omitted
            cont_type: Container type shortname or ContainerType
            storage: Storage condition after the run
            discard: Discard the container after the run instead of storing it

        Raises:
            DuplicateNameError: If a ref with this name already exists
            InvalidRefSpecError: If the container type is missing or unknown,
                or not exactly one of storage and discard is given
        """
        if name in self.refs:
            raise DuplicateNameError(
                f"Two containers within the same protocol cannot have the same name: {name!r}"
            )
        if not isinstance(name, str) or not name:
            raise InvalidRefSpecError(f"Ref name must be a non-empty string, got {name!r}")
        if cont_type is None:
            raise InvalidRefSpecError(f"You must specify a container type for ref {name!r}")
        try:
            container_type = self.container_type(cont_type)
        except InvalidArgumentError as e:
            raise InvalidRefSpecError(f"You must specify a valid container type for ref {name!r}. {e}") from e

        opts: Dict[str, Any] = {}
        if id is not None:
            opts["id"] = id
        else:
            opts["new"] = container_type.shortname

        if storage and discard:
            raise InvalidRefSpecError(f"Ref {name!r} cannot be both stored and discarded")
        if storage:
            if storage not in VALID_STORAGE_CONDITIONS:
                raise InvalidRefSpecError(
                    f"Invalid storage condition {storage!r}; expected one of {', '.join(VALID_STORAGE_CONDITIONS)}"
                )
            opts["store"] = {"where": storage}
        elif discard:
            opts["discard"] = True
        else:
            raise InvalidRefSpecError(
                f"You must specify either a valid storage condition or set discard=True for ref {name!r}"
            )

        container = Container(container_type, id=id, name=name, storage=storage)
        self.refs[name] = Ref(name, container, opts)
        logger.debug("Added ref %s: %s", name, opts)
        return container

    # ========================================================================
    # INSTRUCTIONS
    # ========================================================================

    def append(self, instructions: Union[Instruction, Sequence[Instruction]]):
        """
        Append instruction(s) to this protocol. The other methods of Protocol
        should be used in lieu of doing this directly.
        """
        if isinstance(instructions, Instruction):
            instructions = [instructions]
        for instruction in instructions:
            if not isinstance(instruction, Instruction):
                raise InvalidArgumentError(f"Cannot append {instruction!r}; expected an Instruction")
            self.instructions.append(instruction)
            logger.debug("Appended %s instruction", instruction.op)
        return self

    def _pipette(self, groups: List[dict]):
        """Append pipette groups, merging into a trailing pipette instruction."""
        if self.instructions and isinstance(self.instructions[-1], Pipette):
            self.instructions[-1].groups.extend(groups)
        else:
            self.append(Pipette(groups=list(groups)))

    # ========================================================================
    # LIQUID HANDLING
    # ========================================================================

    def transfer(
        self,
        source: Union[Well, WellGroup, Sequence[Well]],
        dest: Union[Well, WellGroup, Sequence[Well]],
        volume: Union[str, Unit, Sequence[Union[str, Unit]]],
        one_source: bool = False,
        one_tip: bool = False,
        mix_before: bool = False,
        mix_after: bool = False,
        mix_vol: Union[str, Unit, None] = None,
        mix_vol_b: Union[str, Unit, None] = None,
        mix_vol_a: Union[str, Unit, None] = None,
        repetitions: Optional[int] = None,
        repetitions_b: Optional[int] = None,
        repetitions_a: Optional[int] = None,
        flowrate: Union[str, Unit, None] = None,
        flowrate_b: Union[str, Unit, None] = None,
        flowrate_a: Union[str, Unit, None] = None,
        aspirate_speed: Union[str, Unit, None] = None,
        dispense_speed: Union[str, Unit, None] = None,
        aspirate_source: Optional[dict] = None,
        dispense_target: Optional[dict] = None,
        pre_buffer: Union[str, Unit, None] = None,
        disposal_vol: Union[str, Unit, None] = None,
        transit_vol: Union[str, Unit, None] = None,
        blowout_buffer: Optional[bool] = None,
        tip_type: Optional[str] = None,
        new_group: bool = False
    ):
        """
        Transfer liquid from one or more wells to others.

        A new tip is used for each transfer step unless one_tip is True.
        Steps larger than the tip capacity (750 µL) are split into several.
        Well volumes are updated as a side effect.

        Example:
            # one-to-one
            p.transfer(plate.well("B3"), plate.well("C3"), "20:microliter")

            # column to column, a different volume per well
            p.transfer(plate.wells_from(0, 8, columnwise=True),
                       plate.wells_from(1, 8, columnwise=True),
                       ["5:microliter", "10:microliter", ...])

            # two wells holding the same substance into ten others
            p.transfer(plate.wells_from("A1", 2), plate.wells_from("A3", 10),
                       "10:microliter", one_source=True)

        Args:
            source: Well(s) to transfer liquid from
            dest: Well(s) to transfer liquid to
            volume: Volume per destination, or a list with one volume per
                destination
            one_source: Treat the source wells as one pool of the same
                substance, drawing from each in turn
            one_tip: Use a single tip for every step of this transfer; steps
                split at the tip capacity still get a tip each
            mix_before: Mix the source well before aspirating
            mix_after: Mix the destination well after dispensing
            mix_vol: Mix volume for both mixes (default: half the step volume)
            mix_vol_b: Mix volume before, overrides mix_vol
            mix_vol_a: Mix volume after, overrides mix_vol
            repetitions: Mix repetitions for both mixes (default: 10)
            repetitions_b: Repetitions before, overrides repetitions
            repetitions_a: Repetitions after, overrides repetitions
            flowrate: Mix speed for both mixes (default: 100 µL/second)
            flowrate_b: Mix speed before, overrides flowrate
            flowrate_a: Mix speed after, overrides flowrate
            aspirate_speed: Aspiration speed; not with aspirate_source
            dispense_speed: Dispense speed; not with dispense_target
            aspirate_source: Aspiration behaviour dict; not with aspirate_speed
            dispense_target: Dispense behaviour dict; not with dispense_speed
            pre_buffer: Volume of air aspirated before the liquid
            disposal_vol: Extra liquid aspirated and dispensed into trash
            transit_vol: Volume of air aspirated after the liquid
            blowout_buffer: Dispense the pre_buffer with the liquid; not with
                disposal_vol
            tip_type: Tip type for this transfer (default: protocol tip type)
            new_group: Start a new pipette instruction instead of merging
                into the previous one

        Raises:
            ShapeMismatchError: If sources and destinations cannot be paired
            VolumeCountMismatchError: If a volume list has the wrong length
            InsufficientVolumeError: If the sources cannot supply the volume
            CapacityExceededError: If a destination would overflow
        """
        mix_options = (mix_vol, mix_vol_b, mix_vol_a, repetitions, repetitions_b,
                       repetitions_a, flowrate, flowrate_b, flowrate_a)
        if any(o is not None for o in mix_options) and not (mix_before or mix_after):
            raise InvalidArgumentError(
                "If you specify mix arguments on transfer() you must also set mix_before and/or mix_after"
            )
        if aspirate_speed is not None and aspirate_source is not None:
            raise InvalidArgumentError("aspirate_speed cannot be combined with aspirate_source")
        if dispense_speed is not None and dispense_target is not None:
            raise InvalidArgumentError("dispense_speed cannot be combined with dispense_target")
        if blowout_buffer and disposal_vol is not None:
            raise InvalidArgumentError("blowout_buffer cannot be True if disposal_vol is specified")

        source, dest = normalize_wells(source, dest, one_source)
        volumes = normalize_volumes(volume, len(dest))

        if one_source:
            steps = apportion_one_source(source, dest, volumes)
        else:
            steps = [TransferStep(s, d, v) for s, d, v in zip(source, dest, volumes)]
        steps = [s for s in split_oversized(steps) if s.volume.value > 0]

        changes = plan_volume_changes(steps, check_sources=one_source)

        extras: Dict[str, Any] = {}
        if aspirate_speed is not None:
            extras["aspirate_speed"] = Unit.fromstring(aspirate_speed)
        if dispense_speed is not None:
            extras["dispense_speed"] = Unit.fromstring(dispense_speed)
        if aspirate_source is not None:
            extras["x_aspirate_source"] = aspirate_source
        if dispense_target is not None:
            extras["x_dispense_target"] = dispense_target
        if pre_buffer is not None:
            extras["x_pre_buffer"] = convert_to_ul(pre_buffer)
        if disposal_vol is not None:
            extras["x_disposal_vol"] = convert_to_ul(disposal_vol)
        if transit_vol is not None:
            extras["x_transit_vol"] = convert_to_ul(transit_vol)
        if blowout_buffer is not None:
            extras["x_blowout_buffer"] = bool(blowout_buffer)

        xfers = []
        for step in steps:
            xfer: Dict[str, Any] = {
                "from": step.source,
                "to": step.destination,
                "volume": step.volume,
            }
            if mix_before:
                xfer["mix_before"] = mix_spec(
                    step.volume,
                    volume=first_given(mix_vol_b, mix_vol),
                    repetitions=first_given(repetitions_b, repetitions),
                    speed=first_given(flowrate_b, flowrate),
                )
            if mix_after:
                xfer["mix_after"] = mix_spec(
                    step.volume,
                    volume=first_given(mix_vol_a, mix_vol),
                    repetitions=first_given(repetitions_a, repetitions),
                    speed=first_given(flowrate_a, flowrate),
                )
            xfer.update(extras)
            xfers.append(xfer)

        tip_type = tip_type if tip_type is not None else self.tip_type
        if one_tip:
            # Tip-sized chunks are pipetted on their own, ahead of the shared-tip group
            shared = [x for s, x in zip(steps, xfers) if not s.chunked]
            groups = [self._transfer_group([x], tip_type) for s, x in zip(steps, xfers) if s.chunked]
            if shared:
                groups.append(self._transfer_group(shared, tip_type))
        else:
            groups = [self._transfer_group([x], tip_type) for x in xfers]

        for well, vol in changes.values():
            well.track_volume(vol)

        if new_group:
            for group in groups:
                self.append(Pipette(groups=[group]))
        elif groups:
            self._pipette(groups)

        logger.debug(
            "Planned transfer of %d step(s) in %d pipette group(s) from %d source and %d destination well(s)",
            len(xfers), len(groups), len(source), len(dest),
        )
        return self

    @staticmethod
    def _transfer_group(xfers: List[dict], tip_type: Optional[str]) -> dict:
        group: Dict[str, Any] = {}
        if tip_type is not None:
            group["x_tip_type"] = tip_type
        group["transfer"] = xfers
        return group

    def dispense(
        self,
        ref: ContainerRef,
        reagent: str,
        columns: List[Dict[str, Any]],
        speed_percentage: Optional[int] = None
    ):
        """
        Dispense reagent to columns of a container using a reagent dispenser.

        Args:
            ref: Container to dispense to
            reagent: Reagent to dispense
            columns: List of {"column": <0-based column>, "volume": <volume>}
            speed_percentage: Dispense speed, 1-100 percent of the maximum
        """
        container = self._container_for(ref)
        if speed_percentage is not None and (
            isinstance(speed_percentage, bool)
            or not isinstance(speed_percentage, int)
            or not 1 <= speed_percentage <= 100
        ):
            raise InvalidArgumentError(f"Invalid speed percentage {speed_percentage!r}; expected 1-100")
        if not isinstance(columns, (list, tuple)) or not columns:
            raise InvalidArgumentError("columns must be a non-empty list of {'column', 'volume'} dicts")

        cols = []
        for c in columns:
            if not isinstance(c, dict) or "column" not in c or "volume" not in c:
                raise InvalidArgumentError(f"Invalid column entry {c!r}; expected {{'column', 'volume'}}")
            column = c["column"]
            if isinstance(column, bool) or not isinstance(column, int) \
                    or not 0 <= column < container.container_type.col_count:
                raise InvalidArgumentError(f"Column {column!r} does not exist in {container}")
            cols.append({"column": column, "volume": convert_to_ul(c["volume"])})

        return self.append(Dispense(ref, reagent, cols, speed_percentage))

    def dispense_full_plate(
        self,
        ref: ContainerRef,
        reagent: str,
        volume: Union[str, Unit],
        speed_percentage: Optional[int] = None
    ):
        """
        Dispense the same volume of reagent to every well of a container.

        Args:
            ref: Container to dispense to
            reagent: Reagent to dispense
            volume: Volume per well
            speed_percentage: Dispense speed, 1-100 percent of the maximum
        """
        container = self._container_for(ref)
        columns = [
            {"column": col, "volume": volume}
            for col in range(container.container_type.col_count)
        ]
        return self.dispense(ref, reagent, columns, speed_percentage)

    # ========================================================================
    # CONTAINER HANDLING
    # ========================================================================

    def incubate(
        self,
        ref: ContainerRef,
        where: str,
        duration: Union[str, Unit],
        shaking: bool = False,
        co2: float = 0
    ):
        """
        Move a container to an incubation location for a duration.

        Args:
            ref: Container to incubate
            where: One of ambient, warm_30, warm_37, cold_4, cold_20, cold_80
            duration: Time to incubate, e.g. "1:hour"
            shaking: Shake the container during incubation
            co2: CO2 percentage
        """
        self._container_for(ref)
        if where not in VALID_INCUBATION_TEMPERATURES:
            raise InvalidArgumentError(
                f"Specified where {where!r} not contained in: {', '.join(VALID_INCUBATION_TEMPERATURES)}"
            )
        if where == "ambient" and shaking:
            raise InvalidArgumentError("Shaking is not possible for ambient incubation")
        return self.append(Incubate(ref, where, Unit.fromstring(duration), bool(shaking), co2))

    def cover(self, ref: ContainerRef, lid: str = DEFAULT_LID):
        """Place a lid (standard, universal or low_evaporation) on a container."""
        self._container_for(ref)
        if lid not in VALID_LIDS:
            raise InvalidArgumentError(f"Not a valid lid type {lid!r}. Valid lid types: {', '.join(VALID_LIDS)}")
        return self.append(Cover(ref, lid))

    def uncover(self, ref: ContainerRef):
        """Remove the lid from a container."""
        self._container_for(ref)
        return self.append(Uncover(ref))

    def flash_freeze(self, ref: ContainerRef, duration: Union[str, Unit]):
        """Flash freeze a container for the given duration."""
        self._container_for(ref)
        return self.append(FlashFreeze(ref, Unit.fromstring(duration)))

    # ========================================================================
    # MEASUREMENT
    # ========================================================================

    def luminescence(self, ref: ContainerRef, wells: Union[WellGroup, List[str]], dataref: str):
        """
        Read luminescence of the indicated wells.

        Args:
            ref: Container to read
            wells: WellGroup or list of well labels to measure
            dataref: Name of the resulting dataset
        """
        container = self._container_for(ref)
        if isinstance(wells, WellGroup):
            if any(w.container is not container for w in wells):
                raise InvalidArgumentError(f"All wells read by luminescence must belong to {container}")
            wells = wells.indices()
        else:
            wells = [container.humanize(container.robotize(w)) for w in wells]
        return self.append(Luminescence(ref, wells, dataref))

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def as_dict(self) -> dict:
        """
        Return the entire protocol as an Autoprotocol dictionary.

        Example output:
            {
              "refs": {"plate": {"new": "96-flat", "discard": True}},
              "instructions": [
                {"op": "pipette", "groups": [{"transfer": [
                  {"from": "plate/0", "to": "plate/1", "volume": "20.0:microliter"}
                ]}]}
              ]
            }

        Raises:
            UnresolvedReferenceError: If an instruction uses a container
                with no ref in this protocol
        """
        outs: Dict[str, Dict[str, dict]] = {}
        for name, ref in self.refs.items():
            for well in ref.container.all_wells():
                entry = {}
                if well.name:
                    entry["name"] = well.name
                if well.properties:
                    entry["properties"] = self._refify(well.properties)
                if entry:
                    outs.setdefault(name, {})[str(well.index)] = entry

        output = {
            "refs": {name: self._refify(ref.opts) for name, ref in self.refs.items()},
            "instructions": [self._refify(i.to_dict()) for i in self.instructions],
        }
        if outs:
            output["outs"] = outs
        return output

    serialize = as_dict

    def as_json(self, **kwargs) -> str:
        """Return the protocol as a JSON string. kwargs go to json.dumps."""
        return json.dumps(self.as_dict(), **kwargs)

    def _refify(self, op_data):
        if isinstance(op_data, dict):
            return {k: self._refify(v) for k, v in op_data.items()}
        if isinstance(op_data, (list, tuple)):
            return [self._refify(d) for d in op_data]
        if isinstance(op_data, Well):
            return self._ref_for_well(op_data)
        if isinstance(op_data, WellGroup):
            return [self._ref_for_well(w) for w in op_data]
        if isinstance(op_data, Container):
            return self._ref_for_container(op_data)
        if isinstance(op_data, Unit):
            return str(op_data)
        return op_data

    def _ref_for_well(self, well: Well) -> str:
        return f"{self._ref_for_container(well.container)}/{well.index}"

    def _ref_for_container(self, container: Container) -> str:
        for name, ref in self.refs.items():
            if ref.container is container:
                return name
        raise UnresolvedReferenceError(f"{container} is not referenced by this protocol")

    def _container_for(self, ref: ContainerRef) -> Container:
        if isinstance(ref, Container):
            self._ref_for_container(ref)
            return ref
        if isinstance(ref, str) and ref in self.refs:
            return self.refs[ref].container
        raise UnresolvedReferenceError(f"Unknown ref {ref!r}")

    # ========================================================================
    # SUMMARY
    # ========================================================================

    def get_summary(self) -> str:
        """
        Get a summary of the protocol.

        Returns:
            Summary string
        """
        lines = []
        lines.append("Protocol")
        lines.append("=" * 40)
        lines.append(f"Total refs: {len(self.refs)}")
        lines.append(f"Total instructions: {len(self.instructions)}")

        counts: Dict[str, int] = {}
        for instruction in self.instructions:
            counts[instruction.op] = counts.get(instruction.op, 0) + 1

        lines.append("\nInstructions by op:")
        for op, count in sorted(counts.items()):
            lines.append(f"  {op}: {count}")

        steps = [
            xfer
            for instruction in self.instructions if isinstance(instruction, Pipette)
            for group in instruction.groups
            for xfer in group.get("transfer", [])
        ]
        if steps:
            total_volume = sum(xfer["volume"].value for xfer in steps)
            lines.append(f"\nTransfer steps: {len(steps)}")
            lines.append(f"Total volume transferred: {total_volume:.1f} µL")

        return "\n".join(lines)

    def print_summary(self):
        """Print protocol summary."""
        print(self.get_summary())
