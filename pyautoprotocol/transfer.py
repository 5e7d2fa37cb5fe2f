"""
Transfer planning.

These functions turn a high-level transfer request into a flat list of
atomic (source, destination, volume) steps:

1. normalize_wells / normalize_volumes pair sources with destinations
2. apportion_one_source draws from a pool of source wells holding the
   same substance
3. split_oversized bounds every step by the tip capacity
4. plan_volume_changes checks the resulting well volumes before anything
   is committed

None of them mutate wells; Protocol.transfer commits the plan.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .constants import (
    DEFAULT_MIX_REPETITIONS,
    DEFAULT_MIX_SPEED,
    MAX_TIP_VOLUME_UL,
    MICROLITER,
    VOLUME_DECIMAL_PLACES,
)
from .errors import (
    CapacityExceededError,
    InsufficientVolumeError,
    InvalidArgumentError,
    ShapeMismatchError,
    VolumeCountMismatchError,
)
from .unit import Unit
from .util import convert_to_ul
from .well import Well
from .well_group import WellGroup

logger = logging.getLogger(__name__)

VolumeSpec = Union[str, Unit]


@dataclass
class TransferStep:
    """A single atomic movement of liquid between two wells."""
    source: Well
    destination: Well
    volume: Unit  # in µL
    chunked: bool = False  # produced by splitting at the tip capacity


def _ul(value: float) -> Unit:
    return Unit(round(value, VOLUME_DECIMAL_PLACES), MICROLITER)


def normalize_wells(
    source: Union[Well, WellGroup, Sequence[Well]],
    dest: Union[Well, WellGroup, Sequence[Well]],
    one_source: bool = False
) -> Tuple[WellGroup, WellGroup]:
    """
    Coerce source and destination into WellGroups of matching length.

    Unless one_source is set, a single source is replicated for many
    destinations and a single destination for many sources. Any other
    size mismatch is an error.
    """
    source = WellGroup(source)
    dest = WellGroup(dest)
    if not len(source) or not len(dest):
        raise InvalidArgumentError("A transfer needs at least one source and one destination well")

    if not one_source:
        if len(source) == 1 and len(dest) > 1:
            source = WellGroup(source.wells * len(dest))
        elif len(dest) == 1 and len(source) > 1:
            dest = WellGroup(dest.wells * len(source))
        if len(source) != len(dest):
            raise ShapeMismatchError(
                "To transfer liquid from multiple wells containing the same source, "
                "set one_source to True. To transfer liquid from multiple wells to a "
                "single destination well, specify only one destination well. Otherwise, "
                "specify the same number of source and destination wells to do a "
                "one-to-one transfer."
            )
    return source, dest


def normalize_volumes(volume: Union[VolumeSpec, Sequence[VolumeSpec]], count: int) -> List[Unit]:
    """
    Expand volume into one microliter Unit per destination.

    Args:
        volume: A single volume, or a list with one entry per destination
        count: Number of destinations

    Raises:
        VolumeCountMismatchError: If a list has the wrong length
    """
    if isinstance(volume, (str, Unit)):
        volumes = [volume] * count
    elif isinstance(volume, (list, tuple)):
        if len(volume) != count:
            raise VolumeCountMismatchError(
                f"Got {len(volume)} volumes for {count} destination wells. Unless the same "
                "volume is transferred to each destination well, each destination well must "
                "have a corresponding volume in the list."
            )
        volumes = list(volume)
    else:
        raise InvalidArgumentError(f"Volume must be a str, Unit or list, got {type(volume).__name__}")

    result = []
    for v in volumes:
        v = convert_to_ul(v)
        if v.value < 0:
            raise InvalidArgumentError(f"Cannot transfer a negative volume: {v}")
        result.append(v)
    return result


def apportion_one_source(
    source: WellGroup,
    dest: WellGroup,
    volumes: List[Unit]
) -> List[TransferStep]:
    """
    Draw the requested volumes from a pool of source wells.

    If each source holds enough for its paired destination the wells are
    paired directly. Otherwise destinations are filled in order from the
    current source well until it empties, then from the next one.

    Raises:
        InsufficientVolumeError: If a source has no volume set or the pool
            cannot cover the total request
    """
    available = []
    for s in source:
        if s.volume is None:
            raise InsufficientVolumeError(
                "When transferring liquid from multiple wells containing the same substance, "
                f"each source well must have a volume set; {s} has none"
            )
        available.append(s.volume.value)

    requested = sum(v.value for v in volumes)
    if round(requested, VOLUME_DECIMAL_PLACES) > round(sum(available), VOLUME_DECIMAL_PLACES):
        raise InsufficientVolumeError(
            f"There is not enough volume in the source well(s) to complete the transfers "
            f"({requested} microliter requested, {sum(available)} microliter available)"
        )

    if len(source) >= len(dest) and all(a >= v.value for a, v in zip(available, volumes)):
        return [TransferStep(s, d, v) for s, d, v in zip(source, dest, volumes)]

    logger.debug("Filling %d destinations sequentially from %d source wells", len(dest), len(source))
    steps = []
    idx = 0
    remaining = available[0]
    for d, v in zip(dest, volumes):
        needed = v.value
        while needed > 0:
            if idx >= len(source):
                raise InsufficientVolumeError("Source wells were exhausted before all transfers were planned")
            s = source[idx]
            if remaining > needed:
                steps.append(TransferStep(s, d, _ul(needed)))
                remaining = round(remaining - needed, VOLUME_DECIMAL_PLACES)
                needed = 0
            else:
                if remaining > 0:
                    steps.append(TransferStep(s, d, _ul(remaining)))
                needed = round(needed - remaining, VOLUME_DECIMAL_PLACES)
                idx += 1
                remaining = available[idx] if idx < len(available) else 0.0
    return steps


def split_oversized(steps: List[TransferStep], max_volume: float = MAX_TIP_VOLUME_UL) -> List[TransferStep]:
    """
    Break steps larger than max_volume into max_volume chunks followed by
    the remainder, keeping their position in the list. Every piece of a
    split step is marked as chunked.
    """
    result = []
    for step in steps:
        remaining = step.volume.value
        if remaining <= max_volume:
            result.append(step)
            continue
        logger.debug("Splitting %s from %s to %s into tip-sized steps",
                     step.volume, step.source, step.destination)
        while remaining > max_volume:
            result.append(TransferStep(step.source, step.destination, _ul(max_volume), chunked=True))
            remaining = round(remaining - max_volume, VOLUME_DECIMAL_PLACES)
        result.append(TransferStep(step.source, step.destination, _ul(remaining), chunked=True))
    return result


def plan_volume_changes(
    steps: List[TransferStep],
    check_sources: bool = False
) -> Dict[int, Tuple[Well, Unit]]:
    """
    Replay steps against the current well volumes without touching them.

    Tracked source volumes are decremented and may go below zero, unless
    check_sources is set (a one-source pool), in which case that is an
    error.

    Returns:
        Mapping of id(well) to (well, new volume) for every well whose
        tracked volume changes

    Raises:
        CapacityExceededError: If a destination would overflow
        InsufficientVolumeError: If check_sources is set and a tracked source
            volume would go negative
    """
    volumes: Dict[int, Tuple[Well, Optional[float]]] = {}

    def current(well: Well) -> Optional[float]:
        if id(well) not in volumes:
            volumes[id(well)] = (well, well.volume.value if well.volume is not None else None)
        return volumes[id(well)][1]

    for step in steps:
        amount = step.volume.value

        src_vol = current(step.source)
        if src_vol is not None:
            src_vol = round(src_vol - amount, VOLUME_DECIMAL_PLACES)
            if src_vol < 0:
                if check_sources:
                    raise InsufficientVolumeError(
                        f"{step.source} does not hold enough liquid to transfer {step.volume}"
                    )
                logger.warning("%s is drawn below empty by a transfer of %s", step.source, step.volume)
            volumes[id(step.source)] = (step.source, src_vol)

        dest_vol = current(step.destination)
        dest_vol = amount if dest_vol is None else round(dest_vol + amount, VOLUME_DECIMAL_PLACES)
        capacity = step.destination.container.container_type.well_volume_ul
        if dest_vol > capacity:
            raise CapacityExceededError(
                f"Transferring {step.volume} into {step.destination} would exceed "
                f"its maximum volume of {capacity} microliter"
            )
        volumes[id(step.destination)] = (step.destination, dest_vol)

    return {
        key: (well, _ul(vol))
        for key, (well, vol) in volumes.items()
        if vol is not None and (well.volume is None or well.volume.value != vol)
    }


def mix_spec(
    transfer_volume: Unit,
    volume: Optional[VolumeSpec] = None,
    repetitions: Optional[int] = None,
    speed: Optional[VolumeSpec] = None
) -> dict:
    """
    Build mix parameters, falling back to half the transfer volume,
    DEFAULT_MIX_REPETITIONS and DEFAULT_MIX_SPEED.
    """
    if repetitions is not None and (isinstance(repetitions, bool) or not isinstance(repetitions, int)
                                    or repetitions < 1):
        raise InvalidArgumentError(f"Mix repetitions must be a positive int, got {repetitions!r}")
    return {
        "volume": convert_to_ul(volume) if volume is not None else transfer_volume / 2,
        "repetitions": repetitions if repetitions is not None else DEFAULT_MIX_REPETITIONS,
        "speed": Unit.fromstring(speed if speed is not None else DEFAULT_MIX_SPEED),
    }


def first_given(*values):
    """Return the first value that is not None."""
    for v in values:
        if v is not None:
            return v
    return None
