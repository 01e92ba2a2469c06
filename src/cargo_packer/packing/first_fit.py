# src/cargo_packer/packing/first_fit.py

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from cargo_packer.metrics import compute_stats
from cargo_packer.models import (
    BoxSpec,
    Container,
    Dimensions,
    PackingResult,
    PlacedBox,
    Position,
    Rotation,
)
from cargo_packer.packing.constraints import Constraint, FragilityConstraint
from cargo_packer.packing.spaces import FreeSpaceList

logger = logging.getLogger(__name__)

# Per-placement trace; stays quiet unless CARGO_PACKER_DEBUG=1 lowers its level.
PLACEMENT_LOGGER = "cargo_packer.placements"
placement_logger = logging.getLogger(PLACEMENT_LOGGER)
placement_logger.setLevel(logging.INFO)


@dataclass(frozen=True)
class PlacementUnit:
    """One physical box to place: its box type and instance index."""

    box_type: BoxSpec
    index: int

    @property
    def volume(self) -> float:
        return self.box_type.volume


def expand_units(box_types: list[BoxSpec]) -> list[PlacementUnit]:
    """
    Expand box types into individual units, biggest volume first.

    The sort is stable: equal volumes keep input order.
    """
    units = [
        PlacementUnit(box_type=bt, index=i)
        for bt in box_types
        for i in range(bt.quantity)
    ]
    return sorted(units, key=lambda u: u.volume, reverse=True)


def rotations_6(box: BoxSpec) -> list[tuple[float, float, float, int]]:
    """
    Return the allowed axis-aligned orientations plus a rotation code 0..5.
    rotation code meaning:
      0:(L,W,H) 1:(L,H,W) 2:(W,L,H) 3:(W,H,L) 4:(H,L,W) 5:(H,W,L)
    Fragile boxes keep their height vertical, so only codes 0 and 2.
    """
    L, W, H = float(box.length), float(box.width), float(box.height)
    if box.is_fragile:
        dims = [
            (L, W, H, 0),
            (W, L, H, 2),
        ]
    else:
        dims = [
            (L, W, H, 0),
            (L, H, W, 1),
            (W, L, H, 2),
            (W, H, L, 3),
            (H, L, W, 4),
            (H, W, L, 5),
        ]
    # Cubes and square faces repeat orientations; keep the first of each.
    seen = set()
    out: list[tuple[float, float, float, int]] = []
    for a, b, c, r in dims:
        key = (a, b, c)
        if key not in seen:
            seen.add(key)
            out.append((a, b, c, r))
    return out


def rotation_for(box: BoxSpec, dims: tuple[float, float, float]) -> Rotation:
    """Render rotation: a quarter turn about y for a length/width swap, identity otherwise."""
    L, W, H = dims
    if (L, W, H) == (box.length, box.width, box.height):
        return Rotation()
    if (L, W, H) == (box.width, box.length, box.height):
        return Rotation(y=math.pi / 2)
    return Rotation()


def pack(
    container: Container,
    box_types: list[BoxSpec],
    constraints: list[Constraint] | None = None,
) -> PackingResult:
    """
    First-fit decreasing packer over guillotine-split free spaces.
    - Units are tried biggest first
    - For each unit: first space (bottom-first order), then first allowed orientation
    - Accepts the first placement that fits the space and passes all constraints
    - Units that fit nowhere are counted as unpacked per box type
    - Deterministic, and never mutates its inputs
    """
    if constraints is None:
        constraints = [FragilityConstraint()]

    units = expand_units(box_types)
    spaces = FreeSpaceList(container)
    debug = placement_logger.isEnabledFor(logging.DEBUG)

    placed: list[PlacedBox] = []
    unpacked_counts: dict[str, int] = {}

    for unit in units:
        box = unit.box_type
        orientations = rotations_6(box)
        done = False

        for space_idx, space in enumerate(spaces):
            for (l, w, h, rot_code) in orientations:
                if not space.fits(l, w, h):
                    continue

                if not all(c.check(placed, space.x, space.y, space.z, (l, w, h)) for c in constraints):
                    continue

                placed.append(PlacedBox(
                    id=f"{box.id}_{unit.index}",
                    box_type=box,
                    position=Position(x=space.x, y=space.y, z=space.z),
                    dimensions=Dimensions(length=l, width=w, height=h),
                    rotation=rotation_for(box, (l, w, h)),
                    orientation=rot_code,
                ))
                spaces.consume(space_idx, l, w, h)
                done = True
                if debug:
                    placement_logger.debug(
                        f"placed {box.id}_{unit.index} at ({space.x}, {space.y}, {space.z}) "
                        f"dims=({l}, {w}, {h}) code={rot_code} spaces={len(spaces)}"
                    )
                break

            if done:
                break

        if not done:
            unpacked_counts[box.id] = unpacked_counts.get(box.id, 0) + 1
            if debug:
                placement_logger.debug(f"unpacked {box.id}_{unit.index}")

    # One record per box type, in the order box types first failed.
    by_id = {}
    for bt in box_types:
        by_id.setdefault(bt.id, bt)
    unpacked = [
        by_id[box_id].model_copy(update={"quantity": count})
        for box_id, count in unpacked_counts.items()
    ]

    stats = compute_stats(container, placed, total_boxes=len(units))

    logger.debug(
        f"pack: packed={stats.packed_boxes}/{stats.total_boxes} "
        f"utilization={stats.utilization_percent}% spaces_left={len(spaces)}"
    )

    return PackingResult(
        success=len(placed) > 0,
        boxes=placed,
        unpacked=unpacked,
        stats=stats,
    )
