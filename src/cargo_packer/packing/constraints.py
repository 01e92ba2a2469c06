"""Constraints for packing optimization."""

from __future__ import annotations

from cargo_packer.geometry import footprints_overlap
from cargo_packer.models import PlacedBox

# Faces closer than this are treated as touching.
STACK_EPSILON = 0.1

# Maximum number of boxes resting directly on a fragile box.
MAX_BOXES_ON_FRAGILE = 2


class Constraint:
    """Base class for placement constraints."""

    def check(
        self,
        placed: list[PlacedBox],
        x: float,
        y: float,
        z: float,
        dims: tuple[float, float, float],
    ) -> bool:
        """
        Check if a candidate placement is allowed given the boxes already placed.

        Args:
            placed: Boxes placed so far, in placement order
            x, y, z: Candidate minimum corner (y is vertical)
            dims: Candidate oriented dims (L, W, H)

        Returns:
            True if the placement is allowed, False otherwise
        """
        raise NotImplementedError


def boxes_resting_on(placed: list[PlacedBox], base: PlacedBox, epsilon: float = STACK_EPSILON) -> list[PlacedBox]:
    """Boxes whose bottom face sits on `base`'s top face and whose footprint overlaps it."""
    top = base.position.y + base.dimensions.height
    bp, bd = base.position, base.dimensions
    return [
        b for b in placed
        if abs(b.position.y - top) < epsilon
        and footprints_overlap(
            b.position.x, b.position.z, b.dimensions.length, b.dimensions.width,
            bp.x, bp.z, bd.length, bd.width,
        )
    ]


class FragilityConstraint(Constraint):
    """At most `max_on_top` boxes may rest directly on any fragile box."""

    def __init__(self, max_on_top: int = MAX_BOXES_ON_FRAGILE, epsilon: float = STACK_EPSILON):
        self.max_on_top = max_on_top
        self.epsilon = epsilon

    def check(self, placed, x, y, z, dims) -> bool:
        L, W, _ = dims
        for base in placed:
            if not base.box_type.is_fragile:
                continue

            top = base.position.y + base.dimensions.height
            if abs(y - top) >= self.epsilon:
                continue

            bp, bd = base.position, base.dimensions
            if not footprints_overlap(x, z, L, W, bp.x, bp.z, bd.length, bd.width):
                continue

            if len(boxes_resting_on(placed, base, self.epsilon)) >= self.max_on_top:
                return False

        return True
