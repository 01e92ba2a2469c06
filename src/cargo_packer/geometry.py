"""Geometry utilities for container packing.

Axis convention: x runs along length, y is vertical (height), z runs along width.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Container, PlacedBox

Bounds = tuple[float, float, float, float, float, float]


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Overlap exists only if they overlap on ALL 3 axes with positive volume.
    Touching faces/edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    return (ax1 < bx2 and ax2 > bx1) and (ay1 < by2 and ay2 > by1) and (az1 < bz2 and az2 > bz1)


def footprints_overlap(
    x1: float, z1: float, length1: float, width1: float,
    x2: float, z2: float, length2: float, width2: float,
) -> bool:
    """Overlap of two floor rectangles on the x/z plane (touching edges do not count)."""
    return (x1 < x2 + length2 and x1 + length1 > x2) and (z1 < z2 + width2 and z1 + width1 > z2)


def placement_bounds(x: float, y: float, z: float, dims: tuple[float, float, float]) -> Bounds:
    """Bounds of a box at (x, y, z) with oriented dims (L, W, H)."""
    L, W, H = dims
    return (x, y, z, x + L, y + H, z + W)


def within_container(bounds: Bounds, container: "Container") -> bool:
    x1, y1, z1, x2, y2, z2 = bounds
    if x1 < 0 or y1 < 0 or z1 < 0:
        return False
    return x2 <= container.length and y2 <= container.height and z2 <= container.width


def find_overlaps(boxes: list["PlacedBox"]) -> list[tuple[str, str]]:
    """Return id pairs of placed boxes whose volumes intersect."""
    bounds = [b.bounds() for b in boxes]
    pairs: list[tuple[str, str]] = []
    for i in range(len(bounds)):
        for j in range(i + 1, len(bounds)):
            if boxes_overlap(bounds[i], bounds[j]):
                pairs.append((boxes[i].id, boxes[j].id))
    return pairs
