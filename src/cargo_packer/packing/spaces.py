"""Free-space tracking for the guillotine packer."""

from __future__ import annotations

from dataclasses import dataclass

from cargo_packer.models import Container

# Spaces at or below this size on any axis are dropped after each placement.
MIN_SPACE_EXTENT = 1.0


@dataclass(frozen=True)
class Space:
    """An empty axis-aligned region: origin corner plus extents (length=x, width=z, height=y)."""

    x: float
    y: float
    z: float
    length: float
    width: float
    height: float

    def fits(self, length: float, width: float, height: float) -> bool:
        return length <= self.length and width <= self.width and height <= self.height


def split_space(space: Space, box_length: float, box_width: float, box_height: float) -> list[Space]:
    """
    Guillotine split of `space` by a box placed at its origin.

    Produces up to three residuals, in order: right of the box (x),
    in front of it (z) and above it (y). Empty residuals are skipped.
    """
    residuals: list[Space] = []

    if space.length - box_length > 0:
        residuals.append(Space(
            x=space.x + box_length,
            y=space.y,
            z=space.z,
            length=space.length - box_length,
            width=space.width,
            height=space.height,
        ))

    if space.width - box_width > 0:
        residuals.append(Space(
            x=space.x,
            y=space.y,
            z=space.z + box_width,
            length=box_length,
            width=space.width - box_width,
            height=space.height,
        ))

    if space.height - box_height > 0:
        residuals.append(Space(
            x=space.x,
            y=space.y + box_height,
            z=space.z,
            length=box_length,
            width=box_width,
            height=space.height - box_height,
        ))

    return residuals


class FreeSpaceList:
    """
    Ordered list of candidate spaces for one packing run.

    Spaces are kept sorted bottom-first, then by x, then by z, so the
    placement scan prefers low positions near the loading corner. Spaces
    made redundant by later placements are not pruned.
    """

    def __init__(self, container: Container):
        self._spaces: list[Space] = [
            Space(
                x=0.0,
                y=0.0,
                z=0.0,
                length=float(container.length),
                width=float(container.width),
                height=float(container.height),
            )
        ]

    def __iter__(self):
        return iter(list(self._spaces))

    def __len__(self) -> int:
        return len(self._spaces)

    @property
    def spaces(self) -> list[Space]:
        return list(self._spaces)

    def consume(self, index: int, box_length: float, box_width: float, box_height: float) -> list[Space]:
        """Replace the space at `index` with its residuals, then reorder and prune."""
        space = self._spaces[index]
        residuals = split_space(space, box_length, box_width, box_height)
        self._spaces[index:index + 1] = residuals
        self._spaces.sort(key=lambda s: (s.y, s.x, s.z))
        self._spaces = [
            s for s in self._spaces
            if s.length > MIN_SPACE_EXTENT and s.width > MIN_SPACE_EXTENT and s.height > MIN_SPACE_EXTENT
        ]
        return residuals
