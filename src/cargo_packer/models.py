from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Container(BaseModel):
    """Container model with inner dimensions (height is the vertical axis)."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(gt=0, description="Length of the container (x axis)")
    width: float = Field(gt=0, description="Width of the container (z axis)")
    height: float = Field(gt=0, description="Height of the container (y axis, vertical)")


class BoxSpec(BaseModel):
    """A box type: one product with its dimensions and requested quantity."""

    id: str = Field(description="Unique identifier for the box type")
    name: str = Field(default="", description="Display name (e.g. 'Electronics')")
    length: float = Field(gt=0, description="Length of the box")
    width: float = Field(gt=0, description="Width of the box")
    height: float = Field(gt=0, description="Height of the box")
    weight: float = Field(default=0.0, ge=0, description="Weight in kg")
    is_fragile: bool = Field(default=False, description="If true, stacking on top is limited")
    color: str = Field(default="#4ECDC4", description="Hex display color")
    quantity: int = Field(default=1, ge=0, description="Number of boxes of this type")

    @property
    def volume(self) -> float:
        return float(self.length) * float(self.width) * float(self.height)


class Position(BaseModel):
    """Minimum corner of a placed box."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(ge=0)
    y: float = Field(ge=0)
    z: float = Field(ge=0)


class Dimensions(BaseModel):
    """Effective (oriented) extents of a placed box."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(gt=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.length, self.width, self.height)


class Rotation(BaseModel):
    """Rotation applied for rendering, in radians about each axis."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class PlacedBox(BaseModel):
    """One placed unit: position, oriented dimensions and the box type it came from."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="'{box_type.id}_{index}'")
    box_type: BoxSpec
    position: Position
    dimensions: Dimensions

    # Render rotation only tells identity from a length/width swap;
    # `orientation` carries the exact permutation code (0..5).
    rotation: Rotation = Field(default_factory=Rotation)
    orientation: int = Field(default=0, ge=0, le=5, description="Axis permutation code")

    def bounds(self) -> tuple[float, float, float, float, float, float]:
        """(x1, y1, z1, x2, y2, z2) with y vertical."""
        p, d = self.position, self.dimensions
        return (p.x, p.y, p.z, p.x + d.length, p.y + d.height, p.z + d.width)


class PackingStats(BaseModel):
    """Aggregate statistics for one packing run."""

    total_boxes: int = 0
    packed_boxes: int = 0
    unpacked_boxes: int = 0
    container_volume: float = 0.0
    used_volume: float = 0.0
    utilization_percent: float = 0.0
    total_weight: float = 0.0


class PackingResult(BaseModel):
    """Standard result returned by the packing engine."""

    success: bool = False
    boxes: list[PlacedBox] = Field(default_factory=list)
    unpacked: list[BoxSpec] = Field(default_factory=list)
    stats: PackingStats = Field(default_factory=PackingStats)
