from __future__ import annotations

import math

from cargo_packer.models import Container, PackingStats, PlacedBox


def placement_volume(p: PlacedBox) -> float:
    d = p.dimensions
    return float(d.length) * float(d.width) * float(d.height)


def utilization_percent(used_volume: float, container_volume: float) -> float:
    """Percentage rounded half-up to one decimal."""
    if container_volume <= 0:
        return 0.0
    return math.floor(used_volume / container_volume * 1000 + 0.5) / 10


def compute_metrics(container: Container, placements: list[PlacedBox]) -> tuple[float, float, float]:
    used_volume = sum(placement_volume(p) for p in placements)
    container_volume = float(container.length) * float(container.width) * float(container.height)
    fill_rate = 0.0 if container_volume == 0 else used_volume / container_volume
    return used_volume, container_volume, fill_rate


def compute_stats(container: Container, placements: list[PlacedBox], total_boxes: int) -> PackingStats:
    used_volume, container_volume, _ = compute_metrics(container, placements)
    # Each placed unit carries its box type's full weight whatever the orientation.
    total_weight = sum(float(p.box_type.weight) for p in placements)
    return PackingStats(
        total_boxes=total_boxes,
        packed_boxes=len(placements),
        unpacked_boxes=total_boxes - len(placements),
        container_volume=container_volume,
        used_volume=used_volume,
        utilization_percent=utilization_percent(used_volume, container_volume),
        total_weight=total_weight,
    )
