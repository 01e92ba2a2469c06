"""Plan formatting shared by the API and CLI: metrics, summary text and render data."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from cargo_packer.models import Container, PackingResult, PlacedBox

logger = logging.getLogger(__name__)


def build_placements_render(boxes: list[PlacedBox]) -> list[dict[str, Any]]:
    """
    Lightweight per-box render data (JSON primitives only).

    dims are the oriented [L, W, H]; y is the vertical axis.
    """
    return [
        {
            "x": float(b.position.x),
            "y": float(b.position.y),
            "z": float(b.position.z),
            "dims": [float(b.dimensions.length), float(b.dimensions.width), float(b.dimensions.height)],
            "color": b.box_type.color,
        }
        for b in boxes
    ]


def container_render(container: Container) -> dict[str, float]:
    return {
        "L": float(container.length),
        "W": float(container.width),
        "H": float(container.height),
    }


def limiting_factor(result: PackingResult) -> tuple[str, str]:
    stats = result.stats
    if stats.unpacked_boxes == 0:
        return "none", "All requested boxes were loaded."
    if stats.utilization_percent >= 99.5:
        return "volume", "Container volume was fully utilized."
    return "dimensions", "Some boxes did not fit in the remaining space."


def summary_text(result: PackingResult) -> str:
    stats = result.stats
    factor, reason = limiting_factor(result)
    lines = [
        "Packing Complete" if result.success else "Packing Failed: no box fits the container",
        f"Utilization: {stats.utilization_percent:.1f}%",
        f"Boxes Packed: {stats.packed_boxes}/{stats.total_boxes}",
        f"Boxes Unpacked: {stats.unpacked_boxes}",
        f"Total Weight: {stats.total_weight:.1f} kg",
        f"Limiting Factor: {factor} ({reason})",
    ]
    for u in result.unpacked:
        lines.append(f"  - {u.name or u.id}: {u.quantity} not packed")
    return "\n".join(lines)


def format_output(
    container: Container,
    result: PackingResult,
    include_render: bool = False,
) -> dict[str, Any]:
    """Response with guaranteed `metrics`, `summary` and `result` fields."""
    stats = result.stats
    factor, reason = limiting_factor(result)
    response: dict[str, Any] = {
        "metrics": {
            "success": result.success,
            "total_boxes": stats.total_boxes,
            "packed_boxes": stats.packed_boxes,
            "unpacked_boxes": stats.unpacked_boxes,
            "utilization_percent": stats.utilization_percent,
            "total_weight": stats.total_weight,
            "limiting_factor": factor,
            "limiting_reason": reason,
        },
        "summary": summary_text(result),
        "result": result.model_dump(mode="json"),
    }

    if include_render:
        # Always present when requested (empty [] if nothing was placed).
        response["placements_render"] = build_placements_render(result.boxes)
        response["container_render"] = container_render(container)

    return response


def write_plan(plan: dict, path: str = "plan.json") -> Path:
    """
    Write a plan dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"write_plan: writing to {output_path}")
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)
    return output_path


def write_placements_jsonl(result: PackingResult, path: Path) -> Path:
    """One placed box per line."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for b in result.boxes:
            f.write(json.dumps(b.model_dump(mode="json"), separators=(",", ":")) + "\n")
    return path
