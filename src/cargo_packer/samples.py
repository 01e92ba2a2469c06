# src/cargo_packer/samples.py
from __future__ import annotations

import uuid

from cargo_packer.models import BoxSpec, Container

# Internal usable dims (cm), y/height vertical.
CONTAINER_PRESETS_CM: dict[str, dict[str, float]] = {
    "EURO-PALLET": {"length": 120.0,  "width": 80.0,   "height": 80.0},
    "20":          {"length": 590.0,  "width": 235.2,  "height": 239.5},
    "20HC":        {"length": 589.1,  "width": 233.0,  "height": 270.0},
    "40":          {"length": 1203.2, "width": 235.2,  "height": 239.5},
    "40HC":        {"length": 1203.2, "width": 235.0,  "height": 270.0},
    "48HC":        {"length": 1447.0, "width": 235.2,  "height": 269.8},
    "53HC":        {"length": 1595.1, "width": 248.9,  "height": 276.9},
}

# Easy to distinguish, colorblind-friendly.
COLOR_PALETTE: list[str] = [
    "#FF6B6B",  # coral red
    "#4ECDC4",  # teal
    "#95E1D3",  # mint
    "#F38181",  # light coral
    "#FCE38A",  # yellow
    "#A8D8EA",  # light blue
    "#AA96DA",  # lavender
    "#FCBAD3",  # pink
    "#F9ED69",  # bright yellow
    "#6A0572",  # purple
]


def get_container_dims(preset: str) -> dict[str, float]:
    key = preset.strip().upper()
    if key not in CONTAINER_PRESETS_CM:
        raise ValueError(f"Unknown container_preset '{preset}'. Valid: {sorted(CONTAINER_PRESETS_CM.keys())}")
    return dict(CONTAINER_PRESETS_CM[key])


def get_container(preset: str) -> Container:
    return Container(**get_container_dims(preset))


def next_color(used_colors: list[str]) -> str:
    """First palette color not in use; once all are taken, cycle through the palette."""
    used = {c.upper() for c in used_colors}
    for color in COLOR_PALETTE:
        if color.upper() not in used:
            return color
    return COLOR_PALETTE[len(used_colors) % len(COLOR_PALETTE)]


def generate_box_id() -> str:
    return f"box_{uuid.uuid4().hex[:12]}"


def sample_input() -> tuple[Container, list[BoxSpec]]:
    """Euro pallet sized container with a mix of fragile and non-fragile box types."""
    container = get_container("euro-pallet")
    box_types = [
        BoxSpec(id="electronics", name="Electronics", length=30, width=20, height=15,
                weight=10, is_fragile=True, color="#FF6B6B", quantity=5),
        BoxSpec(id="textiles", name="Textiles", length=40, width=30, height=10,
                weight=3, is_fragile=False, color="#4ECDC4", quantity=8),
        BoxSpec(id="books", name="Books", length=25, width=20, height=20,
                weight=8, is_fragile=False, color="#95E1D3", quantity=6),
        BoxSpec(id="ceramics", name="Ceramics", length=20, width=20, height=25,
                weight=5, is_fragile=True, color="#F38181", quantity=4),
    ]
    return container, box_types
