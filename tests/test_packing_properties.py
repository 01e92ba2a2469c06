"""Invariants that must hold for any valid input, checked over seeded random loads."""

from __future__ import annotations

import random

import pytest

from cargo_packer.geometry import find_overlaps, within_container
from cargo_packer.models import BoxSpec, Container
from cargo_packer.packing.constraints import boxes_resting_on
from cargo_packer.packing.first_fit import pack
from cargo_packer.samples import COLOR_PALETTE, sample_input


def random_load(seed: int) -> tuple[Container, list[BoxSpec]]:
    rng = random.Random(seed)
    container = Container(
        length=rng.randint(60, 200),
        width=rng.randint(40, 120),
        height=rng.randint(40, 120),
    )
    box_types = [
        BoxSpec(
            id=f"t{i}",
            name=f"Type {i}",
            length=rng.randint(5, 60),
            width=rng.randint(5, 60),
            height=rng.randint(2, 40),
            weight=rng.randint(0, 30),
            is_fragile=rng.random() < 0.4,
            color=COLOR_PALETTE[i % len(COLOR_PALETTE)],
            quantity=rng.randint(0, 12),
        )
        for i in range(rng.randint(1, 6))
    ]
    return container, box_types


LOADS = [random_load(seed) for seed in range(25)] + [sample_input()]


@pytest.mark.parametrize("container,box_types", LOADS)
def test_every_unit_is_accounted_for(container, box_types) -> None:
    result = pack(container, box_types)
    stats = result.stats

    requested = sum(b.quantity for b in box_types)
    assert stats.total_boxes == requested
    assert stats.packed_boxes + stats.unpacked_boxes == stats.total_boxes
    assert len(result.boxes) + sum(u.quantity for u in result.unpacked) == requested
    assert result.success is (len(result.boxes) > 0)


@pytest.mark.parametrize("container,box_types", LOADS)
def test_boxes_stay_inside_and_never_overlap(container, box_types) -> None:
    result = pack(container, box_types)

    for b in result.boxes:
        assert within_container(b.bounds(), container), b.id
    assert find_overlaps(result.boxes) == []


@pytest.mark.parametrize("container,box_types", LOADS)
def test_fragile_boxes_carry_at_most_two(container, box_types) -> None:
    result = pack(container, box_types)

    for base in result.boxes:
        if base.box_type.is_fragile:
            assert len(boxes_resting_on(result.boxes, base)) <= 2
            # fragile boxes keep their original height on the vertical axis
            assert base.dimensions.height == base.box_type.height


@pytest.mark.parametrize("container,box_types", LOADS)
def test_utilization_is_a_percentage(container, box_types) -> None:
    result = pack(container, box_types)
    stats = result.stats

    assert 0 <= stats.utilization_percent <= 100
    assert stats.used_volume <= stats.container_volume
    assert stats.container_volume == container.length * container.width * container.height


@pytest.mark.parametrize("container,box_types", LOADS)
def test_packing_is_deterministic(container, box_types) -> None:
    first = pack(container, box_types)
    second = pack(container, box_types)

    assert first.model_dump() == second.model_dump()


def test_sample_load_fills_a_reasonable_share() -> None:
    container, box_types = sample_input()

    result = pack(container, box_types)

    assert result.success is True
    # greedy heuristic: only a loose range is meaningful here
    assert 10 <= result.stats.utilization_percent <= 100
