"""Input validation for the packing surfaces (the engine itself assumes valid input)."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from cargo_packer.models import BoxSpec, Container
from cargo_packer.samples import generate_box_id, next_color


class InvalidInputError(ValueError):
    """Raised by the surfaces when a request cannot be packed; carries user-facing messages."""

    def __init__(self, details: list[str]):
        self.details = details
        super().__init__("; ".join(details))


def _positive(*values: Any) -> bool:
    try:
        return all(float(v) > 0 for v in values)
    except (TypeError, ValueError):
        return False


def validate_input(
    container: dict[str, Any] | None,
    box_types: list[dict[str, Any]] | None,
    max_total_units: int | None = None,
) -> list[str]:
    """
    Validate raw container and box type dicts.

    Returns:
        List of user-facing messages; empty when the input can be packed.
    """
    errors: list[str] = []

    if not container or not _positive(
        container.get("length"), container.get("width"), container.get("height")
    ):
        errors.append("Container dimensions must be positive numbers")

    if not box_types or not isinstance(box_types, list):
        errors.append("Please add at least one box type")
        return errors

    seen_ids: set[str] = set()
    total_units = 0
    for i, box in enumerate(box_types):
        if not isinstance(box, dict):
            errors.append(f"Box #{i + 1} must be an object")
            continue
        box_id = box.get("id")
        name = box.get("name") or (box_id if isinstance(box_id, str) and box_id else f"#{i + 1}")

        # Blank ids are generated later, so only real ids take part in the duplicate check.
        if box_id:
            if not isinstance(box_id, str):
                errors.append(f'Box "{name}" has an invalid id')
            elif box_id in seen_ids:
                errors.append(f'Duplicate box type id "{box_id}"')
            else:
                seen_ids.add(box_id)

        if not _positive(box.get("length"), box.get("width"), box.get("height")):
            errors.append(f'Box "{name}" has invalid dimensions')

        weight = box.get("weight", 0)
        try:
            if float(weight) < 0:
                errors.append(f'Box "{name}" has negative weight')
        except (TypeError, ValueError):
            errors.append(f'Box "{name}" has invalid weight')

        quantity = box.get("quantity", 1)
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            errors.append(f'Box "{name}" must have at least 1 quantity')
        else:
            total_units += quantity

    if max_total_units is not None and total_units > max_total_units:
        errors.append(f"Too many boxes requested ({total_units} > {max_total_units})")

    return errors


def parse_input(
    container: dict[str, Any] | None,
    box_types: list[dict[str, Any]] | None,
    max_total_units: int | None = None,
) -> tuple[Container, list[BoxSpec]]:
    """Validate then build models; raises InvalidInputError with every problem found."""
    errors = validate_input(container, box_types, max_total_units)
    if errors:
        raise InvalidInputError(errors)

    # Box types entered without an id or color get generated ones.
    filled: list[dict[str, Any]] = []
    used_colors = [b["color"] for b in box_types if b.get("color")]
    for b in box_types:
        b = dict(b)
        if not b.get("id"):
            b["id"] = generate_box_id()
        if not b.get("color"):
            b["color"] = next_color(used_colors)
            used_colors.append(b["color"])
        filled.append(b)

    try:
        parsed_container = Container(**container)
        parsed_boxes = [BoxSpec(**b) for b in filled]
    except ValidationError as e:
        raise InvalidInputError(
            [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        ) from e

    return parsed_container, parsed_boxes
