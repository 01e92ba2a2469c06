from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from cargo_packer.config import configure_logging, get_settings
from cargo_packer.models import BoxSpec, Container
from cargo_packer.packing.first_fit import pack
from cargo_packer.report import format_output, write_placements_jsonl, write_plan
from cargo_packer.samples import get_container_dims, sample_input
from cargo_packer.validation import InvalidInputError, parse_input

logger = logging.getLogger(__name__)


def load_input(path: Path, preset: str | None = None, max_total_units: int | None = None) -> tuple[Container, list[BoxSpec]]:
    """
    Load a shipment JSON file: {"container": {...} | "container_preset": "40HC", "box_types": [...]}.

    A --preset given on the command line wins over the file's preset; explicit
    container keys in the file still override preset dims.
    """
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise InvalidInputError(["Input file must contain a JSON object"])

    container_kwargs: dict[str, Any] = {}
    preset = preset or data.get("container_preset")
    if preset:
        container_kwargs.update(get_container_dims(str(preset)))
        logger.info(f"Using container preset: {preset} -> {container_kwargs}")
    if isinstance(data.get("container"), dict):
        container_kwargs.update(data["container"])

    return parse_input(container_kwargs or None, data.get("box_types"), max_total_units=max_total_units)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cargo Packer CLI")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Input shipment JSON file")
    source.add_argument("--sample", action="store_true", help="Pack the built-in sample data")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument("--preset", help="Container preset (e.g. 20, 40HC, euro-pallet)")
    parser.add_argument(
        "--full",
        action="store_true",
        help="Also write placements to <output>_placements.jsonl",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Include placements_render/container_render in the plan",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(settings)

    try:
        if args.sample:
            container, box_types = sample_input()
            if args.preset:
                container = Container(**get_container_dims(args.preset))
        else:
            container, box_types = load_input(Path(args.input), args.preset, settings.max_total_units)
    except InvalidInputError as e:
        for msg in e.details:
            print(f"error: {msg}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = pack(container, box_types)
    stats = result.stats

    logger.info(
        f"Packed {stats.packed_boxes}/{stats.total_boxes}, Unpacked {stats.unpacked_boxes}, "
        f"Utilization={stats.utilization_percent}%, Weight={stats.total_weight:.1f}"
    )

    plan = format_output(container, result, include_render=args.render)
    plan["container"] = container.model_dump()

    output_path = write_plan(plan, args.output)
    print(plan["summary"])
    print(f"Plan written to {output_path}")

    if args.full:
        out = Path(args.output)
        jsonl_path = write_placements_jsonl(result, out.parent / f"{out.stem}_placements.jsonl")
        print(f"Placements written to {jsonl_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
