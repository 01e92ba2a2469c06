from __future__ import annotations

import json

from cargo_packer.cli import load_input, main


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_sample_run_writes_plan_and_placements(tmp_path, capsys) -> None:
    out = tmp_path / "out" / "plan.json"

    code = main(["--sample", "--output", str(out), "--full"])

    assert code == 0
    plan = json.loads(out.read_text(encoding="utf-8"))
    assert plan["container"] == {"length": 120.0, "width": 80.0, "height": 80.0}
    assert plan["metrics"]["total_boxes"] == 23
    assert "placements_render" not in plan

    lines = (tmp_path / "out" / "plan_placements.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == plan["metrics"]["packed_boxes"]
    assert json.loads(lines[0])["box_type"]["id"] == plan["result"]["boxes"][0]["box_type"]["id"]

    assert "Plan written to" in capsys.readouterr().out


def test_input_file_with_preset(tmp_path) -> None:
    shipment = write_json(tmp_path / "shipment.json", {
        "container_preset": "20",
        "box_types": [{"id": "crate", "name": "Crate", "length": 100, "width": 100,
                       "height": 100, "weight": 50, "quantity": 3}],
    })
    out = tmp_path / "plan.json"

    code = main(["--input", str(shipment), "--output", str(out), "--render"])

    assert code == 0
    plan = json.loads(out.read_text(encoding="utf-8"))
    assert plan["metrics"]["packed_boxes"] == 3
    assert plan["metrics"]["total_weight"] == 150
    assert plan["container_render"]["L"] == 590.0
    assert len(plan["placements_render"]) == 3


def test_invalid_input_exits_with_2(tmp_path, capsys) -> None:
    shipment = write_json(tmp_path / "bad.json", {
        "container": {"length": 0, "width": 10, "height": 10},
        "box_types": [],
    })

    code = main(["--input", str(shipment), "--output", str(tmp_path / "plan.json")])

    assert code == 2
    err = capsys.readouterr().err
    assert "Container dimensions must be positive numbers" in err
    assert "Please add at least one box type" in err
    assert not (tmp_path / "plan.json").exists()


def test_unknown_preset_exits_with_2(tmp_path, capsys) -> None:
    code = main(["--sample", "--preset", "nope", "--output", str(tmp_path / "plan.json")])

    assert code == 2
    assert "Unknown container_preset" in capsys.readouterr().err


def test_load_input_explicit_dims_override_preset(tmp_path) -> None:
    shipment = write_json(tmp_path / "shipment.json", {
        "container_preset": "euro-pallet",
        "container": {"height": 40},
        "box_types": [{"id": "a", "length": 10, "width": 10, "height": 10, "quantity": 1}],
    })

    container, box_types = load_input(shipment)

    assert (container.length, container.width, container.height) == (120, 80, 40)
    assert box_types[0].id == "a"


def test_non_object_input_exits_with_2(tmp_path, capsys) -> None:
    shipment = write_json(tmp_path / "list.json", [1, 2])

    code = main(["--input", str(shipment), "--output", str(tmp_path / "plan.json")])

    assert code == 2
    assert "Input file must contain a JSON object" in capsys.readouterr().err


def test_missing_input_file_exits_with_2(tmp_path, capsys) -> None:
    code = main(["--input", str(tmp_path / "missing.json"), "--output", str(tmp_path / "plan.json")])

    assert code == 2
    assert capsys.readouterr().err.startswith("error:")
    assert not (tmp_path / "plan.json").exists()
