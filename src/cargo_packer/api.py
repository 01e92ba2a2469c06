from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from cargo_packer.config import configure_logging, get_settings
from cargo_packer.packing.first_fit import pack
from cargo_packer.report import format_output
from cargo_packer.samples import (
    COLOR_PALETTE,
    CONTAINER_PRESETS_CM,
    get_container_dims,
    sample_input,
)
from cargo_packer.validation import InvalidInputError, parse_input

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    yield


app = FastAPI(
    title="Cargo Packer API",
    description="Container loading plans: box placement and utilization statistics",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)


def invalid_input_response(details: list[str]) -> Response:
    error_response = {
        "error": "INVALID_INPUT",
        "summary": "Invalid input\nPlease correct the details below to run the packing.",
        "details": details,
    }
    return Response(
        content=json.dumps(error_response),
        status_code=422,
        media_type="application/json",
    )


def resolve_container(request: dict[str, Any]) -> dict[str, Any] | None:
    """
    Container dims from an explicit `container` or a `container_preset`.

    Explicit keys override the preset (e.g. a preset with a lower height).
    """
    container: dict[str, Any] = {}
    preset = request.get("container_preset")
    if preset:
        container.update(get_container_dims(str(preset)))
    if isinstance(request.get("container"), dict):
        container.update(request["container"])
    return container or None


@app.post("/pack")
async def pack_endpoint(
    request: dict[str, Any],
    render: int = Query(0, description="Include rendering data (1) or not (0)"),
) -> Any:
    """
    Pack box types into the container and return the loading plan.

    Input (request body):
        {
            "container": {"length": 120, "width": 80, "height": 80},
            "box_types": [
                {"id": "books", "name": "Books", "length": 25, "width": 20,
                 "height": 20, "weight": 8, "is_fragile": false, "quantity": 6}
            ]
        }

    Returns:
        Response with metrics, summary and the full packing result
    """
    try:
        try:
            container_data = resolve_container(request)
        except ValueError as e:
            return invalid_input_response([str(e)])

        try:
            container, box_types = parse_input(
                container_data,
                request.get("box_types"),
                max_total_units=settings.max_total_units,
            )
        except InvalidInputError as e:
            return invalid_input_response(e.details)

        result = pack(container, box_types)

        include_render = render == 1 or request.get("render") == 1
        response = format_output(container, result, include_render=include_render)

        # Log one concise line
        logger.info(
            f"packed={result.stats.packed_boxes}, "
            f"unpacked={result.stats.unpacked_boxes}, "
            f"utilization={result.stats.utilization_percent}%"
        )

        return response

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /pack endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/samples")
async def samples() -> dict[str, Any]:
    """Sample input, container presets and the color palette for input forms."""
    container, box_types = sample_input()
    return {
        "sample": {
            "container": container.model_dump(),
            "box_types": [b.model_dump() for b in box_types],
        },
        "container_presets": CONTAINER_PRESETS_CM,
        "color_palette": COLOR_PALETTE,
    }


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}
