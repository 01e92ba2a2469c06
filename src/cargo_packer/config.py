"""Runtime settings from environment variables; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Does not override variables already set in the environment.
load_dotenv()

DEFAULT_MAX_TOTAL_UNITS = 2000


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    max_total_units: int = DEFAULT_MAX_TOTAL_UNITS
    cors_origins: tuple[str, ...] = ("*",)
    debug: bool = False


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    origins = os.getenv("CARGO_PACKER_CORS_ORIGINS", "*")
    return Settings(
        log_level=os.getenv("CARGO_PACKER_LOG_LEVEL", "INFO").upper(),
        max_total_units=_int_env("CARGO_PACKER_MAX_TOTAL_UNITS", DEFAULT_MAX_TOTAL_UNITS),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        debug=os.getenv("CARGO_PACKER_DEBUG", "0") == "1",
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Set up root logging once; CARGO_PACKER_DEBUG=1 turns on per-placement engine logs."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("cargo_packer.placements").setLevel(
        logging.DEBUG if settings.debug else logging.INFO
    )
