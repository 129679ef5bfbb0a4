"""Runtime settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "LP_"


class PackingSettings(BaseModel):
    """Tunables for the placement engine and result warnings."""

    stability_height_threshold: float = Field(
        default=150.0,
        ge=0,
        description="Above this z, placements are checked for off-centre sitting",
    )
    stability_max_radius: float = Field(
        default=300.0,
        gt=0,
        description="Max horizontal distance from container centre for high placements",
    )
    weight_warning_ratio: float = Field(
        default=0.95,
        gt=0,
        description="Warn when total weight reaches this share of capacity",
    )
    cog_warning_ratio: float = Field(
        default=0.10,
        gt=0,
        description="Warn when COG deviation exceeds this share of the half-diagonal",
    )
    strict_rotation: bool = Field(
        default=False,
        description="Restrict each rotation axis to its own pairwise swap",
    )
    log_level: str = Field(default="INFO", description="Logging level for CLI/API")


def load_settings() -> PackingSettings:
    """
    Build settings from LP_* environment variables.

    A local .env is loaded first when present; it never overrides variables
    already set in the environment.
    """
    load_dotenv()

    values: dict[str, str] = {}
    for name in PackingSettings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is not None and raw != "":
            values[name] = raw
    return PackingSettings.model_validate(values)
