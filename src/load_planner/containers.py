# src/load_planner/containers.py
from __future__ import annotations

from typing import Optional

from load_planner.models import Container

# Internal usable dims (cm) and max payload (kg).
CONTAINER_PRESETS_CM: dict[str, dict[str, float]] = {
    "20":    {"length": 589.0,  "width": 235.0, "height": 239.0, "max_weight": 28200.0},
    "20HC":  {"length": 589.0,  "width": 233.0, "height": 270.0, "max_weight": 28000.0},
    "40":    {"length": 1203.0, "width": 235.0, "height": 239.0, "max_weight": 26700.0},
    "40HC":  {"length": 1203.0, "width": 235.0, "height": 269.0, "max_weight": 26500.0},
    "45HC":  {"length": 1356.0, "width": 235.0, "height": 269.0, "max_weight": 27700.0},
    "TRUCK": {"length": 1200.0, "width": 234.0, "height": 235.0, "max_weight": 28000.0},
    "MEGA":  {"length": 1360.0, "width": 240.0, "height": 270.0, "max_weight": 24000.0},
}


def get_container_dims(preset: str) -> dict[str, float]:
    key = preset.strip().upper()
    if key not in CONTAINER_PRESETS_CM:
        raise ValueError(f"Unknown container_preset '{preset}'. Valid: {sorted(CONTAINER_PRESETS_CM.keys())}")
    return CONTAINER_PRESETS_CM[key]


def get_container(preset: str, container_id: Optional[str] = None) -> Container:
    dims = get_container_dims(preset)
    return Container(id=container_id or preset.strip().upper(), unit="cm", weight_unit="kg", **dims)
