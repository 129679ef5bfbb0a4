from __future__ import annotations

import math

from load_planner.models import Container, PackingResult, PlacedItem, Position


def placement_volume(p: PlacedItem) -> float:
    L, W, H = p.dimensions.as_tuple()
    return float(L) * float(W) * float(H)


def compute_metrics(container: Container, placements: list[PlacedItem]) -> tuple[float, float, float]:
    """Return (packed_volume, container_volume, volume_efficiency_pct)."""
    used_volume = sum(placement_volume(p) for p in placements)
    container_volume = container.volume
    efficiency = 0.0 if container_volume == 0 else used_volume / container_volume * 100.0
    return used_volume, container_volume, efficiency


def weight_efficiency(container: Container, total_weight: float) -> float:
    return total_weight / container.max_weight * 100.0


def cog_deviation(container: Container, cog: Position) -> float:
    """Horizontal distance of the COG from the container centre, as a share of the half-diagonal."""
    distance = math.hypot(cog.x - container.length / 2, cog.y - container.width / 2)
    half_diagonal = math.hypot(container.length / 2, container.width / 2)
    return distance / half_diagonal


def generate_warnings(
    container: Container,
    placements: list[PlacedItem],
    total_weight: float,
    cog: Position,
    weight_warning_ratio: float = 0.95,
    cog_warning_ratio: float = 0.10,
) -> list[str]:
    """Advisory, non-fatal warnings about a finished load."""
    warnings: list[str] = []

    if total_weight >= container.max_weight * weight_warning_ratio:
        warnings.append(
            f"High weight utilization: {weight_efficiency(container, total_weight):.1f}%"
        )

    # COG of an empty load is the origin; nothing to warn about.
    if placements:
        deviation = cog_deviation(container, cog)
        if deviation > cog_warning_ratio:
            warnings.append(f"Center of gravity is off-center (deviation: {deviation * 100:.1f}%)")

    return warnings


def format_summary(result: PackingResult) -> str:
    """One human-readable block describing a packing result."""
    lines = [
        f"Container {result.container_id}",
        f"Volume Fill: {result.volume_efficiency:.1f}%",
        f"Weight Fill: {result.weight_efficiency:.1f}%",
        f"Units Loaded: {result.items_packed}",
        f"Units Unloaded: {result.items_unpacked}",
    ]
    for unpacked in result.unpacked_items:
        lines.append(f"  - {unpacked.item_id} ({unpacked.quantity} units)")
    for warning in result.warnings:
        lines.append(f"Warning: {warning}")
    return "\n".join(lines)
