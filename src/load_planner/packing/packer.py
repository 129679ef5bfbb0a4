from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from load_planner.config import PackingSettings
from load_planner.metrics import compute_metrics, generate_warnings, weight_efficiency
from load_planner.models import Container, Item, PackingResult, UnpackedItem
from load_planner.packing.extreme_point import ExtremePointPacker

logger = logging.getLogger(__name__)


def packing_order(items: Sequence[Item]) -> list[Item]:
    """Largest volume first; equal volumes by ascending priority."""
    return sorted(items, key=lambda item: (-item.volume, item.priority))


def pack_items(
    container: Container,
    items: Sequence[Item],
    settings: Optional[PackingSettings] = None,
) -> PackingResult:
    """
    Pack every requested instance of `items` into `container`.

    - Items are processed in `packing_order`
    - Each instance is placed independently by the extreme-point packer
    - Instances that find no admissible position are reported per item in
      `unpacked_items`; this is a normal outcome, not an error
    - Efficiencies are percentages and are not clamped
    """
    settings = settings or PackingSettings()
    start = time.perf_counter()

    packer = ExtremePointPacker(container, items, settings)
    unpacked: list[UnpackedItem] = []

    for item in packing_order(items):
        if item.quantity == 0:
            continue

        placed_count = 0
        for _ in range(item.quantity):
            if packer.place(item) is not None:
                placed_count += 1

        shortfall = item.quantity - placed_count
        if shortfall > 0:
            unpacked.append(UnpackedItem(item_id=item.id, quantity=shortfall))

    placements = packer.placed_items
    total_weight = packer.current_weight
    packed_volume, container_volume, volume_efficiency = compute_metrics(container, placements)
    cog = packer.center_of_gravity()

    warnings = generate_warnings(
        container,
        placements,
        total_weight,
        cog,
        weight_warning_ratio=settings.weight_warning_ratio,
        cog_warning_ratio=settings.cog_warning_ratio,
    )

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    items_unpacked = sum(u.quantity for u in unpacked)

    logger.info(
        "container=%s packed=%d unpacked=%d volume=%.1f%% weight=%.1f%% time=%.1fms",
        container.id,
        len(placements),
        items_unpacked,
        volume_efficiency,
        weight_efficiency(container, total_weight),
        elapsed_ms,
    )

    return PackingResult(
        container_id=container.id,
        volume_efficiency=volume_efficiency,
        weight_efficiency=weight_efficiency(container, total_weight),
        total_weight=total_weight,
        items_packed=len(placements),
        items_unpacked=items_unpacked,
        unpacked_items=unpacked,
        packed_items=placements,
        center_of_gravity=cog,
        warnings=warnings,
        packed_volume=packed_volume,
        container_volume=container_volume,
        computation_time_ms=elapsed_ms,
    )


class BinPacker:
    """Object wrapper around `pack_items` for callers holding a container and catalog."""

    def __init__(
        self,
        container: Container,
        items: Sequence[Item],
        settings: Optional[PackingSettings] = None,
    ) -> None:
        self.container = container
        self.items = list(items)
        self.settings = settings

    def pack(self) -> PackingResult:
        return pack_items(self.container, self.items, self.settings)
