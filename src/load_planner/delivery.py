"""Post-hoc LIFO check of a finished load across delivery stops."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import Union

from load_planner.geometry import EPSILON
from load_planner.models import (
    DeliveryOrderReport,
    DeliveryViolation,
    Item,
    PlacedItem,
    StopSummary,
)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def summarize_stops(
    placed_items: Iterable[PlacedItem],
    items_by_id: Mapping[str, Item],
) -> list[StopSummary]:
    """Per-stop statistics, ordered by stop number. Unknown item ids are skipped."""
    groups: dict[int, list[PlacedItem]] = defaultdict(list)
    for placed in placed_items:
        item = items_by_id.get(placed.item_id)
        if item is None:
            continue
        groups[item.delivery_stop].append(placed)

    summaries = []
    for stop in sorted(groups):
        group = groups[stop]
        summaries.append(
            StopSummary(
                stop=stop,
                item_count=len(group),
                total_weight=sum(p.weight for p in group),
                min_z=min(p.position.z for p in group),
                max_z=max(p.position.z + p.dimensions.height for p in group),
                mean_z=_mean([p.position.z for p in group]),
                item_ids=sorted({p.item_id for p in group}),
            )
        )
    return summaries


def audit_delivery_order(
    placed_items: Iterable[PlacedItem],
    items: Union[Iterable[Item], Mapping[str, Item]],
) -> DeliveryOrderReport:
    """
    Check that cargo for earlier stops sits no lower, on average, than cargo
    for the stop after it.

    Stops are compared pairwise in ascending order. Loads with fewer than two
    stops are trivially compliant. Never raises.
    """
    items_by_id = items if isinstance(items, Mapping) else {item.id: item for item in items}
    stops = summarize_stops(placed_items, items_by_id)

    if len(stops) < 2:
        return DeliveryOrderReport(
            valid=True,
            summary=f"{len(stops)} delivery stop(s): LIFO ordering trivially satisfied",
            stops=stops,
        )

    violations: list[DeliveryViolation] = []
    for earlier, later in zip(stops, stops[1:]):
        if earlier.mean_z + EPSILON < later.mean_z:
            violations.append(
                DeliveryViolation(
                    earlier_stop=earlier.stop,
                    later_stop=later.stop,
                    earlier_mean_z=earlier.mean_z,
                    later_mean_z=later.mean_z,
                    message=(
                        f"Stop {earlier.stop} cargo (mean z {earlier.mean_z:.1f}) sits below "
                        f"stop {later.stop} cargo (mean z {later.mean_z:.1f}); it cannot be "
                        f"unloaded first without moving stop {later.stop} cargo"
                    ),
                )
            )

    if violations:
        summary = f"{len(violations)} LIFO violation(s) across {len(stops)} delivery stops"
    else:
        summary = f"LIFO ordering satisfied across {len(stops)} delivery stops"

    return DeliveryOrderReport(
        valid=not violations,
        violations=violations,
        summary=summary,
        stops=stops,
    )
