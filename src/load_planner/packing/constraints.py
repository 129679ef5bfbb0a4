"""Placement constraints for the extreme-point packer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Sequence

from load_planner.config import PackingSettings
from load_planner.geometry import (
    EPSILON,
    BoundingBox,
    bounding_box,
    boxes_overlap,
    contact_area,
    footprint_overlap,
    within_bounds,
)
from load_planner.models import Container, Dimensions, Item, PlacedItem, Position


class PlacementFailure(str, Enum):
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    OVERLAP = "OVERLAP"
    WEIGHT_LIMIT = "WEIGHT_LIMIT"
    NON_STACKABLE_SUPPORT = "NON_STACKABLE_SUPPORT"
    STACK_WEIGHT_EXCEEDED = "STACK_WEIGHT_EXCEEDED"
    FRAGILE_LOAD = "FRAGILE_LOAD"
    NOT_LOAD_BEARING = "NOT_LOAD_BEARING"
    UNSTABLE = "UNSTABLE"
    UNSUPPORTED = "UNSUPPORTED"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[PlacementFailure] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, reason: PlacementFailure) -> "ValidationResult":
        return cls(False, reason)


def placed_bounds(placed: PlacedItem) -> BoundingBox:
    return bounding_box(placed.position, placed.dimensions)


def weight_above(box: BoundingBox, placed_items: Sequence[PlacedItem]) -> float:
    """
    Total weight of placed boxes sitting anywhere above `box`.

    A placed box counts when its bottom is at or above the top of `box`
    and the two footprints overlap on both axes. Boxes further up a stack
    are included as well, not only the ones touching `box`.
    """
    total = 0.0
    for placed in placed_items:
        other = placed_bounds(placed)
        if other.min_z >= box.max_z - EPSILON:
            x_overlap, y_overlap = footprint_overlap(box, other)
            if x_overlap > EPSILON and y_overlap > EPSILON:
                total += placed.weight
    return total


class ConstraintValidator:
    """
    Decides whether one candidate placement is admissible.

    The item lookup is explicit: it is the catalog of the current run,
    keyed by item id, and is only used to read the properties of boxes
    that are already placed.
    """

    def __init__(
        self,
        container: Container,
        items_by_id: Mapping[str, Item],
        settings: Optional[PackingSettings] = None,
    ) -> None:
        self.container = container
        self.items_by_id = items_by_id
        self.settings = settings or PackingSettings()

    def validate(
        self,
        position: Position,
        dimensions: Dimensions,
        item: Item,
        placed_items: Sequence[PlacedItem],
        current_weight: float,
    ) -> ValidationResult:
        """
        Run every check in order and stop at the first failure:
        bounds, collision, weight cap, support, fragility, load bearing,
        stability.
        """
        box = bounding_box(position, dimensions)
        container = self.container

        if not within_bounds(box, container.length, container.width, container.height):
            return ValidationResult.fail(PlacementFailure.OUT_OF_BOUNDS)

        for placed in placed_items:
            if boxes_overlap(box, placed_bounds(placed)):
                return ValidationResult.fail(PlacementFailure.OVERLAP)

        if current_weight + item.weight > container.max_weight:
            return ValidationResult.fail(PlacementFailure.WEIGHT_LIMIT)

        support = self.find_support(box, placed_items)
        if support is None:
            if box.min_z > EPSILON:
                return ValidationResult.fail(PlacementFailure.UNSUPPORTED)
        else:
            support_placed, support_item = support
            if not support_item.stackable or support_item.fragile:
                return ValidationResult.fail(PlacementFailure.NON_STACKABLE_SUPPORT)
            load = weight_above(placed_bounds(support_placed), placed_items)
            if load + item.weight > support_item.max_stack_weight:
                return ValidationResult.fail(PlacementFailure.STACK_WEIGHT_EXCEEDED)

        stack_failure = self.check_stack_loads(box, item, placed_items)
        if stack_failure is not None:
            return ValidationResult.fail(stack_failure)

        if item.fragile and weight_above(box, placed_items) > 0:
            return ValidationResult.fail(PlacementFailure.FRAGILE_LOAD)
        if self._rests_above(box, placed_items, lambda it: it.fragile):
            return ValidationResult.fail(PlacementFailure.FRAGILE_LOAD)

        if not item.load_bearing and weight_above(box, placed_items) > 0:
            return ValidationResult.fail(PlacementFailure.NOT_LOAD_BEARING)
        if self._rests_above(box, placed_items, lambda it: not it.load_bearing):
            return ValidationResult.fail(PlacementFailure.NOT_LOAD_BEARING)

        if not self.is_stable(box):
            return ValidationResult.fail(PlacementFailure.UNSTABLE)

        return ValidationResult.ok()

    def find_support(
        self,
        box: BoundingBox,
        placed_items: Sequence[PlacedItem],
    ) -> Optional[tuple[PlacedItem, Item]]:
        """Placed instance directly beneath `box`; the highest top face wins."""
        below: Optional[tuple[PlacedItem, Item]] = None
        best_top = -math.inf

        for placed in placed_items:
            other = placed_bounds(placed)
            if contact_area(other, box) <= 0:
                continue
            if other.max_z > best_top:
                item = self.items_by_id.get(placed.item_id)
                if item is not None:
                    best_top = other.max_z
                    below = (placed, item)

        return below

    def check_stack_loads(
        self,
        box: BoundingBox,
        item: Item,
        placed_items: Sequence[PlacedItem],
    ) -> Optional[PlacementFailure]:
        """
        Stack limits for the whole column, not only the direct support.

        Every placed instance that would end up under the candidate carries
        its weight, and the candidate itself carries whatever is already
        above it. Fragile and non-load-bearing instances are left to their
        own checks.
        """
        for placed in placed_items:
            lower_item = self.items_by_id.get(placed.item_id)
            if lower_item is None or lower_item.fragile or not lower_item.load_bearing:
                continue
            lower = placed_bounds(placed)
            if box.min_z < lower.max_z - EPSILON:
                continue
            x_overlap, y_overlap = footprint_overlap(box, lower)
            if x_overlap <= EPSILON or y_overlap <= EPSILON:
                continue
            if not lower_item.stackable:
                return PlacementFailure.NON_STACKABLE_SUPPORT
            if weight_above(lower, placed_items) + item.weight > lower_item.max_stack_weight:
                return PlacementFailure.STACK_WEIGHT_EXCEEDED

        if item.fragile or not item.load_bearing:
            return None
        carried = weight_above(box, placed_items)
        if carried > 0:
            if not item.stackable:
                return PlacementFailure.NON_STACKABLE_SUPPORT
            if carried > item.max_stack_weight:
                return PlacementFailure.STACK_WEIGHT_EXCEEDED
        return None

    def is_stable(self, box: BoundingBox) -> bool:
        """
        Simplified tipping check: placements starting above the height
        threshold must keep their footprint centre near the container axis.
        """
        settings = self.settings
        if box.min_z <= settings.stability_height_threshold:
            return True

        center_x = (box.min_x + box.max_x) / 2
        center_y = (box.min_y + box.max_y) / 2
        distance = math.hypot(
            center_x - self.container.length / 2,
            center_y - self.container.width / 2,
        )
        return distance <= settings.stability_max_radius

    def _rests_above(self, box: BoundingBox, placed_items: Sequence[PlacedItem], predicate) -> bool:
        # Any placed instance matching `predicate` that would end up under `box`.
        for placed in placed_items:
            item = self.items_by_id.get(placed.item_id)
            if item is None or not predicate(item):
                continue
            other = placed_bounds(placed)
            if box.min_z >= other.max_z - EPSILON:
                x_overlap, y_overlap = footprint_overlap(box, other)
                if x_overlap > EPSILON and y_overlap > EPSILON:
                    return True
        return False
