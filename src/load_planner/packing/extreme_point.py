# src/load_planner/packing/extreme_point.py

from __future__ import annotations

import itertools
import logging
from collections import Counter
from typing import Iterable, Iterator, Optional

from load_planner.config import PackingSettings
from load_planner.geometry import EPSILON, BoundingBox, bounding_box, center_of_gravity
from load_planner.models import Container, Dimensions, Item, PlacedItem, Position
from load_planner.packing.constraints import ConstraintValidator, PlacementFailure
from load_planner.rotations import generate_orientations

logger = logging.getLogger(__name__)

Point = tuple[float, float, float]


def placement_score(position: Position) -> float:
    """
    Lexicographic tie-break ordering, not a physical quantity.

    Height dominates, then length, then width: floor first, layer by layer.
    """
    return position.z * 1000 + position.x * 10 + position.y


class Frontier:
    """
    Insertion-ordered set of extreme points.

    Points are indexed in a hash grid with cells of size EPSILON so that
    duplicate detection looks at 27 cells instead of scanning every point.
    """

    def __init__(self, points: Iterable[Point] = ()) -> None:
        self._points: dict[Point, None] = {}
        self._grid: dict[tuple[int, int, int], list[Point]] = {}
        for p in points:
            self.add(p)

    @staticmethod
    def _cell(p: Point) -> tuple[int, int, int]:
        return (round(p[0] / EPSILON), round(p[1] / EPSILON), round(p[2] / EPSILON))

    def __iter__(self) -> Iterator[Point]:
        return iter(list(self._points))

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, p: object) -> bool:
        return p in self._points

    def find_duplicate(self, p: Point) -> Optional[Point]:
        cx, cy, cz = self._cell(p)
        for dx, dy, dz in itertools.product((-1, 0, 1), repeat=3):
            for q in self._grid.get((cx + dx, cy + dy, cz + dz), ()):
                if abs(q[0] - p[0]) < EPSILON and abs(q[1] - p[1]) < EPSILON and abs(q[2] - p[2]) < EPSILON:
                    return q
        return None

    def add(self, p: Point) -> bool:
        """Add `p` unless an equal point (within EPSILON) is already present."""
        if self.find_duplicate(p) is not None:
            return False
        self._points[p] = None
        self._grid.setdefault(self._cell(p), []).append(p)
        return True

    def remove(self, p: Point) -> None:
        del self._points[p]
        bucket = self._grid[self._cell(p)]
        bucket.remove(p)
        if not bucket:
            del self._grid[self._cell(p)]

    def remove_inside(self, box: BoundingBox) -> int:
        """Drop points with min <= p < max on every axis. Returns how many went."""
        inside = [
            p
            for p in self._points
            if box.min_x <= p[0] < box.max_x
            and box.min_y <= p[1] < box.max_y
            and box.min_z <= p[2] < box.max_z
        ]
        for p in inside:
            self.remove(p)
        return len(inside)


class ExtremePointPacker:
    """
    Greedy extreme-point placement for a single container run.

    The frontier, placement list and running weight belong to this object
    only; a new packer is built for every run.
    """

    def __init__(
        self,
        container: Container,
        items: Iterable[Item],
        settings: Optional[PackingSettings] = None,
    ) -> None:
        self.container = container
        self.settings = settings or PackingSettings()
        self.items_by_id: dict[str, Item] = {item.id: item for item in items}
        self.validator = ConstraintValidator(container, self.items_by_id, self.settings)

        self.frontier = Frontier([(0.0, 0.0, 0.0)])
        self._placed: list[PlacedItem] = []
        self._current_weight = 0.0
        self._instance_counts: Counter[str] = Counter()

    @property
    def placed_items(self) -> list[PlacedItem]:
        return list(self._placed)

    @property
    def extreme_points(self) -> list[Point]:
        return list(self.frontier)

    @property
    def current_weight(self) -> float:
        return self._current_weight

    def center_of_gravity(self) -> Position:
        x, y, z = center_of_gravity((p.position, p.dimensions, p.weight) for p in self._placed)
        return Position(x=x, y=y, z=z)

    def find_best_placement(self, item: Item) -> Optional[PlacedItem]:
        """
        Try every frontier point with every orientation and return the
        admissible candidate with the lowest score, or None.
        """
        orientations = generate_orientations(
            item.length,
            item.width,
            item.height,
            item.rotation_allowed,
            strict=self.settings.strict_rotation,
        )

        best: Optional[tuple[Position, Dimensions]] = None
        best_score = float("inf")
        rejections: Counter[PlacementFailure] = Counter()

        for x, y, z in self.frontier:
            position = Position(x=x, y=y, z=z)
            score = placement_score(position)
            if score >= best_score:
                # Same anchor for every orientation; cannot beat the current best.
                continue
            for dims in orientations:
                result = self.validator.validate(
                    position, dims, item, self._placed, self._current_weight
                )
                if not result.valid:
                    rejections[result.reason] += 1
                    continue
                best = (position, dims)
                best_score = score
                break

        if best is None:
            logger.debug(
                "No admissible position for %s (frontier=%d, rejections=%s)",
                item.id,
                len(self.frontier),
                dict(rejections),
            )
            return None

        position, dims = best
        return PlacedItem(
            item_id=item.id,
            instance_index=self._instance_counts[item.id],
            position=position,
            dimensions=dims,
            weight=item.weight,
        )

    def place(self, item: Item) -> Optional[PlacedItem]:
        """Place one instance of `item`; returns the placement or None."""
        placement = self.find_best_placement(item)
        if placement is None:
            return None

        self._placed.append(placement)
        self._current_weight += placement.weight
        self._instance_counts[item.id] += 1
        self._update_extreme_points(placement)

        logger.debug(
            "Placed %s#%d at (%.2f, %.2f, %.2f) dims=%s",
            placement.item_id,
            placement.instance_index,
            placement.position.x,
            placement.position.y,
            placement.position.z,
            placement.dimensions.as_tuple(),
        )
        return placement

    def _update_extreme_points(self, placed: PlacedItem) -> None:
        p = placed.position
        box = bounding_box(p, placed.dimensions)

        self.frontier.remove_inside(box)
        for point in (
            (box.max_x, p.y, p.z),
            (p.x, box.max_y, p.z),
            (p.x, p.y, box.max_z),
        ):
            self.frontier.add(point)
