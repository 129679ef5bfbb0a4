"""Geometry utilities for load planning."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, NamedTuple

if TYPE_CHECKING:
    from .models import Dimensions, Position

# Single tolerance shared by touch detection, footprint tests, frontier
# de-duplication and delivery-order comparisons.
EPSILON = 0.01


class BoundingBox(NamedTuple):
    """Axis-aligned bounds: (x1, y1, z1, x2, y2, z2)."""

    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float


def bounding_box(position: "Position", dimensions: "Dimensions") -> BoundingBox:
    x, y, z = float(position.x), float(position.y), float(position.z)
    return BoundingBox(
        x,
        y,
        z,
        x + float(dimensions.length),
        y + float(dimensions.width),
        z + float(dimensions.height),
    )


def boxes_overlap(
    a: tuple[float, float, float, float, float, float],
    b: tuple[float, float, float, float, float, float],
) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Overlap exists only if they overlap on ALL 3 axes with positive volume.
    Touching faces/edges (ax2 == bx1) is NOT considered overlap, which is
    what lets boxes stack and sit side by side.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    return (ax1 < bx2 and ax2 > bx1) and (ay1 < by2 and ay2 > by1) and (az1 < bz2 and az2 > bz1)


def within_bounds(box: BoundingBox, length: float, width: float, height: float) -> bool:
    """True if the box lies completely inside a container of the given size."""
    return (
        box.min_x >= 0
        and box.min_y >= 0
        and box.min_z >= 0
        and box.max_x <= length
        and box.max_y <= width
        and box.max_z <= height
    )


def footprint_overlap(a: BoundingBox, b: BoundingBox) -> tuple[float, float]:
    """Overlap lengths of the two footprints along x and y (negative if apart)."""
    x_overlap = min(a.max_x, b.max_x) - max(a.min_x, b.min_x)
    y_overlap = min(a.max_y, b.max_y) - max(a.min_y, b.min_y)
    return x_overlap, y_overlap


def contact_area(lower: BoundingBox, upper: BoundingBox) -> float:
    """
    Area where the top face of `lower` touches the bottom face of `upper`.

    Returns 0.0 when the faces are not at the same height or the
    footprints do not share a positive area.
    """
    if abs(lower.max_z - upper.min_z) >= EPSILON:
        return 0.0
    x_overlap, y_overlap = footprint_overlap(lower, upper)
    if x_overlap > 0 and y_overlap > 0:
        return x_overlap * y_overlap
    return 0.0


def center_of_gravity(
    entries: Iterable[tuple["Position", "Dimensions", float]],
) -> tuple[float, float, float]:
    """
    Weighted centroid of a set of boxes.

    Each entry is (position, dimensions, weight). The centre of every box is
    weighted by its weight. Returns the origin when the total weight is zero.
    """
    total_weight = 0.0
    weighted_x = weighted_y = weighted_z = 0.0

    for position, dims, weight in entries:
        weighted_x += (position.x + dims.length / 2) * weight
        weighted_y += (position.y + dims.width / 2) * weight
        weighted_z += (position.z + dims.height / 2) * weight
        total_weight += weight

    if total_weight == 0:
        return (0.0, 0.0, 0.0)

    return (weighted_x / total_weight, weighted_y / total_weight, weighted_z / total_weight)
