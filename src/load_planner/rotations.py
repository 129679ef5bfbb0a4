"""
Orientation generation for axis-aligned items.

Known approximation: by default any non-empty set of allowed rotation axes
admits all six permutations of (L, W, H). "xy" does not restrict the item to
a length/width swap. Pass ``strict=True`` for the per-axis mapping below.

Duplicates are detected on the ordered (L, W, H) triple, not on sorted
dimensions; sorting would fold every rotation of a box into one.
"""

from __future__ import annotations

from typing import Iterable

from load_planner.models import Dimensions, RotationAxis

# Permutation indices into (L, W, H):
#   0:(L,W,H) 1:(L,H,W) 2:(W,L,H) 3:(W,H,L) 4:(H,L,W) 5:(H,W,L)
PERMUTATIONS: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (0, 2, 1),
    (1, 0, 2),
    (1, 2, 0),
    (2, 0, 1),
    (2, 1, 0),
)

# Permutations licensed by each axis in strict mode.
AXIS_PERMUTATIONS: dict[RotationAxis, tuple[int, int, int]] = {
    RotationAxis.XY: (1, 0, 2),
    RotationAxis.XZ: (2, 1, 0),
    RotationAxis.YZ: (0, 2, 1),
}


def generate_orientations(
    length: float,
    width: float,
    height: float,
    allowed: Iterable[RotationAxis | str],
    strict: bool = False,
) -> list[Dimensions]:
    """
    Return the de-duplicated orientations an item may be placed in.

    The identity orientation is always first. Orientations that produce the
    same (L, W, H) triple (cubes, two equal sides) are returned once.
    """
    dims = (float(length), float(width), float(height))
    axes = {RotationAxis(a) for a in allowed}

    if not axes:
        candidates = [PERMUTATIONS[0]]
    elif strict:
        candidates = [PERMUTATIONS[0]] + [AXIS_PERMUTATIONS[a] for a in RotationAxis if a in axes]
    else:
        candidates = list(PERMUTATIONS)

    seen: set[tuple[float, float, float]] = set()
    out: list[Dimensions] = []
    for i, j, k in candidates:
        key = (dims[i], dims[j], dims[k])
        if key not in seen:
            seen.add(key)
            out.append(Dimensions(length=key[0], width=key[1], height=key[2]))
    return out
