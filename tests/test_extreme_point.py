from __future__ import annotations

from load_planner.geometry import BoundingBox
from load_planner.models import Container, Item, Position
from load_planner.packing.extreme_point import ExtremePointPacker, Frontier, placement_score


def test_frontier_skips_duplicates_within_tolerance() -> None:
    frontier = Frontier([(0.0, 0.0, 0.0)])

    assert frontier.add((0.0, 0.0, 0.0)) is False
    assert frontier.add((0.005, 0.0, 0.0)) is False
    assert frontier.add((0.02, 0.0, 0.0)) is True
    assert len(frontier) == 2


def test_frontier_removes_points_inside_but_keeps_far_faces() -> None:
    frontier = Frontier([(0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (5.0, 5.0, 5.0), (0.0, 0.0, 10.0)])

    removed = frontier.remove_inside(BoundingBox(0, 0, 0, 10, 10, 10))

    assert removed == 2
    assert list(frontier) == [(10.0, 0.0, 0.0), (0.0, 0.0, 10.0)]
    # Removed points can be added again
    assert frontier.add((0.0, 0.0, 0.0)) is True


def test_score_prefers_floor_then_length_then_width() -> None:
    assert placement_score(Position(x=50)) < placement_score(Position(z=1))
    assert placement_score(Position(y=5)) < placement_score(Position(x=1))
    assert placement_score(Position()) == 0


def test_initial_frontier_is_origin() -> None:
    container = Container(id="C", length=100, width=100, height=100, max_weight=100)
    packer = ExtremePointPacker(container, [])

    assert packer.extreme_points == [(0.0, 0.0, 0.0)]
    assert packer.placed_items == []
    assert packer.current_weight == 0.0


def test_placement_adds_three_far_corner_points() -> None:
    container = Container(id="C", length=1000, width=1000, height=1000, max_weight=1000)
    item = Item(id="A", length=100, width=50, height=30, weight=5)
    packer = ExtremePointPacker(container, [item])

    placed = packer.place(item)

    assert placed is not None
    assert placed.position == Position()
    assert packer.extreme_points == [(100.0, 0.0, 0.0), (0.0, 50.0, 0.0), (0.0, 0.0, 30.0)]
    assert packer.current_weight == 5


def test_fills_floor_before_stacking() -> None:
    container = Container(id="C", length=300, width=100, height=200, max_weight=1000)
    item = Item(id="BOX", length=100, width=100, height=100, weight=10, max_stack_weight=100)
    packer = ExtremePointPacker(container, [item])

    placements = [packer.place(item) for _ in range(4)]

    assert [(p.position.x, p.position.z) for p in placements] == [
        (0.0, 0.0),
        (100.0, 0.0),
        (200.0, 0.0),
        (0.0, 100.0),
    ]
    assert [p.instance_index for p in placements] == [0, 1, 2, 3]


def test_no_admissible_position_leaves_state_untouched() -> None:
    container = Container(id="C", length=100, width=100, height=100, max_weight=1000)
    big = Item(id="BIG", length=100, width=100, height=100, weight=1, stackable=False)
    packer = ExtremePointPacker(container, [big])

    assert packer.place(big) is not None
    points = packer.extreme_points

    assert packer.place(big) is None
    assert packer.extreme_points == points
    assert len(packer.placed_items) == 1


def test_rotation_is_used_when_identity_does_not_fit() -> None:
    container = Container(id="C", length=100, width=250, height=100, max_weight=1000)
    rotatable = Item(id="ROT", length=200, width=50, height=50, weight=1, rotation_allowed=["xy"])
    fixed = Item(id="FIXED", length=200, width=50, height=50, weight=1)

    placed = ExtremePointPacker(container, [rotatable]).place(rotatable)
    assert placed is not None
    assert placed.dimensions.as_tuple() == (50.0, 200.0, 50.0)

    assert ExtremePointPacker(container, [fixed]).place(fixed) is None


def test_center_of_gravity_of_placements() -> None:
    container = Container(id="C", length=1000, width=1000, height=1000, max_weight=1000)
    item = Item(id="A", length=100, width=100, height=100, weight=50)
    packer = ExtremePointPacker(container, [item])
    packer.place(item)

    assert packer.center_of_gravity() == Position(x=50, y=50, z=50)
