from load_planner.geometry import EPSILON, bounding_box, boxes_overlap, contact_area, footprint_overlap
from load_planner.packing.constraints import weight_above


def bounds_from_placement(p):
    return bounding_box(p.position, p.dimensions)


def assert_within_container(container, placements):
    for p in placements:
        x1, y1, z1, x2, y2, z2 = bounds_from_placement(p)
        assert x1 >= 0 and y1 >= 0 and z1 >= 0
        assert x2 <= container.length
        assert y2 <= container.width
        assert z2 <= container.height


def assert_no_overlaps(placements):
    bounds = [bounds_from_placement(p) for p in placements]
    for i in range(len(bounds)):
        for j in range(i + 1, len(bounds)):
            assert not boxes_overlap(bounds[i], bounds[j])


def assert_supports_respected(container, items, placements):
    """Check the finished load: every box carrying weight can take what sits above it."""
    items_by_id = {item.id: item for item in items}
    for p in placements:
        load = weight_above(bounds_from_placement(p), placements)
        if load == 0:
            continue
        item = items_by_id[p.item_id]
        assert item.stackable
        assert not item.fragile
        assert item.load_bearing
        assert load <= item.max_stack_weight + 1e-6


def assert_all_supported(placements):
    """Anything above the floor touches the top face of some box below it."""
    bounds = [bounds_from_placement(p) for p in placements]
    for box in bounds:
        if box.min_z <= EPSILON:
            continue
        assert any(contact_area(other, box) > 0 for other in bounds if other is not box)


def assert_nothing_above(items, placements, predicate):
    items_by_id = {item.id: item for item in items}
    for base in placements:
        if not predicate(items_by_id[base.item_id]):
            continue
        base_box = bounds_from_placement(base)
        for other in placements:
            if other is base:
                continue
            box = bounds_from_placement(other)
            if box.min_z >= base_box.max_z - EPSILON:
                x_overlap, y_overlap = footprint_overlap(base_box, box)
                assert not (x_overlap > EPSILON and y_overlap > EPSILON)
