from __future__ import annotations

import pytest

from load_planner.delivery import audit_delivery_order, summarize_stops
from load_planner.models import Container, Dimensions, Item, PlacedItem, Position
from load_planner.packing.packer import pack_items

CUBE = Dimensions(length=100, width=100, height=100)


def stop_item(item_id: str, stop: int, priority: int, quantity: int = 1) -> Item:
    return Item(
        id=item_id,
        length=100,
        width=100,
        height=100,
        weight=100,
        quantity=quantity,
        max_stack_weight=1000,
        priority=priority,
        delivery_stop=stop,
    )


def placed(item_id: str, z: float, x: float = 0, index: int = 0) -> PlacedItem:
    return PlacedItem(
        item_id=item_id,
        instance_index=index,
        position=Position(x=x, z=z),
        dimensions=CUBE,
        weight=100,
    )


def test_empty_load_is_valid():
    report = audit_delivery_order([], [])

    assert report.valid is True
    assert report.violations == []
    assert report.stops == []


def test_single_stop_is_valid():
    container = Container(id="TRUCK", length=1200, width=234, height=235, max_weight=28000)
    items = [stop_item("SINGLE-STOP", stop=1, priority=1, quantity=5)]

    result = pack_items(container, items)
    report = audit_delivery_order(result.packed_items, items)

    assert report.valid is True
    assert report.violations == []
    assert len(report.stops) == 1
    assert report.stops[0].item_count == 5


def test_side_by_side_stops_have_no_violation():
    container = Container(id="TRUCK", length=1200, width=234, height=235, max_weight=28000)
    items = [
        stop_item("STOP-1", stop=1, priority=3),
        stop_item("STOP-2", stop=2, priority=2),
    ]

    result = pack_items(container, items)
    report = audit_delivery_order(result.packed_items, items)

    assert result.items_packed == 2
    assert report.valid is True
    assert report.violations == []


def test_earlier_stop_below_later_stop_is_a_violation():
    items = [stop_item("STOP-1", stop=1, priority=1), stop_item("STOP-2", stop=2, priority=2)]

    report = audit_delivery_order([placed("STOP-1", z=0), placed("STOP-2", z=100)], items)

    assert report.valid is False
    assert len(report.violations) == 1
    violation = report.violations[0]
    assert (violation.earlier_stop, violation.later_stop) == (1, 2)
    assert violation.earlier_mean_z == pytest.approx(0)
    assert violation.later_mean_z == pytest.approx(100)
    assert "Stop 1" in violation.message and "stop 2" in violation.message


def test_stacked_column_follows_priority():
    column = Container(id="COLUMN", length=100, width=100, height=300, max_weight=1000)

    lifo = [stop_item("STOP-1", stop=1, priority=2), stop_item("STOP-2", stop=2, priority=1)]
    result = pack_items(column, lifo)
    assert result.items_packed == 2
    assert audit_delivery_order(result.packed_items, lifo).valid is True

    buried = [stop_item("STOP-1", stop=1, priority=1), stop_item("STOP-2", stop=2, priority=2)]
    result = pack_items(column, buried)
    report = audit_delivery_order(result.packed_items, buried)
    assert report.valid is False
    assert [(v.earlier_stop, v.later_stop) for v in report.violations] == [(1, 2)]


def test_only_adjacent_stops_are_compared():
    items = [
        stop_item("S1", stop=1, priority=1),
        stop_item("S3", stop=3, priority=1),
        stop_item("S5", stop=5, priority=1),
    ]
    placements = [placed("S1", z=200), placed("S3", z=0, x=100), placed("S5", z=100, x=200)]

    report = audit_delivery_order(placements, items)

    assert [(v.earlier_stop, v.later_stop) for v in report.violations] == [(3, 5)]
    assert "1 LIFO violation" in report.summary


def test_unknown_item_ids_are_ignored():
    items = {"KNOWN": stop_item("KNOWN", stop=1, priority=1)}

    report = audit_delivery_order([placed("KNOWN", z=0), placed("GHOST", z=100, x=100)], items)

    assert report.valid is True
    assert [s.stop for s in report.stops] == [1]


def test_stop_summaries():
    items = [stop_item("A", stop=2, priority=1), stop_item("B", stop=1, priority=1)]
    placements = [
        placed("A", z=0),
        placed("A", z=100, index=1),
        placed("B", z=0, x=100),
    ]

    stops = summarize_stops(placements, {item.id: item for item in items})

    assert [s.stop for s in stops] == [1, 2]
    second = stops[1]
    assert second.item_count == 2
    assert second.total_weight == 200
    assert second.min_z == 0
    assert second.max_z == 200
    assert second.mean_z == pytest.approx(50)
    assert second.item_ids == ["A"]
