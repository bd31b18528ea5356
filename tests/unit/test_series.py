import pytest
from loguru import logger

from interactivechart.datasets import linear_points
from interactivechart.hit_test import ThresholdHitTest, WeightedHitTest
from interactivechart.models import Coordinate
from interactivechart.series import (
    DraggablePointSeries,
    SeriesEvent,
    SeriesEventKind,
)


@pytest.fixture()
def series() -> DraggablePointSeries:
    """Provides a series over the nine-point demo dataset."""
    return DraggablePointSeries(linear_points())


@pytest.fixture()
def events(series: DraggablePointSeries) -> list[SeriesEvent]:
    """Collects every event the series emits."""
    collected: list[SeriesEvent] = []
    series.subscribe(collected.append)
    return collected


def test_construction_preserves_order(series: DraggablePointSeries) -> None:
    """Tests that points keep insertion order and get unique identities."""
    assert len(series) == 9
    assert [p.coordinate for p in series] == [
        Coordinate(i * 100.0, i * 100.0) for i in range(9)
    ]
    assert len({p.id for p in series.points}) == 9
    assert isinstance(series.hit_test, ThresholdHitTest)


def test_empty_series() -> None:
    """Tests the empty-series edge cases."""
    series = DraggablePointSeries()
    assert series.nearest_point(Coordinate(0.0, 0.0)) is None
    assert series.begin_drag(Coordinate(0.0, 0.0)) is None
    series.update_drag(Coordinate(1.0, 1.0))
    series.end_drag()
    assert series.snapshot() == []


def test_empty_series_weighted() -> None:
    """Tests that the weighted strategy also finds nothing when empty."""
    series = DraggablePointSeries(hit_test=WeightedHitTest())
    assert series.nearest_point(Coordinate(0.0, 0.0)) is None


def test_nearest_point_uses_hit_test(series: DraggablePointSeries) -> None:
    """Tests that nearest_point delegates to the configured strategy."""
    assert series.nearest_point(Coordinate(450.0, 450.0)) is None
    series.hit_test = WeightedHitTest()
    assert series.nearest_point(Coordinate(440.0, 440.0)) is series.points[4]


def test_nearest_point_accepts_plain_tuples(series: DraggablePointSeries) -> None:
    """Tests that targets may be given as plain tuples."""
    assert series.nearest_point((805.0, 795.0)) is series.points[8]


def test_begin_drag_hit(
    series: DraggablePointSeries, events: list[SeriesEvent]
) -> None:
    """Tests starting a drag on a point."""
    target_point = series.points[2]
    drag_id = series.begin_drag(Coordinate(203.0, 198.0))

    assert drag_id == target_point.id
    assert series.dragged_point is target_point
    assert series.is_dragging(target_point)
    assert events == [SeriesEvent(SeriesEventKind.DRAG_STARTED, target_point)]


def test_begin_drag_miss(
    series: DraggablePointSeries, events: list[SeriesEvent]
) -> None:
    """Tests that a miss leaves no drag and emits nothing."""
    assert series.begin_drag(Coordinate(250.0, 250.0)) is None
    assert series.dragged_point is None
    assert not any(series.is_dragging(p) for p in series)
    assert events == []


def test_begin_drag_is_idempotent(
    series: DraggablePointSeries, events: list[SeriesEvent]
) -> None:
    """Tests that a second begin_drag keeps the first point."""
    first = series.begin_drag(Coordinate(100.0, 100.0))
    second = series.begin_drag(Coordinate(700.0, 700.0))

    assert first == second == series.points[1].id
    assert series.dragged_point is series.points[1]
    assert len(events) == 1


def test_update_drag_moves_only_dragged_point(
    series: DraggablePointSeries, events: list[SeriesEvent]
) -> None:
    """Tests that update_drag mutates only the dragged point."""
    dragged = series.points[3]
    others_before = {p.id: p.coordinate for p in series if p is not dragged}

    series.begin_drag(Coordinate(300.0, 300.0))
    series.update_drag(Coordinate(333.0, -50.0))

    assert dragged.coordinate == Coordinate(333.0, -50.0)
    assert {p.id: p.coordinate for p in series if p is not dragged} == others_before
    assert events[-1] == SeriesEvent(SeriesEventKind.POINT_MOVED, dragged)


def test_update_drag_has_no_bounds(series: DraggablePointSeries) -> None:
    """Tests that points can be moved anywhere."""
    series.begin_drag(Coordinate(0.0, 0.0))
    series.update_drag(Coordinate(-1e9, 1e9))
    assert series.points[0].coordinate == Coordinate(-1e9, 1e9)


def test_update_drag_keeps_identity_and_order(series: DraggablePointSeries) -> None:
    """Tests that moving a point past its neighbours keeps identity and order."""
    ids_before = [p.id for p in series]
    series.begin_drag(Coordinate(0.0, 0.0))
    series.update_drag(Coordinate(900.0, 900.0))

    assert [p.id for p in series] == ids_before
    assert series.points[0].coordinate == Coordinate(900.0, 900.0)


def test_update_drag_follows_resolved_point(series: DraggablePointSeries) -> None:
    """Tests that successive moves keep editing the point grabbed at the start."""
    grabbed = series.points[4]
    series.begin_drag(Coordinate(400.0, 400.0))
    # Move right on top of another point; the grabbed point must follow.
    series.update_drag(Coordinate(500.0, 500.0))
    series.update_drag(Coordinate(510.0, 520.0))

    assert grabbed.coordinate == Coordinate(510.0, 520.0)
    assert series.points[5].coordinate == Coordinate(500.0, 500.0)


def test_update_drag_without_drag_is_noop(
    series: DraggablePointSeries, events: list[SeriesEvent]
) -> None:
    """Tests that update_drag does nothing when no drag is active."""
    before = [p.coordinate for p in series]
    series.update_drag(Coordinate(123.0, 456.0))
    assert [p.coordinate for p in series] == before
    assert events == []


def test_end_drag_clears_state(
    series: DraggablePointSeries, events: list[SeriesEvent]
) -> None:
    """Tests that end_drag releases the point for every query."""
    dragged = series.points[6]
    series.begin_drag(Coordinate(600.0, 600.0))
    series.end_drag()

    assert series.dragged_point is None
    assert not any(series.is_dragging(p) for p in series)
    assert events[-1] == SeriesEvent(SeriesEventKind.DRAG_ENDED, dragged)


def test_end_drag_is_idempotent(
    series: DraggablePointSeries, events: list[SeriesEvent]
) -> None:
    """Tests that repeated end_drag calls are harmless and silent."""
    series.end_drag()
    series.begin_drag(Coordinate(0.0, 0.0))
    series.end_drag()
    series.end_drag()
    assert [e.kind for e in events] == [
        SeriesEventKind.DRAG_STARTED,
        SeriesEventKind.DRAG_ENDED,
    ]


def test_new_drag_after_end(series: DraggablePointSeries) -> None:
    """Tests that a new gesture resolves a new point."""
    series.begin_drag(Coordinate(0.0, 0.0))
    series.end_drag()
    assert series.begin_drag(Coordinate(800.0, 800.0)) == series.points[8].id


def test_snapshot_flags_dragged_point(series: DraggablePointSeries) -> None:
    """Tests the renderer-facing snapshot."""
    series.begin_drag(Coordinate(100.0, 100.0))
    series.update_drag(Coordinate(150.0, 175.0))
    rows = series.snapshot()

    assert [r.dragged for r in rows] == [i == 1 for i in range(9)]
    assert (rows[1].primary, rows[1].secondary) == (150.0, 175.0)
    assert rows[1].id == series.points[1].id


def test_points_cannot_be_aliased(series: DraggablePointSeries) -> None:
    """Tests that the exposed tuple is a copy."""
    points = series.points
    assert isinstance(points, tuple)
    with pytest.raises(AttributeError):
        points[0].primary = 5.0  # type: ignore[misc]


def test_switching_hit_test_keeps_active_drag(series: DraggablePointSeries) -> None:
    """Tests that changing strategy mid-drag does not re-resolve."""
    series.begin_drag(Coordinate(200.0, 200.0))
    series.hit_test = WeightedHitTest()
    series.begin_drag(Coordinate(800.0, 800.0))
    assert series.dragged_point is series.points[2]


def test_reset_replaces_points_and_clears_drag(
    series: DraggablePointSeries, events: list[SeriesEvent]
) -> None:
    """Tests that reset rebuilds the dataset."""
    old_ids = {p.id for p in series}
    series.begin_drag(Coordinate(0.0, 0.0))
    series.reset([(1.0, 2.0), (3.0, 4.0)])

    assert len(series) == 2
    assert series.dragged_point is None
    assert old_ids.isdisjoint({p.id for p in series})
    assert events[-1] == SeriesEvent(SeriesEventKind.RESET)


def test_unsubscribe_stops_notifications(series: DraggablePointSeries) -> None:
    """Tests removing a listener."""
    received: list[SeriesEvent] = []
    sub_id = series.subscribe(received.append)
    series.unsubscribe(sub_id)
    series.begin_drag(Coordinate(0.0, 0.0))
    assert received == []


def test_unsubscribe_unknown_id_warns(series: DraggablePointSeries) -> None:
    """Tests that an invalid subscription ID is logged, not raised."""
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        series.unsubscribe(999)
    finally:
        logger.remove(sink_id)
    assert any("invalid ID: 999" in m for m in messages)


def test_failing_listener_does_not_block_others(series: DraggablePointSeries) -> None:
    """Tests that one broken listener does not starve the rest."""

    def broken(_event: SeriesEvent) -> None:
        raise RuntimeError("boom")

    received: list[SeriesEvent] = []
    series.subscribe(broken)
    series.subscribe(received.append)
    series.begin_drag(Coordinate(0.0, 0.0))

    assert [e.kind for e in received] == [SeriesEventKind.DRAG_STARTED]
    assert series.dragged_point is series.points[0]


def test_listener_sees_completed_mutation(series: DraggablePointSeries) -> None:
    """Tests that listeners run after the state change."""
    seen: list[tuple[float, float]] = []

    def record(event: SeriesEvent) -> None:
        if event.point is not None:
            seen.append((event.point.primary, event.point.secondary))

    series.subscribe(record)
    series.begin_drag(Coordinate(0.0, 0.0))
    series.update_drag(Coordinate(12.0, 34.0))
    assert seen[-1] == (12.0, 34.0)
