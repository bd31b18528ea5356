import enum
import itertools
import uuid
from collections.abc import Callable, Iterable, Iterator
from typing import NamedTuple

from loguru import logger

from interactivechart.hit_test import HitTest, ThresholdHitTest
from interactivechart.models import Coordinate, Point, PointView


class SeriesEventKind(enum.Enum):
    DRAG_STARTED = "drag_started"
    POINT_MOVED = "point_moved"
    DRAG_ENDED = "drag_ended"
    RESET = "reset"


class SeriesEvent(NamedTuple):
    """Notification emitted after a series mutation has completed."""

    kind: SeriesEventKind
    point: Point | None = None


SeriesListener = Callable[[SeriesEvent], None]


class DraggablePointSeries:
    """An ordered collection of chart points that can be dragged one at a time.

    The series owns its points and mediates every change to them. A drag
    gesture maps onto three calls: `begin_drag` on pointer-down resolves the
    point to grab, `update_drag` on each pointer-move moves that point, and
    `end_drag` on pointer-up releases it. At most one point is dragged at a
    time, and it is tracked by identity.

    Renderers either read `snapshot()` after each event or subscribe for
    push notifications. All calls are expected on the GUI thread.
    """

    def __init__(
        self,
        coordinates: Iterable[tuple[float, float]] = (),
        hit_test: HitTest | None = None,
    ) -> None:
        """Initializes the series.

        Args:
            coordinates: The (primary, secondary) pairs to build points from,
                in display order.
            hit_test: The strategy used to resolve drag targets. Defaults to a
                `ThresholdHitTest` with its default deltas.
        """
        self._points: list[Point] = [Point(p, s) for p, s in coordinates]
        self._hit_test: HitTest = (
            hit_test if hit_test is not None else ThresholdHitTest()
        )
        self._drag_id: uuid.UUID | None = None
        self._listeners: dict[int, SeriesListener] = {}
        self._id_generator = itertools.count(1)

    # --- Read access ---

    @property
    def points(self) -> tuple[Point, ...]:
        """The points in display order."""
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(tuple(self._points))

    @property
    def hit_test(self) -> HitTest:
        return self._hit_test

    @hit_test.setter
    def hit_test(self, strategy: HitTest) -> None:
        logger.debug(f"Hit test changed to {strategy!r}.")
        self._hit_test = strategy

    @property
    def dragged_point(self) -> Point | None:
        """The point currently being dragged, if any."""
        if self._drag_id is None:
            return None
        for point in self._points:
            if point.id == self._drag_id:
                return point
        return None

    def is_dragging(self, point: Point) -> bool:
        """Returns True if `point` is the one being dragged."""
        return self._drag_id is not None and point.id == self._drag_id

    def snapshot(self) -> list[PointView]:
        """Returns an immutable view of every point, in order."""
        return [
            PointView(p.id, p.primary, p.secondary, self.is_dragging(p))
            for p in self._points
        ]

    # --- Drag protocol ---

    def nearest_point(self, target: Coordinate) -> Point | None:
        """Resolves `target` to a point using the configured hit test.

        Returns:
            The matching point, or None if the series is empty or nothing is
            close enough.
        """
        return self._hit_test.find(self._points, Coordinate(*target))

    def begin_drag(self, target: Coordinate) -> uuid.UUID | None:
        """Starts dragging the point nearest to `target`.

        If a drag is already active the existing point is kept and `target`
        is ignored.

        Returns:
            The identity of the dragged point, or None if nothing was hit.
        """
        if self._drag_id is not None:
            return self._drag_id

        point = self.nearest_point(target)
        if point is None:
            logger.trace(f"No point near {tuple(target)}; drag not started.")
            return None

        self._drag_id = point.id
        logger.debug(f"Drag started on {point!r}.")
        self._notify(SeriesEvent(SeriesEventKind.DRAG_STARTED, point))
        return self._drag_id

    def update_drag(self, coordinate: Coordinate) -> None:
        """Moves the dragged point to `coordinate`.

        No bounds are enforced. Does nothing when no drag is active.
        """
        point = self.dragged_point
        if point is None:
            logger.trace("update_drag called with no active drag; ignored.")
            return
        point._move_to(Coordinate(*coordinate))
        self._notify(SeriesEvent(SeriesEventKind.POINT_MOVED, point))

    def end_drag(self) -> None:
        """Releases the dragged point, if any."""
        point = self.dragged_point
        self._drag_id = None
        if point is not None:
            logger.debug(f"Drag ended on {point!r}.")
            self._notify(SeriesEvent(SeriesEventKind.DRAG_ENDED, point))

    def reset(self, coordinates: Iterable[tuple[float, float]]) -> None:
        """Replaces every point with new ones built from `coordinates`."""
        self._drag_id = None
        self._points = [Point(p, s) for p, s in coordinates]
        logger.info(f"Series reset with {len(self._points)} points.")
        self._notify(SeriesEvent(SeriesEventKind.RESET))

    # --- Change notification ---

    def subscribe(self, callback: SeriesListener) -> int:
        """Registers `callback` to be called after every mutation.

        Returns:
            A subscription ID that can be passed to `unsubscribe`.
        """
        sub_id = next(self._id_generator)
        self._listeners[sub_id] = callback
        logger.debug(f"New series subscription (ID: {sub_id}).")
        return sub_id

    def unsubscribe(self, sub_id: int) -> None:
        if self._listeners.pop(sub_id, None) is None:
            logger.warning(f"Attempted to unsubscribe with invalid ID: {sub_id}")

    def _notify(self, event: SeriesEvent) -> None:
        # Copy so listeners may unsubscribe while being notified.
        for callback in list(self._listeners.values()):
            try:
                callback(event)
            except Exception:  # noqa: PERF203
                logger.exception(f"Series listener failed while handling {event.kind}.")

    def __repr__(self) -> str:
        return (
            f"DraggablePointSeries(size={len(self._points)}, "
            f"hit_test={self._hit_test!r}, dragging={self._drag_id is not None})"
        )
