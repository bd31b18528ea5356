import uuid
from typing import NamedTuple


class Coordinate(NamedTuple):
    """A position in data space.

    ``primary`` is the horizontal axis value (x, or a POSIX timestamp) and
    ``secondary`` the vertical one (y, or a temperature).
    """

    primary: float
    secondary: float


class PointView(NamedTuple):
    """A read-only row handed to renderers."""

    id: uuid.UUID
    primary: float
    secondary: float
    dragged: bool


class Point:
    """A single chart datum with a stable identity and mutable coordinates.

    Coordinates are exposed read-only; only `DraggablePointSeries` moves a
    point, through `_move_to`.
    """

    __slots__ = ("_id", "_primary", "_secondary")

    def __init__(self, primary: float, secondary: float) -> None:
        self._id = uuid.uuid4()
        self._primary = float(primary)
        self._secondary = float(secondary)

    @property
    def id(self) -> uuid.UUID:
        """The process-unique identity of this point."""
        return self._id

    @property
    def primary(self) -> float:
        return self._primary

    @property
    def secondary(self) -> float:
        return self._secondary

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self._primary, self._secondary)

    def _move_to(self, coordinate: Coordinate) -> None:
        self._primary = float(coordinate[0])
        self._secondary = float(coordinate[1])

    def __repr__(self) -> str:
        return (
            f"Point(id={str(self._id)[:8]}, primary={self._primary}, "
            f"secondary={self._secondary})"
        )
