"""Seed datasets for the demo chart.

Both datasets are nine evenly spaced points. The simple one runs from (0, 0)
to (800, 800); the timed one pairs temperatures 0..800 with hourly
timestamps.
"""

from datetime import datetime

from interactivechart.utils.time import (
    SECONDS_PER_HOUR,
    current_hour_utc,
    hourly_timestamps,
)

DEFAULT_COUNT = 9
DEFAULT_STEP = 100.0
DATASET_NAMES = ("simple", "timed")

# Data units per "simple" unit along the primary axis. Hit-test deltas and
# weights are configured in simple units; the timed dataset places points an
# hour apart where the simple one uses DEFAULT_STEP.
PRIMARY_SCALES = {"simple": 1.0, "timed": SECONDS_PER_HOUR / DEFAULT_STEP}


def linear_points(
    count: int = DEFAULT_COUNT, step: float = DEFAULT_STEP
) -> list[tuple[float, float]]:
    return [(i * step, i * step) for i in range(count)]


def hourly_temperatures(
    start: datetime | None = None,
    count: int = DEFAULT_COUNT,
    step: float = DEFAULT_STEP,
) -> list[tuple[float, float]]:
    """Returns (timestamp, temperature) pairs one hour apart.

    Args:
        start: The first timestamp. Defaults to the start of the current hour
            in UTC.
        count: Number of points.
        step: Temperature increment between consecutive points.
    """
    if start is None:
        start = current_hour_utc()
    timestamps = hourly_timestamps(start, count)
    return [(ts, i * step) for i, ts in enumerate(timestamps)]


def load_dataset(name: str) -> list[tuple[float, float]]:
    """Returns the named seed dataset.

    Raises:
        ValueError: If `name` is not one of `DATASET_NAMES`.
    """
    key = name.lower()
    if key == "simple":
        return linear_points()
    if key == "timed":
        return hourly_temperatures()
    err_msg = f"Unknown dataset '{name}'. Expected one of: {', '.join(DATASET_NAMES)}."
    raise ValueError(err_msg)


def primary_scale(name: str) -> float:
    """Returns how many primary data units one configured unit spans for `name`.

    Raises:
        ValueError: If `name` is not one of `DATASET_NAMES`.
    """
    try:
        return PRIMARY_SCALES[name.lower()]
    except KeyError:
        err_msg = (
            f"Unknown dataset '{name}'. Expected one of: {', '.join(DATASET_NAMES)}."
        )
        raise ValueError(err_msg) from None
