import math
from collections.abc import Sequence


def _check_step(step: float) -> None:
    if step <= 0:
        err_msg = "Axis step must be a positive number."
        raise ValueError(err_msg)


def axis_label_count(values: Sequence[float], step: float) -> int:
    """Returns how many axis labels fit across `values` at the given step.

    Computed as ``floor((max - min) / step) + 1``. An empty sequence has no
    labels.

    Raises:
        ValueError: If `step` is not positive.
    """
    _check_step(step)
    if not values:
        return 0
    return math.floor((max(values) - min(values)) / step) + 1


def tick_values(values: Sequence[float], step: float) -> list[float]:
    """Returns the label positions ``min, min + step, ...`` for `values`."""
    count = axis_label_count(values, step)
    if count == 0:
        return []
    start = min(values)
    return [start + i * step for i in range(count)]
