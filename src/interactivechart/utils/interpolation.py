from collections.abc import Sequence

import numpy as np

DEFAULT_SAMPLES_PER_SEGMENT = 16


def _catmull_rom_1d(values: np.ndarray, t: np.ndarray) -> np.ndarray:
    # End points are duplicated so the curve starts and stops on the data.
    padded = np.concatenate(([values[0]], values, [values[-1]]))
    p0 = padded[:-3, None]
    p1 = padded[1:-2, None]
    p2 = padded[2:-1, None]
    p3 = padded[3:, None]
    curve = 0.5 * (
        2 * p1
        + (p2 - p0) * t
        + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t**2
        + (3 * p1 - p0 - 3 * p2 + p3) * t**3
    )
    return np.append(curve.ravel(), values[-1])


def catmull_rom(
    xs: Sequence[float],
    ys: Sequence[float],
    samples_per_segment: int = DEFAULT_SAMPLES_PER_SEGMENT,
) -> tuple[np.ndarray, np.ndarray]:
    """Samples a uniform Catmull-Rom spline through the given points.

    The curve passes through every input point, in order. It is only used for
    drawing; the data itself is never resampled.

    Args:
        xs: Horizontal coordinates, in display order.
        ys: Vertical coordinates, same length as `xs`.
        samples_per_segment: Samples drawn between consecutive points.

    Returns:
        A pair of arrays holding the sampled curve. With fewer than three
        points the inputs are returned as arrays unchanged.

    Raises:
        ValueError: If the inputs differ in length or `samples_per_segment`
            is not positive.
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if x.shape != y.shape:
        err_msg = "xs and ys must have the same length."
        raise ValueError(err_msg)
    if samples_per_segment < 1:
        err_msg = "samples_per_segment must be a positive integer."
        raise ValueError(err_msg)
    if x.size < 3:
        return x, y

    t = np.arange(samples_per_segment, dtype=float) / samples_per_segment
    return _catmull_rom_1d(x, t), _catmull_rom_1d(y, t)
