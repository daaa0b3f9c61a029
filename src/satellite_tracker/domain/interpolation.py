# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Lagrange polynomial interpolation over time-tagged samples.

The stencil is degree+1 consecutive samples chosen so the query time sits
in the middle interval, shifted inward at the array ends. At a sample time
every stencil reproduces the sample exactly, so the interpolant is
continuous across stencil changes.
"""
import numpy as np


def lagrange_stencil(times: np.ndarray, t: float, degree: int = 3) -> slice:
    """
    Index window of degree+1 samples around t.

    Args:
        times: Strictly increasing sample times, shape (N,).
        t: Query time in the same unit.
        degree: Polynomial degree (points used = degree + 1).

    Returns:
        slice into times/values. Shorter than degree+1 when N is.
    """
    n = len(times)
    points = min(degree + 1, n)
    # first sample strictly after t
    upper = int(np.searchsorted(times, t, side="right"))
    first = upper - (degree // 2) - 1
    first = max(0, min(first, n - points))
    return slice(first, first + points)


def lagrange_interpolate(
    times: np.ndarray,
    values: np.ndarray,
    t: float,
    degree: int = 3,
) -> np.ndarray:
    """
    Evaluate the Lagrange polynomial through the stencil around t.

    Args:
        times: Strictly increasing sample times, shape (N,).
        values: Sample values, shape (N,) or (N, D).
        t: Query time.
        degree: Polynomial degree.

    Returns:
        Interpolated value, shape () or (D,).
    """
    if degree < 1:
        raise ValueError(f"degree must be at least 1, got {degree}")
    if len(times) != len(values):
        raise ValueError(
            f"times and values differ in length: {len(times)} vs {len(values)}"
        )
    if len(times) < 2:
        raise ValueError("need at least 2 samples to interpolate")

    window = lagrange_stencil(times, t, degree)
    xs = np.asarray(times[window], dtype=float)
    ys = np.asarray(values[window], dtype=float)

    exact = np.nonzero(xs == t)[0]
    if exact.size:
        return ys[exact[0]].copy()

    result = np.zeros_like(ys[0])
    for j in range(len(xs)):
        others = np.delete(xs, j)
        weight = np.prod((t - others) / (xs[j] - others))
        result = result + weight * ys[j]
    return result
