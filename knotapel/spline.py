"""
Closed centripetal Catmull-Rom splines.

Used to turn a faceted polyline into evenly spaced samples along a
smooth closed curve. The tangent construction follows the usual
non-uniform Catmull-Rom formulation with alpha = 0.5 (knot intervals
are |P_{i+1} - P_i|^0.5), which avoids cusps and self-intersections
inside a segment.
"""

from typing import Sequence

import numpy as np

# Knot intervals shorter than this are treated as degenerate
_MIN_INTERVAL = 1e-4


def catmull_rom_closed(points: np.ndarray, samples_per_segment: int = 8) -> np.ndarray:
    """
    Densely sample the closed centripetal spline through `points`.

    Args:
        points: (m, 3) control points, implicitly closed
        samples_per_segment: Samples per control-point segment

    Returns:
        (m * samples_per_segment, 3) array starting at points[0]
    """
    p1 = np.asarray(points, dtype=float)
    m = p1.shape[0]
    if m < 2:
        return p1.copy()

    p0 = np.roll(p1, 1, axis=0)
    p2 = np.roll(p1, -1, axis=0)
    p3 = np.roll(p1, -2, axis=0)

    dt0 = np.sum((p1 - p0) ** 2, axis=1) ** 0.25
    dt1 = np.sum((p2 - p1) ** 2, axis=1) ** 0.25
    dt2 = np.sum((p3 - p2) ** 2, axis=1) ** 0.25

    dt1 = np.where(dt1 < _MIN_INTERVAL, 1.0, dt1)
    dt0 = np.where(dt0 < _MIN_INTERVAL, dt1, dt0)
    dt2 = np.where(dt2 < _MIN_INTERVAL, dt1, dt2)

    dt0 = dt0[:, None]
    dt1 = dt1[:, None]
    dt2 = dt2[:, None]

    t1 = (p1 - p0) / dt0 - (p2 - p0) / (dt0 + dt1) + (p2 - p1) / dt1
    t2 = (p2 - p1) / dt1 - (p3 - p1) / (dt1 + dt2) + (p3 - p2) / dt2
    t1 = t1 * dt1
    t2 = t2 * dt1

    # Cubic Hermite coefficients per segment
    c0 = p1
    c1 = t1
    c2 = -3 * p1 + 3 * p2 - 2 * t1 - t2
    c3 = 2 * p1 - 2 * p2 + t1 + t2

    s = np.arange(samples_per_segment, dtype=float) / samples_per_segment
    s = s[None, :, None]
    dense = (c0[:, None, :] + c1[:, None, :] * s
             + c2[:, None, :] * s ** 2 + c3[:, None, :] * s ** 3)
    return dense.reshape(-1, 3)


def resample_closed(points: np.ndarray, count: int, samples_per_segment: int = 8) -> np.ndarray:
    """
    Return `count` points spaced uniformly by arc length along the closed
    spline through `points`, starting at points[0].
    """
    pts = np.asarray(points, dtype=float)
    if pts.shape[0] == 0 or count < 1:
        return np.zeros((0, 3))
    if pts.shape[0] == 1:
        return np.repeat(pts, count, axis=0)

    dense = catmull_rom_closed(pts, samples_per_segment)
    loop = np.vstack([dense, dense[:1]])
    seg = np.linalg.norm(np.diff(loop, axis=0), axis=1)
    cumulative = np.concatenate([[0.0], np.cumsum(seg)])
    total = cumulative[-1]
    if total <= 0.0:
        return np.repeat(pts[:1], count, axis=0)

    targets = np.arange(count, dtype=float) * (total / count)
    return np.column_stack([np.interp(targets, cumulative, loop[:, k]) for k in range(3)])


def edge_lengths(points: np.ndarray) -> np.ndarray:
    """Lengths of the cyclic edges p[i] -> p[i+1]."""
    pts = np.asarray(points, dtype=float)
    return np.linalg.norm(np.roll(pts, -1, axis=0) - pts, axis=1)


def mean_edge_length(points: np.ndarray) -> float:
    """Mean cyclic edge length (0 for fewer than two points)."""
    pts = np.asarray(points, dtype=float)
    if pts.shape[0] < 2:
        return 0.0
    return float(np.mean(edge_lengths(pts)))


def bounding_box(curves: Sequence[np.ndarray]):
    """Joint axis-aligned bounding box of several curves as (min, max)."""
    stacked = np.vstack([np.asarray(c, dtype=float) for c in curves])
    return stacked.min(axis=0), stacked.max(axis=0)


def bounding_diagonal(curves: Sequence[np.ndarray]) -> float:
    """Diagonal length of the joint bounding box."""
    lo, hi = bounding_box(curves)
    return float(np.linalg.norm(hi - lo))
