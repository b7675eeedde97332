"""
Knot vectors, weight sequences and segment boundaries.
"""

import numpy as np

from .exceptions import DegenerateConstructionError


def open_uniform_knots(n_points, degree):
    """
    Open (clamped) uniform knot vector on [0, 1].

    Args:
        n_points: Number of control points
        degree: Curve degree p

    Returns:
        np.ndarray of length n_points + p + 1: p+1 zeros, evenly spaced
        interior knots, p+1 ones
    """
    if degree < 1:
        raise DegenerateConstructionError(f"degree must be >= 1, got {degree}")
    if n_points < degree + 1:
        raise DegenerateConstructionError(
            f"{n_points} control points cannot carry a degree {degree} curve"
        )
    n_interior = n_points - degree - 1
    interior = np.linspace(0.0, 1.0, n_interior + 2)[1:-1]
    return np.concatenate([np.zeros(degree + 1), interior, np.ones(degree + 1)])


def linear_weights(w_start, w_end, n_points):
    """Weights interpolated linearly from w_start to w_end."""
    return np.linspace(w_start, w_end, n_points)


def segment_boundaries(knots, degree):
    """
    Knot indices delimiting the non-empty spans of the curve domain.

    Segment i covers [knots[b[i]], knots[b[i+1]]] and b[i] is the span index
    used by the de Boor recurrence. The last entry closes the domain.
    """
    knots = np.asarray(knots, dtype=float)
    last = len(knots) - degree - 1
    spans = [k for k in range(degree, last) if knots[k] < knots[k + 1]]
    return spans + [last]
