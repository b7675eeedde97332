import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from nurbs_analytic import NurbsCurve


def reference_point(t, degree, knots, weights, points):
    """Textbook de Boor evaluation in homogeneous coordinates."""
    knots = np.asarray(knots, dtype=float)
    points = np.asarray(points, dtype=float)
    weights = np.asarray(weights, dtype=float)
    n = len(points)
    k = int(np.searchsorted(knots, t, side='right')) - 1
    k = min(max(k, degree), n - 1)

    homogeneous = np.hstack([points * weights[:, None], weights[:, None]])
    d = [homogeneous[j + k - degree].copy() for j in range(degree + 1)]
    for r in range(1, degree + 1):
        for j in range(degree, r - 1, -1):
            left = knots[j + k - degree]
            right = knots[j + 1 + k - r]
            alpha = (t - left) / (right - left)
            d[j] = (1.0 - alpha) * d[j - 1] + alpha * d[j]
    return d[degree][:-1] / d[degree][-1]


@pytest.fixture
def planar_cubic():
    """Degree 3, non-uniform knots, non-uniform weights."""
    knots = [0.0, 0.0, 0.0, 0.0, 0.2, 0.5, 0.55, 1.0, 1.0, 1.0, 1.0]
    weights = [1.0, 0.8, 1.7, 0.6, 1.2, 2.0, 1.0]
    points = [[0.0, 0.0], [1.0, 2.0], [2.5, 2.2], [3.0, 0.5],
              [4.2, -0.5], [5.0, 1.0], [6.0, 0.2]]
    return NurbsCurve(3, knots, weights, points)


@pytest.fixture
def planar_quadratic():
    """Degree 2 on open uniform knots with explicit weights."""
    weights = [1.0, 2.0, 0.5, 1.5, 1.0]
    points = [[0.0, 1.0], [1.0, 3.0], [2.0, 2.0], [3.5, 3.0], [4.0, 1.5]]
    return NurbsCurve.uniform(2, weights, points)


@pytest.fixture
def quarter_circle():
    """Exact unit quarter circle from (1, 0) to (0, 1)."""
    return NurbsCurve(2, [0, 0, 0, 1, 1, 1], [1.0, np.sqrt(0.5), 1.0],
                      [[1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
