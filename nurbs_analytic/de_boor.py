"""
Rational de Boor recurrence carried out over polynomials.

Instead of blending control points at one parameter value, each blending
step multiplies by the linear factors (t - u_left) and (u_right - t), so the
single pair left after p rounds is the segment's polynomial numerator and
denominator.
"""

import numpy as np

from .polynomial import Polynomial
from .rational import RationalFunction


def blend(values, span, knots, degree):
    """
    Run the de Boor recurrence on degree-0 polynomials.

    Args:
        values: p+1 scalars attached to control points span-p .. span
        span: Knot span index k with knots[k] < knots[k+1]
        knots: Knot vector
        degree: Curve degree p

    Returns:
        Polynomial of degree <= p equal to sum_i values[i] * N_{i,p}(t) on
        [knots[span], knots[span+1]]
    """
    d = [Polynomial([v]) for v in values]
    for r in range(1, degree + 1):
        for j in range(degree, r - 1, -1):
            left = knots[j + span - degree]
            right = knots[j + 1 + span - r]
            rising = Polynomial([1.0, -left])  # t - left
            falling = Polynomial([-1.0, right])  # right - t
            d[j] = (rising * d[j] + falling * d[j - 1]) / (right - left)
    return d[degree]


def de_boor_rational(span, knots, weights, points, degree) -> RationalFunction:
    """
    Rational form of the curve on the knot span starting at knots[span].

    The recurrence runs once on the weights (denominator) and once per
    dimension on the homogeneous coordinates w_i * P_i (numerators).

    Args:
        span: Knot span index
        knots: Knot vector, shape (n + p + 1,)
        weights: Weights, shape (n,)
        points: Control points, shape (n, dim)
        degree: Curve degree p

    Returns:
        RationalFunction with dim numerators over the weight denominator
    """
    local = slice(span - degree, span + 1)
    w = np.asarray(weights, dtype=float)[local]
    homogeneous = np.asarray(points, dtype=float)[local] * w[:, None]

    denominator = blend(w, span, knots, degree)
    numerators = [blend(homogeneous[:, d], span, knots, degree)
                  for d in range(homogeneous.shape[1])]
    return RationalFunction(numerators, denominator)
