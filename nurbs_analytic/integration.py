"""
Closed-form integration of rational functions and NURBS curve integrals.

A proper fraction N / prod (t - r_i)^m_i is split into partial fractions
c_ik / (t - r_i)^k whose antiderivatives are logarithms (k = 1) or powers
(k > 1). The polynomial part left by long division is integrated directly.
"""

import cmath
import logging
import math
from functools import lru_cache

import numpy as np
from scipy import linalg

from .constants import DEFAULT_QUADRATURE_POINTS
from .polynomial import Polynomial
from .roots import Root, RootStrategy, merge_roots, solve

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Partial fractions


def pole_integral(coefficient, root, k, start, end):
    """
    Definite integral of coefficient / (t - root)^k over [start, end].

    Uses the principal complex logarithm; the branch is consistent as long as
    the pole does not lie on the real segment [start, end].
    """
    root = complex(root)
    if k == 1:
        return coefficient * (cmath.log(end - root) - cmath.log(start - root))
    exponent = 1 - k
    return coefficient / exponent * ((end - root) ** exponent - (start - root) ** exponent)


def _pole_terms(poles):
    """(root value, power) pairs in the column order of the decomposition matrix."""
    return [(complex(pole.value), k) for pole in poles for k in range(1, pole.multiplicity + 1)]


def _taylor_coefficients(poly, at, count):
    """First `count` Taylor coefficients of poly around `at`."""
    coefficients = []
    current = poly
    for s in range(count):
        coefficients.append(current(at) / math.factorial(s))
        current = current.derivative()
    return coefficients


def decomposition_matrix(poles) -> np.ndarray:
    """
    Linear system of the partial-fraction decomposition.

    Column (j, k) holds the basis polynomial B_jk = D / (t - r_j)^k with
    D = prod (t - r_i)^m_i. Row (i, s) matches the s-th Taylor coefficient
    at r_i, so the system is block diagonal (one block per pole) and is
    regular whenever the poles are distinct.

    Args:
        poles: Root(multiplicity, value) list of the monic denominator

    Returns:
        (M, M) complex matrix, M = sum of multiplicities
    """
    values = [complex(pole.value) for pole in poles]
    terms = _pole_terms(poles)
    size = len(terms)
    matrix = np.zeros((size, size), dtype=complex)

    for col, (root, k) in enumerate(terms):
        factors = []
        for pole, value in zip(poles, values):
            power = pole.multiplicity - k if value == root else pole.multiplicity
            factors.extend([value] * power)
        basis = Polynomial.from_roots(factors)

        row = 0
        for pole, value in zip(poles, values):
            matrix[row:row + pole.multiplicity, col] = _taylor_coefficients(
                basis, value, pole.multiplicity
            )
            row += pole.multiplicity
    return matrix


def _taylor_rhs(numerator, poles):
    rhs = []
    for pole in poles:
        rhs.extend(_taylor_coefficients(numerator, complex(pole.value), pole.multiplicity))
    return np.array(rhs, dtype=complex)


def partial_fractions(numerator, poles) -> np.ndarray:
    """
    Coefficients c_ik of numerator / prod (t - r_i)^m_i = sum c_ik / (t - r_i)^k.

    The numerator degree must be below sum(m_i). Coefficients are ordered
    pole by pole, k = 1 .. m_i.
    """
    matrix = decomposition_matrix(poles)
    return linalg.solve(matrix, _taylor_rhs(Polynomial(numerator), poles))


class RationalIntegrator:
    """
    Definite integrals of N(t) / W(t)^power for one fixed denominator W.

    W is normalised to monic form once, its roots are found once (with
    multiplicities scaled by `power`) and the decomposition matrix is
    factorised once, so several numerators can share them.

    Args:
        denominator: Polynomial W
        power: Exponent of W in the integrand
        strategy: RootStrategy for degree >= 4 denominators
        roots: Roots of W when already known (monic or not, same zeros)
    """

    def __init__(self, denominator, power=1, strategy=RootStrategy.EIGENVALUES, roots=None):
        base = Polynomial(denominator).trim()
        lead = base.normalize()
        self.power = power
        self.scale = lead ** power
        if roots is None:
            roots = solve(base, strategy)
        self.poles = [Root(pole.multiplicity * power, pole.value) for pole in merge_roots(roots)]
        self.terms = _pole_terms(self.poles)
        self.denominator = base ** power
        self._lu = linalg.lu_factor(decomposition_matrix(self.poles)) if self.poles else None

    def decompose(self, remainder) -> np.ndarray:
        """Partial-fraction coefficients of a proper remainder over the monic W^power."""
        return linalg.lu_solve(self._lu, _taylor_rhs(Polynomial(remainder), self.poles))

    def integrate(self, numerator, start, end) -> complex:
        numerator = Polynomial(numerator)
        total = 0j
        if numerator.degree >= self.denominator.degree:
            quotient, numerator = divmod(numerator, self.denominator)
            total += quotient.integral(start, end)

        if self.poles and not numerator.is_zero():
            for (root, k), c in zip(self.terms, self.decompose(numerator)):
                total += pole_integral(c, root, k, start, end)
        return total / self.scale


def integrate_rational(numerator, denominator, start, end,
                       strategy=RootStrategy.EIGENVALUES, power=1, roots=None) -> complex:
    """
    Closed-form integral of numerator / denominator^power over [start, end].

    >>> integrate_rational([1.0], [1.0], 0.0, 2.0)
    (2+0j)
    """
    integrator = RationalIntegrator(denominator, power=power, strategy=strategy, roots=roots)
    return integrator.integrate(numerator, start, end)


# ----------------------------------------------------------------------
# Curve integrals of  y dx


def clipped_segments(curve, t0=None, t1=None):
    """
    Yield (segment, start, end) for every segment overlapping [t0, t1].

    Segments outside the bounds are skipped, partial ones are clipped.
    """
    lo, hi = curve.parameter_range
    t0 = lo if t0 is None else t0
    t1 = hi if t1 is None else t1

    for i, segment in enumerate(curve.segments):
        start, end = curve.segment_interval(i)
        if start >= t1:
            break
        if end <= t0:
            logger.debug("segment %d outside [%g, %g], skipped", i, t0, t1)
            continue
        yield segment, max(start, t0), min(end, t1)


def _planar(segment):
    x_num, y_num = segment.numerators[:2]
    return x_num, y_num, segment.denominator


def segment_area_quotient(segment, start, end, strategy=RootStrategy.EIGENVALUES) -> complex:
    """
    Integral of y dx over one segment, symmetric form.

    With x = X/W and y = Y/W:
        int y x' dt = 1/2 int (Y X' - X Y') / W^2 dt + 1/2 [x y]
    """
    x_num, y_num, den = _planar(segment)
    numerator = y_num * x_num.derivative() - x_num * y_num.derivative()
    integrator = RationalIntegrator(den, power=2, strategy=strategy)

    boundary = 0.0
    for t, sign in ((end, 1.0), (start, -1.0)):
        x, y = segment.evaluate(t)[:2]
        boundary += sign * x * y
    return 0.5 * integrator.integrate(numerator, start, end) + 0.5 * boundary


def segment_area_triple(segment, start, end, strategy=RootStrategy.EIGENVALUES) -> complex:
    """
    Integral of y dx over one segment from the W^3 form.

        int y x' dt = int (Y X' W) / W^3 dt - int (Y X W') / W^3 dt

    Both numerators are reduced against the same decomposition matrix.
    """
    x_num, y_num, den = _planar(segment)
    first = y_num * (x_num.derivative() * den)
    second = -(y_num * den.derivative() * x_num)
    integrator = RationalIntegrator(den, power=3, strategy=strategy)
    return integrator.integrate(first, start, end) + integrator.integrate(second, start, end)


AREA_METHODS = {
    'quotient': segment_area_quotient,
    'triple': segment_area_triple,
}


def area_integral(curve, strategy=RootStrategy.EIGENVALUES, t0=None, t1=None,
                  method='quotient') -> complex:
    """
    Analytic integral of y dx along a planar NURBS curve over [t0, t1].

    Args:
        curve: NurbsCurve with dimension >= 2 (x, y are the first two axes)
        strategy: RootStrategy for the segment denominators
        t0, t1: Parameter bounds (default: the curve domain)
        method: 'quotient' or 'triple' formulation

    Returns:
        complex sum over the clipped segments
    """
    try:
        segment_integral = AREA_METHODS[method]
    except KeyError:
        raise ValueError(f"unknown method {method!r}, expected one of {sorted(AREA_METHODS)}") from None

    total = 0j
    for segment, start, end in clipped_segments(curve, t0, t1):
        total += segment_integral(segment, start, end, strategy)
    return total


# ----------------------------------------------------------------------
# Gauss-Legendre quadrature


@lru_cache(maxsize=32)
def gauss_legendre(n_points: int):
    """Cached Gauss-Legendre nodes and weights on [-1, 1]."""
    nodes, weights = np.polynomial.legendre.leggauss(n_points)
    nodes.flags.writeable = False
    weights.flags.writeable = False
    return nodes, weights


def gauss_legendre_integral(func, start, end, n_points=DEFAULT_QUADRATURE_POINTS):
    """Integral of a vectorised function over [start, end]."""
    nodes, weights = gauss_legendre(n_points)
    half = 0.5 * (end - start)
    t = half * nodes + 0.5 * (start + end)
    return half * np.sum(weights * func(t))


def area_integral_numerical(curve, n_points=DEFAULT_QUADRATURE_POINTS, t0=None, t1=None) -> float:
    """Gauss-Legendre estimate of the integral of y dx, segment by segment."""
    total = 0.0
    for segment, start, end in clipped_segments(curve, t0, t1):
        def integrand(t, segment=segment):
            return segment.evaluate(t)[:, 1] * segment.derivative(t)[:, 0]
        total += gauss_legendre_integral(integrand, start, end, n_points)
    return total
