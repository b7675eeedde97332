"""
Polynomial root finding.

Degrees 1-3 use closed forms (the cubic through Cardano / the trigonometric
method). Higher degrees use either the eigenvalues of the companion matrix
or Laguerre's method with deflation, selected by RootStrategy.
"""

import cmath
import logging
import math
from enum import Enum
from typing import List, NamedTuple

import numpy as np
from scipy import linalg

from .constants import CUBIC_TOL, EPS, LAGUERRE_MAX_ITER, LAGUERRE_TOL, LAGUERRE_ZERO_TOL
from .exceptions import NonConvergenceError
from .polynomial import Polynomial

logger = logging.getLogger(__name__)


class Root(NamedTuple):
    multiplicity: int
    value: complex


class RootStrategy(Enum):
    """Numerical strategy for polynomials of degree >= 4."""
    EIGENVALUES = 1
    LAGUERRE = 2


def solve(poly, strategy=RootStrategy.EIGENVALUES) -> List[Root]:
    """
    Roots of a polynomial with their multiplicities.

    Args:
        poly: Polynomial or coefficient sequence (highest degree first)
        strategy: RootStrategy used for degree >= 4 (or 1/2 as shorthand)

    Returns:
        List of Root(multiplicity, value) whose multiplicities sum to the
        degree; a constant has no roots.
    """
    poly = Polynomial(poly).trim()
    degree = poly.degree
    if degree == 0:
        return []
    if degree == 1:
        return solve_linear(poly)
    if degree == 2:
        return solve_quadratic(poly)
    if degree == 3 and not poly.is_complex:
        return solve_cubic(poly)
    return solve_numerical(poly, strategy)


def solve_linear(poly) -> List[Root]:
    c0, c1 = poly.coefficients
    return [Root(1, complex(-c1 / c0))]


def solve_quadratic(poly, eps: float = EPS) -> List[Root]:
    a, b, c = poly.coefficients
    disc = b * b - 4 * a * c
    if abs(disc) < eps:
        return [Root(2, complex(-b / (2 * a)))]

    if poly.is_complex:
        sqrt_disc = cmath.sqrt(disc)
        return [Root(1, complex((-b + sqrt_disc) / (2 * a))),
                Root(1, complex((-b - sqrt_disc) / (2 * a)))]

    if disc > 0:
        sqrt_disc = math.sqrt(disc)
        return [Root(1, complex((-b + sqrt_disc) / (2 * a))),
                Root(1, complex((-b - sqrt_disc) / (2 * a)))]

    re = -b / (2 * a)
    im = math.sqrt(-disc) / (2 * a)
    return [Root(1, complex(re, im)), Root(1, complex(re, -im))]


def solve_cubic(poly, tol: float = CUBIC_TOL) -> List[Root]:
    """
    Real cubic through the depressed-cubic invariants Q and R.

    Branches: triple root, double + single root, three distinct real roots
    (trigonometric form), one real root (Cardano) plus the quadratic left
    after deflation.
    """
    c = poly.coefficients
    a = c[1] / c[0]
    b = c[2] / c[0]
    d = c[3] / c[0]

    q = a * a - 3.0 * b
    r = 2.0 * a * a * a - 9.0 * a * b + 27.0 * d
    Q = q / 9.0
    R = r / 54.0
    Q3 = Q * Q * Q
    R2 = R * R

    # 729 r^2 == 2916 q^3  <=>  R^2 == Q^3
    CR2 = 729.0 * r * r
    CQ3 = 2916.0 * q * q * q

    if abs(R) < tol and abs(Q) < tol:
        return [Root(3, complex(-a / 3.0))]

    if abs(CR2 - CQ3) < tol:
        sqrt_Q = math.sqrt(max(Q, 0.0))
        if R > 0:
            return [Root(1, complex(-2.0 * sqrt_Q - a / 3.0)),
                    Root(2, complex(sqrt_Q - a / 3.0))]
        return [Root(2, complex(-sqrt_Q - a / 3.0)),
                Root(1, complex(2.0 * sqrt_Q - a / 3.0))]

    if R2 < Q3:
        sgn_R = 1.0 if R >= 0 else -1.0
        ratio = min(1.0, max(-1.0, sgn_R * math.sqrt(R2 / Q3)))
        theta = math.acos(ratio)
        norm = -2.0 * math.sqrt(Q)
        return [Root(1, complex(norm * math.cos(theta / 3.0) - a / 3.0)),
                Root(1, complex(norm * math.cos((theta + 2.0 * math.pi) / 3.0) - a / 3.0)),
                Root(1, complex(norm * math.cos((theta - 2.0 * math.pi) / 3.0) - a / 3.0))]

    sgn_R = 1.0 if R >= 0 else -1.0
    A = -sgn_R * (abs(R) + math.sqrt(R2 - Q3)) ** (1.0 / 3.0)
    B = Q / A if A != 0 else 0.0
    root = A + B - a / 3.0

    quadratic, _ = poly.divide(Polynomial([1.0, -root]))
    roots = solve_quadratic(quadratic)
    roots.append(Root(1, complex(root)))
    return roots


def root_upper_bound(poly) -> float:
    """Cauchy bound 1 + max|a_i / a_0| on the root magnitudes."""
    c = poly.coefficients
    return 1.0 + float(np.max(np.abs(c[1:] / c[0])))


def root_lower_bound(poly) -> float:
    return 1.0 / root_upper_bound(poly)


def solve_with_eigenvalues(poly, eps: float = EPS) -> List[Root]:
    """Eigenvalues of the companion matrix, each returned as a simple root."""
    poly = Polynomial(poly)
    poly.normalize()
    n = poly.degree
    c = poly.coefficients

    companion = np.zeros((n, n), dtype=poly.dtype)
    companion[:, -1] = -c[:0:-1]
    companion[1:, :-1] = np.eye(n - 1)

    eigenvalues = linalg.eigvals(companion)
    roots = []
    for value in eigenvalues:
        if abs(value) < eps:
            logger.debug("snapping eigenvalue %s to zero", value)
            value = 0.0
        roots.append(Root(1, complex(value)))
    return roots


def _laguerre_root(poly, tol, max_iter):
    n = poly.degree
    first = poly.derivative()
    second = first.derivative()
    x = complex(root_lower_bound(poly))

    for iteration in range(max_iter):
        value = poly(x)
        if abs(value) < tol:
            return x, iteration

        g = first(x) / value
        h = g * g - second(x) / value
        radical = cmath.sqrt((n - 1) * (n * h - g * g))
        d_plus = g + radical
        d_minus = g - radical
        denominator = d_plus if abs(d_plus) > abs(d_minus) else d_minus

        if denominator == 0:
            # Flat spot: kick the estimate off it
            step = (1.0 + abs(x)) * cmath.exp(1j * (iteration + 1))
        else:
            step = n / denominator
        x -= step
        if abs(step) < tol * max(1.0, abs(x)):
            return x, iteration + 1

    raise NonConvergenceError(
        f"Laguerre iteration did not converge in {max_iter} steps "
        f"(|p(x)| = {abs(poly(x)):.3e} at x = {x})",
        iterations=max_iter,
        estimate=x,
    )


def solve_laguerre(poly, tol: float = LAGUERRE_TOL, max_iter: int = LAGUERRE_MAX_ITER,
                   zero_tol: float = LAGUERRE_ZERO_TOL) -> List[Root]:
    """
    Laguerre's method with deflation.

    Trailing (near-)zero coefficients are counted first as a root at zero of
    that multiplicity. Each root found is divided out of the working
    polynomial before the next search.

    Raises:
        NonConvergenceError: a root search exceeded max_iter steps
    """
    c = Polynomial(poly).coefficients
    degree = len(c) - 1
    roots = []

    k = 0
    while k < degree and abs(c[degree - k]) < zero_tol:
        k += 1
    if k:
        roots.append(Root(k, 0j))

    work = Polynomial(c[:degree - k + 1]).to_complex()
    while work.degree > 0:
        x, iterations = _laguerre_root(work, tol, max_iter)
        logger.debug("Laguerre root %s after %d steps", x, iterations)
        roots.append(Root(1, complex(x)))
        work = work // Polynomial([1.0, -x])
    return roots


def solve_numerical(poly, strategy=RootStrategy.EIGENVALUES) -> List[Root]:
    """Route a polynomial of any degree >= 1 through a numerical strategy."""
    strategy = RootStrategy(strategy)
    poly = Polynomial(poly).trim()
    if poly.degree == 0:
        return []
    logger.debug("solving degree %d polynomial with %s", poly.degree, strategy.name)
    if strategy is RootStrategy.EIGENVALUES:
        return solve_with_eigenvalues(poly)
    return solve_laguerre(poly)


def merge_roots(roots) -> List[Root]:
    """Combine entries with identical values, adding their multiplicities."""
    merged = {}
    for root in roots:
        value = complex(root.value)
        merged[value] = merged.get(value, 0) + root.multiplicity
    return [Root(multiplicity, value) for value, multiplicity in merged.items()]


def expand_roots(roots) -> List[complex]:
    """Flatten Root(multiplicity, value) pairs into a list of values."""
    return [complex(root.value) for root in roots for _ in range(root.multiplicity)]


def sort_roots(values) -> List[complex]:
    """Sort complex values by real part, then imaginary part."""
    return sorted((complex(v) for v in values), key=lambda v: (round(v.real, 9), v.imag))
