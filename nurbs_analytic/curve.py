"""
NURBS curve stored as one rational function per knot span.
"""

import logging
import warnings
from typing import Optional, Sequence, Union

import numpy as np

from .constants import DEFAULT_QUADRATURE_POINTS, DEFAULT_SAMPLES, POLISH_TOL
from .de_boor import de_boor_rational
from .exceptions import DegenerateConstructionError
from .export import save_coefficients, save_denominators
from .integration import area_integral, area_integral_numerical
from .knots import linear_weights, open_uniform_knots, segment_boundaries
from .roots import RootStrategy

logger = logging.getLogger(__name__)


class NurbsCurve:
    """
    Non-uniform rational B-spline curve of degree p in dimension D.

    The rational form of every segment is computed once at construction by
    the polynomial de Boor recurrence and cleaned by a polishing pass;
    afterwards the curve is read-only.

    Args:
        degree: Curve degree p >= 1
        knots: Non-decreasing knot vector of length n + p + 1
        weights: n positive finite weights
        control_points: (n, D) control points
        polishing: 'general', 'uniform' (open uniform knots only) or None
        tol: Polishing tolerance
    """

    def __init__(self, degree: int, knots, weights, control_points,
                 polishing: Optional[str] = 'general', tol: float = POLISH_TOL):
        self.degree = int(degree)
        try:
            self.knots = np.array(knots, dtype=float)
            self.weights = np.array(weights, dtype=float)
            self.control_points = np.array(control_points, dtype=float)
        except (TypeError, ValueError) as exc:
            raise DegenerateConstructionError(f"inputs are not regular numeric arrays: {exc}") from exc
        if self.control_points.ndim == 1:
            self.control_points = self.control_points.reshape(-1, 1)
        self._validate()

        self.dimension = self.control_points.shape[1]
        self.domain = (self.degree, len(self.knots) - self.degree - 1)
        self.boundaries = segment_boundaries(self.knots, self.degree)
        self.segments = [
            de_boor_rational(span, self.knots, self.weights, self.control_points, self.degree)
            for span in self.boundaries[:-1]
        ]
        logger.debug("built %d segments (degree %d, dimension %d)",
                     len(self.segments), self.degree, self.dimension)

        if polishing == 'general':
            self.polish(tol)
        elif polishing == 'uniform':
            self.polish_uniform(tol)
        elif polishing is not None:
            raise ValueError(f"unknown polishing mode {polishing!r}")

    @classmethod
    def uniform(cls, degree: int, weights, control_points, **kwargs) -> 'NurbsCurve':
        """Curve on an open uniform knot vector with explicit weights."""
        knots = open_uniform_knots(len(control_points), degree)
        return cls(degree, knots, weights, control_points, **kwargs)

    @classmethod
    def with_linear_weights(cls, degree: int, w_start: float, w_end: float, control_points,
                            polishing: Optional[str] = 'uniform', tol: float = POLISH_TOL) -> 'NurbsCurve':
        """Curve on an open uniform knot vector with weights running linearly from w_start to w_end."""
        n_points = len(control_points)
        knots = open_uniform_knots(n_points, degree)
        weights = linear_weights(w_start, w_end, n_points)
        return cls(degree, knots, weights, control_points, polishing=polishing, tol=tol)

    def _validate(self):
        p = self.degree
        n = len(self.control_points)
        if p < 1:
            raise DegenerateConstructionError(f"degree must be >= 1, got {p}")
        if n == 0 or self.control_points.ndim != 2 or self.control_points.shape[1] == 0:
            raise DegenerateConstructionError("control points must be a non-empty (n, dim) array")
        if self.weights.ndim != 1 or len(self.weights) != n:
            raise DegenerateConstructionError(
                f"{len(self.weights)} weights given for {n} control points"
            )
        if n < p + 1:
            raise DegenerateConstructionError(f"degree {p} needs at least {p + 1} control points, got {n}")
        if self.knots.ndim != 1 or len(self.knots) != n + p + 1:
            raise DegenerateConstructionError(
                f"expected {n + p + 1} knots for {n} control points of degree {p}, got {len(self.knots)}"
            )
        if not np.all(np.isfinite(self.knots)) or np.any(np.diff(self.knots) < 0):
            raise DegenerateConstructionError("knots must be finite and non-decreasing")
        if not np.all(np.isfinite(self.weights)) or np.any(self.weights <= 0):
            raise DegenerateConstructionError("weights must be positive and finite")
        if not np.all(np.isfinite(self.control_points)):
            raise DegenerateConstructionError("control points must be finite")
        if self.knots[p] >= self.knots[n]:
            raise DegenerateConstructionError("curve domain has zero length")

    # ------------------------------------------------------------------
    # Polishing

    def polish(self, tol: float = POLISH_TOL):
        """Trim near-zero leading coefficients of every segment."""
        for segment in self.segments:
            segment.polish(tol)

    def polish_uniform(self, tol: float = POLISH_TOL):
        """
        Polishing for open uniform knots with linearly varying weights.

        Away from the clamped ends the weight function is affine in t, so
        interior denominators are cut to degree 1. The first and last p-1
        segments get the general treatment.
        """
        p = self.degree
        count = len(self.segments)
        if count <= 2 * (p - 1):
            warnings.warn(
                f"{count} segments leave no interior span for degree {p}; using general polishing"
            )
            self.polish(tol)
            return

        for i, segment in enumerate(self.segments):
            if p - 1 <= i < count - p + 1:
                segment.reduce_denominator(1)
            segment.polish(tol)
        logger.debug("uniform polishing: %d interior segments reduced", max(0, count - 2 * (p - 1)))

    # ------------------------------------------------------------------
    # Geometry

    @property
    def n_segments(self) -> int:
        return len(self.segments)

    @property
    def parameter_range(self):
        return float(self.knots[self.domain[0]]), float(self.knots[self.domain[1]])

    def segment_interval(self, index: int):
        """Parameter interval [start, end] of segment `index`."""
        return float(self.knots[self.boundaries[index]]), float(self.knots[self.boundaries[index + 1]])

    def segment_index(self, t: float) -> int:
        """Owning segment of t; a shared boundary belongs to the left segment."""
        lo, hi = self.parameter_range
        if t < lo or t > hi:
            raise ValueError(f"parameter {t} outside the curve domain [{lo}, {hi}]")
        ends = self.knots[self.boundaries[1:]]
        return int(min(np.searchsorted(ends, t, side='left'), self.n_segments - 1))

    def sample_parameters(self, n: int = DEFAULT_SAMPLES) -> np.ndarray:
        lo, hi = self.parameter_range
        return np.linspace(lo, hi, n)

    def _owners(self, ts) -> np.ndarray:
        """Segment index of each sorted parameter by a monotone boundary scan."""
        ends = self.knots[self.boundaries[1:]]
        owners = np.empty(len(ts), dtype=int)
        j = 0
        for i, t in enumerate(ts):
            while j < self.n_segments - 1 and t > ends[j]:
                j += 1
            owners[i] = j
        return owners

    def _sample(self, n, method, shape):
        ts = self.sample_parameters(n)
        owners = self._owners(ts)
        out = np.empty((len(ts),) + shape)
        for j, segment in enumerate(self.segments):
            mask = owners == j
            if np.any(mask):
                out[mask] = getattr(segment, method)(ts[mask])
        return out

    def sample_points(self, n: int = DEFAULT_SAMPLES) -> np.ndarray:
        """
        Points at n parameters evenly spaced over the domain.

        Returns:
            (n, dimension) array
        """
        return self._sample(n, 'evaluate', (self.dimension,))

    def sample_slope(self, n: int = DEFAULT_SAMPLES) -> np.ndarray:
        """
        dy/dx at n parameters evenly spaced over the domain (planar curves).

        Returns:
            (n,) array
        """
        if self.dimension != 2:
            raise ValueError(f"slope sampling needs a planar curve, got dimension {self.dimension}")
        return self._sample(n, 'slope', ())

    def point(self, t: float, segment: Optional[int] = None) -> np.ndarray:
        """
        Curve point at t.

        Args:
            t: Parameter value
            segment: Force the segment used (e.g. either side of a boundary)

        Returns:
            (dimension,) array
        """
        index = self.segment_index(t) if segment is None else segment
        return self.segments[index].evaluate(t)

    def evaluate(self, t: Union[float, Sequence[float], np.ndarray]) -> np.ndarray:
        """Points at arbitrary parameters, shape (len(t), dimension)."""
        ts = np.atleast_1d(np.asarray(t, dtype=float))
        return np.array([self.point(v) for v in ts]).reshape(len(ts), self.dimension)

    def derivative(self, t: float, segment: Optional[int] = None) -> np.ndarray:
        """First derivative vector at t."""
        index = self.segment_index(t) if segment is None else segment
        return self.segments[index].derivative(t)

    # ------------------------------------------------------------------
    # Integrals

    def numerical_integral(self, n_points: int = DEFAULT_QUADRATURE_POINTS, t0=None, t1=None) -> float:
        """Gauss-Legendre estimate of the integral of y dx."""
        return area_integral_numerical(self, n_points, t0, t1)

    def analytic_integral(self, strategy=RootStrategy.EIGENVALUES, t0=None, t1=None,
                          method: str = 'quotient') -> complex:
        """Closed-form integral of y dx over [t0, t1]; see integration.area_integral."""
        if self.dimension < 2:
            raise ValueError("the integral of y dx needs at least two dimensions")
        return area_integral(self, strategy=strategy, t0=t0, t1=t1, method=method)

    # ------------------------------------------------------------------
    # Export

    def save_coefficients(self, directory='.'):
        return save_coefficients(self, directory)

    def save_denominators(self, path):
        return save_denominators(self, path)

    def __repr__(self):
        return (f"NurbsCurve(degree={self.degree}, dimension={self.dimension}, "
                f"control_points={len(self.control_points)}, segments={self.n_segments})")
