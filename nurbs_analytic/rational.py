"""
Per-segment rational representation of a NURBS curve.
"""

import numpy as np

from .constants import POLISH_TOL
from .exceptions import DivideByZeroError
from .polynomial import Polynomial


class RationalFunction:
    """
    Vector of numerator polynomials over one shared denominator.

    Represents t -> (numerators[d](t) / denominator(t)) for d < dimension.
    """

    def __init__(self, numerators, denominator):
        self.numerators = tuple(Polynomial(num) for num in numerators)
        self.denominator = Polynomial(denominator)

    @property
    def dimension(self) -> int:
        return len(self.numerators)

    def _denominator_at(self, t):
        den = self.denominator(t)
        if np.any(den == 0):
            raise DivideByZeroError(f"segment denominator vanishes at t = {t}")
        return den

    def evaluate(self, t):
        """
        Curve point(s) at t.

        Returns:
            (dimension,) array for a scalar t, (len(t), dimension) otherwise
        """
        den = self._denominator_at(t)
        return np.stack([num(t) / den for num in self.numerators], axis=-1)

    __call__ = evaluate

    def derivative(self, t):
        """First derivative by the quotient rule: (N' W - N W') / W^2."""
        den = self._denominator_at(t)
        den_der = self.denominator.derivative()(t)
        return np.stack(
            [(num.derivative()(t) * den - num(t) * den_der) / (den * den) for num in self.numerators],
            axis=-1,
        )

    def slope(self, t):
        """
        dy/dx of a planar segment.

        Vertical tangents give +-inf rather than raising.
        """
        x_num, y_num = self.numerators[:2]
        den = self._denominator_at(t)
        den_der = self.denominator.derivative()(t)
        dy = y_num.derivative()(t) * den - y_num(t) * den_der
        dx = x_num.derivative()(t) * den - x_num(t) * den_der
        with np.errstate(divide='ignore', invalid='ignore'):
            return dy / dx

    def polish(self, tol: float = POLISH_TOL) -> 'RationalFunction':
        """Trim near-zero leading coefficients of every polynomial (in place)."""
        self.denominator.trim_real(tol)
        for num in self.numerators:
            num.trim_real(tol)
        return self

    def reduce_denominator(self, degree: int) -> 'RationalFunction':
        """Drop denominator terms above the given degree (in place)."""
        self.denominator.truncate(degree)
        return self

    def __repr__(self):
        nums = ", ".join(str(num) for num in self.numerators)
        return f"RationalFunction(numerators=({nums}), denominator={self.denominator})"
