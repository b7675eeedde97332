"""
Error types raised by the polynomial, root-finding and curve modules.
"""


class NurbsAnalyticError(Exception):
    """Base class for every error raised by this package."""


class DegreeError(NurbsAnalyticError, ValueError):
    """Polynomial division where the dividend degree is below the divisor degree."""


class DivideByZeroError(NurbsAnalyticError, ZeroDivisionError):
    """Division by an exact zero scalar, zero polynomial or vanishing denominator."""


class NonConvergenceError(NurbsAnalyticError, ArithmeticError):
    """An iterative root finder ran out of steps before meeting its tolerance."""

    def __init__(self, message, iterations=None, estimate=None):
        super().__init__(message)
        self.iterations = iterations
        self.estimate = estimate


class DegenerateConstructionError(NurbsAnalyticError, ValueError):
    """Empty or inconsistent knot, weight or control-point input."""
