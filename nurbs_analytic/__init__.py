"""
Polynomial and NURBS Analytic Kernel

This package implements dense polynomial algebra, root finding for any
degree, and NURBS curves stored as per-segment rational functions. Curve
integrals are evaluated in closed form through partial-fraction
decomposition of the rational segments.
"""

from .polynomial import Polynomial, product, two_prod, two_sum
from .roots import (
    Root,
    RootStrategy,
    solve,
    solve_numerical,
    solve_with_eigenvalues,
    solve_laguerre,
    merge_roots,
    expand_roots,
    sort_roots
)
from .knots import open_uniform_knots, linear_weights, segment_boundaries
from .rational import RationalFunction
from .de_boor import blend, de_boor_rational
from .curve import NurbsCurve
from .integration import (
    RationalIntegrator,
    pole_integral,
    decomposition_matrix,
    partial_fractions,
    integrate_rational,
    area_integral,
    area_integral_numerical,
    gauss_legendre,
    gauss_legendre_integral
)
from .export import (
    format_polynomial,
    parse_polynomial,
    write_polynomials,
    read_polynomials,
    save_coefficients,
    save_denominators
)
from .visualization import plot_segments, plot_slope, create_curve_figure
from .exceptions import (
    NurbsAnalyticError,
    DegreeError,
    DivideByZeroError,
    NonConvergenceError,
    DegenerateConstructionError
)
from .logger import setup_logger
from . import constants

__all__ = [
    # Core classes
    'Polynomial',
    'RationalFunction',
    'NurbsCurve',
    'RationalIntegrator',

    # Polynomial helpers
    'product',
    'two_prod',
    'two_sum',

    # Root finding
    'Root',
    'RootStrategy',
    'solve',
    'solve_numerical',
    'solve_with_eigenvalues',
    'solve_laguerre',
    'merge_roots',
    'expand_roots',
    'sort_roots',

    # Knot vectors
    'open_uniform_knots',
    'linear_weights',
    'segment_boundaries',

    # De Boor recurrence
    'blend',
    'de_boor_rational',

    # Integration
    'pole_integral',
    'decomposition_matrix',
    'partial_fractions',
    'integrate_rational',
    'area_integral',
    'area_integral_numerical',
    'gauss_legendre',
    'gauss_legendre_integral',

    # Export
    'format_polynomial',
    'parse_polynomial',
    'write_polynomials',
    'read_polynomials',
    'save_coefficients',
    'save_denominators',

    # Visualization
    'plot_segments',
    'plot_slope',
    'create_curve_figure',

    # Errors
    'NurbsAnalyticError',
    'DegreeError',
    'DivideByZeroError',
    'NonConvergenceError',
    'DegenerateConstructionError',

    # Logging / constants
    'setup_logger',
    'constants',
]

__version__ = "1.0.0"
