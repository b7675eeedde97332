"""
Numerical tolerances and defaults for the polynomial and NURBS kernel.
"""

# Zero tests
EPS = 1e-15  # discriminant test, eigenvalue snapping
CUBIC_TOL = 1e-12  # Q/R classification of the depressed cubic
REAL_TRIM_TOL = 1e-8  # default tolerance of Polynomial.trim_real
POLISH_TOL = 1e-13  # leading-term cleanup after the de Boor recurrence

# Laguerre iteration
LAGUERRE_TOL = 1e-12
LAGUERRE_MAX_ITER = 1000
LAGUERRE_ZERO_TOL = 1e-16  # trailing coefficients below this count as a root at 0

# Dekker splitting factor for error-free products (2^27 + 1 for binary64)
SPLIT_FACTOR = 134217729.0

# Sampling / quadrature
DEFAULT_SAMPLES = 100
DEFAULT_QUADRATURE_POINTS = 32

# Coefficient export
AXIS_NAMES = ("x", "y", "z", "w")
NUMERATOR_FILE = "coefs_num_{axis}.out"
DENOMINATOR_FILE = "coefs_den.out"
