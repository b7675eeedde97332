"""
Dense single-variable polynomials over real or complex coefficients.

Coefficients are stored highest degree first:
    x^3 + 2x^2 + x + 5  ->  [1, 2, 1, 5]
"""

import numbers

import numpy as np

from .constants import REAL_TRIM_TOL, SPLIT_FACTOR
from .exceptions import DegreeError, DivideByZeroError


def _as_coefficients(coefficients) -> np.ndarray:
    """Copy coefficients into a 1-D float64 or complex128 array."""
    arr = np.array(coefficients)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise ValueError(f"coefficients must be one-dimensional, got shape {arr.shape}")
    dtype = complex if np.iscomplexobj(arr) else float
    arr = arr.astype(dtype)
    if arr.size == 0:
        arr = np.zeros(1, dtype=dtype)
    return arr


def two_sum(a, b):
    """
    Error-free sum: returns (s, t) with s = fl(a + b) and a + b = s + t exactly.
    """
    s = a + b
    bs = s - a
    as_ = s - bs
    t = (b - bs) + (a - as_)
    return s, t


def _split(a):
    c = SPLIT_FACTOR * a
    high = c - (c - a)
    return high, a - high


def _two_prod_real(a, b):
    p = a * b
    a_hi, a_lo = _split(a)
    b_hi, b_lo = _split(b)
    err = a_lo * b_lo - (((p - a_hi * b_hi) - a_lo * b_hi) - a_hi * b_lo)
    return p, err


def two_prod(a, b):
    """
    Error-free product: returns (p, e) with p = fl(a * b) and a * b = p + e.

    Real operands use Dekker's splitting. Complex operands combine the four
    real products, so the error term is exact up to one extra rounding.
    """
    if isinstance(a, complex) or isinstance(b, complex):
        a, b = complex(a), complex(b)
        p1, e1 = _two_prod_real(a.real, b.real)
        p2, e2 = _two_prod_real(a.imag, b.imag)
        p3, e3 = _two_prod_real(a.real, b.imag)
        p4, e4 = _two_prod_real(a.imag, b.real)
        re, e5 = two_sum(p1, -p2)
        im, e6 = two_sum(p3, p4)
        return complex(re, im), complex(e1 - e2 + e5, e3 + e4 + e6)
    return _two_prod_real(float(a), float(b))


class Polynomial:
    """
    Dense polynomial with coefficients stored highest degree first.

    The scalar type follows the coefficient dtype: float64 for real
    polynomials, complex128 for complex ones. Every constructor copies its
    input, so two polynomials never share coefficient storage.
    """

    # numpy scalars on the left of an operator defer to our reflected methods
    __array_ufunc__ = None

    def __init__(self, coefficients=(0.0,)):
        if isinstance(coefficients, Polynomial):
            coefficients = coefficients._coef
        self._coef = _as_coefficients(coefficients)

    @classmethod
    def zero(cls, dtype=float) -> 'Polynomial':
        return cls(np.zeros(1, dtype=dtype))

    @classmethod
    def constant(cls, value) -> 'Polynomial':
        return cls([value])

    @classmethod
    def from_roots(cls, roots) -> 'Polynomial':
        """Monic polynomial prod(t - r) over the given root values."""
        result = cls([1.0])
        for root in roots:
            result = result * cls([1.0, -root])
        return result

    # ------------------------------------------------------------------
    # Accessors

    @property
    def coefficients(self) -> np.ndarray:
        """Read-only view of the coefficients (highest degree first)."""
        view = self._coef.view()
        view.flags.writeable = False
        return view

    @property
    def degree(self) -> int:
        return len(self._coef) - 1

    @property
    def leading(self):
        return self._coef[0]

    @property
    def dtype(self):
        return self._coef.dtype

    @property
    def is_complex(self) -> bool:
        return np.iscomplexobj(self._coef)

    def is_zero(self) -> bool:
        return not np.any(self._coef)

    def copy(self) -> 'Polynomial':
        return Polynomial(self._coef)

    def to_complex(self) -> 'Polynomial':
        return Polynomial(self._coef.astype(complex))

    def __len__(self):
        return len(self._coef)

    def __getitem__(self, index):
        return self._coef[index]

    def __iter__(self):
        return iter(self._coef)

    # ------------------------------------------------------------------
    # Arithmetic

    def __neg__(self):
        return Polynomial(-self._coef)

    def __pos__(self):
        return self.copy()

    def __add__(self, other):
        if isinstance(other, numbers.Number):
            coef = self._coef.astype(np.result_type(self._coef, other))
            coef[-1] += other
            return Polynomial(coef)
        if not isinstance(other, Polynomial):
            return NotImplemented
        # [1, 1, 1, 1] + [1, 1] = [1, 1, 2, 2]
        n = max(len(self), len(other))
        coef = np.zeros(n, dtype=np.result_type(self._coef, other._coef))
        coef[n - len(self):] += self._coef
        coef[n - len(other):] += other._coef
        return Polynomial(coef)

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, (Polynomial, numbers.Number)):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, numbers.Number):
            return (-self) + other
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, numbers.Number):
            if other == 0:
                return Polynomial.zero(np.result_type(self._coef, other))
            return Polynomial(self._coef * other)
        if not isinstance(other, Polynomial):
            return NotImplemented
        return Polynomial(np.convolve(self._coef, other._coef))

    __rmul__ = __mul__

    def __pow__(self, exponent):
        if not isinstance(exponent, numbers.Integral) or exponent < 0:
            return NotImplemented
        result = Polynomial.constant(self._coef.dtype.type(1))
        for _ in range(exponent):
            result = result * self
        return result

    def __truediv__(self, other):
        if isinstance(other, Polynomial):
            raise TypeError("use divmod(p, q) or p.divide(q) to divide by a polynomial")
        if not isinstance(other, numbers.Number):
            return NotImplemented
        if other == 0:
            raise DivideByZeroError("polynomial divided by a zero scalar")
        return Polynomial(self._coef / other)

    def divide(self, divisor):
        """
        Long division by another polynomial.

        Args:
            divisor: Polynomial (or coefficient sequence) to divide by

        Returns:
            (quotient, remainder) with self == divisor * quotient + remainder
            and remainder.degree < divisor.degree; the remainder is trimmed
            of exact leading zeros, a zero remainder being [0].

        Raises:
            DivideByZeroError: divisor is the zero polynomial
            DegreeError: self.degree < divisor.degree
        """
        divisor = Polynomial(divisor).trim()
        if divisor.is_zero():
            raise DivideByZeroError("polynomial divided by the zero polynomial")
        if self.degree < divisor.degree:
            raise DegreeError(
                f"dividend degree {self.degree} is lower than divisor degree {divisor.degree}"
            )

        dtype = np.result_type(self._coef, divisor._coef)
        rem = self._coef.astype(dtype)
        lead = divisor.leading
        tail = divisor._coef[1:]
        n_quotient = self.degree - divisor.degree + 1
        quotient = np.zeros(n_quotient, dtype=dtype)

        for i in range(n_quotient):
            a_i = rem[i] / lead
            quotient[i] = a_i
            rem[i] = 0
            rem[i + 1:i + 1 + divisor.degree] -= a_i * tail

        remainder = Polynomial(rem[n_quotient:]).trim()
        return Polynomial(quotient), remainder

    def __divmod__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.divide(other)

    def __floordiv__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.divide(other)[0]

    def __mod__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.divide(other)[1]

    # ------------------------------------------------------------------
    # Calculus

    def derivative(self, order: int = 1) -> 'Polynomial':
        """Derivative of the given order; differentiating a constant gives [0]."""
        coef = self._coef
        for _ in range(order):
            n = len(coef) - 1
            if n == 0:
                return Polynomial.zero(coef.dtype)
            # x + x^2 [1, 1, 0] -> 2x + 1 [2, 1]
            coef = coef[:-1] * np.arange(n, 0, -1)
        return Polynomial(coef)

    def antiderivative(self) -> 'Polynomial':
        """Antiderivative with the constant of integration fixed to zero."""
        # x^2 [1, 0, 0] -> x^3/3 [1/3, 0, 0, 0]
        n = self.degree
        coef = self._coef / np.arange(n + 1, 0, -1)
        return Polynomial(np.append(coef, 0))

    def integral(self, start, end):
        """Definite integral over [start, end]."""
        antiderivative = self.antiderivative()
        return antiderivative(end) - antiderivative(start)

    # ------------------------------------------------------------------
    # Evaluation

    def evaluate(self, x, compensated: bool = False):
        """
        Evaluate with Horner's scheme.

        Args:
            x: Scalar or array of evaluation points
            compensated: Use compensated Horner (see evaluate_compensated)

        Returns:
            Scalar for a scalar x, otherwise an array shaped like x
        """
        if compensated:
            return self.evaluate_compensated(x)
        if isinstance(x, numbers.Number):
            result = self._coef[0]
            for c in self._coef[1:]:
                result = result * x + c
            return result

        x = np.asarray(x)
        result = np.full(x.shape, self._coef[0], dtype=np.result_type(self._coef, x))
        for c in self._coef[1:]:
            result = result * x + c
        return result

    __call__ = evaluate

    def evaluate_compensated(self, x):
        """
        Compensated Horner evaluation.

        Tracks the rounding error of every multiply-add with two_prod/two_sum
        and adds the accumulated correction at the end. The result is as
        accurate as Horner run in twice the working precision.
        """
        if not isinstance(x, numbers.Number):
            x = np.asarray(x)
            values = [self.evaluate_compensated(v) for v in x.ravel()]
            return np.array(values).reshape(x.shape)

        if self.is_complex or isinstance(x, complex):
            cast = complex
        else:
            cast = float
        x = cast(x)
        s = cast(self._coef[0])
        c = cast(0)
        for a in self._coef[1:]:
            p, pi = two_prod(s, x)
            s, sigma = two_sum(p, cast(a))
            c = c * x + (pi + sigma)
        return s + c

    # ------------------------------------------------------------------
    # In-place cleanup

    def normalize(self):
        """
        Divide every coefficient by the leading one.

        Returns:
            The original leading coefficient, or 1 (with no change) when the
            leading coefficient is exactly zero.
        """
        lead = self.leading
        if lead == 0:
            return self._coef.dtype.type(1)
        self._coef = self._coef / lead
        return lead

    def _strip_leading(self, negligible: np.ndarray) -> 'Polynomial':
        kept = np.flatnonzero(~negligible)
        if kept.size == 0:
            self._coef = np.zeros(1, dtype=self._coef.dtype)
        else:
            self._coef = self._coef[kept[0]:].copy()
        return self

    def trim(self) -> 'Polynomial':
        """Drop exact-zero leading coefficients (in place)."""
        return self._strip_leading(self._coef == 0)

    def trim_real(self, tol: float = REAL_TRIM_TOL) -> 'Polynomial':
        """Drop leading coefficients with magnitude below tol (in place)."""
        return self._strip_leading(np.abs(self._coef) < tol)

    def trimmed(self) -> 'Polynomial':
        return self.copy().trim()

    def trimmed_real(self, tol: float = REAL_TRIM_TOL) -> 'Polynomial':
        return self.copy().trim_real(tol)

    def truncate(self, degree: int) -> 'Polynomial':
        """Keep only the terms of degree <= degree (in place)."""
        if degree < self.degree:
            self._coef = self._coef[-(degree + 1):].copy()
        return self

    # ------------------------------------------------------------------
    # Roots

    def solve(self, strategy=None):
        """Roots as a list of Root(multiplicity, value); see roots.solve."""
        from .roots import RootStrategy, solve
        if strategy is None:
            strategy = RootStrategy.EIGENVALUES
        return solve(self, strategy)

    # ------------------------------------------------------------------
    # Comparison / printing

    def __eq__(self, other):
        if isinstance(other, numbers.Number):
            other = Polynomial([other])
        elif isinstance(other, (list, tuple, np.ndarray)):
            other = Polynomial(other)
        elif not isinstance(other, Polynomial):
            return NotImplemented
        return np.array_equal(self.trimmed()._coef, other.trimmed()._coef)

    __hash__ = None

    def isclose(self, other, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        """Coefficient-wise closeness after aligning degrees."""
        other = Polynomial(other)
        n = max(len(self), len(other))
        lhs = np.zeros(n, dtype=np.result_type(self._coef, other._coef))
        rhs = np.zeros_like(lhs)
        lhs[n - len(self):] = self._coef
        rhs[n - len(other):] = other._coef
        return bool(np.allclose(lhs, rhs, rtol=rtol, atol=atol))

    def __str__(self):
        cast = complex if self.is_complex else float
        return "[" + ", ".join(repr(cast(c)) for c in self._coef) + "]"

    def __repr__(self):
        return f"Polynomial({self})"


def product(polynomials) -> Polynomial:
    """Product of a sequence of polynomials; the empty product is [1]."""
    polynomials = list(polynomials)
    if not polynomials:
        return Polynomial([1.0])
    result = polynomials[0].copy()
    for poly in polynomials[1:]:
        result = result * poly
    return result
