import math

import numpy as np
import pytest

from nurbs_analytic import (
    NurbsCurve,
    Polynomial,
    RationalIntegrator,
    Root,
    RootStrategy,
    area_integral,
    area_integral_numerical,
    decomposition_matrix,
    gauss_legendre,
    gauss_legendre_integral,
    integrate_rational,
    partial_fractions,
    pole_integral,
)
from nurbs_analytic.integration import clipped_segments


class TestPoleIntegral:
    def test_simple_pole(self):
        assert pole_integral(1.0, -1.0, 1, 0.0, 1.0) == pytest.approx(math.log(2))

    def test_double_pole(self):
        assert pole_integral(1.0, -1.0, 2, 0.0, 1.0) == pytest.approx(0.5)

    def test_complex_pole_pair(self):
        # 1 / (t^2 + 1) = (i/2) / (t + i) - (i/2) / (t - i)
        total = pole_integral(0.5j, -1j, 1, 0.0, 1.0) + pole_integral(-0.5j, 1j, 1, 0.0, 1.0)
        assert total.real == pytest.approx(math.pi / 4)
        assert abs(total.imag) < 1e-14


class TestPartialFractions:
    def test_distinct_poles(self):
        # 1 / ((t - 1)(t - 2)) = -1 / (t - 1) + 1 / (t - 2)
        c = partial_fractions([1.0], [Root(1, 1.0), Root(1, 2.0)])
        np.testing.assert_allclose(c, [-1.0, 1.0], atol=1e-14)

    def test_repeated_pole(self):
        # 1 / ((t - 1)^2 (t - 2)) = -1/(t - 1) - 1/(t - 1)^2 + 1/(t - 2)
        c = partial_fractions([1.0], [Root(2, 1.0), Root(1, 2.0)])
        np.testing.assert_allclose(c, [-1.0, -1.0, 1.0], atol=1e-14)

    def test_reconstruction(self):
        poles = [Root(2, 0.5 + 1j), Root(2, 0.5 - 1j), Root(1, -2.0)]
        numerator = Polynomial([1.0, -2.0, 0.0, 3.0, 1.0])
        c = partial_fractions(numerator, poles)
        terms = [(p.value, k) for p in poles for k in range(1, p.multiplicity + 1)]
        for t in [0.1, 1.7, -0.6]:
            denominator = np.prod([(t - p.value) ** p.multiplicity for p in poles])
            expected = numerator(t) / denominator
            value = sum(ci / (t - r) ** k for ci, (r, k) in zip(c, terms))
            assert abs(value - expected) < 1e-10 * abs(expected)

    def test_matrix_is_block_diagonal(self):
        matrix = decomposition_matrix([Root(2, 1.0), Root(1, 3.0)])
        assert matrix.shape == (3, 3)
        # rows of the root at 1 vanish in the column of the pole at 3 and vice versa
        assert matrix[0, 2] == 0
        assert matrix[1, 2] == 0
        assert matrix[2, 0] == 0
        assert matrix[2, 1] == 0
        assert matrix[0, 0] == 0
        assert abs(np.linalg.det(matrix)) > 0


class TestIntegrateRational:
    def test_constant(self):
        assert integrate_rational([1.0], [1.0], 0.0, 2.0) == 2

    def test_polynomial_over_constant(self):
        assert integrate_rational([1.0, 0.0, -1.0], [2.0], 0.0, 1.0) == pytest.approx(-1.0 / 3.0)

    def test_arctan(self):
        value = integrate_rational([1.0], [1.0, 0.0, 1.0], 0.0, 1.0)
        assert value.real == pytest.approx(math.pi / 4)
        assert abs(value.imag) < 1e-14

    def test_improper_fraction(self):
        # t^3 / (t^2 + 1) = t - t / (t^2 + 1)
        value = integrate_rational([1.0, 0.0, 0.0, 0.0], [1.0, 0.0, 1.0], 0.0, 1.0)
        assert value.real == pytest.approx(0.5 - math.log(2) / 2)

    def test_non_monic_denominator(self):
        value = integrate_rational([1.0], [2.0, 2.0], 0.0, 1.0)
        assert value.real == pytest.approx(math.log(2) / 2)

    def test_power(self):
        value = integrate_rational([1.0], [1.0, 0.0], 1.0, 2.0, power=3)
        assert value.real == pytest.approx(3.0 / 8.0)

    def test_power_of_non_monic(self):
        # 1 / (2t + 2)^2 over [0, 1] = 1/8
        value = integrate_rational([1.0], [2.0, 2.0], 0.0, 1.0, power=2)
        assert value.real == pytest.approx(1.0 / 8.0)

    def test_known_roots_are_reused(self):
        roots = [Root(1, -1.0), Root(1, -2.0)]
        value = integrate_rational([1.0], [1.0, 3.0, 2.0], 0.0, 1.0, roots=roots)
        assert value.real == pytest.approx(math.log(4.0 / 3.0))

    @pytest.mark.parametrize("strategy", list(RootStrategy))
    def test_quartic_denominator(self, strategy):
        denominator = Polynomial([1.0, 0.0, 0.0, 0.0, 4.0])
        numerator = Polynomial([1.0, 0.5, -1.0])
        value = integrate_rational(numerator, denominator, 0.0, 1.5, strategy=strategy)
        expected = gauss_legendre_integral(lambda t: numerator(t) / denominator(t), 0.0, 1.5, 64)
        assert value.real == pytest.approx(expected, rel=1e-10)
        assert abs(value.imag) < 1e-10

    def test_coincident_roots_are_merged(self):
        roots = [Root(2, 0.0), Root(2, 0.0)]
        value = integrate_rational([1.0], [1.0, 0.0, 0.0, 0.0, 0.0], 1.0, 2.0, roots=roots)
        assert value.real == pytest.approx((1.0 - 2.0 ** -3) / 3.0)

    def test_laguerre_counts_pole_at_zero(self):
        value = integrate_rational([1.0], [1.0, 0.0, 0.0, 0.0, 0.0], 1.0, 2.0,
                                   strategy=RootStrategy.LAGUERRE)
        assert value.real == pytest.approx((1.0 - 2.0 ** -3) / 3.0)

    def test_integrator_shares_factorization(self):
        integrator = RationalIntegrator([1.0, 0.0, 1.0])
        assert integrator.poles and integrator.denominator == [1.0, 0.0, 1.0]
        first = integrator.integrate([1.0], 0.0, 1.0)
        second = integrator.integrate([2.0, 0.0], 0.0, 1.0)
        assert first.real == pytest.approx(math.pi / 4)
        assert second.real == pytest.approx(math.log(2))


class TestGaussLegendre:
    def test_exact_for_polynomials(self):
        p = Polynomial([3.0, -1.0, 0.0, 2.0, 5.0])
        assert gauss_legendre_integral(p, -1.0, 2.0, 4) == pytest.approx(p.integral(-1.0, 2.0))

    def test_nodes_are_cached(self):
        assert gauss_legendre(12) is gauss_legendre(12)
        nodes, weights = gauss_legendre(12)
        assert weights.sum() == pytest.approx(2.0)
        with pytest.raises(ValueError):
            nodes[0] = 0.0


class TestCurveIntegral:
    def test_quarter_circle(self, quarter_circle):
        for method in ('quotient', 'triple'):
            value = quarter_circle.analytic_integral(method=method)
            assert value.real == pytest.approx(-math.pi / 4, abs=1e-12)
            assert abs(value.imag) < 1e-10

    def test_straight_line(self):
        # y = 1 + x/2 for x in [0, 2]
        curve = NurbsCurve.uniform(1, [1.0, 3.0], [[0.0, 1.0], [2.0, 2.0]])
        assert curve.analytic_integral().real == pytest.approx(3.0)
        assert curve.numerical_integral() == pytest.approx(3.0)

    @pytest.mark.parametrize("curve_name", ["planar_cubic", "planar_quadratic", "quarter_circle"])
    @pytest.mark.parametrize("method", ["quotient", "triple"])
    def test_matches_quadrature(self, curve_name, method, request):
        curve = request.getfixturevalue(curve_name)
        analytic = curve.analytic_integral(method=method)
        numerical = curve.numerical_integral(64)
        assert analytic.real == pytest.approx(numerical, rel=1e-9, abs=1e-12)
        assert abs(analytic.imag) < 1e-8

    def test_formulations_agree(self, planar_cubic):
        quotient = area_integral(planar_cubic, method='quotient')
        triple = area_integral(planar_cubic, method='triple')
        assert quotient.real == pytest.approx(triple.real, rel=1e-10)

    def test_quartic_segments_with_both_strategies(self):
        points = [[0, 0], [1, 2], [2, 3], [3, 1], [4, 2], [5, 0]]
        weights = [1.0, 2.0, 0.5, 1.5, 3.0, 1.0]
        curve = NurbsCurve.uniform(4, weights, points)
        eigen = curve.analytic_integral(RootStrategy.EIGENVALUES)
        laguerre = curve.analytic_integral(RootStrategy.LAGUERRE)
        assert eigen.real == pytest.approx(laguerre.real, rel=1e-9)
        assert eigen.real == pytest.approx(curve.numerical_integral(64), rel=1e-9)

    def test_linear_weight_curve(self):
        t = np.linspace(0.0, 3.0, 10)
        points = np.column_stack([t, np.cos(t)])
        curve = NurbsCurve.with_linear_weights(3, 1.0, 4.0, points)
        assert curve.analytic_integral().real == pytest.approx(curve.numerical_integral(64), rel=1e-9)

    def test_clipped_bounds(self, planar_cubic):
        full = planar_cubic.analytic_integral()
        left = planar_cubic.analytic_integral(t0=0.0, t1=0.52)
        right = planar_cubic.analytic_integral(t0=0.52, t1=1.0)
        assert (left + right).real == pytest.approx(full.real, rel=1e-12)
        assert left.real == pytest.approx(planar_cubic.numerical_integral(64, t0=0.0, t1=0.52), rel=1e-9)

    def test_clipping_skips_segments(self, planar_cubic):
        pieces = list(clipped_segments(planar_cubic, 0.3, 0.52))
        assert [(start, end) for _, start, end in pieces] == [(0.3, 0.5), (0.5, 0.52)]
        assert pieces[0][0] is planar_cubic.segments[1]

    def test_numerical_integral_function(self, planar_quadratic):
        assert area_integral_numerical(planar_quadratic) == pytest.approx(
            planar_quadratic.numerical_integral())

    def test_unknown_method(self, planar_cubic):
        with pytest.raises(ValueError):
            planar_cubic.analytic_integral(method='simpson')

    def test_requires_two_dimensions(self):
        curve = NurbsCurve.uniform(2, [1.0, 1.0, 1.0], [0.0, 1.0, 0.0])
        with pytest.raises(ValueError):
            curve.analytic_integral()
