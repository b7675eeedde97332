#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Closed-form curve integral demo
"""

import logging
import time

import numpy as np
import plotly.graph_objects as go
import sys
import os

# Put the package root on the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from nurbs_analytic import NurbsCurve, RootStrategy, setup_logger


def integration_demo():
    """Analytic integral of y dx against Gauss-Legendre quadrature"""
    print("=== Integral of y dx ===")

    rng = np.random.default_rng(3)
    n_points = 12
    x = np.linspace(0.0, 10.0, n_points)
    control_points = np.column_stack([x, 2.0 + np.sin(x) + 0.2 * rng.standard_normal(n_points)])
    weights = rng.uniform(0.5, 2.0, n_points)

    results = []
    for degree in (2, 3, 4, 5):
        curve = NurbsCurve.uniform(degree, weights, control_points)
        for strategy in RootStrategy:
            for method in ('quotient', 'triple'):
                start = time.perf_counter()
                analytic = curve.analytic_integral(strategy, method=method)
                elapsed = time.perf_counter() - start
                numerical = curve.numerical_integral(64)
                results.append((degree, strategy.name, method, analytic.real, numerical, elapsed))
                print(f"p={degree} {strategy.name:<11} {method:<8} "
                      f"analytic={analytic.real:.12f} quadrature={numerical:.12f} "
                      f"diff={abs(analytic.real - numerical):.2e} ({elapsed * 1e3:.1f} ms)")

    # Error per configuration
    labels = [f"p={r[0]} {r[1][:3]} {r[2]}" for r in results]
    errors = [max(abs(r[3] - r[4]), 1e-17) for r in results]

    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=errors, marker_color='steelblue'))
    fig.update_layout(
        title="Analytic vs quadrature integral of y dx",
        yaxis_type='log',
        yaxis_title='|analytic - quadrature|',
        width=1000,
        height=500
    )
    fig.show()


if __name__ == "__main__":
    setup_logger(level=logging.INFO)
    integration_demo()
