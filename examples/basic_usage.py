#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Basic NURBS curve usage
"""

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots
import sys
import os

# Put the package root on the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from nurbs_analytic import NurbsCurve, Polynomial, setup_logger


SEGMENT_COLORS = ['red', 'blue', 'orange']


def polynomial_example():
    """Polynomial arithmetic and root finding"""
    print("=== Polynomial example ===")

    p = Polynomial([1, 0, 0, 0])  # x^3
    q = Polynomial([1, -1])  # x - 1
    quotient, remainder = divmod(p, q)
    print(f"{p} / {q} = {quotient} remainder {remainder}")

    quartic = Polynomial.from_roots([1, 2, 3, 4])
    for root in quartic.solve():
        print(f"root {root.value:.6f} (multiplicity {root.multiplicity})")


def curve_example():
    """Curve built from linearly varying weights"""
    print("\n=== NURBS curve example ===")

    control_points = np.array([
        [0, 0],
        [1, 2],
        [2, 3],
        [3, 1],
        [4, 0],
        [5, 2],
        [6, 3],
        [7, 1],
    ])

    curve = NurbsCurve.with_linear_weights(3, 1.0, 4.0, control_points)
    print(curve)
    for i, segment in enumerate(curve.segments):
        print(f"segment {i} on {curve.segment_interval(i)}: denominator {segment.denominator}")

    n_samples = 200
    ts = curve.sample_parameters(n_samples)
    points = curve.sample_points(n_samples)
    slope = curve.sample_slope(n_samples)

    fig = make_subplots(rows=1, cols=2, subplot_titles=('Curve (x-y)', 'Slope dy/dx'))

    for i, segment in enumerate(curve.segments):
        start, end = curve.segment_interval(i)
        seg_pts = segment.evaluate(np.linspace(start, end, 50))
        fig.add_trace(go.Scatter(
            x=seg_pts[:, 0],
            y=seg_pts[:, 1],
            mode='lines',
            name=f'Segment {i}',
            line=dict(color=SEGMENT_COLORS[i % 3], width=3)
        ), row=1, col=1)

    fig.add_trace(go.Scatter(
        x=control_points[:, 0],
        y=control_points[:, 1],
        mode='markers+lines',
        name='Control polygon',
        line=dict(color='black', dash='dash'),
        marker=dict(color='black', size=8)
    ), row=1, col=1)

    fig.add_trace(go.Scatter(
        x=ts,
        y=slope,
        mode='lines',
        name='dy/dx',
        line=dict(color='green', width=2)
    ), row=1, col=2)

    fig.update_layout(
        title="Cubic NURBS with linear weights",
        showlegend=True,
        width=1100,
        height=500
    )
    fig.show()

    print(f"first point {points[0]}, last point {points[-1]}")
    paths = curve.save_coefficients(os.path.join(os.path.dirname(__file__), 'output'))
    print("coefficients written to:")
    for path in paths:
        print(f"  {path}")


if __name__ == "__main__":
    setup_logger()
    polynomial_example()
    curve_example()
