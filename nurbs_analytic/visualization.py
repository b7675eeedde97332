"""
Plotting helpers for NURBS curves.
"""

import numpy as np
import matplotlib.pyplot as plt

from .constants import DEFAULT_SAMPLES


SEGMENT_COLORS = ['#E74C3C', '#3498DB', '#F39C12']  # (red, blue, orange)


def plot_segments(ax, curve, samples_per_segment=60, lw=2.0, show_control_polygon=True):
    """
    Plot a planar NURBS curve with one color per segment.

    Args:
        ax: 2D matplotlib axes
        curve: NurbsCurve with dimension >= 2 (first two axes are drawn)
        samples_per_segment: Parameter values evaluated on each segment
        lw: Line width of the curve
        show_control_polygon: Draw the control polygon in black

    Returns:
        The axes
    """
    P = curve.control_points
    if show_control_polygon:
        ax.plot(P[:, 0], P[:, 1], 'k.-', lw=1.0, ms=4, alpha=0.6)

    for i, segment in enumerate(curve.segments):
        start, end = curve.segment_interval(i)
        ts = np.linspace(start, end, samples_per_segment)
        pts = segment.evaluate(ts)
        ax.plot(pts[:, 0], pts[:, 1], '-', color=SEGMENT_COLORS[i % 3], lw=lw)

    ax.set_aspect('equal', adjustable='datalim')
    return ax


def plot_slope(ax, curve, n_samples=DEFAULT_SAMPLES):
    """Plot dy/dx against the curve parameter."""
    ts = curve.sample_parameters(n_samples)
    ax.plot(ts, curve.sample_slope(n_samples), lw=1.5)
    for i in range(curve.n_segments + 1):
        knot = curve.knots[curve.boundaries[i]]
        ax.axvline(knot, color='0.85', lw=0.8)
    ax.set_xlabel('t')
    ax.set_ylabel('dy/dx')
    return ax


def create_curve_figure(curve, n_samples=DEFAULT_SAMPLES):
    """
    Two-panel figure: the curve with its segments, and its slope profile.

    Returns:
        matplotlib Figure object
    """
    fig, (ax_curve, ax_slope) = plt.subplots(1, 2, figsize=(12, 5), constrained_layout=True)
    plot_segments(ax_curve, curve)
    ax_curve.set_title(f"degree {curve.degree}, {curve.n_segments} segments")
    plot_slope(ax_slope, curve, n_samples)
    return fig
