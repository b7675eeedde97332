"""
Example scripts for the NURBS analytic kernel.

Included examples:
- basic_usage.py: curve construction, sampling, slope and coefficient export
- integration_demo.py: closed-form integral of y dx against quadrature

Run with:
    python examples/basic_usage.py
    python examples/integration_demo.py
"""

__all__ = []
