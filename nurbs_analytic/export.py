"""
Text export of segment coefficients.

One polynomial per line, written as a bracketed coefficient list with the
highest-degree term first (the same form as str(Polynomial)).
"""

from pathlib import Path

from .constants import AXIS_NAMES, DENOMINATOR_FILE, NUMERATOR_FILE
from .polynomial import Polynomial


def format_polynomial(poly) -> str:
    return str(Polynomial(poly))


def _parse_scalar(token: str):
    token = token.strip()
    return complex(token) if 'j' in token else float(token)


def parse_polynomial(line: str) -> Polynomial:
    """Inverse of format_polynomial."""
    body = line.strip()
    if not (body.startswith('[') and body.endswith(']')):
        raise ValueError(f"not a bracketed coefficient list: {line!r}")
    body = body[1:-1]
    if not body.strip():
        return Polynomial.zero()
    return Polynomial([_parse_scalar(token) for token in body.split(',')])


def write_polynomials(path, polynomials) -> Path:
    """Write one polynomial per line; parent directories are created."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        for poly in polynomials:
            f.write(format_polynomial(poly) + "\n")
    return path


def read_polynomials(path):
    with open(path) as f:
        return [parse_polynomial(line) for line in f if line.strip()]


def _axis_name(index: int) -> str:
    return AXIS_NAMES[index] if index < len(AXIS_NAMES) else str(index)


def save_coefficients(curve, directory='.'):
    """
    Write the numerators of every axis and the shared denominators.

    Files: coefs_num_x.out, coefs_num_y.out, ... and coefs_den.out, one line
    per segment.

    Args:
        curve: NurbsCurve
        directory: Output directory (created if missing)

    Returns:
        list of written paths, numerators first
    """
    directory = Path(directory)
    paths = []
    for d in range(curve.dimension):
        path = directory / NUMERATOR_FILE.format(axis=_axis_name(d))
        paths.append(write_polynomials(path, [segment.numerators[d] for segment in curve.segments]))
    paths.append(save_denominators(curve, directory / DENOMINATOR_FILE))
    return paths


def save_denominators(curve, path) -> Path:
    return write_polynomials(path, [segment.denominator for segment in curve.segments])
