"""Numeric tolerance shared by every geometric test.

All "is this effectively zero" decisions in the package go through
``is_zero``/``align_zero`` so that construction checks, degenerate roots,
point equality and on-edge classification agree with each other.
"""

# Absolute tolerance below which a scalar is treated as exactly zero.
EPSILON = 1e-10


def is_zero(value: float) -> bool:
    """Return True if ``value`` is within EPSILON of zero."""
    return abs(value) < EPSILON


def align_zero(value: float) -> float:
    """Snap near-zero values to exactly 0.0.

    Args:
        value: The scalar to align.

    Returns:
        0.0 if ``value`` is within EPSILON of zero, otherwise ``value``.
    """
    return 0.0 if is_zero(value) else value
