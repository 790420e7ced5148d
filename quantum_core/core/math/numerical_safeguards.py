"""
Numerical Safeguards — Epsilon Guards & Error Taxonomy

Shared primitives for every layer of the numerical stack:
- Epsilon constants for pivots, norms and structural checks (Hermitian/unitary)
- The exception hierarchy (DomainError and its specialisations)
- Float validation and tolerant comparisons
- Dimension guards used by vectors, matrices and solvers

CRITICAL INVARIANTS:
1. Domain violations are always raised synchronously, never silently recovered
2. Non-convergence is never an error (logged, best estimate returned)
3. Float comparisons always go through an explicit tolerance
4. All operations are deterministic and reproducible
"""

import math
from typing import Final, Sized

# =============================================================================
# EPSILON CONSTANTS
# =============================================================================

# General-purpose epsilon for float computations
EPS_CALC: Final[float] = 1e-12

# Relative tolerance for float comparisons (is_close)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Absolute tolerance for float comparisons (is_close)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Pivot magnitudes below this are treated as numerically zero (singular matrix)
EPS_PIVOT: Final[float] = 1e-15

# Vector norms below this cannot be normalized
EPS_NORM: Final[float] = 1e-15

# Tolerance for structural checks: A == A^H, U U^H == I
EPS_STRUCTURE: Final[float] = 1e-10

# Largest magnitude for which the native double shortcut is allowed
NATIVE_MAGNITUDE_LIMIT: Final[float] = 1e15

# Significant digits a double carries faithfully
NATIVE_SIGNIFICANT_DIGITS: Final[int] = 15


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DomainError(ValueError):
    """
    Operand outside the mathematical domain of an operation.

    Raised for even roots of negatives, log of zero, invalid literals,
    NaN/Inf inputs, zero-vector normalization and similar violations.
    Always surfaced to the caller, never recovered internally.
    """


class DivisionByZeroError(DomainError, ZeroDivisionError):
    """Division or reciprocal of an exact zero."""


class SingularMatrixError(DomainError):
    """Pivot magnitude numerically zero during inversion or linear solve."""


class DimensionMismatchError(DomainError):
    """Vector/matrix shapes incompatible for the requested operation."""


# =============================================================================
# FLOAT VALIDATION & COMPARISONS
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check that a float is finite (not NaN, not Inf).

    Args:
        value: Value to check

    Returns:
        True if finite
    """
    return math.isfinite(value)


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Tolerant float comparison.

    Algorithm:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    """True if abs(value) <= tol."""
    return abs(value) <= tol


def compare_with_tolerance(a: float, b: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> int:
    """
    Three-way float comparison with an absolute tolerance.

    Returns:
        -1 if a < b, 0 if a ≈ b (within tol), +1 if a > b

    Examples:
        >>> compare_with_tolerance(1.0, 2.0)
        -1
        >>> compare_with_tolerance(1.0, 1.0 + 1e-13)
        0
    """
    diff = a - b

    if abs(diff) <= tol:
        return 0
    elif diff < 0:
        return -1
    else:
        return 1


# =============================================================================
# VALIDATION
# =============================================================================


def validate_finite(value: float, name: str) -> None:
    """
    Validate that a float is finite.

    Raises:
        DomainError: If value is NaN or Inf
    """
    if not is_valid_float(value):
        raise DomainError(f"{name} must be a finite number (not NaN/Inf), got {value}")


def validate_positive_int(value: int, name: str) -> None:
    """
    Validate a strictly positive integer parameter (root order, sizes).

    Raises:
        DomainError: If value is not an int or value < 1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainError(f"{name} must be an integer, got {value!r}")

    if value < 1:
        raise DomainError(f"{name} must be positive, got {value}")


def require_same_length(left: Sized, right: Sized, operation: str) -> None:
    """
    Guard for element-wise operations on two sequences.

    Raises:
        DimensionMismatchError: If the lengths differ
    """
    if len(left) != len(right):
        raise DimensionMismatchError(
            f"{operation}: size mismatch ({len(left)} vs {len(right)})"
        )


def require_square(rows: int, cols: int, operation: str) -> None:
    """
    Guard for operations defined on square matrices only.

    Raises:
        DimensionMismatchError: If rows != cols
    """
    if rows != cols:
        raise DimensionMismatchError(
            f"{operation} requires a square matrix, got {rows}x{cols}"
        )
