"""
Tests for Numerical Safeguards

Covers:
1. Epsilon constants
2. Exception hierarchy
3. Tolerant float comparisons
4. Parameter and dimension validation
"""

import math

import pytest

from quantum_core.core.math.numerical_safeguards import (
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_NORM,
    EPS_PIVOT,
    EPS_STRUCTURE,
    DimensionMismatchError,
    DivisionByZeroError,
    DomainError,
    SingularMatrixError,
    compare_with_tolerance,
    is_close,
    is_valid_float,
    is_zero,
    require_same_length,
    require_square,
    validate_finite,
    validate_positive_int,
)

# =============================================================================
# CONSTANTS
# =============================================================================


class TestEpsilonConstants:
    def test_constants_are_positive(self) -> None:
        for eps in (EPS_CALC, EPS_FLOAT_COMPARE_ABS, EPS_FLOAT_COMPARE_REL, EPS_NORM, EPS_PIVOT, EPS_STRUCTURE):
            assert eps > 0

    def test_pivot_threshold_below_structure_tolerance(self) -> None:
        """Pivot guard is stricter than structural checks"""
        assert EPS_PIVOT < EPS_STRUCTURE


# =============================================================================
# EXCEPTIONS
# =============================================================================


class TestExceptionHierarchy:
    def test_domain_error_is_value_error(self) -> None:
        assert issubclass(DomainError, ValueError)

    def test_division_by_zero_is_both(self) -> None:
        assert issubclass(DivisionByZeroError, DomainError)
        assert issubclass(DivisionByZeroError, ZeroDivisionError)

    def test_matrix_errors_are_domain_errors(self) -> None:
        assert issubclass(SingularMatrixError, DomainError)
        assert issubclass(DimensionMismatchError, DomainError)


# =============================================================================
# COMPARISONS
# =============================================================================


class TestIsValidFloat:
    def test_finite_values(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-1e300)

    def test_nan_and_inf(self) -> None:
        assert not is_valid_float(math.nan)
        assert not is_valid_float(math.inf)
        assert not is_valid_float(-math.inf)


class TestIsClose:
    def test_within_relative_tolerance(self) -> None:
        assert is_close(1.0, 1.0 + 1e-10)

    def test_outside_tolerance(self) -> None:
        assert not is_close(1.0, 1.1)

    def test_near_zero_uses_absolute_tolerance(self) -> None:
        assert is_close(0.0, 1e-13)
        assert not is_close(0.0, 1e-6)


class TestIsZero:
    def test_zero_and_tiny(self) -> None:
        assert is_zero(0.0)
        assert is_zero(1e-13)

    def test_not_zero(self) -> None:
        assert not is_zero(1e-6)

    def test_custom_tolerance(self) -> None:
        assert is_zero(1e-6, tol=1e-5)


class TestCompareWithTolerance:
    def test_ordering(self) -> None:
        assert compare_with_tolerance(1.0, 2.0) == -1
        assert compare_with_tolerance(2.0, 1.0) == 1

    def test_equal_within_tolerance(self) -> None:
        assert compare_with_tolerance(1.0, 1.0 + 1e-13) == 0


# =============================================================================
# VALIDATION
# =============================================================================


class TestValidateFinite:
    def test_accepts_finite(self) -> None:
        validate_finite(3.5, "x")

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite(self, value: float) -> None:
        with pytest.raises(DomainError, match="x must be a finite number"):
            validate_finite(value, "x")


class TestValidatePositiveInt:
    def test_accepts_positive(self) -> None:
        validate_positive_int(3, "n")

    @pytest.mark.parametrize("value", [0, -2])
    def test_rejects_non_positive(self, value: int) -> None:
        with pytest.raises(DomainError, match="must be positive"):
            validate_positive_int(value, "n")

    @pytest.mark.parametrize("value", [2.0, True, "3"])
    def test_rejects_non_integers(self, value) -> None:
        with pytest.raises(DomainError, match="must be an integer"):
            validate_positive_int(value, "n")


class TestDimensionGuards:
    def test_same_length_passes(self) -> None:
        require_same_length([1, 2], [3, 4], "op")

    def test_length_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError, match="op: size mismatch"):
            require_same_length([1, 2], [3], "op")

    def test_square_passes(self) -> None:
        require_square(3, 3, "op")

    def test_non_square(self) -> None:
        with pytest.raises(DimensionMismatchError, match="requires a square matrix"):
            require_square(2, 3, "op")
