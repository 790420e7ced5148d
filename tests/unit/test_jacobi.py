"""
Tests for the real symmetric Jacobi eigendecomposition
"""

import math

import pytest

from quantum_core.core.math.jacobi import JacobiDecomposition, jacobi_eigen
from quantum_core.core.math.numerical_safeguards import DimensionMismatchError, DomainError


def _apply(matrix, vector):
    return [sum(a * b for a, b in zip(row, vector)) for row in matrix]


class TestJacobiEigen:
    def test_two_by_two(self) -> None:
        result = jacobi_eigen([[2.0, 1.0], [1.0, 2.0]])
        assert isinstance(result, JacobiDecomposition)
        assert sorted(result.eigenvalues) == pytest.approx([1.0, 3.0])
        assert result.converged
        assert result.iterations == 1

    def test_diagonal_needs_no_rotation(self) -> None:
        result = jacobi_eigen([[3.0, 0.0], [0.0, -1.0]])
        assert result.eigenvalues == [3.0, -1.0]
        assert result.iterations == 0
        assert result.converged
        assert result.off_diagonal == 0.0

    def test_eigenpairs_satisfy_definition(self) -> None:
        a = [[4.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 1.0, 2.0]]
        result = jacobi_eigen(a)

        for value, vector in zip(result.eigenvalues, result.eigenvectors):
            image = _apply(a, vector)
            for x, y in zip(image, vector):
                assert x == pytest.approx(value * y, abs=1e-9)

    def test_eigenvectors_are_orthonormal(self) -> None:
        result = jacobi_eigen([[4.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 1.0, 2.0]])
        vectors = result.eigenvectors

        for i, u in enumerate(vectors):
            for j, v in enumerate(vectors):
                expected = 1.0 if i == j else 0.0
                assert math.fsum(a * b for a, b in zip(u, v)) == pytest.approx(expected, abs=1e-12)

    def test_trace_is_preserved(self) -> None:
        a = [[1.0, 2.0, 3.0], [2.0, 5.0, 4.0], [3.0, 4.0, 9.0]]
        result = jacobi_eigen(a)
        assert math.fsum(result.eigenvalues) == pytest.approx(15.0)

    def test_iteration_cap_reports_not_converged(self) -> None:
        result = jacobi_eigen([[2.0, 1.0], [1.0, 2.0]], max_iterations=0)
        assert not result.converged
        assert result.iterations == 0
        assert result.off_diagonal == 1.0

    def test_rejects_non_symmetric(self) -> None:
        with pytest.raises(DomainError, match="symmetric"):
            jacobi_eigen([[1.0, 2.0], [0.0, 1.0]])

    def test_rejects_non_square(self) -> None:
        with pytest.raises(DimensionMismatchError):
            jacobi_eigen([[1.0, 2.0, 3.0], [2.0, 1.0, 0.0]])
