"""
Tests for ComplexVector, DenseComplexMatrix and the decomposition routines
"""

import math

import pytest

from quantum_core.core.math.complex_matrix import (
    ComplexVector,
    DenseComplexMatrix,
    Matrix,
    Vector,
    kronecker,
    outer_product,
    solve,
)
from quantum_core.core.math.complex_number import ComplexNumber
from quantum_core.core.math.numerical_safeguards import (
    DimensionMismatchError,
    DomainError,
    SingularMatrixError,
)

I = ComplexNumber(0, 1)
EPS = "1e-10"


# =============================================================================
# VECTOR
# =============================================================================


class TestComplexVector:
    def test_empty_vector_rejected(self) -> None:
        with pytest.raises(DimensionMismatchError):
            ComplexVector([])

    def test_constructors(self) -> None:
        assert ComplexVector.zeros(3).equals(ComplexVector([0, 0, 0]))
        assert ComplexVector.ones(2).equals(ComplexVector([1, 1]))
        assert ComplexVector.unit(3, 1).equals(ComplexVector([0, 1, 0]))

    def test_unit_index_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            ComplexVector.unit(2, 2)

    def test_sequence_protocol(self) -> None:
        v = ComplexVector([1, 2, 3])
        assert len(v) == 3
        assert v.size == 3
        assert v[1].equals(2)
        assert v.get(2).equals(3)
        assert [str(e) for e in v] == ["1", "2", "3"]
        with pytest.raises(IndexError):
            v.get(3)

    def test_add_subtract_scale(self) -> None:
        a, b = ComplexVector([1, I]), ComplexVector([2, 3])
        assert (a + b).equals(ComplexVector([3, ComplexNumber(3, 1)]))
        assert (a - a).equals(ComplexVector.zeros(2))
        assert a.scale(I).equals(ComplexVector([I, -1]))
        assert (-a).equals(ComplexVector([-1, ComplexNumber(0, -1)]))

    def test_length_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            ComplexVector([1, 2]).add(ComplexVector([1, 2, 3]))
        with pytest.raises(DimensionMismatchError):
            ComplexVector([1]).inner(ComplexVector([1, 2]))

    def test_inner_conjugates_left_operand(self) -> None:
        v = ComplexVector([1, I])
        assert v.inner(v).equals(2)
        assert ComplexVector([I]).inner(ComplexVector([1])).equals(ComplexNumber(0, -1))

    def test_dot_does_not_conjugate(self) -> None:
        v = ComplexVector([1, I])
        assert v.dot(v).is_zero()

    def test_norm_and_normalize(self) -> None:
        v = ComplexVector([3, 4])
        assert v.norm() == 5.0
        unit = v.normalize()
        assert unit.equals(ComplexVector(["0.6", "0.8"]), EPS)
        assert unit.norm() == pytest.approx(1.0)

    def test_normalize_zero_vector(self) -> None:
        with pytest.raises(DomainError, match="zero vector"):
            ComplexVector.zeros(2).normalize()

    def test_cross(self) -> None:
        x, y = ComplexVector([1, 0, 0]), ComplexVector([0, 1, 0])
        assert x.cross(y).equals(ComplexVector([0, 0, 1]))
        assert y.cross(x).equals(ComplexVector([0, 0, -1]))

    def test_cross_requires_three_dimensions(self) -> None:
        with pytest.raises(DimensionMismatchError):
            ComplexVector([1, 0]).cross(ComplexVector([0, 1]))

    def test_conjugate_round_and_list(self) -> None:
        v = ComplexVector([ComplexNumber("1.234", "0.5")])
        assert v.conjugate().equals(ComplexVector([ComplexNumber("1.234", "-0.5")]))
        assert v.round(1).equals(ComplexVector([ComplexNumber("1.2", "0.5")]))
        assert v.to_list() == [complex(1.234, 0.5)]

    def test_equality_and_hash(self) -> None:
        assert ComplexVector([1, "2.0"]) == ComplexVector([1, 2])
        assert hash(ComplexVector([1, "2.0"])) == hash(ComplexVector([1, 2]))
        assert not ComplexVector([1]).equals(ComplexVector([1, 0]))

    def test_alias(self) -> None:
        assert Vector is ComplexVector


# =============================================================================
# MATRIX CONSTRUCTION & ACCESS
# =============================================================================


class TestMatrixConstruction:
    def test_empty_matrix_rejected(self) -> None:
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix([])
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix([[]])

    def test_ragged_matrix_rejected(self) -> None:
        with pytest.raises(DimensionMismatchError, match="Ragged"):
            DenseComplexMatrix([[1, 2], [3]])

    def test_constructors(self) -> None:
        assert DenseComplexMatrix.zeros(2, 3).shape == (2, 3)
        assert DenseComplexMatrix.ones(1, 2).equals(DenseComplexMatrix([[1, 1]]))
        assert DenseComplexMatrix.identity(2).equals(DenseComplexMatrix([[1, 0], [0, 1]]))
        assert DenseComplexMatrix.diagonal([1, 2]).equals(DenseComplexMatrix([[1, 0], [0, 2]]))

    def test_from_rows_and_columns(self) -> None:
        u, v = ComplexVector([1, 2]), ComplexVector([3, 4])
        assert DenseComplexMatrix.from_rows([u, v]).equals(DenseComplexMatrix([[1, 2], [3, 4]]))
        assert DenseComplexMatrix.from_columns([u, v]).equals(DenseComplexMatrix([[1, 3], [2, 4]]))

    def test_from_columns_size_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix.from_columns([ComplexVector([1]), ComplexVector([1, 2])])

    def test_from_complex_rows(self) -> None:
        m = DenseComplexMatrix.from_complex_rows([[1j, 2], [0, -0.5j]])
        assert m.get(0, 0).equals(I)
        assert m.to_complex_rows() == [[1j, 2 + 0j], [0j, -0.5j]]

    def test_accessors(self) -> None:
        m = DenseComplexMatrix([[1, 2, 3], [4, 5, 6]])
        assert (m.rows, m.cols) == (2, 3)
        assert m.get(1, 2).equals(6)
        assert m.get_row(0).equals(ComplexVector([1, 2, 3]))
        assert m.get_col(1).equals(ComplexVector([2, 5]))
        with pytest.raises(IndexError):
            m.get(2, 0)
        with pytest.raises(IndexError):
            m.get_col(3)

    def test_alias(self) -> None:
        assert Matrix is DenseComplexMatrix


# =============================================================================
# PREDICATES
# =============================================================================


class TestPredicates:
    def test_symmetric(self) -> None:
        assert DenseComplexMatrix([[1, 2], [2, 3]]).is_symmetric()
        assert not DenseComplexMatrix([[1, 2], [3, 4]]).is_symmetric()
        assert not DenseComplexMatrix([[1, 2]]).is_symmetric()

    def test_hermitian(self) -> None:
        assert DenseComplexMatrix([[0, -I], [I, 0]]).is_hermitian()
        assert not DenseComplexMatrix([[0, I], [I, 0]]).is_hermitian()
        assert not DenseComplexMatrix([[1, 2]]).is_hermitian()

    def test_hermitian_requires_real_diagonal(self) -> None:
        assert not DenseComplexMatrix([[I, 0], [0, 1]]).is_hermitian()

    def test_unitary(self) -> None:
        s = 1.0 / math.sqrt(2.0)
        assert DenseComplexMatrix([[0, 1], [1, 0]]).is_unitary()
        assert DenseComplexMatrix([[s, s], [s, -s]]).is_unitary()
        assert not DenseComplexMatrix([[1, 1], [0, 1]]).is_unitary()


# =============================================================================
# ALGEBRA
# =============================================================================


class TestMatrixAlgebra:
    def test_add_subtract_scale(self) -> None:
        a = DenseComplexMatrix([[1, 2], [3, 4]])
        assert (a + a).equals(a.scale(2))
        assert (a - a).equals(DenseComplexMatrix.zeros(2, 2))
        assert (-a).equals(a.scale(-1))

    def test_shape_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix([[1, 2]]).add(DenseComplexMatrix([[1], [2]]))
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix([[1, 2]]).multiply(DenseComplexMatrix([[1, 2]]))
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix([[1, 2]]).multiply_vector(ComplexVector([1]))

    def test_multiply(self) -> None:
        a = DenseComplexMatrix([[1, 2], [3, 4]])
        b = DenseComplexMatrix([[0, 1], [1, 0]])
        assert a.multiply(b).equals(DenseComplexMatrix([[2, 1], [4, 3]]))
        assert (a @ DenseComplexMatrix.identity(2)).equals(a)

    def test_multiply_vector(self) -> None:
        m = DenseComplexMatrix([[0, -I], [I, 0]])
        assert (m @ ComplexVector([1, 0])).equals(ComplexVector([0, I]))

    def test_hadamard(self) -> None:
        a = DenseComplexMatrix([[1, 2], [3, 4]])
        assert a.hadamard(a).equals(DenseComplexMatrix([[1, 4], [9, 16]]))

    def test_pow(self) -> None:
        shear = DenseComplexMatrix([[1, 1], [0, 1]])
        assert shear.pow(5).equals(DenseComplexMatrix([[1, 5], [0, 1]]))
        assert shear.pow(0).equals(DenseComplexMatrix.identity(2))

    @pytest.mark.parametrize("n", [-1, 1.5])
    def test_pow_rejects_invalid_exponent(self, n) -> None:
        with pytest.raises(DomainError):
            DenseComplexMatrix.identity(2).pow(n)

    def test_transpose_and_conjugate_transpose(self) -> None:
        m = DenseComplexMatrix([[1, I], [2, 3]])
        assert m.transpose().equals(DenseComplexMatrix([[1, 2], [I, 3]]))
        assert m.conjugate().equals(DenseComplexMatrix([[1, -I], [2, 3]]))
        assert m.conjugate_transpose().equals(DenseComplexMatrix([[1, 2], [-I, 3]]))

    def test_trace(self) -> None:
        assert DenseComplexMatrix([[1, 9], [9, I]]).trace().equals(ComplexNumber(1, 1))
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix([[1, 2]]).trace()

    def test_frobenius_norm(self) -> None:
        assert DenseComplexMatrix([[1, 2], [2, 4]]).norm() == 5.0

    def test_round(self) -> None:
        m = DenseComplexMatrix([["0.126", "1.004"]])
        assert m.round(2).equals(DenseComplexMatrix([["0.13", "1"]]))

    def test_equality_and_hash(self) -> None:
        assert DenseComplexMatrix([[1, "2.50"]]) == DenseComplexMatrix([[1, "2.5"]])
        assert hash(DenseComplexMatrix([[1, "2.50"]])) == hash(DenseComplexMatrix([[1, "2.5"]]))
        assert not DenseComplexMatrix([[1]]).equals(DenseComplexMatrix([[1, 0]]))


# =============================================================================
# DECOMPOSITIONS
# =============================================================================


class TestLUAndDeterminant:
    def test_lu_reconstructs_permuted_matrix(self) -> None:
        a = DenseComplexMatrix([[2, 1], [4, 3]])
        lu = a.lu_decomposition()
        permuted = DenseComplexMatrix([a.get_row(r) for r in lu.permutation])
        assert lu.lower.multiply(lu.upper).equals(permuted)
        assert lu.permutation == (1, 0)
        assert lu.swaps == 1

    def test_determinant(self) -> None:
        assert str(DenseComplexMatrix([[2, 1], [4, 3]]).determinant()) == "2"
        assert DenseComplexMatrix([[3]]).determinant().equals(3)
        assert DenseComplexMatrix.identity(3).determinant().equals(1)

    def test_determinant_of_complex_matrix(self) -> None:
        assert DenseComplexMatrix([[I, 0], [0, I]]).determinant().equals(-1)

    def test_singular_determinant_is_zero(self) -> None:
        assert DenseComplexMatrix([[1, I], [-I, 1]]).determinant().is_zero()
        assert DenseComplexMatrix([[1, 2], [2, 4]]).determinant().is_zero()

    def test_determinant_requires_square(self) -> None:
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix([[1, 2]]).determinant()


class TestInverseAndSolve:
    def test_inverse(self) -> None:
        a = DenseComplexMatrix([[4, 7], [2, 6]])
        expected = DenseComplexMatrix([["0.6", "-0.7"], ["-0.2", "0.4"]])
        assert a.inverse().equals(expected)
        assert a.multiply(a.inverse()).equals(DenseComplexMatrix.identity(2))

    def test_inverse_of_complex_matrix(self) -> None:
        m = DenseComplexMatrix([[0, -I], [I, 0]])
        assert m.inverse().equals(m)

    def test_singular_inverse(self) -> None:
        with pytest.raises(SingularMatrixError):
            DenseComplexMatrix([[1, 2], [2, 4]]).inverse()

    def test_solve(self) -> None:
        a = DenseComplexMatrix([[2, 1], [1, 3]])
        x = solve(a, [3, 5])
        assert x.equals(ComplexVector(["0.8", "1.4"]))

    def test_solve_residual_for_pivoted_system(self) -> None:
        a = DenseComplexMatrix([[1, 2, 0], [3, 1, 1], [0, 1, 4]])
        b = ComplexVector([1, 2, 3])
        x = solve(a, b)
        assert a.multiply_vector(x).equals(b, "1e-12")

    def test_rounded_solve_and_inverse(self) -> None:
        a = DenseComplexMatrix([[1, 2, 0], [3, 1, 1], [0, 1, 4]])
        b = ComplexVector([1, 2, 3])
        x = solve(a, b, decimal_places=20)
        assert a.multiply_vector(x).equals(b, "1e-15")
        assert a.inverse(decimal_places=20).multiply(a).equals(DenseComplexMatrix.identity(3), "1e-15")

    def test_rounded_lu_bounds_digits(self) -> None:
        a = DenseComplexMatrix([[3, 1, 2], [1, 7, 1], [2, 1, 9]])
        upper = a.lu_decomposition(decimal_places=10).upper
        assert all(z.real.decimal_places <= 10 for row in upper.entries for z in row)

    def test_solve_singular(self) -> None:
        with pytest.raises(SingularMatrixError):
            solve(DenseComplexMatrix([[1, 2], [2, 4]]), [1, 1])

    def test_solve_size_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            solve(DenseComplexMatrix.identity(2), [1, 2, 3])


class TestQR:
    def test_q_is_unitary_and_reconstructs(self) -> None:
        a = DenseComplexMatrix([[1, 2], [3, 4]])
        qr = a.qr_decomposition()
        assert qr.q.is_unitary()
        assert qr.q.multiply(qr.r).equals(a, EPS)

    def test_r_is_upper_triangular(self) -> None:
        a = DenseComplexMatrix([[2, 1, 0], [1, 2, 1], [0, 1, 2]])
        r = a.qr_decomposition().r
        for row in range(1, 3):
            for col in range(row):
                assert r.get(row, col).magnitude() < 1e-10

    def test_complex_input(self) -> None:
        a = DenseComplexMatrix([[1, I], [I, 2]])
        qr = a.qr_decomposition()
        assert qr.q.is_unitary()
        assert qr.q.multiply(qr.r).equals(a, EPS)

    def test_rank_deficient_columns_are_completed(self) -> None:
        a = DenseComplexMatrix([[1, 1], [1, 1]])
        qr = a.qr_decomposition()
        assert qr.q.is_unitary()
        assert qr.q.multiply(qr.r).equals(a, EPS)

    def test_tall_matrix(self) -> None:
        a = DenseComplexMatrix([[1, 0], [1, 1], [0, 1]])
        qr = a.qr_decomposition()
        assert qr.q.shape == (3, 2)
        assert qr.q.multiply(qr.r).equals(a, EPS)

    def test_rounded_decomposition_bounds_digits(self) -> None:
        a = DenseComplexMatrix([[2, -1, 0, 0], [-1, 2, -1, 0], [0, -1, 2, -1], [0, 0, -1, 2]])
        qr = a.qr_decomposition(decimal_places=12)
        for factor in (qr.q, qr.r):
            for row in factor.entries:
                assert all(z.real.decimal_places <= 12 and z.imag.decimal_places <= 12 for z in row)
        assert qr.q.is_unitary(1e-10)
        assert qr.q.multiply(qr.r).equals(a, "1e-10")

    def test_wide_matrix_rejected(self) -> None:
        with pytest.raises(DimensionMismatchError):
            DenseComplexMatrix([[1, 2, 3]]).qr_decomposition()


# =============================================================================
# PRODUCTS
# =============================================================================


class TestProducts:
    def test_kronecker(self) -> None:
        x = DenseComplexMatrix([[0, 1], [1, 0]])
        expected = DenseComplexMatrix(
            [[0, 1, 0, 0], [1, 0, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]]
        )
        assert kronecker(DenseComplexMatrix.identity(2), x).equals(expected)

    def test_kronecker_shape(self) -> None:
        assert kronecker(DenseComplexMatrix.ones(2, 3), DenseComplexMatrix.ones(1, 2)).shape == (2, 6)

    def test_outer_product(self) -> None:
        result = outer_product(ComplexVector([1, I]), ComplexVector([1, 2]))
        assert result.equals(DenseComplexMatrix([[1, 2], [I, ComplexNumber(0, 2)]]))
