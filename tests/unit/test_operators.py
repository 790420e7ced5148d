"""
Tests for the standard operator, Hamiltonian and state factories
"""

import math

import pytest

from quantum_core.core.math.complex_matrix import ComplexVector, DenseComplexMatrix
from quantum_core.core.math.complex_number import ComplexNumber
from quantum_core.core.math.numerical_safeguards import DomainError
from quantum_core.schrodinger import operators

I = ComplexNumber(0, 1)


# =============================================================================
# SINGLE-QUBIT OPERATORS
# =============================================================================


class TestPauliAlgebra:
    @pytest.mark.parametrize("factory", [operators.pauli_x, operators.pauli_y, operators.pauli_z])
    def test_paulis_square_to_identity(self, factory) -> None:
        sigma = factory()
        assert sigma.multiply(sigma).equals(DenseComplexMatrix.identity(2))
        assert sigma.is_hermitian()
        assert sigma.is_unitary()

    def test_xy_equals_iz(self) -> None:
        xy = operators.pauli_x().multiply(operators.pauli_y())
        assert xy.equals(operators.pauli_z().scale(I))

    def test_paulis_are_traceless(self) -> None:
        for factory in (operators.pauli_x, operators.pauli_y, operators.pauli_z):
            assert factory().trace().is_zero()

    def test_hadamard(self) -> None:
        h = operators.hadamard()
        assert h.is_unitary()
        assert h.multiply(h).equals(DenseComplexMatrix.identity(2), "1e-12")

    def test_identity(self) -> None:
        assert operators.identity(3).equals(DenseComplexMatrix.identity(3))
        with pytest.raises(DomainError):
            operators.identity(0)


# =============================================================================
# HAMILTONIANS
# =============================================================================


class TestHamiltonians:
    def test_harmonic_oscillator_levels(self) -> None:
        h = operators.harmonic_oscillator(3, omega=2.0)
        assert h.equals(DenseComplexMatrix.diagonal([1, 3, 5]))

    def test_harmonic_oscillator_rejects_zero_levels(self) -> None:
        with pytest.raises(DomainError):
            operators.harmonic_oscillator(0)

    def test_free_particle_is_tridiagonal(self) -> None:
        h = operators.free_particle(3)
        rows = h.to_complex_rows()
        assert rows[0][0].real == pytest.approx(9.0)
        assert rows[0][1].real == pytest.approx(-4.5)
        assert rows[0][2] == 0
        assert h.is_hermitian()

    def test_particle_in_box(self) -> None:
        h = operators.particle_in_box(2, length=3.0)
        assert h.equals(DenseComplexMatrix([[1, "-0.5"], ["-0.5", 1]]))

    def test_particle_in_box_rejects_nan_length(self) -> None:
        with pytest.raises(DomainError):
            operators.particle_in_box(2, length=math.nan)

    def test_two_level(self) -> None:
        assert operators.two_level(2.0, 0.5).equals(DenseComplexMatrix([[1, "0.5"], ["0.5", -1]]))

    def test_spin_along_z(self) -> None:
        assert operators.spin_in_field(0.0, 0.0, 2.0).equals(DenseComplexMatrix([[-1, 0], [0, 1]]))

    def test_spin_in_transverse_field(self) -> None:
        h = operators.spin_in_field(0.0, 2.0, 0.0)
        assert h.equals(DenseComplexMatrix([[0, I], [-I, 0]]))
        assert h.is_hermitian()

    def test_spin_rejects_infinite_field(self) -> None:
        with pytest.raises(DomainError):
            operators.spin_in_field(math.inf, 0.0, 0.0)


# =============================================================================
# STATES
# =============================================================================


class TestStates:
    def test_basis_and_ground_state(self) -> None:
        assert operators.basis_state(3, 1).equals(ComplexVector([0, 1, 0]))
        assert operators.ground_state(2).equals(ComplexVector([1, 0]))

    def test_basis_state_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            operators.basis_state(2, 2)

    def test_superposition(self) -> None:
        state = operators.superposition(3)
        assert state.norm() == pytest.approx(1.0)
        assert state[2].is_zero()
        assert state[0].equals(state[1])

    def test_superposition_of_one_level(self) -> None:
        assert operators.superposition(1).equals(ComplexVector([1]))

    def test_coherent_state_of_zero_amplitude_is_vacuum(self) -> None:
        assert operators.coherent_state(3, 0).equals(ComplexVector([1, 0, 0]))

    def test_coherent_state_norm_approaches_one(self) -> None:
        state = operators.coherent_state(20, ComplexNumber(1, 0))
        assert state.norm() == pytest.approx(1.0, abs=1e-9)

    def test_coherent_state_is_not_renormalized(self) -> None:
        state = operators.coherent_state(2, ComplexNumber(2, 0))
        assert state.norm() < 0.9
