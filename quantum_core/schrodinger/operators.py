"""
Operators — Standard Gates, Hamiltonians & States

Factories for common inputs to EigenSolver and TimeEvolution (ħ = 1):
- Single-qubit operators: Pauli X/Y/Z, Hadamard, identity
- Hamiltonians: truncated harmonic oscillator, discretized free particle and
  particle in a box, two-level system, spin-1/2 in a magnetic field
- States: basis states, superposition, truncated coherent state
"""

import math

from quantum_core.core.math.complex_matrix import ComplexVector, DenseComplexMatrix
from quantum_core.core.math.complex_number import ComplexNumber
from quantum_core.core.math.numerical_safeguards import validate_finite, validate_positive_int

HBAR = 1.0


# =============================================================================
# SINGLE-QUBIT OPERATORS
# =============================================================================


def pauli_x() -> DenseComplexMatrix:
    return DenseComplexMatrix([[0, 1], [1, 0]])


def pauli_y() -> DenseComplexMatrix:
    return DenseComplexMatrix([[0, ComplexNumber(0, -1)], [ComplexNumber(0, 1), 0]])


def pauli_z() -> DenseComplexMatrix:
    return DenseComplexMatrix([[1, 0], [0, -1]])


def hadamard() -> DenseComplexMatrix:
    s = 1.0 / math.sqrt(2.0)
    return DenseComplexMatrix([[s, s], [s, -s]])


def identity(n: int) -> DenseComplexMatrix:
    validate_positive_int(n, "Identity size")
    return DenseComplexMatrix.identity(n)


# =============================================================================
# HAMILTONIANS
# =============================================================================


def harmonic_oscillator(levels: int, omega: float = 1.0) -> DenseComplexMatrix:
    """Truncated Fock-space Hamiltonian: E_n = ħω(n + 1/2) on the diagonal."""
    validate_positive_int(levels, "Oscillator levels")
    validate_finite(omega, "omega")
    return DenseComplexMatrix.diagonal([HBAR * omega * (n + 0.5) for n in range(levels)])


def _tridiagonal_laplacian(grid_points: int, coefficient: float) -> DenseComplexMatrix:
    return DenseComplexMatrix(
        [
            2 * coefficient if r == c else (-coefficient if abs(r - c) == 1 else 0)
            for c in range(grid_points)
        ]
        for r in range(grid_points)
    )


def free_particle(grid_points: int, mass: float = 1.0) -> DenseComplexMatrix:
    """
    Finite-difference H = -ħ²/(2m) ∇² on a unit interval with dx = 1/grid_points.
    """
    validate_positive_int(grid_points, "Grid points")
    validate_finite(mass, "mass")
    dx = 1.0 / grid_points
    return _tridiagonal_laplacian(grid_points, HBAR**2 / (2.0 * mass * dx**2))


def particle_in_box(grid_points: int, length: float = 1.0, mass: float = 1.0) -> DenseComplexMatrix:
    """
    Infinite square well of width `length`; interior grid with dx = L/(N+1).
    """
    validate_positive_int(grid_points, "Grid points")
    validate_finite(length, "length")
    validate_finite(mass, "mass")
    dx = length / (grid_points + 1)
    return _tridiagonal_laplacian(grid_points, HBAR**2 / (2.0 * mass * dx**2))


def two_level(delta: float, tunneling: float) -> DenseComplexMatrix:
    """H = (Δ/2) σz + t σx."""
    return DenseComplexMatrix([[delta / 2, tunneling], [tunneling, -delta / 2]])


def spin_in_field(bx: float, by: float, bz: float, gamma: float = 1.0) -> DenseComplexMatrix:
    """Spin-1/2 in a magnetic field: H = -γ B·σ / 2."""
    for value, name in ((bx, "bx"), (by, "by"), (bz, "bz"), (gamma, "gamma")):
        validate_finite(value, name)
    return DenseComplexMatrix(
        [
            [-gamma * bz / 2, ComplexNumber(-gamma * bx / 2, gamma * by / 2)],
            [ComplexNumber(-gamma * bx / 2, -gamma * by / 2), gamma * bz / 2],
        ]
    )


# =============================================================================
# STATES
# =============================================================================


def basis_state(size: int, n: int) -> ComplexVector:
    """|n> in a `size`-dimensional space."""
    validate_positive_int(size, "State size")
    return ComplexVector.unit(size, n)


def ground_state(size: int) -> ComplexVector:
    return basis_state(size, 0)


def superposition(size: int) -> ComplexVector:
    """(|0> + |1>)/√2, or |0> when size == 1."""
    validate_positive_int(size, "State size")
    if size == 1:
        return ComplexVector([1])
    s = 1.0 / math.sqrt(2.0)
    return ComplexVector([s, s] + [0] * (size - 2))


def coherent_state(size: int, alpha: ComplexNumber) -> ComplexVector:
    """
    Truncated coherent state e^{-|α|²/2} Σ αⁿ/√(n!) |n>, n < size.

    The truncation is not renormalized.
    """
    validate_positive_int(size, "State size")
    alpha = complex(ComplexNumber.coerce(alpha))
    normalization = math.exp(-abs(alpha) ** 2 / 2)

    return ComplexVector(
        ComplexNumber.from_complex(normalization * alpha**n / math.sqrt(math.factorial(n)))
        for n in range(size)
    )
