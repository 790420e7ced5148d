"""
quantum_core — Deterministic Numerical Stack for Small Quantum Systems

BigNumber -> ComplexNumber -> DenseComplexMatrix -> EigenSolver -> TimeEvolution
"""

import logging

from quantum_core.core.domain import (
    Diagonalization,
    EigenMethod,
    EigenPair,
    EigenResult,
    EnergyConservationReport,
    EnergyEigenbasis,
    EvolutionConfig,
    EvolutionMethod,
    EvolutionResult,
    GroundState,
    Propagator,
    SolverConfig,
)
from quantum_core.core.math import (
    BigNumber,
    Complex,
    ComplexNumber,
    ComplexVector,
    DenseComplexMatrix,
    DimensionMismatchError,
    DivisionByZeroError,
    DomainError,
    Matrix,
    Precision,
    RoundingMode,
    SingularMatrixError,
    Vector,
    get_precision,
    integrity_hash,
    kronecker,
    outer_product,
    precision_context,
    set_precision,
    solve,
)
from quantum_core.schrodinger import EigenSolver, TimeEvolution, operators

logging.getLogger("QuantumCore").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Scalars & precision
    "BigNumber",
    "Precision",
    "RoundingMode",
    "get_precision",
    "precision_context",
    "set_precision",
    # Complex & linear algebra
    "Complex",
    "ComplexNumber",
    "ComplexVector",
    "DenseComplexMatrix",
    "Matrix",
    "Vector",
    "kronecker",
    "outer_product",
    "solve",
    # Solvers
    "EigenSolver",
    "TimeEvolution",
    "operators",
    # Configs
    "EigenMethod",
    "EvolutionConfig",
    "EvolutionMethod",
    "SolverConfig",
    # Results
    "Diagonalization",
    "EigenPair",
    "EigenResult",
    "EnergyConservationReport",
    "EnergyEigenbasis",
    "EvolutionResult",
    "GroundState",
    "Propagator",
    # Errors
    "DimensionMismatchError",
    "DivisionByZeroError",
    "DomainError",
    "SingularMatrixError",
    # Integrity
    "integrity_hash",
]
