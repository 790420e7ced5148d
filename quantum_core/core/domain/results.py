"""
Results — Immutable Outputs of EigenSolver & TimeEvolution

Frozen Pydantic models holding numerical results. Every model provides:
- to_payload(): JSON-compatible dict (exact decimal strings for BigNumbers),
  compatible with the JSON Schemas in contracts/schema/
- integrity_hash: SHA-256 of the canonical payload, computed on access and
  never stored

CRITICAL INVARIANTS:
1. EigenResult: len(eigenvalues) == len(eigenvectors) == n, each eigenvector of size n
2. Results are immutable once built
"""

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field, model_validator

from quantum_core.core.contracts.validators import ContractValidator
from quantum_core.core.domain.configs import EigenMethod, EvolutionMethod
from quantum_core.core.math.complex_matrix import ComplexVector, DenseComplexMatrix
from quantum_core.core.math.complex_number import ComplexNumber
from quantum_core.core.math.integrity import canonical_payload
from quantum_core.core.math.integrity import integrity_hash as hash_payload
from quantum_core.core.math.numerical_safeguards import DimensionMismatchError


# =============================================================================
# BASE
# =============================================================================


class ResultModel(BaseModel):
    """Frozen result with canonical payload and on-demand integrity hash."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    # JSON Schema in contracts/schema/ that to_payload() satisfies
    contract: ClassVar[Optional[str]] = None

    def to_payload(self) -> dict[str, Any]:
        return {name: canonical_payload(getattr(self, name)) for name in type(self).model_fields}

    @property
    def integrity_hash(self) -> str:
        return hash_payload(self.to_payload())

    def validate_contract(self) -> None:
        """
        Validate to_payload() against this model's JSON Schema contract.

        Raises:
            ValueError: If the model has no contract
            ValidationError: If the payload violates the contract
        """
        if self.contract is None:
            raise ValueError(f"{type(self).__name__} has no JSON Schema contract")
        ContractValidator(self.contract).validate(self.to_payload())


# =============================================================================
# EIGEN RESULTS
# =============================================================================


class EigenPair(ResultModel):
    """Single eigenvalue/eigenvector pair from an iterative method."""

    eigenvalue: ComplexNumber
    eigenvector: ComplexVector
    iterations: int = Field(..., ge=0, description="Iterations performed")
    converged: bool = Field(..., description="Tolerance met before the cap")


class EigenResult(ResultModel):
    """
    Full spectrum of an n x n matrix.

    eigenvectors[k] is the eigenvector paired with eigenvalues[k].
    condition_number is max|λ| / min|λ| over non-zero eigenvalues
    (None when every eigenvalue is zero).
    """

    contract: ClassVar[Optional[str]] = "eigen_result"

    eigenvalues: tuple[ComplexNumber, ...]
    eigenvectors: tuple[ComplexVector, ...]
    is_hermitian: bool
    is_unitary: bool
    condition_number: Optional[float] = Field(None, ge=1.0)
    method: EigenMethod
    iterations: int = Field(..., ge=0)
    converged: bool

    @model_validator(mode="after")
    def validate_dimensions(self) -> "EigenResult":
        n = len(self.eigenvalues)
        if n == 0:
            raise DimensionMismatchError("EigenResult requires at least one eigenvalue")
        if len(self.eigenvectors) != n:
            raise DimensionMismatchError(
                f"{n} eigenvalues but {len(self.eigenvectors)} eigenvectors"
            )
        for k, vector in enumerate(self.eigenvectors):
            if vector.size != n:
                raise DimensionMismatchError(
                    f"Eigenvector {k} has size {vector.size}, expected {n}"
                )
        return self

    @property
    def dimension(self) -> int:
        return len(self.eigenvalues)


class Diagonalization(ResultModel):
    """A = P D P⁻¹ with D diagonal (eigenvalues) and P's columns the eigenvectors."""

    p: DenseComplexMatrix
    d: DenseComplexMatrix
    p_inverse: DenseComplexMatrix


# =============================================================================
# EVOLUTION RESULTS
# =============================================================================


class Propagator(ResultModel):
    """U(t) = exp(-iHt); is_unitary is diagnostic only."""

    contract: ClassVar[Optional[str]] = "propagator"

    matrix: DenseComplexMatrix
    time: float
    is_unitary: bool


class EvolutionResult(ResultModel):
    """
    State after evolving to `time`, with total probability.

    energy is <ψ|H|ψ> / <ψ|ψ>; its imaginary part vanishes for Hermitian H.
    """

    contract: ClassVar[Optional[str]] = "evolution_result"

    final_state: ComplexVector
    time: float
    steps: int = Field(..., ge=0)
    energy: ComplexNumber
    probability: float = Field(..., ge=0)
    method: EvolutionMethod


class EnergyEigenbasis(ResultModel):
    """Energies (ascending) with states[k] the eigenstate of energies[k]."""

    energies: tuple[float, ...]
    states: tuple[ComplexVector, ...]


class GroundState(ResultModel):
    energy: float
    state: ComplexVector


class EnergyConservationReport(ResultModel):
    """
    max_deviation = max over `times` of |<H>(t) - <H>(0)|.

    An empty `times` sequence is trivially conserved.
    """

    contract: ClassVar[Optional[str]] = "energy_conservation"

    conserved: bool
    max_deviation: float = Field(..., ge=0)
    initial_energy: float
    times: tuple[float, ...]
