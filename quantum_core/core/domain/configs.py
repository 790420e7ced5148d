"""
Solver Configuration — EigenSolver & TimeEvolution Settings

Immutable Pydantic models passed explicitly to solver constructors.
Invalid values (non-positive tolerances, steps, caps) are rejected by
pydantic at construction with a ValidationError.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class EigenMethod(str, Enum):
    """Eigenvalue algorithm selected by EigenSolver.solve()."""

    POWER = "power"
    QR = "qr"
    JACOBI = "jacobi"
    RAYLEIGH = "rayleigh"


class EvolutionMethod(str, Enum):
    """Time-stepping scheme used by TimeEvolution.evolve()."""

    EXACT = "exact"
    EULER = "euler"
    RK4 = "rk4"
    CRANK_NICOLSON = "crank-nicolson"


# =============================================================================
# CONFIG MODELS
# =============================================================================


class SolverConfig(BaseModel):
    """
    EigenSolver settings.

    `seed` drives every random start vector so repeated runs are identical.
    Iterates are rounded to `working_decimal_places` to bound digit growth.
    """

    max_iterations: int = Field(1000, gt=0, description="Iteration cap per algorithm")
    tolerance: float = Field(1e-10, gt=0, description="Convergence tolerance")
    method: EigenMethod = Field(EigenMethod.QR, description="Algorithm used by solve()")
    seed: int = Field(0, ge=0, description="Seed for random start vectors")
    working_decimal_places: int = Field(
        24, ge=4, le=200, description="Decimal places kept on iterates"
    )

    model_config = {"frozen": True}


class EvolutionConfig(BaseModel):
    """TimeEvolution settings (ħ = 1)."""

    method: EvolutionMethod = Field(EvolutionMethod.EXACT, description="Evolution scheme")
    time_step: float = Field(0.01, gt=0, description="Step size for stepping methods")
    tolerance: float = Field(1e-10, gt=0, description="Energy conservation tolerance")
    max_steps: int = Field(10_000, gt=0, description="Step cap for stepping methods")
    state_decimal_places: int = Field(
        24, ge=4, le=200, description="Decimal places kept on the state each step"
    )

    model_config = {"frozen": True}
