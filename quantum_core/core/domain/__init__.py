"""
Domain models: solver configuration and immutable result objects.
"""

from quantum_core.core.domain.configs import (
    EigenMethod,
    EvolutionConfig,
    EvolutionMethod,
    SolverConfig,
)
from quantum_core.core.domain.results import (
    Diagonalization,
    EigenPair,
    EigenResult,
    EnergyConservationReport,
    EnergyEigenbasis,
    EvolutionResult,
    GroundState,
    Propagator,
    ResultModel,
)

__all__ = [
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
    "ResultModel",
]
