"""
Contract Validation Module

JSON Schema validation of quantum_core result payloads.
"""

from .validators import (
    ContractValidator,
    EigenResultValidator,
    EnergyConservationValidator,
    EvolutionResultValidator,
    PropagatorValidator,
    SchemaLoader,
    validate_eigen_result,
    validate_energy_conservation,
    validate_evolution_result,
    validate_propagator,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EigenResultValidator",
    "EvolutionResultValidator",
    "PropagatorValidator",
    "EnergyConservationValidator",
    # Functions
    "validate_eigen_result",
    "validate_evolution_result",
    "validate_propagator",
    "validate_energy_conservation",
]
