"""
JSON Schema Contract Validators

Validates result payloads (ResultModel.to_payload()) against the JSON Schema
contracts shipped in contracts/schema/ using jsonschema (Draft 2020-12).

Schemas:
- eigen_result.json
- evolution_result.json
- propagator.json
- energy_conservation.json
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

logger = logging.getLogger("QuantumCore.Contracts")


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loads and meta-validates JSON Schema files from contracts/schema/.

    Loaded schemas are cached per loader instance.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a schema by name.

        Args:
            schema_name: File name without extension (e.g. 'eigen_result')

        Returns:
            Parsed schema

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid Draft 2020-12 schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        logger.debug("Loaded schema %s", schema_name)
        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Validates payloads against one named schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: If data does not satisfy the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class EigenResultValidator(ContractValidator):
    def __init__(self):
        super().__init__("eigen_result")


class EvolutionResultValidator(ContractValidator):
    def __init__(self):
        super().__init__("evolution_result")


class PropagatorValidator(ContractValidator):
    def __init__(self):
        super().__init__("propagator")


class EnergyConservationValidator(ContractValidator):
    def __init__(self):
        super().__init__("energy_conservation")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_eigen_result(data: Dict[str, Any]) -> None:
    """
    Validate an EigenResult payload.

    Raises:
        ValidationError: If data does not satisfy eigen_result.json
    """
    EigenResultValidator().validate(data)


def validate_evolution_result(data: Dict[str, Any]) -> None:
    """
    Validate an EvolutionResult payload.

    Raises:
        ValidationError: If data does not satisfy evolution_result.json
    """
    EvolutionResultValidator().validate(data)


def validate_propagator(data: Dict[str, Any]) -> None:
    """
    Validate a Propagator payload.

    Raises:
        ValidationError: If data does not satisfy propagator.json
    """
    PropagatorValidator().validate(data)


def validate_energy_conservation(data: Dict[str, Any]) -> None:
    """
    Validate an EnergyConservationReport payload.

    Raises:
        ValidationError: If data does not satisfy energy_conservation.json
    """
    EnergyConservationValidator().validate(data)


__all__ = [
    "ValidationError",
    "SchemaLoader",
    "ContractValidator",
    "EigenResultValidator",
    "EvolutionResultValidator",
    "PropagatorValidator",
    "EnergyConservationValidator",
    "validate_eigen_result",
    "validate_evolution_result",
    "validate_propagator",
    "validate_energy_conservation",
]
