"""
Integrity — Canonical Encoding & SHA-256 Fingerprints

Numerical values and results are reduced to a canonical JSON-compatible
payload (BigNumbers as exact decimal strings, complex numbers as
{"real", "imag"} string pairs, matrices as nested row lists) and hashed with
SHA-256 over compact, key-sorted JSON.

CRITICAL INVARIANTS:
1. Equal values always produce equal payloads and equal hashes
2. Hashing never mutates or caches anything on the hashed value
"""

import hashlib
import json
from enum import Enum
from typing import Any

from quantum_core.core.math.big_number import BigNumber
from quantum_core.core.math.complex_matrix import ComplexVector, DenseComplexMatrix
from quantum_core.core.math.complex_number import ComplexNumber


def canonical_payload(value: Any) -> Any:
    """
    Convert a value tree to a JSON-compatible canonical form.

    Objects exposing `to_payload()` (result models) delegate to it.

    Examples:
        >>> canonical_payload(ComplexNumber(1, "-0.5"))
        {'real': '1', 'imag': '-0.5'}
    """
    if isinstance(value, BigNumber):
        return value.to_string()
    if isinstance(value, ComplexNumber):
        return {"real": value.real.to_string(), "imag": value.imag.to_string()}
    if isinstance(value, ComplexVector):
        return [canonical_payload(e) for e in value]
    if isinstance(value, DenseComplexMatrix):
        return [[canonical_payload(e) for e in row] for row in value.entries]
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_payload"):
        return value.to_payload()
    if isinstance(value, dict):
        return {str(k): canonical_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonical_payload(v) for v in value]
    if isinstance(value, complex):
        return {"real": repr(value.real), "imag": repr(value.imag)}
    return value


def integrity_hash(value: Any) -> str:
    """
    SHA-256 hex digest of the canonical payload.

    Examples:
        >>> integrity_hash(BigNumber("1.0")) == integrity_hash(BigNumber(1))
        True
    """
    encoded = json.dumps(canonical_payload(value), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()
