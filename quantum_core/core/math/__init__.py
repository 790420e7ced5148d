"""
Core math modules for quantum_core

Arbitrary-precision scalars, complex arithmetic and dense complex linear algebra.
"""

# Numerical Safeguards
from quantum_core.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_NORM,
    EPS_PIVOT,
    EPS_STRUCTURE,
    NATIVE_MAGNITUDE_LIMIT,
    NATIVE_SIGNIFICANT_DIGITS,
    # Exceptions
    DimensionMismatchError,
    DivisionByZeroError,
    DomainError,
    SingularMatrixError,
    # Comparisons
    compare_with_tolerance,
    is_close,
    is_valid_float,
    is_zero,
    # Validation
    require_same_length,
    require_square,
    validate_finite,
    validate_positive_int,
)

# Precision
from quantum_core.core.math.precision import (
    DEFAULT_PRECISION,
    Precision,
    RoundingMode,
    get_precision,
    precision_context,
    resolve_precision,
    set_precision,
)

# BigNumber
from quantum_core.core.math.big_number import SQRT_MAX_ITERATIONS, BigNumber

# Complex numbers
from quantum_core.core.math.complex_number import (
    APPROXIMATE_OPERATIONS,
    EXACT_OPERATIONS,
    TRANSCENDENTAL_DIGITS,
    Complex,
    ComplexNumber,
    average,
    complex_product,
    complex_sum,
    cross,
    distance,
    distance_squared,
    dot,
    lerp,
    rotate,
    rotation,
)

# Dense complex matrices
from quantum_core.core.math.complex_matrix import (
    ComplexVector,
    DenseComplexMatrix,
    LUDecomposition,
    Matrix,
    QRDecomposition,
    Vector,
    kronecker,
    outer_product,
    solve,
)

# Jacobi rotation
from quantum_core.core.math.jacobi import JacobiDecomposition, jacobi_eigen

# Integrity
from quantum_core.core.math.integrity import canonical_payload, integrity_hash

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_CALC",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_NORM",
    "EPS_PIVOT",
    "EPS_STRUCTURE",
    "NATIVE_MAGNITUDE_LIMIT",
    "NATIVE_SIGNIFICANT_DIGITS",
    # Numerical Safeguards — Exceptions
    "DimensionMismatchError",
    "DivisionByZeroError",
    "DomainError",
    "SingularMatrixError",
    # Numerical Safeguards — Comparisons
    "compare_with_tolerance",
    "is_close",
    "is_valid_float",
    "is_zero",
    # Numerical Safeguards — Validation
    "require_same_length",
    "require_square",
    "validate_finite",
    "validate_positive_int",
    # Precision
    "DEFAULT_PRECISION",
    "Precision",
    "RoundingMode",
    "get_precision",
    "precision_context",
    "resolve_precision",
    "set_precision",
    # BigNumber
    "SQRT_MAX_ITERATIONS",
    "BigNumber",
    # Complex numbers
    "APPROXIMATE_OPERATIONS",
    "EXACT_OPERATIONS",
    "TRANSCENDENTAL_DIGITS",
    "Complex",
    "ComplexNumber",
    "average",
    "complex_product",
    "complex_sum",
    "cross",
    "distance",
    "distance_squared",
    "dot",
    "lerp",
    "rotate",
    "rotation",
    # Dense complex matrices
    "ComplexVector",
    "DenseComplexMatrix",
    "LUDecomposition",
    "Matrix",
    "QRDecomposition",
    "Vector",
    "kronecker",
    "outer_product",
    "solve",
    # Jacobi rotation
    "JacobiDecomposition",
    "jacobi_eigen",
    # Integrity
    "canonical_payload",
    "integrity_hash",
]
