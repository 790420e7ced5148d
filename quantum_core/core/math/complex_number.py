"""
ComplexNumber — Exact-Algebraic, Approximate-Transcendental Complex Arithmetic

Components are BigNumbers, so +, -, ×, conjugation, |z|² and integer powers
are exact. Division is exact up to BigNumber.divide (rounded to the active
Precision). Magnitude, phase, polar form and every transcendental function go
through native double precision (cmath) and are accurate to about
TRANSCENDENTAL_DIGITS significant digits.

CRITICAL INVARIANTS:
1. Instances are immutable; operations return new values
2. Division by an exact zero raises DivisionByZeroError
3. log(0) and non-positive root orders raise DomainError
"""

import cmath
import math
from typing import Final, Iterable, Optional, Union

from quantum_core.core.math.big_number import BigNumber, BigNumberLike
from quantum_core.core.math.numerical_safeguards import (
    DivisionByZeroError,
    DomainError,
    validate_finite,
    validate_positive_int,
)
from quantum_core.core.math.precision import Precision, RoundingMode

ComplexLike = Union["ComplexNumber", BigNumber, int, float, str, complex]

# =============================================================================
# PRECISION CAPABILITIES
# =============================================================================

EXACT_OPERATIONS: Final[frozenset[str]] = frozenset(
    {"add", "subtract", "multiply", "negate", "conjugate", "abs_squared", "pow"}
)

APPROXIMATE_OPERATIONS: Final[frozenset[str]] = frozenset(
    {
        "magnitude",
        "phase",
        "from_polar",
        "exp",
        "log",
        "sin",
        "cos",
        "tan",
        "sinh",
        "cosh",
        "tanh",
        "sqrt",
        "nth_root",
        "all_nth_roots",
    }
)

# Significant digits carried by the approximate operations
TRANSCENDENTAL_DIGITS: Final[int] = 15


class ComplexNumber:
    """
    Immutable complex number a + bi with BigNumber components.

    Examples:
        >>> str(ComplexNumber(3, 4))
        '3 + 4i'
        >>> ComplexNumber(3, 4).magnitude()
        5.0
        >>> str(ComplexNumber(1, 2).multiply(ComplexNumber(3, -1)))
        '5 + 5i'
    """

    __slots__ = ("_real", "_imag")

    def __init__(self, real: BigNumberLike = 0, imag: BigNumberLike = 0):
        object.__setattr__(self, "_real", BigNumber.coerce(real))
        object.__setattr__(self, "_imag", BigNumber.coerce(imag))

    def __setattr__(self, name, value):
        raise AttributeError("ComplexNumber is immutable")

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def coerce(cls, value: ComplexLike) -> "ComplexNumber":
        """Promote reals and builtin complex values; pass instances through."""
        if isinstance(value, ComplexNumber):
            return value
        if isinstance(value, complex):
            return cls.from_complex(value)
        return cls(value, 0)

    @classmethod
    def from_complex(cls, value: complex) -> "ComplexNumber":
        validate_finite(value.real, "Real part")
        validate_finite(value.imag, "Imaginary part")
        return cls(value.real, value.imag)

    @classmethod
    def from_polar(cls, magnitude: float, phase: float) -> "ComplexNumber":
        """r·e^{iθ} (approximate)."""
        return cls.from_complex(cmath.rect(magnitude, phase))

    @classmethod
    def from_real(cls, value: BigNumberLike) -> "ComplexNumber":
        return cls(value, 0)

    @classmethod
    def from_imaginary(cls, value: BigNumberLike) -> "ComplexNumber":
        return cls(0, value)

    @classmethod
    def zero(cls) -> "ComplexNumber":
        return cls(0, 0)

    @classmethod
    def one(cls) -> "ComplexNumber":
        return cls(1, 0)

    @classmethod
    def i(cls) -> "ComplexNumber":
        return cls(0, 1)

    # -------------------------------------------------------------------------
    # Accessors & predicates
    # -------------------------------------------------------------------------

    @property
    def real(self) -> BigNumber:
        return self._real

    @property
    def imag(self) -> BigNumber:
        return self._imag

    def is_zero(self) -> bool:
        return self._real.is_zero() and self._imag.is_zero()

    def is_real(self) -> bool:
        return self._imag.is_zero()

    def is_imaginary(self) -> bool:
        return self._real.is_zero() and not self._imag.is_zero()

    # -------------------------------------------------------------------------
    # Exact algebra
    # -------------------------------------------------------------------------

    def add(self, other: ComplexLike) -> "ComplexNumber":
        other = ComplexNumber.coerce(other)
        return ComplexNumber(self._real.add(other._real), self._imag.add(other._imag))

    def subtract(self, other: ComplexLike) -> "ComplexNumber":
        other = ComplexNumber.coerce(other)
        return ComplexNumber(self._real.subtract(other._real), self._imag.subtract(other._imag))

    def multiply(self, other: ComplexLike) -> "ComplexNumber":
        """(a + bi)(c + di) = (ac - bd) + (ad + bc)i."""
        other = ComplexNumber.coerce(other)
        a, b, c, d = self._real, self._imag, other._real, other._imag
        return ComplexNumber(
            a.multiply(c).subtract(b.multiply(d)),
            a.multiply(d).add(b.multiply(c)),
        )

    def negate(self) -> "ComplexNumber":
        return ComplexNumber(self._real.negate(), self._imag.negate())

    def conjugate(self) -> "ComplexNumber":
        return ComplexNumber(self._real, self._imag.negate())

    def abs_squared(self) -> BigNumber:
        """|z|² = a² + b² (exact)."""
        return self._real.multiply(self._real).add(self._imag.multiply(self._imag))

    def divide(self, other: ComplexLike, precision: Optional[Precision] = None) -> "ComplexNumber":
        """
        (a + bi) / (c + di) = ((ac + bd) + (bc - ad)i) / (c² + d²)

        Raises:
            DivisionByZeroError: If other is zero
        """
        other = ComplexNumber.coerce(other)
        if other.is_zero():
            raise DivisionByZeroError(f"Division by zero: ({self}) / 0")

        a, b, c, d = self._real, self._imag, other._real, other._imag

        if d.is_zero():
            return ComplexNumber(a.divide(c, precision), b.divide(c, precision))

        denominator = other.abs_squared()
        return ComplexNumber(
            a.multiply(c).add(b.multiply(d)).divide(denominator, precision),
            b.multiply(c).subtract(a.multiply(d)).divide(denominator, precision),
        )

    def reciprocal(self, precision: Optional[Precision] = None) -> "ComplexNumber":
        return ComplexNumber.one().divide(self, precision)

    def pow(self, exponent: int, precision: Optional[Precision] = None) -> "ComplexNumber":
        """
        Integer power by binary exponentiation (exact for n >= 0).

        Raises:
            DomainError: If exponent is not an integer
            DivisionByZeroError: For 0 raised to a negative power
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise DomainError(f"Complex exponent must be an integer, got {exponent!r}")

        if exponent == 0:
            return ComplexNumber.one()
        if self.is_zero():
            if exponent < 0:
                raise DivisionByZeroError("Zero cannot be raised to a negative power")
            return ComplexNumber.zero()

        result = ComplexNumber.one()
        base = self
        remaining = abs(exponent)

        while remaining > 0:
            if remaining % 2 == 1:
                result = result.multiply(base)
            remaining //= 2
            if remaining:
                base = base.multiply(base)

        return result.reciprocal(precision) if exponent < 0 else result

    # -------------------------------------------------------------------------
    # Approximate (double precision)
    # -------------------------------------------------------------------------

    def magnitude(self) -> float:
        return math.hypot(self._real.to_number(), self._imag.to_number())

    def phase(self) -> float:
        """Argument in (-π, π]."""
        return math.atan2(self._imag.to_number(), self._real.to_number())

    def exp(self) -> "ComplexNumber":
        return ComplexNumber.from_complex(cmath.exp(complex(self)))

    def log(self) -> "ComplexNumber":
        """
        Principal logarithm ln|z| + i·arg(z).

        Raises:
            DomainError: If self is zero
        """
        if self.is_zero():
            raise DomainError("Logarithm of zero is undefined")
        return ComplexNumber(math.log(self.magnitude()), self.phase())

    def sin(self) -> "ComplexNumber":
        return ComplexNumber.from_complex(cmath.sin(complex(self)))

    def cos(self) -> "ComplexNumber":
        return ComplexNumber.from_complex(cmath.cos(complex(self)))

    def tan(self) -> "ComplexNumber":
        return ComplexNumber.from_complex(cmath.tan(complex(self)))

    def sinh(self) -> "ComplexNumber":
        return ComplexNumber.from_complex(cmath.sinh(complex(self)))

    def cosh(self) -> "ComplexNumber":
        return ComplexNumber.from_complex(cmath.cosh(complex(self)))

    def tanh(self) -> "ComplexNumber":
        return ComplexNumber.from_complex(cmath.tanh(complex(self)))

    def sqrt(self) -> "ComplexNumber":
        """Principal square root."""
        if self.is_zero():
            return ComplexNumber.zero()
        return ComplexNumber.from_complex(cmath.sqrt(complex(self)))

    def nth_root(self, n: int) -> "ComplexNumber":
        """
        Principal n-th root |z|^(1/n) · e^{i·arg(z)/n}.

        Raises:
            DomainError: If n is not a positive integer
        """
        validate_positive_int(n, "Root order")
        if self.is_zero():
            return ComplexNumber.zero()
        return ComplexNumber.from_polar(self.magnitude() ** (1.0 / n), self.phase() / n)

    def all_nth_roots(self, n: int) -> list["ComplexNumber"]:
        """
        All n complex n-th roots, principal root first.

        Raises:
            DomainError: If n is not a positive integer
        """
        validate_positive_int(n, "Root order")
        if self.is_zero():
            return [ComplexNumber.zero() for _ in range(n)]

        radius = self.magnitude() ** (1.0 / n)
        base = self.phase()
        return [
            ComplexNumber.from_polar(radius, (base + 2.0 * math.pi * k) / n) for k in range(n)
        ]

    # -------------------------------------------------------------------------
    # Comparison, rounding, conversion
    # -------------------------------------------------------------------------

    def equals(self, other: ComplexLike, epsilon: Optional[BigNumberLike] = None) -> bool:
        """Exact component equality, or both components within epsilon."""
        other = ComplexNumber.coerce(other)
        return self._real.equals(other._real, epsilon) and self._imag.equals(other._imag, epsilon)

    def __eq__(self, other) -> bool:
        if isinstance(other, (ComplexNumber, BigNumber, int)) and not isinstance(other, bool):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        if self._imag.is_zero():
            return hash(self._real)
        return hash((self._real, self._imag))

    def round(
        self, decimal_places: int = 0, rounding_mode: Optional[RoundingMode] = None
    ) -> "ComplexNumber":
        return ComplexNumber(
            self._real.round(decimal_places, rounding_mode),
            self._imag.round(decimal_places, rounding_mode),
        )

    def to_string(self) -> str:
        real, imag = self._real, self._imag

        if imag.is_zero():
            return real.to_string()

        if imag.compare(1) == 0:
            imag_text = "i"
        elif imag.compare(-1) == 0:
            imag_text = "-i"
        else:
            imag_text = f"{imag}i"

        if real.is_zero():
            return imag_text
        if imag.is_negative():
            return f"{real} - {imag_text[1:]}"
        return f"{real} + {imag_text}"

    def to_polar_string(self) -> str:
        return f"{self.magnitude()} * e^({self.phase():.6f}i)"

    def to_tuple(self) -> tuple[float, float]:
        return (self._real.to_number(), self._imag.to_number())

    def to_object(self) -> dict[str, float]:
        return {"real": self._real.to_number(), "imag": self._imag.to_number()}

    def __complex__(self) -> complex:
        return complex(self._real.to_number(), self._imag.to_number())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"ComplexNumber('{self._real}', '{self._imag}')"

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return ComplexNumber.coerce(other).add(self)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        return ComplexNumber.coerce(other).subtract(self)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return ComplexNumber.coerce(other).multiply(self)

    def __truediv__(self, other):
        return self.divide(other)

    def __rtruediv__(self, other):
        return ComplexNumber.coerce(other).divide(self)

    def __neg__(self):
        return self.negate()

    def __pow__(self, exponent):
        return self.pow(exponent)


Complex = ComplexNumber


# =============================================================================
# HELPERS
# =============================================================================


def dot(a: ComplexNumber, b: ComplexNumber) -> BigNumber:
    """Dot product treating a and b as 2-D vectors: Re(a)Re(b) + Im(a)Im(b)."""
    return a.real.multiply(b.real).add(a.imag.multiply(b.imag))


def cross(a: ComplexNumber, b: ComplexNumber) -> BigNumber:
    """z-component of the 3-D cross product: Re(a)Im(b) - Im(a)Re(b)."""
    return a.real.multiply(b.imag).subtract(a.imag.multiply(b.real))


def distance_squared(a: ComplexNumber, b: ComplexNumber) -> BigNumber:
    return a.subtract(b).abs_squared()


def distance(a: ComplexNumber, b: ComplexNumber, precision: Optional[Precision] = None) -> BigNumber:
    return distance_squared(a, b).sqrt(precision)


def lerp(a: ComplexNumber, b: ComplexNumber, t: BigNumberLike) -> ComplexNumber:
    """a + (b - a)·t."""
    return a.add(b.subtract(a).multiply(ComplexNumber(t)))


def complex_sum(values: Iterable[ComplexNumber]) -> ComplexNumber:
    total = ComplexNumber.zero()
    for value in values:
        total = total.add(value)
    return total


def complex_product(values: Iterable[ComplexNumber]) -> ComplexNumber:
    total = ComplexNumber.one()
    for value in values:
        total = total.multiply(value)
    return total


def average(values: Iterable[ComplexNumber], precision: Optional[Precision] = None) -> ComplexNumber:
    """Arithmetic mean (zero for an empty input)."""
    values = list(values)
    if not values:
        return ComplexNumber.zero()
    return complex_sum(values).divide(len(values), precision)


def rotation(angle: float) -> ComplexNumber:
    """Unit complex number e^{i·angle}."""
    return ComplexNumber(math.cos(angle), math.sin(angle))


def rotate(z: ComplexNumber, angle: float) -> ComplexNumber:
    return z.multiply(rotation(angle))
