"""
BigNumber — Arbitrary-Precision Decimal Arithmetic

Canonical representation:
    sign ∈ {+1, -1}
    digits: little-endian tuple of decimal digits (digits[0] is least significant)
    decimal_places: how many of those digits sit right of the decimal point

    value = sign × Σ digits[k] × 10^(k - decimal_places)

CRITICAL INVARIANTS:
1. No redundant most-significant zeros, no redundant trailing fractional zeros
2. Zero is always digits=(0,), decimal_places=0, sign=+1
3. Values are immutable; every operation returns a new instance
4. +, -, × are exact; ÷, sqrt and nth roots are rounded to Precision.digits
   decimal places using Precision.rounding_mode

PRECISION BOUNDARY:
    With Precision.native_division enabled (default), a division whose operands
    both carry at most 15 significant digits (and magnitude < 1e15) is computed
    in native double precision and the quotient keeps at most 15 significant
    digits. Disable native_division for exact long division to `digits` places.
"""

import logging
import math
import re
from functools import total_ordering
from typing import Final, Iterable, Optional, Union

from quantum_core.core.math.numerical_safeguards import (
    NATIVE_MAGNITUDE_LIMIT,
    NATIVE_SIGNIFICANT_DIGITS,
    DivisionByZeroError,
    DomainError,
    validate_finite,
    validate_positive_int,
)
from quantum_core.core.math.precision import Precision, RoundingMode, resolve_precision

logger = logging.getLogger("QuantumCore.BigNumber")

BigNumberLike = Union["BigNumber", int, float, str]

# =============================================================================
# CONSTANTS
# =============================================================================

# Newton-Raphson iteration cap for sqrt
SQRT_MAX_ITERATIONS: Final[int] = 50

_LITERAL_PATTERN: Final = re.compile(
    r"^(?P<sign>[+-])?(?P<int>\d*)(?:\.(?P<frac>\d*))?(?:[eE](?P<exp>[+-]?\d+))?$"
)

_PI_DIGITS: Final[str] = (
    "3.14159265358979323846264338327950288419716939937510"
    "58209749445923078164062862089986280348253421170679"
    "82148086513282306647093844609550582231725359408128"
)

_E_DIGITS: Final[str] = (
    "2.71828182845904523536028747135266249775724709369995"
    "95749669676277240766303535475945713821785251664274"
    "27466391932003059921817413596629043572900334295260"
)


# =============================================================================
# DIGIT-LEVEL HELPERS
# =============================================================================


def _strip_high_zeros(digits: list[int]) -> list[int]:
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
    return digits


def _compare_magnitudes(x: list[int], y: list[int]) -> int:
    """Compare two aligned little-endian digit lists."""
    x = _strip_high_zeros(list(x))
    y = _strip_high_zeros(list(y))

    if len(x) != len(y):
        return 1 if len(x) > len(y) else -1

    for k in range(len(x) - 1, -1, -1):
        if x[k] != y[k]:
            return 1 if x[k] > y[k] else -1

    return 0


def _add_magnitudes(x: list[int], y: list[int]) -> list[int]:
    result = []
    carry = 0

    for k in range(max(len(x), len(y))):
        total = (x[k] if k < len(x) else 0) + (y[k] if k < len(y) else 0) + carry
        result.append(total % 10)
        carry = total // 10

    if carry:
        result.append(carry)

    return result


def _subtract_magnitudes(x: list[int], y: list[int]) -> list[int]:
    """x - y for aligned magnitudes with x >= y."""
    result = []
    borrow = 0

    for k in range(len(x)):
        diff = x[k] - (y[k] if k < len(y) else 0) - borrow
        if diff < 0:
            diff += 10
            borrow = 1
        else:
            borrow = 0
        result.append(diff)

    return result


def _multiply_magnitudes(x: tuple[int, ...], y: tuple[int, ...]) -> list[int]:
    """Schoolbook digit convolution followed by carry propagation."""
    result = [0] * (len(x) + len(y))

    for i, xi in enumerate(x):
        if xi == 0:
            continue
        for j, yj in enumerate(y):
            result[i + j] += xi * yj

    carry = 0
    for k in range(len(result)):
        total = result[k] + carry
        result[k] = total % 10
        carry = total // 10

    while carry:
        result.append(carry % 10)
        carry //= 10

    return result


def _long_divide(dividend: str, divisor: int) -> tuple[str, int]:
    """
    Integer long division, one dividend digit at a time.

    Returns:
        (quotient digit string, final remainder)
    """
    quotient = []
    remainder = 0

    for ch in dividend:
        remainder = remainder * 10 + int(ch)
        digit = remainder // divisor
        remainder -= digit * divisor
        quotient.append(str(digit))

    return "".join(quotient).lstrip("0") or "0", remainder


def _should_increment(
    sign: int,
    last_kept: int,
    dropped: str,
    sticky: bool,
    mode: RoundingMode,
) -> bool:
    """Decide whether dropping `dropped` (plus a sticky remainder) rounds the magnitude up."""
    if not sticky and not dropped.strip("0"):
        return False

    first = int(dropped[0]) if dropped else 0
    beyond_half = sticky or bool(dropped[1:].strip("0"))

    if mode is RoundingMode.ROUND_UP:
        return True
    if mode is RoundingMode.ROUND_DOWN:
        return False
    if mode is RoundingMode.ROUND_CEILING:
        return sign > 0
    if mode is RoundingMode.ROUND_FLOOR:
        return sign < 0
    if mode is RoundingMode.ROUND_HALF_UP:
        return first >= 5
    if mode is RoundingMode.ROUND_HALF_DOWN:
        return first > 5 or (first == 5 and beyond_half)

    # ROUND_HALF_EVEN
    return first > 5 or (first == 5 and (beyond_half or last_kept % 2 == 1))


# =============================================================================
# BIGNUMBER
# =============================================================================


@total_ordering
class BigNumber:
    """
    Immutable arbitrary-precision decimal number.

    Accepts str (decimal or scientific notation), int, float (through its
    shortest round-trip repr) or another BigNumber. The comparison operators
    accept BigNumber and int only; floats and strings go through compare().

    Examples:
        >>> str(BigNumber("1.50") + BigNumber("2.25"))
        '3.75'
        >>> str(BigNumber("1e-3") * 4)
        '0.004'
        >>> BigNumber("-0").is_negative()
        False
    """

    __slots__ = ("_sign", "_digits", "_places")

    def __init__(self, value: BigNumberLike = 0):
        if isinstance(value, BigNumber):
            sign, digits, places = value._sign, value._digits, value._places
        else:
            sign, digits, places = BigNumber._parse(value)

        object.__setattr__(self, "_sign", sign)
        object.__setattr__(self, "_digits", digits)
        object.__setattr__(self, "_places", places)

    def __setattr__(self, name, value):
        raise AttributeError("BigNumber is immutable")

    def __delattr__(self, name):
        raise AttributeError("BigNumber is immutable")

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse(value: Union[int, float, str]) -> tuple[int, tuple[int, ...], int]:
        if isinstance(value, bool):
            value = int(value)

        if isinstance(value, int):
            text = str(value)
        elif isinstance(value, float):
            validate_finite(value, "BigNumber literal")
            text = repr(value)
        elif isinstance(value, str):
            text = value.strip().replace("_", "")
        else:
            raise DomainError(f"Cannot build BigNumber from {type(value).__name__}")

        match = _LITERAL_PATTERN.match(text)
        if match is None or not (match.group("int") or match.group("frac")):
            raise DomainError(f"Invalid numeric literal: {value!r}")

        integer_part = match.group("int") or ""
        fraction_part = match.group("frac") or ""
        exponent = int(match.group("exp") or 0)

        coefficient = (integer_part + fraction_part) or "0"
        places = len(fraction_part) - exponent
        if places < 0:
            coefficient += "0" * (-places)
            places = 0

        sign = -1 if match.group("sign") == "-" else 1
        built = BigNumber._from_digits(sign, [int(c) for c in reversed(coefficient)], places)
        return built._sign, built._digits, built._places

    @classmethod
    def _from_digits(cls, sign: int, digits: list[int], places: int) -> "BigNumber":
        """Canonicalize raw little-endian digits into a new instance."""
        digits = _strip_high_zeros(list(digits) or [0])

        strip = 0
        while strip < places and strip < len(digits) - 1 and digits[strip] == 0:
            strip += 1
        if strip:
            digits = digits[strip:]
            places -= strip

        if digits == [0]:
            sign, places = 1, 0

        instance = object.__new__(cls)
        object.__setattr__(instance, "_sign", sign)
        object.__setattr__(instance, "_digits", tuple(digits))
        object.__setattr__(instance, "_places", places)
        return instance

    @classmethod
    def _from_coefficient(cls, sign: int, coefficient: str, places: int) -> "BigNumber":
        return cls._from_digits(sign, [int(c) for c in reversed(coefficient)], places)

    @staticmethod
    def coerce(value: BigNumberLike) -> "BigNumber":
        """Return `value` as a BigNumber without copying existing instances."""
        return value if isinstance(value, BigNumber) else BigNumber(value)

    @classmethod
    def zero(cls) -> "BigNumber":
        return cls(0)

    @classmethod
    def one(cls) -> "BigNumber":
        return cls(1)

    @classmethod
    def pi(cls, places: int = 50) -> "BigNumber":
        """π truncated to `places` decimal places (tabled up to 150)."""
        if not 0 <= places <= len(_PI_DIGITS) - 2:
            raise DomainError(f"pi is tabled to {len(_PI_DIGITS) - 2} places, got {places}")
        return cls(_PI_DIGITS[: places + 2])

    @classmethod
    def e(cls, places: int = 50) -> "BigNumber":
        """Euler's number truncated to `places` decimal places (tabled up to 150)."""
        if not 0 <= places <= len(_E_DIGITS) - 2:
            raise DomainError(f"e is tabled to {len(_E_DIGITS) - 2} places, got {places}")
        return cls(_E_DIGITS[: places + 2])

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        return self._sign

    @property
    def digits(self) -> tuple[int, ...]:
        return self._digits

    @property
    def decimal_places(self) -> int:
        return self._places

    def _coefficient(self) -> str:
        """Most-significant-first digit string of the magnitude."""
        return "".join(str(d) for d in reversed(self._digits))

    def significant_digits(self) -> int:
        return 0 if self.is_zero() else len(self._digits)

    def to_string(self) -> str:
        coefficient = self._coefficient()
        prefix = "-" if self._sign < 0 else ""

        if self._places == 0:
            return prefix + coefficient

        padded = coefficient.rjust(self._places + 1, "0")
        split = len(padded) - self._places
        return f"{prefix}{padded[:split]}.{padded[split:]}"

    def to_number(self) -> float:
        """Nearest double (may lose precision or overflow to inf)."""
        return float(self.to_string())

    def to_int(self) -> int:
        """Integer part, truncated toward zero."""
        return int(self.truncate().to_string())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigNumber('{self.to_string()}')"

    def __float__(self) -> float:
        return self.to_number()

    def __int__(self) -> int:
        return self.to_int()

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -------------------------------------------------------------------------
    # Predicates & comparison
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self._digits == (0,)

    def is_negative(self) -> bool:
        return self._sign < 0 and not self.is_zero()

    def is_positive(self) -> bool:
        return self._sign > 0 and not self.is_zero()

    def is_integer(self) -> bool:
        return self._places == 0

    def _aligned(self, other: "BigNumber") -> tuple[list[int], list[int], int]:
        places = max(self._places, other._places)
        x = [0] * (places - self._places) + list(self._digits)
        y = [0] * (places - other._places) + list(other._digits)
        return x, y, places

    def compare(self, other: BigNumberLike) -> int:
        """
        Three-way comparison.

        Returns:
            -1 if self < other, 0 if equal, 1 if self > other
        """
        other = BigNumber.coerce(other)

        if self._sign != other._sign:
            return 1 if self._sign > 0 else -1

        x, y, _ = self._aligned(other)
        return _compare_magnitudes(x, y) * self._sign

    def equals(self, other: BigNumberLike, epsilon: Optional[BigNumberLike] = None) -> bool:
        """Exact equality, or |self - other| <= epsilon when epsilon is given."""
        if epsilon is None:
            return self.compare(other) == 0
        return self.subtract(other).abs().compare(epsilon) <= 0

    def __eq__(self, other) -> bool:
        if isinstance(other, (BigNumber, int)) and not isinstance(other, bool):
            return self.compare(other) == 0
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, (BigNumber, int)) and not isinstance(other, bool):
            return self.compare(other) < 0
        return NotImplemented

    def __hash__(self) -> int:
        if self.is_integer():
            return hash(int(self))
        return hash((self._sign, self._digits, self._places))

    # -------------------------------------------------------------------------
    # Sign
    # -------------------------------------------------------------------------

    def abs(self) -> "BigNumber":
        if self._sign > 0:
            return self
        return BigNumber._from_digits(1, list(self._digits), self._places)

    def negate(self) -> "BigNumber":
        if self.is_zero():
            return self
        return BigNumber._from_digits(-self._sign, list(self._digits), self._places)

    def __neg__(self) -> "BigNumber":
        return self.negate()

    def __pos__(self) -> "BigNumber":
        return self

    def __abs__(self) -> "BigNumber":
        return self.abs()

    # -------------------------------------------------------------------------
    # Exact arithmetic
    # -------------------------------------------------------------------------

    def add(self, other: BigNumberLike) -> "BigNumber":
        other = BigNumber.coerce(other)

        if other.is_zero():
            return self
        if self.is_zero():
            return other

        if self._sign != other._sign:
            return self.subtract(other.negate())

        x, y, places = self._aligned(other)
        return BigNumber._from_digits(self._sign, _add_magnitudes(x, y), places)

    def subtract(self, other: BigNumberLike) -> "BigNumber":
        other = BigNumber.coerce(other)

        if other.is_zero():
            return self
        if self.is_zero():
            return other.negate()

        if self._sign != other._sign:
            return self.add(other.negate())

        x, y, places = self._aligned(other)
        order = _compare_magnitudes(x, y)

        if order == 0:
            return BigNumber(0)
        if order > 0:
            return BigNumber._from_digits(self._sign, _subtract_magnitudes(x, y), places)
        return BigNumber._from_digits(-self._sign, _subtract_magnitudes(y, x), places)

    def multiply(self, other: BigNumberLike) -> "BigNumber":
        other = BigNumber.coerce(other)

        if self.is_zero() or other.is_zero():
            return BigNumber(0)

        return BigNumber._from_digits(
            self._sign * other._sign,
            _multiply_magnitudes(self._digits, other._digits),
            self._places + other._places,
        )

    def __add__(self, other):
        if isinstance(other, (BigNumber, int, float, str)):
            return self.add(other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, (int, float, str)):
            return BigNumber(other).add(self)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, (BigNumber, int, float, str)):
            return self.subtract(other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, (int, float, str)):
            return BigNumber(other).subtract(self)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, (BigNumber, int, float, str)):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float, str)):
            return BigNumber(other).multiply(self)
        return NotImplemented

    # -------------------------------------------------------------------------
    # Rounded arithmetic
    # -------------------------------------------------------------------------

    def divide(self, other: BigNumberLike, precision: Optional[Precision] = None) -> "BigNumber":
        """
        Quotient rounded to `precision.digits` decimal places.

        Raises:
            DivisionByZeroError: If other is zero
        """
        other = BigNumber.coerce(other)
        precision = resolve_precision(precision)

        if other.is_zero():
            raise DivisionByZeroError(f"Division by zero: {self} / 0")

        if self.is_zero():
            return BigNumber(0)

        if precision.native_division and self._fits_native() and other._fits_native():
            quotient = self.to_number() / other.to_number()
            if math.isfinite(quotient) and quotient != 0.0:
                native = BigNumber(format(quotient, f".{NATIVE_SIGNIFICANT_DIGITS}g"))
                return native.round(precision.digits, precision.rounding_mode)

        # Scale so the integer quotient carries digits + 1 (guard) decimal places
        shift = other._places - self._places + precision.digits + 1
        dividend = self._coefficient()
        divisor = int(other._coefficient())
        if shift >= 0:
            dividend += "0" * shift
        else:
            divisor *= 10 ** (-shift)

        quotient, remainder = _long_divide(dividend, divisor)

        return BigNumber._round_coefficient(
            self._sign * other._sign,
            quotient,
            precision.digits + 1,
            precision.digits,
            precision.rounding_mode,
            sticky=remainder != 0,
        )

    def _fits_native(self) -> bool:
        if self.significant_digits() > NATIVE_SIGNIFICANT_DIGITS:
            return False
        magnitude = abs(self.to_number())
        return 0.0 < magnitude < NATIVE_MAGNITUDE_LIMIT

    def __truediv__(self, other):
        if isinstance(other, (BigNumber, int, float, str)):
            return self.divide(other)
        return NotImplemented

    def __rtruediv__(self, other):
        if isinstance(other, (int, float, str)):
            return BigNumber(other).divide(self)
        return NotImplemented

    def reciprocal(self, precision: Optional[Precision] = None) -> "BigNumber":
        return BigNumber(1).divide(self, precision)

    def pow(
        self,
        exponent: Union[int, "BigNumber"],
        precision: Optional[Precision] = None,
    ) -> "BigNumber":
        """
        Integer power by binary exponentiation (negative exponents divide).

        Raises:
            DomainError: If the exponent is not an integer
            DivisionByZeroError: For 0 raised to a negative power
        """
        if isinstance(exponent, BigNumber):
            if not exponent.is_integer():
                raise DomainError(f"Exponent must be an integer, got {exponent}")
            exponent = exponent.to_int()
        elif isinstance(exponent, bool) or not isinstance(exponent, int):
            raise DomainError(f"Exponent must be an integer, got {exponent!r}")

        if exponent == 0:
            return BigNumber(1)
        if self.is_zero():
            if exponent < 0:
                raise DivisionByZeroError("Zero cannot be raised to a negative power")
            return BigNumber(0)

        result = BigNumber(1)
        base = self
        remaining = abs(exponent)

        while remaining > 0:
            if remaining % 2 == 1:
                result = result.multiply(base)
            remaining //= 2
            if remaining:
                base = base.multiply(base)

        if exponent < 0:
            return BigNumber(1).divide(result, precision)
        return result

    def __pow__(self, exponent):
        return self.pow(exponent)

    def mod(self, other: BigNumberLike, precision: Optional[Precision] = None) -> "BigNumber":
        """self - floor(self / other) * other."""
        other = BigNumber.coerce(other)
        quotient = self.divide(other, precision).floor()
        return self.subtract(quotient.multiply(other))

    def __mod__(self, other):
        if isinstance(other, (BigNumber, int, float, str)):
            return self.mod(other)
        return NotImplemented

    # -------------------------------------------------------------------------
    # Roots
    # -------------------------------------------------------------------------

    def _root_seed(self, n: int) -> "BigNumber":
        """Native floating-point estimate of the n-th root of |self|."""
        estimate = abs(self.to_number())
        if 0.0 < estimate < math.inf:
            seed = estimate ** (1.0 / n)
            if 0.0 < seed < math.inf:
                return BigNumber(seed)

        # Outside double range: 10^(order / n) from the decimal exponent
        order = len(self._digits) - 1 - self._places
        return BigNumber(f"1e{order // n}")

    def sqrt(self, precision: Optional[Precision] = None) -> "BigNumber":
        """
        Square root by Newton-Raphson, seeded from a native estimate.

        Stops when successive iterates differ by at most 10^-(digits-1), or
        after SQRT_MAX_ITERATIONS (best estimate returned).

        Raises:
            DomainError: If self is negative
        """
        if self.is_negative():
            raise DomainError(f"Cannot compute square root of negative number {self}")
        if self.is_zero():
            return BigNumber(0)

        precision = resolve_precision(precision)

        if self.is_integer():
            value = self.to_int()
            root = math.isqrt(value)
            if root * root == value:
                return BigNumber(root)

        working = precision.model_copy(update={"native_division": False})
        epsilon = BigNumber(f"1e-{precision.epsilon_exponent()}")
        guess = self._root_seed(2)

        for _ in range(SQRT_MAX_ITERATIONS):
            refined = guess.add(self.divide(guess, working)).divide(2, working)
            if refined.equals(guess, epsilon):
                guess = refined
                break
            guess = refined
        else:
            logger.debug("sqrt(%s) hit %d iterations, returning best estimate", self, SQRT_MAX_ITERATIONS)

        return guess.round(precision.digits, precision.rounding_mode)

    def root(self, n: int, precision: Optional[Precision] = None) -> "BigNumber":
        """
        Real n-th root by Newton-Raphson: x ← ((n-1)x + a/x^(n-1)) / n.

        Odd roots of negative numbers are negative; the iteration cap is
        2 × digits.

        Raises:
            DomainError: If n is not a positive integer, or n is even and self < 0
        """
        validate_positive_int(n, "Root order")

        if n == 1:
            return self
        if n == 2:
            return self.sqrt(precision)
        if self.is_negative() and n % 2 == 0:
            raise DomainError(f"Cannot compute even root ({n}) of negative number {self}")
        if self.is_zero():
            return BigNumber(0)

        precision = resolve_precision(precision)
        working = precision.model_copy(update={"native_division": False})
        epsilon = BigNumber(f"1e-{precision.epsilon_exponent()}")
        guard_places = precision.digits + 2

        magnitude = self.abs()
        guess = magnitude._root_seed(n)
        max_iterations = 2 * precision.digits

        for _ in range(max_iterations):
            refined = (
                guess.multiply(n - 1)
                .add(magnitude.divide(guess.pow(n - 1), working))
                .divide(n, working)
                .round(guard_places, RoundingMode.ROUND_HALF_EVEN)
            )
            if refined.equals(guess, epsilon):
                guess = refined
                break
            guess = refined
        else:
            logger.debug("root(%s, %d) hit %d iterations, returning best estimate", self, n, max_iterations)

        result = guess.round(precision.digits, precision.rounding_mode)
        return result.negate() if self.is_negative() else result

    # -------------------------------------------------------------------------
    # Rounding (decimal string representation)
    # -------------------------------------------------------------------------

    @classmethod
    def _round_coefficient(
        cls,
        sign: int,
        coefficient: str,
        places: int,
        target: int,
        mode: RoundingMode,
        sticky: bool = False,
    ) -> "BigNumber":
        if places <= target:
            return cls._from_coefficient(sign, coefficient, places)

        drop = places - target
        kept = coefficient[:-drop] or "0"
        dropped = coefficient[-drop:].rjust(drop, "0")

        if _should_increment(sign, int(kept[-1]), dropped, sticky, mode):
            kept = str(int(kept) + 1)

        return cls._from_coefficient(sign, kept, target)

    def round(
        self,
        decimal_places: int = 0,
        rounding_mode: Optional[RoundingMode] = None,
    ) -> "BigNumber":
        """
        Round to `decimal_places` using `rounding_mode` (default: context mode).

        Examples:
            >>> str(BigNumber("2.345").round(2))
            '2.35'
            >>> str(BigNumber("2.345").round(2, RoundingMode.ROUND_DOWN))
            '2.34'
            >>> str(BigNumber("-2.5").round(0, RoundingMode.ROUND_HALF_EVEN))
            '-2'
        """
        if decimal_places < 0:
            raise DomainError(f"decimal_places must be non-negative, got {decimal_places}")

        mode = rounding_mode if rounding_mode is not None else resolve_precision().rounding_mode
        return BigNumber._round_coefficient(
            self._sign, self._coefficient(), self._places, decimal_places, mode
        )

    def truncate(self) -> "BigNumber":
        """Drop the fractional part (toward zero)."""
        text = self.to_string()
        return BigNumber(text.split(".")[0]) if "." in text else self

    def floor(self) -> "BigNumber":
        if self.is_integer():
            return self
        integer_part = self.truncate()
        return integer_part.subtract(1) if self.is_negative() else integer_part

    def ceil(self) -> "BigNumber":
        if self.is_integer():
            return self
        integer_part = self.truncate()
        return integer_part.add(1) if self.is_positive() else integer_part

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    @staticmethod
    def max_of(*values: BigNumberLike) -> "BigNumber":
        if not values:
            raise DomainError("max_of requires at least one argument")
        return max(BigNumber.coerce(v) for v in values)

    @staticmethod
    def min_of(*values: BigNumberLike) -> "BigNumber":
        if not values:
            raise DomainError("min_of requires at least one argument")
        return min(BigNumber.coerce(v) for v in values)

    @staticmethod
    def sum_of(values: Iterable[BigNumberLike]) -> "BigNumber":
        total = BigNumber(0)
        for v in values:
            total = total.add(v)
        return total

    @staticmethod
    def product_of(values: Iterable[BigNumberLike]) -> "BigNumber":
        total = BigNumber(1)
        for v in values:
            total = total.multiply(v)
        return total
