"""
Precision — Rounding Policy & Scoped Precision Context

Every precision-sensitive BigNumber operation (division, roots, rounding)
reads a Precision value. It is resolved in this order:
1. An explicit `precision=` argument passed to the operation
2. The context-local precision (contextvars), scoped via precision_context()
3. DEFAULT_PRECISION

The context-local value is per thread / per asyncio task, so concurrent
callers may use different precisions without interfering.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Any, Final, Iterator, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger("QuantumCore.Precision")


# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """
    Rounding policy applied when digits beyond the target place are dropped.

    ROUND_UP / ROUND_DOWN are away from / toward zero.
    ROUND_CEILING / ROUND_FLOOR are toward +inf / -inf.
    The HALF_* modes only differ on exact ties.
    """

    ROUND_UP = "ROUND_UP"
    ROUND_DOWN = "ROUND_DOWN"
    ROUND_HALF_UP = "ROUND_HALF_UP"
    ROUND_HALF_DOWN = "ROUND_HALF_DOWN"
    ROUND_HALF_EVEN = "ROUND_HALF_EVEN"
    ROUND_CEILING = "ROUND_CEILING"
    ROUND_FLOOR = "ROUND_FLOOR"


# =============================================================================
# PRECISION MODEL
# =============================================================================


class Precision(BaseModel):
    """
    Immutable precision policy.

    Attributes:
        digits: Decimal places kept by division, sqrt and nth roots
        rounding_mode: Rounding applied to dropped digits
        native_division: Allow the double-precision division shortcut when
            both operands fit in a double (caps quotients at 15 significant
            digits; disable for full-precision long division)
    """

    digits: int = Field(50, ge=1, le=10_000, description="Decimal places for quotients/roots")
    rounding_mode: RoundingMode = Field(
        RoundingMode.ROUND_HALF_UP, description="Rounding policy"
    )
    native_division: bool = Field(
        True, description="Use the native double shortcut for small operands"
    )

    model_config = {"frozen": True}

    def epsilon_exponent(self) -> int:
        """Exponent k of the convergence threshold 10^-k used by root finders."""
        return max(self.digits - 1, 1)


DEFAULT_PRECISION: Final[Precision] = Precision()

_CURRENT_PRECISION: ContextVar[Precision] = ContextVar(
    "quantum_core_precision", default=DEFAULT_PRECISION
)


# =============================================================================
# CONTEXT ACCESS
# =============================================================================


def get_precision() -> Precision:
    """Return the precision active in the current context."""
    return _CURRENT_PRECISION.get()


def resolve_precision(precision: Optional[Precision] = None) -> Precision:
    """Explicit precision if given, otherwise the context-local one."""
    return precision if precision is not None else _CURRENT_PRECISION.get()


def set_precision(**changes: Any) -> Precision:
    """
    Replace fields of the current context's precision.

    Args:
        **changes: Any of digits, rounding_mode, native_division

    Returns:
        The previous precision (so callers can restore it)

    Raises:
        pydantic.ValidationError: If a field value is invalid

    Examples:
        >>> previous = set_precision(digits=20)
        >>> get_precision().digits
        20
        >>> _ = set_precision(**previous.model_dump())
    """
    previous = _CURRENT_PRECISION.get()
    updated = Precision(**{**previous.model_dump(), **changes})
    _CURRENT_PRECISION.set(updated)
    logger.debug("Precision updated: %s", changes)
    return previous


@contextmanager
def precision_context(
    precision: Optional[Precision] = None, **changes: Any
) -> Iterator[Precision]:
    """
    Scope a precision to a `with` block.

    Args:
        precision: Full precision to install (optional)
        **changes: Field overrides applied on top of `precision` or the
            current context precision

    Yields:
        The precision active inside the block

    Examples:
        >>> with precision_context(digits=10) as p:
        ...     p.digits
        10
    """
    base = precision if precision is not None else _CURRENT_PRECISION.get()
    scoped = Precision(**{**base.model_dump(), **changes}) if changes else base
    token = _CURRENT_PRECISION.set(scoped)
    try:
        yield scoped
    finally:
        _CURRENT_PRECISION.reset(token)
