"""
Exact-Decimal Numeric Primitive
===============================
Every indicator computes on decimal.Decimal so that long smoothing
recurrences give the same digits on every platform.

- to_decimal: strict conversion of caller input (floats go through repr)
- decimal_context: the configured precision/rounding, entered by every
  indicator update and amendment
- window statistics: average, standard deviation and mean absolute
  deviation
"""

import math
import threading
from decimal import Context, Decimal, InvalidOperation, localcontext
from typing import Optional, Sequence, Union

DecimalSource = Union[Decimal, int, str, float]

ZERO = Decimal(0)
ONE = Decimal(1)
TWO = Decimal(2)
HUNDRED = Decimal(100)

_context: Optional[Context] = None
_context_lock = threading.Lock()


def to_decimal(value: DecimalSource) -> Decimal:
    """
    Convert caller input into a finite Decimal.

    Floats are converted through their shortest repr, so 0.1 becomes
    Decimal('0.1') rather than the binary expansion.

    Raises:
        TypeError: for unsupported types (including bool)
        ValueError: for unparsable strings and non-finite values
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise TypeError("bool is not a valid numeric sample")
    elif isinstance(value, int):
        return Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Non-finite value: {value!r}")
        return Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Not a decimal number: {value!r}") from None
    else:
        raise TypeError(f"Unsupported numeric type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Non-finite value: {value!r}")
    return result


def build_context(precision: int, rounding: str) -> Context:
    return Context(prec=precision, rounding=rounding)


def get_decimal_context() -> Context:
    """Return the engine-wide context built from NumericSettings."""
    global _context
    if _context is not None:
        return _context

    with _context_lock:
        if _context is None:
            from ..infrastructure.config.config_loader import get_settings
            numeric = get_settings().numeric
            _context = build_context(numeric.precision, numeric.rounding)
        return _context


def configure_decimal_context(precision: int, rounding: Optional[str] = None) -> Context:
    """Override the engine-wide context (e.g. from application startup code)."""
    global _context
    with _context_lock:
        current_rounding = rounding or (_context.rounding if _context else None)
        if current_rounding is None:
            from ..infrastructure.config.config_loader import get_settings
            current_rounding = get_settings().numeric.rounding
        _context = build_context(precision, current_rounding)
        return _context


def reset_decimal_context() -> None:
    global _context
    with _context_lock:
        _context = None


def decimal_context():
    """Context manager applying the engine-wide precision and rounding."""
    return localcontext(get_decimal_context())


# ============================================================================
# WINDOW STATISTICS
# ============================================================================

def average(values: Sequence[Decimal]) -> Decimal:
    """Arithmetic mean of a non-empty sequence"""
    return sum(values, ZERO) / len(values)


def standard_deviation(values: Sequence[Decimal], mean: Optional[Decimal] = None) -> Decimal:
    """Population standard deviation (divides by N, not N-1)"""
    if mean is None:
        mean = average(values)
    squared = sum(((value - mean) ** 2 for value in values), ZERO)
    return (squared / len(values)).sqrt()


def mean_absolute_deviation(values: Sequence[Decimal], mean: Optional[Decimal] = None) -> Decimal:
    """Mean of |x - mean| over the sequence"""
    if mean is None:
        mean = average(values)
    return sum((abs(value - mean) for value in values), ZERO) / len(values)