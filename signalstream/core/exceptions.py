"""
Core Exceptions - signalstream
==============================
Centralized exception definitions for the indicator engine.

Configuration errors are raised at construction time and are fatal to
that construction attempt. Runtime numeric edge cases (zero range, zero
denominator) never raise; indicators resolve them to a fallback value or
an undefined result for that tick.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Fixed vocabulary of failure conditions raised by indicators"""
    INVALID_PERIOD = "invalid_period"
    INVALID_PERIOD_RELATION = "invalid_period_relation"
    INVALID_PARAMETER = "invalid_parameter"
    INVALID_AMENDMENT = "invalid_amendment"
    NOT_ENOUGH_SAMPLES = "not_enough_samples"


class IndicatorError(Exception):
    """Base exception for indicator configuration and usage errors."""
    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidPeriodError(IndicatorError):
    """
    Raised when a period (window length) is not a positive integer.

    Booleans are rejected even though they subclass int.
    """
    kind = ErrorKind.INVALID_PERIOD

    def __init__(self, name: str, value: object):
        self.name = name
        self.value = value
        super().__init__(f"Period '{name}' must be a positive integer, got {value!r}")


class InvalidPeriodRelationError(IndicatorError):
    """
    Raised when two periods violate a required ordering, e.g. fast >= slow.
    """
    kind = ErrorKind.INVALID_PERIOD_RELATION

    def __init__(self, shorter_name: str, shorter: int, longer_name: str, longer: int):
        self.shorter_name = shorter_name
        self.shorter = shorter
        self.longer_name = longer_name
        self.longer = longer
        super().__init__(
            f"Period '{shorter_name}' ({shorter}) must be less than '{longer_name}' ({longer})"
        )


class InvalidParameterError(IndicatorError):
    """Raised when a non-period parameter (multiplier, width) is out of range."""
    kind = ErrorKind.INVALID_PARAMETER

    def __init__(self, name: str, value: object, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Parameter '{name}' = {value!r} is invalid: {reason}")


class InvalidAmendmentError(IndicatorError):
    """
    Raised when amend() is called before any sample has been accepted.

    There is no most recent sample whose contribution could be replaced.
    """
    kind = ErrorKind.INVALID_AMENDMENT

    def __init__(self, indicator: str):
        self.indicator = indicator
        super().__init__(f"Cannot amend {indicator}: no sample has been accepted yet")


class NotEnoughSamplesError(IndicatorError):
    """
    Raised by eager reads (get_result) while an indicator is still warming up.
    """
    kind = ErrorKind.NOT_ENOUGH_SAMPLES

    def __init__(self, indicator: str, count: int, required: Optional[int] = None):
        self.indicator = indicator
        self.count = count
        self.required = required
        if required is None:
            message = f"{indicator} has no result after {count} samples"
        else:
            message = f"{indicator} needs {required} samples before a result is available, got {count}"
        super().__init__(message)
