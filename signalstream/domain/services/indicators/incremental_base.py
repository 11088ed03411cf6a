"""
Incremental Indicator Infrastructure
====================================
Base classes and utilities for O(1) incremental indicator calculations.

- RollingWindow: fixed-size FIFO buffer with a one-step undo
- IncrementalIndicator: the update/amend/result/is_stable contract
- WindowBasedIndicator: indicators whose result is a function of the
  last N values
- CandleIndicator: indicators fed with OHLCV candles instead of prices

Amending replaces the contribution of the most recent sample: the
result must equal what a fresh instance fed the same history plus the
replacement would report.
"""

from abc import ABC, abstractmethod
from collections import deque
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ....core.exceptions import (
    InvalidAmendmentError,
    InvalidParameterError,
    InvalidPeriodError,
    InvalidPeriodRelationError,
    NotEnoughSamplesError,
)
from ....core.logger import get_logger
from ....core.numeric import DecimalSource, ZERO, decimal_context, to_decimal
from ...types.indicator_types import Candle, IndicatorState

logger = get_logger(__name__)

_NOTHING = object()


# ============================================================================
# PARAMETER VALIDATION
# ============================================================================

def validate_period(name: str, value: Any) -> int:
    """Return value if it is a positive int, else raise InvalidPeriodError."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidPeriodError(name, value)
    return value


def validate_period_order(shorter_name: str, shorter: int, longer_name: str, longer: int) -> None:
    if shorter >= longer:
        raise InvalidPeriodRelationError(shorter_name, shorter, longer_name, longer)


def validate_positive(name: str, value: DecimalSource) -> Decimal:
    try:
        number = to_decimal(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(name, value, str(e)) from e
    if number <= ZERO:
        raise InvalidParameterError(name, value, "must be positive")
    return number


def to_candle(sample: Any) -> Candle:
    """Accept a Candle, a mapping or any object exposing high/low/close."""
    if isinstance(sample, Candle):
        return sample
    if isinstance(sample, Mapping):
        return Candle.from_mapping(sample)
    return Candle(
        high=sample.high,
        low=sample.low,
        close=sample.close,
        open=getattr(sample, 'open', None),
        volume=getattr(sample, 'volume', ZERO),
    )


# ============================================================================
# ROLLING WINDOW - Fixed-size FIFO buffer for window-based indicators
# ============================================================================

class RollingWindow:
    """
    Fixed-size buffer with O(1) append and access.

    Remembers the value evicted by the latest append so that the append
    can be undone (rollback) and the evicted value put back.
    """

    def __init__(self, maxlen: int):
        if maxlen <= 0:
            raise ValueError("maxlen must be positive")

        self.maxlen = maxlen
        self.buffer = deque(maxlen=maxlen)
        self._evicted = _NOTHING

    def append(self, value: Any):
        """Append value, evicting the oldest if full"""
        self._evicted = self.buffer[0] if self.is_full() else _NOTHING
        self.buffer.append(value)

    def replace_last(self, value: Any):
        """Overwrite the newest value; the evicted value stays evicted"""
        self.buffer[-1] = value

    def rollback(self):
        """Undo the latest append (single level)"""
        self.buffer.pop()
        if self._evicted is not _NOTHING:
            self.buffer.appendleft(self._evicted)
        self._evicted = _NOTHING

    def get_all(self) -> List[Any]:
        """Get all values as list (oldest to newest)"""
        return list(self.buffer)

    def first(self) -> Any:
        return self.buffer[0]

    def last(self) -> Any:
        return self.buffer[-1]

    def is_full(self) -> bool:
        return len(self.buffer) == self.maxlen

    def clear(self):
        self.buffer.clear()
        self._evicted = _NOTHING

    def __len__(self):
        return len(self.buffer)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.buffer)

    def __reversed__(self) -> Iterator[Any]:
        return reversed(self.buffer)

    def __repr__(self):
        return f"RollingWindow(maxlen={self.maxlen}, size={len(self.buffer)})"


# ============================================================================
# BASE CLASS - IncrementalIndicator
# ============================================================================

class IncrementalIndicator(ABC):
    """
    Abstract base class for streaming indicators.

    Lifecycle: construct with fixed configuration, then any interleaving
    of update()/amend(), reading result()/is_stable() at any time.

    Subclasses implement _next(value, replace), which receives the parsed
    sample after count has been advanced (update) or left unchanged
    (amend) and returns the new result or None.
    """

    def __init__(self, required_samples: int = 1, **config: Any):
        self.required_samples = required_samples
        self.config: Dict[str, Any] = config
        self.count = 0
        self._result: Any = None
        self.highest: Optional[Decimal] = None
        self.lowest: Optional[Decimal] = None
        self._previous_extremes: Tuple[Optional[Decimal], Optional[Decimal]] = (None, None)

        logger.debug("indicator.created", {
            "indicator": self.name,
            "config": {k: str(v) for k, v in config.items()},
            "required_samples": required_samples
        })

    @property
    def name(self) -> str:
        return self.__class__.__name__

    # --- contract -----------------------------------------------------------

    def update(self, sample: Any) -> None:
        """Accept a new sample."""
        value = self._parse(sample)
        with decimal_context():
            self.count += 1
            self._store(self._next(value, False), False)

    def amend(self, sample: Any) -> None:
        """
        Replace the most recently accepted sample.

        Raises:
            InvalidAmendmentError: if no sample has been accepted yet
        """
        if self.count == 0:
            logger.warning("indicator.invalid_amendment", {"indicator": self.name})
            raise InvalidAmendmentError(self.name)

        value = self._parse(sample)
        with decimal_context():
            self._store(self._next(value, True), True)

    def result(self) -> Any:
        """Current value, or None while warming up or on a degenerate tick"""
        return self._result

    def get_result(self) -> Any:
        """
        Current value, raising instead of returning None.

        Raises:
            NotEnoughSamplesError: if there is no result
        """
        if self._result is None:
            required = None if self.is_stable() else self.required_samples
            raise NotEnoughSamplesError(self.name, self.count, required)
        return self._result

    def is_stable(self) -> bool:
        return self.count >= self.required_samples

    def reset(self) -> None:
        """Return to the freshly constructed state"""
        self.count = 0
        self._result = None
        self.highest = None
        self.lowest = None
        self._previous_extremes = (None, None)
        self._reset_state()

    def get_state(self) -> IndicatorState:
        """Get current state snapshot"""
        return IndicatorState(
            count=self.count,
            value=self._result,
            metadata=self._get_metadata()
        )

    # --- hooks --------------------------------------------------------------

    def _parse(self, sample: Any) -> Any:
        return to_decimal(sample)

    @abstractmethod
    def _next(self, value: Any, replace: bool) -> Any:
        pass

    def _reset_state(self) -> None:
        pass

    def _get_metadata(self) -> Dict[str, Any]:
        """Get indicator-specific metadata (override in subclass)"""
        return {
            'indicator': self.name,
            'config': dict(self.config),
            'required_samples': self.required_samples,
            'is_stable': self.is_stable(),
            'highest': self.highest,
            'lowest': self.lowest,
        }

    # --- helpers ------------------------------------------------------------

    def _store(self, value: Any, replace: bool) -> None:
        if replace:
            self.lowest, self.highest = self._previous_extremes
        else:
            self._previous_extremes = (self.lowest, self.highest)

        self._result = value
        if isinstance(value, Decimal):
            if self.highest is None or value > self.highest:
                self.highest = value
            if self.lowest is None or value < self.lowest:
                self.lowest = value

    @staticmethod
    def _feed(indicator: 'IncrementalIndicator', value: Any, replace: bool) -> None:
        """Forward a value to an owned sub-indicator."""
        if replace:
            indicator.amend(value)
        else:
            indicator.update(value)

    @staticmethod
    def _feed_optional(indicator: 'WindowBasedIndicator', value: Optional[Decimal],
                       replace: bool, was_fed: bool) -> bool:
        """
        Forward a value that may be undefined on this tick.

        was_fed tells whether the sub-indicator received a value for the
        tick being amended. Returns whether it holds one now.
        """
        if value is None:
            if replace and was_fed:
                indicator.rollback()
            return False

        if replace and was_fed:
            indicator.amend(value)
        else:
            indicator.update(value)
        return True

    def __repr__(self):
        params = ", ".join(f"{k}={v}" for k, v in self.config.items())
        return f"{self.name}({params}, count={self.count}, value={self._result})"


# ============================================================================
# HELPER - Window-Based Indicator Base
# ============================================================================

class WindowBasedIndicator(IncrementalIndicator):
    """
    Base class for indicators computed from the last N values.

    The explicit window is kept so that amendments and rollbacks can
    recompute the aggregate from the corrected contents.
    """

    def __init__(self, window_size: int, **config: Any):
        super().__init__(required_samples=window_size, **config)
        self.window_size = window_size
        self.window = RollingWindow(window_size)

    def _next(self, value: Decimal, replace: bool) -> Optional[Decimal]:
        if replace:
            self.window.replace_last(value)
        else:
            self.window.append(value)

        if not self.window.is_full():
            return None
        return self._compute()

    @abstractmethod
    def _compute(self) -> Optional[Decimal]:
        """Result from a full window"""
        pass

    def rollback(self) -> None:
        """
        Undo the most recent update: count goes back by one and the value
        evicted by that update returns to the window.

        Single level: the next call after a rollback must be update().
        """
        if self.count == 0:
            raise InvalidAmendmentError(self.name)

        with decimal_context():
            self.window.rollback()
            self.count -= 1
            self._restore()
            self.lowest, self.highest = self._previous_extremes
            self._result = self._compute() if self.window.is_full() else None

    def _restore(self) -> None:
        """Put running aggregates back to their values before the latest update"""
        pass

    def _reset_state(self) -> None:
        self.window.clear()


# ============================================================================
# HELPER - Candle-Based Indicator Base
# ============================================================================

class CandleIndicator(IncrementalIndicator):
    """Base class for indicators fed with high/low/close(/volume) records"""

    def _parse(self, sample: Any) -> Candle:
        return to_candle(sample)
