"""
Moving Average Family
=====================
The recurrences most other indicators are built from.

Implemented:
- SMA  (Simple Moving Average) - running sum over a window
- WMA  (Weighted Moving Average) - linear weights 1..N, newest weighs N
- EMA  (Exponential Moving Average) - alpha = 2 / (N + 1)
- RMA  (Running Moving Average) - alpha = 1 / N
- WSMA (Wilder's Smoothed Moving Average) - (prev * (N - 1) + x) / N
- DEMA (Double EMA) - 2 * EMA(x) - EMA(EMA(x))
- DMA  (Dual Moving Average) - short MA minus long MA

Exponential averages are seeded with the SMA of their first N samples
and report nothing before that. No moving average ever divides by a
partial-window denominator.
"""

from abc import abstractmethod
from decimal import Decimal
from typing import Dict, Optional, Type, Union

from ....core.numeric import ONE, TWO, ZERO, decimal_context
from ...types.indicator_types import MovingAverageKind
from .incremental_base import (
    IncrementalIndicator,
    WindowBasedIndicator,
    validate_period,
)


# ============================================================================
# SMA - Simple Moving Average
# ============================================================================

class SMA(WindowBasedIndicator):
    """
    Simple moving average using a rolling window and a running sum.

    The sum without the newest value is kept, so an amendment adds the
    replacement to exactly the partial sum a fresh instance would have.

    Complexity: O(1) per update and per amendment.
    """

    def __init__(self, period: int):
        self.period = validate_period('period', period)
        super().__init__(self.period, period=self.period)
        self._sum = ZERO
        self._base = ZERO
        self._previous_sum = ZERO

    def _next(self, value: Decimal, replace: bool) -> Optional[Decimal]:
        if replace:
            self.window.replace_last(value)
        else:
            self._previous_sum = self._sum
            self._base = self._sum - self.window.first() if self.window.is_full() else self._sum
            self.window.append(value)
        self._sum = self._base + value

        if not self.window.is_full():
            return None
        return self._compute()

    def _compute(self) -> Decimal:
        return self._sum / self.period

    def _restore(self) -> None:
        self._sum = self._previous_sum

    def _reset_state(self) -> None:
        super()._reset_state()
        self._sum = ZERO
        self._base = ZERO
        self._previous_sum = ZERO


# ============================================================================
# WMA - Weighted Moving Average
# ============================================================================

class WMA(WindowBasedIndicator):
    """
    Linearly weighted moving average.

    Formula: WMA = sum(i * x_i) / (N * (N + 1) / 2), i = 1 for the oldest

    Sliding one step lowers every weight by one, so the weighted sum
    follows numerator - total + N * x_new. While the window is filling
    the sums are rebuilt from its contents.
    """

    def __init__(self, period: int):
        self.period = validate_period('period', period)
        super().__init__(self.period, period=self.period)
        self.denominator = Decimal(self.period * (self.period + 1) // 2)
        self._total = ZERO
        self._numerator = ZERO
        self._slid = False
        self._base_total = ZERO
        self._base_numerator = ZERO
        self._previous_sums = (ZERO, ZERO)

    def _next(self, value: Decimal, replace: bool) -> Optional[Decimal]:
        if replace:
            self.window.replace_last(value)
        else:
            self._previous_sums = (self._total, self._numerator)
            self._slid = self.window.is_full()
            if self._slid:
                self._base_numerator = self._numerator - self._total
                self._base_total = self._total - self.window.first()
            self.window.append(value)

        if self._slid:
            self._numerator = self._base_numerator + self.period * value
            self._total = self._base_total + value
        else:
            self._resync()

        if not self.window.is_full():
            return None
        return self._compute()

    def _compute(self) -> Decimal:
        return self._numerator / self.denominator

    def _resync(self) -> None:
        self._total = sum(self.window, ZERO)
        self._numerator = sum((weight * value for weight, value in enumerate(self.window, start=1)), ZERO)

    def _restore(self) -> None:
        self._total, self._numerator = self._previous_sums

    def _reset_state(self) -> None:
        super()._reset_state()
        self._total = ZERO
        self._numerator = ZERO
        self._slid = False
        self._base_total = ZERO
        self._base_numerator = ZERO
        self._previous_sums = (ZERO, ZERO)


# ============================================================================
# EXPONENTIAL FAMILY - EMA, RMA, WSMA
# ============================================================================

class ExponentialIndicator(IncrementalIndicator):
    """
    Base class for exponentially smoothed averages (EMA, RMA, WSMA).

    The first N samples go to an owned SMA whose result is the seed; after
    that each sample is folded into the previous value by _smooth().
    The value before the latest sample is kept so that an amendment can
    redo the latest step.
    """

    def __init__(self, period: int):
        self.period = validate_period('period', period)
        super().__init__(required_samples=self.period, period=self.period)
        self._seed = SMA(self.period)
        self._prior: Optional[Decimal] = None

    def _next(self, value: Decimal, replace: bool) -> Optional[Decimal]:
        if self.count <= self.period:
            self._feed(self._seed, value, replace)
            return self._seed.result()

        if not replace:
            self._prior = self._result
        return self._smooth(value, self._prior)

    @abstractmethod
    def _smooth(self, value: Decimal, prior: Decimal) -> Decimal:
        pass

    def _reset_state(self) -> None:
        self._seed.reset()
        self._prior = None


class EMA(ExponentialIndicator):
    """
    Exponential moving average.

    Formula: EMA(t) = a * x(t) + (1 - a) * EMA(t-1), a = 2 / (N + 1)
    Seed: SMA of the first N samples
    """

    def __init__(self, period: int):
        super().__init__(period)
        with decimal_context():
            self.alpha = TWO / (self.period + 1)

    def _smooth(self, value: Decimal, prior: Decimal) -> Decimal:
        return self.alpha * value + (ONE - self.alpha) * prior


class RMA(EMA):
    """
    Running moving average: the EMA recurrence with a = 1 / N.

    Same seed as EMA. Used as Wilder-style smoothing where an
    alpha-parameterized form is wanted.
    """

    def __init__(self, period: int):
        super().__init__(period)
        with decimal_context():
            self.alpha = ONE / self.period


class WSMA(ExponentialIndicator):
    """
    Wilder's smoothed moving average.

    Formula: WSMA(t) = (WSMA(t-1) * (N - 1) + x(t)) / N
    Seed: SMA of the first N samples
    """

    def _smooth(self, value: Decimal, prior: Decimal) -> Decimal:
        return (prior * (self.period - 1) + value) / self.period


# ============================================================================
# DEMA - Double Exponential Moving Average
# ============================================================================

class DEMA(IncrementalIndicator):
    """
    Double exponential moving average.

    Formula: DEMA = 2 * EMA1(x) - EMA2(EMA1(x))

    EMA2 only receives defined EMA1 values, so the first result appears
    after 2N - 1 samples.
    """

    def __init__(self, period: int):
        self.period = validate_period('period', period)
        super().__init__(required_samples=2 * self.period - 1, period=self.period)
        self._inner = EMA(self.period)
        self._outer = EMA(self.period)

    def _next(self, value: Decimal, replace: bool) -> Optional[Decimal]:
        self._feed(self._inner, value, replace)
        inner = self._inner.result()
        if inner is None:
            return None

        self._feed(self._outer, inner, replace)
        outer = self._outer.result()
        if outer is None:
            return None
        return TWO * inner - outer

    def _reset_state(self) -> None:
        self._inner.reset()
        self._outer.reset()


# ============================================================================
# FACTORY - Create moving averages by kind
# ============================================================================

MovingAverage = Union[SMA, WMA, EMA, RMA, WSMA, DEMA]

_MOVING_AVERAGES: Dict[MovingAverageKind, Type[IncrementalIndicator]] = {
    MovingAverageKind.SMA: SMA,
    MovingAverageKind.EMA: EMA,
    MovingAverageKind.WMA: WMA,
    MovingAverageKind.RMA: RMA,
    MovingAverageKind.WSMA: WSMA,
    MovingAverageKind.DEMA: DEMA,
}


def create_moving_average(kind: Union[MovingAverageKind, str], period: int) -> MovingAverage:
    """
    Create a moving average by kind.

    Args:
        kind: MovingAverageKind member or its name ("sma", "EMA", ...)
        period: Window length

    Example:
        ma = create_moving_average(MovingAverageKind.WSMA, 14)
    """
    return _MOVING_AVERAGES[MovingAverageKind.parse(kind)](period)


# ============================================================================
# DMA - Dual Moving Average
# ============================================================================

class DMA(IncrementalIndicator):
    """
    Difference between a short and a long moving average of one stream.

    Both legs stay readable through the short/long properties. Stable
    once both legs are stable.
    """

    def __init__(self, short_period: int, long_period: int,
                 short_kind: Union[MovingAverageKind, str] = MovingAverageKind.SMA,
                 long_kind: Union[MovingAverageKind, str, None] = None):
        short_period = validate_period('short_period', short_period)
        long_period = validate_period('long_period', long_period)
        short_kind = MovingAverageKind.parse(short_kind)
        long_kind = MovingAverageKind.parse(long_kind) if long_kind is not None else short_kind

        self._short = create_moving_average(short_kind, short_period)
        self._long = create_moving_average(long_kind, long_period)
        super().__init__(
            required_samples=max(self._short.required_samples, self._long.required_samples),
            short_period=short_period,
            long_period=long_period,
            short_kind=short_kind.value,
            long_kind=long_kind.value,
        )

    @property
    def short(self) -> Optional[Decimal]:
        return self._short.result()

    @property
    def long(self) -> Optional[Decimal]:
        return self._long.result()

    def _next(self, value: Decimal, replace: bool) -> Optional[Decimal]:
        self._feed(self._short, value, replace)
        self._feed(self._long, value, replace)

        short, long = self._short.result(), self._long.result()
        if short is None or long is None:
            return None
        return short - long

    def _reset_state(self) -> None:
        self._short.reset()
        self._long.reset()
