"""
Momentum Indicators
===================
Single-pass indicators that apply one transform to a price window.

Implemented:
- MOM    (Momentum) - x(t) - x(t-N)
- ROC    (Rate of Change) - percentage change over N samples
- CG     (Center of Gravity) - Ehlers' weighted position of prices
- LINREG (Linear Regression) - least-squares line over the window
"""

from decimal import Decimal
from typing import Optional

from ....core.logger import get_logger
from ....core.numeric import HUNDRED, ZERO
from .incremental_base import WindowBasedIndicator, validate_period
from .moving_averages import SMA

logger = get_logger(__name__)


class MOM(WindowBasedIndicator):
    """
    Momentum: difference between the newest value and the value N samples ago.

    Keeps a window of N + 1 values; first result after N + 1 samples.
    """

    def __init__(self, period: int):
        self.period = validate_period('period', period)
        super().__init__(self.period + 1, period=self.period)

    def _compute(self) -> Decimal:
        return self.window.last() - self.window.first()


class ROC(WindowBasedIndicator):
    """
    Rate of change in percent.

    Formula: ROC = (x(t) - x(t-N)) / x(t-N) * 100

    A zero reference value gives an undefined result for that tick.
    """

    def __init__(self, period: int):
        self.period = validate_period('period', period)
        super().__init__(self.period + 1, period=self.period)

    def _compute(self) -> Optional[Decimal]:
        reference = self.window.first()
        if reference == ZERO:
            logger.debug("roc.zero_reference", {"count": self.count})
            return None
        return (self.window.last() - reference) / reference * HUNDRED


class CG(WindowBasedIndicator):
    """
    Center of Gravity oscillator (John Ehlers).

    Formula: CG = -sum(i * x_i) / sum(x_i), i = 1 for the newest value

    A signal line (SMA of CG over signal_period) is maintained alongside
    and exposed as `signal`. A zero price sum gives an undefined CG, and
    the signal line skips that tick.
    """

    def __init__(self, period: int, signal_period: int = 3):
        self.period = validate_period('period', period)
        self.signal_period = validate_period('signal_period', signal_period)
        super().__init__(self.period, period=self.period, signal_period=self.signal_period)
        self._signal = SMA(self.signal_period)
        self._signal_fed = False
        self._previous_signal_fed = False

    @property
    def signal(self) -> Optional[Decimal]:
        return self._signal.result()

    def _next(self, value: Decimal, replace: bool) -> Optional[Decimal]:
        if not replace:
            self._previous_signal_fed = self._signal_fed
        cg = super()._next(value, replace)
        self._signal_fed = self._feed_optional(self._signal, cg, replace, self._signal_fed)
        return cg

    def _compute(self) -> Optional[Decimal]:
        numerator = ZERO
        denominator = ZERO
        for position, price in enumerate(reversed(self.window), start=1):
            numerator += position * price
            denominator += price

        if denominator == ZERO:
            logger.debug("cg.zero_denominator", {"count": self.count})
            return None
        return -numerator / denominator

    def rollback(self) -> None:
        if self._signal_fed:
            self._signal.rollback()
        super().rollback()
        self._signal_fed = self._previous_signal_fed

    def _reset_state(self) -> None:
        super()._reset_state()
        self._signal.reset()
        self._signal_fed = False
        self._previous_signal_fed = False


class LINREG(WindowBasedIndicator):
    """
    Least-squares linear regression over the last N values.

    x runs 0..N-1 from oldest to newest. The result is the fitted value at
    the newest position; slope and intercept are exposed as attributes.
    """

    def __init__(self, period: int):
        self.period = validate_period('period', period)
        super().__init__(self.period, period=self.period)
        n = self.period
        self._sum_x = Decimal(n * (n - 1) // 2)
        self._sum_xx = Decimal((n - 1) * n * (2 * n - 1) // 6)
        self._divisor = n * self._sum_xx - self._sum_x * self._sum_x
        self.slope: Optional[Decimal] = None
        self.intercept: Optional[Decimal] = None

    def _compute(self) -> Decimal:
        n = self.period
        sum_y = ZERO
        sum_xy = ZERO
        for x, y in enumerate(self.window):
            sum_y += y
            sum_xy += x * y

        if self._divisor == ZERO:
            # single-point window: horizontal line through the value
            self.slope = ZERO
        else:
            self.slope = (n * sum_xy - self._sum_x * sum_y) / self._divisor
        self.intercept = (sum_y - self.slope * self._sum_x) / n
        return self.intercept + self.slope * (n - 1)

    def rollback(self) -> None:
        super().rollback()
        if self._result is None:
            self.slope = None
            self.intercept = None

    def _reset_state(self) -> None:
        super()._reset_state()
        self.slope = None
        self.intercept = None
