"""
Volatility Indicators
=====================
Implemented:
- MAD    (Mean Absolute Deviation)
- TR     (True Range)
- ATR    (Average True Range) - owned moving average over TR
- BBANDS (Bollinger Bands) - owned SMA plus deviation of its window
- BBW    (Bollinger Bands Width) - owned BBANDS
- AccelerationBands (Price Headley) - three owned moving averages
"""

from decimal import Decimal
from typing import Optional, Union

from ....core.logger import get_logger
from ....core.numeric import DecimalSource, ONE, ZERO, mean_absolute_deviation, standard_deviation
from ...types.indicator_types import BandsResult, Candle, MovingAverageKind
from .incremental_base import (
    CandleIndicator,
    IncrementalIndicator,
    WindowBasedIndicator,
    validate_period,
    validate_positive,
)
from .moving_averages import SMA, create_moving_average

logger = get_logger(__name__)


class MAD(WindowBasedIndicator):
    """
    Mean absolute deviation of the window from its own mean.
    """

    def __init__(self, period: int):
        self.period = validate_period('period', period)
        super().__init__(self.period, period=self.period)

    def _compute(self) -> Decimal:
        return mean_absolute_deviation(self.window.get_all())


class TR(CandleIndicator):
    """
    True range.

    Formula: max(high - low, |high - prevClose|, |low - prevClose|)
    The first candle has no previous close and yields high - low.
    """

    def __init__(self):
        super().__init__(required_samples=1)
        self._previous_close: Optional[Decimal] = None
        self._last_close: Optional[Decimal] = None

    def _next(self, candle: Candle, replace: bool) -> Decimal:
        if not replace:
            self._previous_close = self._last_close
        self._last_close = candle.close

        spread = candle.high - candle.low
        if self._previous_close is None:
            return spread
        return max(
            spread,
            abs(candle.high - self._previous_close),
            abs(candle.low - self._previous_close),
        )

    def _reset_state(self) -> None:
        self._previous_close = None
        self._last_close = None


class ATR(CandleIndicator):
    """
    Average true range: a moving average (Wilder's by default) of TR.
    """

    def __init__(self, period: int, kind: Union[MovingAverageKind, str] = MovingAverageKind.WSMA):
        self.period = validate_period('period', period)
        self.kind = MovingAverageKind.parse(kind)
        self._tr = TR()
        self._average = create_moving_average(self.kind, self.period)
        super().__init__(
            required_samples=self._average.required_samples,
            period=self.period,
            kind=self.kind.value,
        )

    @property
    def true_range(self) -> Optional[Decimal]:
        return self._tr.result()

    def _next(self, candle: Candle, replace: bool) -> Optional[Decimal]:
        self._feed(self._tr, candle, replace)
        self._feed(self._average, self._tr.result(), replace)
        return self._average.result()

    def _reset_state(self) -> None:
        self._tr.reset()
        self._average.reset()


class BBANDS(IncrementalIndicator):
    """
    Bollinger Bands.

    middle = SMA(N)
    upper/lower = middle +/- k * sigma, sigma being the population
    standard deviation of the SMA's own window.
    """

    def __init__(self, period: int, deviation_multiplier: DecimalSource = 2):
        self.period = validate_period('period', period)
        self.deviation_multiplier = validate_positive('deviation_multiplier', deviation_multiplier)
        self._middle = SMA(self.period)
        super().__init__(
            required_samples=self.period,
            period=self.period,
            deviation_multiplier=self.deviation_multiplier,
        )

    def _next(self, value: Decimal, replace: bool) -> Optional[BandsResult]:
        self._feed(self._middle, value, replace)
        middle = self._middle.result()
        if middle is None:
            return None

        spread = self.deviation_multiplier * standard_deviation(self._middle.window.get_all(), middle)
        return BandsResult(upper=middle + spread, middle=middle, lower=middle - spread)

    def _reset_state(self) -> None:
        self._middle.reset()


class BBW(IncrementalIndicator):
    """
    Bollinger Bands Width: (upper - lower) / middle.

    Undefined on a tick whose middle band is zero.
    """

    def __init__(self, period: int, deviation_multiplier: DecimalSource = 2):
        self._bands = BBANDS(period, deviation_multiplier)
        super().__init__(
            required_samples=self._bands.required_samples,
            period=self._bands.period,
            deviation_multiplier=self._bands.deviation_multiplier,
        )

    @property
    def bands(self) -> Optional[BandsResult]:
        return self._bands.result()

    def _next(self, value: Decimal, replace: bool) -> Optional[Decimal]:
        self._feed(self._bands, value, replace)
        bands = self._bands.result()
        if bands is None:
            return None
        if bands.middle == ZERO:
            logger.debug("bbw.zero_middle_band", {"count": self.count})
            return None
        return (bands.upper - bands.lower) / bands.middle

    def _reset_state(self) -> None:
        self._bands.reset()


class AccelerationBands(CandleIndicator):
    """
    Acceleration Bands (Price Headley).

    coefficient = width * (high - low) / (high + low)
    upper  = MA(high * (1 + coefficient))
    lower  = MA(low * (1 - coefficient))
    middle = MA(close)

    A zero high + low gives a zero coefficient.
    """

    def __init__(self, period: int, width: DecimalSource = 4,
                 kind: Union[MovingAverageKind, str] = MovingAverageKind.SMA):
        self.period = validate_period('period', period)
        self.width = validate_positive('width', width)
        self.kind = MovingAverageKind.parse(kind)
        self._upper = create_moving_average(self.kind, self.period)
        self._middle = create_moving_average(self.kind, self.period)
        self._lower = create_moving_average(self.kind, self.period)
        super().__init__(
            required_samples=self._middle.required_samples,
            period=self.period,
            width=self.width,
            kind=self.kind.value,
        )

    def _next(self, candle: Candle, replace: bool) -> Optional[BandsResult]:
        high_plus_low = candle.high + candle.low
        if high_plus_low == ZERO:
            coefficient = ZERO
        else:
            coefficient = self.width * (candle.high - candle.low) / high_plus_low

        self._feed(self._upper, candle.high * (ONE + coefficient), replace)
        self._feed(self._middle, candle.close, replace)
        self._feed(self._lower, candle.low * (ONE - coefficient), replace)

        middle = self._middle.result()
        if middle is None:
            return None
        return BandsResult(upper=self._upper.result(), middle=middle, lower=self._lower.result())

    def _reset_state(self) -> None:
        self._upper.reset()
        self._middle.reset()
        self._lower.reset()
