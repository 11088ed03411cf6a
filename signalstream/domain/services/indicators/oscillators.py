"""
Composite Oscillators
=====================
Indicators that own moving averages (or other indicators) and combine
their per-tick outputs. None of them re-implements a recurrence that an
owned sub-indicator already provides.

Implemented:
- RSI      (Relative Strength Index)
- MACD     (Moving Average Convergence/Divergence)
- STOCH    (Stochastic Oscillator)
- StochasticRSI (Stochastic Oscillator applied to RSI)
- CCI      (Commodity Channel Index)
- AO / AC  (Awesome Oscillator / Accelerator Oscillator)
- DX / ADX (Directional Movement Index / Average Directional Index)
"""

from decimal import Decimal
from typing import Optional, Union

from ....core.logger import get_logger
from ....core.numeric import HUNDRED, ONE, ZERO
from ...types.indicator_types import Candle, MACDResult, MovingAverageKind, StochasticResult
from .incremental_base import (
    CandleIndicator,
    IncrementalIndicator,
    RollingWindow,
    validate_period,
    validate_period_order,
)
from .moving_averages import SMA, create_moving_average
from .volatility import ATR, MAD

logger = get_logger(__name__)

KindLike = Union[MovingAverageKind, str]


# ============================================================================
# RSI - Relative Strength Index
# ============================================================================

class RSI(IncrementalIndicator):
    """
    Relative Strength Index.

    Formula:
    1. gain/loss = positive/negative part of the price change
    2. average gain and average loss, each an owned moving average
       (Wilder's smoothing by default)
    3. RSI = 100 - 100 / (1 + avgGain / avgLoss)

    An average loss of zero yields 100. The first sample only provides a
    reference price, so the first result needs period + 1 samples.
    """

    def __init__(self, period: int = 14, kind: KindLike = MovingAverageKind.WSMA):
        self.period = validate_period('period', period)
        self.kind = MovingAverageKind.parse(kind)
        self._avg_gain = create_moving_average(self.kind, self.period)
        self._avg_loss = create_moving_average(self.kind, self.period)
        self._prior_price: Optional[Decimal] = None
        self._last_price: Optional[Decimal] = None
        super().__init__(
            required_samples=self._avg_loss.required_samples + 1,
            period=self.period,
            kind=self.kind.value,
        )

    def _next(self, price: Decimal, replace: bool) -> Optional[Decimal]:
        if not replace:
            self._prior_price = self._last_price
        self._last_price = price

        if self._prior_price is None:
            return None

        change = price - self._prior_price
        self._feed(self._avg_gain, change if change > ZERO else ZERO, replace)
        self._feed(self._avg_loss, -change if change < ZERO else ZERO, replace)

        avg_gain, avg_loss = self._avg_gain.result(), self._avg_loss.result()
        if avg_gain is None or avg_loss is None:
            return None
        if avg_loss == ZERO:
            return HUNDRED

        relative_strength = avg_gain / avg_loss
        return HUNDRED - HUNDRED / (ONE + relative_strength)

    def _reset_state(self) -> None:
        self._avg_gain.reset()
        self._avg_loss.reset()
        self._prior_price = None
        self._last_price = None


# ============================================================================
# MACD - Moving Average Convergence/Divergence
# ============================================================================

class MACD(IncrementalIndicator):
    """
    MACD line = MA(fast) - MA(slow); signal = MA(signal) of the MACD line;
    histogram = MACD line - signal.

    Moving averages are EMAs unless another kind is given. The line is
    available as `line` as soon as the slow average is stable; result()
    needs the signal average as well.
    """

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9,
                 kind: KindLike = MovingAverageKind.EMA):
        self.fast_period = validate_period('fast_period', fast_period)
        self.slow_period = validate_period('slow_period', slow_period)
        self.signal_period = validate_period('signal_period', signal_period)
        validate_period_order('fast_period', self.fast_period, 'slow_period', self.slow_period)
        self.kind = MovingAverageKind.parse(kind)

        self._fast = create_moving_average(self.kind, self.fast_period)
        self._slow = create_moving_average(self.kind, self.slow_period)
        self._signal = create_moving_average(self.kind, self.signal_period)
        self.line: Optional[Decimal] = None
        super().__init__(
            required_samples=self._slow.required_samples + self._signal.required_samples - 1,
            fast_period=self.fast_period,
            slow_period=self.slow_period,
            signal_period=self.signal_period,
            kind=self.kind.value,
        )

    def _next(self, price: Decimal, replace: bool) -> Optional[MACDResult]:
        self._feed(self._fast, price, replace)
        self._feed(self._slow, price, replace)

        fast, slow = self._fast.result(), self._slow.result()
        if fast is None or slow is None:
            self.line = None
            return None

        self.line = fast - slow
        self._feed(self._signal, self.line, replace)
        signal = self._signal.result()
        if signal is None:
            return None
        return MACDResult(macd=self.line, signal=signal, histogram=self.line - signal)

    def _reset_state(self) -> None:
        self._fast.reset()
        self._slow.reset()
        self._signal.reset()
        self.line = None


# ============================================================================
# STOCH - Stochastic Oscillator
# ============================================================================

class STOCH(CandleIndicator):
    """
    Stochastic oscillator.

    %K = (close - lowest low) / (highest high - lowest low) * 100 over the
    last k_period candles; %D = SMA(d_period) of %K.

    A zero high/low range leaves %K undefined for that tick and %D is not
    fed (it keeps its previous value). Stability is count based like every
    other indicator; result() stays undefined until %D has a value.
    """

    def __init__(self, k_period: int = 14, d_period: int = 3):
        self.k_period = validate_period('k_period', k_period)
        self.d_period = validate_period('d_period', d_period)
        self._highs = RollingWindow(self.k_period)
        self._lows = RollingWindow(self.k_period)
        self._d = SMA(self.d_period)
        self._d_fed = False
        self.stoch_k: Optional[Decimal] = None
        super().__init__(
            required_samples=self.k_period + self.d_period - 1,
            k_period=self.k_period,
            d_period=self.d_period,
        )

    def _next(self, candle: Candle, replace: bool) -> Optional[StochasticResult]:
        if replace:
            self._highs.replace_last(candle.high)
            self._lows.replace_last(candle.low)
        else:
            self._highs.append(candle.high)
            self._lows.append(candle.low)

        stoch_k = None
        if self._highs.is_full():
            highest, lowest = max(self._highs), min(self._lows)
            if highest == lowest:
                logger.debug("stoch.zero_range", {"count": self.count, "price": candle.close})
            else:
                stoch_k = (candle.close - lowest) / (highest - lowest) * HUNDRED

        self.stoch_k = stoch_k
        self._d_fed = self._feed_optional(self._d, stoch_k, replace, self._d_fed)

        stoch_d = self._d.result()
        if stoch_d is None:
            return None
        return StochasticResult(stoch_k=stoch_k, stoch_d=stoch_d)

    def _reset_state(self) -> None:
        self._highs.clear()
        self._lows.clear()
        self._d.reset()
        self._d_fed = False
        self.stoch_k = None


class StochasticRSI(IncrementalIndicator):
    """
    Stochastic oscillator over the RSI series.

    Each RSI value is fed to an owned STOCH as a candle whose high, low
    and close all equal that value, so %K measures where the RSI sits in
    its own recent range (0-100).
    """

    def __init__(self, rsi_period: int = 14, stoch_period: Optional[int] = None, d_period: int = 3,
                 kind: KindLike = MovingAverageKind.WSMA):
        self._rsi = RSI(rsi_period, kind)
        self._stoch = STOCH(rsi_period if stoch_period is None else stoch_period, d_period)
        super().__init__(
            required_samples=self._rsi.required_samples + self._stoch.required_samples - 1,
            rsi_period=self._rsi.period,
            stoch_period=self._stoch.k_period,
            d_period=self._stoch.d_period,
            kind=self._rsi.kind.value,
        )

    @property
    def rsi(self) -> Optional[Decimal]:
        return self._rsi.result()

    def _next(self, price: Decimal, replace: bool) -> Optional[StochasticResult]:
        self._feed(self._rsi, price, replace)
        rsi = self._rsi.result()
        if rsi is None:
            return None

        self._feed(self._stoch, Candle(high=rsi, low=rsi, close=rsi), replace)
        return self._stoch.result()

    def _reset_state(self) -> None:
        self._rsi.reset()
        self._stoch.reset()


# ============================================================================
# CCI - Commodity Channel Index
# ============================================================================

class CCI(CandleIndicator):
    """
    Commodity Channel Index (Donald Lambert).

    Formula: CCI = (TP - SMA(TP)) / (0.015 * MAD(TP)), TP = (high + low + close) / 3

    A zero mean absolute deviation yields 0.
    """

    LAMBERT_CONSTANT = Decimal("0.015")

    def __init__(self, period: int = 20):
        self.period = validate_period('period', period)
        self._sma = SMA(self.period)
        self._mad = MAD(self.period)
        super().__init__(required_samples=self.period, period=self.period)

    def _next(self, candle: Candle, replace: bool) -> Optional[Decimal]:
        typical_price = candle.typical_price
        self._feed(self._sma, typical_price, replace)
        self._feed(self._mad, typical_price, replace)

        mean, deviation = self._sma.result(), self._mad.result()
        if mean is None or deviation is None:
            return None
        if deviation == ZERO:
            return ZERO
        return (typical_price - mean) / (self.LAMBERT_CONSTANT * deviation)

    def _reset_state(self) -> None:
        self._sma.reset()
        self._mad.reset()


# ============================================================================
# AO / AC - Awesome and Accelerator Oscillators (Bill Williams)
# ============================================================================

class AO(CandleIndicator):
    """
    Awesome Oscillator: MA(fast) - MA(slow) of the median price (high + low) / 2.
    """

    def __init__(self, fast_period: int = 5, slow_period: int = 34,
                 kind: KindLike = MovingAverageKind.SMA):
        self.fast_period = validate_period('fast_period', fast_period)
        self.slow_period = validate_period('slow_period', slow_period)
        validate_period_order('fast_period', self.fast_period, 'slow_period', self.slow_period)
        self.kind = MovingAverageKind.parse(kind)
        self._fast = create_moving_average(self.kind, self.fast_period)
        self._slow = create_moving_average(self.kind, self.slow_period)
        super().__init__(
            required_samples=self._slow.required_samples,
            fast_period=self.fast_period,
            slow_period=self.slow_period,
            kind=self.kind.value,
        )

    def _next(self, candle: Candle, replace: bool) -> Optional[Decimal]:
        median_price = candle.median_price
        self._feed(self._fast, median_price, replace)
        self._feed(self._slow, median_price, replace)

        fast, slow = self._fast.result(), self._slow.result()
        if fast is None or slow is None:
            return None
        return fast - slow

    def _reset_state(self) -> None:
        self._fast.reset()
        self._slow.reset()


class AC(CandleIndicator):
    """
    Accelerator Oscillator: AO - SMA(signal_period) of AO.
    """

    def __init__(self, fast_period: int = 5, slow_period: int = 34, signal_period: int = 5):
        self._ao = AO(fast_period, slow_period)
        self.signal_period = validate_period('signal_period', signal_period)
        self._signal = SMA(self.signal_period)
        super().__init__(
            required_samples=self._ao.required_samples + self.signal_period - 1,
            fast_period=self._ao.fast_period,
            slow_period=self._ao.slow_period,
            signal_period=self.signal_period,
        )

    @property
    def ao(self) -> Optional[Decimal]:
        return self._ao.result()

    def _next(self, candle: Candle, replace: bool) -> Optional[Decimal]:
        self._feed(self._ao, candle, replace)
        ao = self._ao.result()
        if ao is None:
            return None

        self._feed(self._signal, ao, replace)
        signal = self._signal.result()
        if signal is None:
            return None
        return ao - signal

    def _reset_state(self) -> None:
        self._ao.reset()
        self._signal.reset()


# ============================================================================
# DX / ADX - Directional Movement (J. Welles Wilder)
# ============================================================================

class DX(CandleIndicator):
    """
    Directional Movement Index.

    +DM = high - prevHigh when that move beats prevLow - low and is positive, else 0
    -DM = prevLow - low when that move beats high - prevHigh and is positive, else 0
    +DI/-DI = 100 * MA(+DM) / ATR and 100 * MA(-DM) / ATR
    DX = |+DI - -DI| / (+DI + -DI) * 100

    A zero ATR gives zero DIs and a zero DI sum gives DX = 0.
    """

    def __init__(self, period: int = 14, kind: KindLike = MovingAverageKind.WSMA):
        self.period = validate_period('period', period)
        self.kind = MovingAverageKind.parse(kind)
        self._atr = ATR(self.period, self.kind)
        self._plus_dm = create_moving_average(self.kind, self.period)
        self._minus_dm = create_moving_average(self.kind, self.period)
        self._prior_candle: Optional[Candle] = None
        self._last_candle: Optional[Candle] = None
        self.pdi: Optional[Decimal] = None
        self.mdi: Optional[Decimal] = None
        super().__init__(
            required_samples=self._plus_dm.required_samples + 1,
            period=self.period,
            kind=self.kind.value,
        )

    def _next(self, candle: Candle, replace: bool) -> Optional[Decimal]:
        if not replace:
            self._prior_candle = self._last_candle
        self._last_candle = candle

        self._feed(self._atr, candle, replace)
        self.pdi = self.mdi = None
        prior = self._prior_candle
        if prior is None:
            return None

        up_move = candle.high - prior.high
        down_move = prior.low - candle.low
        plus_dm = up_move if up_move > down_move and up_move > ZERO else ZERO
        minus_dm = down_move if down_move > up_move and down_move > ZERO else ZERO
        self._feed(self._plus_dm, plus_dm, replace)
        self._feed(self._minus_dm, minus_dm, replace)

        plus, minus, atr = self._plus_dm.result(), self._minus_dm.result(), self._atr.result()
        if plus is None or minus is None or atr is None:
            return None

        if atr == ZERO:
            self.pdi = self.mdi = ZERO
        else:
            self.pdi = plus / atr * HUNDRED
            self.mdi = minus / atr * HUNDRED

        di_sum = self.pdi + self.mdi
        if di_sum == ZERO:
            return ZERO
        return abs(self.pdi - self.mdi) / di_sum * HUNDRED

    def _reset_state(self) -> None:
        self._atr.reset()
        self._plus_dm.reset()
        self._minus_dm.reset()
        self._prior_candle = None
        self._last_candle = None
        self.pdi = None
        self.mdi = None


class ADX(CandleIndicator):
    """
    Average Directional Index: moving average (Wilder's by default) of DX.
    """

    def __init__(self, period: int = 14, kind: KindLike = MovingAverageKind.WSMA):
        self._dx = DX(period, kind)
        self._average = create_moving_average(self._dx.kind, self._dx.period)
        super().__init__(
            required_samples=self._dx.required_samples + self._average.required_samples - 1,
            period=self._dx.period,
            kind=self._dx.kind.value,
        )

    @property
    def dx(self) -> Optional[Decimal]:
        return self._dx.result()

    @property
    def pdi(self) -> Optional[Decimal]:
        return self._dx.pdi

    @property
    def mdi(self) -> Optional[Decimal]:
        return self._dx.mdi

    def _next(self, candle: Candle, replace: bool) -> Optional[Decimal]:
        self._feed(self._dx, candle, replace)
        dx = self._dx.result()
        if dx is None:
            return None

        self._feed(self._average, dx, replace)
        return self._average.result()

    def _reset_state(self) -> None:
        self._dx.reset()
        self._average.reset()
