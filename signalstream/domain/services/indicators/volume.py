"""
Volume Indicators
=================
- OBV (On-Balance Volume)
"""

from decimal import Decimal
from typing import Optional

from ...types.indicator_types import Candle
from .incremental_base import CandleIndicator


class OBV(CandleIndicator):
    """
    On-balance volume.

    The running total starts at the first candle's volume. Each later
    candle adds its volume on a higher close, subtracts it on a lower
    close and leaves the total alone on an equal close.

    The first candle has no previous close, so the result is undefined
    until the second candle (required_samples = 2).
    """

    def __init__(self):
        super().__init__(required_samples=2)
        self._total: Optional[Decimal] = None
        self._last_close: Optional[Decimal] = None
        self._prior_total: Optional[Decimal] = None
        self._prior_close: Optional[Decimal] = None

    def _next(self, candle: Candle, replace: bool) -> Optional[Decimal]:
        if not replace:
            self._prior_total = self._total
            self._prior_close = self._last_close
        self._last_close = candle.close

        if self._prior_close is None:
            self._total = candle.volume
            return None

        if candle.close > self._prior_close:
            self._total = self._prior_total + candle.volume
        elif candle.close < self._prior_close:
            self._total = self._prior_total - candle.volume
        else:
            self._total = self._prior_total
        return self._total

    def _reset_state(self) -> None:
        self._total = None
        self._last_close = None
        self._prior_total = None
        self._prior_close = None
