"""
Shared Indicator Types
======================

Common data structures used across all streaming indicators: the candle
sample, the moving-average kind vocabulary and the records returned by
multi-valued (composite) indicators.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ...core.numeric import DecimalSource, ZERO, to_decimal


class MovingAverageKind(str, Enum):
    """Closed set of moving averages selectable inside composite indicators"""
    SMA = "SMA"
    EMA = "EMA"
    WMA = "WMA"
    RMA = "RMA"
    WSMA = "WSMA"
    DEMA = "DEMA"

    @classmethod
    def parse(cls, value: Union['MovingAverageKind', str]) -> 'MovingAverageKind':
        """Accept an enum member or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            allowed = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown moving average kind: {value!r}. Expected one of: {allowed}") from None


@dataclass(frozen=True)
class Candle:
    """
    One OHLCV observation.

    Fields are converted to Decimal on construction; open and volume are
    optional because most candle indicators only read high/low/close.
    """
    high: Decimal
    low: Decimal
    close: Decimal
    open: Optional[Decimal] = None
    volume: Decimal = ZERO

    def __post_init__(self):
        object.__setattr__(self, 'high', to_decimal(self.high))
        object.__setattr__(self, 'low', to_decimal(self.low))
        object.__setattr__(self, 'close', to_decimal(self.close))
        if self.open is not None:
            object.__setattr__(self, 'open', to_decimal(self.open))
        object.__setattr__(self, 'volume', to_decimal(self.volume))

    @classmethod
    def from_mapping(cls, data: Mapping[str, DecimalSource]) -> 'Candle':
        """Build a candle from a dict such as a parsed exchange kline"""
        return cls(
            high=data['high'],
            low=data['low'],
            close=data['close'],
            open=data.get('open'),
            volume=data.get('volume', ZERO),
        )

    @property
    def median_price(self) -> Decimal:
        return (self.high + self.low) / 2

    @property
    def typical_price(self) -> Decimal:
        return (self.high + self.low + self.close) / 3


@dataclass(frozen=True)
class MACDResult:
    """MACD line, its signal line and their difference"""
    macd: Decimal
    signal: Decimal
    histogram: Decimal


@dataclass(frozen=True)
class BandsResult:
    """Upper/middle/lower band triple (Bollinger, Acceleration Bands)"""
    upper: Decimal
    middle: Decimal
    lower: Decimal


@dataclass(frozen=True)
class StochasticResult:
    """
    %K and %D of a stochastic oscillator.

    stoch_k is None on a tick whose high/low range is zero.
    """
    stoch_k: Optional[Decimal]
    stoch_d: Decimal


@dataclass
class IndicatorState:
    """State snapshot for serialization/debugging"""
    count: int
    value: Any
    metadata: Dict[str, Any] = field(default_factory=dict)
