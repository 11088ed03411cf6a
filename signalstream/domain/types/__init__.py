"""Domain Types Package"""

from .indicator_types import (
    BandsResult,
    Candle,
    IndicatorState,
    MACDResult,
    MovingAverageKind,
    StochasticResult,
)

__all__ = [
    'BandsResult',
    'Candle',
    'IndicatorState',
    'MACDResult',
    'MovingAverageKind',
    'StochasticResult',
]
