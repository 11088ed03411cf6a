"""
Incremental Indicator System
============================
O(1) (or O(period)) indicator updates over rolling windows and owned
sub-indicators, with amendment of the latest sample.

Module structure:
- incremental_base: contract, RollingWindow, window/candle bases
- moving_averages: SMA, WMA, EMA, RMA, WSMA, DEMA, DMA
- momentum: MOM, ROC, CG, LINREG
- volatility: MAD, TR, ATR, BBANDS, BBW, AccelerationBands
- volume: OBV
- oscillators: RSI, MACD, STOCH, StochasticRSI, CCI, AO, AC, DX, ADX
- indicator_factory: create_indicator by name

Usage:
    from signalstream.domain.services.indicators import EMA, create_indicator

    ema = EMA(20)
    ema.update("50000")
    ema.amend("50010")

    rsi = create_indicator("RSI", period=14)
"""

from .incremental_base import (
    CandleIndicator,
    IncrementalIndicator,
    RollingWindow,
    WindowBasedIndicator,
)
from .moving_averages import (
    DEMA,
    DMA,
    EMA,
    RMA,
    SMA,
    WMA,
    WSMA,
    ExponentialIndicator,
    create_moving_average,
)
from .momentum import CG, LINREG, MOM, ROC
from .volatility import ATR, BBANDS, BBW, MAD, TR, AccelerationBands
from .volume import OBV
from .oscillators import AC, ADX, AO, CCI, DX, MACD, RSI, STOCH, StochasticRSI
from .indicator_factory import INDICATOR_TYPES, create_indicator

__all__ = [
    # Base
    'IncrementalIndicator',
    'WindowBasedIndicator',
    'CandleIndicator',
    'RollingWindow',
    # Moving averages
    'SMA',
    'WMA',
    'EMA',
    'RMA',
    'WSMA',
    'DEMA',
    'DMA',
    'ExponentialIndicator',
    'create_moving_average',
    # Momentum
    'MOM',
    'ROC',
    'CG',
    'LINREG',
    # Volatility
    'MAD',
    'TR',
    'ATR',
    'BBANDS',
    'BBW',
    'AccelerationBands',
    # Volume
    'OBV',
    # Oscillators
    'RSI',
    'MACD',
    'STOCH',
    'StochasticRSI',
    'CCI',
    'AO',
    'AC',
    'DX',
    'ADX',
    # Factory
    'INDICATOR_TYPES',
    'create_indicator',
]
