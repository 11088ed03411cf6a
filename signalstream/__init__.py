"""
signalstream - streaming technical-analysis indicators over exact decimals
=========================================================================

Usage:
    from signalstream import SMA, MACD

    sma = SMA(3)
    for price in ("1", "2", "3"):
        sma.update(price)
    sma.result()   # Decimal('2')
    sma.amend("6")
    sma.result()   # Decimal('3')
"""

from .core.exceptions import (
    ErrorKind,
    IndicatorError,
    InvalidAmendmentError,
    InvalidParameterError,
    InvalidPeriodError,
    InvalidPeriodRelationError,
    NotEnoughSamplesError,
)
from .core.numeric import configure_decimal_context, to_decimal
from .domain.types.indicator_types import (
    BandsResult,
    Candle,
    IndicatorState,
    MACDResult,
    MovingAverageKind,
    StochasticResult,
)
from .domain.services.indicators import *  # noqa: F401,F403
from .domain.services.indicators import __all__ as _indicator_names

__version__ = "0.1.0"

__all__ = [
    'ErrorKind',
    'IndicatorError',
    'InvalidAmendmentError',
    'InvalidParameterError',
    'InvalidPeriodError',
    'InvalidPeriodRelationError',
    'NotEnoughSamplesError',
    'configure_decimal_context',
    'to_decimal',
    'BandsResult',
    'Candle',
    'IndicatorState',
    'MACDResult',
    'MovingAverageKind',
    'StochasticResult',
] + list(_indicator_names)
