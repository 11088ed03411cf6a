"""
Market data test fixtures.

Provides sample market data for testing:
- Price series (exact decimals)
- OHLCV candles
"""

from decimal import Decimal
from typing import List

import pytest

from signalstream.domain.types.indicator_types import Candle


# Twenty closes with rises, falls, a flat step and a gap
PRICE_SERIES = [
    "81.59", "81.06", "82.87", "83.00", "83.61", "83.15", "82.84", "83.99", "84.55", "84.36",
    "85.53", "86.54", "86.89", "87.77", "87.29", "87.29", "86.12", "85.40", "86.90", "88.05",
]

# (high, low, close, volume)
CANDLE_ROWS = [
    ("82.15", "81.29", "81.59", "5653100"),
    ("81.89", "80.64", "81.06", "6447400"),
    ("83.03", "81.31", "82.87", "7690900"),
    ("83.30", "82.65", "83.00", "3831400"),
    ("83.85", "83.07", "83.61", "4455100"),
    ("83.90", "83.11", "83.15", "3798000"),
    ("83.33", "82.49", "82.84", "3936200"),
    ("84.30", "82.30", "83.99", "4732000"),
    ("84.84", "84.15", "84.55", "4841300"),
    ("85.00", "84.11", "84.36", "3915300"),
    ("85.90", "84.03", "85.53", "6830800"),
    ("86.58", "85.39", "86.54", "6694100"),
    ("86.98", "85.76", "86.89", "5293600"),
    ("88.00", "87.17", "87.77", "7985800"),
    ("87.87", "87.01", "87.29", "4807900"),
    ("87.87", "87.01", "87.29", "4807900"),
    ("87.40", "86.00", "86.12", "5200000"),
    ("86.50", "85.10", "85.40", "6100000"),
    ("87.20", "85.30", "86.90", "5500000"),
    ("88.40", "86.80", "88.05", "7000000"),
]


def make_candles() -> List[Candle]:
    return [Candle(high=h, low=l, close=c, volume=v) for h, l, c, v in CANDLE_ROWS]


@pytest.fixture
def price_series() -> List[Decimal]:
    """Sample close prices as Decimals"""
    return [Decimal(p) for p in PRICE_SERIES]


@pytest.fixture
def candle_series() -> List[Candle]:
    """Sample OHLCV candles"""
    return make_candles()


@pytest.fixture
def sample_ohlcv():
    """Sample OHLCV candle data as an exchange-style mapping"""
    return {
        'symbol': 'BTC_USDT',
        'timeframe': '1m',
        'open': 49950.0,
        'high': 50100.0,
        'low': 49900.0,
        'close': 50000.0,
        'volume': 125.5,
    }
