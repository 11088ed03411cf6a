"""
Shared test fixtures for the test suite.

This module provides common test data and fixtures used across multiple test files.
"""

from tests.fixtures.market_data import *

__all__ = [
    # Market data fixtures
    'price_series',
    'candle_series',
    'sample_ohlcv',
]
