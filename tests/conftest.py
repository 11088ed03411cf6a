"""
Shared pytest fixtures for the unit test suite
==============================================
"""

import pytest

from signalstream.core.numeric import reset_decimal_context
from signalstream.infrastructure.config import reset_settings_cache

from tests.fixtures.market_data import candle_series, price_series, sample_ohlcv  # noqa: F401


@pytest.fixture(autouse=True)
def isolated_settings():
    """Every test starts and ends with freshly loaded settings and decimal context."""
    reset_settings_cache()
    reset_decimal_context()
    yield
    reset_settings_cache()
    reset_decimal_context()
