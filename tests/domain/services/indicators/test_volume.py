"""
Unit tests for On-Balance Volume
"""

from decimal import Decimal

import pytest

from signalstream.domain.services.indicators import OBV
from signalstream.domain.types.indicator_types import Candle


def bar(close, volume):
    return Candle(high=close, low=close, close=close, volume=volume)


@pytest.mark.fast
@pytest.mark.unit
class TestOBV:

    def test_running_total(self):
        obv = OBV()
        results = []
        for close, volume in [(10, 100), (11, 50), (11, 30), (9, 20)]:
            obv.update(bar(close, volume))
            results.append(obv.result())
        assert results == [None, Decimal(150), Decimal(150), Decimal(130)]

    def test_stable_from_second_candle(self):
        obv = OBV()
        obv.update(bar(10, 100))
        assert not obv.is_stable()
        obv.update(bar(10, 100))
        assert obv.is_stable()
        assert obv.result() == Decimal(100)

    def test_amend_recomputes_from_prior_total(self):
        obv = OBV()
        obv.update(bar(10, 100))
        obv.update(bar(11, 50))
        obv.amend(bar(9, 50))
        assert obv.result() == Decimal(50)

    def test_amend_first_candle_reseeds(self):
        obv = OBV()
        obv.update(bar(10, 100))
        obv.amend(bar(10, 40))
        obv.update(bar(12, 10))
        assert obv.result() == Decimal(50)

    def test_missing_volume_counts_as_zero(self):
        obv = OBV()
        obv.update({"high": "10", "low": "9", "close": "10", "volume": "5"})
        obv.update({"high": "11", "low": "9", "close": "11"})
        assert obv.result() == Decimal(5)
