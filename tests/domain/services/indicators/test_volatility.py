"""
Unit tests for volatility indicators (MAD, TR, ATR, BBANDS, BBW, Acceleration Bands)
"""

from decimal import Decimal

import pytest

from signalstream.core.exceptions import InvalidParameterError
from signalstream.domain.services.indicators import ATR, BBANDS, BBW, MAD, TR, AccelerationBands
from signalstream.domain.types.indicator_types import BandsResult, Candle


def feed(indicator, samples):
    results = []
    for sample in samples:
        indicator.update(sample)
        results.append(indicator.result())
    return results


TR_CANDLES = [
    Candle(high="10", low="8", close="9"),
    Candle(high="12", low="11", close="11.5"),
    Candle(high="11", low="7", close="8"),
]


@pytest.mark.fast
@pytest.mark.unit
class TestMAD:

    def test_mean_absolute_deviation(self):
        assert feed(MAD(4), [2, 4, 6, 8]) == [None, None, None, Decimal(2)]


@pytest.mark.fast
@pytest.mark.unit
class TestTrueRange:

    def test_first_candle_uses_high_minus_low(self):
        assert feed(TR(), TR_CANDLES) == [Decimal(2), Decimal(3), Decimal("4.5")]

    def test_amend_keeps_previous_close(self):
        tr = TR()
        feed(tr, TR_CANDLES[:2])
        tr.amend(Candle(high="9.5", low="9", close="9"))
        assert tr.result() == Decimal("0.5")

    def test_accepts_mappings(self):
        tr = TR()
        tr.update({"high": "5", "low": "3", "close": "4"})
        assert tr.result() == Decimal(2)


@pytest.mark.fast
@pytest.mark.unit
class TestATR:

    def test_wilder_smoothing_by_default(self):
        atr = ATR(2)
        assert feed(atr, TR_CANDLES) == [None, Decimal("2.5"), Decimal("3.5")]
        assert atr.true_range == Decimal("4.5")

    def test_selectable_kind(self):
        assert feed(ATR(2, kind="sma"), TR_CANDLES) == [None, Decimal("2.5"), Decimal("3.75")]


@pytest.mark.fast
@pytest.mark.unit
class TestBollingerBands:

    def test_population_deviation_bands(self):
        bands = BBANDS(8)
        feed(bands, [2, 4, 4, 4, 5, 5, 7, 9])
        assert bands.result() == BandsResult(upper=Decimal(9), middle=Decimal(5), lower=Decimal(1))

    def test_constant_window_collapses_bands(self):
        bands = BBANDS(3, deviation_multiplier="1.5")
        feed(bands, [4, 4, 4])
        result = bands.result()
        assert result.upper == result.middle == result.lower == Decimal(4)

    def test_invalid_multiplier(self):
        with pytest.raises(InvalidParameterError):
            BBANDS(20, deviation_multiplier=0)

    def test_width(self):
        bbw = BBW(8)
        feed(bbw, [2, 4, 4, 4, 5, 5, 7, 9])
        assert bbw.result() == Decimal("1.6")
        assert bbw.bands.middle == Decimal(5)

    def test_width_undefined_on_zero_middle(self):
        bbw = BBW(2)
        feed(bbw, [-1, 1])
        assert bbw.result() is None
        assert bbw.is_stable()


@pytest.mark.fast
@pytest.mark.unit
class TestAccelerationBands:

    def test_single_candle_bands(self):
        bands = AccelerationBands(1)
        bands.update(Candle(high="12", low="8", close="10"))
        assert bands.result() == BandsResult(
            upper=Decimal("21.6"), middle=Decimal(10), lower=Decimal("1.6")
        )

    def test_zero_price_sum_gives_zero_coefficient(self):
        bands = AccelerationBands(1)
        bands.update(Candle(high="0", low="0", close="0"))
        assert bands.result() == BandsResult(upper=Decimal(0), middle=Decimal(0), lower=Decimal(0))

    def test_invalid_width(self):
        with pytest.raises(InvalidParameterError):
            AccelerationBands(20, width=-4)
