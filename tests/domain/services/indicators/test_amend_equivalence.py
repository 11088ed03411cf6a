"""
Amendment and determinism properties checked across every indicator.

update(a); amend(b) must leave an indicator exactly where a fresh
instance fed the same history plus update(b) would be.
"""

from decimal import Decimal

import pytest

from signalstream.domain.services.indicators import create_indicator
from signalstream.domain.types.indicator_types import Candle

from tests.fixtures.market_data import PRICE_SERIES, make_candles

PRICE_INDICATORS = [
    ("SMA", {"period": 5}),
    ("WMA", {"period": 5}),
    ("EMA", {"period": 5}),
    ("RMA", {"period": 5}),
    ("WSMA", {"period": 5}),
    ("DEMA", {"period": 4}),
    ("DMA", {"short_period": 3, "long_period": 6, "short_kind": "WMA"}),
    ("MOM", {"period": 4}),
    ("ROC", {"period": 4}),
    ("CG", {"period": 4, "signal_period": 3}),
    ("LINREG", {"period": 5}),
    ("MAD", {"period": 5}),
    ("BBANDS", {"period": 5}),
    ("BBW", {"period": 5}),
    ("RSI", {"period": 5}),
    ("MACD", {"fast_period": 3, "slow_period": 6, "signal_period": 4}),
    ("STOCHRSI", {"rsi_period": 4, "d_period": 2}),
]

CANDLE_INDICATORS = [
    ("TR", {}),
    ("ATR", {"period": 4}),
    ("ATR", {"period": 4, "kind": "EMA"}),
    ("OBV", {}),
    ("ABANDS", {"period": 4}),
    ("STOCH", {"k_period": 5, "d_period": 3}),
    ("CCI", {"period": 5}),
    ("AO", {"fast_period": 3, "slow_period": 6}),
    ("AC", {"fast_period": 3, "slow_period": 6, "signal_period": 3}),
    ("DX", {"period": 4}),
    ("ADX", {"period": 4}),
]


def price_samples():
    return [Decimal(p) for p in PRICE_SERIES]


def price_replacements(history):
    last = history[-1]
    return [last * Decimal("1.1"), history[-2] if len(history) > 1 else last, Decimal(0)]


def candle_replacements(history):
    last = history[-1]
    shocked = Candle(
        high=last.high * Decimal("1.05"),
        low=last.low * Decimal("0.97"),
        close=last.high * Decimal("1.04"),
        volume=last.volume * 2,
    )
    return [shocked, history[-2] if len(history) > 1 else last, Candle(high=last.close, low=last.close, close=last.close)]


def snapshot(indicator):
    return (
        indicator.count,
        indicator.result(),
        indicator.is_stable(),
        indicator.highest,
        indicator.lowest,
    )


def assert_amend_equivalent(name, params, samples, replacements):
    for end in range(1, len(samples) + 1):
        history = samples[:end]
        for replacement in replacements(history):
            amended = create_indicator(name, **params)
            for sample in history:
                amended.update(sample)
            amended.amend(replacement)

            fresh = create_indicator(name, **params)
            for sample in history[:-1]:
                fresh.update(sample)
            fresh.update(replacement)

            assert snapshot(amended) == snapshot(fresh), f"{name} diverged after {end} samples"

            # state keeps evolving identically after the amendment
            amended.update(history[0])
            fresh.update(history[0])
            assert snapshot(amended) == snapshot(fresh), f"{name} diverged after amend + update"


@pytest.mark.unit
class TestAmendEquivalence:

    @pytest.mark.parametrize("name, params", PRICE_INDICATORS)
    def test_price_indicators(self, name, params):
        assert_amend_equivalent(name, params, price_samples(), price_replacements)

    @pytest.mark.parametrize("name, params", CANDLE_INDICATORS)
    def test_candle_indicators(self, name, params):
        assert_amend_equivalent(name, params, make_candles(), candle_replacements)

    def test_repeated_amendments(self):
        amended = create_indicator("MACD", fast_period=3, slow_period=6, signal_period=4)
        fresh = create_indicator("MACD", fast_period=3, slow_period=6, signal_period=4)
        samples = price_samples()
        for sample in samples:
            amended.update(Decimal(0))
            amended.amend(sample * 2)
            amended.amend(sample)
            fresh.update(sample)
            assert amended.result() == fresh.result()


@pytest.mark.fast
@pytest.mark.unit
class TestDeterminism:

    @pytest.mark.parametrize("name, params", PRICE_INDICATORS)
    def test_identical_instances_agree(self, name, params):
        first, second = create_indicator(name, **params), create_indicator(name, **params)
        for sample in price_samples():
            first.update(sample)
            second.update(sample)
            assert first.result() == second.result()

    @pytest.mark.parametrize("name, params", CANDLE_INDICATORS)
    def test_candle_instances_agree(self, name, params):
        first, second = create_indicator(name, **params), create_indicator(name, **params)
        for candle in make_candles():
            first.update(candle)
            second.update(candle)
            assert first.result() == second.result()
