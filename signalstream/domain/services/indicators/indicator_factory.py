"""
Indicator Factory
=================
Create any streaming indicator from its name and keyword parameters.
"""

from typing import Dict, Type

from ....core.logger import get_logger
from .incremental_base import IncrementalIndicator
from .momentum import CG, LINREG, MOM, ROC
from .moving_averages import DEMA, DMA, EMA, RMA, SMA, WMA, WSMA
from .oscillators import AC, ADX, AO, CCI, DX, MACD, RSI, STOCH, StochasticRSI
from .volatility import ATR, BBANDS, BBW, MAD, TR, AccelerationBands
from .volume import OBV

logger = get_logger(__name__)


INDICATOR_TYPES: Dict[str, Type[IncrementalIndicator]] = {
    # Moving averages
    "SMA": SMA,
    "WMA": WMA,
    "EMA": EMA,
    "RMA": RMA,
    "WSMA": WSMA,
    "DEMA": DEMA,
    "DMA": DMA,
    # Momentum
    "MOM": MOM,
    "ROC": ROC,
    "CG": CG,
    "LINREG": LINREG,
    # Volatility
    "MAD": MAD,
    "TR": TR,
    "ATR": ATR,
    "BBANDS": BBANDS,
    "BBW": BBW,
    "ABANDS": AccelerationBands,
    # Volume
    "OBV": OBV,
    # Oscillators
    "RSI": RSI,
    "MACD": MACD,
    "STOCH": STOCH,
    "STOCHRSI": StochasticRSI,
    "CCI": CCI,
    "AO": AO,
    "AC": AC,
    "DX": DX,
    "ADX": ADX,
}


def create_indicator(indicator_type: str, **params) -> IncrementalIndicator:
    """
    Factory function to create streaming indicators.

    Args:
        indicator_type: Registry name, case-insensitive ("sma", "MACD", "StochRSI", ...)
        **params: Constructor parameters of the indicator class

    Returns:
        Fresh indicator instance

    Raises:
        ValueError: Unknown indicator type
        IndicatorError: Invalid parameters (raised by the constructor)

    Example:
        macd = create_indicator("MACD", fast_period=12, slow_period=26, signal_period=9)
    """
    key = indicator_type.upper()
    indicator_class = INDICATOR_TYPES.get(key)
    if indicator_class is None:
        logger.warning("indicator_factory.unknown_type", {
            "indicator_type": indicator_type,
            "available": sorted(INDICATOR_TYPES)
        })
        raise ValueError(f"Unknown indicator type: {indicator_type}")

    indicator = indicator_class(**params)
    logger.debug("indicator_factory.created", {
        "indicator_type": key,
        "params": {k: str(v) for k, v in params.items()}
    })
    return indicator


__all__ = [
    'INDICATOR_TYPES',
    'create_indicator',
]
