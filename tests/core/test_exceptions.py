"""
Unit tests for the indicator exception hierarchy
"""

import pytest

from signalstream.core.exceptions import (
    ErrorKind,
    IndicatorError,
    InvalidAmendmentError,
    InvalidParameterError,
    InvalidPeriodError,
    InvalidPeriodRelationError,
    NotEnoughSamplesError,
)


@pytest.mark.fast
@pytest.mark.unit
class TestIndicatorErrors:

    @pytest.mark.parametrize("error, kind", [
        (InvalidPeriodError("period", 0), ErrorKind.INVALID_PERIOD),
        (InvalidPeriodRelationError("fast_period", 26, "slow_period", 12), ErrorKind.INVALID_PERIOD_RELATION),
        (InvalidParameterError("width", -1, "must be positive"), ErrorKind.INVALID_PARAMETER),
        (InvalidAmendmentError("SMA"), ErrorKind.INVALID_AMENDMENT),
        (NotEnoughSamplesError("SMA", 1, 3), ErrorKind.NOT_ENOUGH_SAMPLES),
    ])
    def test_kind_and_base_class(self, error, kind):
        assert isinstance(error, IndicatorError)
        assert error.kind is kind
        assert str(error) == error.message

    def test_period_error_carries_offending_value(self):
        error = InvalidPeriodError("period", -3)
        assert error.name == "period"
        assert error.value == -3
        assert "-3" in error.message

    def test_relation_error_names_both_periods(self):
        error = InvalidPeriodRelationError("fast_period", 26, "slow_period", 12)
        assert "fast_period" in error.message
        assert "slow_period" in error.message

    def test_not_enough_samples_message(self):
        assert "needs 3 samples" in NotEnoughSamplesError("SMA", 1, 3).message
        assert "no result after 5 samples" in NotEnoughSamplesError("ROC", 5).message

    def test_error_kind_is_string_valued(self):
        assert ErrorKind.INVALID_AMENDMENT == "invalid_amendment"
