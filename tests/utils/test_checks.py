from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from synth_returns.exceptions import InvalidInputError
from synth_returns.utils.checks import (
    as_float_array,
    assert_min_length,
    assert_no_nans,
    validate_noise_frac,
    validate_returns_frame,
)


def _frame(**columns) -> pd.DataFrame:
    length = len(next(iter(columns.values())))
    return pd.DataFrame(columns, index=pd.date_range("2024-01-01", periods=length))


def test_invalid_input_error_is_value_error() -> None:
    assert issubclass(InvalidInputError, ValueError)


def test_assert_no_nans_reports_location() -> None:
    frame = _frame(A=[0.1, np.nan, 0.2])
    with pytest.raises(InvalidInputError, match="row 1, col 'A'"):
        assert_no_nans(frame, context="unit")


def test_assert_no_nans_rejects_inf_in_series() -> None:
    with pytest.raises(InvalidInputError):
        assert_no_nans(pd.Series([0.1, np.inf]))


def test_assert_no_nans_unsupported_type() -> None:
    with pytest.raises(TypeError):
        assert_no_nans([0.1, 0.2])


def test_assert_min_length() -> None:
    assert_min_length(2)
    with pytest.raises(InvalidInputError, match=">= 2"):
        assert_min_length(1)


@pytest.mark.parametrize("value", [-0.1, float("nan"), float("inf")])
def test_validate_noise_frac_rejects(value: float) -> None:
    with pytest.raises(InvalidInputError):
        validate_noise_frac(value)


def test_validate_noise_frac_accepts_zero() -> None:
    assert validate_noise_frac(0) == 0.0


def test_as_float_array_copies_input() -> None:
    source = np.array([1.0, 2.0, 3.0])
    arr = as_float_array(source)
    arr[0] = 10.0
    assert source[0] == 1.0


@pytest.mark.parametrize(
    ("value", "error"),
    [
        ([1.0], InvalidInputError),
        ([1.0, np.nan], InvalidInputError),
        ([[1.0, 2.0], [3.0, 4.0]], InvalidInputError),
        (["a", "b"], TypeError),
        (pd.DataFrame({"A": [1.0, 2.0]}), TypeError),
    ],
)
def test_as_float_array_rejects(value, error) -> None:
    with pytest.raises(error):
        as_float_array(value)


def test_validate_returns_frame_accepts_clean_panel() -> None:
    validate_returns_frame(_frame(A=[0.1, 0.2], B=[0.0, -0.1]))


def test_validate_returns_frame_requires_frame() -> None:
    with pytest.raises(TypeError):
        validate_returns_frame(np.zeros((3, 2)))


def test_validate_returns_frame_rejects_empty_columns() -> None:
    empty = pd.DataFrame(index=pd.date_range("2024-01-01", periods=3))
    with pytest.raises(InvalidInputError, match="no columns"):
        validate_returns_frame(empty)


def test_validate_returns_frame_rejects_duplicate_columns() -> None:
    frame = _frame(A=[0.1, 0.2], B=[0.3, 0.4])
    frame.columns = ["A", "A"]
    with pytest.raises(InvalidInputError, match="unique"):
        validate_returns_frame(frame)


def test_validate_returns_frame_rejects_short_panel() -> None:
    with pytest.raises(InvalidInputError, match="at least"):
        validate_returns_frame(_frame(A=[0.1]))
