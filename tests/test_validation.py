"""Tests for profile validation."""

import numpy as np
import pytest

from periodicity_screener.validation import NonFiniteSampleError, as_signal


def test_as_signal_converts_to_float64():
    """Test conversion of integer lists to float64 arrays."""
    signal = as_signal([1, 2, 3])

    assert signal.dtype == np.float64
    np.testing.assert_array_equal(signal, [1.0, 2.0, 3.0])


def test_as_signal_returns_copy():
    """Test that the input array is never aliased."""
    values = np.array([1.0, 2.0, 3.0])
    signal = as_signal(values)
    signal[0] = 99.0

    assert values[0] == 1.0


def test_as_signal_empty():
    """Test empty input is accepted."""
    assert as_signal([]).size == 0


def test_as_signal_rejects_2d():
    """Test input validation for non-1D arrays."""
    with pytest.raises(ValueError, match="Expected 1D array"):
        as_signal(np.zeros((4, 4)))


def test_as_signal_non_finite():
    """Test NaN/inf handling with and without checking."""
    values = [1.0, np.nan, 2.0, np.inf]

    # Unchecked: passed through
    signal = as_signal(values)
    assert np.isnan(signal[1])

    with pytest.raises(NonFiniteSampleError, match="first at index 1"):
        as_signal(values, check_finite=True)


def test_non_finite_error_is_value_error():
    """Test that callers catching ValueError also catch non-finite input."""
    with pytest.raises(ValueError):
        as_signal([np.inf], check_finite=True)
