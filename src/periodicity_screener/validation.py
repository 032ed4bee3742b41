"""Input validation for one-dimensional intensity profiles."""

import logging

import numpy as np
from numpy.typing import ArrayLike

logger = logging.getLogger(__name__)

__all__ = ['NonFiniteSampleError', 'as_signal']


class NonFiniteSampleError(ValueError):
    """Raised when a profile contains NaN or infinite samples."""


def as_signal(values: ArrayLike, check_finite: bool = False) -> np.ndarray:
    """
    Convert an array-like profile into a 1D float64 signal.

    The returned array is always a fresh copy, so callers may mutate it
    without touching the input.

    Args:
        values: Sequence of real samples (list, tuple or ndarray)
        check_finite: If True, reject NaN and +/-inf samples

    Returns:
        1D float64 array

    Raises:
        ValueError: If the input is not one-dimensional
        NonFiniteSampleError: If check_finite is set and a sample is not finite
    """
    signal = np.array(values, dtype=np.float64)
    if signal.ndim != 1:
        raise ValueError(f"Expected 1D array, got {signal.ndim}D array with shape {signal.shape}")

    if check_finite and signal.size and not np.all(np.isfinite(signal)):
        bad = np.flatnonzero(~np.isfinite(signal))
        raise NonFiniteSampleError(
            f"Signal contains {bad.size} non-finite sample(s), first at index {bad[0]}"
        )

    return signal
