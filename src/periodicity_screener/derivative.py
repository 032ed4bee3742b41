"""Derivative estimation, rectification and smoothing for intensity profiles."""

import logging

import numpy as np
from numpy.typing import ArrayLike

from periodicity_screener.validation import as_signal

logger = logging.getLogger(__name__)

__all__ = ['compute_derivative', 'rectify', 'half_wave_rectify', 'smooth']

DEFAULT_SMOOTHING_WINDOW = 15  # samples


def compute_derivative(values: ArrayLike) -> np.ndarray:
    """
    Approximate the first derivative of a sampled signal.

    Uses a forward difference at the first sample, a second-order central
    difference for interior samples and a backward difference at the last
    sample, so the output has the same length as the input.

    Args:
        values: 1D sequence of real samples

    Returns:
        Derivative estimate (float64, same length as input). A single
        sample yields [0.0] and an empty input yields an empty array.
    """
    signal = as_signal(values)
    n = signal.size

    if n <= 1:
        return np.zeros(n, dtype=np.float64)

    result = np.empty(n, dtype=np.float64)
    result[0] = signal[1] - signal[0]
    result[1:-1] = (signal[2:] - signal[:-2]) / 2
    result[-1] = signal[-1] - signal[-2]

    logger.debug(f"Computed derivative of {n} samples")
    return result


def rectify(values: ArrayLike) -> np.ndarray:
    """Element-wise absolute value (full-wave rectification)."""
    return np.abs(as_signal(values))


def half_wave_rectify(values: ArrayLike) -> np.ndarray:
    """Keep positive samples, zero out the rest."""
    return np.maximum(as_signal(values), 0.0)


def smooth(values: ArrayLike, window_size: int = DEFAULT_SMOOTHING_WINDOW) -> np.ndarray:
    """
    Moving-average low-pass filter over a centred window.

    Each sample becomes the mean of the samples within window_size // 2 on
    either side. Near the ends the window is truncated and the mean is taken
    over the samples that exist, so no padding values leak in.

    Args:
        values: 1D sequence of real samples
        window_size: Window width in samples; even widths behave like the
            next odd width

    Returns:
        Smoothed signal (float64, same length). A copy of the input when
        window_size <= 1 or the input is empty.
    """
    signal = as_signal(values)
    n = signal.size
    if n == 0 or window_size <= 1:
        return signal

    half = window_size // 2
    kernel = np.ones(2 * half + 1)
    sums = np.convolve(signal, kernel)[half:half + n]
    counts = np.convolve(np.ones(n), kernel)[half:half + n]

    logger.debug(f"Smoothed {n} samples with window {2 * half + 1}")
    return sums / counts
