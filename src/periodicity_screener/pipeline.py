"""Fixed compositions of derivative, rectification, smoothing and magnitude spectrum."""

import logging
from enum import Enum
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike

from periodicity_screener.derivative import (
    DEFAULT_SMOOTHING_WINDOW,
    compute_derivative,
    half_wave_rectify,
    rectify,
    smooth,
)
from periodicity_screener.fft import magnitude_spectrum
from periodicity_screener.validation import as_signal

logger = logging.getLogger(__name__)

__all__ = [
    'SpectralAlgorithm',
    'fft_spectrum',
    'derivative_spectrum',
    'abs_derivative_spectrum',
    'half_wave_derivative_spectrum',
    'smoothed_fft_spectrum',
    'compute_spectrum',
]


class SpectralAlgorithm(str, Enum):
    """Spectrum variants available for periodicity detection."""

    FFT = "fft"
    DERIVATIVE_FFT = "derivative_fft"
    ABS_DERIVATIVE_FFT = "abs_derivative_fft"
    HALF_WAVE_DERIVATIVE_FFT = "half_wave_derivative_fft"
    SMOOTHED_FFT = "smoothed_fft"


def _short_circuit(signal: np.ndarray) -> np.ndarray:
    # A single sample has no frequency content beyond DC
    return np.zeros(signal.size, dtype=np.float64)


def fft_spectrum(values: ArrayLike) -> np.ndarray:
    """Magnitude spectrum of the raw profile."""
    return magnitude_spectrum(values)


def derivative_spectrum(values: ArrayLike) -> np.ndarray:
    """
    Magnitude spectrum of the profile's first derivative.

    Differentiating suppresses slow intensity trends and emphasizes edges,
    so regular edge spacing shows up as a spectral line.

    Returns [0.0] for a single sample and an empty array for empty input.
    """
    signal = as_signal(values)
    if signal.size <= 1:
        return _short_circuit(signal)
    return magnitude_spectrum(compute_derivative(signal))


def abs_derivative_spectrum(values: ArrayLike) -> np.ndarray:
    """
    Magnitude spectrum of |derivative|.

    Rising and falling edges contribute alike, so features whose edges
    alternate direction at a fixed spacing are still detected at that
    spacing.
    """
    signal = as_signal(values)
    if signal.size <= 1:
        return _short_circuit(signal)
    return magnitude_spectrum(rectify(compute_derivative(signal)))


def half_wave_derivative_spectrum(values: ArrayLike) -> np.ndarray:
    """Magnitude spectrum of the derivative with negative slopes clipped to zero."""
    signal = as_signal(values)
    if signal.size <= 1:
        return _short_circuit(signal)
    return magnitude_spectrum(half_wave_rectify(compute_derivative(signal)))


def smoothed_fft_spectrum(
    values: ArrayLike, window_size: int = DEFAULT_SMOOTHING_WINDOW
) -> np.ndarray:
    """Magnitude spectrum of the moving-average smoothed profile."""
    return magnitude_spectrum(smooth(values, window_size))


_ALGORITHMS: dict[SpectralAlgorithm, Callable[..., np.ndarray]] = {
    SpectralAlgorithm.FFT: fft_spectrum,
    SpectralAlgorithm.DERIVATIVE_FFT: derivative_spectrum,
    SpectralAlgorithm.ABS_DERIVATIVE_FFT: abs_derivative_spectrum,
    SpectralAlgorithm.HALF_WAVE_DERIVATIVE_FFT: half_wave_derivative_spectrum,
    SpectralAlgorithm.SMOOTHED_FFT: smoothed_fft_spectrum,
}


def compute_spectrum(
    values: ArrayLike,
    algorithm: SpectralAlgorithm = SpectralAlgorithm.DERIVATIVE_FFT,
    smoothing_window: int = DEFAULT_SMOOTHING_WINDOW,
) -> np.ndarray:
    """
    Compute the spectrum selected by algorithm.

    Args:
        values: 1D profile
        algorithm: SpectralAlgorithm member or its string value
        smoothing_window: Moving-average width, used by the smoothed algorithm only

    Returns:
        Magnitude spectrum
    """
    algorithm = SpectralAlgorithm(algorithm)
    logger.debug(f"Computing {algorithm.value} spectrum")
    if algorithm == SpectralAlgorithm.SMOOTHED_FFT:
        return _ALGORITHMS[algorithm](values, window_size=smoothing_window)
    return _ALGORITHMS[algorithm](values)
