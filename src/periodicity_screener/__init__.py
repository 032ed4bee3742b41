"""Periodicity Screener - periodic structure detection in projection profiles"""

__version__ = "0.1.0"

from .derivative import compute_derivative, half_wave_rectify, rectify, smooth
from .detector import DetectionResult, PeriodicityDetector, ProfileAnalysis
from .fft import magnitude_spectrum, next_power_of_two
from .peaks import FrequencyBasis, Peak, peak_report, top_peaks
from .pipeline import (
    SpectralAlgorithm,
    abs_derivative_spectrum,
    compute_spectrum,
    derivative_spectrum,
    fft_spectrum,
    half_wave_derivative_spectrum,
    smoothed_fft_spectrum,
)
from .projection import ProjectionExtractor
from .validation import NonFiniteSampleError, as_signal

__all__ = [
    "compute_derivative",
    "rectify",
    "half_wave_rectify",
    "smooth",
    "magnitude_spectrum",
    "next_power_of_two",
    "Peak",
    "FrequencyBasis",
    "top_peaks",
    "peak_report",
    "SpectralAlgorithm",
    "fft_spectrum",
    "derivative_spectrum",
    "abs_derivative_spectrum",
    "half_wave_derivative_spectrum",
    "smoothed_fft_spectrum",
    "compute_spectrum",
    "ProjectionExtractor",
    "PeriodicityDetector",
    "ProfileAnalysis",
    "DetectionResult",
    "NonFiniteSampleError",
    "as_signal",
]
