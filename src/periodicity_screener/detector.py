"""Periodicity detector - runs a spectral algorithm over image projections."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Optional, Union

import numpy as np
from numpy.typing import ArrayLike
from pydantic import Field, field_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

from periodicity_screener.derivative import DEFAULT_SMOOTHING_WINDOW
from periodicity_screener.fft import next_power_of_two
from periodicity_screener.peaks import FrequencyBasis, Peak, top_peaks
from periodicity_screener.pipeline import SpectralAlgorithm, compute_spectrum
from periodicity_screener.projection import ProjectionExtractor
from periodicity_screener.validation import as_signal

logger = logging.getLogger(__name__)

__all__ = ['PeriodicityDetector', 'ProfileAnalysis', 'DetectionResult']

DEFAULT_PEAKS_PER_AXIS = 8


@dataclass
class ProfileAnalysis:
    """Spectrum and ranked peaks of a single projection profile."""

    spectrum: np.ndarray
    peaks: list[Peak]
    signal_length: int  # Profile length before padding
    padded_length: int  # Transform length M (0 for an empty profile)


class DetectionResult(NamedTuple):
    """Periodicity analysis of both projections of an image."""

    image_path: str
    algorithm: SpectralAlgorithm
    horizontal: ProfileAnalysis  # Row sums (one sample per image row)
    vertical: ProfileAnalysis  # Column sums (one sample per image column)


@pydantic_dataclass
class PeriodicityDetector:
    """
    Detects regular structure (halftone grids, scan lines, repeated print
    features) from the row and column projections of an image.
    """

    algorithm: SpectralAlgorithm = Field(default=SpectralAlgorithm.DERIVATIVE_FFT)
    num_peaks: int = Field(default=DEFAULT_PEAKS_PER_AXIS, ge=1)
    frequency_basis: FrequencyBasis = Field(default=FrequencyBasis.PADDED)
    local_maxima_only: bool = Field(default=False)
    reject_non_finite: bool = Field(default=True)
    max_signal_length: Optional[int] = Field(default=None, gt=0)
    invert_intensity: bool = Field(default=True)
    smoothing_window: int = Field(default=DEFAULT_SMOOTHING_WINDOW, ge=1)

    @field_validator("max_signal_length")
    @classmethod
    def validate_max_signal_length(cls, v: Optional[int]) -> Optional[int]:
        """Warn when the cap leaves most of the padded buffer unused."""
        if v is not None and v & (v - 1):
            logger.warning(
                f"max_signal_length {v} is not a power of 2, "
                f"profiles may still be padded to {next_power_of_two(v)}"
            )
        return v

    def __post_init__(self):
        """Initialize the projection extractor."""
        self.projector = ProjectionExtractor(invert=self.invert_intensity)

    def analyze_profile(self, profile: ArrayLike) -> ProfileAnalysis:
        """
        Compute the configured spectrum of a profile and rank its peaks.

        Args:
            profile: 1D projection profile

        Returns:
            ProfileAnalysis with spectrum and peaks (no peaks for profiles
            shorter than 2 samples)

        Raises:
            NonFiniteSampleError: If reject_non_finite is set and the profile
                contains NaN or inf
            ValueError: If the profile is longer than max_signal_length
        """
        signal = as_signal(profile, check_finite=self.reject_non_finite)
        n = signal.size

        if self.max_signal_length is not None and n > self.max_signal_length:
            raise ValueError(
                f"Profile length {n} exceeds max_signal_length {self.max_signal_length}"
            )

        if n > 1 and np.ptp(signal) == 0:
            logger.warning("Profile is constant, no periodic structure to detect")

        spectrum = compute_spectrum(signal, self.algorithm, self.smoothing_window)

        peaks = []
        if n > 1:
            peaks = top_peaks(
                spectrum,
                self.num_peaks,
                basis=self.frequency_basis,
                original_length=n,
                local_maxima_only=self.local_maxima_only,
            )

        return ProfileAnalysis(
            spectrum=spectrum,
            peaks=peaks,
            signal_length=n,
            padded_length=next_power_of_two(n) if n else 0,
        )

    def analyze_array(self, image: np.ndarray, label: str = "<array>") -> DetectionResult:
        """
        Analyze both projections of an in-memory image.

        Args:
            image: Grayscale, RGB or RGBA image array
            label: Identifier stored as image_path in the result

        Returns:
            DetectionResult for the horizontal and vertical projections
        """
        horizontal, vertical = self.projector.compute_projections(image)

        result = DetectionResult(
            image_path=label,
            algorithm=self.algorithm,
            horizontal=self.analyze_profile(horizontal),
            vertical=self.analyze_profile(vertical),
        )

        logger.info(
            f"Analysis complete ({self.algorithm.value}): "
            f"horizontal={_describe(result.horizontal)}, vertical={_describe(result.vertical)}"
        )

        return result

    def analyze(self, image_path: Union[str, Path]) -> DetectionResult:
        """
        Analyze an image file for periodic structure.

        Args:
            image_path: Path to the image file

        Returns:
            DetectionResult with ranked peaks for each axis
        """
        logger.info(f"Analyzing image: {image_path}")
        image = self.projector.load_image(image_path)
        return self.analyze_array(image, label=str(image_path))

    def batch_analyze(
        self, image_paths: list[Union[str, Path]]
    ) -> list[DetectionResult]:
        """
        Analyze multiple images in batch.

        Args:
            image_paths: List of paths to image files

        Returns:
            List of DetectionResult objects
        """
        logger.info(f"Batch analyzing {len(image_paths)} images")
        return [self.analyze(path) for path in image_paths]


def _describe(analysis: ProfileAnalysis) -> str:
    if not analysis.peaks:
        return "no peaks"
    top = analysis.peaks[0]
    return f"bin {top.bin_index} ({top.wavelength_pixels:.1f} px)"
