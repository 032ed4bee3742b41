"""Ranking of magnitude-spectrum bins into reportable periodicity peaks."""

import logging
from enum import Enum
from typing import NamedTuple, Optional

from numpy.typing import ArrayLike
from scipy import signal

from periodicity_screener.validation import as_signal

logger = logging.getLogger(__name__)

__all__ = ['Peak', 'FrequencyBasis', 'top_peaks', 'peak_report']

DEFAULT_NUM_PEAKS = 3
NYQUIST_FREQUENCY = 0.5  # cycles per sample

# Reporting precision (ranking always uses full precision)
FREQUENCY_DECIMALS = 4
WAVELENGTH_DECIMALS = 1
MAGNITUDE_DECIMALS = 1


class FrequencyBasis(str, Enum):
    """Sample count that bin indices are normalized against."""

    PADDED = "padded"  # index / M, M = padded transform length
    ORIGINAL = "original"  # index / N, N = profile length before padding


class Peak(NamedTuple):
    """A non-DC spectrum bin with its physical interpretation."""

    bin_index: int
    frequency: float  # cycles per sample (pixel)
    wavelength_pixels: float  # 1 / frequency, inf when frequency is 0
    magnitude: float

    def rounded(self) -> "Peak":
        """Copy with reporting precision applied."""
        return self._replace(
            frequency=round(self.frequency, FREQUENCY_DECIMALS),
            wavelength_pixels=round(self.wavelength_pixels, WAVELENGTH_DECIMALS),
            magnitude=round(self.magnitude, MAGNITUDE_DECIMALS),
        )


def _frequency_scale(
    num_bins: int, basis: FrequencyBasis, original_length: Optional[int]
) -> float:
    if basis == FrequencyBasis.ORIGINAL:
        if original_length is None or original_length <= 0:
            raise ValueError(
                f"original_length must be positive for the original basis, got {original_length}"
            )
        return NYQUIST_FREQUENCY / (original_length / 2)
    return NYQUIST_FREQUENCY / num_bins


def top_peaks(
    spectrum: ArrayLike,
    k: int = DEFAULT_NUM_PEAKS,
    *,
    basis: FrequencyBasis = FrequencyBasis.PADDED,
    original_length: Optional[int] = None,
    local_maxima_only: bool = False,
) -> list[Peak]:
    """
    Report the k strongest non-DC bins of a magnitude spectrum.

    Bin 0 is never reported. Bins are ranked by magnitude, descending; the
    sort is stable, so among equal magnitudes the lower bin ranks first.

    With the padded basis, frequency = index / len(spectrum) * 0.5, i.e.
    index / M for an M-point transform. With the original basis,
    frequency = index / original_length, which normalizes against the
    profile length before zero-padding. Since M/2 < original_length <= M,
    frequencies on the original basis can exceed the 0.5 Nyquist bound
    (e.g. bin 63 of a 100-sample profile reports 0.63).

    Args:
        spectrum: Magnitude spectrum (first M/2 bins)
        k: Maximum number of peaks to return
        basis: Length the bin index is normalized against
        original_length: Unpadded profile length, required for the original basis
        local_maxima_only: Only consider bins that are local maxima, so a
            line smeared across neighbouring bins is reported once

    Returns:
        Up to k Peak records at full precision, strongest first

    Raises:
        ValueError: If k is negative or original_length is missing for the
            original basis
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")

    magnitudes = as_signal(spectrum)
    num_bins = magnitudes.size
    if num_bins == 0 or k == 0:
        return []

    scale = _frequency_scale(num_bins, FrequencyBasis(basis), original_length)

    if local_maxima_only:
        # find_peaks never reports the first or last sample
        candidates = [int(i) for i in signal.find_peaks(magnitudes)[0]]
    else:
        candidates = list(range(1, num_bins))

    ranked = sorted(candidates, key=lambda i: magnitudes[i], reverse=True)[:k]

    peaks = []
    for index in ranked:
        frequency = index * scale
        wavelength = 1.0 / frequency if frequency != 0 else float("inf")
        peaks.append(
            Peak(
                bin_index=index,
                frequency=frequency,
                wavelength_pixels=wavelength,
                magnitude=float(magnitudes[index]),
            )
        )

    logger.debug(
        f"Selected {len(peaks)} of {len(candidates)} candidate bins "
        f"(basis: {FrequencyBasis(basis).value}, local_maxima_only: {local_maxima_only})"
    )

    return peaks


def peak_report(peaks: list[Peak]) -> list[dict]:
    """
    Rounded table rows for display, ranked 1..n in list order.

    Args:
        peaks: Peaks as returned by top_peaks

    Returns:
        List of dicts with keys rank, bin_index, frequency,
        wavelength_pixels and magnitude
    """
    return [
        {"rank": rank, **peak.rounded()._asdict()}
        for rank, peak in enumerate(peaks, 1)
    ]
