"""Tests for peak extraction."""

import math

import numpy as np
import pytest

from periodicity_screener.fft import magnitude_spectrum
from periodicity_screener.peaks import FrequencyBasis, Peak, peak_report, top_peaks


def test_top_peaks_empty():
    """Test empty spectrum yields no peaks."""
    assert top_peaks([]) == []
    assert top_peaks(np.array([])) == []


def test_top_peaks_ranking():
    """Test ranking by magnitude with DC excluded."""
    peaks = top_peaks([100, 5, 50, 2, 30], 3)

    assert [p.bin_index for p in peaks] == [2, 4, 1]
    assert [p.magnitude for p in peaks] == [50.0, 30.0, 5.0]


def test_top_peaks_units():
    """Test frequency and wavelength from the padded spectrum length."""
    peaks = top_peaks([100, 5, 50, 2, 30], 3)

    # 5 bins: frequency = index / 5 * 0.5
    assert peaks[0].frequency == pytest.approx(0.2)
    assert peaks[0].wavelength_pixels == pytest.approx(5.0)
    assert peaks[1].frequency == pytest.approx(0.4)
    assert peaks[2].frequency == pytest.approx(0.1)
    assert peaks[2].wavelength_pixels == pytest.approx(10.0)


def test_top_peaks_excludes_dc():
    """Test bin 0 is never reported, however large."""
    peaks = top_peaks([1000.0, 1.0, 2.0], 5)

    assert [p.bin_index for p in peaks] == [2, 1]
    assert all(p.bin_index != 0 for p in peaks)


def test_top_peaks_stable_ties():
    """Test equal magnitudes keep ascending bin order."""
    peaks = top_peaks([9, 4, 7, 4, 7], 4)

    assert [p.bin_index for p in peaks] == [2, 4, 1, 3]


def test_top_peaks_fewer_than_k():
    """Test short spectra return fewer than k peaks."""
    assert [p.bin_index for p in top_peaks([10.0, 1.0], 3)] == [1]
    assert top_peaks([10.0], 3) == []


def test_top_peaks_k_validation():
    """Test k bounds."""
    assert top_peaks([1.0, 2.0, 3.0], 0) == []

    with pytest.raises(ValueError, match="k must be non-negative"):
        top_peaks([1.0, 2.0, 3.0], -1)


def test_top_peaks_default_k():
    """Test three peaks are returned by default."""
    assert len(top_peaks(np.arange(10.0))) == 3


def test_top_peaks_original_basis():
    """Test normalization against the unpadded profile length."""
    spectrum = np.zeros(64)
    spectrum[10] = 5.0

    padded = top_peaks(spectrum, 1)[0]
    original = top_peaks(spectrum, 1, basis=FrequencyBasis.ORIGINAL, original_length=100)[0]

    assert padded.frequency == pytest.approx(10 / 128)
    assert padded.wavelength_pixels == pytest.approx(12.8)
    assert original.frequency == pytest.approx(0.1)
    assert original.wavelength_pixels == pytest.approx(10.0)
    assert original.magnitude == padded.magnitude


def test_top_peaks_original_basis_requires_length():
    """Test original basis without a usable length."""
    with pytest.raises(ValueError, match="original_length"):
        top_peaks([1.0, 2.0], basis=FrequencyBasis.ORIGINAL)

    with pytest.raises(ValueError, match="original_length"):
        top_peaks([1.0, 2.0], basis="original", original_length=0)


def test_top_peaks_local_maxima_only():
    """Test shoulder bins of a peak are skipped."""
    spectrum = [50, 10, 40, 35, 5, 20, 3]

    assert [p.bin_index for p in top_peaks(spectrum, 3)] == [2, 3, 5]
    assert [p.bin_index for p in top_peaks(spectrum, 3, local_maxima_only=True)] == [2, 5]


def test_top_peaks_sinusoid():
    """Test an 8-cycle sinusoid over 128 samples peaks at bin 8."""
    n = 128
    signal = np.sin(2 * np.pi * 8 * np.arange(n) / n)

    peak = top_peaks(magnitude_spectrum(signal), 1)[0]

    assert peak.bin_index == 8
    assert peak.frequency == pytest.approx(0.0625)
    assert peak.wavelength_pixels == pytest.approx(16.0)


def test_peak_rounded():
    """Test reporting precision."""
    peak = Peak(bin_index=3, frequency=3 / 128, wavelength_pixels=128 / 3, magnitude=12.3456)

    rounded = peak.rounded()

    assert rounded.bin_index == 3
    assert rounded.frequency == 0.0234
    assert rounded.wavelength_pixels == 42.7
    assert rounded.magnitude == 12.3


def test_peak_rounded_infinite_wavelength():
    """Test infinite wavelength survives rounding."""
    peak = Peak(bin_index=1, frequency=0.0, wavelength_pixels=math.inf, magnitude=1.0)

    assert math.isinf(peak.rounded().wavelength_pixels)


def test_peak_report():
    """Test report rows carry 1-based ranks and rounded values."""
    rows = peak_report(top_peaks([100, 5, 50, 2, 30], 3))

    assert [row["rank"] for row in rows] == [1, 2, 3]
    assert rows[0] == {
        "rank": 1,
        "bin_index": 2,
        "frequency": 0.2,
        "wavelength_pixels": 5.0,
        "magnitude": 50.0,
    }
    assert peak_report([]) == []


def test_top_peaks_original_basis_above_nyquist():
    """Test original-basis frequencies are not capped at 0.5."""
    spectrum = np.zeros(64)
    spectrum[63] = 1.0

    peak = top_peaks(spectrum, 1, basis=FrequencyBasis.ORIGINAL, original_length=100)[0]

    assert peak.bin_index == 63
    assert peak.frequency == pytest.approx(0.63)
    assert peak.frequency > 0.5
