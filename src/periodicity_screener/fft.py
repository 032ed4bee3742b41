"""In-place radix-2 FFT and magnitude spectrum for real-valued profiles.

The transform works on an interleaved complex buffer
``(re0, im0, re1, im1, ...)`` whose complex length is a power of two.
Profiles of any other length are zero-padded up to the next power of two
before transforming.
"""

import logging

import numpy as np
from numpy.typing import ArrayLike

from periodicity_screener.validation import as_signal

logger = logging.getLogger(__name__)

__all__ = [
    'next_power_of_two',
    'pad_to_power_of_two',
    'build_complex_buffer',
    'bit_reverse_permute',
    'fft_in_place',
    'magnitude_spectrum',
]


def next_power_of_two(n: int) -> int:
    """
    Smallest power of two that is >= n.

    Args:
        n: Non-negative sample count

    Returns:
        Power of two (1 for n <= 1)
    """
    if n < 0:
        raise ValueError(f"Length must be non-negative, got {n}")
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def pad_to_power_of_two(values: ArrayLike) -> np.ndarray:
    """
    Zero-pad a signal up to the next power-of-two length.

    Returns a copy even when no padding is needed.
    """
    signal = as_signal(values)
    n = signal.size
    if n == 0:
        return signal

    padded_length = next_power_of_two(n)
    if padded_length == n:
        return signal

    padded = np.zeros(padded_length, dtype=np.float64)
    padded[:n] = signal
    logger.debug(f"Zero-padded signal from {n} to {padded_length} samples")
    return padded


def build_complex_buffer(values: ArrayLike) -> np.ndarray:
    """Interleave real samples with zero imaginary parts."""
    signal = as_signal(values)
    buffer = np.zeros(2 * signal.size, dtype=np.float64)
    buffer[0::2] = signal
    return buffer


def _complex_length(buffer: np.ndarray) -> int:
    if buffer.ndim != 1 or buffer.size % 2:
        raise ValueError(
            f"Expected interleaved 1D buffer of even length, got shape {buffer.shape}"
        )
    if not np.issubdtype(buffer.dtype, np.floating) or not buffer.flags.c_contiguous:
        raise ValueError("Buffer must be a contiguous floating-point array")
    n = buffer.size // 2
    if n and n & (n - 1):
        raise ValueError(f"Complex length must be a power of 2, got {n}")
    return n


def bit_reverse_permute(buffer: np.ndarray) -> np.ndarray:
    """
    Reorder an interleaved complex buffer into bit-reversed index order, in place.

    The partner index ``j`` is tracked incrementally: adding one to a
    bit-reversed counter means adding half the length and carrying downwards.
    Each pair is swapped once (when i < j), real and imaginary lanes together.

    Args:
        buffer: Interleaved float64 buffer, complex length a power of 2

    Returns:
        The same buffer, permuted
    """
    n = _complex_length(buffer)
    pairs = buffer.reshape(-1, 2)

    j = 0
    for i in range(n - 1):
        if i < j:
            pairs[[i, j]] = pairs[[j, i]]

        k = n // 2
        while k <= j:
            j -= k
            k //= 2
        j += k

    return buffer


def fft_in_place(buffer: np.ndarray) -> np.ndarray:
    """
    Forward radix-2 Cooley-Tukey FFT on an interleaved complex buffer, in place.

    For each stage with butterfly span m, the principal twiddle
    exp(-2*pi*i/m) is evaluated directly, and the running twiddle for
    offset j is advanced by complex multiplication with it. Re-deriving the
    principal twiddle per stage keeps recurrence drift confined to a stage.
    For a fixed offset j the butterfly is applied to every group of the
    stage at once.

    Args:
        buffer: Interleaved float64 buffer, complex length a power of 2

    Returns:
        The same buffer, holding the transform

    Raises:
        ValueError: If the buffer is not 1D, has odd size, or its complex
            length is not a power of 2
    """
    n = _complex_length(buffer)
    if n <= 1:
        return buffer

    bit_reverse_permute(buffer)

    re = buffer[0::2]
    im = buffer[1::2]
    num_stages = n.bit_length() - 1

    for s in range(1, num_stages + 1):
        m = 1 << s
        half = m // 2
        omega_m_re = np.cos(2 * np.pi / m)
        omega_m_im = -np.sin(2 * np.pi / m)

        omega_re = 1.0
        omega_im = 0.0
        for j in range(half):
            top = slice(j, n, m)
            bottom = slice(j + half, n, m)

            t_re = omega_re * re[bottom] - omega_im * im[bottom]
            t_im = omega_re * im[bottom] + omega_im * re[bottom]

            re[bottom] = re[top] - t_re
            im[bottom] = im[top] - t_im
            re[top] += t_re
            im[top] += t_im

            omega_re, omega_im = (
                omega_re * omega_m_re - omega_im * omega_m_im,
                omega_re * omega_m_im + omega_im * omega_m_re,
            )

    logger.debug(f"Computed {n}-point FFT in {num_stages} stages")
    return buffer


def magnitude_spectrum(values: ArrayLike) -> np.ndarray:
    """
    Magnitude spectrum of a real signal up to (not including) Nyquist.

    The signal is zero-padded to M = next power of two, transformed, and
    sqrt(re^2 + im^2) is returned for the first M/2 bins. Real-input spectra
    are symmetric, so the upper half is dropped.

    NaN or infinite samples are not checked here and propagate through the
    whole spectrum.

    Args:
        values: 1D sequence of real samples

    Returns:
        float64 array of length M/2 (empty for inputs of length 0 or 1)
    """
    padded = pad_to_power_of_two(values)
    if padded.size == 0:
        return np.zeros(0, dtype=np.float64)

    buffer = fft_in_place(build_complex_buffer(padded))

    num_bins = padded.size // 2
    re = buffer[0:2 * num_bins:2]
    im = buffer[1:2 * num_bins:2]
    return np.sqrt(re * re + im * im)
