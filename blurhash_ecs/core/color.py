"""sRGB/linear conversion and DC/AC coefficient quantization.

All functions accept Python scalars or numpy arrays. Scalar input gives a
scalar result; array input is converted element-wise.

DC values pack an sRGB triple into 24 bits. AC values pack three signed
channels as a 3-digit base-19 number, each digit centred at 9, with a
square-root response so that small amplitudes get finer steps:

    q = clamp(floor(sign_pow(v / maximum, 0.5) * 9 + 9.5), 0, 18)
    v = sign_pow((q - 9) / 9, 2) * maximum
"""

from __future__ import annotations

from typing import Any

import numpy as np

AC_LEVELS = 19
AC_CENTER = 9
MAX_AC_LEVELS = 83
MAX_AC_SCALE = 166.0


def srgb_to_linear(value: Any) -> Any:
    """Convert 8-bit sRGB channel values (0-255) to linear light (0.0-1.0)."""
    v = np.asarray(value, dtype=np.float64) / 255.0
    linear = np.where(v <= 0.04045, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)
    if linear.ndim == 0:
        return float(linear)
    return linear


def linear_to_srgb(value: Any) -> Any:
    """Convert linear light to 8-bit sRGB with round-half-up.

    Input is clamped to [0, 1] before conversion and the rounded byte is
    clamped to [0, 255] again.
    """
    v = np.clip(np.asarray(value, dtype=np.float64), 0.0, 1.0)
    srgb = np.where(
        v <= 0.0031308,
        v * 12.92 * 255 + 0.5,
        (1.055 * np.power(v, 1 / 2.4) - 0.055) * 255 + 0.5,
    )
    srgb = np.clip(np.floor(srgb), 0, 255)
    if srgb.ndim == 0:
        return int(srgb)
    return srgb.astype(np.uint8)


def sign_pow(value: Any, exp: float) -> Any:
    """Sign-preserving power: ``sign(value) * |value| ** exp``."""
    result = np.copysign(np.power(np.abs(value), exp), value)
    if np.ndim(result) == 0:
        return float(result)
    return result


def maximum_value(quantized_max_ac: int) -> float:
    """Real AC amplitude bound for a quantized maximum AC digit."""
    return (quantized_max_ac + 1) / MAX_AC_SCALE


def quantize_max_ac(actual_max: float) -> int:
    """Quantize the largest absolute AC channel to a single Base83 digit."""
    quantized = np.floor(actual_max * MAX_AC_SCALE - 0.5)
    return int(np.clip(quantized, 0, MAX_AC_LEVELS - 1))


def decode_dc(value: Any) -> np.ndarray:
    """Unpack 24-bit sRGB DC values to linear RGB.

    Args:
        value: Packed integer (or integer array) ``r << 16 | g << 8 | b``

    Returns:
        Linear RGB with a trailing axis of length 3
    """
    packed = np.asarray(value, dtype=np.int64)
    channels = np.stack([packed >> 16, (packed >> 8) & 0xFF, packed & 0xFF], axis=-1)
    return np.asarray(srgb_to_linear(channels), dtype=np.float64)


def encode_dc(rgb: Any) -> int:
    """Pack a linear RGB average colour into a 24-bit sRGB integer."""
    r, g, b = (linear_to_srgb(channel) for channel in np.asarray(rgb, dtype=np.float64))
    return (r << 16) + (g << 8) + b


def decode_ac(value: Any, maximum: float) -> np.ndarray:
    """Unpack base-19 AC values to signed linear RGB amplitudes.

    Args:
        value: Packed integer (or integer array) in [0, 6858]
        maximum: Effective amplitude bound (maximum value times punch)

    Returns:
        Linear RGB amplitudes with a trailing axis of length 3
    """
    packed = np.asarray(value, dtype=np.int64)
    quant = np.stack(
        [
            packed // (AC_LEVELS * AC_LEVELS),
            (packed // AC_LEVELS) % AC_LEVELS,
            packed % AC_LEVELS,
        ],
        axis=-1,
    ).astype(np.float64)
    return np.asarray(sign_pow((quant - AC_CENTER) / AC_CENTER, 2.0) * maximum)


def encode_ac(rgb: Any, maximum: float) -> Any:
    """Pack linear RGB amplitudes into base-19 AC values.

    Args:
        rgb: Amplitudes with a trailing axis of length 3
        maximum: Amplitude bound the values are normalised against

    Returns:
        Packed integer, or integer array for batched input
    """
    normalized = np.asarray(rgb, dtype=np.float64) / maximum
    quant = np.floor(sign_pow(normalized, 0.5) * AC_CENTER + AC_CENTER + 0.5)
    quant = np.clip(quant, 0, AC_LEVELS - 1).astype(np.int64)
    packed = (
        quant[..., 0] * AC_LEVELS * AC_LEVELS
        + quant[..., 1] * AC_LEVELS
        + quant[..., 2]
    )
    if packed.ndim == 0:
        return int(packed)
    return packed
