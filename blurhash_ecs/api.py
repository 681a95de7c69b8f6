"""High-level API for blurhash encoding and decoding.

Provides encode() and decode() plus validation helpers. Each call builds
a private World, runs the codec systems through a pipeline and clears the
World before returning.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Sequence, Union

import numpy as np

from blurhash_ecs.components.coefficients import QuantizedCoefficients
from blurhash_ecs.components.image import ReconRGBA
from blurhash_ecs.config import load_config
from blurhash_ecs.core.color import maximum_value
from blurhash_ecs.core.serialization import (
    components,
    deserialize_blurhash,
    is_valid,
    serialize_blurhash,
)
from blurhash_ecs.core.world import World
from blurhash_ecs.errors import BlurhashRangeError
from blurhash_ecs.systems.cosine import CosineBasis
from blurhash_ecs.systems.quantize import QuantizeBlurhash

logger = logging.getLogger(__name__)

PixelBuffer = Union[bytes, bytearray, memoryview, Sequence[int], np.ndarray]
ConfigPath = Union[str, os.PathLike, None]

__all__ = [
    "components",
    "decode",
    "decode_array",
    "encode",
    "encode_image",
    "get_blurhash_info",
    "is_valid",
]


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise BlurhashRangeError(f"width and height must be positive, got {width}x{height}")


def encode(
    width: int,
    height: int,
    pixel_bytes: PixelBuffer,
    x_components: int | None = None,
    y_components: int | None = None,
    config_path: ConfigPath = None,
) -> str:
    """Encode interleaved RGBA pixels to a blurhash string.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        pixel_bytes: width * height * 4 RGBA bytes, row-major (alpha ignored)
        x_components: Horizontal basis count 1-9 (config default: 4)
        y_components: Vertical basis count 1-9 (config default: 3)
        config_path: Optional TOML file with codec defaults

    Returns:
        Blurhash string of length 4 + 2 * x_components * y_components

    Raises:
        BlurhashRangeError: If dimensions, component counts or the buffer
            size are invalid

    Example:
        >>> pixels = bytes([255, 0, 0, 255]) * 16
        >>> encode(4, 4, pixels, 1, 1)
        '00TI:j'
    """
    _check_size(width, height)
    if isinstance(pixel_bytes, (bytes, bytearray, memoryview)):
        pixels = np.frombuffer(pixel_bytes, dtype=np.uint8)
    else:
        pixels = np.asarray(pixel_bytes, dtype=np.uint8).ravel()

    expected = width * height * 4
    if pixels.size != expected:
        raise BlurhashRangeError(
            f"Pixel buffer holds {pixels.size} bytes, expected {expected} "
            f"for {width}x{height} RGBA"
        )
    return encode_image(
        pixels.reshape(height, width, 4),
        x_components=x_components,
        y_components=y_components,
        config_path=config_path,
    )


def encode_image(
    image: np.ndarray,
    x_components: int | None = None,
    y_components: int | None = None,
    config_path: ConfigPath = None,
) -> str:
    """Encode an (H, W, 3) or (H, W, 4) uint8 image to a blurhash string.

    Raises:
        TypeError: If image is not a numpy array
        BlurhashRangeError: If image shape or component counts are invalid
    """
    if not isinstance(image, np.ndarray):
        raise TypeError(f"Expected ndarray, got {type(image)}")
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise BlurhashRangeError(f"Expected shape (H, W, 3) or (H, W, 4), got {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise BlurhashRangeError(f"Image must not be empty, got {image.shape}")

    config = load_config(config_path)
    if x_components is None:
        x_components = config.x_components
    if y_components is None:
        y_components = config.y_components

    rgba = np.full(image.shape[:2] + (4,), 255, dtype=np.uint8)
    rgba[..., : image.shape[2]] = image

    logger.debug(
        "Encoding %dx%d image with %dx%d components",
        image.shape[1],
        image.shape[0],
        x_components,
        y_components,
    )

    world = World()
    try:
        entity = world.spawn_image(rgba)
        quantized = (
            world.pipe(entity)
            .to(CosineBasis(x_components=x_components, y_components=y_components))
            .to(QuantizeBlurhash(mode="forward"))
            .out(QuantizedCoefficients)
        )
        return serialize_blurhash(quantized)
    finally:
        world.clear()


def decode_array(
    width: int,
    height: int,
    blurhash: str,
    punch: float | None = None,
    linear: bool = False,
    config_path: ConfigPath = None,
) -> np.ndarray:
    """Decode a blurhash to a numpy image.

    Args:
        width: Output width in pixels
        height: Output height in pixels
        blurhash: Blurhash string
        punch: AC contrast multiplier > 0 (config default: 1.0)
        linear: Return linear-light float sums instead of sRGB bytes
        config_path: Optional TOML file with codec defaults

    Returns:
        (height, width, 4) uint8 RGBA array with opaque alpha, or
        (height, width, 3) float64 array when linear is True

    Raises:
        BlurhashFormatError: If the blurhash is malformed
        BlurhashRangeError: If width, height or punch is not positive
    """
    quantized = deserialize_blurhash(blurhash)
    _check_size(width, height)
    if punch is None:
        punch = load_config(config_path).punch

    logger.debug(
        "Decoding %dx%d blurhash to %dx%d (punch=%s)",
        quantized.num_x,
        quantized.num_y,
        width,
        height,
        punch,
    )

    world = World()
    try:
        entity = world.spawn_blurhash(quantized)
        recon: ReconRGBA = (
            world.pipe(entity)
            .to(QuantizeBlurhash(punch=punch, mode="inverse"))
            .to(CosineBasis(width=width, height=height, linear=linear, mode="inverse"))
            .out(ReconRGBA)
        )
        return recon.pix
    finally:
        world.clear()


def decode(
    width: int,
    height: int,
    blurhash: str,
    punch: float | None = None,
    config_path: ConfigPath = None,
) -> list[list[list[int]]]:
    """Decode a blurhash into rows of [R, G, B, 255] pixels.

    The nested list can be handed to image libraries directly or
    flattened for a canvas.

    Raises:
        BlurhashFormatError: If the blurhash is malformed
        BlurhashRangeError: If width, height or punch is not positive
    """
    pixels = decode_array(width, height, blurhash, punch=punch, config_path=config_path)
    return pixels.tolist()  # type: ignore[no-any-return]


def get_blurhash_info(blurhash: str) -> dict[str, Any]:
    """Describe a blurhash without decoding pixels.

    Returns:
        Dictionary with keys: num_x, num_y, quantized_max_ac, maximum_value,
        average_color (sRGB byte triple of the DC term)

    Raises:
        BlurhashFormatError: If the blurhash is malformed
    """
    quantized = deserialize_blurhash(blurhash)
    dc = quantized.dc
    return {
        "num_x": quantized.num_x,
        "num_y": quantized.num_y,
        "quantized_max_ac": quantized.quantized_max_ac,
        "maximum_value": maximum_value(quantized.quantized_max_ac),
        "average_color": ((dc >> 16) & 0xFF, (dc >> 8) & 0xFF, dc & 0xFF),
    }
