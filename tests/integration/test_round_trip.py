"""Integration tests: encode an image, decode it back, compare."""

import numpy as np
import pytest

from blurhash_ecs import components, decode_array, encode_image, get_blurhash_info


def _gradient(width: int, height: int) -> np.ndarray:
    x = np.arange(width) / width
    y = np.arange(height) / height
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[..., 0] = (x * 255).astype(np.uint8)[None, :]
    image[..., 1] = (y * 255).astype(np.uint8)[:, None]
    image[..., 2] = 128
    return image


@pytest.mark.parametrize("grid", [(1, 1), (4, 3), (9, 9)])
def test_components_survive(grid: tuple[int, int]) -> None:
    """Test the requested grid is recoverable from the hash."""
    blurhash = encode_image(_gradient(24, 16), *grid)
    assert components(blurhash) == grid


def test_gradient_reconstruction() -> None:
    """Test a smooth gradient decodes close to the original."""
    image = _gradient(32, 32)
    blurhash = encode_image(image, 4, 3)
    decoded = decode_array(32, 32, blurhash)[..., :3]

    error = np.abs(decoded.astype(int) - image.astype(int))
    assert error.mean() < 30


def test_two_tone_layout() -> None:
    """Test a red-left/blue-right image keeps its layout."""
    image = np.zeros((16, 32, 3), dtype=np.uint8)
    image[:, :16, 0] = 255
    image[:, 16:, 2] = 255

    decoded = decode_array(32, 16, encode_image(image, 4, 3)).astype(int)
    left = decoded[:, :8]
    right = decoded[:, -8:]
    assert left[..., 0].mean() > left[..., 2].mean()
    assert right[..., 2].mean() > right[..., 0].mean()


def test_decode_is_stable_under_reencode() -> None:
    """Test re-encoding a decoded image keeps grid and average colour."""
    blurhash = encode_image(_gradient(20, 20), 3, 3)
    again = encode_image(decode_array(20, 20, blurhash), 3, 3)

    assert components(again) == (3, 3)
    before = np.array(get_blurhash_info(blurhash)["average_color"])
    after = np.array(get_blurhash_info(again)["average_color"])
    assert np.abs(before - after).max() <= 8
