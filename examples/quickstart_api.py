#!/usr/bin/env python3
"""Quickstart example using the high-level encode/decode API.

This example demonstrates the simplest way to use the package:
- Load an image (or generate a gradient)
- Encode it to a blurhash string with encode_image()
- Decode the string back to a small placeholder with decode_array()
- Compare the placeholder against the source
"""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from blurhash_ecs.api import decode_array, encode_image, get_blurhash_info


def _load_image(path: Path | None) -> np.ndarray | None:
    if path is None or not path.exists():
        return None
    try:
        from PIL import Image
    except ImportError:
        return None
    image = Image.open(path).convert("RGB")
    return np.array(image)


def _save_image(path: Path, image: np.ndarray) -> bool:
    try:
        from PIL import Image
    except ImportError:
        return False
    Image.fromarray(image).save(path)
    return True


def _gradient(size: int) -> np.ndarray:
    ramp = np.linspace(0, 255, size).astype(np.uint8)
    image = np.empty((size, size, 3), dtype=np.uint8)
    image[..., 0] = ramp[None, :]
    image[..., 1] = ramp[:, None]
    image[..., 2] = ramp[::-1][None, :]
    return image


def main() -> None:
    parser = argparse.ArgumentParser(description="Quickstart API example")
    parser.add_argument("--input", type=Path, default=None, help="Input image path")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("examples/placeholder.png"),
        help="Output path for the decoded placeholder",
    )
    parser.add_argument("--size", type=int, default=64, help="Gradient size if no input image")
    parser.add_argument("--x-components", type=int, default=None, help="Horizontal components (1-9)")
    parser.add_argument("--y-components", type=int, default=None, help="Vertical components (1-9)")
    parser.add_argument("--punch", type=float, default=None, help="Decode contrast multiplier")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML file with a [blurhash] table",
    )
    args = parser.parse_args()

    image = _load_image(args.input)
    if image is None:
        print("No readable input image found; generating gradient instead")
        image = _gradient(args.size)
    else:
        print(f"Loaded image: {args.input}")

    blurhash = encode_image(
        image,
        x_components=args.x_components,
        y_components=args.y_components,
        config_path=args.config,
    )
    info = get_blurhash_info(blurhash)
    print(f"Blurhash: {blurhash}")
    print(f"Grid: {info['num_x']}x{info['num_y']}  average colour: {info['average_color']}")

    height, width = image.shape[:2]
    placeholder = decode_array(
        width, height, blurhash, punch=args.punch, config_path=args.config
    )
    error = np.abs(placeholder[..., :3].astype(int) - image[..., :3].astype(int)).mean()
    print(f"Mean absolute error: {error:.2f}")

    if _save_image(args.output, placeholder):
        print(f"Placeholder saved to: {args.output}")
    else:
        print("Pillow not installed; skipping image save")


if __name__ == "__main__":
    main()
