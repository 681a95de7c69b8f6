"""Cosine basis transform system.

Projects an image onto the first num_x x num_y cosine basis functions and
back. For a W x H image the basis for coefficient (i, j) at pixel (w, h) is

    cos(pi * w * i / W) * cos(pi * h * j / H)

Both directions are separable, so they are evaluated as two small basis
matrices contracted with einsum instead of per-pixel loops.
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from blurhash_ecs.components.coefficients import MAX_COMPONENTS, Coefficients
from blurhash_ecs.components.image import RGBA, ReconRGBA
from blurhash_ecs.core.color import linear_to_srgb, srgb_to_linear
from blurhash_ecs.core.system import System
from blurhash_ecs.core.world import World
from blurhash_ecs.errors import BlurhashRangeError


def basis_matrix(size: int, count: int) -> np.ndarray:
    """Return the (size, count) matrix of cos(pi * p * k / size)."""
    positions = np.arange(size, dtype=np.float64)
    frequencies = np.arange(count, dtype=np.float64)
    return np.cos(np.pi * positions[:, None] * frequencies[None, :] / size)


class CosineBasis(System):
    """2D discrete cosine transform restricted to low frequencies.

    Forward mode: RGBA -> Coefficients (linear light, normalised so the DC
    term is the average colour and AC terms are doubled)
    Inverse mode: Coefficients -> ReconRGBA
    """

    def __init__(
        self,
        x_components: int = 4,
        y_components: int = 3,
        width: int | None = None,
        height: int | None = None,
        linear: bool = False,
        mode: Literal["forward", "inverse"] = "forward",
    ):
        """Initialize cosine transform.

        Args:
            x_components: Horizontal basis count for forward mode (1-9)
            y_components: Vertical basis count for forward mode (1-9)
            width: Output width for inverse mode (required there)
            height: Output height for inverse mode (required there)
            linear: In inverse mode, keep linear float sums instead of sRGB bytes
            mode: 'forward' to analyse, 'inverse' to synthesise
        """
        super().__init__(mode=mode)
        if not (1 <= x_components <= MAX_COMPONENTS and 1 <= y_components <= MAX_COMPONENTS):
            raise BlurhashRangeError(
                "x and y component counts must be between 1 and 9 inclusive, "
                f"got {x_components}x{y_components}"
            )
        if mode == "inverse":
            if width is None or height is None or width <= 0 or height <= 0:
                raise BlurhashRangeError(
                    f"Output size must be positive, got {width}x{height}"
                )
        self.x_components = x_components
        self.y_components = y_components
        self.width = width or 0
        self.height = height or 0
        self.linear = linear

    def required_components(self) -> list[type]:
        if self.mode == "forward":
            return [RGBA]
        return [Coefficients]

    def produced_components(self) -> list[type]:
        if self.mode == "forward":
            return [Coefficients]
        return [ReconRGBA]

    def run(self, world: World, eids: list[int]) -> None:
        if self.mode == "forward":
            self._forward(world, eids)
        else:
            self._inverse(world, eids)

    def _forward(self, world: World, eids: list[int]) -> None:
        """Forward transform: RGBA -> Coefficients."""
        for eid in eids:
            pix = world.get_component(eid, RGBA).pix
            height, width = pix.shape[:2]
            linear = srgb_to_linear(pix[..., :3])

            basis_x = basis_matrix(width, self.x_components)
            basis_y = basis_matrix(height, self.y_components)
            values = np.einsum("hj,wi,hwc->jic", basis_y, basis_x, linear)

            norm = np.full((self.y_components, self.x_components, 1), 2.0)
            norm[0, 0] = 1.0
            values *= norm / (width * height)

            world.add_component(eid, Coefficients(values=values))

    def _inverse(self, world: World, eids: list[int]) -> None:
        """Inverse transform: Coefficients -> ReconRGBA."""
        for eid in eids:
            coeffs = world.get_component(eid, Coefficients)
            basis_x = basis_matrix(self.width, coeffs.num_x)
            basis_y = basis_matrix(self.height, coeffs.num_y)
            linear = np.einsum("hj,wi,jic->hwc", basis_y, basis_x, coeffs.values)

            if self.linear:
                world.add_component(eid, ReconRGBA(pix=linear, colorspace="linear"))
                continue

            pix = np.empty((self.height, self.width, 4), dtype=np.uint8)
            pix[..., :3] = linear_to_srgb(linear)
            pix[..., 3] = 255
            world.add_component(eid, ReconRGBA(pix=pix))
