"""Quantization system between linear coefficients and blurhash integers.

The DC term is stored as a packed sRGB colour. AC terms are normalised
against a shared amplitude bound, itself quantized to one Base83 digit, and
stored as base-19 triples.
"""

from __future__ import annotations

import math
from typing import Literal

import numpy as np

from blurhash_ecs.components.coefficients import Coefficients, QuantizedCoefficients
from blurhash_ecs.core.color import (
    decode_ac,
    decode_dc,
    encode_ac,
    encode_dc,
    maximum_value,
    quantize_max_ac,
)
from blurhash_ecs.core.system import System
from blurhash_ecs.core.world import World
from blurhash_ecs.errors import BlurhashRangeError


class QuantizeBlurhash(System):
    """Quantize cosine coefficients to blurhash integers.

    Forward mode: Coefficients -> QuantizedCoefficients
    Inverse mode: QuantizedCoefficients -> Coefficients, with AC amplitudes
    scaled by ``punch``
    """

    def __init__(
        self,
        punch: float = 1.0,
        mode: Literal["forward", "inverse"] = "forward",
    ):
        """Initialize quantization system.

        Args:
            punch: AC contrast multiplier applied when dequantizing (finite, > 0)
            mode: 'forward' for quantization, 'inverse' for dequantization
        """
        super().__init__(mode=mode)
        if not (math.isfinite(punch) and punch > 0):
            raise BlurhashRangeError(f"punch must be positive and finite, got {punch}")
        self.punch = float(punch)

    def required_components(self) -> list[type]:
        if self.mode == "forward":
            return [Coefficients]
        return [QuantizedCoefficients]

    def produced_components(self) -> list[type]:
        if self.mode == "forward":
            return [QuantizedCoefficients]
        return [Coefficients]

    def run(self, world: World, eids: list[int]) -> None:
        if self.mode == "forward":
            self._run_forward(world, eids)
        else:
            self._run_inverse(world, eids)

    def _run_forward(self, world: World, eids: list[int]) -> None:
        """Forward quantization: Coefficients -> QuantizedCoefficients."""
        for eid in eids:
            coeffs = world.get_component(eid, Coefficients)
            flat = coeffs.values.reshape(-1, 3)
            ac = flat[1:]

            if len(ac):
                quantized_max_ac = quantize_max_ac(float(np.abs(ac).max()))
                ac_values = encode_ac(ac, maximum_value(quantized_max_ac)).tolist()
            else:
                quantized_max_ac = 0
                ac_values = []

            world.add_component(
                eid,
                QuantizedCoefficients(
                    num_x=coeffs.num_x,
                    num_y=coeffs.num_y,
                    quantized_max_ac=quantized_max_ac,
                    dc=encode_dc(flat[0]),
                    ac=ac_values,
                ),
            )

    def _run_inverse(self, world: World, eids: list[int]) -> None:
        """Inverse dequantization: QuantizedCoefficients -> Coefficients."""
        for eid in eids:
            quantized = world.get_component(eid, QuantizedCoefficients)
            count = quantized.num_x * quantized.num_y

            flat = np.empty((count, 3), dtype=np.float64)
            flat[0] = decode_dc(quantized.dc)
            if quantized.ac:
                maximum = maximum_value(quantized.quantized_max_ac) * self.punch
                flat[1:] = decode_ac(np.asarray(quantized.ac), maximum)

            values = flat.reshape(quantized.num_y, quantized.num_x, 3)
            world.add_component(eid, Coefficients(values=values))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(mode={self.mode}, punch={self.punch})"
