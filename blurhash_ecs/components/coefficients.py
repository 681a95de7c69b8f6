"""Cosine basis coefficient components."""

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

MAX_COMPONENTS = 9
MAX_AC_VALUE = 19**3 - 1


class Component(BaseModel):
    """Base class for all ECS components."""

    model_config = {"arbitrary_types_allowed": True}


class Coefficients(Component):
    """Linear-light basis coefficients.

    Attributes:
        values: (num_y, num_x, 3) float64 array; values[0, 0] is the DC
            (average colour) term, every other entry an AC amplitude
    """

    values: np.ndarray

    @field_validator("values")
    @classmethod
    def _check_shape(cls, values: np.ndarray) -> np.ndarray:
        if values.ndim != 3 or values.shape[2] != 3:
            raise ValueError(f"Expected shape (num_y, num_x, 3), got {values.shape}")
        num_y, num_x = values.shape[:2]
        if not (1 <= num_x <= MAX_COMPONENTS and 1 <= num_y <= MAX_COMPONENTS):
            raise ValueError(f"Component grid must be within 9x9, got {num_x}x{num_y}")
        return values

    @property
    def num_x(self) -> int:
        return int(self.values.shape[1])

    @property
    def num_y(self) -> int:
        return int(self.values.shape[0])


class QuantizedCoefficients(Component):
    """Integer coefficients exactly as they appear in a blurhash string.

    Attributes:
        num_x: Horizontal component count (1-9)
        num_y: Vertical component count (1-9)
        quantized_max_ac: Quantized AC amplitude bound (0-82)
        dc: Packed 24-bit sRGB average colour
        ac: Packed base-19 AC values in basis order, num_x * num_y - 1 entries
    """

    num_x: int = Field(ge=1, le=MAX_COMPONENTS)
    num_y: int = Field(ge=1, le=MAX_COMPONENTS)
    quantized_max_ac: int = Field(ge=0, le=82)
    dc: int = Field(ge=0, le=0xFFFFFF)
    ac: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_ac(self) -> "QuantizedCoefficients":
        expected = self.num_x * self.num_y - 1
        if len(self.ac) != expected:
            raise ValueError(f"Expected {expected} AC values, got {len(self.ac)}")
        for value in self.ac:
            if not 0 <= value <= MAX_AC_VALUE:
                raise ValueError(f"AC value {value} outside [0, {MAX_AC_VALUE}]")
        return self
