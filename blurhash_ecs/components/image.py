"""Image components: RGBA, ReconRGBA."""

from typing import Literal

import numpy as np
from pydantic import BaseModel, Field


class Component(BaseModel):
    """Base class for all ECS components.

    Components are plain data containers validated by pydantic. Pixel and
    coefficient data are held directly as numpy arrays.
    """

    model_config = {"arbitrary_types_allowed": True}


class RGBA(Component):
    """Source image handed to the encoder.

    Attributes:
        pix: Pixel data (H, W, 4) uint8, interleaved RGBA
        colorspace: Colorspace identifier (default 'sRGB')
    """

    pix: np.ndarray
    colorspace: str = Field(default="sRGB")


class ReconRGBA(Component):
    """Image synthesised from a blurhash.

    Attributes:
        pix: (H, W, 4) uint8 sRGB pixels with opaque alpha, or (H, W, 3)
            float64 sums when colorspace is 'linear'
        colorspace: 'sRGB' or 'linear'
    """

    pix: np.ndarray
    colorspace: Literal["sRGB", "linear"] = "sRGB"
