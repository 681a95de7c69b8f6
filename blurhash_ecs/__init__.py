"""BlurHash placeholder codec with an ECS architecture.

A blurhash is a short printable string holding a handful of cosine basis
coefficients of an image, enough to draw a blurred preview while the real
image loads.

This package provides:
- encode/decode between RGBA pixels and blurhash strings
- validation and introspection of blurhash strings
- the underlying Entity-Component-System pieces for custom pipelines

Quick Start:
    >>> from blurhash_ecs import decode, components, is_valid
    >>>
    >>> blurhash = "LEHV6nWB2yk8pyo0adR*.7kCMdnj"
    >>> is_valid(blurhash)
    True
    >>> components(blurhash)
    (4, 3)
    >>> pixels = decode(32, 32, blurhash)  # 32 rows of 32 [R, G, B, 255]

For more control, use the pipeline API:
    >>> from blurhash_ecs import World
    >>> from blurhash_ecs.components.coefficients import Coefficients
    >>> from blurhash_ecs.systems.cosine import CosineBasis
    >>>
    >>> world = World()
    >>> entity = world.spawn_image(rgba)
    >>> coeffs = (
    ...     world.pipe(entity)
    ...     .to(CosineBasis(x_components=4, y_components=3))
    ...     .out(Coefficients)
    ... )
"""

__version__ = "0.1.0"

from blurhash_ecs.api import (
    components,
    decode,
    decode_array,
    encode,
    encode_image,
    get_blurhash_info,
    is_valid,
)
from blurhash_ecs.core.world import World
from blurhash_ecs.errors import BlurhashError, BlurhashFormatError, BlurhashRangeError

__all__ = [
    "__version__",
    "encode",
    "encode_image",
    "decode",
    "decode_array",
    "is_valid",
    "components",
    "get_blurhash_info",
    "World",
    "BlurhashError",
    "BlurhashFormatError",
    "BlurhashRangeError",
]
