"""Codec defaults, optionally read from a TOML file.

Example blurhash_ecs.toml:

    [blurhash]
    x_components = 4
    y_components = 3
    punch = 1.0
"""

from __future__ import annotations

import logging
import os
from typing import Any, cast

from pydantic import BaseModel, Field

# TOML loading for Python 3.11+ and older
try:
    import tomllib  # type: ignore[import-not-found, unused-ignore]
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef, unused-ignore]

logger = logging.getLogger(__name__)

CONFIG_SECTION = "blurhash"


class CodecConfig(BaseModel):
    """Default encode grid and decode punch.

    Attributes:
        x_components: Horizontal basis count used by encode (1-9)
        y_components: Vertical basis count used by encode (1-9)
        punch: AC contrast multiplier used by decode (finite, > 0)
    """

    model_config = {"extra": "forbid"}

    x_components: int = Field(default=4, ge=1, le=9)
    y_components: int = Field(default=3, ge=1, le=9)
    punch: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)


def load_config(config_path: str | os.PathLike[str] | None = None) -> CodecConfig:
    """Load codec defaults.

    Args:
        config_path: Path to a TOML file with a [blurhash] table, or None
            for built-in defaults

    Returns:
        Validated CodecConfig

    Raises:
        FileNotFoundError: If config_path does not exist
        pydantic.ValidationError: If the table holds invalid values
    """
    if config_path is None:
        return CodecConfig()

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found at {config_path}")
    with open(config_path, "rb") as f:
        config = cast(dict[str, Any], tomllib.load(f))

    logger.debug("Loaded blurhash config from %s", config_path)
    return CodecConfig(**config.get(CONFIG_SECTION, {}))
