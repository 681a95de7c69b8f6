"""World: entity/component store for one codec run.

An entity is a single image travelling through the codec. It starts either
as source pixels (``spawn_image``) or as parsed blurhash fields
(``spawn_blurhash``) and picks up one component per stage as systems run.

Every encode or decode call in the high-level API owns a short-lived World
that is cleared when the call returns.

Example:
    >>> world = World()
    >>> eid = world.spawn_image(np.zeros((8, 8, 4), dtype=np.uint8))
    >>> world.has_component(eid, RGBA)
    True
    >>> world.clear()
"""

from __future__ import annotations

import itertools
from collections import defaultdict
from typing import TYPE_CHECKING, Any, TypeVar

import numpy as np
from pydantic import BaseModel

if TYPE_CHECKING:
    from blurhash_ecs.components.coefficients import QuantizedCoefficients
    from blurhash_ecs.core.pipeline import Pipe

Component = BaseModel

T = TypeVar("T", bound=Component)


class World:
    """Stage components keyed by component type, then entity.

    Attributes:
        metadata: Per-entity facts that are not components, such as
            ``source`` ('image' or 'blurhash') and ``image_shape``
    """

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._stages: defaultdict[type[Component], dict[int, Component]] = defaultdict(dict)
        self.metadata: dict[int, dict[str, Any]] = {}

    def new_entity(self) -> int:
        """Allocate an empty entity."""
        eid = next(self._ids)
        self.metadata[eid] = {}
        return eid

    def spawn_image(self, img: np.ndarray) -> int:
        """Create an entity from source pixels for encoding.

        Args:
            img: (H, W, 4) uint8 RGBA array, H and W at least 1

        Returns:
            Entity ID holding an RGBA component

        Raises:
            ValueError: If image shape or dtype is invalid
        """
        from blurhash_ecs.components.image import RGBA

        if img.ndim != 3 or img.shape[2] != 4:
            raise ValueError(f"Expected image with shape (H, W, 4), got {img.shape}")
        if 0 in img.shape[:2]:
            raise ValueError(f"Image must not be empty, got {img.shape}")
        if img.dtype != np.uint8:
            raise ValueError(f"Expected dtype uint8, got {img.dtype}")

        eid = self.new_entity()
        self.add_component(eid, RGBA(pix=img))
        self.metadata[eid].update(source="image", image_shape=img.shape)
        return eid

    def spawn_blurhash(self, quantized: QuantizedCoefficients) -> int:
        """Create an entity from parsed blurhash fields for decoding."""
        eid = self.new_entity()
        self.add_component(eid, quantized)
        self.metadata[eid]["source"] = "blurhash"
        return eid

    def clear(self) -> None:
        """Forget every entity and restart IDs at zero."""
        self._ids = itertools.count()
        self._stages.clear()
        self.metadata.clear()

    def _require(self, eid: int) -> None:
        if eid not in self.metadata:
            raise ValueError(f"Unknown entity {eid}")

    def add_component(self, eid: int, component: Component) -> None:
        """Attach a component, replacing any earlier one of the same type.

        Raises:
            ValueError: If entity does not exist
        """
        self._require(eid)
        self._stages[type(component)][eid] = component

    def get_component(self, eid: int, comp_type: type[T]) -> T:
        """Fetch the component of ``comp_type`` held by an entity.

        Raises:
            KeyError: If the entity has no such component
        """
        try:
            return self._stages.get(comp_type, {})[eid]  # type: ignore[return-value]
        except KeyError:
            raise KeyError(f"{comp_type.__name__} missing on entity {eid}") from None

    def has_component(self, eid: int, comp_type: type[Component]) -> bool:
        return comp_type in self._stages and eid in self._stages[comp_type]

    def remove_component(self, eid: int, comp_type: type[Component]) -> None:
        """Detach a component.

        Raises:
            KeyError: If the entity has no such component
        """
        if not self.has_component(eid, comp_type):
            raise KeyError(f"{comp_type.__name__} missing on entity {eid}")
        del self._stages[comp_type][eid]

    def query(self, *comp_types: type[Component]) -> list[int]:
        """Sorted IDs of entities holding every listed type (all entities if none)."""
        if not comp_types:
            return sorted(self.metadata)
        holders = [set(self._stages.get(ct, ())) for ct in comp_types]
        return sorted(set.intersection(*holders))

    def destroy_entity(self, eid: int) -> None:
        """Drop an entity together with its components.

        Raises:
            ValueError: If entity does not exist
        """
        self._require(eid)
        for stage in self._stages.values():
            stage.pop(eid, None)
        del self.metadata[eid]

    def pipe(self, entity: int) -> Pipe:
        """Start a fluent pipeline for ``entity``.

        Example:
            >>> quantized = (
            ...     world.pipe(entity)
            ...     .to(CosineBasis(x_components=4, y_components=3))
            ...     .to(QuantizeBlurhash())
            ...     .out(QuantizedCoefficients)
            ... )
        """
        from blurhash_ecs.core.pipeline import Pipe

        return Pipe(world=self, entity=entity)

    def __repr__(self) -> str:
        return f"World(entities={len(self.metadata)}, component_types={len(self._stages)})"
