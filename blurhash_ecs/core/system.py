"""Codec stage interface.

Each stage of the blurhash codec is a System: it consumes the components
named by required_components() and attaches those in produced_components().

Modes:
- 'forward': encode direction (pixels towards the blurhash string)
- 'inverse': decode direction (blurhash string towards pixels)

Example:
    >>> class Doubler(System):
    ...     def required_components(self):
    ...         return [Coefficients]
    ...     def produced_components(self):
    ...         return [Coefficients]
    ...     def run(self, world, eids):
    ...         for eid in eids:
    ...             coeffs = world.get_component(eid, Coefficients)
    ...             world.add_component(eid, Coefficients(values=coeffs.values * 2))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal

from blurhash_ecs.core.world import World


class System(ABC):
    """One reversible codec stage.

    Attributes:
        mode: Transformation direction ('forward' or 'inverse')
    """

    def __init__(self, mode: Literal["forward", "inverse"] = "forward") -> None:
        if mode not in ("forward", "inverse"):
            raise ValueError(f"mode must be 'forward' or 'inverse', got {mode!r}")
        self.mode = mode

    @abstractmethod
    def required_components(self) -> list[type]:
        """Return component types this system needs on an entity."""

    @abstractmethod
    def produced_components(self) -> list[type]:
        """Return component types this system attaches to an entity."""

    @abstractmethod
    def run(self, world: World, eids: list[int]) -> None:
        """Execute the system on the given entities.

        Args:
            world: World holding the entities
            eids: Entity IDs to process; each holds required_components()
        """

    def can_run(self, world: World, eid: int) -> bool:
        """Check if entity has all required components."""
        return all(world.has_component(eid, ct) for ct in self.required_components())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(mode={self.mode})"
