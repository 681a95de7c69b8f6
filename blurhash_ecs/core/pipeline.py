"""Pipe: fluent chaining of codec systems over one entity."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from blurhash_ecs.core.system import System
    from blurhash_ecs.core.world import World

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Pipe:
    """Ordered list of systems applied to a single entity.

    Systems are appended with ``.to()`` or ``|``; nothing runs until
    ``.out()`` or ``.execute()``.

    Example:
        >>> entity = world.spawn_image(rgba)
        >>> coeffs = (
        ...     world.pipe(entity)
        ...     .to(CosineBasis(x_components=4, y_components=3))
        ...     .out(Coefficients)
        ... )
    """

    def __init__(self, world: World, entity: int) -> None:
        self.world = world
        self.entity = entity
        self.systems: list[System] = []

    def to(self, system: System) -> Pipe:
        """Queue a system; returns the same pipe."""
        self.systems.append(system)
        return self

    __or__ = to

    def execute(self) -> None:
        """Run the queued systems in order.

        Raises:
            RuntimeError: If the entity lacks what a system consumes
        """
        for system in self.systems:
            if not system.can_run(self.world, self.entity):
                missing = [
                    ct.__name__
                    for ct in system.required_components()
                    if not self.world.has_component(self.entity, ct)
                ]
                raise RuntimeError(
                    f"{type(system).__name__} cannot run on entity {self.entity}: "
                    f"missing {', '.join(missing)}"
                )
            logger.debug("Running %r on entity %d", system, self.entity)
            system.run(self.world, [self.entity])

    def out(self, component_type: type[T]) -> T:
        """Execute, then return the entity's ``component_type``.

        Raises:
            RuntimeError: If a system cannot run
            KeyError: If nothing produced ``component_type``
        """
        self.execute()
        return self.world.get_component(self.entity, component_type)
