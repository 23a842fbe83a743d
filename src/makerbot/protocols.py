from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class DependencyAware(Protocol):
    """Protocol for makers that ask for their collaborators by name.

    ``MakerBot`` calls ``inject_dependency()`` once with no arguments when the
    maker is registered, to discover its initial requirements. After that it is
    called once per satisfied requirement with the requirement name and its fully
    wired instance. Every call returns requirement names; names the maker already
    asked for are ignored, new names are constructed on demand, and returning no
    new names means the maker is done.
    """

    def inject_dependency(
        self,
        name: str | None = None,
        instance: object | None = None,
    ) -> Sequence[str]:
        """Receive a dependency and return the names this maker requires.

        Args:
            name: Name of the delivered dependency, or ``None`` for discovery.
            instance: Instance of the delivered dependency, or ``None`` for
                discovery.

        """


@runtime_checkable
class ConstructionScope(Protocol):
    """Protocol for policies that turn a bare maker name into a default instance."""

    def construct(self, name: str) -> object:
        """Build a default instance for ``name``.

        Args:
            name: Maker name requested by the resolver.

        Raises:
            ConstructionError: If no instance can be built for ``name``.

        """
