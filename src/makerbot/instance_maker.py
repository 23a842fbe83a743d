from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class InstanceMaker(ABC):
    """Base class for dependency-aware makers that produce a single instance.

    Subclasses collect their dependencies through ``inject_dependency`` and keep
    the object they build in ``instance``, so consumers ask the resolver for the
    maker and then read the product from it.

    Examples:
        .. code-block:: python

            class DatabaseMaker(InstanceMaker):
                def inject_dependency(self, name=None, instance=None):
                    if name is None:
                        return ["Config"]
                    self.set_instance(Database(instance.dsn))
                    return []

    """

    def __init__(self, instance: Any = None) -> None:
        self._instance = instance

    def get_instance(self) -> Any:
        """Return the produced instance, or ``None`` until it is built."""
        return self._instance

    def set_instance(self, instance: Any) -> None:
        """Store the produced instance.

        Args:
            instance: Instance built by this maker.

        """
        self._instance = instance

    @property
    def instance(self) -> Any:
        """Instance produced by this maker, or ``None`` until it is built."""
        return self._instance

    @instance.setter
    def instance(self, instance: Any) -> None:
        self._instance = instance

    @abstractmethod
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


__all__ = ["InstanceMaker"]
