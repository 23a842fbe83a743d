from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable, Mapping
from types import ModuleType
from typing import Any, Union

from makerbot._internal.type_checks import is_construction_scope
from makerbot.exceptions import ConstructionError
from makerbot.protocols import ConstructionScope

logger = logging.getLogger(__name__)

DEFAULT_CONSTRUCTION_PREFIX = "makerbot"
"""Module path used when a resolver is created without a construction scope."""

ConstructionScopeLike = Union[
    ConstructionScope,
    str,
    Mapping[str, Callable[[], Any]],
    Callable[[str], Any],
    None,
]


class ModuleConstructionScope:
    """Construct makers by importing ``<prefix>.<name>`` and calling it.

    The prefix is a module path. ``name`` may itself be dotted, in which case
    intermediate attributes are walked and missing submodules are imported, so
    ``"repositories.UserRepository"`` works with prefix ``"app"``.

    Examples:
        .. code-block:: python

            scope = ModuleConstructionScope("app.makers")
            database = scope.construct("Database")  # app.makers.Database()

    """

    def __init__(self, prefix: str = DEFAULT_CONSTRUCTION_PREFIX) -> None:
        prefix = prefix.strip(".")
        if not prefix:
            msg = "Construction prefix must name a module."
            raise ValueError(msg)
        self.prefix = prefix

    def construct(self, name: str) -> object:
        """Import the target for ``name`` under the prefix and call it without arguments.

        Args:
            name: Maker name, relative to the prefix.

        Raises:
            ConstructionError: If the target cannot be imported, is not callable,
                or fails while being called.

        """
        target: object = self._import(self.prefix, name)
        for part in name.split("."):
            try:
                target = getattr(target, part)
            except AttributeError:
                if not isinstance(target, ModuleType):
                    raise ConstructionError(
                        name,
                        self,
                        f"{target!r} has no attribute {part!r}",
                    ) from None
                target = self._import(f"{target.__name__}.{part}", name)

        if not callable(target):
            raise ConstructionError(name, self, f"{target!r} is not callable")
        if inspect.isabstract(target):
            raise ConstructionError(name, self, f"{target!r} is abstract")

        logger.debug("Constructing maker %r from %s.%s", name, self.prefix, name)
        try:
            return target()
        except ConstructionError:
            raise
        except Exception as exc:
            raise ConstructionError(name, self, str(exc) or type(exc).__name__) from exc

    def _import(self, module_name: str, name: str) -> ModuleType:
        try:
            return importlib.import_module(module_name)
        except ImportError as exc:
            raise ConstructionError(name, self, f"cannot import {module_name!r}") from exc

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleConstructionScope):
            return NotImplemented
        return self.prefix == other.prefix

    def __hash__(self) -> int:
        return hash((type(self), self.prefix))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.prefix!r})"


class MappingConstructionScope:
    """Construct makers from an explicit name to zero-argument factory mapping."""

    def __init__(self, factories: Mapping[str, Callable[[], Any]]) -> None:
        self.factories = dict(factories)

    def construct(self, name: str) -> object:
        """Call the factory registered for ``name``.

        Args:
            name: Maker name to construct.

        Raises:
            ConstructionError: If ``name`` has no factory or the factory fails.

        """
        try:
            factory = self.factories[name]
        except KeyError:
            raise ConstructionError(name, self, "no factory is registered") from None

        try:
            return factory()
        except ConstructionError:
            raise
        except Exception as exc:
            raise ConstructionError(name, self, str(exc) or type(exc).__name__) from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self.factories)!r})"


class FactoryConstructionScope:
    """Adapt a plain ``factory(name)`` callable to the construction scope protocol."""

    def __init__(self, factory: Callable[[str], Any]) -> None:
        self.factory = factory

    def construct(self, name: str) -> object:
        """Call the wrapped factory with ``name``.

        Args:
            name: Maker name to construct.

        Raises:
            ConstructionError: If the factory fails.

        """
        try:
            return self.factory(name)
        except ConstructionError:
            raise
        except Exception as exc:
            raise ConstructionError(name, self, str(exc) or type(exc).__name__) from exc

    def __repr__(self) -> str:
        factory_name = getattr(self.factory, "__qualname__", repr(self.factory))
        return f"{type(self).__name__}({factory_name})"


def as_construction_scope(value: ConstructionScopeLike) -> ConstructionScope:
    """Normalise the accepted construction scope forms to a scope object.

    Args:
        value: A construction scope, a module prefix, a name to factory mapping,
            a ``factory(name)`` callable, or ``None`` for the default prefix.

    Raises:
        TypeError: If ``value`` is none of the accepted forms.

    """
    if value is None or value == "":
        return ModuleConstructionScope(DEFAULT_CONSTRUCTION_PREFIX)
    if isinstance(value, str):
        return ModuleConstructionScope(value)
    if is_construction_scope(value):
        return value
    if isinstance(value, Mapping):
        return MappingConstructionScope(value)
    if callable(value):
        return FactoryConstructionScope(value)
    msg = (
        "Construction scope must be a ConstructionScope, a module prefix, "
        f"a mapping of factories, or a callable; got {value!r}."
    )
    raise TypeError(msg)


__all__ = [
    "DEFAULT_CONSTRUCTION_PREFIX",
    "ConstructionScopeLike",
    "FactoryConstructionScope",
    "MappingConstructionScope",
    "ModuleConstructionScope",
    "as_construction_scope",
]
