from __future__ import annotations

import types
from typing import Any, TypeGuard

from makerbot.protocols import ConstructionScope, DependencyAware


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_dependency_aware(candidate: object) -> TypeGuard[DependencyAware]:
    """Return true when a registered instance takes part in dependency injection.

    Classes are never dependency aware themselves, even when their instances are:
    a class registered as a value is a plain maker.

    Args:
        candidate: Registered maker instance.

    """
    if is_runtime_class(candidate):
        return False
    return isinstance(candidate, DependencyAware)


def is_construction_scope(candidate: object) -> TypeGuard[ConstructionScope]:
    """Return true when candidate can be used as a construction scope instance.

    Args:
        candidate: Value passed as a construction scope.

    """
    if is_runtime_class(candidate):
        return False
    return isinstance(candidate, ConstructionScope)


__all__ = ["is_construction_scope", "is_dependency_aware", "is_runtime_class"]
