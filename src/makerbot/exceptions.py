from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


class MakerBotError(Exception):
    """Represent a base class for all MakerBot-specific failures.

    Catch this type when you want to handle any MakerBot error path without
    matching each concrete exception class individually.
    """


class DuplicateNameError(MakerBotError):
    """Signal that a maker name is already registered.

    Raised by ``MakerBot.add_maker`` for every registration form (bare name,
    instance alone, or explicit name and instance) when the derived name is
    already present. Registration is add-once: the existing entry is kept and
    the registry is left unchanged.

    Typical fixes include requesting the existing maker with
    ``MakerBot.get_maker`` or registering the second instance under a
    different name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        msg = f"Maker {name!r} is already registered; makers can only be added once."
        super().__init__(msg)


class ConstructionError(MakerBotError):
    """Signal that a construction scope could not build a default instance.

    Raised while a bare maker name is turned into an instance, either directly
    by ``MakerBot.add_maker``/``MakerBot.get_maker`` or while a requirement
    discovered through ``inject_dependency`` is materialised. The original
    failure, when there is one, is available as ``__cause__``.

    Typical fixes include pointing the resolver at the right construction
    prefix, registering a pre-built instance before resolution, or giving the
    target type a zero-argument constructor.
    """

    def __init__(self, name: str, scope: object, reason: str | None = None) -> None:
        self.name = name
        self.scope = scope
        self.reason = reason
        msg = f"Cannot construct maker {name!r} using {scope!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class UnresolvableGraphError(MakerBotError):
    """Signal that the pending dependency graph stopped making progress.

    Raised by ``MakerBot.resolve`` (and therefore ``MakerBot.get_maker``) when a
    full scan over the pending makers neither delivered a dependency nor
    finished a maker. This happens for circular requirements, including a
    maker that requires itself.

    Attributes:
        pending: Snapshot of every unfinished maker and the requirement names it
            still waits for.
        cycle: One detected requirement cycle, first name repeated at the end,
            or an empty tuple when none was found.

    """

    def __init__(
        self,
        pending: Mapping[str, Sequence[str]],
        cycle: Sequence[str] = (),
    ) -> None:
        self.pending: dict[str, tuple[str, ...]] = {
            name: tuple(requirements) for name, requirements in pending.items()
        }
        self.cycle: tuple[str, ...] = tuple(cycle)
        waiting = "; ".join(
            f"{name} waits for {', '.join(requirements)}"
            for name, requirements in self.pending.items()
        )
        msg = f"Maker dependencies cannot be resolved ({waiting})"
        if self.cycle:
            msg = f"{msg}; cycle: {' -> '.join(self.cycle)}"
        super().__init__(msg)


class MakerTypeMismatchError(MakerBotError):
    """Signal that a resolved maker is not of the type the caller expected.

    Raised by ``MakerBot.get_maker`` when ``expected_type`` is given. The maker
    stays registered and fully wired.
    """

    def __init__(self, name: str, expected_type: type[Any], instance: object) -> None:
        self.name = name
        self.expected_type = expected_type
        self.instance = instance
        msg = (
            f"Maker {name!r} is {type(instance).__qualname__}, "
            f"expected {expected_type.__qualname__}"
        )
        super().__init__(msg)
