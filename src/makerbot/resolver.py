from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TypeVar, cast, overload

from makerbot._internal.registry import MakerEntry, MakerRegistry, PendingDependencies
from makerbot._internal.type_checks import is_dependency_aware
from makerbot.construction import (
    ConstructionScopeLike,
    ModuleConstructionScope,
    as_construction_scope,
)
from makerbot.exceptions import (
    ConstructionError,
    DuplicateNameError,
    MakerTypeMismatchError,
    UnresolvableGraphError,
)
from makerbot.protocols import ConstructionScope, DependencyAware

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")

logger = logging.getLogger(__name__)


class MakerBot:
    """Construct named makers and wire their dependencies at runtime.

    Makers are registered by name. A maker that implements
    ``inject_dependency`` (see ``DependencyAware``) is asked for its
    requirements when it is registered, and again every time one of them is
    delivered, so its requirement set may grow while it is being resolved.
    Requirements that are not registered yet are built through the construction
    scope, which turns a bare name into a default instance.

    ``resolve`` repeats passes over the pending makers until every maker is
    fully wired. A pass that neither delivers a dependency nor finishes a maker
    raises ``UnresolvableGraphError`` instead of spinning forever.

    The resolver registers itself under its class name during initialization,
    so makers can ask for ``"MakerBot"`` to receive it.

    Examples:
        .. code-block:: python

            bot = MakerBot("app.makers")
            bot.add_maker("Config", Config(dsn="sqlite://"))
            database = bot.get_maker("Database")

    Notes:
        Instances are not thread safe. Guard a shared resolver with an external
        lock.

    """

    def __init__(self, construction_scope: ConstructionScopeLike = None) -> None:
        """Initialize a resolver and register it as a fully wired maker.

        Args:
            construction_scope: Policy for turning bare names into default
                instances. Accepts a ``ConstructionScope``, a module prefix, a
                mapping of name to zero-argument factory, a ``factory(name)``
                callable, or ``None`` for the ``makerbot`` package prefix.

        """
        self._construction_scope = as_construction_scope(construction_scope)
        self._registry = MakerRegistry()
        self._pending = PendingDependencies()
        self._bootstrap()

    def _bootstrap(self) -> None:
        self.add_maker(type(self).__name__, self)

    def add_maker(self, name: str | object, instance: object | None = None) -> Self:
        """Register a maker and discover its requirements.

        Three forms are accepted: a bare name, built through the construction
        scope; an instance alone, registered under its class name; or an
        explicit name and instance pair. Requirements the maker reports that are
        not registered yet are added the same way, recursively.

        Args:
            name: Maker name, or the instance itself when ``instance`` is omitted.
            instance: Pre-built instance to register under ``name``.

        Returns:
            The resolver, for chaining.

        Raises:
            DuplicateNameError: If the derived name is already registered. The
                registry is left unchanged.
            ConstructionError: If a default instance cannot be built for the
                maker or for one of its new requirements.

        Errors raised by the maker's own ``inject_dependency`` propagate
        unchanged. The maker stays registered and pending, and ``resolve`` asks
        it for its requirements again.

        Examples:
            .. code-block:: python

                bot.add_maker("Database")
                bot.add_maker(Config())
                bot.add_maker("primary_cache", RedisCache(url))

        """
        if instance is None and not isinstance(name, str):
            instance = name
            maker_name = type(instance).__name__
        elif isinstance(name, str):
            maker_name = name
        else:
            msg = f"Maker name must be a string when an instance is given; got {name!r}."
            raise TypeError(msg)

        if not maker_name:
            msg = "Maker name must not be empty."
            raise ValueError(msg)

        if maker_name in self._registry:
            # Checked before construction so a duplicate never builds anything.
            raise DuplicateNameError(maker_name)

        if instance is None:
            instance = self._construct(maker_name)

        entry = MakerEntry(maker_name, instance, dependency_aware=is_dependency_aware(instance))
        self._registry.add(entry)
        logger.debug(
            "Registered maker %r (%s, dependency_aware=%s)",
            maker_name,
            type(instance).__qualname__,
            entry.dependency_aware,
        )

        if entry.dependency_aware:
            self._discover(entry)
        return self

    def _discover(self, entry: MakerEntry) -> None:
        # Pending until inject_dependency() returns; resolve() retries it otherwise.
        self._pending.begin_discovery(entry.name)
        requirements = cast("DependencyAware", entry.instance).inject_dependency()
        self._pending.end_discovery(entry.name)
        self._append_maker_dependency(entry.name, requirements)
        self._pending.discard_if_empty(entry.name)

    def _construct(self, name: str) -> object:
        scope = self._construction_scope
        try:
            return scope.construct(name)
        except ConstructionError:
            raise
        except Exception as exc:
            raise ConstructionError(name, scope, str(exc) or type(exc).__name__) from exc

    def resolve(self) -> Self:
        """Deliver pending dependencies until every registered maker is fully wired.

        Each pass scans pending makers in registration order. A requirement is
        delivered once the required maker has no pending requirements of its
        own. Whenever a maker finishes, the scan restarts from the first pending
        maker. Calling ``resolve`` with nothing pending is a no-op.

        Returns:
            The resolver, for chaining.

        Raises:
            UnresolvableGraphError: If a full pass makes no progress, which
                happens for circular requirements.
            ConstructionError: If a newly revealed requirement cannot be built.

        """
        finished: list[str] = []
        while self._pending:
            progressed, finished_name = self._resolve_pass()
            if finished_name is not None:
                finished.append(finished_name)
            elif not progressed:
                pending = self._pending.snapshot()
                cycle = _find_cycle(pending)
                logger.debug("Resolution stalled with pending makers %r", pending)
                raise UnresolvableGraphError(pending, cycle)

        if finished:
            logger.info(
                "Resolved %d maker(s): %s",
                len(finished),
                ", ".join(finished),
            )
        return self

    def _resolve_pass(self) -> tuple[bool, str | None]:
        progressed = False
        for subject in self._pending.subjects():
            entry = self._registry.get(subject)
            resolved = True

            if self._pending.awaiting_discovery(subject):
                self._discover(entry)
                progressed = True

            for requirement in self._pending.unresolved(subject):
                if requirement not in self._registry:
                    # Left behind by a failed construction; retry it.
                    self.add_maker(requirement)
                    progressed = True
                if requirement in self._pending:
                    resolved = False
                    continue

                if self._deliver(entry, requirement):
                    resolved = False
                progressed = True

            if resolved:
                self._pending.discard(subject)
                logger.debug("Maker %r is fully wired", subject)
                return progressed, subject

        return progressed, None

    def _deliver(self, entry: MakerEntry, requirement: str) -> bool:
        dependency = self._registry.get(requirement).instance
        logger.debug("Injecting %r into %r", requirement, entry.name)
        requirements = cast("DependencyAware", entry.instance).inject_dependency(
            requirement,
            dependency,
        )
        self._pending.mark_resolved(entry.name, requirement)
        return self._append_maker_dependency(entry.name, requirements)

    def _append_maker_dependency(self, name: str, requirements: Sequence[str] | None) -> bool:
        """Fold requirement names reported by a maker into its pending set.

        Requirements that are not registered yet are added through the
        construction scope right after they are recorded. If that construction
        fails, the requirement stays recorded as unresolved and ``resolve``
        retries the construction.

        Args:
            name: Name of the maker that reported the requirements.
            requirements: Names returned from ``inject_dependency``.

        Returns:
            ``True`` when at least one requirement is new to the maker.

        """
        if not requirements:
            return False

        has_new = False
        for requirement in requirements:
            if not self._pending.add_requirement(name, requirement):
                continue
            has_new = True
            logger.debug("Maker %r requires %r", name, requirement)
            if requirement not in self._registry:
                self.add_maker(requirement)
        return has_new

    @overload
    def get_maker(self, name: str, expected_type: type[T]) -> T: ...

    @overload
    def get_maker(self, name: str, expected_type: None = None) -> Any: ...

    def get_maker(self, name: str, expected_type: type[Any] | None = None) -> Any:
        """Return a fully wired maker, constructing it on first request.

        Pending dependencies are resolved first. An unregistered ``name`` is
        added through the construction scope and resolved again, so the returned
        instance and everything it depends on are fully wired.

        Args:
            name: Maker name to return.
            expected_type: Optional type the instance must be an instance of.

        Raises:
            MakerTypeMismatchError: If ``expected_type`` is given and the maker is
                not an instance of it.
            ConstructionError: If the maker or one of its requirements cannot be
                built.
            UnresolvableGraphError: If the pending graph contains a cycle.

        """
        self.resolve()

        entry = self._registry.find(name)
        if entry is None:
            self.add_maker(name)
            self.resolve()
            entry = self._registry.get(name)

        if expected_type is not None and not isinstance(entry.instance, expected_type):
            raise MakerTypeMismatchError(name, expected_type, entry.instance)
        return entry.instance

    def get_makers(self, *names: str) -> dict[str, Any]:
        """Return several fully wired makers keyed by name.

        Missing makers are all added before a single resolution run.

        Args:
            *names: Maker names to return; duplicates are returned once.

        """
        self.resolve()
        requested = list(dict.fromkeys(names))
        for name in requested:
            if name not in self._registry:
                self.add_maker(name)
        self.resolve()
        return {name: self._registry.get(name).instance for name in requested}

    def has_maker(self, name: str) -> bool:
        """Return whether ``name`` is registered, wired or not.

        Args:
            name: Maker name to check.

        """
        return name in self._registry

    def get_resolved_maker_names(self) -> set[str]:
        """Return a snapshot of the names of every fully wired maker."""
        return {name for name in self._registry.names() if name not in self._pending}

    def get_pending_dependencies(self) -> dict[str, tuple[str, ...]]:
        """Return a snapshot of unfinished makers and the requirements they still wait for."""
        return self._pending.snapshot()

    def set_construction_scope(self, construction_scope: ConstructionScopeLike) -> Self:
        """Replace the policy used to build makers from bare names.

        Already registered makers are kept.

        Args:
            construction_scope: Any form accepted by ``MakerBot.__init__``;
                ``None`` restores the default prefix.

        """
        self._construction_scope = as_construction_scope(construction_scope)
        logger.debug("Construction scope set to %r", self._construction_scope)
        return self

    def get_construction_scope(self) -> ConstructionScope:
        """Return the policy currently used to build makers from bare names."""
        return self._construction_scope

    @property
    def construction_prefix(self) -> str | None:
        """Module prefix of the construction scope, when it is module based."""
        if isinstance(self._construction_scope, ModuleConstructionScope):
            return self._construction_scope.prefix
        return None

    def inject_dependency(
        self,
        name: str | None = None,
        instance: object | None = None,
    ) -> list[str]:
        """Report that the resolver itself needs no dependencies.

        Args:
            name: Ignored; the resolver never waits for a delivery.
            instance: Ignored.

        """
        return []

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(makers={len(self._registry)}, "
            f"pending={len(self._pending)}, scope={self._construction_scope!r})"
        )


def _find_cycle(pending: dict[str, tuple[str, ...]]) -> tuple[str, ...]:
    """Return one cycle among pending makers that wait on each other, if any."""
    waits_on = {
        subject: [requirement for requirement in requirements if requirement in pending]
        for subject, requirements in pending.items()
    }
    finished: set[str] = set()

    def visit(subject: str, path: list[str]) -> tuple[str, ...]:
        if subject in path:
            return (*path[path.index(subject) :], subject)
        if subject in finished:
            return ()
        path.append(subject)
        for requirement in waits_on[subject]:
            cycle = visit(requirement, path)
            if cycle:
                return cycle
        path.pop()
        finished.add(subject)
        return ()

    for subject in waits_on:
        cycle = visit(subject, [])
        if cycle:
            return cycle
    return ()


__all__ = ["MakerBot"]
