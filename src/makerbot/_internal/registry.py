from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from makerbot.exceptions import DuplicateNameError


@dataclass(frozen=True, slots=True)
class MakerEntry:
    """Registered maker: a name, its instance, and its injection capability.

    The capability is decided once at registration, so the resolver dispatches
    on ``dependency_aware`` instead of probing the instance on every call.
    """

    name: str
    instance: object
    dependency_aware: bool = False


class MakerRegistry:
    """Store maker entries indexed by name.

    Names are unique for the lifetime of the registry and entries are never
    removed or replaced.
    """

    def __init__(self) -> None:
        self._entries: dict[str, MakerEntry] = {}

    def add(self, entry: MakerEntry) -> None:
        """Add a new maker entry.

        Args:
            entry: Entry to register.

        Raises:
            DuplicateNameError: If an entry with the same name exists.

        """
        if entry.name in self._entries:
            raise DuplicateNameError(entry.name)
        self._entries[entry.name] = entry

    def get(self, name: str) -> MakerEntry:
        """Get a maker entry by name.

        Args:
            name: Maker name to look up.

        """
        return self._entries[name]

    def find(self, name: str) -> MakerEntry | None:
        """Get a maker entry by name, if it exists.

        Args:
            name: Maker name to look up.

        """
        return self._entries.get(name)

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[MakerEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)


class PendingDependencies:
    """Track the requirements of makers that are not fully wired yet.

    Each subject maps its requirement names, in the order they were first
    requested, to ``True`` while the requirement is still unresolved. A subject
    is absent exactly when the maker is fully wired. A subject whose initial
    ``inject_dependency()`` call has not completed is pending with no
    requirements until discovery succeeds.
    """

    def __init__(self) -> None:
        self._subjects: dict[str, dict[str, bool]] = {}
        self._discovering: set[str] = set()

    def begin_discovery(self, subject: str) -> None:
        """Mark a subject as pending until its requirements have been reported.

        Args:
            subject: Name of the maker about to be asked for its requirements.

        """
        self._subjects.setdefault(subject, {})
        self._discovering.add(subject)

    def end_discovery(self, subject: str) -> None:
        self._discovering.discard(subject)

    def awaiting_discovery(self, subject: str) -> bool:
        return subject in self._discovering

    def discard_if_empty(self, subject: str) -> None:
        """Drop a subject that reported no requirements and is not being discovered.

        Args:
            subject: Name of the maker to check.

        """
        if subject in self._discovering:
            return
        if self._subjects.get(subject) == {}:
            del self._subjects[subject]

    def add_requirement(self, subject: str, requirement: str) -> bool:
        """Record an unresolved requirement for a subject.

        Args:
            subject: Name of the maker that asked for the requirement.
            requirement: Name of the required maker.

        Returns:
            ``True`` when the requirement is new to the subject.

        """
        requirements = self._subjects.setdefault(subject, {})
        if requirement in requirements:
            return False
        requirements[requirement] = True
        return True

    def mark_resolved(self, subject: str, requirement: str) -> None:
        """Flag a single requirement of a subject as delivered.

        Args:
            subject: Name of the maker that received the requirement.
            requirement: Name of the delivered requirement.

        """
        self._subjects[subject][requirement] = False

    def unresolved(self, subject: str) -> list[str]:
        """Return the subject's still unresolved requirement names in insertion order.

        Args:
            subject: Name of the pending maker.

        """
        return [name for name, waiting in self._subjects.get(subject, {}).items() if waiting]

    def discard(self, subject: str) -> None:
        self._subjects.pop(subject, None)
        self._discovering.discard(subject)

    def subjects(self) -> list[str]:
        """Return pending subject names in map order, as a snapshot."""
        return list(self._subjects)

    def snapshot(self, subjects: Iterable[str] | None = None) -> dict[str, tuple[str, ...]]:
        """Return unresolved requirement names per pending subject.

        Args:
            subjects: Optional subset of subjects to include.

        """
        selected = self._subjects if subjects is None else subjects
        return {
            subject: tuple(self.unresolved(subject))
            for subject in selected
            if subject in self._subjects
        }

    def __contains__(self, subject: object) -> bool:
        return subject in self._subjects

    def __bool__(self) -> bool:
        return bool(self._subjects)

    def __len__(self) -> int:
        return len(self._subjects)


__all__ = ["MakerEntry", "MakerRegistry", "PendingDependencies"]
