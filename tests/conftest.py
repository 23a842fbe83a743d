"""Shared pytest fixtures for makerbot tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from makerbot import FactoryConstructionScope, MakerBot


class Config:
    def __init__(self, dsn: str = "sqlite://") -> None:
        self.dsn = dsn


class Database:
    """Requires Config and records every delivery."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.deliveries: list[tuple[str, object]] = []

    def inject_dependency(self, name: str | None = None, instance: object | None = None) -> list[str]:
        if name is None:
            return ["Config"]
        self.deliveries.append((name, instance))
        self.config = instance  # type: ignore[assignment]
        return []


class Repository:
    """Requires Database and Config."""

    def __init__(self) -> None:
        self.received: dict[str, object] = {}

    def inject_dependency(self, name: str | None = None, instance: object | None = None) -> list[str]:
        if name is None:
            return ["Database", "Config"]
        self.received[name] = instance
        return []


class Service:
    """Asks for Database only after it has received Config."""

    def __init__(self) -> None:
        self.order: list[str] = []
        self.database: Database | None = None

    def inject_dependency(self, name: str | None = None, instance: object | None = None) -> list[str]:
        if name is None:
            return ["Config"]
        self.order.append(name)
        if name == "Config":
            return ["Config", "Database"]
        self.database = instance  # type: ignore[assignment]
        return []


STUB_TYPES: dict[str, Callable[[], Any]] = {
    "Config": Config,
    "Database": Database,
    "Repository": Repository,
    "Service": Service,
}


class RecordingFactory:
    """Construction callable that records every requested name."""

    def __init__(self, factories: dict[str, Callable[[], Any]]) -> None:
        self.factories = factories
        self.calls: list[str] = []

    def __call__(self, name: str) -> Any:
        self.calls.append(name)
        return self.factories[name]()


@pytest.fixture()
def stub_types() -> dict[str, Callable[[], Any]]:
    """Stub maker types keyed by maker name."""
    return dict(STUB_TYPES)


@pytest.fixture()
def stub_factory() -> RecordingFactory:
    """Recording construction callable over the stub maker types."""
    return RecordingFactory(dict(STUB_TYPES))


@pytest.fixture()
def bot(stub_factory: RecordingFactory) -> MakerBot:
    """Resolver constructing stub makers through the recording factory."""
    return MakerBot(FactoryConstructionScope(stub_factory))
