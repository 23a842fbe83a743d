from __future__ import annotations

from typing import Any

import pytest

from makerbot.construction import ConstructionScopeLike
from makerbot.resolver import MakerBot

MAKERBOT_INSTANCES_MARKER = "makerbot_instances"


def pytest_configure(config: pytest.Config) -> None:
    """Register the plugin marker so strict marker runs accept it."""
    config.addinivalue_line(
        "markers",
        f"{MAKERBOT_INSTANCES_MARKER}(**instances): pre-register named instances "
        "on the 'makerbot' fixture before the test runs.",
    )


@pytest.fixture()
def makerbot_construction_scope() -> ConstructionScopeLike:
    """Fixture hook for the construction scope used by the ``makerbot`` fixture.

    Users must override this fixture in their own test suite to decide how bare
    maker names are turned into instances.

    """
    msg = (
        "The makerbot pytest plugin requires overriding the "
        "'makerbot_construction_scope' fixture in your test suite. Define "
        "@pytest.fixture() def makerbot_construction_scope(): ... and return a "
        "module prefix, a mapping of factories, a callable, or a ConstructionScope."
    )
    raise RuntimeError(msg)


@pytest.fixture()
def makerbot(
    request: pytest.FixtureRequest,
    makerbot_construction_scope: ConstructionScopeLike,
) -> MakerBot:
    """Create a per-test resolver built from ``makerbot_construction_scope``.

    Instances given through ``@pytest.mark.makerbot_instances(name=value)`` are
    registered before the test body runs, closest marker first.

    Returns:
        A new ``MakerBot`` instance.

    """
    bot = MakerBot(makerbot_construction_scope)
    for marker in request.node.iter_markers(MAKERBOT_INSTANCES_MARKER):
        instances: dict[str, Any] = marker.kwargs
        for name, instance in instances.items():
            if name not in bot:
                bot.add_maker(name, instance)
    return bot


__all__ = [
    "MAKERBOT_INSTANCES_MARKER",
    "makerbot",
    "makerbot_construction_scope",
    "pytest_configure",
]
