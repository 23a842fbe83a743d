from makerbot.construction import (
    DEFAULT_CONSTRUCTION_PREFIX,
    FactoryConstructionScope,
    MappingConstructionScope,
    ModuleConstructionScope,
    as_construction_scope,
)
from makerbot.exceptions import (
    ConstructionError,
    DuplicateNameError,
    MakerBotError,
    MakerTypeMismatchError,
    UnresolvableGraphError,
)
from makerbot.instance_maker import InstanceMaker
from makerbot.protocols import ConstructionScope, DependencyAware
from makerbot.resolver import MakerBot

__all__ = [
    "DEFAULT_CONSTRUCTION_PREFIX",
    "ConstructionError",
    "ConstructionScope",
    "DependencyAware",
    "DuplicateNameError",
    "FactoryConstructionScope",
    "InstanceMaker",
    "MakerBot",
    "MakerBotError",
    "MakerTypeMismatchError",
    "MappingConstructionScope",
    "ModuleConstructionScope",
    "UnresolvableGraphError",
    "as_construction_scope",
]
