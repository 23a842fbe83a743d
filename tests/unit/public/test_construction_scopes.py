from __future__ import annotations

import xml.dom.minidom
from abc import ABC, abstractmethod

import pytest

from makerbot import (
    DEFAULT_CONSTRUCTION_PREFIX,
    ConstructionError,
    FactoryConstructionScope,
    MakerBot,
    MappingConstructionScope,
    ModuleConstructionScope,
    as_construction_scope,
)

NOT_CALLABLE = 42


class Widget:
    def __init__(self) -> None:
        self.label = "widget"


class Outer:
    class Inner:
        pass


class Exploding:
    def __init__(self) -> None:
        msg = "boom"
        raise RuntimeError(msg)


class AbstractMaker(ABC):
    @abstractmethod
    def build(self) -> None:
        """Build something."""


class TestModuleConstructionScope:
    def test_constructs_attribute_of_prefix_module(self) -> None:
        widget = ModuleConstructionScope(__name__).construct("Widget")

        assert isinstance(widget, Widget)

    def test_dotted_names_walk_attributes(self) -> None:
        inner = ModuleConstructionScope(__name__).construct("Outer.Inner")

        assert isinstance(inner, Outer.Inner)

    def test_dotted_names_import_submodules(self) -> None:
        document = ModuleConstructionScope("xml").construct("dom.minidom.Document")

        assert isinstance(document, xml.dom.minidom.Document)

    def test_default_prefix_is_the_package(self) -> None:
        scope = ModuleConstructionScope()

        assert scope.prefix == DEFAULT_CONSTRUCTION_PREFIX == "makerbot"
        assert isinstance(scope.construct("MakerBot"), MakerBot)

    def test_surrounding_dots_are_stripped(self) -> None:
        assert ModuleConstructionScope("app.makers.").prefix == "app.makers"

    def test_empty_prefix_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="must name a module"):
            ModuleConstructionScope(".")

    def test_missing_module(self) -> None:
        scope = ModuleConstructionScope("makerbot_tests_no_such_module")

        with pytest.raises(ConstructionError) as exc_info:
            scope.construct("Widget")

        assert isinstance(exc_info.value.__cause__, ImportError)
        assert exc_info.value.scope is scope

    def test_missing_attribute(self) -> None:
        with pytest.raises(ConstructionError, match="has no attribute 'Gadget'"):
            ModuleConstructionScope(__name__).construct("Widget.Gadget")

    def test_missing_attribute_on_module_is_an_import_failure(self) -> None:
        with pytest.raises(ConstructionError, match="cannot import"):
            ModuleConstructionScope(__name__).construct("Gadget")

    def test_non_callable_target(self) -> None:
        with pytest.raises(ConstructionError, match="is not callable"):
            ModuleConstructionScope(__name__).construct("NOT_CALLABLE")

    def test_abstract_target(self) -> None:
        with pytest.raises(ConstructionError, match="is abstract"):
            ModuleConstructionScope(__name__).construct("AbstractMaker")

    def test_constructor_failure_is_chained(self) -> None:
        with pytest.raises(ConstructionError, match="boom") as exc_info:
            ModuleConstructionScope(__name__).construct("Exploding")

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_equality_follows_prefix(self) -> None:
        assert ModuleConstructionScope("app") == ModuleConstructionScope("app.")
        assert ModuleConstructionScope("app") != ModuleConstructionScope("other")
        assert hash(ModuleConstructionScope("app")) == hash(ModuleConstructionScope("app"))
        assert repr(ModuleConstructionScope("app")) == "ModuleConstructionScope('app')"

    def test_resolver_uses_module_scope(self) -> None:
        bot = MakerBot(__name__)

        assert bot.get_maker("Widget").label == "widget"


class TestMappingConstructionScope:
    def test_calls_registered_factory(self) -> None:
        scope = MappingConstructionScope({"Widget": Widget})

        assert isinstance(scope.construct("Widget"), Widget)

    def test_unknown_name(self) -> None:
        scope = MappingConstructionScope({"Widget": Widget})

        with pytest.raises(ConstructionError, match="no factory is registered"):
            scope.construct("Gadget")

    def test_factory_failure_is_chained(self) -> None:
        scope = MappingConstructionScope({"Exploding": Exploding})

        with pytest.raises(ConstructionError) as exc_info:
            scope.construct("Exploding")

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_mapping_is_copied(self) -> None:
        factories = {"Widget": Widget}
        scope = MappingConstructionScope(factories)
        factories.clear()

        assert isinstance(scope.construct("Widget"), Widget)


class TestFactoryConstructionScope:
    def test_passes_name_to_factory(self) -> None:
        scope = FactoryConstructionScope(lambda name: f"built:{name}")

        assert scope.construct("Widget") == "built:Widget"

    def test_construction_errors_pass_through(self) -> None:
        original = ConstructionError("Widget", "inner")

        def factory(name: str) -> object:
            raise original

        with pytest.raises(ConstructionError) as exc_info:
            FactoryConstructionScope(factory).construct("Widget")

        assert exc_info.value is original

    def test_other_errors_are_wrapped(self) -> None:
        def factory(name: str) -> object:
            raise LookupError(name)

        with pytest.raises(ConstructionError) as exc_info:
            FactoryConstructionScope(factory).construct("Widget")

        assert isinstance(exc_info.value.__cause__, LookupError)


class TestAsConstructionScope:
    def test_none_and_empty_string_use_default_prefix(self) -> None:
        assert as_construction_scope(None) == ModuleConstructionScope("makerbot")
        assert as_construction_scope("") == ModuleConstructionScope("makerbot")

    def test_string_becomes_module_scope(self) -> None:
        assert as_construction_scope("app.makers") == ModuleConstructionScope("app.makers")

    def test_scope_objects_are_returned_unchanged(self) -> None:
        scope = MappingConstructionScope({})

        assert as_construction_scope(scope) is scope

    def test_mapping_becomes_mapping_scope(self) -> None:
        scope = as_construction_scope({"Widget": Widget})

        assert isinstance(scope, MappingConstructionScope)
        assert isinstance(scope.construct("Widget"), Widget)

    def test_callable_becomes_factory_scope(self) -> None:
        scope = as_construction_scope(lambda name: name.upper())

        assert isinstance(scope, FactoryConstructionScope)
        assert scope.construct("widget") == "WIDGET"

    def test_unsupported_value(self) -> None:
        with pytest.raises(TypeError, match="Construction scope must be"):
            as_construction_scope(42)  # type: ignore[arg-type]
