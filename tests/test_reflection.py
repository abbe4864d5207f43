"""Tests for @generate_dto class reflection."""

from typing import Annotated, ClassVar, Optional

from core.errors import ErrorCode
from engines.pipeline import GenerationPass
from ingest.reflection import (
    BasicPropertyCheck,
    DtoPropertyCheck,
    StringPropertyCheck,
    discover_models,
    generate_dto,
    model_from_class,
    registered_classes,
    render_type,
)
from models.checks import StringCheckKind
from models.schema import BasicCheckAnnotation, NestedModelCheckAnnotation, StringCheckAnnotation

MODULE = __name__


class TestRenderType:
    def test_builtins_by_name(self):
        assert render_type(str) == "str"
        assert render_type(int) == "int"

    def test_optionals_are_nullable(self):
        assert render_type(int | None) == "int?"
        assert render_type(Optional[str]) == "str?"

    def test_classes_are_module_qualified(self):
        class Address:
            pass
        assert render_type(Address) == f"{MODULE}.Address"

    def test_generics(self):
        assert render_type(list[str]) == "list[str]"
        assert render_type(dict[str, int]) == "dict[str, int]"

    def test_annotated_renders_its_base(self):
        assert render_type(Annotated[str, StringPropertyCheck()]) == "str"


class TestModelFromClass:
    def test_properties_and_markers(self):
        class Address:
            pass

        @generate_dto
        class Customer:
            name: Annotated[str, StringPropertyCheck(StringCheckKind.ALLOW_EMPTY_STRING)]
            home: Annotated[Address, DtoPropertyCheck(allow_null=True)]
            count: Annotated[int, BasicPropertyCheck(allow_null=True)]
            age: int | None
            tags: list[str]
            _cache: dict
            kind: ClassVar[str] = "customer"

        model = model_from_class(Customer).unwrap()
        assert model.namespace == MODULE
        assert model.name == "Customer"
        assert [(p.name, p.type_name) for p in model.properties] == [
            ("name", "str"),
            ("home", f"{MODULE}.Address"),
            ("count", "int"),
            ("age", "int?"),
            ("tags", "list[str]"),
        ]
        assert model.properties[0].annotation == StringCheckAnnotation(check=StringCheckKind.ALLOW_EMPTY_STRING)
        assert model.properties[1].annotation == NestedModelCheckAnnotation(allow_null=True, check_is_valid=True)
        assert model.properties[2].annotation == BasicCheckAnnotation(allow_null=True)
        assert model.properties[3].annotation is None

    def test_namespace_override(self):
        @generate_dto(namespace="Acme.Orders")
        class Order:
            pass

        assert model_from_class(Order).unwrap().qualified_name == "Acme.Orders.Order"

    def test_string_marker_accepts_loose_names(self):
        @generate_dto
        class Note:
            text: Annotated[str, StringPropertyCheck("allow-when-only-whitespace")]

        annotation = model_from_class(Note).unwrap().properties[0].annotation
        assert annotation.check == StringCheckKind.ALLOW_WHEN_ONLY_WHITESPACE

    def test_two_markers_conflict(self):
        @generate_dto
        class Noisy:
            text: Annotated[str, StringPropertyCheck(), BasicPropertyCheck()]

        error = model_from_class(Noisy).unwrap_err()
        assert error.code == ErrorCode.E2032_CONFLICTING_ANNOTATIONS
        assert error.context.model == f"{MODULE}.Noisy"

    def test_unresolvable_annotation(self):
        @generate_dto
        class Broken:
            other: "DoesNotExist"  # noqa: F821

        error = model_from_class(Broken).unwrap_err()
        assert error.code == ErrorCode.E2030_INVALID_SCHEMA
        assert error.context.model == f"{MODULE}.Broken"


class TestDiscovery:
    def test_registry_keeps_decoration_order(self):
        @generate_dto
        class First:
            pass

        @generate_dto
        class Second:
            pass

        assert registered_classes() == [First, Second]
        assert [r.unwrap().name for r in discover_models()] == ["First", "Second"]

    def test_decorated_classes_nest(self, load_generated):
        @generate_dto
        class Line:
            sku: str

        @generate_dto
        class Order:
            line: Line
            note: Annotated[str, StringPropertyCheck(StringCheckKind.ALLOW_NULL)]

        models = [r.unwrap() for r in discover_models()]
        result = GenerationPass(models).run()
        assert result.all_succeeded
        module = load_generated(*(s.text for s in result.sources()))

        assert module.OrderDTO(line=module.LineDTO(sku="A-1")).check_is_valid() is True
        assert module.OrderDTO(line=module.LineDTO(sku=" ")).check_is_valid() is False
        assert module.OrderDTO().check_is_valid() is False

    def test_explicit_classes(self):
        class Plain:
            value: int

        (result,) = discover_models([Plain])
        assert result.unwrap().properties[0].type_name == "int"
