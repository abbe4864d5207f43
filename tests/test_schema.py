"""Tests for model schemas, boundary parsing and the error types."""

import pytest

from core.errors import (
    AppError,
    Err,
    ErrorCode,
    InvalidSchemaError,
    Ok,
    exception_to_error,
    partition_results,
)
from core.validation import BoundaryValidator, ValidationError, parse_batch
from models.checks import StringCheckKind
from models.schema import ModelSchema, PropertySchema


class TestPropertySchema:
    def test_camel_and_snake_keys(self):
        camel = PropertySchema.parse({"name": "Home", "typeName": "Acme.Address",
                                      "annotation": {"kind": "nested_model", "allowNull": True}})
        snake = PropertySchema.parse({"name": "Home", "type_name": "Acme.Address",
                                      "annotation": {"kind": "nested_model", "allow_null": True}})
        assert camel == snake
        assert camel.annotation_kind == "nested_model"

    def test_type_name_is_trimmed(self):
        assert PropertySchema.parse({"name": "A", "typeName": "  int? "}).type_name == "int?"

    def test_empty_type_name_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            PropertySchema.parse({"name": "A", "typeName": ""})
        assert exc_info.value.code == ErrorCode.E2030_INVALID_SCHEMA
        assert exc_info.value.details[0].field_path == "typeName"

    def test_unknown_annotation_kind_is_rejected(self):
        with pytest.raises(ValidationError):
            PropertySchema.parse({"name": "A", "typeName": "int", "annotation": {"kind": "regex"}})

    def test_extra_keys_are_rejected(self):
        with pytest.raises(ValidationError):
            PropertySchema.parse({"name": "A", "typeName": "int", "nullable": True})

    def test_string_check_ordinals(self):
        prop = PropertySchema.parse({"name": "A", "typeName": "string", "annotation": {"kind": "string", "check": 2}})
        assert prop.annotation.check == StringCheckKind.ALLOW_EMPTY_STRING

    def test_single_annotation_list_is_folded(self):
        prop = PropertySchema.parse({"name": "A", "typeName": "int", "annotations": [{"kind": "basic"}]})
        assert prop.annotation_kind == "basic"

    def test_two_annotations_raise(self):
        with pytest.raises(InvalidSchemaError) as exc_info:
            PropertySchema.parse({"name": "A", "typeName": "int",
                                  "annotation": {"kind": "basic"}, "annotations": [{"kind": "string"}]})
        assert exc_info.value.error.code == ErrorCode.E2032_CONFLICTING_ANNOTATIONS
        assert exc_info.value.error.metadata["annotations"] == ["basic", "string"]


class TestModelSchema:
    def test_instances_are_frozen(self):
        model = ModelSchema.parse({"name": "A"})
        with pytest.raises(Exception):
            model.name = "B"

    def test_qualified_name(self):
        assert ModelSchema.parse({"namespace": "Acme.Models", "name": "A"}).qualified_name == "Acme.Models.A"
        assert ModelSchema.parse({"name": "A"}).qualified_name == "A"

    def test_invalid_namespace(self):
        with pytest.raises(ValidationError):
            ModelSchema.parse({"namespace": "Acme..Models", "name": "A"})

    def test_empty_name_is_invalid_schema(self):
        error = BoundaryValidator(ModelSchema).parse_ingress({"name": ""}).unwrap_err()
        assert error.code.is_invalid_schema

    def test_duplicate_properties(self):
        data = {"name": "A", "properties": [{"name": "X", "typeName": "int"}, {"name": "X", "typeName": "int"}]}
        error = BoundaryValidator(ModelSchema).parse_ingress(data).unwrap_err()
        assert error.code == ErrorCode.E2031_DUPLICATE_PROPERTY


class TestBoundary:
    def test_parse_ingress_sets_origin_and_model(self):
        result = BoundaryValidator(ModelSchema).parse_ingress(
            {"namespace": "Acme", "name": "A", "properties": [{"name": "1x", "typeName": "int"}]},
            origin="orders.yaml",
        )
        error = result.unwrap_err()
        assert error.context.origin == "orders.yaml"
        assert error.context.model == "Acme.A"
        assert error.metadata["field"] == "properties[0].name"

    def test_non_mapping_input(self):
        error = BoundaryValidator(ModelSchema).parse_ingress("not a model").unwrap_err()
        assert error.code == ErrorCode.E2030_INVALID_SCHEMA
        assert error.context.model is None

    def test_parse_batch_keeps_order(self):
        results = parse_batch(ModelSchema, [{"name": "A"}, {"name": ""}, {"name": "C"}])
        assert [r.is_ok() for r in results] == [True, False, True]
        assert results[1].unwrap_err().metadata["batch_index"] == 1


class TestResult:
    def test_ok_and_err(self):
        error = AppError(code=ErrorCode.E9000_INTERNAL_GENERIC, message="x")
        assert Ok(2).unwrap() == 2
        assert Err(error).unwrap_err() is error
        with pytest.raises(ValueError):
            Err(error).unwrap()

    def test_partition_results(self):
        error = AppError(code=ErrorCode.E9000_INTERNAL_GENERIC, message="x")
        values, errors = partition_results([Ok(1), Err(error), Ok(3)])
        assert values == [1, 3]
        assert errors == [error]


class TestErrorCodes:
    @pytest.mark.parametrize("code,category", [
        (ErrorCode.E2030_INVALID_SCHEMA, "invalid-schema"),
        (ErrorCode.E2031_DUPLICATE_PROPERTY, "invalid-schema"),
        (ErrorCode.E2032_CONFLICTING_ANNOTATIONS, "invalid-schema"),
        (ErrorCode.E2021_INVALID_DOCUMENT, "validation"),
        (ErrorCode.E6001_FILE_NOT_FOUND, "resource"),
        (ErrorCode.E9001_UNEXPECTED_ERROR, "internal"),
    ])
    def test_categories(self, code, category):
        assert code.category == category

    def test_invalid_schema_error_message(self):
        error = InvalidSchemaError.build("Acme.A", "type name is empty", property_name="X").error
        assert error.message == "Invalid schema for 'Acme.A.X': type name is empty"
        assert error.context.model == "Acme.A"

    def test_exception_to_error_keeps_app_errors(self):
        exc = InvalidSchemaError.build(None, "bad")
        error = exception_to_error(exc, model="Acme.A", origin="generation")
        assert error.code == ErrorCode.E2030_INVALID_SCHEMA
        assert error.context.model == "Acme.A"
        assert error.context.origin == "generation"

    def test_exception_to_error_wraps_unexpected(self):
        error = exception_to_error(KeyError("k"), model="Acme.A")
        assert error.code == ErrorCode.E9001_UNEXPECTED_ERROR
        assert isinstance(error.cause, KeyError)
