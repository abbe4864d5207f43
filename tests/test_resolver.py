"""Tests for the rule resolver."""

import pytest

from core.errors import ErrorCode, InvalidSchemaError
from engines.resolver import (
    CandidateNames,
    ResolverConfig,
    is_nullable,
    resolve,
    resolve_model,
    strip_nullable,
)
from models.checks import BasicCheck, NestedModelCheck, StringCheck, StringCheckKind
from models.schema import ModelSchema, PropertySchema

CANDIDATES = CandidateNames.of(["Acme.Models.Address", "Acme.Models.Customer"])


def _prop(name, type_name, annotation=None):
    data = {"name": name, "type_name": type_name}
    if annotation is not None:
        data["annotation"] = annotation
    return PropertySchema.parse(data)


class TestNullableRule:
    def test_nullable_type_allows_null(self):
        assert resolve(_prop("Age", "int?"), CANDIDATES) == BasicCheck(allow_null=True)

    @pytest.mark.parametrize("annotation", [
        {"kind": "basic", "allow_null": False},
        {"kind": "string", "check": "requires_non_whitespace_text"},
        {"kind": "nested_model", "allow_null": False, "check_is_valid": True},
    ])
    def test_annotations_ignored_on_nullable_types(self, annotation):
        """A nullable source type wins over any annotation."""
        assert resolve(_prop("Note", "string?", annotation), CANDIDATES) == BasicCheck(allow_null=True)
        assert resolve(_prop("Home", "Acme.Models.Address?", annotation), CANDIDATES) == BasicCheck(allow_null=True)

    def test_nullable_helpers(self):
        assert is_nullable("int?")
        assert is_nullable("Acme.Models.Address? ")
        assert not is_nullable("int")
        assert strip_nullable(" int? ") == "int"
        assert strip_nullable("string") == "string"


class TestStringRule:
    def test_unannotated_string_requires_text(self):
        check = resolve(_prop("Name", "string"), CANDIDATES)
        assert check == StringCheck(StringCheckKind.REQUIRES_NON_WHITESPACE_TEXT)

    @pytest.mark.parametrize("kind", list(StringCheckKind))
    def test_string_annotation_kind_is_kept(self, kind):
        check = resolve(_prop("Name", "string", {"kind": "string", "check": kind.value}), CANDIDATES)
        assert check == StringCheck(kind)

    def test_basic_allow_null_on_string(self):
        check = resolve(_prop("Name", "string", {"kind": "basic", "allow_null": True}), CANDIDATES)
        assert check == StringCheck(StringCheckKind.ALLOW_NULL)

    def test_basic_disallow_null_on_string_uses_default(self):
        check = resolve(_prop("Name", "string", {"kind": "basic", "allow_null": False}), CANDIDATES)
        assert check == StringCheck(StringCheckKind.REQUIRES_NON_WHITESPACE_TEXT)

    def test_nested_annotation_on_string_is_ignored(self):
        annotation = {"kind": "nested_model", "allow_null": True, "check_is_valid": False}
        check = resolve(_prop("Name", "string", annotation), CANDIDATES)
        assert check == StringCheck(StringCheckKind.REQUIRES_NON_WHITESPACE_TEXT)

    @pytest.mark.parametrize("type_name", ["string", "String", "System.String", "str", "builtins.str"])
    def test_string_type_names_are_case_insensitive(self, type_name):
        assert isinstance(resolve(_prop("Name", type_name), CANDIDATES), StringCheck)

    def test_custom_string_type_names(self):
        config = ResolverConfig.from_names(["Text"])
        assert isinstance(resolve(_prop("Name", "text"), CANDIDATES, config), StringCheck)
        assert resolve(_prop("Name", "string"), CANDIDATES, config) == BasicCheck(allow_null=False)

    def test_unrecognized_check_fails_closed(self):
        check = resolve(_prop("Name", "string", {"kind": "string", "check": "sometimes"}), CANDIDATES)
        assert check == StringCheck(StringCheckKind.UNKNOWN)


class TestNestedModelRule:
    def test_unannotated_nested_model(self):
        check = resolve(_prop("Home", "Acme.Models.Address"), CANDIDATES)
        assert check == NestedModelCheck(allow_null=False, check_is_valid=True)

    def test_nested_annotation_is_kept(self):
        annotation = {"kind": "nested_model", "allow_null": True, "check_is_valid": False}
        check = resolve(_prop("Home", "Acme.Models.Address", annotation), CANDIDATES)
        assert check == NestedModelCheck(allow_null=True, check_is_valid=False)

    @pytest.mark.parametrize("allow_null", [True, False])
    def test_basic_annotation_on_nested_model(self, allow_null):
        annotation = {"kind": "basic", "allow_null": allow_null}
        check = resolve(_prop("Home", "Acme.Models.Address", annotation), CANDIDATES)
        assert check == NestedModelCheck(allow_null=allow_null, check_is_valid=True)

    def test_string_annotation_on_nested_model_is_ignored(self):
        annotation = {"kind": "string", "check": "allow_null"}
        check = resolve(_prop("Home", "Acme.Models.Address", annotation), CANDIDATES)
        assert check == NestedModelCheck(allow_null=False, check_is_valid=True)

    def test_candidate_lookup_is_case_insensitive(self):
        check = resolve(_prop("Home", "acme.models.ADDRESS"), CANDIDATES)
        assert isinstance(check, NestedModelCheck)

    def test_short_name_is_not_a_candidate(self):
        assert resolve(_prop("Home", "Address"), CANDIDATES) == BasicCheck(allow_null=False)


class TestFallbackRule:
    @pytest.mark.parametrize("type_name", ["int", "System.Guid", "List<string>", "decimal"])
    def test_other_types_reject_null(self, type_name):
        assert resolve(_prop("Value", type_name), CANDIDATES) == BasicCheck(allow_null=False)

    def test_basic_allow_null_on_plain_type_still_rejects_null(self):
        check = resolve(_prop("Count", "int", {"kind": "basic", "allow_null": True}), CANDIDATES)
        assert check == BasicCheck(allow_null=False)

    def test_empty_candidate_set(self):
        assert resolve(_prop("Home", "Acme.Models.Address"), CandidateNames()) == BasicCheck(allow_null=False)


class TestTotality:
    def test_resolve_is_idempotent(self):
        prop = _prop("Home", "Acme.Models.Address", {"kind": "basic", "allow_null": True})
        assert resolve(prop, CANDIDATES) == resolve(prop, CANDIDATES)

    def test_empty_type_name_is_invalid_schema(self):
        prop = PropertySchema.model_construct(name="Broken", type_name="  ", annotation=None)
        with pytest.raises(InvalidSchemaError) as exc_info:
            resolve(prop, CANDIDATES)
        error = exc_info.value.error
        assert error.code == ErrorCode.E2030_INVALID_SCHEMA
        assert error.code.is_invalid_schema

    def test_resolve_model_reports_model_name(self):
        broken = PropertySchema.model_construct(name="Broken", type_name="", annotation=None)
        model = ModelSchema.model_construct(namespace="Acme.Models", name="Order", properties=(broken,))
        with pytest.raises(InvalidSchemaError) as exc_info:
            resolve_model(model, CANDIDATES)
        assert exc_info.value.error.context.model == "Acme.Models.Order"
        assert "Acme.Models.Order.Broken" in exc_info.value.error.message

    def test_resolve_model_keeps_declaration_order(self, make_model, prop):
        model = make_model(
            "Customer",
            prop("Name", "string"),
            prop("Age", "int?"),
            prop("Home", "Acme.Models.Address"),
        )
        resolved = resolve_model(model, CANDIDATES)
        assert [p.name for p in resolved] == ["Name", "Age", "Home"]
        assert [type(p.check) for p in resolved] == [StringCheck, BasicCheck, NestedModelCheck]
        assert resolved[1].is_nullable_type


class TestCandidateNames:
    def test_from_models(self, make_model):
        names = CandidateNames.from_models([make_model("Address"), make_model("Tag", namespace="")])
        assert "Acme.Models.Address" in names
        assert "Tag" in names
        assert len(names) == 2

    def test_canonical_returns_declared_spelling(self):
        assert CANDIDATES.canonical(" acme.models.ADDRESS ") == "Acme.Models.Address"
        assert CANDIDATES.canonical("Acme.Models.Order") is None

    def test_non_string_is_never_a_candidate(self):
        assert None not in CANDIDATES
        assert 42 not in CANDIDATES
