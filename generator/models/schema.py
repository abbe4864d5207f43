"""Model and property descriptions consumed by the generator.

A ModelSchema is built once per generation pass from whatever host supplies
the models (documents, class reflection), and is immutable afterwards.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, field_validator, model_validator

from core.errors import InvalidSchemaError, conflicting_annotations, duplicate_property
from core.validation import BaseSchema, Identifier, Namespace, NonEmptyStr

from .checks import (
    DEFAULT_ALLOW_NULL,
    DEFAULT_CHECK_IS_VALID,
    DEFAULT_STRING_CHECK,
    StringCheckKind,
)


class BasicCheckAnnotation(BaseSchema):
    """Declares whether the property may be null."""
    kind: Literal["basic"] = "basic"
    allow_null: bool = DEFAULT_ALLOW_NULL


class NestedModelCheckAnnotation(BaseSchema):
    """For properties typed as another model: nullability and recursive validation."""
    kind: Literal["nested_model"] = "nested_model"
    allow_null: bool = DEFAULT_ALLOW_NULL
    check_is_valid: bool = DEFAULT_CHECK_IS_VALID


class StringCheckAnnotation(BaseSchema):
    """Declares what string content a string property accepts."""
    kind: Literal["string"] = "string"
    check: StringCheckKind = DEFAULT_STRING_CHECK

    @field_validator("check", mode="before")
    @classmethod
    def _fail_closed(cls, value: Any) -> StringCheckKind:
        return StringCheckKind.coerce(value)


PropertyAnnotation = Annotated[
    Union[BasicCheckAnnotation, NestedModelCheckAnnotation, StringCheckAnnotation],
    Field(discriminator="kind"),
]

_KIND_ALIASES = {
    "basic": "basic",
    "basicpropertycheck": "basic",
    "nested": "nested_model",
    "nestedmodel": "nested_model",
    "nested_model": "nested_model",
    "dto": "nested_model",
    "dtopropertycheck": "nested_model",
    "string": "string",
    "stringpropertycheck": "string",
}


class PropertySchema(BaseSchema):
    """One property of a model.

    type_name is the fully-qualified textual type; a trailing '?' marks a
    nullable source type.
    """
    name: Identifier
    type_name: NonEmptyStr
    annotation: PropertyAnnotation | None = None

    @model_validator(mode="before")
    @classmethod
    def _single_annotation(cls, data: Any) -> Any:
        """Fold an 'annotations' list into the single 'annotation' slot."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "annotations" in data:
            annotations = data.pop("annotations") or []
            if not isinstance(annotations, list):
                annotations = [annotations]
            present = [a for a in annotations if a is not None]
            if data.get("annotation") is not None:
                present.insert(0, data["annotation"])
            if len(present) > 1:
                found = [str(a.get("kind", "?")) if isinstance(a, dict) else type(a).__name__ for a in present]
                raise InvalidSchemaError(conflicting_annotations(None, str(data.get("name")), found).unwrap_err())
            data["annotation"] = present[0] if present else None
        if isinstance(annotation := data.get("annotation"), dict) and isinstance(kind := annotation.get("kind"), str):
            tag = kind.replace("-", "_").casefold()
            data["annotation"] = {**annotation, "kind": _KIND_ALIASES.get(tag.replace("_", ""), _KIND_ALIASES.get(tag, kind))}
        return data

    @property
    def annotation_kind(self) -> str | None:
        return self.annotation.kind if self.annotation else None


class ModelSchema(BaseSchema):
    """One source type marked for generation."""
    namespace: Namespace = ""
    name: Identifier
    properties: tuple[PropertySchema, ...] = ()

    @model_validator(mode="after")
    def _unique_property_names(self) -> ModelSchema:
        seen: set[str] = set()
        for prop in self.properties:
            if prop.name in seen:
                raise InvalidSchemaError(duplicate_property(self.qualified_name, prop.name).unwrap_err())
            seen.add(prop.name)
        return self

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name
