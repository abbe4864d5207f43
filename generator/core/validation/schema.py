"""Core Schema System with Pydantic v2

Schemas describing model types are parsed, not validated: once a
ModelSchema exists it satisfies every structural precondition the
generation core relies on (non-empty names, non-empty type names, at most
one annotation per property).

Key Features:
- Frozen instances (safe to share across worker threads)
- snake_case fields with camelCase aliases for documents
- Discriminated unions for polymorphic annotations
- parse entry point raising a structured ValidationError
"""
from __future__ import annotations

from typing import Annotated, Any, Self

from pydantic import (
    BaseModel as PydanticBaseModel,
    ConfigDict,
    GetCoreSchemaHandler,
    StringConstraints,
)
from pydantic.alias_generators import to_camel
from pydantic_core import CoreSchema, core_schema


class NonEmptyStr(str):
    """Non-empty string with automatic trimming."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: type, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls._validate,
            core_schema.str_schema(strip_whitespace=True),
        )

    @classmethod
    def _validate(cls, v: str) -> NonEmptyStr:
        if not (stripped := v.strip()): raise ValueError("String cannot be empty or whitespace-only")
        return cls(stripped)


IDENTIFIER_PATTERN = r"^@?[^\W\d]\w*$"
NAMESPACE_PATTERN = r"^(?:[^\W\d]\w*(?:\.[^\W\d]\w*)*)?$"

Identifier = Annotated[str, StringConstraints(strip_whitespace=True, pattern=IDENTIFIER_PATTERN)]
Namespace = Annotated[str, StringConstraints(strip_whitespace=True, pattern=NAMESPACE_PATTERN)]


class BaseSchema(PydanticBaseModel):
    """Base schema with parse-don't-validate semantics.

    Invalid descriptions are unrepresentable: all validation happens at
    construction time and instances are immutable afterwards.
    """

    model_config = ConfigDict(
        frozen=True,
        validate_default=True,
        # Naming
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
        from_attributes=True,
        # Extra fields handling
        extra="forbid",
    )

    @classmethod
    def parse(cls, data: dict[str, Any] | Any, *, strict: bool = False) -> Self:
        """Parse data into a schema instance.

        Raises ValidationError (core.validation.errors) if data is invalid.
        """
        from pydantic import ValidationError as PydanticValidationError
        from .errors import ValidationError

        try:
            return cls.model_validate(data, strict=strict)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, schema_name=cls.__name__) from e
