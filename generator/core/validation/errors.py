"""Validation Error System

Structured errors with JSON paths, constraints and actual values for model
descriptions that fail to parse. Every parse failure of a model description
is an invalid-schema error: fatal to that model, not to the pass.

AppError metadata for a single failed field:
{
    "schema": "ModelSchema",
    "field": "properties[2].typeName",
    "constraint": "value_error",
    "value": "   ",
    "suggested_fix": "Provide the property's declared type, e.g. 'string' or 'int?'"
}

Several failed fields are listed under "errors" with an "error_count".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from core.errors import AppError, ErrorCode, ErrorContext


@dataclass(frozen=True, slots=True)
class ValidationErrorDetail:
    """Detailed validation error for a single field.

    - field_path: JSON path to offending field (e.g., "properties[0].typeName")
    - constraint: Type of constraint violated (e.g., "missing", "string_pattern_mismatch")
    - actual_value: The actual value that failed
    - message: Human-readable error message
    - suggested_fix: Actionable suggestion to fix the error
    """
    field_path: str
    constraint: str
    actual_value: Any = None
    message: str = ""
    suggested_fix: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = {"field": self.field_path, "constraint": self.constraint, "message": self.message}
        if self.actual_value is not None: result["value"] = self.actual_value
        if self.suggested_fix: result["suggested_fix"] = self.suggested_fix
        return result

    @classmethod
    def from_pydantic_error(cls, error: dict[str, Any]) -> ValidationErrorDetail:
        """Create from Pydantic validation error dict."""
        loc = error.get("loc", ())
        return cls(field_path=cls._format_path(loc), constraint=error.get("type", "validation_error"),
            actual_value=error.get("input"), message=error.get("msg", "Validation failed"),
            suggested_fix=cls._generate_suggested_fix(error))

    @staticmethod
    def _format_path(loc: Sequence[str | int]) -> str:
        """Format Pydantic location tuple as JSON path."""
        if not loc: return "$"
        parts = []
        for segment in loc:
            if isinstance(segment, int): parts.append(f"[{segment}]")
            elif parts: parts.append(f".{segment}")
            else: parts.append(str(segment))
        return "".join(parts)

    @staticmethod
    def _generate_suggested_fix(error: dict[str, Any]) -> str | None:
        """Generate suggested fix from Pydantic error context."""
        err_type = error.get("type", "")
        ctx = error.get("ctx", {})
        loc = error.get("loc", ())
        last = str(loc[-1]) if loc else ""

        if last in ("typeName", "type_name"):
            return "Provide the property's declared type, e.g. 'string' or 'int?'"

        fix_generators = {
            "string_pattern_mismatch": lambda: "Use a valid identifier (letters, digits, underscores; not starting with a digit)",
            "missing": lambda: "This field is required - provide a value",
            "extra_forbidden": lambda: "Remove this field - it is not allowed",
            "union_tag_invalid": lambda: f"Annotation kind must be one of: {ctx.get('expected_tags', 'basic, nested_model, string')}",
            "union_tag_not_found": lambda: "Add a 'kind' key (basic, nested_model or string) to the annotation",
            "bool_parsing": lambda: "Provide true or false",
            "bool_type": lambda: "Provide a boolean (true/false) value",
            "string_type": lambda: "Provide a string value",
            "list_type": lambda: "Provide a list of values",
            "tuple_type": lambda: "Provide a list of values",
            "dict_type": lambda: "Provide a mapping with key-value pairs",
            "model_type": lambda: "Provide a mapping with key-value pairs",
            "value_error": lambda: ctx.get("error") and str(ctx["error"]),
        }

        if err_type in fix_generators: return fix_generators[err_type]() or None
        return None


@dataclass
class ValidationError(Exception):
    """Parse failure of a model description, with structured details."""
    message: str
    details: list[ValidationErrorDetail]
    schema_name: str | None = None
    model: str | None = None
    code: ErrorCode = field(default=ErrorCode.E2030_INVALID_SCHEMA)

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details: return self.message
        if len(self.details) == 1: return f"{(d := self.details[0]).field_path}: {d.message}"
        return f"{self.message} ({len(self.details)} errors)"

    def to_app_error(self) -> AppError:
        """Convert to AppError for the Result-based pass."""
        context = ErrorContext(origin="validation", model=self.model)
        base_meta: dict[str, Any] = {"schema": self.schema_name} if self.schema_name else {}

        if len(self.details) == 1:
            d = self.details[0]
            return AppError(code=self.code, message=f"{d.field_path}: {d.message}", context=context,
                metadata={**base_meta, "field": d.field_path, "constraint": d.constraint,
                    "value": d.actual_value, "suggested_fix": d.suggested_fix})

        return AppError(code=self.code, message=f"{self.message}: {len(self.details)} errors", context=context,
            metadata={**base_meta, "error_count": len(self.details), "errors": [d.to_dict() for d in self.details]})

    @classmethod
    def from_pydantic(cls, exc: Exception, *, schema_name: str | None = None,
                      model: str | None = None) -> ValidationError:
        """Create from Pydantic ValidationError."""
        if not hasattr(exc, "errors"):
            return cls(message=str(exc), details=[], schema_name=schema_name, model=model)
        return cls(message="Validation failed",
            details=[ValidationErrorDetail.from_pydantic_error(err) for err in exc.errors()],
            schema_name=schema_name, model=model)
