"""Declarative Validation for Model Descriptions

Schemas are the single source of truth for what the generator accepts.
Validation happens at the boundary where descriptions enter (documents,
class reflection) with parse-don't-validate semantics.

Usage:
    from core.validation import BoundaryValidator, parse_batch

    results = parse_batch(ModelSchema, document["models"], origin="models.yaml")
"""
from .schema import (
    BaseSchema,
    NonEmptyStr,
    Identifier,
    Namespace,
)

from .errors import (
    ValidationError,
    ValidationErrorDetail,
)

from .boundaries import (
    BoundaryValidator,
    parse_batch,
)

__all__ = [
    "BaseSchema",
    "NonEmptyStr",
    "Identifier",
    "Namespace",
    "ValidationError",
    "ValidationErrorDetail",
    "BoundaryValidator",
    "parse_batch",
]
