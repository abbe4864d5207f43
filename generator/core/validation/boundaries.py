"""Validation at System Boundaries

Model descriptions enter the generator from documents or class reflection.
They are parsed once at that boundary; past it, the generation core only
ever sees well-formed, immutable schemas.
"""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from core.errors import AppError, AppErrorException, ErrorCode, ErrorContext, Result, Ok, Err
from .schema import BaseSchema
from .errors import ValidationError

S = TypeVar("S", bound=BaseSchema)


class BoundaryValidator(Generic[S]):
    """Stateless boundary validator for a specific schema.

    Usage:
        model_validator = BoundaryValidator(ModelSchema)
        result = model_validator.parse_ingress(raw_model, origin="models.yaml")
    """

    __slots__ = ("schema",)

    def __init__(self, schema: type[S]):
        self.schema = schema

    def parse_ingress(self, data: Any, *, origin: str = "ingress", strict: bool = False) -> Result[S, AppError]:
        """Parse and validate data entering the generator."""
        model = _model_hint(data)
        try: return Ok(self.schema.parse(data, strict=strict))
        except ValidationError as e:
            e.model = model
            return Err(e.to_app_error().with_context(origin=origin))
        except AppErrorException as e:
            return Err(e.error.with_context(origin=origin, model=e.error.context.model or model))
        except Exception as e:
            return Err(AppError(code=ErrorCode.E2030_INVALID_SCHEMA, message=f"Ingress validation failed: {e}",
                context=ErrorContext(origin=origin, model=model), metadata={"schema": self.schema.__name__}, cause=e))


def parse_batch(
    schema: type[S],
    items: list[Any],
    *,
    origin: str = "ingress",
    strict: bool = False,
) -> list[Result[S, AppError]]:
    """Parse a batch of items independently.

    One Result per item, in input order; a bad item never affects the others.

    Usage:
        for idx, result in enumerate(parse_batch(ModelSchema, raw_models)):
            match result:
                case Ok(model):
                    models.append(model)
                case Err(error):
                    log.warning("model_rejected", index=idx, error=error.message)
    """
    validator = BoundaryValidator(schema)
    results: list[Result[S, AppError]] = []

    for idx, item in enumerate(items):
        result = validator.parse_ingress(item, origin=origin, strict=strict)
        if result.is_err():
            result = Err(result.unwrap_err().with_metadata(batch_index=idx))
        results.append(result)

    return results


def _model_hint(data: Any) -> str | None:
    """Best-effort qualified name of a raw model description, for error context."""
    if not isinstance(data, dict) or not isinstance(name := data.get("name"), str):
        return None
    namespace = data.get("namespace")
    return f"{namespace}.{name}" if isinstance(namespace, str) and namespace else name
