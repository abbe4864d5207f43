"""Exception Bridge

Connects exception-based code (the pure generation core) with the Result
monad used by the generation pass. The core raises; the pass catches at the
per-model boundary and turns the exception into an Err for that model only.
"""
from __future__ import annotations

from core.logging import get_logger

from .types import AppError, ErrorCode, ErrorContext
from .builders import invalid_schema

log = get_logger("errors.exceptions")


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when you need to raise an AppError in code that
    doesn't use the Result monad (e.g., the pure resolver and emitters).
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


class InvalidSchemaError(AppErrorException):
    """A model description violates a structural precondition.

    Fatal to generation of that single model, never to the whole pass.
    """

    @classmethod
    def build(
        cls,
        model: str | None,
        reason: str,
        *,
        property_name: str | None = None,
        code: ErrorCode = ErrorCode.E2030_INVALID_SCHEMA,
    ) -> InvalidSchemaError:
        return cls(invalid_schema(model, reason, property_name=property_name, code=code).error)


def exception_to_error(exc: Exception, *, model: str | None = None, origin: str = "") -> AppError:
    """Map an exception raised while generating one model to an AppError."""
    if isinstance(exc, AppErrorException):
        error = exc.error
        if model and not error.context.model:
            error = error.with_context(model=model)
        return error.with_context(origin=origin) if origin and not error.context.origin else error

    from core.validation.errors import ValidationError
    if isinstance(exc, ValidationError):
        return exc.to_app_error().with_context(origin=origin, model=model)

    log.exception(
        "unexpected_exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        model=model,
        exc_info=exc,
    )
    return AppError(
        code=ErrorCode.E9001_UNEXPECTED_ERROR,
        message=f"Unexpected error: {exc}",
        context=ErrorContext(origin=origin, model=model),
        cause=exc,
    )


def log_error(error: AppError, event: str = "error") -> None:
    """Log an AppError with its full context."""
    log_method = log.warning if error.code.category in ("validation", "invalid-schema") else log.error
    log_method(
        event,
        error_code=error.code.name,
        message=error.message,
        category=error.code.category,
        model=error.context.model,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
        metadata=error.metadata,
    )
