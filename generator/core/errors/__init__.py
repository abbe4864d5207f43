"""Monadic Error Handling System

Type-safe error handling inspired by Haskell's Either monad and Rust's
Result type.

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Hierarchical error code taxonomy
- Builder functions: Ergonomic error construction
- InvalidSchemaError: raised by the generation core, caught per model

Usage:
    from core.errors import Ok, Err, Result, AppError, invalid_schema

    def check_model(model: ModelSchema) -> Result[ModelSchema, AppError]:
        if not model.name:
            return invalid_schema(None, "model name is empty")
        return Ok(model)

    match check_model(model):
        case Ok(valid):
            generate(valid)
        case Err(error):
            log.warning(error.message, code=error.code.name)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    # Combinators
    partition_results,
)

from .builders import (
    validation_error,
    invalid_schema,
    duplicate_property,
    conflicting_annotations,
    invalid_document,
    file_not_found,
    file_read_failed,
    file_write_failed,
    module_import_failed,
)

from .exceptions import (
    AppErrorException,
    InvalidSchemaError,
    exception_to_error,
    log_error,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    # Combinators
    "partition_results",
    # Builders
    "validation_error",
    "invalid_schema",
    "duplicate_property",
    "conflicting_annotations",
    "invalid_document",
    "file_not_found",
    "file_read_failed",
    "file_write_failed",
    "module_import_failed",
    # Exceptions
    "AppErrorException",
    "InvalidSchemaError",
    "exception_to_error",
    "log_error",
]
