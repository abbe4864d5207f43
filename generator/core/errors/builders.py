"""Domain-Specific Error Builders

Ergonomic constructors for typed errors raised while loading model
descriptions, generating shadow types and writing them out.
Each builder creates an AppError with the appropriate code and context.
"""
from pathlib import Path

from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Schema / Document Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    field: str | None = None,
    value: str | None = None,
    origin: str = "",
    model: str | None = None,
    **metadata,
) -> Err[AppError]:
    """Create validation error."""
    meta = {"field": field, "value": value, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin, model=model),
        metadata={k: v for k, v in meta.items() if v is not None},
    ))


def invalid_schema(
    model: str | None,
    reason: str,
    *,
    code: ErrorCode = ErrorCode.E2030_INVALID_SCHEMA,
    property_name: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Model description breaks a structural precondition; fatal to that model only."""
    subject = model or "<unnamed model>"
    if property_name:
        subject = f"{subject}.{property_name}"
    return validation_error(
        f"Invalid schema for '{subject}': {reason}",
        code=code,
        field=property_name,
        origin=origin,
        model=model,
        **metadata,
    )


def duplicate_property(model: str, property_name: str, origin: str = "") -> Err[AppError]:
    return invalid_schema(
        model,
        f"property '{property_name}' is declared more than once",
        code=ErrorCode.E2031_DUPLICATE_PROPERTY,
        property_name=property_name,
        origin=origin,
    )


def conflicting_annotations(
    model: str | None, property_name: str, found: list[str], origin: str = ""
) -> Err[AppError]:
    return invalid_schema(
        model,
        f"at most one check annotation is allowed, found {', '.join(found)}",
        code=ErrorCode.E2032_CONFLICTING_ANNOTATIONS,
        property_name=property_name,
        origin=origin,
        annotations=found,
    )


def invalid_document(path: str | Path, reason: str, origin: str = "") -> Err[AppError]:
    return validation_error(
        f"Invalid model document '{path}': {reason}",
        code=ErrorCode.E2021_INVALID_DOCUMENT,
        origin=origin,
        path=str(path),
    )


# =============================================================================
# Resource Errors (E6xxx)
# =============================================================================

def file_not_found(path: str | Path, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6001_FILE_NOT_FOUND,
        message=f"File not found: {path}",
        context=ErrorContext(origin=origin),
        metadata={"path": str(path)},
    ))


def file_read_failed(path: str | Path, cause: Exception, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6002_FILE_READ_ERROR,
        message=f"Could not read '{path}': {cause}",
        context=ErrorContext(origin=origin),
        metadata={"path": str(path)},
        cause=cause,
    ))


def file_write_failed(
    path: str | Path, cause: Exception, *, model: str | None = None, origin: str = ""
) -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6003_FILE_WRITE_ERROR,
        message=f"Could not write '{path}': {cause}",
        context=ErrorContext(origin=origin, model=model),
        metadata={"path": str(path)},
        cause=cause,
    ))


def module_import_failed(module: str, cause: Exception, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6004_MODULE_IMPORT_ERROR,
        message=f"Could not import module '{module}': {cause}",
        context=ErrorContext(origin=origin),
        metadata={"module": module},
        cause=cause,
    ))
