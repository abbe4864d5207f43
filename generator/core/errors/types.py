"""Monadic Error Handling Types

Result/Either types for deterministic, composable error propagation through
a generation pass. A model either generates (Ok) or is skipped with an
AppError (Err); nothing in between.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Generic, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
E = TypeVar("E", bound="AppError")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E2xxx: Schema and document errors
    E6xxx: Resource (file system) errors
    E9xxx: Internal/Unknown errors
    """
    # Schema / document (E2xxx)
    E2000_VALIDATION_GENERIC = 2000
    E2021_INVALID_DOCUMENT = 2021
    E2030_INVALID_SCHEMA = 2030
    E2031_DUPLICATE_PROPERTY = 2031
    E2032_CONFLICTING_ANNOTATIONS = 2032

    # Resource (E6xxx)
    E6001_FILE_NOT_FOUND = 6001
    E6002_FILE_READ_ERROR = 6002
    E6003_FILE_WRITE_ERROR = 6003
    E6004_MODULE_IMPORT_ERROR = 6004

    # Internal (E9xxx)
    E9000_INTERNAL_GENERIC = 9000
    E9001_UNEXPECTED_ERROR = 9001

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 2030 <= code < 2040:
            return "invalid-schema"
        if 2000 <= code < 3000:
            return "validation"
        if 6000 <= code < 7000:
            return "resource"
        return "internal"

    @property
    def is_invalid_schema(self) -> bool:
        return self.category == "invalid-schema"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing and debugging."""
    correlation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""
    model: str | None = None


@dataclass(frozen=True, slots=True)
class AppError:
    """Base application error with full context.

    All errors carry:
    - Typed error code from taxonomy
    - Human-readable message
    - Structured metadata for debugging
    - Tracing context (origin, model being generated)
    - Optional cause for error chaining
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    def with_context(self, **kwargs) -> AppError:
        """Create new error with updated context."""
        new_ctx = ErrorContext(
            correlation_id=kwargs.get("correlation_id", self.context.correlation_id),
            timestamp=self.context.timestamp,
            origin=kwargs.get("origin", self.context.origin),
            model=kwargs.get("model", self.context.model),
        )
        return AppError(
            code=self.code,
            message=self.message,
            context=new_ctx,
            metadata={**self.metadata, **kwargs.get("metadata", {})},
            cause=self.cause,
        )

    def with_metadata(self, **kwargs) -> AppError:
        """Create new error with additional metadata."""
        return AppError(
            code=self.code,
            message=self.message,
            context=self.context,
            metadata={**self.metadata, **kwargs},
            cause=self.cause,
        )

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message} (correlation_id={self.context.correlation_id})"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result monad."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result monad."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]


def partition_results(results: list[Result[T, AppError]]) -> tuple[list[T], list[AppError]]:
    """Split Results into (values, errors), keeping input order within each side."""
    values: list[T] = []
    errors: list[AppError] = []
    for r in results:
        match r:
            case Ok(v):
                values.append(v)
            case Err(e):
                errors.append(e)
    return values, errors
