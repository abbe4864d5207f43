"""Predicate Emitters

Translate a resolved check into one boolean-expression fragment of the
target language, or None when the property constrains nothing.

| Check                                   | Fragment                         |
|-----------------------------------------|----------------------------------|
| BasicCheck(allow_null=True)             | none                             |
| BasicCheck(allow_null=False)            | not null                         |
| NestedModelCheck(check_is_valid=True)   | present and nested model valid   |
| NestedModelCheck(check_is_valid=False)  | as BasicCheck(allow_null)        |
| StringCheck(ALLOW_NULL)                 | none                             |
| StringCheck(ALLOW_EMPTY_STRING)         | not null                         |
| StringCheck(ALLOW_WHEN_ONLY_WHITESPACE) | not null or empty                |
| StringCheck(REQUIRES_..., UNKNOWN)      | not null, empty or whitespace    |
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable

from models.checks import BasicCheck, NestedModelCheck, StringCheck, StringCheckKind, ValidationCheckConfig

from .resolver import ResolvedProperty


class PredicateEmitter(ABC):
    """Base class for per-dialect predicate emitters."""

    #: Name of the zero-argument validity method on generated types.
    validity_method: str = "check_is_valid"

    def emit(self, property_name: str, check: ValidationCheckConfig) -> str | None:
        """Fragment for one property, or None when it adds no constraint."""
        match check:
            case BasicCheck(allow_null=True):
                return None
            case BasicCheck():
                return self.not_null(property_name)
            case NestedModelCheck(check_is_valid=True):
                return self.nested_is_valid(property_name)
            case NestedModelCheck(allow_null=allow_null):
                return self.emit(property_name, BasicCheck(allow_null=allow_null))
            case StringCheck(kind=StringCheckKind.ALLOW_NULL):
                return None
            case StringCheck(kind=StringCheckKind.ALLOW_EMPTY_STRING):
                return self.not_null(property_name)
            case StringCheck(kind=StringCheckKind.ALLOW_WHEN_ONLY_WHITESPACE):
                return self.not_null_or_empty(property_name)
            case StringCheck():
                # REQUIRES_NON_WHITESPACE_TEXT and UNKNOWN
                return self.not_null_or_whitespace(property_name)
            case _:
                raise TypeError(f"Unsupported check config: {check!r}")

    @abstractmethod
    def not_null(self, name: str) -> str: ...

    @abstractmethod
    def nested_is_valid(self, name: str) -> str:
        """Null-safe call of the nested model's own validity method."""

    @abstractmethod
    def not_null_or_empty(self, name: str) -> str: ...

    @abstractmethod
    def not_null_or_whitespace(self, name: str) -> str: ...


class PythonPredicateEmitter(PredicateEmitter):
    """Fragments for generated Python dataclasses (attributes read off self)."""

    validity_method = "check_is_valid"

    def not_null(self, name: str) -> str:
        return f"self.{name} is not None"

    def nested_is_valid(self, name: str) -> str:
        return f"(self.{name} is not None and self.{name}.{self.validity_method}() is True)"

    def not_null_or_empty(self, name: str) -> str:
        return f'(self.{name} is not None and self.{name} != "")'

    def not_null_or_whitespace(self, name: str) -> str:
        return f'(self.{name} is not None and self.{name}.strip() != "")'


class CSharpPredicateEmitter(PredicateEmitter):
    """Fragments for generated C# classes."""

    validity_method = "CheckIsValid"

    def not_null(self, name: str) -> str:
        return f"{name} is not null"

    def nested_is_valid(self, name: str) -> str:
        return f"{name}?.{self.validity_method}() is true"

    def not_null_or_empty(self, name: str) -> str:
        return f"!string.IsNullOrEmpty({name})"

    def not_null_or_whitespace(self, name: str) -> str:
        return f"!string.IsNullOrWhiteSpace({name})"


def emit_fragments(
    properties: Iterable[ResolvedProperty],
    emitter: PredicateEmitter,
    member_name: Callable[[str], str] = str,
) -> tuple[str, ...]:
    """Non-empty fragments in property order.

    `member_name` maps a property name to the name generated code uses for it.
    """
    fragments = (emitter.emit(member_name(prop.name), prop.check) for prop in properties)
    return tuple(f for f in fragments if f is not None)
