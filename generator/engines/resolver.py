"""Rule Resolver

Decides which validation check applies to each property. Pure and total:
the same property and candidate set always resolve to the same check, and
every well-formed property resolves to something.

Rules, first match wins:
1. nullable type ('?' suffix)   -> BasicCheck(allow_null=True), annotations ignored
2. string type                  -> StringCheck from the string annotation,
                                   ALLOW_NULL for a basic allow_null annotation,
                                   REQUIRES_NON_WHITESPACE_TEXT otherwise
3. another generated model      -> NestedModelCheck from the nested annotation,
                                   (basic allow_null, check_is_valid=True),
                                   or (False, True)
4. anything else                -> BasicCheck(allow_null=False)

An annotation whose family does not match the type's family is ignored.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from core.errors import InvalidSchemaError
from models.checks import (
    DEFAULT_ALLOW_NULL,
    DEFAULT_CHECK_IS_VALID,
    DEFAULT_STRING_CHECK,
    BasicCheck,
    NestedModelCheck,
    StringCheck,
    StringCheckKind,
    ValidationCheckConfig,
)
from models.schema import (
    BasicCheckAnnotation,
    ModelSchema,
    NestedModelCheckAnnotation,
    PropertySchema,
    StringCheckAnnotation,
)

NULLABLE_MARKER = "?"

DEFAULT_STRING_TYPE_NAMES = frozenset({"string", "system.string", "str", "builtins.str"})


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Names that count as the string primitive (compared case-insensitively)."""
    string_type_names: frozenset[str] = DEFAULT_STRING_TYPE_NAMES

    @classmethod
    def from_names(cls, names: Iterable[str]) -> ResolverConfig:
        return cls(string_type_names=frozenset(n.casefold() for n in names))

    def is_string(self, type_name: str) -> bool:
        return type_name.strip().casefold() in self.string_type_names


DEFAULT_RESOLVER_CONFIG = ResolverConfig()


@dataclass(frozen=True, slots=True)
class CandidateNames:
    """Qualified names of every model in the pass.

    Built once, before any property is resolved, then only read; safe to
    share between any number of concurrent readers. Lookups ignore case;
    `canonical` gives back the model's name as declared.
    """
    _folded: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def of(cls, names: Iterable[str]) -> CandidateNames:
        folded: dict[str, str] = {}
        for name in names:
            folded.setdefault(name.casefold(), name)
        return cls(MappingProxyType(folded))

    @classmethod
    def from_models(cls, models: Iterable[ModelSchema]) -> CandidateNames:
        return cls.of(model.qualified_name for model in models)

    def canonical(self, type_name: str) -> str | None:
        """Declared qualified name of the model `type_name` refers to."""
        return self._folded.get(type_name.strip().casefold())

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and type_name.strip().casefold() in self._folded

    def __len__(self) -> int:
        return len(self._folded)


@dataclass(frozen=True, slots=True)
class ResolvedProperty:
    """A property paired with the check it resolved to."""
    name: str
    type_name: str
    check: ValidationCheckConfig

    @property
    def is_nullable_type(self) -> bool:
        return is_nullable(self.type_name)


def is_nullable(type_name: str) -> bool:
    return type_name.rstrip().endswith(NULLABLE_MARKER)


def strip_nullable(type_name: str) -> str:
    stripped = type_name.strip()
    return stripped[:-1].rstrip() if stripped.endswith(NULLABLE_MARKER) else stripped


def _require_type_name(prop: PropertySchema, model: str | None = None) -> str:
    type_name = getattr(prop, "type_name", None)
    if not isinstance(type_name, str) or not type_name.strip():
        raise InvalidSchemaError.build(model, "type name is empty", property_name=getattr(prop, "name", None))
    return type_name


def resolve(
    prop: PropertySchema,
    candidates: CandidateNames,
    config: ResolverConfig = DEFAULT_RESOLVER_CONFIG,
) -> ValidationCheckConfig:
    """Resolve the validation check for one property."""
    type_name = _require_type_name(prop)

    if is_nullable(type_name):
        return BasicCheck(allow_null=True)

    annotation = prop.annotation

    if config.is_string(type_name):
        match annotation:
            case StringCheckAnnotation(check=kind):
                return StringCheck(StringCheckKind.coerce(kind))
            case BasicCheckAnnotation(allow_null=True):
                return StringCheck(StringCheckKind.ALLOW_NULL)
            case _:
                return StringCheck(DEFAULT_STRING_CHECK)

    if type_name in candidates:
        match annotation:
            case NestedModelCheckAnnotation(allow_null=allow_null, check_is_valid=check_is_valid):
                return NestedModelCheck(allow_null=allow_null, check_is_valid=check_is_valid)
            case BasicCheckAnnotation(allow_null=allow_null):
                return NestedModelCheck(allow_null=allow_null, check_is_valid=DEFAULT_CHECK_IS_VALID)
            case _:
                return NestedModelCheck(allow_null=DEFAULT_ALLOW_NULL, check_is_valid=DEFAULT_CHECK_IS_VALID)

    return BasicCheck(allow_null=False)


def resolve_model(
    model: ModelSchema,
    candidates: CandidateNames,
    config: ResolverConfig = DEFAULT_RESOLVER_CONFIG,
) -> tuple[ResolvedProperty, ...]:
    """Resolve every property of a model, in declaration order."""
    if not getattr(model, "name", None):
        raise InvalidSchemaError.build(None, "model name is empty")

    resolved: list[ResolvedProperty] = []
    for prop in model.properties:
        type_name = _require_type_name(prop, model.qualified_name)
        resolved.append(ResolvedProperty(name=prop.name, type_name=type_name, check=resolve(prop, candidates, config)))
    return tuple(resolved)
