"""Class Reflection

Builds model descriptions from ordinary Python classes. A class opts in
with @generate_dto; per-property checks ride along as typing.Annotated
metadata:

    @generate_dto
    class Customer:
        name: Annotated[str, StringPropertyCheck(StringCheckKind.ALLOW_EMPTY_STRING)]
        address: Annotated[Address, DtoPropertyCheck(allow_null=True)]
        age: int | None

Type names are rendered the way documents spell them: builtins by name,
other classes as 'module.Name', optionals with a trailing '?'. The class's
module is its namespace, so a property typed as another decorated class
resolves as a nested model.
"""
from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Annotated, Any, Callable, ClassVar, Iterable, TypeVar, Union, get_args, get_origin, get_type_hints

from core.errors import AppError, Result, invalid_schema
from core.logging import ingest_logger
from core.validation import BoundaryValidator
from models.checks import DEFAULT_ALLOW_NULL, DEFAULT_CHECK_IS_VALID, DEFAULT_STRING_CHECK, StringCheckKind
from models.schema import ModelSchema

log = ingest_logger()

C = TypeVar("C", bound=type)

_NONE_TYPE = type(None)
_model_validator = BoundaryValidator(ModelSchema)


@dataclass(frozen=True, slots=True)
class BasicPropertyCheck:
    """Marks whether a property may be null."""
    allow_null: bool = DEFAULT_ALLOW_NULL

    def to_annotation(self) -> dict[str, Any]:
        return {"kind": "basic", "allow_null": self.allow_null}


@dataclass(frozen=True, slots=True)
class DtoPropertyCheck:
    """Marks a property typed as another generated model."""
    allow_null: bool = DEFAULT_ALLOW_NULL
    check_is_valid: bool = DEFAULT_CHECK_IS_VALID

    def to_annotation(self) -> dict[str, Any]:
        return {"kind": "nested_model", "allow_null": self.allow_null, "check_is_valid": self.check_is_valid}


@dataclass(frozen=True, slots=True)
class StringPropertyCheck:
    """Marks what content a string property accepts."""
    check: StringCheckKind | str = DEFAULT_STRING_CHECK

    def to_annotation(self) -> dict[str, Any]:
        return {"kind": "string", "check": StringCheckKind.coerce(self.check)}


PROPERTY_MARKERS = (BasicPropertyCheck, DtoPropertyCheck, StringPropertyCheck)

_registry: dict[str, type] = {}


def generate_dto(cls: C | None = None, *, namespace: str | None = None) -> C | Callable[[C], C]:
    """Mark a class for shadow-type generation.

    Usable bare (@generate_dto) or with a namespace override
    (@generate_dto(namespace="Acme.Orders")).
    """
    def register(target: C) -> C:
        target.__dto_namespace__ = namespace if namespace is not None else target.__module__
        _registry[f"{target.__module__}.{target.__qualname__}"] = target
        return target

    return register(cls) if cls is not None else register


def registered_classes() -> list[type]:
    """Decorated classes in registration order."""
    return list(_registry.values())


def clear_registry() -> None:
    _registry.clear()


def render_type(tp: Any) -> str:
    """Textual type name of an annotation."""
    if isinstance(tp, str):
        return tp
    origin = get_origin(tp)
    if origin is Annotated:
        return render_type(get_args(tp)[0])
    if origin is Union or origin is types.UnionType:
        args = get_args(tp)
        rendered = " | ".join(render_type(a) for a in args if a is not _NONE_TYPE)
        return f"{rendered}?" if _NONE_TYPE in args else rendered
    if origin is not None:
        args = ", ".join(render_type(a) for a in get_args(tp))
        return f"{render_type(origin)}[{args}]" if args else render_type(origin)
    if tp is _NONE_TYPE:
        return "None"
    if isinstance(tp, type):
        return tp.__name__ if tp.__module__ == "builtins" else f"{_namespace_of(tp)}.{tp.__name__}"
    return str(tp)


def _namespace_of(cls: type) -> str:
    return getattr(cls, "__dto_namespace__", None) or cls.__module__


def _markers(hint: Any) -> list[Any]:
    if get_origin(hint) is not Annotated:
        return []
    return [m for m in get_args(hint)[1:] if isinstance(m, PROPERTY_MARKERS)]


def describe_class(cls: type) -> dict[str, Any]:
    """Raw model description of a class, in document form.

    Raises NameError/TypeError when annotations cannot be evaluated.
    """
    hints = get_type_hints(cls, include_extras=True)
    properties = []
    for name, hint in hints.items():
        if name.startswith("_") or get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        properties.append({
            "name": name,
            "type_name": render_type(hint),
            "annotations": [m.to_annotation() for m in _markers(hint)],
        })
    return {"namespace": _namespace_of(cls), "name": cls.__name__, "properties": properties}


def model_from_class(cls: type) -> Result[ModelSchema, AppError]:
    """Parse one class into a ModelSchema."""
    origin = f"class {cls.__module__}.{cls.__qualname__}"
    try:
        description = describe_class(cls)
    except (NameError, TypeError) as e:
        return invalid_schema(f"{_namespace_of(cls)}.{cls.__name__}", f"cannot evaluate annotations: {e}", origin=origin)
    return _model_validator.parse_ingress(description, origin=origin)


def discover_models(classes: Iterable[type] | None = None) -> list[Result[ModelSchema, AppError]]:
    """One Result per class; defaults to every @generate_dto class."""
    classes = registered_classes() if classes is None else list(classes)
    results = [model_from_class(cls) for cls in classes]
    rejected = sum(1 for r in results if r.is_err())
    log.info("classes_reflected", models=len(results) - rejected, rejected=rejected)
    return results
