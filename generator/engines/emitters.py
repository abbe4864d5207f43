"""Class Emitters

Render the source text of one shadow type from its model and the ordered
predicate fragments. Output is a fixed template per dialect:

- PythonClassEmitter: a module holding one @dataclass whose fields all
  default to None and whose check_is_valid() ANDs the fragments.
- CSharpClassEmitter: a namespace wrapping one class with nullable
  auto-properties and a CheckIsValid() method.

Types that name another model of the same pass are rewritten to that
model's shadow type, spelled as the model declares it, so the nested
validity call lands on generated code. C# keeps the namespace; Python
refers to the shadow type by its short name.
"""
from __future__ import annotations

import keyword
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from core.errors import ErrorCode, InvalidSchemaError
from models.schema import ModelSchema

from .predicates import CSharpPredicateEmitter, PredicateEmitter, PythonPredicateEmitter
from .resolver import CandidateNames, strip_nullable

DEFAULT_SUFFIX = "DTO"


@dataclass(frozen=True, slots=True)
class SourceLayout:
    """Indentation of generated member lines and continued validity checks."""
    property_indent: str
    check_indent: str


PYTHON_LAYOUT = SourceLayout(property_indent=" " * 4, check_indent=" " * 12)
CSHARP_LAYOUT = SourceLayout(property_indent=" " * 8, check_indent=" " * 19)


class ClassEmitter(ABC):
    """Base class for shadow-type emitters."""

    dialect: str = ""
    extension: str = ""
    default_layout: SourceLayout

    def __init__(self, suffix: str = DEFAULT_SUFFIX, layout: SourceLayout | None = None):
        self.suffix = suffix
        self.layout = layout or self.default_layout

    @property
    @abstractmethod
    def predicates(self) -> PredicateEmitter:
        """Predicate emitter producing fragments in this dialect."""

    @abstractmethod
    def render(self, model: ModelSchema, fragments: Iterable[str], candidates: CandidateNames | None = None) -> str:
        """Source text of the shadow type for `model`."""

    def shadow_name(self, model_name: str) -> str:
        return f"{model_name}{self.suffix}"

    def file_name(self, model: ModelSchema) -> str:
        return f"{self.shadow_name(model.name)}.{self.extension}"

    def member_name(self, name: str) -> str:
        """Property name as written in generated code."""
        return name

    def reserved_members(self, model: ModelSchema) -> set[str]:
        """Names the generated type already uses for itself."""
        return {self.predicates.validity_method}

    def member_names(self, model: ModelSchema) -> list[str]:
        """Generated member name of every property, in declaration order.

        Raises InvalidSchemaError when a property takes a reserved name or two
        properties land on the same member.
        """
        reserved = self.reserved_members(model)
        owners: dict[str, str] = {}
        members: list[str] = []
        for prop in model.properties:
            member = self.member_name(prop.name)
            key = member.lstrip("@")
            if key in reserved:
                raise InvalidSchemaError.build(
                    model.qualified_name, f"'{key}' is reserved on the generated type", property_name=prop.name,
                )
            if (owner := owners.get(key)) is not None:
                raise InvalidSchemaError.build(
                    model.qualified_name,
                    f"'{owner}' and '{prop.name}' both generate member '{member}'",
                    property_name=prop.name,
                    code=ErrorCode.E2031_DUPLICATE_PROPERTY,
                )
            owners[key] = prop.name
            members.append(member)
        return members


class PythonClassEmitter(ClassEmitter):
    """Emit a Python module with one dataclass per model."""

    dialect = "python"
    extension = "py"
    default_layout = PYTHON_LAYOUT

    TYPE_MAP: dict[str, str] = {
        "string": "str",
        "system.string": "str",
        "str": "str",
        "char": "str",
        "system.char": "str",
        "int": "int",
        "long": "int",
        "short": "int",
        "byte": "int",
        "system.int16": "int",
        "system.int32": "int",
        "system.int64": "int",
        "bool": "bool",
        "boolean": "bool",
        "system.boolean": "bool",
        "float": "float",
        "double": "float",
        "system.single": "float",
        "system.double": "float",
        "decimal": "decimal.Decimal",
        "system.decimal": "decimal.Decimal",
        "system.datetime": "datetime.datetime",
        "system.datetimeoffset": "datetime.datetime",
        "system.timespan": "datetime.timedelta",
        "system.guid": "uuid.UUID",
        "object": "object",
        "system.object": "object",
    }

    _predicates = PythonPredicateEmitter()

    @property
    def predicates(self) -> PredicateEmitter:
        return self._predicates

    def member_name(self, name: str) -> str:
        name = name.lstrip("@")
        return f"{name}_" if keyword.iskeyword(name) else name

    def type_expression(self, type_name: str, candidates: CandidateNames | None = None) -> str:
        """Python annotation text for a model property type, without the None arm."""
        base = strip_nullable(type_name)
        if candidates is not None and (declared := candidates.canonical(base)) is not None:
            return self.shadow_name(declared.rsplit(".", 1)[-1])
        if (mapped := self.TYPE_MAP.get(base.casefold())) is not None:
            return mapped
        if all(part.isidentifier() and not keyword.iskeyword(part) for part in base.split(".")):
            return base
        # Generic or array syntax is kept verbatim as a string annotation
        return repr(base)

    def render(self, model: ModelSchema, fragments: Iterable[str], candidates: CandidateNames | None = None) -> str:
        class_name = self.shadow_name(model.name)
        indent = self.layout.property_indent
        fields = [
            f"{indent}{member}: {self.type_expression(p.type_name, candidates)} | None = None"
            for member, p in zip(self.member_names(model), model.properties)
        ]
        fragments = list(fragments)
        if fragments:
            joined = f"\n{self.layout.check_indent}and ".join(fragments)
            body = f"(\n{self.layout.check_indent}{joined}\n{indent * 2})"
        else:
            body = "True"

        lines = [
            f'"""Shadow type of {model.qualified_name}."""',
            "from __future__ import annotations",
            "",
            "from dataclasses import dataclass",
            "",
            "",
            "@dataclass",
            f"class {class_name}:",
            *fields,
        ]
        if fields:
            lines.append("")
        lines += [
            f"{indent}def {self.predicates.validity_method}(self) -> bool:",
            f"{indent * 2}return {body}",
            "",
        ]
        return "\n".join(lines)


class CSharpClassEmitter(ClassEmitter):
    """Emit a C# class per model, wrapped in the model's namespace."""

    dialect = "csharp"
    extension = "cs"
    default_layout = CSHARP_LAYOUT

    _predicates = CSharpPredicateEmitter()

    @property
    def predicates(self) -> PredicateEmitter:
        return self._predicates

    def reserved_members(self, model: ModelSchema) -> set[str]:
        # C# members may not share the enclosing type's name
        return super().reserved_members(model) | {self.shadow_name(model.name)}

    def type_expression(self, type_name: str, candidates: CandidateNames | None = None) -> str:
        base = strip_nullable(type_name)
        if candidates is not None and (declared := candidates.canonical(base)) is not None:
            return self.shadow_name(declared)
        return base

    def render(self, model: ModelSchema, fragments: Iterable[str], candidates: CandidateNames | None = None) -> str:
        class_name = self.shadow_name(model.name)
        fields = "".join(
            f"{self.layout.property_indent}public {self.type_expression(p.type_name, candidates)}? {member} {{ get; set; }}\n"
            for member, p in zip(self.member_names(model), model.properties)
        )
        fragments = list(fragments)
        body = f"\n{self.layout.check_indent}&& ".join(fragments) if fragments else "true"
        members = f"{fields}\n" if fields else ""

        class_text = (
            f"    public class {class_name}\n"
            "    {\n"
            f"{members}"
            f"        public bool {self.predicates.validity_method}()\n"
            "        {\n"
            f"            return {body};\n"
            "        }\n"
            "    }"
        )
        if not model.namespace:
            return _dedent_block(class_text) + "\n"
        return f"namespace {model.namespace}\n{{\n{class_text}\n}}\n"


def _dedent_block(text: str, width: int = 4) -> str:
    return "\n".join(line[width:] if line.startswith(" " * width) else line for line in text.split("\n"))


EMITTERS: dict[str, type[ClassEmitter]] = {
    PythonClassEmitter.dialect: PythonClassEmitter,
    CSharpClassEmitter.dialect: CSharpClassEmitter,
}


def emitter_for(dialect: str, suffix: str = DEFAULT_SUFFIX, layout: SourceLayout | None = None) -> ClassEmitter:
    """Emitter instance for a dialect name ('python' or 'csharp')."""
    try:
        return EMITTERS[dialect.strip().lower()](suffix=suffix, layout=layout)
    except KeyError:
        raise ValueError(f"Unknown target dialect: {dialect!r} (expected one of {sorted(EMITTERS)})") from None
