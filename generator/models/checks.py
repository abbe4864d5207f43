"""Validation-check configurations.

The resolver assigns exactly one of these to every property. The set is
closed: BasicCheck, NestedModelCheck and StringCheck are the only variants,
and the predicate emitters match on them exhaustively.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class StringCheckKind(str, Enum):
    """What a string property must hold to be valid."""
    UNKNOWN = "unknown"
    ALLOW_NULL = "allow_null"
    ALLOW_EMPTY_STRING = "allow_empty_string"
    ALLOW_WHEN_ONLY_WHITESPACE = "allow_when_only_whitespace"
    REQUIRES_NON_WHITESPACE_TEXT = "requires_non_whitespace_text"

    @classmethod
    def coerce(cls, value: Any) -> StringCheckKind:
        """Read a kind from loose input, failing closed.

        Accepts members, their values, their names in any casing or
        separator style ("AllowEmptyString", "allow-empty-string") and the
        ordinal positions 0-4. Anything else becomes UNKNOWN, which is
        checked as strictly as REQUIRES_NON_WHITESPACE_TEXT.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            return members[value] if 0 <= value < len(members) else cls.UNKNOWN
        if isinstance(value, str):
            return _KIND_LOOKUP.get(_squash(value), cls.UNKNOWN)
        return cls.UNKNOWN


def _squash(text: str) -> str:
    return re.sub(r"[\s_\-]", "", text).casefold()


_KIND_LOOKUP = {_squash(kind.value): kind for kind in StringCheckKind}


DEFAULT_STRING_CHECK = StringCheckKind.REQUIRES_NON_WHITESPACE_TEXT
DEFAULT_ALLOW_NULL = False
DEFAULT_CHECK_IS_VALID = True


@dataclass(frozen=True, slots=True)
class BasicCheck:
    """Presence check: reject null unless allow_null."""
    allow_null: bool


@dataclass(frozen=True, slots=True)
class NestedModelCheck:
    """Property typed as another generated model."""
    allow_null: bool
    check_is_valid: bool


@dataclass(frozen=True, slots=True)
class StringCheck:
    kind: StringCheckKind


ValidationCheckConfig = Union[BasicCheck, NestedModelCheck, StringCheck]
