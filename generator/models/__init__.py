from models.checks import (
    StringCheckKind,
    BasicCheck,
    NestedModelCheck,
    StringCheck,
    ValidationCheckConfig,
    DEFAULT_STRING_CHECK,
    DEFAULT_ALLOW_NULL,
    DEFAULT_CHECK_IS_VALID,
)
from models.schema import (
    BasicCheckAnnotation,
    NestedModelCheckAnnotation,
    StringCheckAnnotation,
    PropertyAnnotation,
    PropertySchema,
    ModelSchema,
)

__all__ = [
    "StringCheckKind", "BasicCheck", "NestedModelCheck", "StringCheck", "ValidationCheckConfig",
    "DEFAULT_STRING_CHECK", "DEFAULT_ALLOW_NULL", "DEFAULT_CHECK_IS_VALID",
    "BasicCheckAnnotation", "NestedModelCheckAnnotation", "StringCheckAnnotation",
    "PropertyAnnotation", "PropertySchema", "ModelSchema",
]
