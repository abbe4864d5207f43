from engines.resolver import (
    CandidateNames,
    ResolverConfig,
    ResolvedProperty,
    DEFAULT_RESOLVER_CONFIG,
    resolve,
    resolve_model,
    is_nullable,
    strip_nullable,
)
from engines.predicates import (
    PredicateEmitter,
    PythonPredicateEmitter,
    CSharpPredicateEmitter,
    emit_fragments,
)
from engines.emitters import (
    SourceLayout,
    PYTHON_LAYOUT,
    CSHARP_LAYOUT,
    ClassEmitter,
    PythonClassEmitter,
    CSharpClassEmitter,
    emitter_for,
)
from engines.pipeline import GeneratedSource, ModelOutcome, PassResult, GenerationPass, generate_all

__all__ = [
    "CandidateNames", "ResolverConfig", "ResolvedProperty", "DEFAULT_RESOLVER_CONFIG",
    "resolve", "resolve_model", "is_nullable", "strip_nullable",
    "PredicateEmitter", "PythonPredicateEmitter", "CSharpPredicateEmitter", "emit_fragments",
    "SourceLayout", "PYTHON_LAYOUT", "CSHARP_LAYOUT",
    "ClassEmitter", "PythonClassEmitter", "CSharpClassEmitter", "emitter_for",
    "GeneratedSource", "ModelOutcome", "PassResult", "GenerationPass", "generate_all",
]
