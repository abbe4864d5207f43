"""Generation Pass

Drives one generation pass over a set of models:

1. Phase 1 (construction): collect the qualified name of every model into
   CandidateNames. Nothing is resolved before this set is complete.
2. Phase 2 (run): for each model, resolve properties, emit fragments and
   render the shadow type. Models are independent; a model that fails only
   loses its own output.

The per-model work is pure, so models may fan out to a thread pool. Results
always come back in input order.
"""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from core.errors import AppError, Err, Ok, Result, exception_to_error
from core.logging import bind_context, generate_correlation_id, pass_logger, unbind_context
from models.schema import ModelSchema

from .emitters import ClassEmitter, PythonClassEmitter
from .predicates import emit_fragments
from .resolver import DEFAULT_RESOLVER_CONFIG, CandidateNames, ResolverConfig, resolve_model


@dataclass(frozen=True, slots=True)
class GeneratedSource:
    """Generated text of one shadow type."""
    qualified_name: str
    type_name: str
    file_name: str
    text: str


@dataclass(frozen=True)
class ModelOutcome:
    """Result for a single model of a pass."""
    index: int
    qualified_name: str
    result: Result[GeneratedSource, AppError]
    duration_ms: float


@dataclass
class PassResult:
    """Outcome of a whole pass, split into successes and failures."""
    pass_id: str
    outcomes: list[ModelOutcome] = field(default_factory=list)
    total_duration_ms: float = 0.0

    @property
    def successes(self) -> list[ModelOutcome]:
        return [o for o in self.outcomes if o.result.is_ok()]

    @property
    def failures(self) -> list[ModelOutcome]:
        return [o for o in self.outcomes if o.result.is_err()]

    @property
    def success_count(self) -> int:
        return len(self.successes)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def all_succeeded(self) -> bool:
        return self.failure_count == 0

    def sources(self) -> list[GeneratedSource]:
        """Generated sources, in input order."""
        return [o.result.unwrap() for o in self.successes]

    def errors(self) -> list[AppError]:
        return [o.result.unwrap_err() for o in self.failures]


class GenerationPass:
    """One generation pass over a fixed set of models.

    Usage:
        generation = GenerationPass(models, emitter=CSharpClassEmitter())
        result = generation.run(max_workers=4)
        for source in result.sources():
            write(source.file_name, source.text)
    """

    def __init__(
        self,
        models: Iterable[ModelSchema],
        emitter: ClassEmitter | None = None,
        resolver_config: ResolverConfig | None = None,
    ):
        self.models: tuple[ModelSchema, ...] = tuple(models)
        self.emitter = emitter or PythonClassEmitter()
        self.resolver_config = resolver_config or DEFAULT_RESOLVER_CONFIG
        self.candidates = CandidateNames.from_models(self.models)

    def generate(self, model: ModelSchema) -> Result[GeneratedSource, AppError]:
        """Generate the shadow type of one model; never raises."""
        qualified_name = _qualified_name(model)
        try:
            resolved = resolve_model(model, self.candidates, self.resolver_config)
            fragments = emit_fragments(resolved, self.emitter.predicates, self.emitter.member_name)
            text = self.emitter.render(model, fragments, self.candidates)
        except Exception as e:
            return Err(exception_to_error(e, model=qualified_name, origin="generation"))

        return Ok(GeneratedSource(
            qualified_name=qualified_name,
            type_name=self.emitter.shadow_name(model.name),
            file_name=self.emitter.file_name(model),
            text=text,
        ))

    def _timed(self, indexed: tuple[int, ModelSchema]) -> ModelOutcome:
        index, model = indexed
        start = time.perf_counter()
        result = self.generate(model)
        return ModelOutcome(
            index=index,
            qualified_name=_qualified_name(model) or f"<model {index}>",
            result=result,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    def run(self, max_workers: int = 1) -> PassResult:
        """Generate every model of the pass."""
        pass_id = generate_correlation_id()
        log = pass_logger()
        bind_context(pass_id=pass_id)
        start = time.perf_counter()
        try:
            log.info("pass_started", models=len(self.models), dialect=self.emitter.dialect, workers=max_workers)

            items = list(enumerate(self.models))
            if max_workers > 1 and len(items) > 1:
                with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dtogen") as pool:
                    outcomes = list(pool.map(self._timed, items))
            else:
                outcomes = [self._timed(item) for item in items]

            for outcome in outcomes:
                match outcome.result:
                    case Ok(source):
                        log.debug("model_generated", model=outcome.qualified_name, file=source.file_name,
                                  duration_ms=round(outcome.duration_ms, 3))
                    case Err(error):
                        log.warning("model_skipped", model=outcome.qualified_name, error_code=error.code.name,
                                    category=error.code.category, message=error.message)

            result = PassResult(pass_id=pass_id, outcomes=outcomes,
                                total_duration_ms=(time.perf_counter() - start) * 1000)
            log.info("pass_completed", generated=result.success_count, skipped=result.failure_count,
                     duration_ms=round(result.total_duration_ms, 2))
            return result
        finally:
            unbind_context("pass_id")


def generate_all(
    models: Sequence[ModelSchema],
    emitter: ClassEmitter | None = None,
    resolver_config: ResolverConfig | None = None,
    max_workers: int = 1,
) -> PassResult:
    """Run a single pass over `models`."""
    return GenerationPass(models, emitter=emitter, resolver_config=resolver_config).run(max_workers=max_workers)


def _qualified_name(model: ModelSchema) -> str:
    return getattr(model, "qualified_name", None) or getattr(model, "name", None) or ""
