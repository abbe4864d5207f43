#!/usr/bin/env python3
"""Generate shadow types from model documents or decorated classes.

Every model from every source goes through one generation pass, so a model
in one file can nest a model declared in another.

Run with: python3 -m scripts.generate models/ [--out generated] [--dialect csharp]
"""
import argparse
import importlib
import sys
from pathlib import Path

from core.config import get_settings
from core.errors import AppError, Err, Ok, file_write_failed, log_error, module_import_failed, partition_results
from core.logging import cli_logger, configure_logging
from engines import GeneratedSource, GenerationPass, ResolverConfig, emitter_for
from engines.emitters import EMITTERS
from ingest import discover_models, expand_paths, load_document
from models.schema import ModelSchema

# ANSI color codes
C_RESET = "\033[0m"
C_BOLD = "\033[1m"
C_DIM = "\033[2m"
C_GREEN = "\033[32m"
C_YELLOW = "\033[33m"
C_RED = "\033[31m"


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="dtogen",
        description="Generate validating shadow types (DTOs) from model descriptions.",
    )
    parser.add_argument("sources", nargs="*", type=Path, metavar="MODELS",
                        help="Model documents (.yaml, .yml, .json) or directories containing them")
    parser.add_argument("-m", "--module", action="append", default=[], dest="modules",
                        help="Import a module and generate its @generate_dto classes (repeatable)")
    parser.add_argument("-o", "--out", type=Path, default=Path(settings.OUTPUT_DIR), help="Output directory")
    parser.add_argument("--dialect", choices=sorted(EMITTERS), default=settings.TARGET_DIALECT,
                        help="Target language of generated sources")
    parser.add_argument("--suffix", default=settings.DTO_SUFFIX, help="Suffix appended to shadow type names")
    parser.add_argument("-w", "--workers", type=int, default=settings.MAX_WORKERS, help="Worker threads")
    parser.add_argument("--json-logs", action="store_true", default=settings.LOG_JSON, help="Render logs as JSON")
    parser.add_argument("--dry-run", action="store_true", help="Generate without writing files")
    return parser


def collect_models(sources: list[Path], modules: list[str]) -> tuple[list[ModelSchema], list[AppError]]:
    """Load every model from every source; return valid models and all errors."""
    models: list[ModelSchema] = []
    errors: list[AppError] = []

    for path in expand_paths(sources):
        match load_document(path):
            case Ok(entries):
                valid, rejected = partition_results(entries)
                models.extend(valid)
                errors.extend(rejected)
            case Err(error):
                errors.append(error)

    if modules:
        for module in modules:
            try:
                importlib.import_module(module)
            except ImportError as e:
                errors.append(module_import_failed(module, e, origin="cli").unwrap_err())
        valid, rejected = partition_results(discover_models())
        models.extend(valid)
        errors.extend(rejected)

    return models, errors


def write_sources(sources: list[GeneratedSource], out_dir: Path) -> tuple[list[GeneratedSource], list[AppError]]:
    """Write one file per generated source; return the written sources and the write failures."""
    errors: list[AppError] = []
    written: dict[str, GeneratedSource] = {}
    out_dir.mkdir(parents=True, exist_ok=True)

    for source in sources:
        target = out_dir / source.file_name
        if (owner := written.get(source.file_name.casefold())) is not None:
            cause = FileExistsError(f"already generated for {owner.qualified_name}")
            errors.append(file_write_failed(target, cause, model=source.qualified_name, origin="cli").unwrap_err())
            continue
        try:
            target.write_text(source.text, encoding="utf-8")
        except OSError as e:
            errors.append(file_write_failed(target, e, model=source.qualified_name, origin="cli").unwrap_err())
            continue
        written[source.file_name.casefold()] = source

    return list(written.values()), errors


def print_summary(generated: list[GeneratedSource], errors: list[AppError], out_dir: Path, dry_run: bool) -> None:
    """Print a colored per-model summary to stdout."""
    for source in generated:
        target = source.file_name if dry_run else out_dir / source.file_name
        print(f"  {C_GREEN}✓{C_RESET} {source.qualified_name} {C_DIM}→ {target}{C_RESET}")
    for error in errors:
        label = error.context.model or error.metadata.get("path") or error.metadata.get("module") or "?"
        print(f"  {C_RED}✗{C_RESET} {label}: {error.message} {C_DIM}[{error.code.name}]{C_RESET}")

    color = C_GREEN if not errors else C_YELLOW
    verb = "would generate" if dry_run else "generated"
    print(f"\n{C_BOLD}{color}{verb} {len(generated)} type(s), {len(errors)} error(s){C_RESET}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.sources and not args.modules:
        parser.error("no model sources given (pass documents, directories or --module)")
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, json_logs=args.json_logs)
    log = cli_logger()

    models, errors = collect_models(args.sources, args.modules)
    for error in errors:
        log_error(error, "model_source_rejected")

    emitter = emitter_for(args.dialect, suffix=args.suffix)
    resolver_config = ResolverConfig.from_names(settings.STRING_TYPE_NAMES)
    result = GenerationPass(models, emitter=emitter, resolver_config=resolver_config).run(max_workers=args.workers)
    errors.extend(result.errors())

    generated = result.sources()
    if not args.dry_run:
        generated, write_errors = write_sources(generated, args.out)
        for error in write_errors:
            log_error(error, "write_failed")
        errors.extend(write_errors)

    print_summary(generated, errors, args.out, args.dry_run)
    log.info("generation_finished", generated=len(generated), errors=len(errors), out=str(args.out),
             dry_run=args.dry_run)
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
