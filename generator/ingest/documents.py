"""Model Documents

Loads model descriptions from YAML or JSON files:

    models:
      - namespace: Acme.Orders
        name: Order
        properties:
          - name: Reference
            typeName: string
            annotation: {kind: string, check: allow_empty_string}
          - name: Customer
            typeName: Acme.Orders.Customer
            annotation: {kind: nested_model, allowNull: false}
          - name: Discount
            typeName: decimal?

A document-level problem (missing file, unparsable text, no `models` list)
fails the whole document. A malformed entry fails only that entry.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import yaml

from core.errors import AppError, Ok, Result, file_not_found, file_read_failed, invalid_document
from core.logging import ingest_logger
from core.validation import parse_batch
from models.schema import ModelSchema

log = ingest_logger()

YAML_SUFFIXES = frozenset({".yaml", ".yml"})
JSON_SUFFIXES = frozenset({".json"})
DOCUMENT_SUFFIXES = YAML_SUFFIXES | JSON_SUFFIXES

ModelResults = list[Result[ModelSchema, AppError]]


def parse_document(data: Any, origin: str = "<document>") -> Result[ModelResults, AppError]:
    """Parse an already-decoded document into one Result per model entry."""
    if data is None:
        return Ok([])
    if isinstance(data, list):
        entries = data
    elif isinstance(data, dict):
        unknown = set(data) - {"models"}
        if unknown:
            return invalid_document(origin, f"unexpected top-level keys: {', '.join(sorted(map(str, unknown)))}")
        entries = data.get("models") or []
    else:
        return invalid_document(origin, f"expected a mapping with a 'models' list, got {type(data).__name__}")

    if not isinstance(entries, list):
        return invalid_document(origin, "'models' must be a list")

    return Ok(parse_batch(ModelSchema, entries, origin=origin))


def load_text(text: str, *, fmt: str = "yaml", origin: str = "<string>") -> Result[ModelResults, AppError]:
    """Parse model descriptions from document text ('yaml' or 'json')."""
    try:
        data = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        return invalid_document(origin, f"cannot parse {fmt}: {e}")
    return parse_document(data, origin=origin)


def load_document(path: Path | str) -> Result[ModelResults, AppError]:
    """Load one model document.

    Returns Err when the document itself is unusable, otherwise Ok with
    one Result per model entry in document order.
    """
    path = Path(path)
    if not path.is_file():
        return file_not_found(path, origin="documents")

    suffix = path.suffix.lower()
    if suffix not in DOCUMENT_SUFFIXES:
        return invalid_document(path, f"unsupported file type '{suffix or '<none>'}'")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return file_read_failed(path, e, origin="documents")

    result = load_text(text, fmt="json" if suffix in JSON_SUFFIXES else "yaml", origin=str(path))
    if result.is_ok():
        entries = result.unwrap()
        rejected = sum(1 for r in entries if r.is_err())
        log.info("document_loaded", path=str(path), models=len(entries) - rejected, rejected=rejected)
    else:
        log.warning("document_rejected", path=str(path), error=result.unwrap_err().message)
    return result


def expand_paths(paths: Iterable[Path | str]) -> list[Path]:
    """Expand directories to the model documents they contain, sorted by name."""
    expanded: list[Path] = []
    for p in map(Path, paths):
        if p.is_dir():
            expanded.extend(sorted(f for f in p.rglob("*") if f.is_file() and f.suffix.lower() in DOCUMENT_SUFFIXES))
        else:
            expanded.append(p)
    return expanded
