"""Model Sources

Provides the two ways model descriptions reach a generation pass:
- YAML / JSON model documents
- Python classes marked with @generate_dto
"""
from ingest.documents import load_document, load_text, parse_document, expand_paths, DOCUMENT_SUFFIXES
from ingest.reflection import (
    BasicPropertyCheck,
    DtoPropertyCheck,
    StringPropertyCheck,
    generate_dto,
    registered_classes,
    clear_registry,
    render_type,
    describe_class,
    model_from_class,
    discover_models,
)

__all__ = [
    "load_document", "load_text", "parse_document", "expand_paths", "DOCUMENT_SUFFIXES",
    "BasicPropertyCheck", "DtoPropertyCheck", "StringPropertyCheck",
    "generate_dto", "registered_classes", "clear_registry",
    "render_type", "describe_class", "model_from_class", "discover_models",
]
