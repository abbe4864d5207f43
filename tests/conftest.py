"""Shared fixtures: model builders and a loader for generated Python."""

import sys
import types

import pytest

from ingest import clear_registry
from models.schema import ModelSchema


@pytest.fixture
def prop():
    """Build a raw property description."""
    def build(name, type_name, annotation=None):
        data = {"name": name, "type_name": type_name}
        if annotation is not None:
            data["annotation"] = annotation
        return data
    return build


@pytest.fixture
def make_model():
    """Parse a ModelSchema from raw property descriptions."""
    def build(name, *properties, namespace="Acme.Models"):
        return ModelSchema.parse({"namespace": namespace, "name": name, "properties": list(properties)})
    return build


@pytest.fixture
def load_generated(monkeypatch):
    """Execute generated Python sources in a throwaway module and return it."""
    module = types.ModuleType("generated_dtos")
    monkeypatch.setitem(sys.modules, module.__name__, module)

    def load(*sources):
        for text in sources:
            exec(compile(text, f"<{module.__name__}>", "exec"), module.__dict__)
        return module
    return load


@pytest.fixture(autouse=True)
def empty_registry():
    clear_registry()
    yield
    clear_registry()
