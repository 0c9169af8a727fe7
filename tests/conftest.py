"""Shared fixtures for lexgen tests."""

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from lexgen.types import SchemaDocument

GET_THING: dict[str, Any] = {
    "lexicon": 1,
    "id": "com.example.getThing",
    "defs": {
        "main": {
            "type": "query",
            "description": "Fetch a thing by name.",
            "parameters": {
                "type": "params",
                "required": ["name"],
                "properties": {"name": {"type": "string", "maxLength": 64}},
            },
        }
    },
}

PUT_THING: dict[str, Any] = {
    "lexicon": 1,
    "id": "com.example.putThing",
    "defs": {
        "main": {
            "type": "procedure",
            "input": {"encoding": "application/json"},
            "nullable": None,
            "deprecated": False,
            "weight": 0.5,
        }
    },
}

THING_DEFS: dict[str, Any] = {
    "lexicon": 1,
    "id": "com.example.defs",
    "defs": {"thing": {"type": "object", "properties": {}}, "tags": []},
}


def exec_module(content: str) -> dict[str, Any]:
    """Execute generated module source and return its namespace."""
    namespace: dict[str, Any] = {}
    exec(compile(content, "<generated>", "exec"), namespace)
    return namespace


@pytest.fixture
def run_module():
    return exec_module


@pytest.fixture
def raw_documents() -> list[dict[str, Any]]:
    return [GET_THING, PUT_THING, THING_DEFS]


@pytest.fixture
def documents(raw_documents) -> list[SchemaDocument]:
    return [SchemaDocument.from_raw(raw) for raw in raw_documents]


@pytest.fixture
def lexicon_dir(tmp_path: Path) -> Path:
    """Directory with one JSON document, one YAML document and a nested JSON one."""
    root = tmp_path / "lexicons"
    nested = root / "com" / "example"
    nested.mkdir(parents=True)
    (nested / "getThing.json").write_text(json.dumps(GET_THING), encoding="utf-8")
    (nested / "putThing.yaml").write_text(yaml.safe_dump(PUT_THING), encoding="utf-8")
    (root / "defs.json").write_text(json.dumps(THING_DEFS), encoding="utf-8")
    (root / "README.md").write_text("not a lexicon", encoding="utf-8")
    return root
