"""Reading schema documents from JSON and YAML files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

import yaml

from lexgen.exceptions import SchemaLoadError, ValidationFailure
from lexgen.guards import JsonSchemaValidator, assure
from lexgen.types import SchemaDocument

logger = logging.getLogger(__name__)

SUFFIXES = (".json", ".yaml", ".yml")

DOCUMENT_ENVELOPE_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
    },
}

assure_envelope = assure(JsonSchemaValidator(DOCUMENT_ENVELOPE_SCHEMA))


def find_document_files(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Expand files and directories into an ordered list of document files.

    Files are kept in the order given. Each directory contributes its
    ``*.json``/``*.yaml``/``*.yml`` files, recursively, sorted by path.

    Raises:
        SchemaLoadError: If a path does not exist
    """
    found: List[Path] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            found.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in SUFFIXES)
            )
        elif path.is_file():
            found.append(path)
        else:
            raise SchemaLoadError(
                f"No such file or directory: {path}",
                context={"path": str(path)},
            )
    return found


def read_document(path: Union[str, Path]) -> SchemaDocument:
    """Read one schema document file.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed, or is not a
            mapping with a string ``id``
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as e:
        raise SchemaLoadError(
            f"Cannot read schema file: {path}",
            context={"path": str(path), "error": str(e)},
        ) from e

    try:
        if path.suffix == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaLoadError(
            f"Cannot parse schema file: {path}",
            context={"path": str(path), "error": str(e)},
        ) from e

    try:
        document = SchemaDocument.from_raw(assure_envelope(raw))
    except ValidationFailure as e:
        raise SchemaLoadError(
            f"Invalid schema document in {path}: {e}",
            context={"path": str(path), **e.context},
        ) from e

    logger.debug("Read %s from %s", document.identifier, path)
    return document


def read_documents(paths: Iterable[Union[str, Path]]) -> List[SchemaDocument]:
    """Read every schema document under ``paths``, in discovery order."""
    documents = [read_document(path) for path in find_document_files(paths)]
    logger.info("Loaded %d schema documents", len(documents))
    return documents


__all__ = [
    "SUFFIXES",
    "DOCUMENT_ENVELOPE_SCHEMA",
    "find_document_files",
    "read_document",
    "read_documents",
]
