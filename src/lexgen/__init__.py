"""Code generation for lexicon schema documents.

This package turns an ordered list of schema documents, each named by a
dotted namespaced identifier, into Python modules:

- **Registry module**: the raw documents keyed by symbol, the document list,
  a ``Lexicons`` registry built from it and a symbol -> identifier table
- **Helper module**: static ``is_obj``/``has_prop`` predicates
- **Type guards**: ``is_valid``/``assure`` over any validator

Example:
    ```python
    import asyncio
    from lexgen import SchemaDocument, generate_modules, write_artifacts

    documents = [SchemaDocument.from_raw({"lexicon": 1, "id": "com.example.getThing"})]
    artifacts = asyncio.run(generate_modules(documents))
    write_artifacts(artifacts, "src/myapp/lexicons")
    ```
"""

__version__ = "0.1.0"

from lexgen.assembler import SymbolTable, assemble, build_symbol_table, populate_lexicons_module
from lexgen.builder import Expression, LiteralValue, SourceBuilder
from lexgen.emitter import banner, format_source, render_declarations, render_literal
from lexgen.exceptions import (
    ConfigurationError,
    DuplicateSchemaError,
    FormattingError,
    LexgenError,
    NormalizationError,
    PersistenceError,
    SchemaLoadError,
    SchemaNotFoundError,
    SymbolCollisionError,
    ValidationFailure,
)
from lexgen.guards import (
    JsonSchemaValidator,
    PydanticValidator,
    SafeParseResult,
    Validator,
    assure,
    is_valid,
)
from lexgen.loader import read_documents
from lexgen.nsid import nsid_to_symbol
from lexgen.orchestrator import (
    GenerationWorkspace,
    generate_lexicons_module,
    generate_modules,
    generate_util_module,
)
from lexgen.registry import Lexicons
from lexgen.settings import STYLE_POLICY, CodegenSettings, StylePolicy, load_settings
from lexgen.types import GeneratedArtifact, SchemaDocument
from lexgen.writer import write_artifacts

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "LexgenError",
    "NormalizationError",
    "SymbolCollisionError",
    "ValidationFailure",
    "FormattingError",
    "PersistenceError",
    "SchemaLoadError",
    "SchemaNotFoundError",
    "DuplicateSchemaError",
    "ConfigurationError",
    # Types
    "SchemaDocument",
    "GeneratedArtifact",
    # Settings
    "StylePolicy",
    "STYLE_POLICY",
    "CodegenSettings",
    "load_settings",
    # Pipeline
    "nsid_to_symbol",
    "SymbolTable",
    "build_symbol_table",
    "assemble",
    "populate_lexicons_module",
    "SourceBuilder",
    "LiteralValue",
    "Expression",
    "render_literal",
    "render_declarations",
    "format_source",
    "banner",
    "GenerationWorkspace",
    "generate_lexicons_module",
    "generate_util_module",
    "generate_modules",
    # Runtime
    "Lexicons",
    # Type guards
    "Validator",
    "SafeParseResult",
    "is_valid",
    "assure",
    "JsonSchemaValidator",
    "PydanticValidator",
    # I/O
    "read_documents",
    "write_artifacts",
]
