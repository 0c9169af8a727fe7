"""Assembly of the registry module's declarations from a document list.

The generated module defines, in this order:

- ``schema_dict``: symbol -> raw document
- ``schemas``: ``list(schema_dict.values())``
- ``lexicons``: the registry object built from ``schemas``
- ``ids``: symbol -> original identifier

Input order is preserved in every declaration so that regenerating after a
change only touches the entries that changed.
"""

from __future__ import annotations

import logging
from typing import Iterator, Mapping, Sequence

from lexgen.builder import (
    ConstantDeclaration,
    Declaration,
    Expression,
    ImportDeclaration,
    LiteralValue,
    SourceBuilder,
)
from lexgen.exceptions import SymbolCollisionError
from lexgen.nsid import nsid_to_symbol
from lexgen.settings import DEFAULT_SETTINGS, CodegenSettings
from lexgen.types import SchemaDocument, check_body

logger = logging.getLogger(__name__)

SCHEMA_DICT = "schema_dict"
SCHEMAS = "schemas"
LEXICONS = "lexicons"
IDS = "ids"


class SymbolTable(Mapping[str, str]):
    """Ordered identifier -> symbol mapping with distinct symbols.

    Example:
        ```python
        table = SymbolTable()
        table.add("com.example.getThing")
        table["com.example.getThing"]
        # 'ComExampleGetThing'
        table.add("com.example.GetThing")
        # SymbolCollisionError
        ```
    """

    def __init__(self) -> None:
        self._symbols: dict[str, str] = {}
        self._owners: dict[str, str] = {}

    def add(self, nsid: str) -> str:
        """Normalize ``nsid`` and record its symbol.

        Returns:
            The symbol

        Raises:
            NormalizationError: If the identifier is malformed
            SymbolCollisionError: If the identifier, or another identifier with
                the same symbol, was already added
        """
        symbol = nsid_to_symbol(nsid)
        owner = self._owners.get(symbol)
        if owner is not None:
            raise SymbolCollisionError(owner, nsid, symbol)
        self._symbols[nsid] = symbol
        self._owners[symbol] = nsid
        return symbol

    def __getitem__(self, nsid: str) -> str:
        return self._symbols[nsid]

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)


def build_symbol_table(documents: Sequence[SchemaDocument]) -> SymbolTable:
    """Build the symbol table for an ordered document list."""
    table = SymbolTable()
    for document in documents:
        symbol = table.add(document.identifier)
        logger.debug("Mapped %s -> %s", document.identifier, symbol)
    return table


def assemble(
    documents: Sequence[SchemaDocument],
    settings: CodegenSettings = DEFAULT_SETTINGS,
) -> tuple[Declaration, ...]:
    """Assemble the registry module's declarations.

    The symbol table is built in full before any declaration is created, so
    a collision aborts with nothing produced.

    Args:
        documents: Ordered schema documents
        settings: Supplies the registry import

    Returns:
        The import followed by the four constants, in module order

    Raises:
        NormalizationError: If an identifier is malformed
        SymbolCollisionError: If two identifiers share a symbol
        ValidationFailure: If a body's ``id`` no longer matches its identifier
    """
    table = build_symbol_table(documents)
    for document in documents:
        check_body(document.identifier, document.body)

    schema_dict = {table[doc.identifier]: doc.body for doc in documents}
    ids = {table[doc.identifier]: doc.identifier for doc in documents}
    registry_class = settings.registry_class

    return (
        ImportDeclaration(module="typing", names=("Any",)),
        ImportDeclaration(module=settings.registry_module, names=(registry_class,)),
        ConstantDeclaration(
            SCHEMA_DICT, LiteralValue(schema_dict), "dict[str, dict[str, Any]]"
        ),
        ConstantDeclaration(
            SCHEMAS, Expression(f"list({SCHEMA_DICT}.values())"), "list[dict[str, Any]]"
        ),
        ConstantDeclaration(
            LEXICONS, Expression(f"{registry_class}({SCHEMAS})"), registry_class
        ),
        ConstantDeclaration(IDS, LiteralValue(ids), "dict[str, str]"),
    )


def populate_lexicons_module(
    builder: SourceBuilder,
    documents: Sequence[SchemaDocument],
    settings: CodegenSettings = DEFAULT_SETTINGS,
) -> None:
    """Write the assembled declarations into ``builder``."""
    for declaration in assemble(documents, settings):
        builder.add(declaration)
    logger.debug("Populated %s with %d documents", builder.path, len(documents))


__all__ = [
    "SCHEMA_DICT",
    "SCHEMAS",
    "LEXICONS",
    "IDS",
    "SymbolTable",
    "build_symbol_table",
    "assemble",
    "populate_lexicons_module",
]
