"""Append-only declaration buffer for one generated module.

A ``SourceBuilder`` is what population steps write into: imports, named
constants and raw text blocks, in the order they should appear. Nothing is
rendered here; the emitter turns the recorded declarations into source text.

Example:
    ```python
    builder = SourceBuilder("/lexicons.py")
    builder.add_import("lexgen.registry", ["Lexicons"])
    builder.add_constant("ids", LiteralValue({"ComExampleGetThing": "com.example.getThing"}))
    builder.add_constant("lexicons", Expression("Lexicons(schemas)"), annotation="Lexicons")
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Union


@dataclass(frozen=True)
class LiteralValue:
    """A JSON-compatible value to be rendered as a Python literal."""

    value: Any


@dataclass(frozen=True)
class Expression:
    """Python expression source used verbatim as an initializer."""

    source: str


Initializer = Union[LiteralValue, Expression]


@dataclass(frozen=True)
class ImportDeclaration:
    """``from <module> import <names>``."""

    module: str
    names: tuple[str, ...]


@dataclass(frozen=True)
class ConstantDeclaration:
    """``<name>: <annotation> = <initializer>``."""

    name: str
    initializer: Initializer
    annotation: str | None = None


@dataclass(frozen=True)
class RawText:
    """A block of source text emitted as-is."""

    text: str


Declaration = Union[ImportDeclaration, ConstantDeclaration, RawText]


class SourceBuilder:
    """Declaration buffer bound to a target path.

    Declarations can only be appended; the recorded sequence is exposed as an
    immutable tuple.

    Args:
        path: Target path of the module being built
    """

    def __init__(self, path: str) -> None:
        self._path = path
        self._declarations: list[Declaration] = []

    @property
    def path(self) -> str:
        """Target path of the module."""
        return self._path

    @property
    def declarations(self) -> tuple[Declaration, ...]:
        """Recorded declarations, in insertion order."""
        return tuple(self._declarations)

    def add(self, declaration: Declaration) -> SourceBuilder:
        """Append a prebuilt declaration."""
        self._declarations.append(declaration)
        return self

    def add_import(self, module: str, names: Iterable[str]) -> SourceBuilder:
        """Append a ``from module import names`` declaration."""
        return self.add(ImportDeclaration(module=module, names=tuple(names)))

    def add_constant(
        self,
        name: str,
        initializer: Initializer,
        annotation: str | None = None,
    ) -> SourceBuilder:
        """Append a module-level constant."""
        return self.add(
            ConstantDeclaration(name=name, initializer=initializer, annotation=annotation)
        )

    def add_text(self, text: str) -> SourceBuilder:
        """Append a raw block of source text."""
        return self.add(RawText(text=text))

    def __len__(self) -> int:
        return len(self._declarations)


__all__ = [
    "LiteralValue",
    "Expression",
    "Initializer",
    "ImportDeclaration",
    "ConstantDeclaration",
    "RawText",
    "Declaration",
    "SourceBuilder",
]
