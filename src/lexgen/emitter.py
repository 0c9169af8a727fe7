"""Rendering and formatting of generated Python source.

Three stages, all governed by the fixed ``STYLE_POLICY``:

1. ``render_literal`` turns JSON-compatible values into Python literal text,
   one element per line with trailing commas so that adding a document only
   touches the lines of that document.
2. ``render_declarations`` lays out a module from builder declarations.
3. ``format_source`` canonicalizes the text with black.

``with_banner`` then prefixes the provenance banner.
"""

import ast
import json
import keyword
import logging
import math
from typing import Any, Iterable, List, Mapping

import black
from black.parsing import InvalidInput

from lexgen.builder import (
    ConstantDeclaration,
    Declaration,
    Expression,
    ImportDeclaration,
    LiteralValue,
    RawText,
)
from lexgen.exceptions import FormattingError
from lexgen.settings import STYLE_POLICY, StylePolicy

logger = logging.getLogger(__name__)

BANNER = "# GENERATED CODE - DO NOT MODIFY\n"


def banner() -> str:
    """Return the provenance banner placed at the top of every generated file."""
    return BANNER


def with_banner(text: str) -> str:
    """Prefix ``text`` with the provenance banner."""
    return f"{banner()}{text}"


def render_literal(value: Any, policy: StylePolicy = STYLE_POLICY, level: int = 0) -> str:
    """Render a JSON-compatible value as Python literal source.

    Args:
        value: None, bool, int, finite float, str, or a list/tuple/mapping of those
        policy: Style policy supplying indentation and trailing-comma rules
        level: Current nesting depth

    Returns:
        Literal source text

    Raises:
        FormattingError: If the value (or anything nested in it) has no
            JSON-compatible literal form
    """
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise FormattingError(
                f"Non-finite float {value!r} has no literal form",
                context={"value": repr(value)},
            )
        return repr(value)
    if isinstance(value, str):
        return _render_string(value, policy)
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise FormattingError(
                    f"Mapping keys must be strings, got {type(key).__name__}",
                    context={"key": repr(key)},
                )
        items = [
            f"{_render_string(key, policy)}: {render_literal(item, policy, level + 1)}"
            for key, item in value.items()
        ]
        return _render_collection("{", "}", items, policy, level)
    if isinstance(value, (list, tuple)):
        items = [render_literal(item, policy, level + 1) for item in value]
        return _render_collection("[", "]", items, policy, level)

    raise FormattingError(
        f"Value of type {type(value).__name__} has no literal form",
        context={"type": type(value).__name__},
    )


def _render_string(text: str, policy: StylePolicy) -> str:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FormattingError(
            f"String is not encodable as UTF-8: {e.reason}",
            context={"value": ascii(text), "start": e.start, "end": e.end},
        ) from e
    if policy.quote_char != '"':
        return repr(text)
    # ensure_ascii=False keeps characters outside the BMP intact; escaped they
    # would read back in Python as two lone surrogates
    return json.dumps(text, ensure_ascii=False)


def _render_collection(
    opener: str,
    closer: str,
    items: List[str],
    policy: StylePolicy,
    level: int,
) -> str:
    if not items:
        return f"{opener}{closer}"
    inner = " " * (policy.indent_width * (level + 1))
    outer = " " * (policy.indent_width * level)
    separator = ",\n"
    body = separator.join(f"{inner}{item}" for item in items)
    if policy.trailing_commas:
        body += ","
    return f"{opener}\n{body}\n{outer}{closer}"


def _check_identifier(name: str, role: str) -> None:
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise FormattingError(
            f"Invalid {role} name: {name!r}",
            context={"role": role, "name": name},
        )


def _render_import(declaration: ImportDeclaration) -> str:
    for part in declaration.module.split("."):
        _check_identifier(part, "module")
    if not declaration.names:
        raise FormattingError(
            f"Import from '{declaration.module}' names nothing",
            context={"module": declaration.module},
        )
    for name in declaration.names:
        _check_identifier(name, "import")
    return f"from {declaration.module} import {', '.join(declaration.names)}"


def _render_constant(declaration: ConstantDeclaration, policy: StylePolicy) -> str:
    _check_identifier(declaration.name, "constant")
    initializer = declaration.initializer
    if isinstance(initializer, LiteralValue):
        source = render_literal(initializer.value, policy)
    elif isinstance(initializer, Expression):
        source = initializer.source
    else:
        raise FormattingError(
            f"Constant '{declaration.name}' has no usable initializer",
            context={"name": declaration.name, "initializer": repr(initializer)},
        )
    if declaration.annotation:
        return f"{declaration.name}: {declaration.annotation} = {source}"
    return f"{declaration.name} = {source}"


def render_declarations(
    declarations: Iterable[Declaration],
    policy: StylePolicy = STYLE_POLICY,
) -> str:
    """Lay out declarations as module source.

    Imports are grouped at the top in the order they were added; every other
    declaration follows in insertion order, separated by a blank line.

    Raises:
        FormattingError: If a declaration is structurally invalid
    """
    imports: List[str] = []
    body: List[str] = []
    for declaration in declarations:
        if isinstance(declaration, ImportDeclaration):
            imports.append(_render_import(declaration))
        elif isinstance(declaration, ConstantDeclaration):
            body.append(_render_constant(declaration, policy))
        elif isinstance(declaration, RawText):
            body.append(declaration.text.strip("\n"))
        else:
            raise FormattingError(
                f"Unknown declaration type {type(declaration).__name__}",
                context={"declaration": repr(declaration)},
            )

    blocks = []
    if imports:
        blocks.append(policy.statement_terminator.join(imports))
    blocks.extend(block for block in body if block)
    if not blocks:
        return ""
    return (policy.statement_terminator * 3).join(blocks) + policy.statement_terminator


def black_mode(policy: StylePolicy = STYLE_POLICY) -> black.Mode:
    """Build the black mode corresponding to a style policy."""
    return black.Mode(
        target_versions={black.TargetVersion[policy.target_version.upper()]},
        line_length=policy.line_length,
        string_normalization=policy.quote_char == '"',
        magic_trailing_comma=policy.trailing_commas,
    )


def format_source(text: str, policy: StylePolicy = STYLE_POLICY) -> str:
    """Format module source canonically.

    Args:
        text: Python module source
        policy: Style policy to format with

    Returns:
        Formatted source; identical input always yields identical output

    Raises:
        FormattingError: If the source does not parse
    """
    try:
        ast.parse(text)
    except SyntaxError as e:
        raise FormattingError(
            f"Generated source does not parse: {e.msg}",
            context={"line": e.lineno, "offset": e.offset, "text": e.text},
        ) from e

    try:
        formatted = black.format_str(text, mode=black_mode(policy))
    except InvalidInput as e:
        raise FormattingError(
            f"Formatter rejected generated source: {e}",
            context={"error": str(e)},
        ) from e

    logger.debug("Formatted %d characters into %d", len(text), len(formatted))
    return formatted


__all__ = [
    "BANNER",
    "banner",
    "with_banner",
    "render_literal",
    "render_declarations",
    "black_mode",
    "format_source",
]
