"""Exception hierarchy for lexgen.

Every error raised by this package derives from ``LexgenError``, which
carries a human-readable message plus an optional context dictionary with
structured details (identifiers, paths, symbols).

Example:
    ```python
    from lexgen.exceptions import LexgenError, SymbolCollisionError

    try:
        artifacts = await generate_modules(documents)
    except SymbolCollisionError as e:
        logger.error("Collision: %s and %s", e.first, e.second)
    except LexgenError as e:
        logger.error("Generation failed: %s (%s)", e, e.context)
    ```
"""

from typing import Any, Dict


class LexgenError(Exception):
    """Base exception for all lexgen errors.

    Attributes:
        context: Dictionary containing contextual information about the error

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
    """

    def __init__(self, message: str, context: Dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class NormalizationError(LexgenError):
    """Raised when a namespaced identifier cannot be converted to a symbol.

    Example:
        ```python
        raise NormalizationError(
            "Identifier has an empty segment",
            context={"nsid": "com..example"}
        )
        ```
    """

    pass


class SymbolCollisionError(LexgenError):
    """Raised when two identifiers normalize to the same symbol.

    Attributes:
        first: Identifier that claimed the symbol first
        second: Identifier that collided with it
        symbol: The contested symbol
    """

    def __init__(self, first: str, second: str, symbol: str):
        if first == second:
            message = f"Identifier '{first}' supplied more than once (symbol '{symbol}')"
        else:
            message = (
                f"Identifiers '{first}' and '{second}' both normalize to symbol '{symbol}'"
            )
        super().__init__(
            message,
            context={"first": first, "second": second, "symbol": symbol},
        )
        self.first = first
        self.second = second
        self.symbol = symbol


class ValidationFailure(LexgenError):
    """Raised when a value fails a validator's strict parse.

    Example:
        ```python
        raise ValidationFailure(
            "'id' is a required property",
            context={"path": [], "validator": "required"}
        )
        ```
    """

    pass


class FormattingError(LexgenError):
    """Raised when assembled declarations cannot be rendered or formatted.

    This signals a defect in whatever produced the declarations, not bad
    user input.
    """

    pass


class PersistenceError(LexgenError):
    """Raised when a source buffer cannot be persisted, read back or written."""

    pass


class SchemaLoadError(LexgenError):
    """Raised when a schema document file cannot be read or parsed."""

    pass


class SchemaNotFoundError(LexgenError):
    """Raised when a registry lookup names an unknown identifier."""

    pass


class DuplicateSchemaError(LexgenError):
    """Raised when a registry already holds a document with the same identifier."""

    pass


class ConfigurationError(LexgenError):
    """Raised when generation settings are invalid or incomplete.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown settings key",
            context={"key": "output", "available_keys": ["output_dir"]}
        )
        ```
    """

    pass


__all__ = [
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
]
