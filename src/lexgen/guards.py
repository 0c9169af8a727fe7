"""Type-guard adapters over pluggable validators.

Call sites depend only on the two-operation ``Validator`` protocol, so the
validation library behind it can change without touching them:

```python
from lexgen.guards import JsonSchemaValidator, assure, is_valid

envelope = JsonSchemaValidator({"type": "object", "required": ["id"]})

if is_valid(raw, envelope):
    ...
to_document = assure(envelope)
document = to_document(raw)  # raises ValidationFailure
```

Two validators ship with the package: ``JsonSchemaValidator`` (jsonschema)
and ``PydanticValidator`` (pydantic ``TypeAdapter``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

import jsonschema
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from lexgen.exceptions import ConfigurationError, ValidationFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True)
class SafeParseResult(Generic[T]):
    """Outcome of a non-raising parse.

    Attributes:
        success: Whether the value passed validation
        value: The validated value when successful
        error: The failure when unsuccessful
    """

    success: bool
    value: T | None = None
    error: ValidationFailure | None = None


@runtime_checkable
class Validator(Protocol[T_co]):
    """Capability to check a value against a schema.

    ``parse`` returns the validated value or raises; ``safe_parse`` reports the
    outcome without raising.
    """

    def parse(self, value: Any) -> T_co:
        ...

    def safe_parse(self, value: Any) -> Any:
        """Return an object whose ``success`` attribute is a bool."""
        ...


def is_valid(value: Any, validator: Validator[Any]) -> bool:
    """Return whether ``value`` satisfies ``validator``.

    Equivalent to ``validator.safe_parse(value).success``. ``safe_parse`` must
    not raise; given that, neither does this.
    """
    return bool(validator.safe_parse(value).success)


def assure(validator: Validator[T]) -> Callable[[Any], T]:
    """Return a function that strictly parses values with ``validator``.

    The returned function returns whatever ``validator.parse`` returns and
    propagates whatever it raises.
    """

    def _assure(value: Any) -> T:
        return validator.parse(value)

    return _assure


class JsonSchemaValidator:
    """Validator backed by a JSON Schema.

    Args:
        schema: JSON Schema document; the draft is taken from ``$schema``,
            falling back to the latest draft jsonschema supports

    Raises:
        ConfigurationError: If the schema itself is invalid
    """

    def __init__(self, schema: dict[str, Any]):
        validator_class = jsonschema.validators.validator_for(schema)
        try:
            validator_class.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ConfigurationError(
                f"Invalid JSON Schema: {e.message}",
                context={"schema": schema},
            ) from e
        self._schema = schema
        self._validator = validator_class(schema)

    @property
    def schema(self) -> dict[str, Any]:
        return self._schema

    def parse(self, value: Any) -> Any:
        """Return ``value`` unchanged if it conforms.

        Raises:
            ValidationFailure: With the most relevant schema violation
        """
        error = jsonschema.exceptions.best_match(self._validator.iter_errors(value))
        if error is not None:
            raise ValidationFailure(
                error.message,
                context={
                    "path": list(error.absolute_path),
                    "validator": error.validator,
                },
            )
        return value

    def safe_parse(self, value: Any) -> SafeParseResult[Any]:
        try:
            return SafeParseResult(success=True, value=self.parse(value))
        except ValidationFailure as e:
            return SafeParseResult(success=False, error=e)


class PydanticValidator(Generic[T]):
    """Validator backed by a pydantic ``TypeAdapter``.

    ``parse`` returns the validated value, which may be coerced or converted
    (e.g. a dict into a model instance).

    Args:
        type_: Any type pydantic can validate (models, dataclasses, generics)
    """

    def __init__(self, type_: Any):
        self._adapter: TypeAdapter[T] = TypeAdapter(type_)

    def parse(self, value: Any) -> T:
        """Validate and return ``value``.

        Raises:
            ValidationFailure: With pydantic's error list in the context
        """
        try:
            return self._adapter.validate_python(value)
        except PydanticValidationError as e:
            raise ValidationFailure(
                f"{e.error_count()} validation error(s) for {e.title}",
                context={
                    "errors": [
                        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                        for err in e.errors()
                    ]
                },
            ) from e

    def safe_parse(self, value: Any) -> SafeParseResult[T]:
        try:
            return SafeParseResult(success=True, value=self.parse(value))
        except ValidationFailure as e:
            return SafeParseResult(success=False, error=e)


__all__ = [
    "SafeParseResult",
    "Validator",
    "is_valid",
    "assure",
    "JsonSchemaValidator",
    "PydanticValidator",
]
