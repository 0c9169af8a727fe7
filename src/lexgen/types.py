"""Data types shared across the generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from lexgen.exceptions import ValidationFailure


def check_body(identifier: str, body: Any) -> None:
    """Require ``body`` to be a mapping whose ``id`` is ``identifier``.

    The runtime registry keys documents on ``body["id"]``, so a body that
    disagrees with its identifier would produce a module that fails on import.

    Raises:
        ValidationFailure: If the body is not a mapping or its ``id`` differs
    """
    if not isinstance(body, Mapping):
        raise ValidationFailure(
            f"Schema document '{identifier}' must be a mapping, got {type(body).__name__}",
            context={"identifier": identifier},
        )
    if body.get("id") != identifier:
        raise ValidationFailure(
            f"Schema document '{identifier}' has mismatched 'id' {body.get('id')!r}",
            context={"identifier": identifier, "id": body.get("id")},
        )


@dataclass(frozen=True)
class SchemaDocument:
    """A schema document and the identifier it is registered under.

    Attributes:
        identifier: Dotted namespaced identifier (e.g. ``com.example.getThing``).
        body: The raw document, JSON-compatible. Emitted verbatim.
    """

    identifier: str
    body: Mapping[str, Any]

    def __post_init__(self) -> None:
        check_body(self.identifier, self.body)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> SchemaDocument:
        """Build a document from a raw mapping carrying its own ``id``.

        Raises:
            ValidationFailure: If ``raw`` is not a mapping or has no string ``id``.
        """
        if not isinstance(raw, Mapping):
            raise ValidationFailure(
                f"Schema document must be a mapping, got {type(raw).__name__}"
            )
        identifier = raw.get("id")
        if not isinstance(identifier, str) or not identifier:
            raise ValidationFailure(
                "Schema document has no string 'id'",
                context={"id": identifier, "keys": sorted(str(k) for k in raw)},
            )
        return cls(identifier=identifier, body=raw)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary."""
        return {"identifier": self.identifier, "body": dict(self.body)}


@dataclass(frozen=True)
class GeneratedArtifact:
    """The result of generating one target file.

    Attributes:
        path: Target path, relative to the output root (e.g. ``/lexicons.py``).
        content: Full file content, banner included.
    """

    path: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary."""
        return {"path": self.path, "content": self.content}


__all__ = ["check_body", "SchemaDocument", "GeneratedArtifact"]
