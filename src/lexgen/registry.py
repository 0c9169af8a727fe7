"""Runtime registry of schema documents.

Generated registry modules build a ``Lexicons`` instance from their document
list:

```python
from lexgen.registry import Lexicons

lexicons: Lexicons = Lexicons(schemas)
lexicons.get("com.example.getThing")
```

The registry only indexes documents by their ``id``; it does not interpret
or cross-check their contents.
"""

import logging
import threading
from typing import Any, Dict, Iterable, Iterator, List, Mapping

from lexgen.exceptions import DuplicateSchemaError, SchemaNotFoundError, ValidationFailure

logger = logging.getLogger(__name__)


class Lexicons:
    """Thread-safe registry of raw schema documents keyed by identifier.

    Args:
        documents: Optional initial documents, each a mapping with a string ``id``

    Example:
        ```python
        registry = Lexicons([{"lexicon": 1, "id": "com.example.getThing", "defs": {}}])
        registry.has("com.example.getThing")
        # True
        len(registry)
        # 1
        ```
    """

    def __init__(self, documents: Iterable[Mapping[str, Any]] | None = None):
        self._docs: Dict[str, Mapping[str, Any]] = {}
        self._lock = threading.RLock()
        for document in documents or ():
            self.add(document)

    def add(self, document: Mapping[str, Any]) -> None:
        """Register a document under its ``id``.

        Raises:
            ValidationFailure: If the document has no string ``id``
            DuplicateSchemaError: If a document with the same ``id`` is registered
        """
        nsid = document.get("id") if isinstance(document, Mapping) else None
        if not isinstance(nsid, str) or not nsid:
            raise ValidationFailure(
                "Schema document has no string 'id'",
                context={"id": nsid},
            )

        with self._lock:
            if nsid in self._docs:
                raise DuplicateSchemaError(
                    f"Schema '{nsid}' already registered",
                    context={"id": nsid},
                )
            self._docs[nsid] = document

        logger.debug("Registered schema %s", nsid)

    def remove(self, nsid: str) -> Mapping[str, Any]:
        """Unregister and return a document.

        Raises:
            SchemaNotFoundError: If no document has this identifier
        """
        with self._lock:
            if nsid not in self._docs:
                raise SchemaNotFoundError(
                    f"Schema not found: {nsid}",
                    context={"id": nsid},
                )
            return self._docs.pop(nsid)

    def get(self, nsid: str) -> Mapping[str, Any]:
        """Get a document by identifier.

        Raises:
            SchemaNotFoundError: If no document has this identifier
        """
        with self._lock:
            if nsid not in self._docs:
                raise SchemaNotFoundError(
                    f"Schema not found: {nsid}",
                    context={"id": nsid, "available_ids": list(self._docs.keys())},
                )
            return self._docs[nsid]

    def get_optional(self, nsid: str) -> Mapping[str, Any] | None:
        """Get a document by identifier, or None if it is not registered."""
        with self._lock:
            return self._docs.get(nsid)

    def has(self, nsid: str) -> bool:
        with self._lock:
            return nsid in self._docs

    def ids(self) -> List[str]:
        """List registered identifiers in registration order."""
        with self._lock:
            return list(self._docs.keys())

    def __contains__(self, nsid: object) -> bool:
        with self._lock:
            return nsid in self._docs

    def __len__(self) -> int:
        with self._lock:
            return len(self._docs)

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        with self._lock:
            return iter(list(self._docs.values()))

    def __repr__(self) -> str:
        return f"Lexicons(count={len(self)})"


__all__ = ["Lexicons"]
