"""Generation lifecycle for target files.

Each target file goes through the same steps: a fresh ``SourceBuilder`` is
populated by a caller-supplied step, rendered and persisted into the
workspace, read back, formatted, given the provenance banner and released.
The result is a ``GeneratedArtifact``; on any failure nothing is returned.

Example:
    ```python
    with GenerationWorkspace() as workspace:
        artifact = await workspace.gen(
            "/constants.py",
            lambda builder: builder.add_constant("VERSION", LiteralValue(1)),
        )
    ```

``generate_modules`` runs the two standard targets (the registry module and
the helper module) in one workspace.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import tempfile
import uuid
from pathlib import Path, PurePosixPath
from typing import Any, Awaitable, Callable, List, Sequence, Union

from lexgen.assembler import populate_lexicons_module
from lexgen.builder import SourceBuilder
from lexgen.emitter import format_source, render_declarations, with_banner
from lexgen.exceptions import PersistenceError
from lexgen.settings import DEFAULT_SETTINGS, STYLE_POLICY, CodegenSettings, StylePolicy
from lexgen.types import GeneratedArtifact, SchemaDocument

logger = logging.getLogger(__name__)

PopulateStep = Callable[[SourceBuilder], Union[None, Awaitable[None]]]

UTIL_MODULE = '''
from typing import Any, Mapping, TypeGuard


def is_obj(v: object) -> TypeGuard[dict[str, Any]]:
    return isinstance(v, dict)


def has_prop(data: Mapping[str, Any], prop: str) -> bool:
    return prop in data
'''


def relative_target(path: str) -> PurePosixPath:
    """Interpret a target path relative to an output root.

    Leading slashes are dropped; ``/util.py`` and ``util.py`` are the same
    target.

    Raises:
        PersistenceError: If the path is empty or climbs out of the root
    """
    relative = PurePosixPath(path.lstrip("/"))
    if not relative.parts or ".." in relative.parts:
        raise PersistenceError(
            f"Invalid target path: {path!r}",
            context={"path": path},
        )
    return relative


class GenerationWorkspace:
    """Scoped backing store for source buffers.

    The workspace owns a temporary directory for as long as it is open. Every
    ``gen`` call persists into its own subdirectory and removes it before
    returning, so concurrent calls never share a file.

    Args:
        policy: Style policy used to render and format; defaults to the fixed
            process-wide policy
    """

    def __init__(self, policy: StylePolicy = STYLE_POLICY) -> None:
        self._policy = policy
        self._tempdir: tempfile.TemporaryDirectory | None = None

    def __enter__(self) -> GenerationWorkspace:
        self._tempdir = tempfile.TemporaryDirectory(prefix="lexgen-")
        logger.debug("Opened workspace %s", self._tempdir.name)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> GenerationWorkspace:
        return self.__enter__()

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._tempdir is not None:
            self._tempdir.cleanup()
            self._tempdir = None

    @property
    def root(self) -> Path:
        if self._tempdir is None:
            raise PersistenceError("Workspace is not open")
        return Path(self._tempdir.name)

    async def gen(self, path: str, populate: PopulateStep) -> GeneratedArtifact:
        """Generate one target file.

        Args:
            path: Target path of the artifact
            populate: Step that writes declarations into the builder; may be
                a plain function or a coroutine function

        Returns:
            The finished artifact

        Raises:
            PersistenceError: If the buffer cannot be persisted or read back
            FormattingError: If the populated declarations are invalid
            Exception: Whatever ``populate`` raises, unchanged
        """
        buffer_path = self.root / uuid.uuid4().hex / relative_target(path)

        builder = SourceBuilder(path)
        result = populate(builder)
        if inspect.isawaitable(result):
            await result

        try:
            self._persist(buffer_path, render_declarations(builder.declarations, self._policy))
            source = self._read_back(buffer_path)
            formatted = await asyncio.to_thread(format_source, source, self._policy)
        finally:
            self._release(buffer_path)

        logger.info("Generated %s (%d declarations)", path, len(builder))
        return GeneratedArtifact(path=path, content=with_banner(formatted))

    def _persist(self, buffer_path: Path, text: str) -> None:
        try:
            buffer_path.parent.mkdir(parents=True, exist_ok=True)
            buffer_path.write_text(text, encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise PersistenceError(
                f"Cannot persist buffer: {buffer_path}",
                context={"path": str(buffer_path), "error": str(e)},
            ) from e
        logger.debug("Persisted %d characters to %s", len(text), buffer_path)

    def _read_back(self, buffer_path: Path) -> str:
        try:
            return buffer_path.read_text(encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise PersistenceError(
                f"Cannot read back buffer: {buffer_path}",
                context={"path": str(buffer_path), "error": str(e)},
            ) from e

    def _release(self, buffer_path: Path) -> None:
        buffer_path.unlink(missing_ok=True)
        # Remove the per-call directory chain up to the workspace root
        for parent in buffer_path.parents:
            if parent == self.root:
                break
            try:
                parent.rmdir()
            except OSError:
                break


async def generate_lexicons_module(
    workspace: GenerationWorkspace,
    documents: Sequence[SchemaDocument],
    settings: CodegenSettings = DEFAULT_SETTINGS,
) -> GeneratedArtifact:
    """Generate the registry module for ``documents``."""
    return await workspace.gen(
        settings.lexicons_path,
        lambda builder: populate_lexicons_module(builder, documents, settings),
    )


async def generate_util_module(
    workspace: GenerationWorkspace,
    settings: CodegenSettings = DEFAULT_SETTINGS,
) -> GeneratedArtifact:
    """Generate the static helper module."""
    return await workspace.gen(
        settings.util_path,
        lambda builder: builder.add_text(UTIL_MODULE),
    )


async def generate_modules(
    documents: Sequence[SchemaDocument],
    settings: CodegenSettings = DEFAULT_SETTINGS,
) -> List[GeneratedArtifact]:
    """Generate the registry module and the helper module.

    Both targets are generated concurrently; the result is always ordered
    registry module first. If either fails, its exception is raised and no
    artifacts are returned.
    """
    with GenerationWorkspace() as workspace:
        results = await asyncio.gather(
            generate_lexicons_module(workspace, documents, settings),
            generate_util_module(workspace, settings),
            return_exceptions=True,
        )

    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


__all__ = [
    "PopulateStep",
    "UTIL_MODULE",
    "relative_target",
    "GenerationWorkspace",
    "generate_lexicons_module",
    "generate_util_module",
    "generate_modules",
]
