"""Writing generated artifacts to disk."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from lexgen.exceptions import PersistenceError
from lexgen.orchestrator import relative_target
from lexgen.types import GeneratedArtifact

logger = logging.getLogger(__name__)


def write_artifacts(
    artifacts: Iterable[GeneratedArtifact],
    output_dir: Union[str, Path],
) -> List[Path]:
    """Write each artifact under ``output_dir``.

    Parent directories are created as needed and existing files are
    overwritten.

    Args:
        artifacts: Artifacts to write
        output_dir: Root the artifact paths are resolved against

    Returns:
        The written file paths, in artifact order

    Raises:
        PersistenceError: If a path leaves ``output_dir`` or a file cannot be written
    """
    root = Path(output_dir)
    written: List[Path] = []
    for artifact in artifacts:
        target = root / relative_target(artifact.path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(artifact.content, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(
                f"Cannot write {target}",
                context={"path": str(target), "error": str(e)},
            ) from e
        logger.info("Wrote %s", target)
        written.append(target)
    return written


__all__ = ["write_artifacts"]
