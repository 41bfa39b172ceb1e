"""
File paths owned by a single execution.

Every path embeds a fresh uuid4 token, so concurrent executions sharing the
scratch directory never need to coordinate with each other.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

import structlog

from sandbox.registry import LanguageConfig

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Workspace:
    source_path: Path
    binary_path: Path | None = None

    @property
    def paths(self) -> tuple[Path, ...]:
        if self.binary_path is None:
            return (self.source_path,)
        return (self.source_path, self.binary_path)

    def release(self) -> None:
        """Delete every allocated path. Failures are logged, never raised."""
        for path in self.paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("workspace_cleanup_failed", path=str(path), error=str(e))


def prepare_scratch_dir(path: str | Path) -> Path:
    """Create the scratch directory. Called once at startup, not per request."""
    scratch_dir = Path(path).resolve()
    scratch_dir.mkdir(parents=True, exist_ok=True)
    return scratch_dir


def allocate(config: LanguageConfig, scratch_dir: Path) -> Workspace:
    # only computes names; the orchestrator does the writing
    source_path = scratch_dir / f"{uuid4().hex}.{config.source_extension}"
    binary_path = None
    if config.is_compiled:
        binary_path = scratch_dir / f"out_{uuid4().hex}"
    return Workspace(source_path=source_path, binary_path=binary_path)


@contextmanager
def workspace_scope(config: LanguageConfig, scratch_dir: Path) -> Iterator[Workspace]:
    workspace = allocate(config, scratch_dir)
    try:
        yield workspace
    finally:
        workspace.release()
