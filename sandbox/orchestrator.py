"""
Runs one piece of submitted source code from start to finish.

An execution writes the source into a fresh workspace, builds it when the
language needs a build, runs it, and deletes the workspace again. The whole
build-and-run chain shares a single wall-clock budget. Every failure after
validation is reported through the returned ExecutionResult rather than
raised.
"""

import asyncio
import signal
from pathlib import Path

import structlog

from core.config import Settings
from sandbox.normalize import FailureKind, Outcome, normalize
from sandbox.process import ProcessTimeout, SpawnError
from sandbox.registry import LanguageConfig, lookup
from sandbox.steps import Stage, build_pipeline
from sandbox.workspace import Workspace, prepare_scratch_dir, workspace_scope
from schemas.code import ExecutionResult

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_KILL_GRACE_SECONDS = 0.5


def _exit_description(returncode: int) -> str:
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = str(-returncode)
        return f"Process terminated by signal {name}"
    return f"Process exited with code {returncode}"


class Sandbox:
    def __init__(
        self,
        scratch_dir: Path,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        kill_grace_seconds: float = DEFAULT_KILL_GRACE_SECONDS,
    ):
        scratch_dir = Path(scratch_dir)
        if not scratch_dir.is_dir():
            raise ValueError(f"Scratch directory {scratch_dir} does not exist")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self.scratch_dir = scratch_dir
        self.timeout_seconds = timeout_seconds
        self.kill_grace_seconds = kill_grace_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "Sandbox":
        return cls(
            scratch_dir=prepare_scratch_dir(settings.SCRATCH_DIR),
            timeout_seconds=settings.EXECUTION_TIMEOUT_SECONDS,
            kill_grace_seconds=settings.KILL_GRACE_SECONDS,
        )

    async def execute(self, code: str, language_id: str) -> ExecutionResult:
        """
        Execute ``code`` as a standalone ``language_id`` program.

        Raises UnsupportedLanguageError before touching the filesystem when
        the language is unknown.
        """
        config = lookup(language_id)
        log = logger.bind(language=config.name)

        with workspace_scope(config, self.scratch_dir) as workspace:
            log.debug("execution_started", source=str(workspace.source_path))
            outcome = await self._run(config, workspace, code, log)

        if outcome.succeeded:
            log.info("execution_succeeded")
        else:
            log.info("execution_failed", failure=outcome.failure.value)
        return normalize(outcome)

    async def _run(self, config: LanguageConfig, workspace: Workspace, code: str, log) -> Outcome:
        try:
            workspace.source_path.write_text(code, encoding="utf-8", newline="")
        except (OSError, UnicodeError) as e:
            log.warning("source_write_failed", error=str(e))
            return Outcome.failed(FailureKind.WRITE, f"Failed to write temporary file: {e}")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout_seconds
        result = None

        for step in build_pipeline(config, workspace):
            try:
                result = await step.invoke(
                    timeout_seconds=deadline - loop.time(),
                    kill_grace_seconds=self.kill_grace_seconds,
                    cwd=self.scratch_dir,
                )
            except ProcessTimeout:
                log.warning("execution_timed_out", stage=step.stage.value, timeout=self.timeout_seconds)
                return Outcome.failed(
                    FailureKind.TIMEOUT,
                    f"Execution timed out after {self.timeout_seconds:g} seconds",
                )
            except SpawnError as e:
                log.error("process_spawn_failed", stage=step.stage.value, program=e.program, error=e.reason)
                return Outcome.failed(FailureKind.SPAWN, str(e))

            if not result.ok:
                kind = FailureKind.COMPILE if step.stage is Stage.COMPILE else FailureKind.RUNTIME
                return Outcome.failed(kind, result.stderr or _exit_description(result.returncode))

        return Outcome.success(result.stdout)
