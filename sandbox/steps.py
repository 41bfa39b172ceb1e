"""
The build and run stages of an execution.

Interpreted languages get a single RunStep. Compiled languages get a
BuildStep that produces the workspace binary followed by a RunStep that
executes it.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from sandbox.process import ProcessResult, run_process
from sandbox.registry import LanguageConfig
from sandbox.workspace import Workspace


class Stage(str, Enum):
    COMPILE = "compile"
    RUN = "run"


def _render(command: tuple[str, ...], workspace: Workspace) -> tuple[str, ...]:
    values = {
        "source": str(workspace.source_path),
        "binary": str(workspace.binary_path) if workspace.binary_path else "",
    }
    return tuple(part.format(**values) for part in command)


@dataclass(frozen=True)
class Step:
    argv: tuple[str, ...]

    stage = Stage.RUN

    async def invoke(
        self,
        timeout_seconds: float,
        kill_grace_seconds: float,
        cwd: Path | None = None,
    ) -> ProcessResult:
        return await run_process(
            self.argv,
            timeout_seconds=timeout_seconds,
            kill_grace_seconds=kill_grace_seconds,
            cwd=cwd,
        )


@dataclass(frozen=True)
class BuildStep(Step):
    stage = Stage.COMPILE


@dataclass(frozen=True)
class RunStep(Step):
    stage = Stage.RUN


def build_pipeline(config: LanguageConfig, workspace: Workspace) -> list[Step]:
    steps: list[Step] = []
    if config.compile_command is not None:
        if workspace.binary_path is None:
            raise ValueError(f"{config.name} needs a binary path in its workspace")
        steps.append(BuildStep(_render(config.compile_command, workspace)))
    steps.append(RunStep(_render(config.run_command, workspace)))
    return steps
