"""
Spawning a single external process under a wall-clock timeout.
"""

import asyncio
import os
import signal
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessTimeout(Exception):
    def __init__(self, program: str, timeout_seconds: float):
        self.program = program
        self.timeout_seconds = timeout_seconds
        super().__init__(f"{program} did not finish within {timeout_seconds:g}s")


class SpawnError(Exception):
    def __init__(self, program: str, reason: str):
        self.program = program
        self.reason = reason
        super().__init__(f"Failed to start {program}: {reason}")


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


def _signal_group(proc: asyncio.subprocess.Process, sig: signal.Signals) -> None:
    # the child leads its own session, so the group also covers anything it forked
    if hasattr(os, "killpg"):
        try:
            os.killpg(proc.pid, sig)
        except (ProcessLookupError, PermissionError):
            # group already gone
            pass
    elif proc.returncode is None:
        if sig == signal.SIGTERM:
            proc.terminate()
        else:
            proc.kill()


async def terminate(proc: asyncio.subprocess.Process, grace_seconds: float) -> None:
    """Ask the process group to stop, then kill it if it is still around."""
    _signal_group(proc, signal.SIGTERM)
    try:
        await asyncio.wait_for(proc.wait(), timeout=grace_seconds)
    except asyncio.TimeoutError:
        logger.info("process_kill_escalated", pid=proc.pid)
    _signal_group(proc, getattr(signal, "SIGKILL", signal.SIGTERM))
    await proc.wait()


async def run_process(
    argv: Sequence[str],
    timeout_seconds: float,
    kill_grace_seconds: float,
    cwd: Path | None = None,
) -> ProcessResult:
    """
    Run ``argv`` to completion and capture stdout and stderr separately.

    Raises ProcessTimeout if the process is still running after
    ``timeout_seconds``; by then it has been terminated. Raises SpawnError if
    the executable cannot be started at all. Whatever the program forked is
    killed along with it on every path.
    """
    program = argv[0]
    if timeout_seconds <= 0:
        raise ProcessTimeout(program, timeout_seconds)

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            start_new_session=True,
        )
    except OSError as e:
        raise SpawnError(program, e.strerror or str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        await terminate(proc, kill_grace_seconds)
        raise ProcessTimeout(program, timeout_seconds) from None
    except asyncio.CancelledError:
        await terminate(proc, kill_grace_seconds)
        raise
    else:
        # anything the program left running after it exited
        _signal_group(proc, getattr(signal, "SIGKILL", signal.SIGTERM))

    return ProcessResult(
        returncode=proc.returncode,
        stdout=_decode(stdout),
        stderr=_decode(stderr),
    )
