from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ..errors import ExecutionTimeoutError, LaunchError
from ..result import Result
from .types import ExecutionOutcome

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


def _decode(data: bytes) -> str:
    """Decode captured engine output without failing on stray bytes.

    Example:
        ```python
        _decode(b"42\\n")  # "42\\n"
        ```
    """
    return data.decode("utf-8", errors="replace")


class ProcessExecutor:
    """Run one engine process with a hard timeout and both pipes drained.

    stdout and stderr are read concurrently with the exit wait, so a child
    that fills one pipe buffer while the other is idle cannot stall. On
    timeout the child is killed outright and any partial output is dropped.

    Example:
        ```python
        outcome = asyncio.run(ProcessExecutor().execute(["wasmtime", "--version"])).unwrap()
        ```
    """

    async def execute(
        self,
        argv: Sequence[str],
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> Result[ExecutionOutcome]:
        """Spawn argv, wait at most `timeout_seconds`, and return raw output.

        A nonzero exit status is returned as data, not as a failure.

        Example:
            ```python
            res = await ProcessExecutor().execute(argv, timeout_seconds=2)
            ```
        """
        logger.debug("Spawning engine: %s", list(argv))
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.debug("Engine launch failed: %s", exc)
            return Result.failure(LaunchError(argv, exc))

        if proc.stdout is None or proc.stderr is None:
            raise RuntimeError("Engine process was spawned without stdout/stderr pipes")
        try:
            stdout, stderr, returncode = await asyncio.wait_for(
                asyncio.gather(proc.stdout.read(), proc.stderr.read(), proc.wait()),
                timeout=timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Engine pid %s exceeded %ss timeout; killing it", proc.pid, timeout_seconds
            )
            await self._kill(proc)
            return Result.failure(ExecutionTimeoutError(timeout_seconds))
        except asyncio.CancelledError:
            self._send_kill(proc)
            raise

        logger.debug("Engine pid %s exited with %s", proc.pid, returncode)
        return Result.success(
            ExecutionOutcome(
                stdout=_decode(stdout),
                stderr=_decode(stderr),
                returncode=returncode,
            )
        )

    async def _kill(self, proc: asyncio.subprocess.Process) -> None:
        """Force-kill the child and reap it.

        Example:
            ```python
            await executor._kill(proc)
            ```
        """
        self._send_kill(proc)
        await proc.wait()

    @staticmethod
    def _send_kill(proc: asyncio.subprocess.Process) -> None:
        """Send SIGKILL (TerminateProcess on Windows) if the child is still alive.

        Example:
            ```python
            ProcessExecutor._send_kill(proc)
            ```
        """
        if proc.returncode is not None:
            return
        try:
            proc.kill()
        except ProcessLookupError:
            # Exited between the returncode check and the signal.
            return
