"""Run the external image generator as a child process with progress reporting and a watchdog."""

from __future__ import annotations

import asyncio
import shutil
from typing import List, Optional, Sequence

from .command import format_command
from .invocation import InvocationState, ProcessInvocation, ProcessResult
from ..core.config import WorkerConfig
from ..core.exceptions import ProcessExecutionError, ProcessSpawnError, ProcessTimeoutError
from ..core.logger import get_logger
from ..tools.models import ProgressCallback

logger = get_logger(__name__)

_READ_CHUNK_SIZE = 4096


class ProcessRunner:
    """Executes the generator command and mediates its lifecycle.

    Each call to `run` spawns one independent process. While it runs, a
    progress update is emitted every ``progress_interval`` seconds and on every
    chunk read from stdout or stderr. A watchdog terminates the process once
    ``timeout`` seconds have passed. The ticker, the watchdog and the stream
    readers are all gone when `run` returns or raises.
    """

    def __init__(self, config: WorkerConfig) -> None:
        """
        Args:
            config: Timeouts and intervals to apply to every run.
        """
        self._config = config

    async def run(self, command_line: Sequence[str], on_progress: Optional[ProgressCallback] = None) -> ProcessResult:
        """Run a command to completion.

        Args:
            command_line: Executable followed by its arguments.
            on_progress: Optional coroutine function receiving (elapsed seconds, message) updates.

        Returns:
            The redacted command line with trimmed stdout and stderr.

        Raises:
            ProcessSpawnError: If the process could not be started.
            ProcessExecutionError: If the process exited with a non-zero code.
            ProcessTimeoutError: If the watchdog had to terminate the process.
        """
        return await self.execute(ProcessInvocation(command_line=list(command_line)), on_progress)

    async def execute(
        self, invocation: ProcessInvocation, on_progress: Optional[ProgressCallback] = None
    ) -> ProcessResult:
        """Run a pending invocation, recording its state transitions on the object."""
        if invocation.state is not InvocationState.PENDING:
            raise RuntimeError(f"Invalid invocation transition: {invocation.state.value} -> running")

        command = format_command(invocation.command_line)
        logger.info("Executing: %s", command)

        process = await self._spawn(invocation)
        invocation.start()

        readers = [
            asyncio.create_task(self._pump(process.stdout, invocation.stdout_chunks, "stdout", invocation, on_progress)),
            asyncio.create_task(self._pump(process.stderr, invocation.stderr_chunks, "stderr", invocation, on_progress)),
        ]
        ticker = asyncio.create_task(self._tick(invocation, on_progress))

        try:
            try:
                exit_code = await asyncio.wait_for(self._communicate(process, readers), timeout=self._config.timeout)
            except asyncio.TimeoutError:
                await self._terminate(process)
                invocation.time_out(process.returncode)
                logger.error("Command timed out after %ss: %s", self._config.timeout, command)
                raise ProcessTimeoutError(self._config.timeout) from None
        finally:
            ticker.cancel()
            for reader in readers:
                reader.cancel()
            await asyncio.gather(ticker, *readers, return_exceptions=True)

        stdout, stderr = invocation.stdout, invocation.stderr
        if exit_code != 0:
            invocation.fail(exit_code)
            logger.error("Command exited with code %s after %.1fs: %s", exit_code, invocation.elapsed, command)
            raise ProcessExecutionError(exit_code, stdout, stderr)

        invocation.complete(exit_code)
        logger.info("Command finished after %.1fs: %s", invocation.elapsed, command)
        return ProcessResult(command=command, stdout=stdout.strip(), stderr=stderr.strip(), exit_code=exit_code)

    async def _spawn(self, invocation: ProcessInvocation) -> asyncio.subprocess.Process:
        executable, *args = invocation.command_line
        # PATH lookup also finds wrapper scripts such as npx.cmd on Windows.
        resolved = shutil.which(executable) or executable
        try:
            return await asyncio.create_subprocess_exec(
                resolved,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            invocation.fail()
            msg = f"Failed to spawn process: {e}"
            logger.error(msg)
            raise ProcessSpawnError(msg) from e

    @staticmethod
    async def _communicate(process: asyncio.subprocess.Process, readers: List[asyncio.Task]) -> int:
        await asyncio.gather(*readers)
        return await process.wait()

    async def _pump(
        self,
        stream: Optional[asyncio.StreamReader],
        sink: List[bytes],
        label: str,
        invocation: ProcessInvocation,
        on_progress: Optional[ProgressCallback],
    ) -> None:
        if stream is None:
            return
        while True:
            chunk = await stream.read(_READ_CHUNK_SIZE)
            if not chunk:
                return
            sink.append(chunk)
            message = f"Received {label} from image generation process"
            logger.info("Progress: %s", message)
            await self._notify(on_progress, invocation.elapsed, message)

    async def _tick(self, invocation: ProcessInvocation, on_progress: Optional[ProgressCallback]) -> None:
        while True:
            await asyncio.sleep(self._config.progress_interval)
            elapsed = invocation.elapsed
            message = f"Image generation in progress... ({int(elapsed)}s elapsed)"
            logger.info("Progress: %s", message)
            await self._notify(on_progress, elapsed, message)

    @staticmethod
    async def _notify(on_progress: Optional[ProgressCallback], elapsed: float, message: str) -> None:
        if on_progress is None:
            return
        try:
            await on_progress(elapsed, message)
        except Exception as e:
            # A lost progress channel must not abort the generation itself.
            logger.warning("Progress callback failed: %s", e)

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.terminate()
        except ProcessLookupError:
            return
        try:
            await asyncio.wait_for(process.wait(), timeout=self._config.kill_grace)
        except asyncio.TimeoutError:
            logger.warning("Process %s ignored SIGTERM for %ss, killing it.", process.pid, self._config.kill_grace)
            process.kill()
            await process.wait()
