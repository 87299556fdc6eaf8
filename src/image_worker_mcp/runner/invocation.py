"""State of a single external process run."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel


class InvocationState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


_TRANSITIONS: Dict[InvocationState, FrozenSet[InvocationState]] = {
    InvocationState.PENDING: frozenset({InvocationState.RUNNING, InvocationState.FAILED}),
    InvocationState.RUNNING: frozenset(
        {InvocationState.COMPLETED, InvocationState.FAILED, InvocationState.TIMED_OUT}
    ),
    InvocationState.COMPLETED: frozenset(),
    InvocationState.FAILED: frozenset(),
    InvocationState.TIMED_OUT: frozenset(),
}


@dataclass
class ProcessInvocation:
    """One run of the external command. Single shot: terminal states are final."""

    command_line: List[str]
    state: InvocationState = InvocationState.PENDING
    started_at: Optional[float] = None
    exit_code: Optional[int] = None
    stdout_chunks: List[bytes] = field(default_factory=list)
    stderr_chunks: List[bytes] = field(default_factory=list)

    @property
    def elapsed(self) -> float:
        """Seconds since the process was started, 0 before that."""
        if self.started_at is None:
            return 0.0
        return time.monotonic() - self.started_at

    @property
    def stdout(self) -> str:
        return b"".join(self.stdout_chunks).decode("utf-8", errors="replace")

    @property
    def stderr(self) -> str:
        return b"".join(self.stderr_chunks).decode("utf-8", errors="replace")

    @property
    def finished(self) -> bool:
        return not _TRANSITIONS[self.state]

    def start(self) -> None:
        self._transition(InvocationState.RUNNING)
        self.started_at = time.monotonic()

    def complete(self, exit_code: int) -> None:
        self._transition(InvocationState.COMPLETED)
        self.exit_code = exit_code

    def fail(self, exit_code: Optional[int] = None) -> None:
        self._transition(InvocationState.FAILED)
        self.exit_code = exit_code

    def time_out(self, exit_code: Optional[int] = None) -> None:
        self._transition(InvocationState.TIMED_OUT)
        self.exit_code = exit_code

    def _transition(self, new_state: InvocationState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid invocation transition: {self.state.value} -> {new_state.value}")
        self.state = new_state


class ProcessResult(BaseModel):
    """Outcome of a successful run.

    Attributes:
        command: The executed command line, with secrets redacted.
        stdout: Trimmed standard output.
        stderr: Trimmed standard error.
        exit_code: Process exit code (always 0 for a result).
    """

    command: str
    stdout: str
    stderr: str
    exit_code: int
