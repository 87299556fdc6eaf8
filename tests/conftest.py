import sys
import textwrap
from pathlib import Path
from typing import Callable, Dict, List
from unittest.mock import AsyncMock

import pytest

from image_worker_mcp import ToolDispatcher, WorkerConfig
from image_worker_mcp.runner import ProcessResult, ProcessRunner

# Stand-ins for the external generator, by name. Each receives the generated flags as argv.
STUBS: Dict[str, str] = {}

STUBS["ok"] = """
import sys
print("OK")
"""

STUBS["echo_args"] = """
import json, sys
print(json.dumps(sys.argv[1:]))
"""

STUBS["warn"] = """
import sys
print("saved image.png")
print("deprecated flag", file=sys.stderr)
"""

STUBS["fail"] = """
import sys
print("partial output")
print("boom: quota exceeded", file=sys.stderr)
sys.exit(1)
"""

STUBS["slow"] = """
import sys, time
time.sleep(0.6)
print("late output")
"""

STUBS["hang"] = """
import signal, sys, time
from pathlib import Path

marker = Path(sys.argv[1])

def on_term(signum, frame):
    marker.write_text("terminated")
    sys.exit(0)

signal.signal(signal.SIGTERM, on_term)
while True:
    time.sleep(0.05)
"""


@pytest.fixture
def make_stub(tmp_path: Path) -> Callable[[str], Path]:
    """Writes the named stub generator script and returns its path."""

    def _make(name: str) -> Path:
        script = tmp_path / f"stub_{name}.py"
        script.write_text(textwrap.dedent(STUBS[name]), encoding="utf-8")
        return script

    return _make


@pytest.fixture
def stub_config(make_stub: Callable[[str], Path]) -> Callable[..., WorkerConfig]:
    """Builds a WorkerConfig running a stub script with the current interpreter."""

    def _config(name: str = "ok", extra_args: List[str] | None = None, **overrides) -> WorkerConfig:
        script = make_stub(name)
        values = {"command": sys.executable, "base_args": [str(script), *(extra_args or [])]}
        values.update(overrides)
        return WorkerConfig(**values)

    return _config


@pytest.fixture
def mock_runner() -> AsyncMock:
    """A ProcessRunner double that succeeds without spawning anything."""
    runner = AsyncMock(spec=ProcessRunner)
    runner.run.return_value = ProcessResult(command="npx ai-image generate", stdout="OK", stderr="", exit_code=0)
    return runner


@pytest.fixture
def dispatcher(mock_runner: AsyncMock) -> ToolDispatcher:
    return ToolDispatcher.from_config(WorkerConfig(), runner=mock_runner)

