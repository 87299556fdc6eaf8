"""Translate validated tool arguments into the external generator's command line."""

import shlex
from typing import List, Sequence

from ..core.config import WorkerConfig
from ..tools.arguments import GenerateImageArgs

REDACTED = "***"
SECRET_FLAGS = frozenset({"--api-key"})


def build_command(config: WorkerConfig, request: GenerateImageArgs) -> List[str]:
    """Builds the ordered argument list for one generation run.

    Args:
        config: Worker configuration providing the executable, base arguments and credential.
        request: Validated generation arguments.

    Returns:
        The full command line, executable first.
    """
    command = [config.command, *config.base_args, "--prompt", request.prompt, "--size", request.size]

    optional_flags = (
        ("--model", request.model),
        ("--output", request.output),
        ("--output-dir", request.output_dir),
        ("--style", request.style),
    )
    for flag, value in optional_flags:
        if value:
            command.extend([flag, value])

    if config.forward_api_key and config.api_key:
        command.extend(["--api-key", config.api_key])

    return command


def format_command(command_line: Sequence[str]) -> str:
    """Renders a command line for logs and responses, with secret values replaced."""
    shown: List[str] = []
    hide_next = False
    for part in command_line:
        shown.append(REDACTED if hide_next else part)
        hide_next = part in SECRET_FLAGS
    return shlex.join(shown)
