"""Runtime configuration for the image worker server."""

import os
from typing import Any, Dict, List, Literal, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 300.0
PROGRESS_UPDATE_INTERVAL = 3.0

# Environment variable -> WorkerConfig field. Values are coerced by pydantic.
ENV_FIELDS: Dict[str, str] = {
    "IMAGE_WORKER_COMMAND": "command",
    "IMAGE_WORKER_TIMEOUT": "timeout",
    "IMAGE_WORKER_REQUIRE_OUTPUT_DIR": "require_output_dir",
    "IMAGE_WORKER_FORWARD_API_KEY": "forward_api_key",
    "IMAGE_WORKER_LOG_LEVEL": "log_level",
    "OPENAI_API_KEY": "api_key",
}


class WorkerConfig(BaseModel):
    """
    Configuration of the external generator invocation.

    Attributes:
        command: Executable to run. Resolved on PATH before spawning.
        base_args: Arguments placed between the executable and the generated flags.
        timeout: Watchdog duration in seconds. The process is terminated once it is exceeded.
        progress_interval: Seconds between periodic progress updates.
        kill_grace: Seconds to wait after SIGTERM before the process is killed.
        api_key: Provider credential. Only sent to the command when ``forward_api_key`` is set.
        forward_api_key: Append ``--api-key`` to the command line when a credential is configured.
        require_output_dir: Make ``output_dir`` mandatory for every generation tool.
        log_level: Level name used when the server configures logging.
    """

    command: str = "npx"
    base_args: List[str] = Field(default_factory=lambda: ["ai-image", "generate"])
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    progress_interval: float = Field(default=PROGRESS_UPDATE_INTERVAL, gt=0)
    kill_grace: float = Field(default=5.0, ge=0)
    api_key: Optional[str] = Field(default=None, repr=False)
    forward_api_key: bool = False
    require_output_dir: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls, load_env_file: bool = True, **overrides: Any) -> "WorkerConfig":
        """Build a config from the process environment.

        Args:
            load_env_file: Load a ``.env`` file (searched upwards from the working directory) first.
            **overrides: Field values that take precedence over the environment. ``None`` values are ignored.

        Returns:
            The validated configuration.
        """
        if load_env_file:
            env_file = find_dotenv(usecwd=True)
            if env_file:
                logger.debug("Loading .env from: %s", env_file)
                load_dotenv(env_file)

        values: Dict[str, Any] = {}
        for env_name, field_name in ENV_FIELDS.items():
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
