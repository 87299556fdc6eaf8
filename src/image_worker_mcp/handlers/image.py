"""Handlers behind the image generation tools."""

from typing import Any, Dict, List, Optional

from mcp.types import TextContent

from .output_dir import prepare_output_dir
from ..core.config import WorkerConfig
from ..core.exceptions import ImageGenerationError, InvalidArgumentsError, ProcessError
from ..core.logger import get_logger
from ..runner import ProcessResult, ProcessRunner, build_command
from ..tools.arguments import GenerateImageArgs, parse_arguments
from ..tools.models import ProgressCallback, ToolHandler

logger = get_logger(__name__)

GENERATE_TOOL = "generate_ai_image"


class ImageGenerationHandler:
    """
    Validates generation requests and runs them through the process runner.

    `generate` is the handler of ``generate_ai_image``; `with_size` builds the
    handlers of the fixed-size shortcut tools on top of it.
    """

    def __init__(self, config: WorkerConfig, runner: Optional[ProcessRunner] = None) -> None:
        """
        Args:
            config: Worker configuration. Decides whether ``output_dir`` is mandatory.
            runner: Process runner to delegate to. Built from `config` when omitted.
        """
        self._config = config
        self._runner = runner or ProcessRunner(config)

    async def generate(
        self,
        arguments: Dict[str, Any],
        on_progress: Optional[ProgressCallback] = None,
        tool_name: str = GENERATE_TOOL,
    ) -> List[TextContent]:
        """Generate an image from raw call arguments.

        All arguments are validated, and the output directory prepared, before
        the external command is started.

        Args:
            arguments: Raw arguments of the call.
            on_progress: Optional callback receiving progress updates of the run.
            tool_name: Name of the called tool, used in error messages.

        Returns:
            A single text block with the executed command and its output.

        Raises:
            InvalidArgumentsError: If the arguments are invalid or the output directory is unusable.
            ImageGenerationError: If the external command could not be run to a successful exit.
        """
        request = parse_arguments(GenerateImageArgs, arguments, tool_name)
        request = self._resolve_output_dir(request)

        command_line = build_command(self._config, request)
        try:
            result = await self._runner.run(command_line, on_progress)
        except ProcessError as e:
            msg = f"Failed to generate image: {e}"
            logger.error(msg)
            raise ImageGenerationError(msg) from e

        return [TextContent(type="text", text=self._format_result(result))]

    def with_size(self, size: str, tool_name: str) -> ToolHandler:
        """Build a handler that always generates at `size`, whatever size the caller passed."""

        async def generate_fixed_size(
            arguments: Dict[str, Any], on_progress: Optional[ProgressCallback] = None
        ) -> List[TextContent]:
            return await self.generate({**arguments, "size": size}, on_progress, tool_name)

        generate_fixed_size.__name__ = tool_name
        return generate_fixed_size

    def _resolve_output_dir(self, request: GenerateImageArgs) -> GenerateImageArgs:
        if request.output_dir is None:
            if self._config.require_output_dir:
                msg = "output_dir is required and must be an absolute path"
                logger.warning(msg)
                raise InvalidArgumentsError(msg)
            return request

        path = prepare_output_dir(request.output_dir)
        return request.model_copy(update={"output_dir": str(path)})

    @staticmethod
    def _format_result(result: ProcessResult) -> str:
        text = (
            "Image generation completed successfully!\n\n"
            f"Command executed: {result.command}\n\n"
            f"Output:\n{result.stdout}"
        )
        if result.stderr:
            text += f"\n\nErrors/Warnings:\n{result.stderr}"
        return text
