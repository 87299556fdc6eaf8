"""The static tool catalog of the image worker."""

from typing import Dict

from ..core.config import WorkerConfig
from ..handlers import GENERATE_TOOL, ImageGenerationHandler
from ..tools import GenerateImageArgs, ImageOptions, ToolRegistry

# Shortcut tool name -> (fixed size, description)
SIZE_PRESETS: Dict[str, tuple[str, str]] = {
    "square_image": ("1024x1024", "Generate a square AI image (1024x1024) using the ai-image CLI tool"),
    "landscape_image": ("1536x1024", "Generate a landscape AI image (1536x1024) using the ai-image CLI tool"),
    "portrait_image": ("1024x1536", "Generate a portrait AI image (1024x1536) using the ai-image CLI tool"),
}


def build_registry(config: WorkerConfig, handler: ImageGenerationHandler) -> ToolRegistry:
    """Register the generic generation tool and its fixed-size shortcuts.

    Args:
        config: Worker configuration. With ``require_output_dir`` every tool lists ``output_dir`` as required.
        handler: The handler serving all four tools.

    Returns:
        The populated registry.
    """
    required = ("output_dir",) if config.require_output_dir else ()
    registry = ToolRegistry()

    registry.register(
        GENERATE_TOOL,
        description="Generate AI images using the ai-image CLI tool",
        handler=handler.generate,
        args_model=GenerateImageArgs,
        required=required,
    )
    for name, (size, description) in SIZE_PRESETS.items():
        registry.register(
            name,
            description=description,
            handler=handler.with_size(size, name),
            args_model=ImageOptions,
            required=required,
        )
    return registry
