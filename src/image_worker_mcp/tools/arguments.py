"""Validated request models for the image generation tools."""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.exceptions import InvalidArgumentsError
from ..core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SIZE = "1024x1024"
SIZE_PATTERN = r"^\d+x\d+$"

ArgsT = TypeVar("ArgsT", bound=BaseModel)


class ImageOptions(BaseModel):
    """Arguments shared by every image tool. Shortcut tools accept exactly these."""

    prompt: str = Field(description="The text prompt for image generation")
    model: Optional[str] = Field(default=None, description="AI model to use for generation (optional)")
    output: Optional[str] = Field(default=None, description="Output file path (optional)")
    output_dir: Optional[str] = Field(
        default=None, description="Absolute path of the directory the image is written to (optional)"
    )
    style: Optional[str] = Field(default=None, description="Image style (optional)")

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Prompt is required for image generation")
        return value

    @field_validator("prompt", "model", "output", "output_dir", "style")
    @classmethod
    def _no_null_bytes(cls, value: Optional[str]) -> Optional[str]:
        # Values end up in argv and in filesystem paths.
        if value is not None and "\x00" in value:
            raise ValueError("must not contain null bytes")
        return value


class GenerateImageArgs(ImageOptions):
    """Arguments of ``generate_ai_image``."""

    size: str = Field(
        default=DEFAULT_SIZE,
        description="Image size in format WIDTHxHEIGHT (e.g., 1536x1024)",
        pattern=SIZE_PATTERN,
    )


def parse_arguments(model: Type[ArgsT], arguments: Dict[str, Any], tool_name: str) -> ArgsT:
    """Validates raw call arguments against a request model.

    Args:
        model: The Pydantic model to validate with.
        arguments: Raw arguments as received from the caller.
        tool_name: Name of the called tool, for error reporting.

    Returns:
        The validated request.

    Raises:
        InvalidArgumentsError: If a field is missing or malformed.
    """
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}" for err in e.errors()
        )
        msg = f"Invalid arguments for '{tool_name}': {details}"
        logger.warning(msg)
        raise InvalidArgumentsError(msg) from e
