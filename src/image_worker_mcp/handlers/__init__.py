from .image import GENERATE_TOOL, ImageGenerationHandler
from .output_dir import prepare_output_dir

__all__ = ["GENERATE_TOOL", "ImageGenerationHandler", "prepare_output_dir"]
