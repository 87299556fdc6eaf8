"""Validation of caller-supplied output directories."""

import os
import time
from pathlib import Path

from ..core.exceptions import InvalidArgumentsError
from ..core.logger import get_logger

logger = get_logger(__name__)

_PROBE_CONTENT = "write probe"


def prepare_output_dir(raw_path: str) -> Path:
    """Makes sure an output directory exists and accepts new files.

    The directory is created (with parents) when missing. A probe file
    ``test-write-<timestamp>.tmp`` is then written, read back and deleted.
    Nothing guards the directory after the probe returns.

    Args:
        raw_path: The path as supplied by the caller. Must be absolute.

    Returns:
        The normalized absolute path.

    Raises:
        InvalidArgumentsError: If the path is relative, cannot be created or is not writable.
    """
    if not os.path.isabs(raw_path):
        msg = f"output_dir must be an absolute path, got '{raw_path}'"
        logger.warning(msg)
        raise InvalidArgumentsError(msg)

    path = Path(os.path.normpath(raw_path))
    probe = path / f"test-write-{time.time_ns()}.tmp"
    try:
        path.mkdir(parents=True, exist_ok=True)
        try:
            probe.write_text(_PROBE_CONTENT, encoding="utf-8")
            if probe.read_text(encoding="utf-8") != _PROBE_CONTENT:
                raise OSError(f"Probe file {probe} did not read back what was written")
        finally:
            probe.unlink(missing_ok=True)
    except (OSError, ValueError) as e:
        msg = f"Output directory '{path}' is not writable: {e}"
        logger.error(msg)
        raise InvalidArgumentsError(msg) from e

    logger.debug("Output directory '%s' is writable.", path)
    return path
