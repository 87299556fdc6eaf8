"""Command-line entry point: ``image-worker-mcp``."""

import argparse
import asyncio
import sys
from typing import List, Optional

from pydantic import ValidationError

from .core import WorkerConfig, get_logger, setup_logging
from .server import serve_stdio

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-worker-mcp",
        description="MCP server generating images through the ai-image command-line tool.",
    )
    parser.add_argument("--command", help="Executable of the image generator (default: npx)")
    parser.add_argument("--timeout", type=float, help="Seconds before a generation is terminated (default: 300)")
    parser.add_argument(
        "--require-output-dir",
        action="store_true",
        default=None,
        help="Make output_dir a required, absolute, writable directory",
    )
    parser.add_argument(
        "--forward-api-key",
        action="store_true",
        default=None,
        help="Pass OPENAI_API_KEY to the generator as --api-key",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = WorkerConfig.from_env(
            command=args.command,
            timeout=args.timeout,
            require_output_dir=args.require_output_dir,
            forward_api_key=args.forward_api_key,
            log_level=args.log_level,
        )
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(config.log_level)

    try:
        asyncio.run(serve_stdio(config))
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    except Exception as e:
        logger.error("Server failed: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
