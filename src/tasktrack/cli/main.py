# src/tasktrack/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the app (storage + plugin runtime), runs one command,
then shuts plugins down. Exit codes: 0 on success, 1 on any failure.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Sequence

from ..config import Settings, get_settings
from ..errors import TaskTrackError
from ..logging_setup import setup_logging
from .args import parse_args
from .bootstrap import create_app
from .commands import parse_command

logger = logging.getLogger(__name__)


async def run(argv: Sequence[str], *, settings: Settings | None = None) -> None:
    """Load plugins, parse + execute one command, then shut plugins down."""
    app = await create_app(settings=settings)
    try:
        parsed = parse_args(argv)
        cmd = parse_command(parsed, app.runtime)
        await app.task_manager.execute(cmd, parsed)
    finally:
        await app.runtime.shutdown_all()


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(console_level=console_level, log_file=settings.log_file)

    if argv is None:
        argv = sys.argv[1:]

    try:
        asyncio.run(run(argv, settings=settings))
    except TaskTrackError as e:
        logger.debug("Command failed.", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        # I/O errors, hook/plugin failures: not ours to classify, report and fail.
        logger.debug("Unhandled failure.", exc_info=True)
        print(f"Error: {e or type(e).__name__}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
