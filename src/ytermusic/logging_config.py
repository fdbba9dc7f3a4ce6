"""Logging configuration for ytermusic."""

import sys
from pathlib import Path

from loguru import logger


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure loguru with appropriate level, optionally mirroring to a file."""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
    if log_file is not None:
        log_file.write_text("# YTerMusic log file\n\n", encoding="utf-8")
        logger.add(log_file, level="DEBUG", format="{time:HH:mm:ss.SSS} {level} {message}")
