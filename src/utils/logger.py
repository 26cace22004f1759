"""
Loguru-based logging for the traffic projection engine.

Engine modules log through the shared `logger`. Data-quality problems the
engine recovers from go through `log_diagnostic`, which binds the diagnostic
code so file sinks and tests can filter on it.

Usage:
    from src.utils.logger import logger, log_diagnostic

    logger.debug("Using tuesday bucket")
    log_diagnostic("forecast_length_mismatch", "arrivalCounts has 3 entries, expected 4")
"""

import os
import sys
from pathlib import Path

from loguru import logger

logger.remove()

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Plain format for files; diagnostic code is appended when bound
FILE_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{name}:{function}:{line} | "
    "{message} | {extra}"
)


def setup_logger(
    log_level: str = "INFO",
    log_dir: str | Path = "logs",
    log_file: str = "projection.log",
    rotation: str = "10 MB",
    retention: str = "7 days",
    enable_stdout: bool = True,
    enable_file: bool = False,
) -> None:
    """
    Replace all handlers with a stdout handler and an optional rotating file.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the log file
        log_file: Log file name
        rotation: Rotation trigger, e.g. "10 MB" or "00:00"
        retention: How long rotated files are kept
        enable_stdout: Log to stdout
        enable_file: Log to log_dir/log_file
    """
    logger.remove()

    if enable_stdout:
        logger.add(sys.stdout, format=LOG_FORMAT, level=log_level, colorize=True)

    if enable_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / log_file,
            format=FILE_LOG_FORMAT,
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            enqueue=True,
        )

    logger.debug(f"Logger initialized with level={log_level}")


def configure_logging(config, level: str | None = None) -> None:
    """
    Apply a LoggingSettings instance.

    Args:
        config: LoggingSettings (level, log_dir, log_file, rotation, retention, enable_file)
        level: Overrides config.level, e.g. from a CLI flag
    """
    setup_logger(
        log_level=level or config.level,
        log_dir=config.log_dir,
        log_file=config.log_file,
        rotation=config.rotation,
        retention=config.retention,
        enable_file=config.enable_file,
    )


def log_diagnostic(code: str, message: str) -> None:
    """Log a recovered data-quality problem at WARNING with its code bound."""
    logger.bind(diagnostic=code).warning(f"[{code}] {message}")


# LOG_LEVEL is honoured before settings are loaded; the CLI reconfigures
setup_logger(log_level=os.getenv("LOG_LEVEL", "INFO"))


__all__ = ["logger", "setup_logger", "configure_logging", "log_diagnostic"]
