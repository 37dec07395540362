import os
import sys
import logging
from loguru import logger

class InterceptHandler(logging.Handler):
    """Bridge stdlib logging -> Loguru, preserving level and caller site."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def console_only(record) -> bool:
    """Only allow messages explicitly marked for console output."""
    return record["extra"].get("console", False)


def setup_logging(log_dir: str = "logs", console_level: str = "INFO"):
    """
    Configure Loguru with dual-sink logging:
    1. File sink: captures every tick record and transition at DEBUG level
    2. Console sink: shows only startup lines and service transitions

    Returns:
        tuple: (debug_logger, console_logger)
            - debug_logger: per-tick probe records (goes to file only)
            - console_logger: user-facing messages (goes to both file + console)

    Usage:
        logger, console = setup_logging()
        logger.debug("Reply succeeded, 0.012, 100.00")  # File only
        console.warning("Service degraded, 0.000, 25.00")  # File + Console
    """
    os.makedirs(log_dir, exist_ok=True)

    # Remove default handler
    logger.remove()

    # Intercept stdlib logging from third-party libraries
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.DEBUG, force=True)

    # 1) FILE SINK: Everything at DEBUG level
    logger.add(
        os.path.join(log_dir, "pingmonitor.log"),
        rotation="10 MB",
        retention="7 days",
        level="DEBUG",
        enqueue=True,
        backtrace=True,
        diagnose=False,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"
    )

    # 2) CONSOLE SINK: Only messages tagged with console=True
    logger.add(
        sys.stdout,
        level=console_level,
        filter=console_only,
        colorize=True,
        format="{time:YYYY-MM-DD HH:mm:ss} <level>{level: <8}</level> <level>{message}</level>"
    )

    debug_logger = logger
    console_logger = logger.bind(console=True)

    return debug_logger, console_logger
