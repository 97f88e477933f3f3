"""
Logging configuration for the market dashboard service.

Console output stays at INFO while an optional file handler captures
everything, and chatty server/client libraries are held at WARNING.
"""
import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional


NOISY_LOGGERS = (
    "uvicorn.access",
    "httpx",
    "httpcore",
    "asyncio",
    "multipart",
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    enable_file_logging: bool = False,
    enable_console_logging: bool = True,
) -> None:
    """
    Configure root logging for the service.

    Args:
        log_level: Level for the ``market_dashboard`` loggers
            (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None and enable_file_logging=True,
                 creates logs/dashboard_YYYYMMDD.log
        enable_file_logging: Whether to log to file
        enable_console_logging: Whether to log to console

    Example:
        >>> from market_dashboard.logging_config import configure_logging
        >>> configure_logging(log_level="DEBUG")
    """
    handlers = []

    if enable_console_logging:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        handlers.append(console_handler)

    if enable_file_logging:
        if log_file is None:
            log_dir = Path("logs")
            log_dir.mkdir(exist_ok=True)
            log_file = log_dir / f"dashboard_{datetime.now().strftime('%Y%m%d')}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        handlers.append(file_handler)

    # Root at DEBUG when a file handler exists; handlers decide what is emitted
    level = getattr(logging, log_level.upper(), logging.INFO)
    root_level = logging.DEBUG if enable_file_logging else level
    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger('market_dashboard').setLevel(logging.DEBUG if enable_file_logging else level)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured (level={log_level.upper()})")
    if enable_file_logging and log_file:
        logger.info(f"Log file: {log_file}")
