"""
Logging Utilities
=================

Centralized logging configuration for the perceptron ensemble toolkit.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where those records go and how they look.

Features:
---------
- Consistent log formatting across all modules
- File and console logging
- Colored console output (optional)
- Timing decorator for build/evaluation steps

Level conventions:
-----------------
- DEBUG: Per-epoch and per-member detail
- INFO: Fit start/end, model selection outcome, benchmark progress
- WARNING: Recoverable adjustments (e.g. fold count reduced)

Example Usage:
    ```python
    from perceptron_ensemble.utils.logging import get_logger, setup_logging

    setup_logging(level='INFO', log_file='logs/benchmark.log')

    logger = get_logger(__name__)
    logger.info("Benchmark started")
    ```
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union
from functools import wraps
import time


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'

COLORS = {
    'DEBUG': '\033[36m',      # Cyan
    'INFO': '\033[32m',       # Green
    'WARNING': '\033[33m',    # Yellow
    'ERROR': '\033[31m',      # Red
    'CRITICAL': '\033[35m',   # Magenta
    'RESET': '\033[0m'
}


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


# =============================================================================
# CUSTOM FORMATTER WITH COLORS
# =============================================================================

class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    def __init__(self, fmt: str = DEFAULT_FORMAT, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname

        if self.use_colors:
            color = COLORS.get(record.levelname, '')
            record.levelname = f"{color}{record.levelname}{COLORS['RESET']}"

        result = super().format(record)
        record.levelname = original_levelname
        return result


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    level: Union[str, int] = 'INFO',
    log_file: Optional[str] = None,
    console: bool = True,
    use_colors: bool = True,
    format_string: str = DEFAULT_FORMAT,
    detailed: bool = False
) -> None:
    """
    Configure the root logger.

    Should be called once at application startup. Existing root handlers
    are replaced.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        log_file: Optional file path for logging
        console: Whether to log to console
        use_colors: Whether to use colored console output
        format_string: Log format string
        detailed: If True, use detailed format with file/line info

    Example:
        >>> setup_logging(level='DEBUG', log_file='logs/run.log')
    """
    if detailed:
        format_string = DETAILED_FORMAT

    level = _to_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(format_string, use_colors))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(file_handler)

    logging.info(f"Logging configured: level={logging.getLevelName(level)}")


def setup_logging_from_config(section: Dict[str, Any]) -> None:
    """
    Configure logging from the ``logging`` section of the ConfigManager.

    Example:
        >>> setup_logging_from_config(get_config().get_section('logging'))
    """
    setup_logging(
        level=section.get('level', 'INFO'),
        log_file=section.get('file'),
        format_string=section.get('format', DEFAULT_FORMAT),
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module (typically ``__name__``)."""
    return logging.getLogger(name)


def set_level(level: Union[str, int], logger_name: Optional[str] = None) -> None:
    """
    Set log level for a specific logger or the root logger.

    Args:
        level: Log level
        logger_name: If None, sets root logger level
    """
    logging.getLogger(logger_name).setLevel(_to_level(level))


# =============================================================================
# PERFORMANCE LOGGING
# =============================================================================

def log_execution_time(logger: Optional[logging.Logger] = None,
                       level: int = logging.DEBUG):
    """
    Decorator to log function execution time.

    Args:
        logger: Logger to use (defaults to the function's module logger)
        level: Log level for timing messages

    Example:
        >>> @log_execution_time()
        ... def run_benchmark():
        ...     ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)

            start_time = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed = time.perf_counter() - start_time

            log.log(level, f"{func.__name__} executed in {elapsed:.3f}s")
            return result

        return wrapper
    return decorator


# =============================================================================
# CONTEXT MANAGER FOR TEMPORARY LOG LEVEL
# =============================================================================

class LogLevel:
    """
    Context manager for temporarily changing log level.

    Example:
        >>> with LogLevel('DEBUG', 'perceptron_ensemble.training'):
        ...     trainer.train(X, y)
    """

    def __init__(self, level: Union[str, int], logger_name: Optional[str] = None):
        self.level = _to_level(level)
        self.logger_name = logger_name
        self.original_level = None

    def __enter__(self):
        logger = logging.getLogger(self.logger_name)
        self.original_level = logger.level
        logger.setLevel(self.level)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.getLogger(self.logger_name).setLevel(self.original_level)
        return False
