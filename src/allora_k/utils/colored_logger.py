"""
Colored logging configuration for terminal output.
Each plugin component logs in its own color so the request flow
(registry -> model -> inference) is easy to follow.
"""

import logging
import sys
from typing import Optional


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_BLACK = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_BLUE = '\033[94m'


# Plugin-specific colors
PLUGIN_COLORS = {
    'upshot': Colors.BRIGHT_BLUE,
    'allora': Colors.CYAN,
    'action': Colors.YELLOW,
    'llm': Colors.GREEN,
    'default': Colors.WHITE
}


class ColoredFormatter(logging.Formatter):
    """Formatter that colors records by plugin type, or by level otherwise."""

    LEVEL_COLORS = {
        'DEBUG': Colors.BRIGHT_BLACK,
        'INFO': Colors.WHITE,
        'WARNING': Colors.YELLOW,
        'ERROR': Colors.RED,
        'CRITICAL': Colors.BRIGHT_RED + Colors.BOLD,
    }

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        if fmt is None:
            fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        if datefmt is None:
            datefmt = '%Y-%m-%d %H:%M:%S'
        super().__init__(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        # Errors keep their level color even when tagged with a plugin
        if record.levelno < logging.WARNING and hasattr(record, 'plugin_type'):
            color = PLUGIN_COLORS.get(record.plugin_type, PLUGIN_COLORS['default'])
        else:
            color = self.LEVEL_COLORS.get(record.levelname, Colors.WHITE)

        return f"{color}{formatted}{Colors.RESET}"


class PluginLogger:
    """Logger wrapper that tags records with a plugin type."""

    def __init__(self, logger: logging.Logger, plugin_type: str):
        """
        Args:
            logger: Base logger
            plugin_type: Type of plugin (upshot, allora, action, llm)
        """
        self.logger = logger
        self.plugin_type = plugin_type

    def _log(self, level: int, msg: str, *args, **kwargs):
        extra = kwargs.get('extra', {})
        extra['plugin_type'] = self.plugin_type
        kwargs['extra'] = extra
        self.logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)


def setup_colored_logging(level: int = logging.INFO, fmt: Optional[str] = None, colored: bool = True) -> None:
    """
    Setup console logging for the application.

    Args:
        level: Logging level (default: INFO)
        fmt: Optional log format string
        colored: Use ANSI colors (disable when output is not a terminal)
    """
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if colored:
        console_handler.setFormatter(ColoredFormatter(fmt))
    else:
        console_handler.setFormatter(logging.Formatter(fmt or '%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)


def get_plugin_logger(name: str, plugin_type: str) -> PluginLogger:
    """
    Get a plugin logger with colored output.

    Args:
        name: Logger name (usually __name__)
        plugin_type: Type of plugin (upshot, allora, action, llm)

    Returns:
        PluginLogger instance
    """
    logger = logging.getLogger(name)
    return PluginLogger(logger, plugin_type)
