"""
Colored console logging for the module generator.

Generation and destruction steps are logged through the standard logging
module; this formatter only decides how the lines look on a terminal.
"""

import logging
import sys
from typing import Optional, TextIO


class ColoredFormatter(logging.Formatter):
    """
    Logging formatter that adds ANSI color codes to log messages.

    Levels get fixed colors. INFO and DEBUG lines are additionally colored by
    the marker prefix written by the log_* helpers below.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    SPECIAL_COLORS = {
        'success': '\033[92m',    # Bright Green
        'progress': '\033[94m',   # Bright Blue
        'highlight': '\033[96m',  # Bright Cyan
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    SUCCESS_PREFIX = "✓ "
    PROGRESS_PREFIX = "→ "
    HIGHLIGHT_PREFIX = "• "
    SECTION_CHAR = "="

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True, stream: Optional[TextIO] = None):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string (uses default if None)
            use_colors: Whether to use colors
            stream: Stream the handler writes to; colors are dropped when it is not a TTY
        """
        if fmt is None:
            fmt = "%(levelname)s: %(message)s"
        super().__init__(fmt)

        stream = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        formatted_message = super().format(record)
        if not self.use_colors:
            return formatted_message

        color = self._color_for(record)
        if not color:
            return formatted_message
        return f"{color}{formatted_message}{self.RESET}"

    def _color_for(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return self.COLORS.get(record.levelname, '')

        message = record.getMessage()
        if message.startswith(self.SUCCESS_PREFIX):
            return self.SPECIAL_COLORS['success'] + self.BOLD
        if message.startswith(self.PROGRESS_PREFIX):
            return self.SPECIAL_COLORS['progress']
        if message.startswith(self.HIGHLIGHT_PREFIX):
            return self.SPECIAL_COLORS['highlight']
        if self._is_section_message(message):
            return self.BOLD + self.SPECIAL_COLORS['highlight']
        if record.levelno == logging.DEBUG:
            return self.COLORS['DEBUG']
        # plain INFO stays uncolored
        return ''

    def _is_section_message(self, message: str) -> bool:
        """Check if message is a section separator."""
        stripped = message.strip()
        return len(stripped) > 20 and set(stripped) == {self.SECTION_CHAR}


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Set up colored logging for the application.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    formatter = ColoredFormatter(use_colors=use_colors, stream=sys.stderr)

    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplicate lines on repeated calls
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


# Convenience functions for special message types
def log_success(logger: logging.Logger, message: str) -> None:
    """Log a success message with special formatting."""
    logger.info(f"{ColoredFormatter.SUCCESS_PREFIX}{message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    """Log a progress message with special formatting."""
    logger.info(f"{ColoredFormatter.PROGRESS_PREFIX}{message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    """Log a highlighted message with special formatting."""
    logger.info(f"{ColoredFormatter.HIGHLIGHT_PREFIX}{message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a section header with special formatting."""
    separator = ColoredFormatter.SECTION_CHAR * 60
    logger.info(separator)
    logger.info(f"  {section_name.upper()}")
    logger.info(separator)
