"""
Colored console logging for the stemcell builder CLI.

Makes warnings from the eviction sweep and remote errors easy to spot in
build-agent output.
"""

import logging
import os
import sys
from typing import Optional


class Colors:
    """ANSI color codes for terminal output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    CYAN = '\033[36m'


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level name and storage component names.

    Color scheme:
    - DEBUG: Cyan
    - INFO: Green
    - WARNING: Yellow
    - ERROR: Red
    - CRITICAL: Bold Red
    - Storage logs (logger name containing 'storage'): Blue
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    STORAGE_KEYWORDS = ['storage', 'boto', 's3transfer']

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and self._supports_color()

    @staticmethod
    def _supports_color() -> bool:
        """
        Check if the terminal supports color output.

        NO_COLOR disables colors, FORCE_COLOR enables them even when
        stdout is not a TTY.
        """
        if os.environ.get('NO_COLOR'):
            return False
        if os.environ.get('FORCE_COLOR'):
            return True
        if not hasattr(sys.stdout, 'isatty'):
            return False
        return sys.stdout.isatty()

    def _is_storage_log(self, record: logging.LogRecord) -> bool:
        logger_name = record.name.lower()
        return any(keyword in logger_name for keyword in self.STORAGE_KEYWORDS)

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        levelname_orig = record.levelname
        name_orig = record.name

        level_color = self.LEVEL_COLORS.get(record.levelno, '')
        record.levelname = f"{level_color}{record.levelname}{Colors.RESET}"

        if self._is_storage_log(record):
            record.name = f"{Colors.BLUE}{record.name}{Colors.RESET}"

        result = super().format(record)

        record.levelname = levelname_orig
        record.name = name_orig

        return result


def setup_colored_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    use_colors: bool = True
) -> None:
    """
    Configure colored logging on the root logger.

    Existing root handlers are replaced. botocore and s3transfer are held
    at WARNING unless DEBUG is requested, since they are chatty at INFO.

    Args:
        level: The logging level (default: INFO)
        format_string: Custom format string
        date_format: Custom date format string
        use_colors: Whether to use colors (auto-detects TTY support)
    """
    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    if date_format is None:
        date_format = '%Y-%m-%d %H:%M:%S'

    formatter = ColoredFormatter(
        fmt=format_string,
        datefmt=date_format,
        use_colors=use_colors
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in ('botocore', 'boto3', 's3transfer', 'urllib3'):
        logging.getLogger(name).setLevel(library_level)
