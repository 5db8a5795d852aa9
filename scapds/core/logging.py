"""
Scapds Logging System
Logging with support for:
- A TRACE level below DEBUG for reference resolution internals
- Colored output for terminal
- Keyword context appended to messages
- Phase helpers for resolution, file operations and whole-operation milestones
"""
from __future__ import annotations
import logging
import sys
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from scapds.core.errors import ScapdsError
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class LogLevel(IntEnum):
    """Log levels for the scapds logging system."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class ColorCodes:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    LEVEL_COLORS = {
        TRACE: DIM,
        logging.DEBUG: BLUE,
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: RED + BOLD,
    }


class ColoredFormatter(logging.Formatter):
    """Formatter that adds color to log output based on level."""

    def __init__(self, fmt: str = None, use_color: bool = True):
        super().__init__(fmt or "%(levelname)s: %(message)s")
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if self.use_color:
            color = ColorCodes.LEVEL_COLORS.get(record.levelno, ColorCodes.RESET)
            return f"{color}{message}{ColorCodes.RESET}"
        return message


class ScapdsLogger:
    """
    Logger for scapds with phase-specific helpers.
    Usage:
        logger = ScapdsLogger("scapds.decompose")
        logger.resolve("Looking up component", component_id="scap_org_comp_x")
        logger.file("Writing", "out/x-xccdf.xml")
        logger.build("Decompose complete", files_written=3)
    """

    def __init__(self, name: str = "scapds", level: int = None):
        self.logger = logging.getLogger(name)
        self._setup_handler()
        if level is not None:
            self.set_level(level)

    def _setup_handler(self):
        """Setup console handler on the package logger; children propagate to it."""
        root = logging.getLogger("scapds")
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(ColoredFormatter(
                fmt="[%(name)s] %(levelname)s: %(message)s"
            ))
            root.addHandler(handler)
            root.setLevel(logging.INFO)

    def set_level(self, level: int | str):
        """Set the logging level."""
        if isinstance(level, str):
            level = TRACE if level.lower() == "trace" else getattr(logging, level.upper(), logging.INFO)
        self.logger.setLevel(level)

    def _format_context(self, context: dict[str, Any]) -> str:
        """Format context dictionary for log message."""
        if not context:
            return ""
        parts = [f"{k}={v!r}" for k, v in context.items()]
        return " | " + ", ".join(parts)

    def trace(self, msg: str, **context):
        """Extremely verbose logging for reference resolution internals."""
        self.logger.log(TRACE, msg + self._format_context(context))

    def debug(self, msg: str, **context):
        self.logger.debug(msg + self._format_context(context))

    def info(self, msg: str, **context):
        self.logger.info(msg + self._format_context(context))

    def warning(self, msg: str, **context):
        self.logger.warning(msg + self._format_context(context))

    def error(self, msg: str, **context):
        self.logger.error(msg + self._format_context(context))

    def critical(self, msg: str, **context):
        self.logger.critical(msg + self._format_context(context))

    def resolve(self, action: str, **context):
        """Log reference resolution activity."""
        self.trace(f"[RESOLVE] {action}", **context)

    def file(self, action: str, path: str, **context):
        """Log file operations."""
        self.debug(f"[FILE] {action}: {path}", **context)

    def build(self, action: str, **context):
        """Log operation milestones."""
        self.info(f"[BUILD] {action}", **context)

    def report(self, error: "ScapdsError"):
        """Log a collected or raised error at the level its severity calls for."""
        if error.fatal:
            self.error(str(error), kind=type(error).__name__)
        else:
            self.warning(str(error), kind=type(error).__name__)


_global_logger: Optional[ScapdsLogger] = None


def get_logger(name: str = "scapds") -> ScapdsLogger:
    """Get or create a logger instance."""
    global _global_logger
    if name == "scapds" and _global_logger is not None:
        return _global_logger
    logger = ScapdsLogger(name)
    if name == "scapds":
        _global_logger = logger
    return logger


def set_log_level(level: int | str):
    """Set the global log level."""
    get_logger().set_level(level)


log = get_logger()
