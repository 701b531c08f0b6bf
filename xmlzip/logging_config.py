"""
Logging configuration for xmlzip

Includes IndentLogger for tree-style output of nested split steps.
"""

import logging
import sys
from contextlib import contextmanager

TREE_CHARS = {
    "pipe": "│",
    "branch": "├──",
    "space": " " * 3,
}


class IndentLogger:
    """Logger wrapper that prefixes messages with the current block depth"""

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger
        self._level = 0

    def debug(self, msg: str, *args, **kwargs) -> None:
        """Log debug message with indentation"""
        self._logger.debug(f"{self.indent}{msg}", *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        """Log info message with indentation"""
        self._logger.info(f"{self.indent}{msg}", *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        """Log warning message with indentation"""
        self._logger.warning(f"{self.indent}{msg}", *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        """Log error message with indentation"""
        self._logger.error(f"{self.indent}{msg}", *args, **kwargs)

    @property
    def indent(self) -> str:
        """Get current indentation string"""
        if self._level == 0:
            return ""
        pipes = f"{TREE_CHARS['pipe']}{TREE_CHARS['space']}" * (self._level - 1)
        return f"{pipes}{TREE_CHARS['branch']} "

    @contextmanager
    def indent_block(self, initial_message: str | None = None):
        """
        Context manager for handling indentation blocks

        Args:
            initial_message: Optional message to log at block start
        """
        if initial_message:
            self.debug(initial_message)
        self._level += 1
        try:
            yield
        finally:
            self._level -= 1


def setup_logging(level=logging.INFO, stream=None):
    """
    Configure logging for xmlzip

    Args:
        level: Logging level (default: INFO)
        stream: Text stream for log records (default: sys.stderr)

    Returns:
        IndentLogger: Configured logger with indentation support
    """
    base_logger = logging.getLogger("xmlzip")
    base_logger.setLevel(level)

    # Remove existing handlers
    base_logger.handlers = []

    # stderr keeps stdout free for command output
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)

    # Simple format for tree-style output
    formatter = logging.Formatter("%(levelname)8s %(message)s")
    handler.setFormatter(formatter)

    base_logger.addHandler(handler)

    return IndentLogger(base_logger)


# Default logger with indentation support
logger = IndentLogger(logging.getLogger("xmlzip"))
