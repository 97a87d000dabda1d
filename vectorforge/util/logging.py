"""
Structured logging for bridge operations.
Output goes to stderr; stdout is reserved for the MCP stdio transport.
"""

import logging
import sys
from typing import Any, Dict, Optional


def _truncate(value: Any, limit: int = 50) -> Any:
    if isinstance(value, str) and len(value) > limit:
        return value[:limit] + "..."
    return value


class StructuredLogger:
    """Structured logger for engine invocations and tool calls."""

    def __init__(self, name: str = "vectorforge", level: Optional[str] = None):
        self.logger = logging.getLogger(name)

        if level is None:
            from vectorforge.core.config import LOG_LEVEL
            level = LOG_LEVEL
        self.logger.setLevel(getattr(logging, level, logging.INFO))

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter(
                '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str = "success", details: Dict[str, Any] = None):
        """Log a structured operation."""
        message_parts = [f"operation={operation}", f"status={status}"]

        if details:
            message_parts.append(" ".join(f"{k}={_truncate(v)}" for k, v in details.items()))

        message = " | ".join(message_parts)

        if status == "success":
            self.logger.info(message)
        elif status == "error":
            self.logger.error(message)
        else:
            self.logger.warning(message)

    def log_engine_invocation(self, command: str, status: str = "success", details: Dict[str, Any] = None):
        """Log an engine subprocess call."""
        self.log_operation(f"engine.{command}", status, details)

    def log_tool_call(self, tool: str, status: str = "success", duration_ms: Optional[float] = None,
                      details: Dict[str, Any] = None):
        """Log a tool call with timing."""
        log_details = {}
        if duration_ms is not None:
            log_details["duration_ms"] = f"{duration_ms:.2f}"
        if details:
            log_details.update(details)

        self.log_operation(f"tool.{tool}", status, log_details)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
