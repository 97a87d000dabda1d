"""
Error taxonomy for the tool bridge.
Every error is caught at the bridge and rendered as "Error: <message>".
"""

from typing import Optional


class BridgeError(Exception):
    """Base class for failures inside a single tool call."""


class ValidationError(BridgeError):
    """Tool arguments missing or of the wrong type."""


class UnknownToolError(BridgeError):
    """Tool name is not in the catalog."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class EngineProtocolError(BridgeError):
    """Engine produced unparsable or schema-violating output."""


class EngineExecutionError(BridgeError):
    """Engine could not be launched or exited non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class EngineTimeoutError(EngineExecutionError):
    """Engine did not finish within the configured bounded wait."""

    def __init__(self, timeout: float, stderr: str = ""):
        super().__init__(f"Failed to execute VectorForge: timed out after {timeout:g}s", stderr=stderr)
        self.timeout = timeout
