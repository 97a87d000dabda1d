"""
Command protocol for the external VectorForge engine.

    <engine-binary> add <text> <embeddingJsonArray>  -> {"id": <int>}
    <engine-binary> search <embeddingJsonArray>      -> {"results": [{"id", "content", "score"}, ...]}

Exit code 0 and JSON on stdout are required for success. Anything on stderr
is logged as a warning but is not a failure by itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import json
import subprocess
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from ..api.schemas import EngineAddResponse, EngineSearchResponse
from ..core.errors import EngineExecutionError, EngineProtocolError, EngineTimeoutError
from ..util.logging import logger

COMMANDS = ("add", "search")


@dataclass(frozen=True)
class EngineInvocation:
    """A single engine command; built per call and never persisted."""

    command: str
    args: Tuple[str, ...]

    def __post_init__(self):
        if self.command not in COMMANDS:
            raise EngineExecutionError(f"Unsupported engine command: {self.command}")

    def argv(self, binary: str) -> List[str]:
        return [binary, self.command, *self.args]


class IVectorEngine(ABC):
    """A component that accepts a command and arguments and returns parsed JSON."""

    @abstractmethod
    def invoke(self, command: str, args: Sequence[str]) -> Dict[str, Any]:
        """Run one engine command.

        Raises:
            EngineExecutionError: engine could not run or exited non-zero
            EngineProtocolError: engine output is not a JSON object
        """
        pass

    def describe(self) -> str:
        return self.__class__.__name__


def parse_engine_stdout(stdout: str) -> Dict[str, Any]:
    """Decode engine stdout into a JSON object."""
    try:
        body = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise EngineProtocolError(f"Invalid JSON from VectorForge: {e}") from e

    if not isinstance(body, dict):
        raise EngineProtocolError(f"Expected a JSON object from VectorForge, got {type(body).__name__}")

    if body.get("success") is False:
        raise EngineProtocolError(f"VectorForge reported failure: {body.get('error', 'unknown error')}")

    return body


def _schema_error(command: str, error: PydanticValidationError) -> EngineProtocolError:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in error.errors()
    )
    return EngineProtocolError(f"Unexpected '{command}' response from VectorForge: {problems}")


def parse_add_response(body: Dict[str, Any]) -> EngineAddResponse:
    try:
        return EngineAddResponse.model_validate(body)
    except PydanticValidationError as e:
        raise _schema_error("add", e) from e


def parse_search_response(body: Dict[str, Any]) -> EngineSearchResponse:
    try:
        return EngineSearchResponse.model_validate(body)
    except PydanticValidationError as e:
        raise _schema_error("search", e) from e


class SubprocessEngine(IVectorEngine):
    """Runs the engine binary as a child process, one call at a time.

    The call blocks until the process exits. With ``timeout`` set, the child
    is killed after that many seconds and EngineTimeoutError is raised.
    """

    def __init__(self, binary: str, cwd: str, timeout: Optional[float] = None):
        self.binary = binary
        self.cwd = cwd
        self.timeout = timeout

    def describe(self) -> str:
        return f"subprocess:{self.binary}"

    def invoke(self, command: str, args: Sequence[str]) -> Dict[str, Any]:
        invocation = EngineInvocation(command, tuple(args))
        start_time = time.time()

        try:
            completed = subprocess.run(
                invocation.argv(self.binary),
                cwd=self.cwd,
                capture_output=True,
                # Engine truncates content by bytes and may split a character
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.log_engine_invocation(command, "error", {"error": "timeout", "timeout_sec": self.timeout})
            stderr = e.stderr.decode(errors="replace") if isinstance(e.stderr, bytes) else (e.stderr or "")
            raise EngineTimeoutError(self.timeout, stderr=stderr) from e
        except OSError as e:
            logger.log_engine_invocation(command, "error", {"error": str(e)})
            raise EngineExecutionError(f"Failed to execute VectorForge: {e}") from e

        duration_ms = (time.time() - start_time) * 1000

        if completed.stderr:
            logger.warning(f"VectorForge stderr: {completed.stderr.strip()}")

        if completed.returncode != 0:
            logger.log_engine_invocation(command, "error", {
                "returncode": completed.returncode,
                "duration_ms": f"{duration_ms:.2f}",
            })
            detail = completed.stderr.strip() or completed.stdout.strip() or "no output"
            raise EngineExecutionError(
                f"Failed to execute VectorForge: exit status {completed.returncode}: {detail}",
                returncode=completed.returncode,
                stderr=completed.stderr,
            )

        body = parse_engine_stdout(completed.stdout)
        logger.log_engine_invocation(command, "success", {"duration_ms": f"{duration_ms:.2f}"})
        return body
