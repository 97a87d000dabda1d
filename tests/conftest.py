"""
Shared fixtures for the memory bridge tests.
"""

import pytest
from typing import Any, Dict, List, Sequence

from vectorforge.core.config import BridgeConfig
from vectorforge.core.errors import EngineExecutionError
from vectorforge.engine.protocol import IVectorEngine


class FakeEngine(IVectorEngine):
    """Engine double that records invocations and replays canned responses."""

    def __init__(self, responses: Dict[str, Any] = None, error: Exception = None):
        self.responses = responses or {}
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def invoke(self, command: str, args: Sequence[str]) -> Dict[str, Any]:
        self.calls.append({"command": command, "args": list(args)})
        if self.error is not None:
            raise self.error
        return self.responses[command]


@pytest.fixture
def bridge_config(tmp_path):
    return BridgeConfig(engine_bin=str(tmp_path / "vectorforge"), engine_root=str(tmp_path))


@pytest.fixture
def fake_engine():
    return FakeEngine(responses={
        "add": {"success": True, "id": 7, "message": "Vector stored successfully"},
        "search": {"success": True, "results": [
            {"id": 1, "content": "a", "score": 0.873},
            {"id": 2, "content": "b", "score": 0.5},
        ]},
    })


@pytest.fixture
def failing_engine():
    return FakeEngine(error=EngineExecutionError(
        "Failed to execute VectorForge: exit status 1: Error: Embedding must have 1536 dimensions, got 3",
        returncode=1,
    ))
