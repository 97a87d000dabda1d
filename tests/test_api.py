"""
HTTP surface for the memory tools.
"""

import pytest
from fastapi.testclient import TestClient

from vectorforge.api.main import app, get_bridge
from vectorforge.bridge.tools import ToolBridge
from vectorforge.core.config import BridgeConfig
from vectorforge.engine.memory import InMemoryEngine


@pytest.fixture
def client(tmp_path):
    config = BridgeConfig(engine_bin=str(tmp_path / "vectorforge"), engine_root=str(tmp_path), engine_kind="memory")
    bridge = ToolBridge(config, engine=InMemoryEngine())
    app.dependency_overrides[get_bridge] = lambda: bridge
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["engine"] == "memory"
    assert data["config_issues"] == []


def test_list_tools(client):
    response = client.get("/tools")

    assert response.status_code == 200
    tools = {tool["name"]: tool for tool in response.json()["tools"]}
    assert set(tools) == {"store_memory", "recall_memory"}
    assert tools["store_memory"]["inputSchema"]["required"] == ["text"]
    assert tools["recall_memory"]["inputSchema"]["properties"]["query"]["type"] == "string"


def test_store_and_recall(client):
    stored = client.post("/tools/call", json={"name": "store_memory", "arguments": {"text": "buy oat milk"}})
    assert stored.status_code == 200
    assert "isError" not in stored.json()
    assert "ID: 1" in stored.json()["content"][0]["text"]

    recalled = client.post("/tools/call", json={"name": "recall_memory", "arguments": {"query": "buy oat milk"}})
    text = recalled.json()["content"][0]["text"]
    assert text.startswith("Found 1 similar memories:")
    assert '"buy oat milk"' in text


def test_recall_on_empty_store(client):
    response = client.post("/tools/call", json={"name": "recall_memory", "arguments": {"query": "anything"}})

    assert response.json() == {"content": [{"type": "text", "text": "No memories found in the database."}]}


def test_errors_are_flagged_not_http_errors(client):
    response = client.post("/tools/call", json={"name": "drop_tables", "arguments": {}})

    assert response.status_code == 200
    assert response.json()["isError"] is True
    assert "drop_tables" in response.json()["content"][0]["text"]


def test_invalid_argument_type(client):
    response = client.post("/tools/call", json={"name": "store_memory", "arguments": {"text": 5}})

    assert response.status_code == 200
    assert response.json()["isError"] is True
