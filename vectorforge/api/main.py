"""
HTTP surface for the memory tools.
Mirrors the MCP tools for local debugging; tool failures are reported in the
response body with isError, never as HTTP errors.
"""

from functools import lru_cache

from fastapi import FastAPI, Depends

from .schemas import (
    ToolCallRequest,
    ToolInfo,
    ToolListResponse,
    HealthResponse,
)
from ..bridge.catalog import list_tools
from ..bridge.tools import ToolBridge
from ..core.config import VERSION, debug_enabled, load_bridge_config, validate_config

app = FastAPI(
    title="VectorForge Memory API",
    version=VERSION,
    description="Store and recall text memories through the VectorForge engine",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)


@lru_cache(maxsize=1)
def get_bridge() -> ToolBridge:
    """Bridge built once from the environment."""
    return ToolBridge(load_bridge_config())


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint(bridge: ToolBridge = Depends(get_bridge)):
    """Check bridge configuration."""
    issues = validate_config(bridge.config)
    return HealthResponse(
        status="healthy" if not issues else "degraded",
        version=VERSION,
        engine=bridge.engine.describe(),
        config_issues=issues,
    )


@app.get("/tools", response_model=ToolListResponse)
def list_tools_endpoint():
    return ToolListResponse(tools=[ToolInfo(**tool) for tool in list_tools()])


@app.post("/tools/call")
def call_tool_endpoint(request: ToolCallRequest, bridge: ToolBridge = Depends(get_bridge)):
    response = bridge.call_tool(request.name, request.arguments)
    return response.to_payload()
