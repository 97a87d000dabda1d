"""
VectorForge MCP Server

Serves the memory tools over MCP stdio:
- store_memory: embed a text and store it in the engine
- recall_memory: return the most similar stored memories
"""

import sys
from typing import Any, Dict

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext

from ..bridge.catalog import get_tool
from ..bridge.tools import ToolBridge
from ..core.errors import BridgeError
from ..core.config import SERVER_NAME, load_bridge_config, validate_config
from ..util.logging import logger


class BridgeCallMiddleware(Middleware):
    """Answers calls the bridge rejects before FastMCP looks them up.

    Unknown names and bad arguments otherwise never reach the bridge and
    come back without the "Error: <message>" text.
    """

    def __init__(self, bridge: ToolBridge):
        self.bridge = bridge

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        arguments = context.message.arguments
        try:
            self.bridge.check_call(name, arguments)
        except BridgeError:
            raise ToolError(self.bridge.call_tool(name, arguments).first_text()) from None
        return await call_next(context)


class MemoryTools:
    """Memory tools for the MCP server, backed by a ToolBridge."""

    def __init__(self, bridge: ToolBridge):
        self.bridge = bridge

    def run_tool(self, name: str, arguments: Dict[str, Any]) -> str:
        """Call the bridge and raise ToolError so the reply carries isError."""
        response = self.bridge.call_tool(name, arguments)
        if response.is_error:
            raise ToolError(response.first_text())
        return response.first_text()

    def register_tools(self, mcp: FastMCP):
        """Register store_memory and recall_memory with the MCP server"""
        mcp.add_middleware(BridgeCallMiddleware(self.bridge))

        @mcp.tool(description=get_tool("store_memory")["description"])
        def store_memory(text: str) -> str:
            return self.run_tool("store_memory", {"text": text})

        @mcp.tool(description=get_tool("recall_memory")["description"])
        def recall_memory(query: str) -> str:
            return self.run_tool("recall_memory", {"query": query})

    def get_tool_info(self) -> Dict[str, Any]:
        return {
            "tools": ["store_memory", "recall_memory"],
            "tool_count": 2,
            "engine": self.bridge.engine.describe(),
        }


class MCPServerManager:
    """Owns the FastMCP instance and its tool registration."""

    def __init__(self, bridge: ToolBridge, server_name: str = SERVER_NAME):
        self.server_name = server_name
        self.mcp = FastMCP(server_name)
        self.memory_tools = MemoryTools(bridge)
        self._tools_registered = False

    def register_all_tools(self):
        if self._tools_registered:
            logger.warning("Tools already registered")
            return
        self.memory_tools.register_tools(self.mcp)
        self._tools_registered = True
        logger.info("Memory tools registered")

    def get_server(self) -> FastMCP:
        if not self._tools_registered:
            self.register_all_tools()
        return self.mcp

    def get_server_info(self) -> Dict[str, Any]:
        return {
            "server_name": self.server_name,
            "tools_registered": self._tools_registered,
            "memory_tools": self.memory_tools.get_tool_info(),
        }

    def run_server(self):
        self.get_server().run(transport="stdio")


def create_mcp_server(bridge: ToolBridge = None) -> FastMCP:
    """Create a FastMCP server with the memory tools registered."""
    return MCPServerManager(bridge or ToolBridge()).get_server()


def main():
    """Console entry point; exits non-zero if the transport cannot start."""
    try:
        config = load_bridge_config()
        for issue in validate_config(config):
            logger.warning(f"Config issue: {issue}")

        manager = MCPServerManager(ToolBridge(config))
        manager.register_all_tools()
        logger.info(f"{SERVER_NAME} MCP Server running on stdio (engine={manager.memory_tools.bridge.engine.describe()})")
        manager.run_server()

    except KeyboardInterrupt:
        logger.info("MCP server shutdown requested")
    except Exception as e:
        logger.error(f"Fatal error in main(): {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
