"""
Static declaration of the tools the bridge serves.
"""

import copy
from typing import Any, Dict, List, Optional

TOOL_CATALOG: List[Dict[str, Any]] = [
    {
        "name": "store_memory",
        "description": (
            "Store a text memory in the local vector database. "
            "The text will be embedded and stored for later retrieval."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "description": "The text content to store as a memory",
                },
            },
            "required": ["text"],
        },
    },
    {
        "name": "recall_memory",
        "description": (
            "Search for similar memories in the vector database based on a query text. "
            "Returns the top 3 most similar memories."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The query text to search for similar memories",
                },
            },
            "required": ["query"],
        },
    },
]


def list_tools() -> List[Dict[str, Any]]:
    """Return a copy of the catalog safe for callers to mutate."""
    return copy.deepcopy(TOOL_CATALOG)


def get_tool(name: str) -> Optional[Dict[str, Any]]:
    for tool in TOOL_CATALOG:
        if tool["name"] == name:
            return copy.deepcopy(tool)
    return None
