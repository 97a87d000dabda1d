"""
Tool bridge: validates tool calls, embeds text and dispatches to the engine.
"""

from .catalog import TOOL_CATALOG, list_tools, get_tool
from .tools import ToolBridge, format_store_confirmation, format_recall_results, format_similarity

__all__ = [
    'TOOL_CATALOG',
    'list_tools',
    'get_tool',
    'ToolBridge',
    'format_store_confirmation',
    'format_recall_results',
    'format_similarity',
]
