"""
Tool bridge between tool calls and the VectorForge engine.

Each call runs Received -> Validated -> Embedded -> Dispatched -> Formatted
and ends Completed or Failed. No state is carried between calls. Failures at
any stage come back as an error-flagged ToolResponse, never as an exception.
"""

import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..api.schemas import (
    StoreMemoryArgs,
    RecallMemoryArgs,
    SearchResult,
    ToolResponse,
)
from ..core.config import BridgeConfig, load_bridge_config, get_engine
from ..core.errors import ValidationError, UnknownToolError
from ..engine.protocol import IVectorEngine, parse_add_response, parse_search_response
from ..vector.embeddings import IEmbeddingProvider, LinearCongruentialEmbedding, embedding_to_json
from ..util.logging import logger

NO_MEMORIES_TEXT = "No memories found in the database."


def format_similarity(score: float) -> str:
    """Render a 0-1 score as a percentage with one decimal place."""
    percent = Decimal(score * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{percent}%"


def format_store_confirmation(record_id: int, text: str) -> str:
    return (
        f"✓ Memory stored successfully!\n\n"
        f"ID: {record_id}\n"
        f"Content: \"{text}\"\n\n"
        f"The memory has been embedded and stored in the local vector database."
    )


def format_recall_results(results: List[SearchResult]) -> str:
    """Enumerate engine results in the order given, ranks starting at 1."""
    if not results:
        return NO_MEMORIES_TEXT

    lines = [f"Found {len(results)} similar memories:\n\n"]
    for rank, memory in enumerate(results, start=1):
        lines.append(f"{rank}. [ID: {memory.id}] (Similarity: {format_similarity(memory.score)})\n")
        lines.append(f"   \"{memory.content}\"\n\n")
    return "".join(lines)


class ToolBridge:
    """
    Dispatches the two memory tools to an engine.

    The engine and embedding provider are injectable so tests can run
    without the native binary.
    """

    def __init__(self, config: Optional[BridgeConfig] = None,
                 engine: Optional[IVectorEngine] = None,
                 embedder: Optional[IEmbeddingProvider] = None):
        self.config = config or load_bridge_config()
        self.engine = engine if engine is not None else get_engine(self.config)
        self.embedder = embedder if embedder is not None else LinearCongruentialEmbedding()
        self.tools = {
            "store_memory": {"function": self._store_memory, "arguments": StoreMemoryArgs},
            "recall_memory": {"function": self._recall_memory, "arguments": RecallMemoryArgs},
        }

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        """
        Execute a tool by name.

        Args:
            name: Tool name from the catalog
            arguments: Raw tool arguments

        Returns:
            ToolResponse; isError is set when the call failed
        """
        start_time = time.time()
        try:
            validated = self.check_call(name, arguments)
            response = self.tools[name]["function"](validated)
            logger.log_tool_call(name, "success", (time.time() - start_time) * 1000)
            return response

        except Exception as e:
            # BridgeError and anything unexpected both come back as a well-formed reply
            logger.log_tool_call(name, "error", (time.time() - start_time) * 1000, {
                "error_type": type(e).__name__,
                "error": str(e),
            })
            return ToolResponse.error(str(e) or type(e).__name__)

    def check_call(self, name: str, arguments: Any) -> BaseModel:
        """Validate a call without dispatching it.

        Raises:
            UnknownToolError: name is not in the catalog
            ValidationError: arguments do not match the tool's schema
        """
        if name not in self.tools:
            raise UnknownToolError(name)
        return self._validate_arguments(name, self.tools[name]["arguments"], arguments)

    def store_memory(self, text: Any) -> ToolResponse:
        return self.call_tool("store_memory", {"text": text})

    def recall_memory(self, query: Any) -> ToolResponse:
        return self.call_tool("recall_memory", {"query": query})

    def _validate_arguments(self, name: str, model: type, arguments: Any) -> BaseModel:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ValidationError(f"Arguments for '{name}' must be an object")

        try:
            return model.model_validate(arguments)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ValidationError(f"Invalid arguments for '{name}': {problems}") from e

    def _embedding_json(self, text: str) -> str:
        return embedding_to_json(self.embedder.embed_text(text))

    def _store_memory(self, args: StoreMemoryArgs) -> ToolResponse:
        body = self.engine.invoke("add", [args.text, self._embedding_json(args.text)])
        added = parse_add_response(body)
        return ToolResponse.success(format_store_confirmation(added.id, args.text))

    def _recall_memory(self, args: RecallMemoryArgs) -> ToolResponse:
        body = self.engine.invoke("search", [self._embedding_json(args.query)])
        found = parse_search_response(body)
        return ToolResponse.success(format_recall_results(found.results))
