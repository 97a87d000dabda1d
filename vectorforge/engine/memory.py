"""
In-process engine honoring the VectorForge command contract.
Records live only as long as the instance; useful for tests and local runs
without the native binary.
"""

import json
from typing import Any, Dict, List, Sequence

import numpy as np

from .protocol import IVectorEngine, EngineInvocation
from ..core.config import EMBEDDING_DIM, SEARCH_TOP_K
from ..core.errors import EngineExecutionError
from ..util.logging import logger

CONTENT_SIZE = 1024


class InMemoryEngine(IVectorEngine):
    """Cosine-similarity engine over an in-memory record list."""

    def __init__(self, dimension: int = EMBEDDING_DIM, top_k: int = SEARCH_TOP_K):
        self.dimension = dimension
        self.top_k = top_k
        self._records: List[Dict[str, Any]] = []

    def describe(self) -> str:
        return "memory"

    def __len__(self) -> int:
        return len(self._records)

    def invoke(self, command: str, args: Sequence[str]) -> Dict[str, Any]:
        invocation = EngineInvocation(command, tuple(args))

        if invocation.command == "add":
            if len(invocation.args) != 2:
                raise EngineExecutionError("'add' command requires content and embedding", returncode=1)
            content, embedding_json = invocation.args
            record_id = self._add(content, self._parse_embedding(embedding_json))
            logger.log_engine_invocation("add", "success", {"id": record_id, "engine": "memory"})
            return {"success": True, "id": record_id, "message": "Vector stored successfully"}

        if len(invocation.args) != 1:
            raise EngineExecutionError("'search' command requires embedding", returncode=1)
        results = self._search(self._parse_embedding(invocation.args[0]))
        logger.log_engine_invocation("search", "success", {"hits": len(results), "engine": "memory"})
        return {"success": True, "results": results}

    def _parse_embedding(self, embedding_json: str) -> np.ndarray:
        try:
            values = json.loads(embedding_json)
        except json.JSONDecodeError as e:
            raise EngineExecutionError(f"Invalid JSON array format: {e}", returncode=1) from e

        if not isinstance(values, list):
            raise EngineExecutionError("Invalid JSON array format", returncode=1)

        if len(values) != self.dimension:
            raise EngineExecutionError(
                f"Embedding must have {self.dimension} dimensions, got {len(values)}",
                returncode=1,
            )
        return np.asarray(values, dtype=np.float32)

    def _add(self, content: str, vector: np.ndarray) -> int:
        record_id = len(self._records) + 1

        # Fixed-size content slot, NUL terminated
        stored = content.encode("utf-8")[:CONTENT_SIZE - 1].decode("utf-8", errors="ignore")

        self._records.append({"id": record_id, "content": stored, "vector": vector})
        return record_id

    def _search(self, query: np.ndarray) -> List[Dict[str, Any]]:
        if not self._records:
            return []

        query_norm = np.linalg.norm(query)
        scored = []
        for record in self._records:
            record_norm = np.linalg.norm(record["vector"])
            if query_norm == 0 or record_norm == 0:
                score = 0.0
            else:
                score = float(np.dot(query, record["vector"]) / (query_norm * record_norm))
            scored.append({"id": record["id"], "content": record["content"], "score": score})

        # Stable sort keeps insertion order among equal scores
        scored.sort(key=lambda r: r["score"], reverse=True)
        return scored[:self.top_k]
