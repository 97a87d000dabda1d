"""
Deterministic placeholder embeddings.

The vectors are not semantic. Their only contract is reproducibility: the
same text always yields the same 1536 floats, so recall against previously
stored content keeps ranking the same way. The generator is a linear
congruential sequence seeded with the sum of the text's UTF-16 code units.
"""

from abc import ABC, abstractmethod
import json
import struct
from typing import List, Sequence, Tuple

from ..core.config import EMBEDDING_DIM

EmbeddingVector = Tuple[float, ...]

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> EmbeddingVector:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


def utf16_code_units(text: str) -> List[int]:
    """Split text into UTF-16 code units.

    Characters outside the BMP contribute two surrogate units, not one code
    point. Stored vectors depend on this, so it must not be "fixed" here.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    return list(struct.unpack(f"<{len(data) // 2}H", data))


class LinearCongruentialEmbedding(IEmbeddingProvider):
    """Seeded LCG embedding compatible with vectors already in the engine."""

    def __init__(self, dimension: int = EMBEDDING_DIM):
        self.dimension = dimension

    def seed_for(self, text: str) -> int:
        """Cumulative sum of code units, no modulo applied."""
        return sum(utf16_code_units(text))

    def embed_text(self, text: str) -> EmbeddingVector:
        seed = self.seed_for(text)
        vector = []
        for _ in range(self.dimension):
            seed = (seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
            vector.append(seed / float(LCG_MODULUS))
        return tuple(vector)

    def get_dimension(self) -> int:
        return self.dimension


_default_provider = LinearCongruentialEmbedding()


def embed(text: str) -> EmbeddingVector:
    """Embed text with the default provider (1536 dimensions)."""
    return _default_provider.embed_text(text)


def embedding_to_json(vector: Sequence[float]) -> str:
    """Serialize a vector as a compact JSON array for the engine command line."""
    return json.dumps(list(vector), separators=(",", ":"))
