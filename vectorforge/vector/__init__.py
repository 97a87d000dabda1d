"""
Embedding generation for the memory bridge.
"""

from .embeddings import (
    IEmbeddingProvider,
    LinearCongruentialEmbedding,
    EmbeddingVector,
    embed,
    embedding_to_json,
    utf16_code_units,
)

__all__ = [
    'IEmbeddingProvider',
    'LinearCongruentialEmbedding',
    'EmbeddingVector',
    'embed',
    'embedding_to_json',
    'utf16_code_units',
]
