"""
Engine command protocol and implementations.
"""

from .protocol import (
    IVectorEngine,
    EngineInvocation,
    SubprocessEngine,
    parse_add_response,
    parse_search_response,
)
from .memory import InMemoryEngine

__all__ = [
    'IVectorEngine',
    'EngineInvocation',
    'SubprocessEngine',
    'InMemoryEngine',
    'parse_add_response',
    'parse_search_response',
]
