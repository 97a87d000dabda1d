"""
VectorForge memory bridge.
Exposes store_memory / recall_memory tools over an external vector engine.
"""

__version__ = "1.0.0"
