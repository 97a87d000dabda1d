"""
Bridge configuration.
Engine location, working directory and timeout are resolved once at startup
and handed to the bridge explicitly.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

# Repository root (parent of the vectorforge package)
_REPO_ROOT = Path(__file__).resolve().parents[2]

# Engine location - the engine reads data/database.bin relative to its cwd
VECTORFORGE_ROOT = os.getenv("VECTORFORGE_ROOT", str(_REPO_ROOT))
VECTORFORGE_BIN = os.getenv("VECTORFORGE_BIN", str(Path(VECTORFORGE_ROOT) / "build" / "vectorforge"))
VECTORFORGE_ENGINE = os.getenv("VECTORFORGE_ENGINE", "subprocess")  # subprocess|memory

# 0 keeps the unbounded wait of the engine call; negative values are reported by validate_config
ENGINE_TIMEOUT_SEC = float(os.getenv("ENGINE_TIMEOUT_SEC", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Shared with the engine; changing it requires rebuilding stored vectors
EMBEDDING_DIM = 1536
SEARCH_TOP_K = 3

SERVER_NAME = "vectorforge"
VERSION = "1.0.0"

ENGINE_KINDS = ["subprocess", "memory"]


@dataclass(frozen=True)
class BridgeConfig:
    """Read-only settings passed into the tool bridge at construction."""

    engine_bin: str
    engine_root: str
    timeout_sec: Optional[float] = None
    engine_kind: str = "subprocess"


def load_bridge_config() -> BridgeConfig:
    """Build a BridgeConfig from the current environment."""
    root = os.getenv("VECTORFORGE_ROOT", VECTORFORGE_ROOT)
    binary = os.getenv("VECTORFORGE_BIN", str(Path(root) / "build" / "vectorforge"))
    timeout = float(os.getenv("ENGINE_TIMEOUT_SEC", str(ENGINE_TIMEOUT_SEC)))

    return BridgeConfig(
        engine_bin=binary,
        engine_root=root,
        timeout_sec=None if timeout == 0 else timeout,
        engine_kind=os.getenv("VECTORFORGE_ENGINE", VECTORFORGE_ENGINE).lower(),
    )


def validate_config(config: BridgeConfig) -> List[str]:
    """Validate bridge configuration and return any issues."""
    issues = []

    if config.engine_kind not in ENGINE_KINDS:
        issues.append(f"Invalid VECTORFORGE_ENGINE: {config.engine_kind}")

    if config.timeout_sec is not None and config.timeout_sec < 0:
        issues.append("ENGINE_TIMEOUT_SEC must be >= 0")

    if config.engine_kind == "subprocess":
        if not Path(config.engine_bin).is_file():
            issues.append(f"Engine binary not found: {config.engine_bin}")
        if not Path(config.engine_root).is_dir():
            issues.append(f"Engine working directory not found: {config.engine_root}")

    return issues


def get_engine(config: BridgeConfig):
    """Get configured engine implementation."""
    if config.engine_kind == "memory":
        from vectorforge.engine.memory import InMemoryEngine
        return InMemoryEngine()

    from vectorforge.engine.protocol import SubprocessEngine
    return SubprocessEngine(
        binary=config.engine_bin,
        cwd=config.engine_root,
        timeout=config.timeout_sec,
    )


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"
