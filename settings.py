# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-20
# Updated: 2026-02-02
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict, Optional


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_optional_int(name: str) -> Optional[int]:
    v = _env(name, "")
    if v == "":
        return None
    return _env_int(name, 0)


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


# -----------------------------------------------------------------------------
# Index chunking (retrieval path)
# -----------------------------------------------------------------------------
INDEX_CHUNK_SIZE = _env_int("BR_INDEX_CHUNK_SIZE", 600)
INDEX_CHUNK_OVERLAP = _env_int("BR_INDEX_CHUNK_OVERLAP", 200)

# How far (in chars) around a proposed window end we look for "\n\n" / "------"
BOUNDARY_SEARCH_RADIUS = _env_int("BR_BOUNDARY_SEARCH_RADIUS", 200)


# -----------------------------------------------------------------------------
# Robust embedding
# -----------------------------------------------------------------------------
DEFAULT_EMBEDDING_MODEL = _env("BR_EMBEDDING_MODEL", "nomic-embed-text")

# Text sent to the provider is truncated to this many chars
EMBED_CHUNK_LIMIT_CHARS = _env_int("BR_EMBED_CHUNK_LIMIT_CHARS", 2000)
EMBED_MAX_SPLIT_DEPTH = _env_int("BR_EMBED_MAX_SPLIT_DEPTH", 3)
EMBED_MIN_SPLIT_CHARS = _env_int("BR_EMBED_MIN_SPLIT_CHARS", 200)

# Warn (but keep going) once more than this many chunks failed
EMBED_FAILURE_WARN_THRESHOLD = _env_int("BR_EMBED_FAILURE_WARN_THRESHOLD", 50)

# Optional hard stop; blank means "never abort"
EMBED_FAILURE_ABORT_THRESHOLD: Optional[int] = _env_optional_int("BR_EMBED_FAILURE_ABORT_THRESHOLD")

# Wall-clock cap for a whole index build (minutes); 0 disables it
INDEXING_TIMEOUT_MINUTES = _env_int("BR_INDEXING_TIMEOUT_MINUTES", 15)


# -----------------------------------------------------------------------------
# Index storage
# -----------------------------------------------------------------------------
INDEX_DIR = _env("BR_INDEX_DIR", "./data/indexes")


# -----------------------------------------------------------------------------
# Multi-stage summary
# -----------------------------------------------------------------------------
SUMMARY_CHUNK_LIMIT = _env_int("BR_SUMMARY_CHUNK_LIMIT", 16_000)
SUMMARY_MAX_CHUNKS = _env_int("BR_SUMMARY_MAX_CHUNKS", 10)
SUMMARY_MAX_WORKERS = _env_int("BR_SUMMARY_MAX_WORKERS", 1)

# Single-shot summary limits (chars) and retry fallback
SUMMARY_PRIMARY_LIMIT = _env_int("BR_SUMMARY_PRIMARY_LIMIT", 80_000)
SUMMARY_FALLBACK_LIMIT = _env_int("BR_SUMMARY_FALLBACK_LIMIT", 40_000)


# -----------------------------------------------------------------------------
# Ask() defaults (env-controlled)
# -----------------------------------------------------------------------------
ASK_DEFAULTS: Dict[str, Any] = {
    "top_k": _env_int("BR_DEFAULT_TOP_K", 5),
    "temperature": _env_float("BR_DEFAULT_TEMPERATURE", 0.0),
    "max_tokens": _env_int("BR_DEFAULT_MAX_TOKENS", 1024),
}

SUMMARY_DEFAULTS: Dict[str, Any] = {
    "temperature": _env_float("BR_SUMMARY_TEMPERATURE", 0.2),
    "max_tokens": _env_int("BR_SUMMARY_MAX_TOKENS", 3000),
    "top_p": _env_float("BR_SUMMARY_TOP_P", 0.9),
}

# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if INDEX_CHUNK_SIZE < 1:
    raise RuntimeError("INDEX_CHUNK_SIZE must be >= 1")

if SUMMARY_CHUNK_LIMIT < 1:
    raise RuntimeError("SUMMARY_CHUNK_LIMIT must be >= 1")

if SUMMARY_MAX_CHUNKS < 1:
    raise RuntimeError("SUMMARY_MAX_CHUNKS must be >= 1")

if not INDEX_DIR:
    raise RuntimeError("INDEX_DIR resolved to empty value")
