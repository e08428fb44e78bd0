# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-21
# Description: conftest.py
# -----------------------------------------------------------------------------

import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

# keep test runs from writing ./logs
os.environ.setdefault("BR_LOG_TO_FILE", "0")

from utility.errors import RequestRejected  # noqa: E402


class FakeEmbeddingProvider:
    """
    Deterministic embedder for tests.

    - `vectors` maps exact texts to vectors; otherwise a small bag-of-letters vector is used
    - texts longer than `reject_over` chars raise RequestRejected
    - `fail_on(text)` returning True raises RequestRejected
    """

    def __init__(
        self,
        vectors: Optional[Dict[str, List[float]]] = None,
        *,
        reject_over: Optional[int] = None,
        fail_on: Optional[Callable[[str], bool]] = None,
    ):
        self.vectors = vectors or {}
        self.reject_over = reject_over
        self.fail_on = fail_on
        self.calls: List[tuple] = []

    def embed(self, text: str, model: str) -> List[float]:
        self.calls.append((text, model))
        if self.reject_over is not None and len(text) > self.reject_over:
            raise RequestRejected(f"input too long: {len(text)}")
        if self.fail_on is not None and self.fail_on(text):
            raise RequestRejected("rejected by test")
        if text in self.vectors:
            return list(self.vectors[text])
        lowered = text.lower()
        return [float(lowered.count(ch)) + 0.01 for ch in "abcdefgh"]


class FakeCompletion:
    """Records messages; answers via `responder(last_user_content)`."""

    def __init__(self, responder: Optional[Callable[[str], str]] = None):
        self.responder = responder or (lambda content: "answer")
        self.calls: List[dict] = []

    def complete(self, messages, json_mode: bool = False, **kwargs) -> str:
        self.calls.append({"messages": messages, "json_mode": json_mode, "kwargs": kwargs})
        return self.responder(messages[-1]["content"])


@pytest.fixture
def fake_embedder() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def fake_completion() -> FakeCompletion:
    return FakeCompletion()
