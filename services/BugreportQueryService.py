# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-25
# Description: BugreportQueryService
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from document.BugreportIndex import BugreportIndex
from document.ScoredChunk import ScoredChunk
from embedding.EmbeddingProvider import EmbeddingProvider
from utility.errors import DimensionMismatch, ModelMismatch
from utility.logging_utils import get_class_logger


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two equal-length vectors.
    Zero-magnitude (or empty) vectors score 0.0; different lengths raise DimensionMismatch.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise DimensionMismatch(f"Vector sizes must match: {va.size} vs {vb.size}")
    if va.size == 0:
        return 0.0

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


@dataclass
class BugreportQueryService:
    """
    Ranks the chunks of a loaded BugreportIndex against a question.
    Stateless apart from the provider; safe to share across callers.
    """
    provider: EmbeddingProvider
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def retrieve(
        self,
        question: str,
        index: BugreportIndex,
        top_k: int = 5,
        *,
        query_model: Optional[str] = None,
    ) -> List[ScoredChunk]:
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")

        # the question must live in the same vector space as the index
        if query_model is not None and query_model != index.model:
            raise ModelMismatch(f"Query model {query_model!r} does not match index model {index.model!r}")

        if not index.embeddings:
            self.logger.warning("Index for %r has no embeddings; nothing to retrieve", index.source_id)
            return []

        question_vector = self.provider.embed(question, index.model)
        by_id = index.chunk_by_id()

        scored = [
            ScoredChunk(chunk=by_id[e.chunk_id], score=cosine_similarity(question_vector, e.vector))
            for e in index.embeddings
        ]
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)[:top_k]

        self.logger.info(
            "retrieve: query=%r candidates=%d top_k=%d best=%s",
            question[:120],
            len(scored),
            top_k,
            f"{ranked[0].score:.4f}" if ranked else None,
        )
        return ranked

    @staticmethod
    def to_hits(scored: Sequence[ScoredChunk], include_text: bool = True) -> List[Dict[str, Any]]:
        """Flatten scored chunks into plain dicts (API / UI friendly)."""
        return [s.to_hit(include_text=include_text) for s in scored]
