# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: ScoredChunk
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict

from chunking.BugreportChunk import BugreportChunk


@dataclass(frozen=True)
class ScoredChunk:
    """Retrieval hit: a chunk and its cosine similarity to the question."""
    chunk: BugreportChunk
    score: float

    def to_hit(self, include_text: bool = True) -> Dict[str, Any]:
        hit: Dict[str, Any] = {
            "chunk_id": self.chunk.id,
            "start_offset": self.chunk.start_offset,
            "end_offset": self.chunk.end_offset,
            "score": self.score,
        }
        if include_text:
            hit["text"] = self.chunk.text
        return hit
