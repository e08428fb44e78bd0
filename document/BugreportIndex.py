# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-21
# Description: BugreportIndex
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Dict, List

from chunking.BugreportChunk import BugreportChunk
from embedding.ChunkEmbedding import ChunkEmbedding


@dataclass
class BugreportIndex:
    """
    Chunks + embeddings for one source document.

    Built once by BugreportIndexBuilder, persisted as JSON, then loaded read-only
    for retrieval. Re-indexing produces a new BugreportIndex (new created_at).
    An index with no embeddings is structurally valid but useless for retrieval.
    """

    source_id: str
    created_at: str
    model: str
    chunk_size: int
    chunk_overlap: int
    chunks: List[BugreportChunk] = field(default_factory=list)
    embeddings: List[ChunkEmbedding] = field(default_factory=list)

    # False when the build was cancelled / aborted part way. Not persisted.
    complete: bool = field(default=True, compare=False, repr=False)

    def __post_init__(self) -> None:
        chunk_ids = {c.id for c in self.chunks}
        orphans = [e.chunk_id for e in self.embeddings if e.chunk_id not in chunk_ids]
        if orphans:
            raise ValueError(f"Embeddings reference unknown chunk ids: {orphans[:10]}")

    @property
    def is_searchable(self) -> bool:
        return bool(self.embeddings)

    @property
    def dimension(self) -> int:
        return len(self.embeddings[0].vector) if self.embeddings else 0

    def chunk_by_id(self) -> Dict[int, BugreportChunk]:
        return {c.id: c for c in self.chunks}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceId": self.source_id,
            "createdAt": self.created_at,
            "model": self.model,
            "chunkSize": self.chunk_size,
            "chunkOverlap": self.chunk_overlap,
            "chunks": [c.to_dict() for c in self.chunks],
            "embeddings": [e.to_dict() for e in self.embeddings],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "BugreportIndex":
        """Unknown keys are ignored so newer index files still load."""
        if not isinstance(data, dict):
            raise TypeError(f"Index payload must be an object, got {type(data).__name__}")

        # older files used bugreportSourcePath
        source_id = data.get("sourceId", data.get("bugreportSourcePath"))
        if source_id is None:
            raise KeyError("sourceId")

        return BugreportIndex(
            source_id=str(source_id),
            created_at=str(data["createdAt"]),
            model=str(data["model"]),
            chunk_size=int(data["chunkSize"]),
            chunk_overlap=int(data["chunkOverlap"]),
            chunks=[BugreportChunk.from_dict(c) for c in data.get("chunks", [])],
            embeddings=[ChunkEmbedding.from_dict(e) for e in data.get("embeddings", [])],
        )
