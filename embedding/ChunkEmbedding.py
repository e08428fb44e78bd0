# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-21
# Description: ChunkEmbedding
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class ChunkEmbedding:
    """Embedding vector for one chunk of a BugreportIndex (plain floats, JSON friendly)."""
    chunk_id: int
    vector: List[float]

    def to_dict(self) -> Dict[str, Any]:
        return {"chunkId": self.chunk_id, "embedding": list(self.vector)}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ChunkEmbedding":
        return ChunkEmbedding(
            chunk_id=int(data["chunkId"]),
            # "vector" is accepted as an alternative to the stored "embedding" key
            vector=[float(x) for x in data["embedding" if "embedding" in data else "vector"]],
        )
