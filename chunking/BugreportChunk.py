# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-21
# Description: BugreportChunk
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class BugreportChunk:
    """
    A contiguous (possibly overlapping) window of the source document.
    Offsets are character offsets into the original text: [start_offset, end_offset).
    """

    id: int
    start_offset: int
    end_offset: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "startOffset": self.start_offset,
            "endOffset": self.end_offset,
            "text": self.text,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "BugreportChunk":
        return BugreportChunk(
            id=int(data["id"]),
            start_offset=int(data["startOffset"]),
            end_offset=int(data["endOffset"]),
            text=str(data["text"]),
        )

    def short_preview(self, n: int = 120) -> str:
        """Return a compact text preview for logging/debugging."""
        clean = " ".join(self.text.split())
        preview = (clean[:n] + "...") if len(clean) > n else clean
        return f"[#{self.id} {self.start_offset}-{self.end_offset}] {preview}"
