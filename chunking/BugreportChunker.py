# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-21
# Description: BugreportChunker
# -----------------------------------------------------------------------------
import logging
import re
from typing import List, Optional

from chunking.BugreportChunk import BugreportChunk
from utility.logging_utils import get_class_logger

# Paragraph break, or the "------ SECTION ------" rules bugreports are full of
BOUNDARY_RE = re.compile(r"\n\n|-{6,}")


class BugreportChunker:
    """
    Splits a large text document into overlapping fixed-size character windows.

    Each window end is snapped to the nearest paragraph break / dashed section
    rule within `boundary_radius` chars, so log sections are not cut in the
    middle when a natural boundary is close by. The window start always
    advances by max(1, chunk_size - overlap) regardless of snapping, and a
    window never ends before the next one starts, so every character is covered.
    """

    def __init__(
        self,
        chunk_size: int = 1500,
        overlap: int = 300,
        *,
        boundary_radius: int = 200,
        logger: logging.Logger | None = None,
    ):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

        self.chunk_size = chunk_size
        self.overlap = overlap
        self.boundary_radius = max(0, boundary_radius)
        self.logger = logger or get_class_logger(self.__class__)

    @property
    def step(self) -> int:
        # overlap >= chunk_size would never advance; floor at 1
        return max(1, self.chunk_size - self.overlap)

    def _snap_end(self, text: str, start: int, end: int) -> int:
        # never end before the next window's start, or text between them is lost
        floor = min(len(text), start + self.step)
        lo = max(start + 1, end - self.boundary_radius, floor)
        hi = min(len(text), end + self.boundary_radius)
        if lo >= hi:
            return end

        best: Optional[int] = None
        for m in BOUNDARY_RE.finditer(text, lo, hi):
            pos = m.start()
            if best is None or abs(pos - end) < abs(best - end):
                best = pos

        if best is None:
            return end
        return min(best, len(text))

    def chunk(self, text: str) -> List[BugreportChunk]:
        if not text:
            return []

        n = len(text)
        chunks: List[BugreportChunk] = []
        snapped = 0
        start = 0

        while start < n:
            naive_end = min(start + self.chunk_size, n)
            end = self._snap_end(text, start, naive_end)
            if end != naive_end:
                snapped += 1

            chunks.append(
                BugreportChunk(
                    id=len(chunks),
                    start_offset=start,
                    end_offset=end,
                    text=text[start:end],
                )
            )
            start += self.step

        self.logger.debug(
            "Chunked %d chars into %d chunks (size=%d overlap=%d step=%d snapped=%d)",
            n,
            len(chunks),
            self.chunk_size,
            self.overlap,
            self.step,
            snapped,
        )
        return chunks


def chunk_text(
    text: str,
    chunk_size: int,
    overlap: int,
    *,
    boundary_radius: int = 200,
    logger: logging.Logger | None = None,
) -> List[BugreportChunk]:
    """Functional form of BugreportChunker(chunk_size, overlap).chunk(text)."""
    chunker = BugreportChunker(
        chunk_size,
        overlap,
        boundary_radius=boundary_radius,
        logger=logger,
    )
    return chunker.chunk(text)
