# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Updated: 2026-02-02
# Description: BugreportIndexBuilder
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

import numpy as np

import settings
from chunking.BugreportChunk import BugreportChunk
from chunking.BugreportChunker import BugreportChunker
from document.BugreportIndex import BugreportIndex
from embedding.ChunkEmbedding import ChunkEmbedding
from embedding.EmbeddingProvider import EmbeddingProvider
from utility.errors import (
    AuthenticationMissing,
    BuildCancelled,
    ProviderError,
    ProviderUnavailable,
)
from utility.logging_utils import get_class_logger

EmbeddedPiece = Tuple[str, List[float]]  # (text actually embedded, vector)


@dataclass
class BuildReport:
    """Counters for one build; failed_chunks > 0 means a partial index."""
    total_chunks: int = 0
    processed_chunks: int = 0
    embedded_pieces: int = 0
    failed_chunks: int = 0
    split_chunks: int = 0
    cancelled: bool = False
    aborted: bool = False

    @property
    def complete(self) -> bool:
        return not (self.cancelled or self.aborted)


class BugreportIndexBuilder:
    """
    Chunk → robust embed → BugreportIndex.

    Embedding is sequential, one chunk at a time. A chunk the provider refuses is
    halved and retried (up to max_split_depth), so one original chunk can end up
    as zero, one or several embedded sub-chunks. Every embedded piece gets a fresh
    sequential id; its stored chunk keeps the original chunk's offset range.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        *,
        chunk_size: int = settings.INDEX_CHUNK_SIZE,
        chunk_overlap: int = settings.INDEX_CHUNK_OVERLAP,
        boundary_radius: int = settings.BOUNDARY_SEARCH_RADIUS,
        embed_limit_chars: int = settings.EMBED_CHUNK_LIMIT_CHARS,
        max_split_depth: int = settings.EMBED_MAX_SPLIT_DEPTH,
        min_split_chars: int = settings.EMBED_MIN_SPLIT_CHARS,
        failure_warn_threshold: int = settings.EMBED_FAILURE_WARN_THRESHOLD,
        max_failed_chunks: Optional[int] = settings.EMBED_FAILURE_ABORT_THRESHOLD,
        normalize: bool = True,
        logger: logging.Logger | None = None,
    ):
        self.provider = provider
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.embed_limit_chars = embed_limit_chars
        self.max_split_depth = max_split_depth
        self.min_split_chars = min_split_chars
        self.failure_warn_threshold = failure_warn_threshold
        self.max_failed_chunks = max_failed_chunks
        self.normalize = normalize
        self.logger = logger or get_class_logger(self.__class__)

        self.chunker = BugreportChunker(
            chunk_size,
            chunk_overlap,
            boundary_radius=boundary_radius,
            logger=self.logger,
        )

    # ------------------------------------------------------------------
    # Single text → vector(s)
    # ------------------------------------------------------------------
    def _normalize_vector(self, vector: List[float]) -> Optional[List[float]]:
        """Finite float64 list (unit length if normalize=True), or None if unusable."""
        try:
            arr = np.asarray(vector, dtype=np.float64)
        except (TypeError, ValueError):
            return None

        if arr.ndim != 1 or arr.size == 0 or not np.all(np.isfinite(arr)):
            return None

        if self.normalize:
            norm = float(np.linalg.norm(arr))
            if norm > 0.0:
                arr = arr / norm
        return arr.tolist()

    def _try_embed(self, text: str, model: str) -> Optional[List[float]]:
        try:
            vector = self.provider.embed(text, model)
        except AuthenticationMissing:
            raise
        except ProviderUnavailable as e:
            self.logger.warning("Embedding provider unavailable (len=%d): %s", len(text), str(e)[:200])
            raise
        except ProviderError as e:
            self.logger.warning(
                "Embedding chunk failed: %s: %s", type(e).__name__, str(e)[:200]
            )
            return None

        normalized = self._normalize_vector(vector)
        if normalized is None:
            self.logger.warning("Embedding discarded: empty or non-finite vector (len=%d)", len(text))
        return normalized

    def embed_chunk_robust(self, chunk_text: str, model: str, depth: int = 0) -> List[EmbeddedPiece]:
        """
        Embed chunk_text, halving it on rejection.

        Returns [] when nothing could be embedded, one piece on first-try success,
        several pieces when the text had to be split. ProviderUnavailable is not
        split (the provider is down, not the input); it yields [] for this text.
        """
        if not chunk_text.strip():
            return []

        truncated = chunk_text[: self.embed_limit_chars]
        try:
            vector = self._try_embed(truncated, model)
        except ProviderUnavailable:
            return []

        if vector is not None:
            return [(truncated, vector)]

        if depth >= self.max_split_depth or len(chunk_text) <= self.min_split_chars:
            self.logger.warning(
                "Embedding dropped for too problematic chunk at depth=%d, length=%d",
                depth,
                len(chunk_text),
            )
            return []

        mid = len(chunk_text) // 2
        left = self.embed_chunk_robust(chunk_text[:mid], model, depth + 1)
        right = self.embed_chunk_robust(chunk_text[mid:], model, depth + 1)
        return left + right

    # ------------------------------------------------------------------
    # Whole document → BugreportIndex
    # ------------------------------------------------------------------
    def build_with_report(
        self,
        document_text: str,
        source_id: str,
        embedding_model: str,
        *,
        on_chunks_prepared: Optional[Callable[[int], None]] = None,
        on_chunk_processed: Optional[Callable[[int, int], None]] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> Tuple[BugreportIndex, BuildReport]:
        chunks = self.chunker.chunk(document_text)
        total = len(chunks)
        report = BuildReport(total_chunks=total)

        self.logger.info(
            "Building index source=%r model=%s chars=%d chunks=%d (size=%d overlap=%d)",
            source_id,
            embedding_model,
            len(document_text),
            total,
            self.chunk_size,
            self.chunk_overlap,
        )
        if on_chunks_prepared:
            on_chunks_prepared(total)

        embedded_chunks: List[BugreportChunk] = []
        embeddings: List[ChunkEmbedding] = []
        dimension: Optional[int] = None
        warned = False

        for processed, chunk in enumerate(chunks, start=1):
            if should_cancel is not None and should_cancel():
                self.logger.warning("Index build cancelled after %d/%d chunks", processed - 1, total)
                report.cancelled = True
                break

            try:
                pieces = self.embed_chunk_robust(chunk.text, embedding_model)
            except (BuildCancelled, KeyboardInterrupt):
                self.logger.warning("Index build cancelled during chunk #%d", chunk.id)
                report.cancelled = True
                break

            accepted = 0
            for text, vector in pieces:
                if dimension is None:
                    dimension = len(vector)
                elif len(vector) != dimension:
                    self.logger.warning(
                        "Skipping piece of chunk #%d: dimension %d != %d", chunk.id, len(vector), dimension
                    )
                    continue

                new_id = len(embedded_chunks)
                embedded_chunks.append(
                    BugreportChunk(
                        id=new_id,
                        start_offset=chunk.start_offset,
                        end_offset=chunk.end_offset,
                        text=text,
                    )
                )
                embeddings.append(ChunkEmbedding(chunk_id=new_id, vector=vector))
                accepted += 1

            report.processed_chunks = processed
            report.embedded_pieces += accepted
            if len(pieces) > 1:
                report.split_chunks += 1

            if accepted == 0 and chunk.text.strip():
                report.failed_chunks += 1
                self.logger.warning("Chunk skipped, no embedding after split attempts: %s", chunk.short_preview(80))

                if report.failed_chunks > self.failure_warn_threshold and not warned:
                    warned = True
                    self.logger.warning(
                        "More than %d chunks failed to embed; index will be degraded",
                        self.failure_warn_threshold,
                    )

                if self.max_failed_chunks is not None and report.failed_chunks > self.max_failed_chunks:
                    self.logger.error(
                        "Aborting embedding: %d failed chunks exceeds limit %d",
                        report.failed_chunks,
                        self.max_failed_chunks,
                    )
                    report.aborted = True
                    break

            if on_chunk_processed:
                on_chunk_processed(processed, total)

        if embeddings:
            index_chunks = embedded_chunks
        else:
            self.logger.warning("No embeddings produced for source=%r; keeping raw chunks only", source_id)
            index_chunks = chunks

        index = BugreportIndex(
            source_id=source_id,
            created_at=datetime.now(timezone.utc).isoformat(),
            model=embedding_model,
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
            chunks=index_chunks,
            embeddings=embeddings,
            complete=report.complete,
        )

        self.logger.info(
            "Index built: chunks=%d embedded=%d failed=%d split=%d complete=%s",
            total,
            report.embedded_pieces,
            report.failed_chunks,
            report.split_chunks,
            report.complete,
        )
        return index, report

    def build(
        self,
        document_text: str,
        source_id: str,
        embedding_model: str,
        **kwargs,
    ) -> BugreportIndex:
        index, _ = self.build_with_report(document_text, source_id, embedding_model, **kwargs)
        return index
