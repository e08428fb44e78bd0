# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-29
# Description: BugreportIndexService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import settings
from document.BugreportIndex import BugreportIndex
from embedding.BugreportIndexBuilder import BugreportIndexBuilder, BuildReport
from loader.BugreportTextLoader import BugreportTextLoader
from utility.logging_utils import get_class_logger
from vectorstore.BugreportIndexStore import BugreportIndexStore


@dataclass
class IndexingResult:
    index: BugreportIndex
    report: BuildReport
    path: Optional[Path] = None  # None when nothing was persisted

    @property
    def saved(self) -> bool:
        return self.path is not None


class BugreportIndexService:
    """
    Owns the indexing pipeline:
      - read bugreport text (via BugreportTextLoader)
      - chunk + embed (via BugreportIndexBuilder)
      - persist (via BugreportIndexStore)

    Only complete, searchable indexes are persisted. A build that timed out, hit
    the failure abort threshold or produced no embeddings is returned to the
    caller but never written, so load_latest() keeps pointing at the last good one.
    """

    def __init__(
        self,
        *,
        builder: BugreportIndexBuilder,
        store: BugreportIndexStore,
        index_dir: Path | str = settings.INDEX_DIR,
        embedding_model: str = settings.DEFAULT_EMBEDDING_MODEL,
        text_loader: BugreportTextLoader | None = None,
        timeout_minutes: int = settings.INDEXING_TIMEOUT_MINUTES,
        logger: logging.Logger | None = None,
    ) -> None:
        self.builder = builder
        self.store = store
        self.index_dir = Path(index_dir)
        self.embedding_model = embedding_model
        self.text_loader = text_loader or BugreportTextLoader()
        self.timeout_minutes = timeout_minutes
        self.logger = logger or get_class_logger(self.__class__)

    def _deadline_predicate(self) -> Optional[Callable[[], bool]]:
        if self.timeout_minutes <= 0:
            return None
        deadline = time.monotonic() + self.timeout_minutes * 60
        return lambda: time.monotonic() >= deadline

    def index_text(
        self,
        text: str,
        source_id: str,
        *,
        embedding_model: Optional[str] = None,
        on_chunks_prepared: Optional[Callable[[int], None]] = None,
        on_chunk_processed: Optional[Callable[[int, int], None]] = None,
    ) -> IndexingResult:
        model = embedding_model or self.embedding_model

        index, report = self.builder.build_with_report(
            text,
            source_id,
            model,
            on_chunks_prepared=on_chunks_prepared,
            on_chunk_processed=on_chunk_processed,
            should_cancel=self._deadline_predicate(),
        )

        if report.cancelled:
            self.logger.warning(
                "Indexing of %r interrupted (limit %d min); index not saved", source_id, self.timeout_minutes
            )
            return IndexingResult(index=index, report=report)

        if report.aborted:
            self.logger.error("Indexing of %r aborted after %d failed chunks; index not saved",
                              source_id, report.failed_chunks)
            return IndexingResult(index=index, report=report)

        if not index.is_searchable:
            self.logger.warning("Index for %r has no embeddings; not saved", source_id)
            return IndexingResult(index=index, report=report)

        path = self.store.save(index, self.index_dir)
        return IndexingResult(index=index, report=report, path=path)

    def index_file(self, path: Path | str, **kwargs) -> IndexingResult:
        text = self.text_loader.load_text(path)
        return self.index_text(text, str(path), **kwargs)

    def load_latest(self) -> Optional[BugreportIndex]:
        return self.store.load_latest(self.index_dir)

    def latest_path(self) -> Optional[Path]:
        files = self.store.list_indexes(self.index_dir)
        return files[0] if files else None
