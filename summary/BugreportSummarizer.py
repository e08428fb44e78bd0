# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Description: BugreportSummarizer
# -----------------------------------------------------------------------------
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import settings
from utility.logging_utils import get_class_logger

SummarizeFn = Callable[[str], Optional[str]]
MergeFn = Callable[[List[str]], Optional[str]]
ChunkErrorFn = Callable[[int, Exception], None]


@dataclass(frozen=True)
class SummarySettings:
    chunk_limit: int = settings.SUMMARY_CHUNK_LIMIT
    max_chunks: int = settings.SUMMARY_MAX_CHUNKS
    max_workers: int = settings.SUMMARY_MAX_WORKERS


def split_for_summary(document: str, chunk_limit: int, max_chunks: int) -> List[str]:
    """
    Split by line into segments of at most chunk_limit chars.

    A single line longer than chunk_limit is kept whole in its own segment.
    When there are more than max_chunks segments, everything from position
    max_chunks onward is newline-joined into the last kept segment (lossy for
    precision, but nothing is dropped).
    """
    if not document.strip():
        return []
    if chunk_limit < 1 or max_chunks < 1:
        raise ValueError("chunk_limit and max_chunks must be >= 1")

    segments: List[str] = []
    current: List[str] = []
    current_len = 0

    for line in document.split("\n"):
        added = len(line) + (1 if current else 0)
        if current and current_len + added > chunk_limit:
            segments.append("\n".join(current))
            current, current_len = [], 0
            added = len(line)
        current.append(line)
        current_len += added

    if current:
        segments.append("\n".join(current))

    if len(segments) > max_chunks:
        tail = "\n".join(segments[max_chunks - 1:])
        segments = segments[: max_chunks - 1] + [tail]

    return segments


class BugreportSummarizer:
    """
    Map-reduce summary for documents too large for one model call:
    split by line → summarize each segment → merge the partial summaries.

    A failing segment is reported through on_chunk_error(index, exc) and left
    out of the merge; only when every segment fails is the result None.
    """

    def __init__(
        self,
        summary_settings: SummarySettings | None = None,
        *,
        logger: logging.Logger | None = None,
    ):
        self.settings = summary_settings or SummarySettings()
        self.logger = logger or get_class_logger(self.__class__)

    def split(self, document: str) -> List[str]:
        return split_for_summary(document, self.settings.chunk_limit, self.settings.max_chunks)

    def _run_one(self, index: int, segment: str, summarize_fn: SummarizeFn) -> Tuple[Optional[str], Optional[Exception]]:
        try:
            return summarize_fn(segment), None
        except Exception as e:
            self.logger.warning("Segment %d summary failed: %s: %s", index, type(e).__name__, e)
            return None, e

    def _run_all(self, segments: List[str], summarize_fn: SummarizeFn) -> List[Tuple[Optional[str], Optional[Exception]]]:
        workers = max(1, self.settings.max_workers)
        if workers == 1 or len(segments) == 1:
            return [self._run_one(i, s, summarize_fn) for i, s in enumerate(segments)]

        with ThreadPoolExecutor(max_workers=min(workers, len(segments))) as pool:
            futures = [pool.submit(self._run_one, i, s, summarize_fn) for i, s in enumerate(segments)]
            # results come back in segment order regardless of completion order
            return [f.result() for f in futures]

    def summarize(
        self,
        document: str,
        summarize_fn: SummarizeFn,
        merge_fn: MergeFn,
        on_chunk_error: Optional[ChunkErrorFn] = None,
    ) -> Optional[str]:
        segments = self.split(document)
        if not segments:
            self.logger.info("Nothing to summarize (empty document)")
            return None

        self.logger.info(
            "Summarizing %d chars in %d segment(s) (limit=%d max=%d)",
            len(document),
            len(segments),
            self.settings.chunk_limit,
            self.settings.max_chunks,
        )

        outcomes = self._run_all(segments, summarize_fn)

        summaries: List[str] = []
        for i, (summary, error) in enumerate(outcomes):
            if error is not None:
                if on_chunk_error:
                    on_chunk_error(i, error)
                continue
            if summary is not None and summary.strip():
                summaries.append(summary)

        if not summaries:
            self.logger.warning("All %d segment summaries failed or were empty", len(segments))
            return None

        # merge only makes sense for a genuinely multi-segment document
        if len(segments) == 1:
            return summaries[0]

        self.logger.info("Merging %d/%d segment summaries", len(summaries), len(segments))
        return merge_fn(summaries)


def summarize(
    document: str,
    chunk_limit: int,
    max_chunks: int,
    summarize_fn: SummarizeFn,
    merge_fn: MergeFn,
    on_chunk_error: Optional[ChunkErrorFn] = None,
    *,
    max_workers: int = 1,
    logger: logging.Logger | None = None,
) -> Optional[str]:
    summarizer = BugreportSummarizer(
        SummarySettings(chunk_limit=chunk_limit, max_chunks=max_chunks, max_workers=max_workers),
        logger=logger,
    )
    return summarizer.summarize(document, summarize_fn, merge_fn, on_chunk_error)
