# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: test_index_builder.py
# -----------------------------------------------------------------------------
import math

import pytest

from conftest import FakeEmbeddingProvider
from embedding.BugreportIndexBuilder import BugreportIndexBuilder
from utility.errors import AuthenticationMissing, BuildCancelled, ProviderUnavailable


def _builder(provider, **kwargs) -> BugreportIndexBuilder:
    params = dict(
        chunk_size=100,
        chunk_overlap=20,
        embed_limit_chars=1000,
        max_split_depth=3,
        min_split_chars=10,
        failure_warn_threshold=50,
        max_failed_chunks=None,
    )
    params.update(kwargs)
    return BugreportIndexBuilder(provider, **params)


def _log_text(n_lines: int = 30) -> str:
    return "\n".join(f"01-01 12:00:{i:02d} E ActivityManager: ANR in com.app.{i}" for i in range(n_lines))


def test_build_embeds_every_chunk(fake_embedder):
    text = _log_text()
    builder = _builder(fake_embedder)

    index = builder.build(text, "/tmp/bugreport-1.zip", "nomic-embed-text")

    expected_chunks = builder.chunker.chunk(text)
    assert index.source_id == "/tmp/bugreport-1.zip"
    assert index.model == "nomic-embed-text"
    assert index.chunk_size == 100
    assert index.chunk_overlap == 20
    assert index.created_at
    assert len(index.embeddings) == len(expected_chunks)
    assert [e.chunk_id for e in index.embeddings] == [c.id for c in index.chunks]
    assert [(c.start_offset, c.end_offset) for c in index.chunks] == [
        (c.start_offset, c.end_offset) for c in expected_chunks
    ]
    assert all(call[1] == "nomic-embed-text" for call in fake_embedder.calls)


def test_vectors_are_unit_length(fake_embedder):
    index = _builder(fake_embedder).build(_log_text(5), "src", "m")
    for e in index.embeddings:
        assert math.isclose(math.sqrt(sum(x * x for x in e.vector)), 1.0, rel_tol=1e-9)


def test_rejected_chunk_is_split_and_renumbered():
    # one long "chunk" per build: the provider only accepts <= 40 chars
    provider = FakeEmbeddingProvider(reject_over=40)
    text = "x" * 70 + "y" * 30  # 100 chars, no boundaries
    builder = _builder(provider, chunk_size=100, chunk_overlap=0)

    index, report = builder.build_with_report(text, "src", "m")

    # 100 -> 50 + 50 -> 25 x 4
    assert len(index.embeddings) == 4
    assert [c.id for c in index.chunks] == [0, 1, 2, 3]
    assert [e.chunk_id for e in index.embeddings] == [0, 1, 2, 3]
    assert "".join(c.text for c in index.chunks) == text
    # every sub-chunk keeps the original offset range
    assert {(c.start_offset, c.end_offset) for c in index.chunks} == {(0, 100)}
    assert report.split_chunks == 1
    assert report.failed_chunks == 0


def test_text_is_truncated_to_embed_limit(fake_embedder):
    text = "z" * 100
    builder = _builder(fake_embedder, chunk_size=100, chunk_overlap=0, embed_limit_chars=30)

    index = builder.build(text, "src", "m")

    assert len(index.chunks) == 1
    assert index.chunks[0].text == "z" * 30
    assert (index.chunks[0].start_offset, index.chunks[0].end_offset) == (0, 100)


def test_failed_chunks_are_skipped_and_counted():
    provider = FakeEmbeddingProvider(fail_on=lambda t: "BAD" in t)
    text = "good " * 20 + "BAD " * 25 + "good " * 20
    builder = _builder(provider, chunk_size=50, chunk_overlap=0, min_split_chars=1000)

    index, report = builder.build_with_report(text, "src", "m")

    assert report.failed_chunks > 0
    assert report.complete
    assert 0 < len(index.embeddings) < report.total_chunks
    assert all("BAD" not in c.text for c in index.chunks)


def test_total_failure_falls_back_to_raw_chunks():
    provider = FakeEmbeddingProvider(fail_on=lambda t: True)
    text = _log_text(10)
    builder = _builder(provider, min_split_chars=10_000)

    index, report = builder.build_with_report(text, "src", "m")

    assert index.embeddings == []
    assert index.chunks == builder.chunker.chunk(text)
    assert not index.is_searchable
    assert report.failed_chunks == report.total_chunks


def test_abort_threshold_stops_early():
    provider = FakeEmbeddingProvider(fail_on=lambda t: True)
    builder = _builder(provider, chunk_size=10, chunk_overlap=0, min_split_chars=10_000, max_failed_chunks=2)

    index, report = builder.build_with_report("q" * 100, "src", "m")

    assert report.aborted
    assert report.failed_chunks == 3
    assert not index.complete


def test_progress_callbacks(fake_embedder):
    prepared = []
    processed = []
    builder = _builder(fake_embedder, chunk_size=10, chunk_overlap=0)

    builder.build(
        "w" * 35,
        "src",
        "m",
        on_chunks_prepared=prepared.append,
        on_chunk_processed=lambda done, total: processed.append((done, total)),
    )

    assert prepared == [4]
    assert processed == [(1, 4), (2, 4), (3, 4), (4, 4)]


def test_cancel_predicate_returns_partial_index(fake_embedder):
    builder = _builder(fake_embedder, chunk_size=10, chunk_overlap=0)
    state = {"n": 0}

    def should_cancel() -> bool:
        state["n"] += 1
        return state["n"] > 2

    index, report = builder.build_with_report("w" * 50, "src", "m", should_cancel=should_cancel)

    assert report.cancelled
    assert len(index.embeddings) == 2
    assert not index.complete


def test_cancel_raised_by_provider_returns_partial_index():
    class CancellingProvider(FakeEmbeddingProvider):
        def embed(self, text, model):
            if len(self.calls) >= 1:
                raise BuildCancelled("caller timeout")
            return super().embed(text, model)

    builder = _builder(CancellingProvider(), chunk_size=10, chunk_overlap=0)
    index, report = builder.build_with_report("w" * 30, "src", "m")

    assert report.cancelled
    assert len(index.embeddings) == 1


def test_unavailable_provider_is_not_split():
    class DownProvider(FakeEmbeddingProvider):
        def embed(self, text, model):
            self.calls.append((text, model))
            raise ProviderUnavailable("connection refused")

    provider = DownProvider()
    builder = _builder(provider, chunk_size=100, chunk_overlap=0)
    index, report = builder.build_with_report("k" * 100, "src", "m")

    assert len(provider.calls) == 1
    assert report.failed_chunks == 1
    assert index.embeddings == []


def test_missing_authentication_propagates():
    class NoAuthProvider(FakeEmbeddingProvider):
        def embed(self, text, model):
            raise AuthenticationMissing("no key")

    with pytest.raises(AuthenticationMissing):
        _builder(NoAuthProvider()).build("some text", "src", "m")


def test_empty_document_gives_empty_index(fake_embedder):
    index = _builder(fake_embedder).build("", "src", "m")
    assert index.chunks == []
    assert index.embeddings == []


def test_keyboard_interrupt_from_provider_returns_partial_index():
    class InterruptedProvider(FakeEmbeddingProvider):
        def embed(self, text, model):
            if len(self.calls) >= 2:
                raise KeyboardInterrupt
            return super().embed(text, model)

    builder = _builder(InterruptedProvider(), chunk_size=10, chunk_overlap=0)
    index, report = builder.build_with_report("x" * 100, "src", "m")

    assert report.cancelled
    assert len(index.embeddings) == 2
    assert not index.complete
