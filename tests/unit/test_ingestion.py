"""Unit tests for the ingestion pipeline."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
from langchain_core.documents import Document

from docrag.exceptions import EmbeddingMismatchError
from docrag.ingestion.pipeline import build_vector, ingest_documents, make_vector_id


def _paragraph_document(source: str, n_chunks: int) -> Document:
    """One 8-character paragraph per chunk when split with ``chunk_size=12``."""
    text = "\n\n".join(f"para{i:04d}" for i in range(n_chunks))
    return Document(page_content=text, metadata={"source": source})


def _greeting_document(source: str = "documents/greeting.txt") -> Document:
    """'hello world. ' repeated past 1000 characters, in three paragraphs."""
    paragraph = ("hello world. " * 69).strip()
    return Document(page_content="\n\n".join([paragraph] * 3), metadata={"source": source})


def test_make_vector_id() -> None:
    assert make_vector_id("docs/a.md", 3) == "docs/a.md_3"


def test_build_vector_metadata() -> None:
    chunk = Document(page_content="line one\nline two", metadata={"source": "a.md", "loc": '{"from": 1}'})
    vector = build_vector("a.md", 0, chunk, [0.1, 0.2])
    assert vector.id == "a.md_0"
    assert vector.values == [0.1, 0.2]
    assert vector.metadata == {"source": "a.md", "page_content": "line one\nline two", "loc": '{"from": 1}'}


def test_end_to_end_greeting_document(manager, index, embedder) -> None:
    report = ingest_documents([_greeting_document()], index, embedder=embedder, manager=manager)

    assert sorted(index.vectors) == [
        "documents/greeting.txt_0",
        "documents/greeting.txt_1",
        "documents/greeting.txt_2",
    ]
    assert report.chunks == 3
    assert report.vectors_upserted == 3
    assert index.upsert_sizes == [3]


def test_partial_final_batch_is_flushed(manager, index, embedder) -> None:
    doc = _paragraph_document("big.md", 250)

    report = ingest_documents([doc], index, embedder=embedder, manager=manager, chunk_size=12)

    assert index.upsert_sizes == [100, 100, 50]
    assert len(index.vectors) == 250
    assert report.vectors_upserted == 250
    assert report.batches == 3


def test_exact_multiple_of_batch_size_upserts_each_batch_once(manager, index, embedder) -> None:
    doc = _paragraph_document("even.md", 200)

    ingest_documents([doc], index, embedder=embedder, manager=manager, chunk_size=12)

    assert index.upsert_sizes == [100, 100]


def test_batches_span_documents(manager, index, embedder) -> None:
    docs = [_paragraph_document("a.md", 3), _paragraph_document("b.md", 4)]

    report = ingest_documents(docs, index, embedder=embedder, manager=manager, chunk_size=12, batch_size=5)

    assert index.upsert_sizes == [5, 2]
    assert report.vector_ids == [f"a.md_{i}" for i in range(3)] + [f"b.md_{i}" for i in range(4)]
    assert report.documents == 2


def test_one_embedding_call_per_document(manager, index, embedder) -> None:
    docs = [_paragraph_document("a.md", 3), _paragraph_document("b.md", 2)]

    ingest_documents(docs, index, embedder=embedder, manager=manager, chunk_size=12)

    assert [len(call) for call in embedder.document_calls] == [3, 2]


def test_embeddings_align_with_chunks(manager, index, embedder) -> None:
    doc = _paragraph_document("order.md", 30)

    ingest_documents([doc], index, embedder=embedder, manager=manager, chunk_size=12)

    for i in range(30):
        vector = index.vectors[f"order.md_{i}"]
        assert vector.metadata["page_content"] == f"para{i:04d}"
        assert vector.values == embedder.vector_for(f"para{i:04d}")


def test_chunk_text_is_normalized_for_embedding_only(manager, index, embedder) -> None:
    doc = Document(page_content="first line\nsecond line", metadata={"source": "lines.txt"})

    ingest_documents([doc], index, embedder=embedder, manager=manager)

    assert embedder.document_calls == [["first line second line"]]
    stored = index.vectors["lines.txt_0"]
    assert stored.metadata["page_content"] == "first line\nsecond line"
    assert json.loads(stored.metadata["loc"]) == {"start_index": 0, "from": 1, "to": 2}


def test_reingestion_is_idempotent(manager, index, embedder) -> None:
    docs = [_greeting_document(), _paragraph_document("b.md", 12)]

    first = ingest_documents(docs, index, embedder=embedder, manager=manager, chunk_size=1000)
    count_after_first = len(index.vectors)
    second = ingest_documents(docs, index, embedder=embedder, manager=manager, chunk_size=1000)

    assert first.vector_ids == second.vector_ids
    assert len(index.vectors) == count_after_first


def test_empty_document_is_skipped(manager, index, embedder) -> None:
    docs = [Document(page_content="", metadata={"source": "empty.md"}), _paragraph_document("a.md", 2)]

    report = ingest_documents(docs, index, embedder=embedder, manager=manager, chunk_size=12)

    assert report.documents == 2
    assert report.chunks == 2
    assert len(embedder.document_calls) == 1


def test_no_documents_upserts_nothing(manager, index, embedder) -> None:
    report = ingest_documents([], index, embedder=embedder, manager=manager)
    assert report.batches == 0
    assert index.upsert_sizes == []


def test_embedding_errors_propagate(manager, index) -> None:
    broken = MagicMock()
    broken.embed_documents.side_effect = RuntimeError("rate limited")

    with pytest.raises(RuntimeError, match="rate limited"):
        ingest_documents([_greeting_document()], index, embedder=broken, manager=manager)
    assert index.upsert_sizes == []


def test_embedding_count_mismatch_raises(manager, index) -> None:
    broken = MagicMock()
    broken.embed_documents.return_value = [[0.0]]

    with pytest.raises(EmbeddingMismatchError):
        ingest_documents([_greeting_document()], index, embedder=broken, manager=manager)


def test_invalid_batch_size(manager, index, embedder) -> None:
    with pytest.raises(ValueError):
        ingest_documents([], index, embedder=embedder, manager=manager, batch_size=0)


def test_batch_size_above_store_limit_is_rejected_before_embedding(manager, index, embedder) -> None:
    with pytest.raises(ValueError, match="between 1 and 100"):
        ingest_documents([_greeting_document()], index, embedder=embedder, manager=manager, batch_size=150)
    assert embedder.document_calls == []
    assert index.upsert_sizes == []


def test_single_line_greeting_gives_three_full_chunks(manager, index, embedder) -> None:
    doc = Document(page_content="hello world. " * 231, metadata={"source": "documents/p.txt"})

    ingest_documents([doc], index, embedder=embedder, manager=manager)

    assert sorted(index.vectors) == [f"documents/p.txt_{i}" for i in range(3)]
    assert [len(v.metadata["page_content"]) for v in index.vectors.values()] == [1000, 1000, 1000]
