"""Ingestion pipeline — chunk, embed and upsert a corpus into one index.

Documents are processed one at a time.  Vectors accumulate across the
whole corpus and are written in batches of ``batch_size``: a full batch is
upserted exactly once and reset, and whatever is left after the last
document is flushed as a final partial batch.

Vector ids are ``"<source>_<chunk_index>"``, so re-ingesting unchanged
documents overwrites the same vectors instead of adding new ones.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docrag.ingestion.chunker import split_document
from docrag.ingestion.embedder import embed_texts
from docrag.retrieval.models import IndexedVector, IngestionReport

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from docrag.retrieval.base import IndexHandle
    from docrag.retrieval.manager import IndexManager

logger = logging.getLogger(__name__)


def make_vector_id(source: str, chunk_index: int) -> str:
    return f"{source}_{chunk_index}"


def build_vector(source: str, chunk_index: int, chunk: Document, values: list[float]) -> IndexedVector:
    """Assemble the :class:`IndexedVector` for one chunk."""
    return IndexedVector(
        id=make_vector_id(source, chunk_index),
        values=values,
        metadata={
            "source": source,
            "page_content": chunk.page_content,
            "loc": chunk.metadata.get("loc", "{}"),
        },
    )


def ingest_documents(
    documents: list[Document],
    index: IndexHandle,
    *,
    embedder: Embeddings,
    manager: IndexManager,
    chunk_size: int = 1000,
    chunk_overlap: int = 0,
    batch_size: int = 100,
) -> IngestionReport:
    """Chunk, embed and upsert *documents* into *index*.

    Parameters
    ----------
    documents:
        Loaded documents; ``metadata["source"]`` names each one.
    index:
        Target index handle.
    embedder:
        Embedding model; called once per document with all its chunks.
    manager:
        Index manager performing the upserts.
    chunk_size / chunk_overlap:
        Splitter settings.
    batch_size:
        Vectors per upsert call; at most ``manager.max_batch_size``, checked
        before any document is embedded.

    Returns
    -------
    IngestionReport
        Counts of documents, chunks, vectors and batches plus every id written.
    """
    if not 1 <= batch_size <= manager.max_batch_size:
        raise ValueError(f"batch_size must be between 1 and {manager.max_batch_size}, got {batch_size}")

    report = IngestionReport()
    batch: list[IndexedVector] = []

    def flush() -> None:
        nonlocal batch
        report.vectors_upserted += manager.upsert_batch(index, batch)
        report.batches += 1
        batch = []

    for document in documents:
        source = str(document.metadata.get("source", "unknown"))
        logger.info("Processing document %s", source)
        report.documents += 1

        logger.info("Splitting text into chunks...")
        chunks = split_document(document, chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        logger.info("Text split into %d chunks.", len(chunks))
        if not chunks:
            continue

        logger.info("Calling embedding endpoint with %d text chunks...", len(chunks))
        embeddings = embed_texts(embedder, [c.page_content for c in chunks], source=source)

        for chunk_index, (chunk, values) in enumerate(zip(chunks, embeddings)):
            vector = build_vector(source, chunk_index, chunk, values)
            batch.append(vector)
            report.vector_ids.append(vector.id)
            if len(batch) == batch_size:
                flush()
        report.chunks += len(chunks)

    if batch:
        flush()

    logger.info("%s", report.summary())
    return report
