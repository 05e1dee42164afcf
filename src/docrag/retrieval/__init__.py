"""
Retrieval — vector index lifecycle, batched writes, and nearest-neighbour search.

This package wraps the vector database behind a small contract so that
the pipelines never need to know which DB backs the index.

Public surface
--------------
- :class:`VectorStoreBase` / :class:`IndexHandle` — abstract backend contract.
- :class:`PineconeVectorStore` — default Pinecone backend.
- :class:`ChromaVectorStore` — Chroma backend for local development.
- :class:`IndexManager` — ensure-index, upsert-batch and query operations.
- :class:`SemanticRetriever` — embed a question and search an index.
- :func:`get_vector_store` — build the backend named in the settings.
"""

from __future__ import annotations

from docrag.exceptions import ConfigurationError
from docrag.retrieval.base import IndexHandle, VectorStoreBase
from docrag.retrieval.manager import IndexManager
from docrag.retrieval.models import IndexedVector, IngestionReport, QueryMatch, QueryResult
from docrag.retrieval.retriever import SemanticRetriever

__all__ = [
    "ChromaVectorStore",
    "IndexHandle",
    "IndexManager",
    "IndexedVector",
    "IngestionReport",
    "PineconeVectorStore",
    "QueryMatch",
    "QueryResult",
    "SemanticRetriever",
    "VectorStoreBase",
    "get_vector_store",
]


def get_vector_store(backend: str | None = None) -> VectorStoreBase:
    """Return the configured backend (``"pinecone"`` or ``"chroma"``)."""
    from docrag.config import settings

    backend = (backend or settings.vector_backend).lower()
    if backend == "pinecone":
        from docrag.retrieval.pinecone_store import PineconeVectorStore

        return PineconeVectorStore()
    if backend == "chroma":
        from docrag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore()
    raise ConfigurationError(f"Unsupported vector backend: {backend!r}", "VECTOR_BACKEND")


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import backends to avoid pulling in their SDKs at import time."""
    if name == "PineconeVectorStore":
        from docrag.retrieval.pinecone_store import PineconeVectorStore

        return PineconeVectorStore
    if name == "ChromaVectorStore":
        from docrag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
