"""Chroma implementation of the vector-store abstraction.

Handy for local development: run ``chroma run`` and set
``VECTOR_BACKEND=chroma``.  Chroma collections infer their dimension from
the first upsert, so ``dimension`` is only recorded in collection metadata.
"""

from __future__ import annotations

import logging
from typing import Any

import chromadb

from docrag.config import settings
from docrag.retrieval.base import IndexHandle, VectorStoreBase
from docrag.retrieval.models import IndexedVector, QueryMatch, QueryResult

logger = logging.getLogger(__name__)


def _flatten_metadata(metadata: dict[str, Any]) -> dict[str, Any]:
    """Chroma metadata values must be flat str/int/float/bool."""
    return {k: v for k, v in metadata.items() if isinstance(v, (str, int, float, bool))}


class ChromaIndexHandle(IndexHandle):
    """Wraps a Chroma collection."""

    def __init__(self, name: str, collection: Any) -> None:
        super().__init__(name)
        self._collection = collection

    def upsert(self, vectors: list[IndexedVector]) -> None:
        self._collection.upsert(
            ids=[v.id for v in vectors],
            embeddings=[v.values for v in vectors],
            metadatas=[_flatten_metadata(v.metadata) for v in vectors],
        )

    def query(
        self,
        vector: list[float],
        *,
        top_k: int = 10,
        include_metadata: bool = True,
        include_values: bool = True,
    ) -> QueryResult:
        include = ["distances"]
        if include_metadata:
            include.append("metadatas")
        if include_values:
            include.append("embeddings")

        results = self._collection.query(
            query_embeddings=[vector],
            n_results=top_k,
            include=include,
        )

        ids = (results.get("ids") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]
        metas = (results.get("metadatas") or [[None] * len(ids)])[0]
        embeddings = results.get("embeddings")
        values = embeddings[0] if embeddings is not None and len(embeddings) else [None] * len(ids)

        matches: list[QueryMatch] = []
        for doc_id, dist, meta, emb in zip(ids, distances, metas, values):
            # Collections are created with cosine space: similarity = 1 - distance.
            matches.append(
                QueryMatch(
                    id=doc_id,
                    score=1.0 - dist,
                    values=[float(x) for x in emb] if emb is not None else [],
                    metadata=dict(meta or {}),
                )
            )
        return QueryResult(matches=matches)


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client, mainly for tests.
    """

    def __init__(
        self,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        client: Any | None = None,
    ) -> None:
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)

    def list_indexes(self) -> list[str]:
        # chromadb >= 0.6 returns names, older releases return Collection objects.
        return [c if isinstance(c, str) else c.name for c in self._client.list_collections()]

    def create_index(self, name: str, *, dimension: int, metric: str = "cosine") -> None:
        logger.info("Creating Chroma collection %s (dimension=%d, metric=%s)", name, dimension, metric)
        self._client.create_collection(
            name=name,
            metadata={"hnsw:space": metric, "dimension": dimension},
        )

    def is_index_ready(self, name: str) -> bool:
        return name in self.list_indexes()

    def get_index(self, name: str) -> ChromaIndexHandle:
        return ChromaIndexHandle(name, self._client.get_collection(name))

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
