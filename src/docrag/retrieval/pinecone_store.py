"""Pinecone implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any

from pinecone import Pinecone, ServerlessSpec

from docrag.config import settings
from docrag.retrieval.base import IndexHandle, VectorStoreBase
from docrag.retrieval.models import IndexedVector, QueryMatch, QueryResult

logger = logging.getLogger(__name__)


class PineconeIndexHandle(IndexHandle):
    """Wraps a ``pinecone`` data-plane ``Index`` object."""

    def __init__(self, name: str, index: Any) -> None:
        super().__init__(name)
        self._index = index

    def upsert(self, vectors: list[IndexedVector]) -> None:
        self._index.upsert(vectors=[v.to_record() for v in vectors])

    def query(
        self,
        vector: list[float],
        *,
        top_k: int = 10,
        include_metadata: bool = True,
        include_values: bool = True,
    ) -> QueryResult:
        response = self._index.query(
            vector=vector,
            top_k=top_k,
            include_metadata=include_metadata,
            include_values=include_values,
        )
        matches = [
            QueryMatch(
                id=m.id,
                score=m.score,
                values=list(m.values or []),
                metadata=dict(m.metadata or {}),
            )
            for m in (response.matches or [])
        ]
        return QueryResult(matches=matches)


class PineconeVectorStore(VectorStoreBase):
    """Pinecone-backed vector store using serverless indexes.

    Parameters
    ----------
    api_key:
        Pinecone API key.
    cloud / region:
        Where new serverless indexes are created.
    client:
        Pre-built ``Pinecone`` client, mainly for tests.
    """

    def __init__(
        self,
        api_key: str = settings.pinecone_api_key,
        *,
        cloud: str = settings.pinecone_cloud,
        region: str = settings.pinecone_region,
        client: Any | None = None,
    ) -> None:
        self._client = client if client is not None else Pinecone(api_key=api_key)
        self._cloud = cloud
        self._region = region

    def list_indexes(self) -> list[str]:
        return list(self._client.list_indexes().names())

    def create_index(self, name: str, *, dimension: int, metric: str = "cosine") -> None:
        logger.info(
            "Creating Pinecone index %s (dimension=%d, metric=%s, %s/%s)",
            name, dimension, metric, self._cloud, self._region,
        )
        # timeout=-1: return immediately, readiness is polled by the caller.
        self._client.create_index(
            name=name,
            dimension=dimension,
            metric=metric,
            spec=ServerlessSpec(cloud=self._cloud, region=self._region),
            timeout=-1,
        )

    def is_index_ready(self, name: str) -> bool:
        status = self._client.describe_index(name).status
        return bool(status["ready"])

    def get_index(self, name: str) -> PineconeIndexHandle:
        return PineconeIndexHandle(name, self._client.Index(name))
