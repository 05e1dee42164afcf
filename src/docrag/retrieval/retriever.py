"""Semantic retriever — embed a question and fetch its nearest chunks.

Usage::

    from docrag.retrieval.retriever import SemanticRetriever

    retriever = SemanticRetriever(index, manager=manager, embedder=embedder)
    result = retriever.search("What does the onboarding guide say about VPN?")
    for match in result.matches:
        print(match.source, match.score, match.page_content[:80])
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docrag.ingestion.embedder import embed_query
from docrag.retrieval.models import QueryResult

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from docrag.retrieval.base import IndexHandle
    from docrag.retrieval.manager import IndexManager

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """High-level retriever over one index.

    Parameters
    ----------
    index:
        Data-plane handle of the index to search.
    manager:
        Index manager issuing the query.
    embedder:
        Embedding model used for the question.
    default_k:
        Default number of matches returned by :meth:`search`.
    """

    def __init__(
        self,
        index: IndexHandle,
        *,
        manager: IndexManager,
        embedder: Embeddings,
        default_k: int = 10,
    ) -> None:
        self._index = index
        self._manager = manager
        self._embedder = embedder
        self.default_k = default_k

    def search(self, question: str, *, k: int | None = None) -> QueryResult:
        """Embed *question* and return up to *k* matches, best first."""
        if k is None:
            k = self.default_k
        logger.debug("Embedding question for index %s (k=%d)", self._index.name, k)
        vector = embed_query(self._embedder, question)
        return self._manager.query(self._index, vector, top_k=k)
