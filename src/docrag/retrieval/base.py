"""Abstract base classes for vector-store backends.

Adding a new backend (Weaviate, Qdrant …) only requires subclassing
:class:`VectorStoreBase` and :class:`IndexHandle`.  The index manager and
both pipelines are backend-agnostic.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from docrag.retrieval.models import IndexedVector, QueryResult

logger = logging.getLogger(__name__)


class IndexHandle(ABC):
    """Data-plane handle on one named index.

    Parameters
    ----------
    name:
        Name of the index / collection this handle writes to.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def upsert(self, vectors: list[IndexedVector]) -> None:
        """Insert or overwrite *vectors* by id."""
        ...

    @abstractmethod
    def query(
        self,
        vector: list[float],
        *,
        top_k: int = 10,
        include_metadata: bool = True,
        include_values: bool = True,
    ) -> QueryResult:
        """Return the *top_k* nearest neighbours of *vector*.

        An index with nothing to match returns an empty :class:`QueryResult`.
        """
        ...

    def __repr__(self) -> str:  # noqa: D105
        return f"{type(self).__name__}(name={self.name!r})"


class VectorStoreBase(ABC):
    """Control-plane interface of a vector database."""

    @abstractmethod
    def list_indexes(self) -> list[str]:
        """Return the names of all existing indexes."""
        ...

    @abstractmethod
    def create_index(self, name: str, *, dimension: int, metric: str = "cosine") -> None:
        """Issue a create-index request.  Must not block until the index is ready."""
        ...

    @abstractmethod
    def is_index_ready(self, name: str) -> bool:
        """Return ``True`` once *name* accepts upserts and queries."""
        ...

    @abstractmethod
    def get_index(self, name: str) -> IndexHandle:
        """Return a data-plane handle on *name*."""
        ...

    # -- optional overrides ---------------------------------------------------

    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable."""
        try:
            self.list_indexes()
        except Exception:  # noqa: BLE001
            logger.warning("%s health-check failed", type(self).__name__, exc_info=True)
            return False
        return True
