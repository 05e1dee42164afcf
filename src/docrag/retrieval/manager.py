"""Vector index manager — index lifecycle plus batched writes and queries.

The manager owns the three control points both pipelines share:

* :meth:`IndexManager.ensure_index` creates a missing index and polls it
  until ready, bounded by ``ready_timeout``.
* :meth:`IndexManager.upsert_batch` writes one pre-sized batch.
* :meth:`IndexManager.query` fetches nearest neighbours with metadata.

Errors from the store propagate unchanged; nothing here retries.
"""

from __future__ import annotations

import logging
import time

from docrag.config import settings
from docrag.exceptions import IndexNotReadyError
from docrag.retrieval.base import IndexHandle, VectorStoreBase
from docrag.retrieval.models import IndexedVector, QueryResult

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100


class IndexManager:
    """Backend-agnostic index operations.

    Parameters
    ----------
    store:
        Concrete vector-store backend.
    ready_timeout:
        Seconds to wait for a newly created index to become ready.
    poll_interval:
        Seconds between readiness checks.
    max_batch_size:
        Largest batch :meth:`upsert_batch` accepts.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        *,
        ready_timeout: float = settings.index_ready_timeout,
        poll_interval: float = settings.index_ready_poll_interval,
        max_batch_size: int = MAX_BATCH_SIZE,
    ) -> None:
        self.store = store
        self.ready_timeout = ready_timeout
        self.poll_interval = poll_interval
        self.max_batch_size = max_batch_size

    def ensure_index(self, name: str, dimension: int, metric: str = "cosine") -> bool:
        """Create *name* if it does not exist yet.

        Returns
        -------
        bool
            ``True`` when the index was created by this call.
        """
        logger.info("Checking if index %s exists...", name)
        if name in self.store.list_indexes():
            logger.info("Index %s exists.", name)
            return False

        logger.info("Index %s does not exist. Creating...", name)
        self.store.create_index(name, dimension=dimension, metric=metric)
        self.wait_until_ready(name)
        logger.info("Index %s created.", name)
        return True

    def wait_until_ready(self, name: str) -> None:
        """Poll the store until *name* is ready or ``ready_timeout`` elapses.

        Raises
        ------
        IndexNotReadyError
            When the index is still not ready at the deadline.
        """
        deadline = time.monotonic() + self.ready_timeout
        while not self.store.is_index_ready(name):
            if time.monotonic() >= deadline:
                raise IndexNotReadyError(name, self.ready_timeout)
            logger.debug("Index %s not ready yet, retrying in %.1fs", name, self.poll_interval)
            time.sleep(self.poll_interval)

    def get_index(self, name: str) -> IndexHandle:
        index = self.store.get_index(name)
        logger.info("Retrieved index %s", name)
        return index

    def upsert_batch(self, index: IndexHandle, vectors: list[IndexedVector]) -> int:
        """Send one batch of *vectors* to *index*.

        The caller is responsible for sizing batches; this method never
        re-chunks.

        Raises
        ------
        ValueError
            When the batch exceeds ``max_batch_size``.
        """
        if not vectors:
            return 0
        if len(vectors) > self.max_batch_size:
            raise ValueError(
                f"Batch of {len(vectors)} vectors exceeds the limit of {self.max_batch_size}"
            )
        logger.info("Upserting %d vectors...", len(vectors))
        index.upsert(vectors)
        logger.info("Upserted %d vectors.", len(vectors))
        return len(vectors)

    def query(self, index: IndexHandle, vector: list[float], top_k: int = 10) -> QueryResult:
        """Return up to *top_k* matches with metadata and raw values."""
        result = index.query(vector, top_k=top_k, include_metadata=True, include_values=True)
        logger.info("Found %d matches in index %s", len(result.matches), index.name)
        return result
