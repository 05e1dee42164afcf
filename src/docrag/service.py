"""Service facade wiring settings, providers and both pipelines together.

The HTTP app and the CLI both go through :class:`RAGService`; providers
are created lazily so that constructing a service never touches the
network.  Tests inject fakes through the constructor.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from docrag.config import Settings, settings as default_settings
from docrag.ingestion.loader import load_directory
from docrag.ingestion.pipeline import ingest_documents
from docrag.qa.pipeline import answer_question
from docrag.retrieval import IndexManager, get_vector_store

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models import BaseLanguageModel

    from docrag.retrieval.base import VectorStoreBase
    from docrag.retrieval.models import IngestionReport

logger = logging.getLogger(__name__)

SETUP_SUCCESS_MESSAGE = "Successfully created index and loaded data into the vector store."
SETUP_FAILURE_MESSAGE = "Failed to create index or load data into the vector store."


class RAGService:
    """Setup and read operations over one configured index.

    Parameters
    ----------
    settings:
        Configuration; defaults to the process-wide settings.
    store / embedder / llm:
        Optional pre-built providers.  Missing ones are built from
        *settings* on first use.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        store: VectorStoreBase | None = None,
        embedder: Embeddings | None = None,
        llm: BaseLanguageModel | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self._store = store
        self._embedder = embedder
        self._llm = llm
        self._manager: IndexManager | None = None

    # -- lazily built providers -----------------------------------------------

    @property
    def store(self) -> VectorStoreBase:
        if self._store is None:
            self._store = get_vector_store(self.settings.vector_backend)
        return self._store

    @property
    def embedder(self) -> Embeddings:
        if self._embedder is None:
            from docrag.ingestion.embedder import get_embedding_function

            self._embedder = get_embedding_function(self.settings.embedding_provider, self.settings)
        return self._embedder

    @property
    def llm(self) -> BaseLanguageModel:
        if self._llm is None:
            from docrag.qa.llm import get_llm

            self._llm = get_llm(self.settings)
        return self._llm

    @property
    def manager(self) -> IndexManager:
        if self._manager is None:
            self._manager = IndexManager(
                self.store,
                ready_timeout=self.settings.index_ready_timeout,
                poll_interval=self.settings.index_ready_poll_interval,
            )
        return self._manager

    # -- operations -----------------------------------------------------------

    def setup(
        self,
        documents_dir: str | Path | None = None,
        documents: list[Document] | None = None,
    ) -> IngestionReport:
        """Load documents, ensure the index exists, and ingest everything.

        *documents* bypasses the directory loader when given.
        """
        if documents is None:
            documents = load_directory(documents_dir or self.settings.documents_dir)

        self.manager.ensure_index(self.settings.index_name, self.settings.vector_dimension)
        index = self.manager.get_index(self.settings.index_name)
        return ingest_documents(
            documents,
            index,
            embedder=self.embedder,
            manager=self.manager,
            chunk_size=self.settings.chunk_size,
            chunk_overlap=self.settings.chunk_overlap,
            batch_size=self.settings.upsert_batch_size,
        )

    def read(self, question: str | None) -> str | None:
        """Answer *question*; ``None`` for an empty question or no matches."""
        if not question or not question.strip():
            return None
        index = self.manager.get_index(self.settings.index_name)
        return answer_question(
            question,
            index,
            embedder=self.embedder,
            llm=self.llm,
            manager=self.manager,
            top_k=self.settings.query_top_k,
        )
