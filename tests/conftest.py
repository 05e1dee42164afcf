"""Shared pytest configuration, in-memory fakes and fixtures."""

from __future__ import annotations

import math

import pytest
from langchain_core.embeddings import Embeddings
from langchain_core.language_models.fake import FakeListLLM
from pydantic import Field

from docrag.retrieval.base import IndexHandle, VectorStoreBase
from docrag.retrieval.manager import IndexManager
from docrag.retrieval.models import IndexedVector, QueryMatch, QueryResult


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ──────────────────────────────────────────────────────────────


class RecordingEmbeddings(Embeddings):
    """Deterministic embedder that remembers every call.

    The vector of a text is ``[len(text), sum of code points mod 997, 1.0]``
    so different texts get different vectors.
    """

    def __init__(self) -> None:
        self.document_calls: list[list[str]] = []
        self.query_calls: list[str] = []

    @staticmethod
    def vector_for(text: str) -> list[float]:
        return [float(len(text)), float(sum(map(ord, text)) % 997), 1.0]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        return [self.vector_for(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self.vector_for(text)


class RecordingLLM(FakeListLLM):
    """``FakeListLLM`` that keeps every rendered prompt."""

    prompts: list[str] = Field(default_factory=list)

    def _call(self, prompt: str, stop=None, run_manager=None, **kwargs) -> str:  # noqa: ANN001
        self.prompts.append(prompt)
        return super()._call(prompt, stop=stop, run_manager=run_manager, **kwargs)


class InMemoryIndex(IndexHandle):
    """Dict-backed index ranking by cosine similarity."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.vectors: dict[str, IndexedVector] = {}
        self.upsert_sizes: list[int] = []
        self.queries: list[dict] = []

    def upsert(self, vectors: list[IndexedVector]) -> None:
        self.upsert_sizes.append(len(vectors))
        for v in vectors:
            self.vectors[v.id] = v

    def query(
        self,
        vector: list[float],
        *,
        top_k: int = 10,
        include_metadata: bool = True,
        include_values: bool = True,
    ) -> QueryResult:
        self.queries.append(
            {"top_k": top_k, "include_metadata": include_metadata, "include_values": include_values}
        )
        scored = sorted(
            self.vectors.values(),
            key=lambda v: _cosine(vector, v.values),
            reverse=True,
        )[:top_k]
        return QueryResult(
            matches=[
                QueryMatch(
                    id=v.id,
                    score=_cosine(vector, v.values),
                    values=v.values if include_values else [],
                    metadata=v.metadata if include_metadata else {},
                )
                for v in scored
            ]
        )


class InMemoryVectorStore(VectorStoreBase):
    """Fake control plane; a new index turns ready after ``polls_until_ready`` checks."""

    def __init__(self, polls_until_ready: int = 0) -> None:
        self.indexes: dict[str, InMemoryIndex] = {}
        self.create_calls: list[dict] = []
        self.ready_checks = 0
        self.polls_until_ready = polls_until_ready

    def list_indexes(self) -> list[str]:
        return list(self.indexes)

    def create_index(self, name: str, *, dimension: int, metric: str = "cosine") -> None:
        self.create_calls.append({"name": name, "dimension": dimension, "metric": metric})
        self.indexes[name] = InMemoryIndex(name)

    def is_index_ready(self, name: str) -> bool:
        self.ready_checks += 1
        return self.ready_checks > self.polls_until_ready

    def get_index(self, name: str) -> InMemoryIndex:
        return self.indexes.setdefault(name, InMemoryIndex(name))


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


# ── Fixtures ───────────────────────────────────────────────────────────


@pytest.fixture()
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def manager(store: InMemoryVectorStore) -> IndexManager:
    return IndexManager(store, ready_timeout=1.0, poll_interval=0.0)


@pytest.fixture()
def index(store: InMemoryVectorStore) -> InMemoryIndex:
    return store.get_index("test-index")


@pytest.fixture()
def embedder() -> RecordingEmbeddings:
    return RecordingEmbeddings()


@pytest.fixture()
def llm() -> RecordingLLM:
    return RecordingLLM(responses=["The document is about greetings."])
