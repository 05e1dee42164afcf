"""Domain models for indexed vectors and query results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class IndexedVector(BaseModel):
    """One embedded chunk as it is written to the vector index.

    Attributes
    ----------
    id:
        Deterministic identifier ``"<source>_<chunk_index>"``.  Writing the
        same id twice overwrites the stored vector.
    values:
        The embedding.
    metadata:
        Flat metadata: ``source``, ``page_content`` and ``loc`` (a JSON
        string describing where the chunk sits in its source).
    """

    id: str
    values: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """Return the ``{"id", "values", "metadata"}`` dict most stores accept."""
        return {"id": self.id, "values": self.values, "metadata": self.metadata}


class QueryMatch(BaseModel):
    """A single nearest-neighbour hit."""

    id: str
    score: float | None = None
    values: list[float] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def page_content(self) -> str:
        return str(self.metadata.get("page_content", ""))

    @property
    def source(self) -> str:
        return str(self.metadata.get("source", "unknown"))


class QueryResult(BaseModel):
    """Ordered matches returned by the store, best first."""

    matches: list[QueryMatch] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.matches

    def __len__(self) -> int:  # noqa: D105
        return len(self.matches)


class IngestionReport(BaseModel):
    """Counters collected while ingesting a corpus."""

    documents: int = 0
    chunks: int = 0
    vectors_upserted: int = 0
    batches: int = 0
    vector_ids: list[str] = Field(default_factory=list)

    def summary(self) -> str:
        return (
            f"Ingested {self.documents} document(s): {self.chunks} chunk(s), "
            f"{self.vectors_upserted} vector(s) in {self.batches} batch(es)"
        )
