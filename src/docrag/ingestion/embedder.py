"""Embedding client — turns text into fixed-dimension vectors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docrag.config import Settings, settings as default_settings
from docrag.exceptions import ConfigurationError, EmbeddingMismatchError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings


def get_embedding_function(provider: str | None = None, config: Settings | None = None) -> Embeddings:
    """Return the configured embedding model.

    ``openai`` (default) produces 1536-dimension vectors with
    ``text-embedding-ada-002``.  ``huggingface`` runs a local
    sentence-transformer; set ``VECTOR_DIMENSION`` to match its output.
    """
    config = config or default_settings
    provider = (provider or config.embedding_provider).lower()
    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs: dict = {"model": config.embedding_model, "api_key": config.openai_api_key}
        if config.llm_base_url:
            kwargs["base_url"] = config.llm_base_url
        return OpenAIEmbeddings(**kwargs)
    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=config.embedding_model)
    raise ConfigurationError(f"Unsupported embedding provider: {provider!r}", "EMBEDDING_PROVIDER")


def normalize_text(text: str) -> str:
    """Collapse newlines to spaces; embedding quality degrades on formatting noise."""
    return text.replace("\r\n", " ").replace("\n", " ")


def embed_texts(embedder: Embeddings, texts: list[str], *, source: str | None = None) -> list[list[float]]:
    """Embed *texts* in one batch call, keeping ``result[i]`` aligned with ``texts[i]``.

    Raises
    ------
    EmbeddingMismatchError
        When the provider returns a different number of vectors.
    """
    if not texts:
        return []
    embeddings = embedder.embed_documents([normalize_text(t) for t in texts])
    if len(embeddings) != len(texts):
        raise EmbeddingMismatchError(len(texts), len(embeddings), source)
    return [list(e) for e in embeddings]


def embed_query(embedder: Embeddings, text: str) -> list[float]:
    """Embed a single question."""
    return list(embedder.embed_query(normalize_text(text)))
