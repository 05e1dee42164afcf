"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file.

    Variable names are bare (``PINECONE_API_KEY``, not a public-prefixed
    variant): every key here is a server-side secret.
    """

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key for embeddings and completions")
    llm_model_name: str = Field(default="gpt-4o-mini", description="Completion model identifier")
    llm_base_url: str = Field(
        default="",
        description="Base URL of an OpenAI-compatible API. Leave empty to use OpenAI cloud.",
    )
    llm_temperature: float = 0.0
    llm_request_timeout: float = Field(default=60.0, description="Seconds before a completion request times out")

    # Embedding
    embedding_provider: str = Field(default="openai", description="'openai' or 'huggingface'")
    embedding_model: str = "text-embedding-ada-002"

    # Vector store
    vector_backend: str = Field(default="pinecone", description="'pinecone' or 'chroma'")
    pinecone_api_key: str = ""
    pinecone_cloud: str = "aws"
    pinecone_region: str = Field(default="us-east-1", description="Serverless region (the index environment)")
    chroma_host: str = "localhost"
    chroma_port: int = 8000

    # Index
    index_name: str = "docrag"
    vector_dimension: int = 1536
    index_ready_timeout: float = Field(default=180.0, description="Seconds to wait for a new index to be ready")
    index_ready_poll_interval: float = 2.0

    # Ingestion / query
    documents_dir: str = "./documents"
    chunk_size: int = 1000
    chunk_overlap: int = 0
    upsert_batch_size: int = Field(default=100, ge=1, le=100, description="Vectors per upsert; the store accepts at most 100")
    query_top_k: int = 10

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the CLI and the HTTP app."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Singleton — import `settings` wherever needed.
settings = Settings()
