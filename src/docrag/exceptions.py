"""Exceptions raised by docrag itself.

Errors coming from the embedding, vector-store or completion providers are
never wrapped: they propagate to the HTTP / CLI boundary unchanged.
"""

from __future__ import annotations

from typing import Any


class RAGError(Exception):
    """Base exception for all docrag errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.message} (code: {self.error_code})"
        return self.message


class ConfigurationError(RAGError):
    """Raised when a setting holds an unsupported value."""

    def __init__(self, message: str, config_key: str | None = None) -> None:
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class IndexNotReadyError(RAGError):
    """Raised when a freshly created index does not become ready in time."""

    def __init__(self, index_name: str, timeout: float) -> None:
        super().__init__(
            f"Index {index_name!r} was not ready after {timeout:g}s",
            "INDEX_NOT_READY",
            {"index_name": index_name, "timeout": timeout},
        )
        self.index_name = index_name
        self.timeout = timeout


class EmbeddingMismatchError(RAGError):
    """Raised when the provider returns a different number of embeddings than texts sent."""

    def __init__(self, expected: int, received: int, source: str | None = None) -> None:
        details: dict[str, Any] = {"expected": expected, "received": received}
        if source:
            details["source"] = source
        super().__init__(
            f"Expected {expected} embeddings but received {received}",
            "EMBEDDING_MISMATCH",
            details,
        )
