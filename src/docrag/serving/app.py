"""FastAPI application exposing the setup and read operations as a REST API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from docrag.config import configure_logging
from docrag.exceptions import IndexNotReadyError
from docrag.service import SETUP_FAILURE_MESSAGE, SETUP_SUCCESS_MESSAGE, RAGService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    yield


app = FastAPI(
    title="docrag API",
    version="0.1.0",
    description="Ingest local documents into a vector index and answer questions over them.",
    lifespan=lifespan,
)


@lru_cache(maxsize=1)
def get_service() -> RAGService:
    """Process-wide service; override in tests via ``app.dependency_overrides``."""
    return RAGService()


# ── Request / Response schemas ────────────────────────────────────────
class ReadRequest(BaseModel):
    """Incoming question.  A missing or empty question answers ``null``."""

    question: str | None = None


class DataResponse(BaseModel):
    """Successful response envelope."""

    data: str | None = None


class ErrorResponse(BaseModel):
    """Failure response envelope."""

    error: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _status_for(exc: Exception) -> int:
    if isinstance(exc, IndexNotReadyError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(422, f"Invalid request: {exc.errors()}")


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/ready", response_model=None, responses={503: {"model": ErrorResponse}})
def ready(service: RAGService = Depends(get_service)) -> dict[str, str] | JSONResponse:
    """Readiness probe; 503 while the vector store is unreachable."""
    if not service.store.health_check():
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Vector store is unreachable.")
    return {"status": "ready"}


@app.post("/setup", response_model=DataResponse, responses={500: {"model": ErrorResponse}})
def setup(service: RAGService = Depends(get_service)) -> DataResponse | JSONResponse:
    """Load the documents directory and ingest it into the index."""
    try:
        report = service.setup()
    except Exception as exc:
        logger.exception("Setup failed")
        return _error(_status_for(exc), SETUP_FAILURE_MESSAGE)
    logger.info("%s", report.summary())
    return DataResponse(data=SETUP_SUCCESS_MESSAGE)


@app.post("/read", response_model=DataResponse, responses={500: {"model": ErrorResponse}})
def read(
    request: ReadRequest,
    service: RAGService = Depends(get_service),
) -> DataResponse | JSONResponse:
    """Answer a question from the indexed documents."""
    try:
        answer = service.read(request.question)
    except Exception as exc:
        logger.exception("Read failed")
        return _error(_status_for(exc), str(exc) or type(exc).__name__)
    return DataResponse(data=answer)
