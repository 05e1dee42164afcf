"""Text chunking."""

from __future__ import annotations

import json

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter


def _build_splitter(chunk_size: int, chunk_overlap: int) -> RecursiveCharacterTextSplitter:
    return RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        length_function=len,
        keep_separator=False,
        add_start_index=True,
    )


def _location(text: str, start_index: int, chunk: str) -> dict[str, int]:
    line_from = text.count("\n", 0, max(start_index, 0)) + 1
    return {
        "start_index": start_index,
        "from": line_from,
        "to": line_from + chunk.count("\n"),
    }


def split_document(
    document: Document,
    chunk_size: int = 1000,
    chunk_overlap: int = 0,
) -> list[Document]:
    """Split one *document* into ordered chunks.

    Parameters
    ----------
    document:
        Source document; ``metadata["source"]`` is carried onto every chunk.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of overlapping characters between consecutive chunks.

    Returns
    -------
    list[Document]
        Chunks in document order.  Each carries ``metadata["loc"]``, a JSON
        string with ``start_index`` and the 1-based ``from``/``to`` lines.
    """
    text = document.page_content
    if not text.strip():
        return []

    splitter = _build_splitter(chunk_size, chunk_overlap)
    chunks = splitter.create_documents([text], metadatas=[dict(document.metadata)])
    for chunk in chunks:
        start = chunk.metadata.pop("start_index", -1)
        chunk.metadata["loc"] = json.dumps(_location(text, start, chunk.page_content))
    return chunks
