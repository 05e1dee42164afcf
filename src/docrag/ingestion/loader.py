"""Document loaders — thin wrappers around LangChain document loaders."""

from __future__ import annotations

import logging
from pathlib import Path

from langchain_community.document_loaders import DirectoryLoader, PyPDFLoader, TextLoader
from langchain_core.documents import Document

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = (".txt", ".md")
PDF_SUFFIX = ".pdf"


def load_pdf(path: str | Path) -> Document:
    """Load a PDF as one Document.

    ``PyPDFLoader`` yields one Document per page; pages are joined so that
    chunk ids (``<source>_<index>``) stay unique within the file.
    """
    pages = PyPDFLoader(str(path)).load()
    return Document(
        page_content="\n\n".join(p.page_content for p in pages),
        metadata={"source": str(path), "pages": len(pages)},
    )


def load_directory(path: str | Path) -> list[Document]:
    """Recursively load every ``.txt``, ``.md`` and ``.pdf`` file under *path*.

    Parameters
    ----------
    path:
        Root directory containing source documents.

    Returns
    -------
    list[Document]
        One Document per file, sorted by source path, with
        ``metadata["source"]`` set to the file path.
    """
    root = Path(path)
    if not root.is_dir():
        raise FileNotFoundError(f"Documents directory not found: {root}")

    documents: list[Document] = []
    for suffix in TEXT_SUFFIXES:
        loader = DirectoryLoader(
            str(root),
            glob=f"**/*{suffix}",
            loader_cls=TextLoader,  # type: ignore[arg-type]
            loader_kwargs={"encoding": "utf-8"},
            show_progress=False,
        )
        documents.extend(loader.load())

    for pdf_path in sorted(root.rglob(f"*{PDF_SUFFIX}")):
        documents.append(load_pdf(pdf_path))

    documents.sort(key=lambda d: d.metadata.get("source", ""))
    logger.info("Loaded %d document(s) from %s", len(documents), root)
    return documents
