"""
QA — question answering over the vector index with a stuff chain.

Public API
----------
- :func:`answer_question` — embed, retrieve, and ask the completion model.
- :func:`build_qa_chain` — the stuff QA chain on its own.
- :func:`get_llm` — the configured completion model.
"""

from docrag.qa.llm import get_llm
from docrag.qa.pipeline import answer_question, build_context, build_qa_chain

__all__ = [
    "answer_question",
    "build_context",
    "build_qa_chain",
    "get_llm",
]
