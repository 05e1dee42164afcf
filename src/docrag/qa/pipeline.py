"""Query pipeline — retrieve context for a question and ask the completion model.

Steps
-----
1. Empty question → ``None`` (nothing to answer, no service is called).
2. Embed the question and fetch the top-*k* matches.
3. No matches → ``None``; the completion model is not called.
4. Join the ``page_content`` of every match, in store order, with single
   spaces into one context string.
5. Run the stuff QA chain on one synthetic Document holding that context.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_core.documents import Document
from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import RunnableLambda

from docrag.qa.prompts import STUFF_QA_PROMPT, format_documents
from docrag.retrieval.retriever import SemanticRetriever

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models import BaseLanguageModel
    from langchain_core.runnables import Runnable

    from docrag.retrieval.base import IndexHandle
    from docrag.retrieval.manager import IndexManager
    from docrag.retrieval.models import QueryResult

logger = logging.getLogger(__name__)


def build_context(result: QueryResult) -> str:
    """Concatenate match texts in the order the store returned them."""
    return " ".join(m.page_content for m in result.matches)


def build_qa_chain(llm: BaseLanguageModel) -> Runnable:
    """Return a stuff chain taking ``{"input_documents", "question"}``."""
    stuff = RunnableLambda(
        lambda inputs: {
            "context": format_documents(inputs["input_documents"]),
            "question": inputs["question"],
        }
    )
    return stuff | STUFF_QA_PROMPT | llm | StrOutputParser()


def answer_question(
    question: str | None,
    index: IndexHandle,
    *,
    embedder: Embeddings,
    llm: BaseLanguageModel,
    manager: IndexManager,
    top_k: int = 10,
) -> str | None:
    """Answer *question* from the contents of *index*.

    Returns
    -------
    str | None
        The model's answer, or ``None`` when the question is empty or no
        match was found.
    """
    if not question or not question.strip():
        logger.info("Empty question; nothing to answer")
        return None

    retriever = SemanticRetriever(index, manager=manager, embedder=embedder, default_k=top_k)
    result = retriever.search(question)
    if result.is_empty:
        logger.info("Since there are no matches, the completion model will not be queried.")
        return None

    logger.info("Asking question: %s", question)
    context = build_context(result)
    chain = build_qa_chain(llm)
    answer = chain.invoke(
        {
            "input_documents": [Document(page_content=context)],
            "question": question,
        }
    )
    logger.info("Answer: %s", answer)
    return answer
