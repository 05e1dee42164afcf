"""Prompt template for the stuff question-answering chain.

The template is the classic "stuff" QA default: every retrieved passage
goes straight into the prompt, followed by the question.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_core.prompts import PromptTemplate

if TYPE_CHECKING:
    from langchain_core.documents import Document

STUFF_QA_TEMPLATE = """\
Use the following pieces of context to answer the question at the end. \
If you don't know the answer, just say that you don't know, \
don't try to make up an answer.

{context}

Question: {question}
Helpful Answer:"""

STUFF_QA_PROMPT = PromptTemplate.from_template(STUFF_QA_TEMPLATE)

DOCUMENT_SEPARATOR = "\n\n"


def format_documents(documents: list[Document]) -> str:
    """Stuff *documents* into one context string."""
    return DOCUMENT_SEPARATOR.join(doc.page_content for doc in documents)
