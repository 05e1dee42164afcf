"""Completion model used by the stuff QA chain."""

from __future__ import annotations

import logging

from langchain_openai import ChatOpenAI

from docrag.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# LangChain refuses an empty key even when the endpoint ignores it.
_PLACEHOLDER_API_KEY = "EMPTY"


def get_llm(config: Settings | None = None, *, temperature: float | None = None) -> ChatOpenAI:
    """Build the completion model from *config* (process settings by default).

    ``LLM_BASE_URL`` points the client at any OpenAI-compatible server;
    without it the OpenAI cloud is used with ``OPENAI_API_KEY``.  Requests
    time out after ``LLM_REQUEST_TIMEOUT`` seconds and the timeout error
    reaches the caller.
    """
    config = config or default_settings
    api_key = config.openai_api_key
    if config.llm_base_url:
        logger.info("Answering with OpenAI-compatible endpoint %s", config.llm_base_url)
        api_key = api_key or _PLACEHOLDER_API_KEY

    return ChatOpenAI(
        model=config.llm_model_name,
        temperature=config.llm_temperature if temperature is None else temperature,
        api_key=api_key,
        base_url=config.llm_base_url or None,
        timeout=config.llm_request_timeout,
    )
