"""
llm.py
Utility to obtain a LangChain ChatOpenAI instance for any OpenAI-compatible
chat-completions endpoint (used for the optional AI sentiment pass).

Settings / env-vars
-------------------
LLM_API_KEY   : API key; the AI pass is disabled without it
LLM_MODEL     : optional; overrides the default model
LLM_API_BASE  : optional; defaults to "https://api.groq.com/openai/v1"
"""

from django.conf import settings
from langchain_openai import ChatOpenAI

DEFAULT_API_BASE = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"


def llm_configured() -> bool:
    return bool(getattr(settings, "LLM_API_KEY", ""))


def get_llm(
    temperature: float = 0.3,
    timeout: int | float | None = None,
    max_tokens: int = 300,
) -> ChatOpenAI:
    return ChatOpenAI(
        base_url=getattr(settings, "LLM_API_BASE", "") or DEFAULT_API_BASE,
        api_key=settings.LLM_API_KEY,
        model=getattr(settings, "LLM_MODEL", "") or DEFAULT_MODEL,
        temperature=temperature,
        timeout=timeout,
        max_retries=0,
        max_tokens=max_tokens,
    )
