from __future__ import annotations

import os
from enum import Enum
from typing import Callable, Dict, Optional

from genapi.config import DEFAULT_MAX_TOKENS
from genapi.errors import ConfigurationError, UnsupportedModelError

from .anthropic_adapter import AnthropicAdapter
from .gemini_adapter import GeminiAdapter
from .llm_base import LLMAdapter
from .mistral_adapter import MistralAdapter
from .openai_adapter import OpenAIAdapter


class ModelFamily(Enum):
    GPT = "gpt"
    GEMINI = "gemini"
    MISTRAL = "mistral"
    CLAUDE = "claude"


API_KEY_ENV: Dict[ModelFamily, str] = {
    ModelFamily.GPT: "OPENAI_API_KEY",
    ModelFamily.GEMINI: "GEMINI_API_KEY",
    ModelFamily.MISTRAL: "MISTRAL_API_KEY",
    ModelFamily.CLAUDE: "ANTHROPIC_API_KEY",
}


def resolve_family(model_name: str) -> ModelFamily:
    for family in ModelFamily:
        if model_name.startswith(family.value):
            return family
    raise UnsupportedModelError(f"Unsupported model name: {model_name}")


def _openai(model_name: str, api_key: str, max_tokens: int) -> LLMAdapter:
    return OpenAIAdapter(model_name, api_key, max_tokens)


def _gemini(model_name: str, api_key: str, max_tokens: int) -> LLMAdapter:
    return GeminiAdapter(model_name, api_key, max_tokens)


def _mistral(model_name: str, api_key: str, max_tokens: int) -> LLMAdapter:
    return MistralAdapter(model_name, api_key, max_tokens)


def _anthropic(model_name: str, api_key: str, max_tokens: int) -> LLMAdapter:
    return AnthropicAdapter(model_name, api_key, max_tokens)


FACTORIES: Dict[ModelFamily, Callable[[str, str, int], LLMAdapter]] = {
    ModelFamily.GPT: _openai,
    ModelFamily.GEMINI: _gemini,
    ModelFamily.MISTRAL: _mistral,
    ModelFamily.CLAUDE: _anthropic,
}


def create_model_adapter(
    model_name: str,
    api_key: Optional[str] = None,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> LLMAdapter:
    """Build the backend for ``model_name``, picked by its name prefix.

    Without an explicit ``api_key`` the family's usual environment variable is read.
    """
    family = resolve_family(model_name)
    key = api_key or os.getenv(API_KEY_ENV[family])
    if not key:
        raise ConfigurationError(f"{API_KEY_ENV[family]} is not set.")
    return FACTORIES[family](model_name, key, max_tokens)
