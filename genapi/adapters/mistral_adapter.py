from __future__ import annotations

from .openai_adapter import OpenAIAdapter

MISTRAL_BASE_URL = "https://api.mistral.ai/v1"


class MistralAdapter(OpenAIAdapter):
    """Mistral's chat endpoint speaks the OpenAI wire protocol; no JSON mode is requested."""

    tag = "mistral"

    def __init__(self, model: str, api_key: str, max_tokens: int) -> None:
        super().__init__(
            model,
            api_key,
            max_tokens,
            base_url=MISTRAL_BASE_URL,
            json_mode=False,
        )
