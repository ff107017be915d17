from __future__ import annotations

import logging

from google import genai
from google.genai import types

from genapi.errors import ModelCallError

from .llm_base import LLMAdapter, LLMResponse

logger = logging.getLogger(__name__)


class GeminiAdapter(LLMAdapter):
    def __init__(self, model: str, api_key: str, max_tokens: int) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.client = genai.Client(api_key=api_key)

    async def complete(self, system_prompt: str, user_text: str) -> LLMResponse:
        logger.debug("[gemini] model=%s", self.model)
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=user_text,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                max_output_tokens=self.max_tokens,
            ),
        )
        text = getattr(response, "text", None)
        if not text:
            raise ModelCallError("Gemini returned empty content.")

        metadata = getattr(response, "usage_metadata", None)
        usage = None
        if metadata is not None:
            usage = {
                "prompt_tokens": getattr(metadata, "prompt_token_count", None),
                "completion_tokens": getattr(metadata, "candidates_token_count", None),
                "total_tokens": getattr(metadata, "total_token_count", None),
            }
        return LLMResponse(raw_text=text, usage=usage)
