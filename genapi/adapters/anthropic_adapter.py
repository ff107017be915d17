from __future__ import annotations

import logging
from typing import List

from anthropic import AsyncAnthropic

from genapi.errors import ModelCallError

from .llm_base import LLMAdapter, LLMResponse

logger = logging.getLogger(__name__)


class AnthropicAdapter(LLMAdapter):
    def __init__(self, model: str, api_key: str, max_tokens: int) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.client = AsyncAnthropic(api_key=api_key)

    async def complete(self, system_prompt: str, user_text: str) -> LLMResponse:
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_text}],
        )
        text_parts: List[str] = []
        for block in getattr(message, "content", None) or []:
            block_text = getattr(block, "text", None)
            if block_text:
                text_parts.append(block_text)
        if not text_parts:
            raise ModelCallError("Anthropic returned empty content.")

        usage = getattr(message, "usage", None)
        payload = None
        if usage is not None:
            payload = {
                "prompt_tokens": getattr(usage, "input_tokens", None),
                "completion_tokens": getattr(usage, "output_tokens", None),
            }
            logger.debug("[anthropic] model=%s usage=%s", self.model, payload)
        return LLMResponse(raw_text="\n".join(text_parts), usage=payload)
