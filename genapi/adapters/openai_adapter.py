from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from openai import AsyncOpenAI, RateLimitError

from genapi.errors import ModelCallError

from .llm_base import LLMAdapter, LLMResponse

logger = logging.getLogger(__name__)


def usage_payload(response: Any) -> Optional[Dict[str, Any]]:
    usage = getattr(response, "usage", None)
    if not usage:
        return None
    return {
        "prompt_tokens": getattr(usage, "prompt_tokens", None),
        "completion_tokens": getattr(usage, "completion_tokens", None),
        "total_tokens": getattr(usage, "total_tokens", None),
    }


class OpenAIAdapter(LLMAdapter):
    """Chat completions against OpenAI, asking for a JSON object reply."""

    tag = "openai"

    def __init__(
        self,
        model: str,
        api_key: str,
        max_tokens: int,
        base_url: Optional[str] = None,
        json_mode: bool = True,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.json_mode = json_mode
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def complete(self, system_prompt: str, user_text: str) -> LLMResponse:
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
            "max_tokens": self.max_tokens,
        }
        if self.json_mode:
            request["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**request)
        except RateLimitError as exc:
            if getattr(exc, "code", None) == "insufficient_quota":
                raise ModelCallError(
                    "API quota exceeded. Please enable billing for this account."
                ) from exc
            raise

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ModelCallError(f"{self.tag} returned empty content.")

        usage = usage_payload(response)
        if usage:
            logger.debug(
                "[%s] model=%s prompt_tokens=%s completion_tokens=%s total_tokens=%s",
                self.tag,
                self.model,
                usage["prompt_tokens"],
                usage["completion_tokens"],
                usage["total_tokens"],
            )
        else:
            logger.debug("[%s] usage not provided by SDK", self.tag)
        return LLMResponse(raw_text=content, usage=usage)
