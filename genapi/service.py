from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional

from genapi.adapters.factory import create_model_adapter, resolve_family
from genapi.adapters.llm_base import LLMAdapter
from genapi.config import DEFAULT_MAX_TOKENS
from genapi.document import dereference
from genapi.errors import (
    ConfigurationError,
    ExhaustedRetriesError,
    GenApiError,
    HookError,
    ModelCallError,
    PayloadParseError,
    TransientModelError,
)
from genapi.gates.parsers import remove_markdown_code_markup
from genapi.gates.validator import schema_for, validate_payload
from genapi.prompts import (
    build_system_prompt,
    build_user_message,
    extract_relevant_spec,
    render_system_prompt,
)
from genapi.reconcile import reconcile

logger = logging.getLogger(__name__)

MAX_RETRY_ATTEMPTS = 3

Hook = Callable[[Any], Any]
RetryStrategy = Callable[[Any, int], Any]


@dataclass(frozen=True)
class RequestContext:
    path: str
    method: str
    payload: Any
    retry_count: int = 0
    before_prompt: Optional[Hook] = None
    after_response: Optional[Hook] = None

    def next_attempt(self, payload: Any) -> "RequestContext":
        return replace(self, payload=payload, retry_count=self.retry_count + 1)


def modify_query_for_tail_off(data: Any, retry_count: int) -> Any:
    """Default retry strategy: resend a shallow copy of the payload.

    Simplifying the query per attempt is left to callers via ``set_retry_strategy``.
    """
    if isinstance(data, dict):
        return dict(data)
    if isinstance(data, list):
        return list(data)
    return data


class GenApi:
    """Answers requests against an OpenAPI operation by asking a language model.

    Every reply is normalized, validated against the operation's 200 response
    schema and merged into a blank instance of that schema, so the caller always
    gets every declared field. Failed attempts are retried up to
    ``MAX_RETRY_ATTEMPTS`` times; configuration errors are raised at once.
    """

    def __init__(
        self,
        openapi_spec: Dict[str, Any],
        model_name: str,
        api_key: Optional[str] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        *,
        adapter: Optional[LLMAdapter] = None,
        retry_strategy: Optional[RetryStrategy] = None,
        validate_requests: bool = False,
    ) -> None:
        self.openapi_spec = openapi_spec
        self.model_name = model_name
        self.family = resolve_family(model_name)
        self.llm_service = (
            adapter if adapter is not None else create_model_adapter(model_name, api_key, max_tokens)
        )
        self.retry_strategy: RetryStrategy = retry_strategy or modify_query_for_tail_off
        self.validate_requests = validate_requests
        self.before_prompt_hook: Optional[Hook] = None
        self.after_response_hook: Optional[Hook] = None
        self._document: Optional[Dict[str, Any]] = None
        self._document_task: Optional[asyncio.Future] = None

    def before_prompt_generation(self, callback: Optional[Hook]) -> None:
        self.before_prompt_hook = callback

    def after_response_parsing(self, callback: Optional[Hook]) -> None:
        self.after_response_hook = callback

    def set_retry_strategy(self, strategy: Optional[RetryStrategy]) -> None:
        self.retry_strategy = strategy or modify_query_for_tail_off

    async def ready(self) -> Dict[str, Any]:
        """Dereference the OpenAPI document once and return it."""
        if self._document is not None:
            return self._document
        if self._document_task is None or self._document_task.cancelled():
            self._document_task = asyncio.ensure_future(
                asyncio.to_thread(dereference, self.openapi_spec)
            )
        try:
            # One cancelled caller must not cancel the load shared by every request.
            self._document = await asyncio.shield(self._document_task)
        except ConfigurationError as exc:
            logger.error("[genapi] initialization error: %s", exc)
            raise
        return self._document

    async def process_request(
        self,
        path: str,
        method: str,
        data: Any,
        *,
        before_prompt: Optional[Hook] = None,
        after_response: Optional[Hook] = None,
    ) -> Any:
        document = await self.ready()
        context = RequestContext(
            path=path,
            method=method,
            payload=data,
            before_prompt=before_prompt or self.before_prompt_hook,
            after_response=after_response or self.after_response_hook,
        )

        while True:
            logger.info(
                "[genapi] processRequest called with path: %s, method: %s, retryCount: %s",
                path,
                method,
                context.retry_count,
            )
            try:
                return await self._attempt(document, context)
            except TransientModelError as exc:
                logger.warning(
                    "[genapi] error encountered for path: %s, method: %s, retryCount: %s: %s",
                    path,
                    method,
                    context.retry_count,
                    exc,
                )
                if context.retry_count >= MAX_RETRY_ATTEMPTS:
                    logger.error(
                        "[genapi] max retries reached for path: %s, method: %s",
                        path,
                        method,
                    )
                    raise ExhaustedRetriesError(exc) from exc

                modified = self.retry_strategy(context.payload, context.retry_count)
                logger.info(
                    "[genapi] retrying request with modified query (attempt %s): %s",
                    context.retry_count + 1,
                    modified,
                )
                context = context.next_attempt(modified)

    async def _attempt(self, document: Dict[str, Any], context: RequestContext) -> Any:
        request_data = self._apply_hook(context.before_prompt, context.payload, "before-prompt")
        if isinstance(request_data, str):
            try:
                request_data = json.loads(request_data)
            except json.JSONDecodeError as exc:
                raise PayloadParseError(f"Request payload is not valid JSON: {exc}") from exc

        relevant_spec = extract_relevant_spec(document, context.path, context.method)
        response_schema = schema_for(relevant_spec, context.path, context.method, "response")
        if self.validate_requests:
            request_schema = schema_for(relevant_spec, context.path, context.method, "request")
            validate_payload(request_schema, request_data, "request", context.path, context.method)

        system_prompt = render_system_prompt(build_system_prompt(relevant_spec))
        try:
            user_message = build_user_message(request_data)
        except (TypeError, ValueError) as exc:
            raise PayloadParseError(f"Request payload is not JSON serializable: {exc}") from exc

        try:
            raw_response = await self.llm_service.send(system_prompt, user_message)
        except GenApiError:
            raise
        except Exception as exc:
            raise ModelCallError(f"Model call failed: {exc}") from exc
        logger.info(
            "[genapi] response received for path: %s, method: %s",
            context.path,
            context.method,
        )

        response = remove_markdown_code_markup(raw_response)
        response = self._apply_hook(context.after_response, response, "after-response")
        try:
            parsed = validate_payload(
                response_schema, response, "response", context.path, context.method
            )
            return reconcile(response_schema, parsed)
        except GenApiError:
            raise
        except Exception as exc:
            raise TransientModelError(f"Could not process model response: {exc}") from exc

    def _apply_hook(self, hook: Optional[Hook], value: Any, name: str) -> Any:
        if hook is None:
            return value
        try:
            return hook(value)
        except Exception as exc:
            raise HookError(f"{name} hook failed: {exc}") from exc
