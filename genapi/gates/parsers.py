from __future__ import annotations

import json
import re
from typing import Any

from genapi.errors import ResponseParseError

_FENCED_BLOCK = re.compile(r"```(?:[\w+.-]*[ \t]*\n)?([\s\S]*?)```")
_INLINE_CODE = re.compile(r"`([^`\n]*)`")


def remove_markdown_code_markup(text: str) -> str:
    """Unwrap fenced blocks and inline code spans, keeping their inner content."""
    unfenced = _FENCED_BLOCK.sub(lambda match: match.group(1).strip(), text)
    return _INLINE_CODE.sub(lambda match: match.group(1), unfenced).strip()


def _iter_json_candidates(text: str) -> list[str]:
    candidates: list[str] = []
    for match in re.finditer(r"[\[{]", text):
        candidates.append(text[match.start():])
    return candidates


def _try_parse(text: str) -> Any:
    try:
        return json.loads(text), True
    except json.JSONDecodeError:
        return None, False


def extract_json(raw_text: str) -> Any:
    parsed, ok = _try_parse(raw_text)
    if ok:
        return parsed

    decoder = json.JSONDecoder()
    for candidate in _iter_json_candidates(raw_text):
        try:
            parsed, _ = decoder.raw_decode(candidate)
            return parsed
        except json.JSONDecodeError:
            continue

    snippet = raw_text.strip().replace("\n", " ")
    snippet = (snippet[:200] + "...") if len(snippet) > 200 else snippet
    raise ResponseParseError(f"No JSON object found in response. Snippet: {snippet}")
