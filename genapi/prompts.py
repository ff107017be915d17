from __future__ import annotations

import json
from typing import Any, Dict

from genapi.errors import NotFoundError

SYSTEM_PROMPT_TEMPLATE = """Can you pretend to be the API in the following OpenAPI SPECIFICATION for all future requests and follow the INSTRUCTIONS below.

----------
SPECIFICATION:
{specification}

----------
INSTRUCTIONS:
- ALWAYS respond in JSON
- ALWAYS be tolerant and try to return 200 status on requests
- ALWAYS only ever include data from the request data
- NEVER include data not in the request data
- NEVER use example data in your response.
- ALWAYS leave blank if no data is provided
- DO NOT INCLUDE BACKTICKS IN THE RESPONSE
"""


def extract_relevant_spec(document: Dict[str, Any], path: str, method: str) -> Dict[str, Any]:
    """Cut the dereferenced document down to the single operation a request targets.

    The slice keeps ``openapi``, ``info`` and ``components`` so the model still
    sees the API title, description and shared definitions, plus one
    ``{path: {method: operation}}`` entry. Method keys are matched lowercase.
    """
    method_key = method.lower()
    path_spec = (document.get("paths") or {}).get(path)
    method_spec = path_spec.get(method_key) if isinstance(path_spec, dict) else None
    if not method_spec:
        raise NotFoundError(
            f"Path or method not found in OpenAPI specification: {path}, {method}"
        )

    return {
        "openapi": document.get("openapi"),
        "info": document.get("info"),
        "paths": {path: {method_key: method_spec}},
        "components": document.get("components"),
    }


def escape_template_braces(text: str) -> str:
    return text.replace("{", "{{").replace("}", "}}")


def build_system_prompt(relevant_spec: Dict[str, Any]) -> str:
    """Return the system prompt as a format template.

    The serialized slice has its braces doubled, so rendering the template with
    ``render_system_prompt`` yields the literal JSON back.
    """
    specification = escape_template_braces(json.dumps(relevant_spec, indent=2))
    return SYSTEM_PROMPT_TEMPLATE.replace("{specification}", specification)


def render_system_prompt(template: str, **variables: Any) -> str:
    return template.format(**variables)


def build_user_message(payload: Any) -> str:
    return json.dumps(payload)
