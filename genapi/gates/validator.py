from __future__ import annotations

import logging
from typing import Any, Dict, List

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from genapi.errors import ConfigurationError, SchemaNotFoundError, ValidationError
from genapi.gates.parsers import extract_json

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def _json_schema(container: Any) -> Any:
    if not isinstance(container, dict):
        return None
    content = container.get("content") or {}
    media = content.get(JSON_CONTENT_TYPE) if isinstance(content, dict) else None
    return media.get("schema") if isinstance(media, dict) else None


def schema_for(relevant_spec: Dict, path: str, method: str, kind: str) -> Dict:
    """Look up the request-body or 200-response JSON schema of one operation."""
    operation = relevant_spec["paths"][path][method.lower()]
    if kind == "request":
        schema = _json_schema(operation.get("requestBody"))
    elif kind == "response":
        responses = operation.get("responses") or {}
        # YAML loads an unquoted 200 status as an integer key.
        schema = _json_schema(responses.get("200", responses.get(200)))
    else:
        raise ValueError(f"Unknown schema kind: {kind}")

    if not schema:
        raise SchemaNotFoundError(f"Schema not found for {kind} in {method.upper()} {path}")
    return schema


def _describe_errors(validator: Draft202012Validator, instance: Any) -> List[Dict[str, Any]]:
    errors = sorted(validator.iter_errors(instance), key=lambda err: [str(part) for part in err.absolute_path])
    return [
        {
            "path": "/".join(str(part) for part in err.absolute_path),
            "message": err.message,
        }
        for err in errors
    ]


def validate_payload(schema: Dict, data: Any, kind: str, path: str, method: str) -> Any:
    """Validate ``data`` against ``schema`` and return it parsed.

    Text is parsed as JSON first. Every schema violation is collected into the
    raised ``ValidationError``.
    """
    instance = extract_json(data) if isinstance(data, str) else data
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as exc:
        raise ConfigurationError(
            f"Invalid {kind} schema for {method.upper()} {path}: {exc.message}"
        ) from exc

    errors = _describe_errors(Draft202012Validator(schema), instance)
    if errors:
        logger.warning("[genapi] invalid %s data for %s %s: %s", kind, method.upper(), path, errors)
        raise ValidationError(
            f"{kind.capitalize()} schema validation error for {method.upper()} {path}",
            kind=kind,
            errors=errors,
        )
    return instance
