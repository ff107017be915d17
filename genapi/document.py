from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

import jsonref
import yaml

from genapi.errors import ConfigurationError
from genapi.utils.io import read_text


class OpenAPILoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps such as `example: 2024-01-01` as strings."""


def _timestamp_as_string(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


OpenAPILoader.add_constructor("tag:yaml.org,2002:timestamp", _timestamp_as_string)


def load_document(path: Path) -> Dict[str, Any]:
    """Load an OpenAPI document from a YAML or JSON file."""
    try:
        document = yaml.load(read_text(path), Loader=OpenAPILoader)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse OpenAPI document {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise ConfigurationError(f"OpenAPI document {path} must be a mapping.")
    return document


def dereference(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``document`` with every ``$ref`` replaced by the referenced schema.

    The input is never mutated. Values JSON cannot represent, such as dates in a
    document built in code, are stringified. Recursive schemas cannot be inlined
    and raise ``ConfigurationError``.
    """
    if not isinstance(document, dict):
        raise ConfigurationError("OpenAPI document must be a JSON object.")
    if "paths" not in document:
        raise ConfigurationError("OpenAPI document has no 'paths' section.")

    try:
        resolved = jsonref.replace_refs(copy.deepcopy(document), proxies=False, lazy_load=False)
        # A round trip turns shared referents into independent copies and rejects cycles.
        return json.loads(json.dumps(resolved, default=str))
    except (RecursionError, ValueError) as exc:
        if isinstance(exc, RecursionError) or "Circular reference" in str(exc):
            raise ConfigurationError(
                "Recursive schemas are not supported: a $ref refers back to a schema "
                "that contains it. Replace the self-reference with an inline schema."
            ) from exc
        raise ConfigurationError(f"Could not dereference OpenAPI document: {exc}") from exc
    except (jsonref.JsonRefError, TypeError) as exc:
        raise ConfigurationError(f"Could not dereference OpenAPI document: {exc}") from exc
