from __future__ import annotations

from typing import Any, Dict, List, Union

Composite = Union[Dict[str, Any], List[Any]]


def _schema_type(schema: Dict[str, Any]) -> Any:
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        # OpenAPI 3.1 nullable form, e.g. ["string", "null"].
        non_null = [item for item in schema_type if item != "null"]
        return non_null[0] if non_null else None
    return schema_type


def blank_value(schema: Any) -> Any:
    """Build a type-appropriate empty instance of ``schema``.

    Objects get every declared property, each blanked recursively. Arrays are
    empty so that merging a conforming value reproduces it exactly.
    """
    if not isinstance(schema, dict):
        return None

    schema_type = _schema_type(schema)
    if schema_type == "object":
        properties = schema.get("properties") or {}
        return {key: blank_value(value) for key, value in properties.items()}
    if schema_type == "array":
        return []
    if schema_type == "string":
        return ""
    if schema_type in ("number", "integer"):
        return 0
    if schema_type == "boolean":
        return False
    return None


def _keys(source: Composite):
    return source.items() if isinstance(source, dict) else enumerate(source)


def _has_key(target: Composite, key: Any) -> bool:
    if isinstance(target, dict):
        return key in target
    return key < len(target)


def _assign(target: Composite, key: Any, value: Any) -> None:
    if isinstance(target, list) and key >= len(target):
        target.append(value)
    else:
        target[key] = value


def deep_merge(target: Composite, source: Composite) -> None:
    """Merge ``source`` into ``target`` in place.

    Composite source values recurse into a placeholder of the same kind;
    anything else, ``None`` included, overwrites. Keys missing from ``source``
    keep the value already in ``target``.
    """
    for key, value in _keys(source):
        if isinstance(value, (dict, list)):
            kind = dict if isinstance(value, dict) else list
            if not _has_key(target, key) or not isinstance(target[key], kind):
                _assign(target, key, kind())
            deep_merge(target[key], value)
        else:
            _assign(target, key, value)


def reconcile(schema: Any, value: Any) -> Any:
    output = blank_value(schema)
    if isinstance(output, dict) and isinstance(value, dict):
        deep_merge(output, value)
        return output
    if isinstance(output, list) and isinstance(value, list):
        deep_merge(output, value)
        return output
    return value
