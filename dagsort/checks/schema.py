"""JSON Schema for graph documents, and a structural validator for it.

A graph document is a YAML or JSON mapping with a ``nodes`` array and an
optional ``options`` mapping. Nodes may carry any extra keys as payload.
"""

from __future__ import annotations

from dagsort import __version__

GRAPH_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": f"https://dagsort.dev/schema/graph/v{__version__}",
    "title": "dagsort graph document",
    "description": "A DAG stored as a flat array of nodes linked by integer index.",
    "type": "object",
    "required": ["nodes"],
    "properties": {
        "options": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "strategy": {
                    "type": "string",
                    "enum": ["passes", "topological"],
                    "description": "Which solver computes the permutation.",
                },
                "max_passes": {
                    "type": ["integer", "null"],
                    "minimum": 1,
                    "description": "Pass limit for the 'passes' solver.",
                },
                "check": {
                    "type": "boolean",
                    "description": "Validate indices and acyclicity before normalizing.",
                },
            },
        },
        "nodes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "parent": {
                        "type": ["integer", "null"],
                        "minimum": 0,
                        "description": "Index of the parent node, or null for a root.",
                    },
                    "children": {
                        "type": "array",
                        "items": {"type": "integer", "minimum": 0},
                        "description": "Indices of child nodes, in sibling order.",
                    },
                },
            },
        },
    },
}


def get_schema() -> dict:
    """Return the JSON Schema for graph documents."""
    return GRAPH_SCHEMA


def validate_schema(data) -> list[str]:
    """Validate a parsed graph document against ``GRAPH_SCHEMA``.

    Returns:
        List of error messages. Empty list means valid.
    """
    issues: list[str] = []
    _validate_node(data, GRAPH_SCHEMA, "", issues)
    return issues


def _validate_node(data, schema: dict, path: str, issues: list[str]):
    """Recursively validate data against a JSON Schema node."""
    schema_type = schema.get("type")

    if schema_type and not _type_matches(data, schema_type):
        issues.append(f"{path or '/'}: expected type '{schema_type}', got {type(data).__name__}")
        return  # Don't recurse into wrong types

    if "enum" in schema and data not in schema["enum"]:
        issues.append(f"{path or '/'}: value '{data}' not in allowed values {schema['enum']}")

    if "minimum" in schema and _is_number(data) and data < schema["minimum"]:
        issues.append(f"{path or '/'}: value {data} is below minimum {schema['minimum']}")

    if isinstance(data, dict):
        for req in schema.get("required", []):
            if req not in data:
                issues.append(f"{path or '/'}: missing required property '{req}'")

        props = schema.get("properties", {})
        for key, value in data.items():
            if key in props:
                _validate_node(value, props[key], f"{path}.{key}", issues)
            elif schema.get("additionalProperties") is False:
                issues.append(f"{path or '/'}: unexpected property '{key}'")

    if isinstance(data, list):
        items_schema = schema.get("items")
        if items_schema:
            for i, item in enumerate(data):
                _validate_node(item, items_schema, f"{path}[{i}]", issues)


def _is_number(data) -> bool:
    return isinstance(data, (int, float)) and not isinstance(data, bool)


def _type_matches(data, schema_type: str | list[str]) -> bool:
    """Check if data matches the expected JSON Schema type (or any of a list)."""
    if isinstance(schema_type, list):
        return any(_type_matches(data, t) for t in schema_type)
    type_map = {
        "string": str,
        "integer": int,
        "number": (int, float),
        "boolean": bool,
        "array": list,
        "object": dict,
        "null": type(None),
    }
    expected = type_map.get(schema_type)
    if expected is None:
        return True  # Unknown type, don't block
    # YAML booleans are ints in Python; keep them out of integer fields
    if schema_type in ("integer", "number") and isinstance(data, bool):
        return False
    return isinstance(data, expected)
