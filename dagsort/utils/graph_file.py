"""Graph documents — load and save index-linked node arrays.

Documents are YAML (JSON loads through the same reader). The ``nodes`` list
is handed to the normalizer as-is, with ``KeyLinks`` reaching into each
node mapping, so payload keys ride along with their node.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from dagsort.checks.schema import validate_schema

# Defaults for the keys a document's ``options`` section may set.
# Documents are checked before normalizing unless told otherwise.
DEFAULT_OPTIONS: dict[str, Any] = {
    "strategy": "passes",
    "max_passes": None,
    "check": True,
}


class GraphFileError(ValueError):
    """A graph document could not be read or does not match the schema."""

    def __init__(self, message: str, issues: list[str] | None = None):
        super().__init__(message)
        self.issues = issues or []


@dataclass
class GraphDocument:
    """A parsed graph document."""

    nodes: list[dict[str, Any]] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)
    path: Path | None = None

    def resolved_options(self, **overrides) -> dict[str, Any]:
        """Defaults, then document options, then non-None overrides."""
        resolved = dict(DEFAULT_OPTIONS)
        resolved.update(self.options)
        resolved.update({k: v for k, v in overrides.items() if v is not None})
        return resolved

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.options:
            result["options"] = dict(self.options)
        result["nodes"] = self.nodes
        return result


def load_graph(path: str | Path) -> GraphDocument:
    """Read and schema-check a graph document.

    Raises:
        GraphFileError: Missing file, unparsable YAML, or schema violations.
    """
    path = Path(path)
    if not path.exists():
        raise GraphFileError(f"File not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise GraphFileError(f"Invalid YAML: {e}") from e

    issues = validate_schema(data)
    if issues:
        raise GraphFileError(f"{path}: {len(issues)} schema issue(s)", issues)

    return GraphDocument(
        nodes=data["nodes"],
        options=data.get("options") or {},
        path=path,
    )


def dump_graph(document: GraphDocument, path: str | Path) -> Path:
    """Write a graph document, as JSON for ``.json`` paths and YAML otherwise."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = document.to_dict()

    with open(path, "w") as f:
        if path.suffix == ".json":
            json.dump(data, f, indent=2)
            f.write("\n")
        else:
            yaml.safe_dump(data, f, sort_keys=False)

    return path
