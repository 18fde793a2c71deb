"""Applying declarative resource documents to a search cluster."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


class ApplyError(Exception):
    """Raised when a resource document cannot be read or applied."""


# kind -> (client method, message used when metadata.name is unusable)
_HANDLERS: dict[str, tuple[str, str]] = {
    "IndexTemplate": ("create_index_template", "template name missing or invalid"),
    "ComponentTemplate": (
        "create_component_template",
        "component template name missing or invalid",
    ),
    "LifecyclePolicy": (
        "create_lifecycle_policy",
        "lifecycle policy name missing or invalid",
    ),
}


def convert_keys(value: Any) -> Any:
    """Return a copy of ``value`` in which every mapping keeps only its string keys."""
    if isinstance(value, dict):
        return {key: convert_keys(item) for key, item in value.items() if isinstance(key, str)}
    if isinstance(value, list):
        return [convert_keys(item) for item in value]
    return value


def load_resource(path: str | Path) -> dict[str, Any]:
    """Read a YAML resource document from ``path``."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise ApplyError(f"failed to open file {path}: {exc}") from exc
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ApplyError(f"failed to parse YAML: {exc}") from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ApplyError("failed to parse YAML: document is not a mapping")
    return document


def apply_resource(client: Any, resource: dict[str, Any]) -> Any:
    """Create the resource described by ``resource`` through ``client``."""
    kind = resource.get("kind")
    if not isinstance(kind, str):
        raise ApplyError("resource kind not specified or invalid")
    try:
        method_name, name_error = _HANDLERS[kind]
    except KeyError:
        raise ApplyError(f"unsupported resource kind: {kind}") from None

    metadata = resource.get("metadata")
    if not isinstance(metadata, dict):
        raise ApplyError("metadata section missing or invalid")
    name = metadata.get("name")
    if not isinstance(name, str):
        raise ApplyError(name_error)

    spec = resource.get("spec")
    if not isinstance(spec, dict):
        raise ApplyError("spec section missing or invalid")

    return getattr(client, method_name)(name, convert_keys(spec))


def apply_configuration_from_file(client: Any, filename: str | Path) -> Any:
    """Load the resource document in ``filename`` and apply it."""
    return apply_resource(client, load_resource(filename))


def default_index_template(name: str) -> dict[str, Any]:
    """Return the index template body used when no template file is given."""
    return {
        "index_patterns": [f"{name}-*"],
        "template": {
            "settings": {
                "number_of_shards": 1,
                "number_of_replicas": 0,
            },
            "mappings": {
                "properties": {
                    "@timestamp": {"type": "date"},
                    "message": {"type": "text"},
                },
            },
        },
    }


def read_template_from_file(filename: str | Path) -> dict[str, Any]:
    """Read a template body, taking the ``spec`` section of a resource-style document."""
    document = load_resource(filename)
    spec = document.get("spec")
    if isinstance(spec, dict):
        return {key: value for key, value in spec.items() if isinstance(key, str)}
    return document