"""Exporting cluster configuration resources to a directory tree."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

import yaml

EXPORT_TYPES = (
    "index-templates",
    "component-templates",
    "lifecycle-policies",
    "ingest-pipelines",
    "cluster-settings",
)

_EXTENSIONS = {"json": ".json", "yaml": ".yaml"}
_DEFAULT_EXTENSION = ".yaml"


@dataclass
class ExportOptions:
    """Settings for an export run."""

    directory: str = ""
    types: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    include_system: bool = False
    all_types: bool = False
    output_format: str = "yaml"


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def select_types(types: list[str], all_types: bool = False) -> set[str]:
    """Return the resource types an export should cover."""
    requested = set(types)
    if all_types:
        requested.add("all")
    everything = not requested or "all" in requested
    selected = {kind for kind in EXPORT_TYPES if everything or kind in requested}
    if "ilm" in requested:
        selected.add("lifecycle-policies")
    return selected


def safe_name(name: str) -> str:
    """Make a resource name usable as a file name."""
    return name.replace(os.sep, "_")


def file_extension(output_format: str) -> str:
    """Return the file extension used for the given output format.

    Only ``json`` selects JSON files; every other format is written as YAML.
    """
    extension = _EXTENSIONS.get(output_format)
    if extension is None:
        extension = _DEFAULT_EXTENSION
    return extension


def write_doc(path: str | Path, doc: Any, output_format: str) -> None:
    """Write ``doc`` to ``path`` as JSON or YAML, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        if output_format == "json":
            json.dump(doc, handle, indent=2, sort_keys=True)
            handle.write("\n")
        else:
            yaml.safe_dump(doc, handle, default_flow_style=False, sort_keys=True)


def component_template_doc(template: Any) -> dict[str, Any]:
    """Build the exported document for a component template."""
    spec: dict[str, Any] = {"template": _field(template, "template")}
    version = _field(template, "version", 0)
    if version:
        spec["version"] = version
    meta = _field(template, "meta")
    if meta:
        spec["_meta"] = meta
    return {
        "kind": "ComponentTemplate",
        "metadata": {"name": _field(template, "name", "")},
        "spec": spec,
    }


def index_template_doc(template: Any) -> dict[str, Any]:
    """Build the exported document for a composable index template."""
    spec: dict[str, Any] = {"index_patterns": _field(template, "index_patterns")}
    body = _field(template, "template")
    if body is not None and any(
        _field(body, key) for key in ("settings", "mappings", "aliases")
    ):
        spec["template"] = body
    for source, target in (
        ("composed_of", "composed_of"),
        ("priority", "priority"),
        ("version", "version"),
        ("meta", "_meta"),
        ("data_stream", "data_stream"),
    ):
        value = _field(template, source)
        if value:
            spec[target] = value
    return {
        "kind": "IndexTemplate",
        "metadata": {"name": _field(template, "name", "")},
        "spec": spec,
    }


def _is_missing(exc: Exception, *, lifecycle: bool = False) -> bool:
    message = str(exc)
    if "404" in message:
        return True
    if lifecycle:
        return "no handler found" in message or "not found" in message.lower()
    return "not found" in message


def _skip(name: str, include_system: bool) -> bool:
    return not include_system and name.startswith(".")


def run_export(client: Any, options: ExportOptions, out: TextIO | None = None) -> None:
    """Write the selected cluster resources below the option's directory."""
    out = out if out is not None else sys.stdout
    if not options.directory:
        raise ValueError("must provide --dir output directory")

    base = Path(options.directory)
    fmt = options.output_format
    ext = file_extension(fmt)

    manifest = {"kind": "CloneManifest", "metadata": {}, "spec": {}}
    write_doc(base / "manifest.yaml", manifest, fmt)

    selected = select_types(options.types, options.all_types)
    patterns = options.names or [""]

    if "component-templates" in selected:
        for pattern in patterns:
            try:
                items = client.get_component_templates(pattern)
            except Exception as exc:
                if _is_missing(exc):
                    continue
                raise
            for item in items:
                name = _field(item, "name", "")
                if _skip(name, options.include_system):
                    continue
                path = base / "component-templates" / (safe_name(name) + ext)
                write_doc(path, component_template_doc(item), fmt)

    if "index-templates" in selected:
        for pattern in patterns:
            try:
                items = client.get_index_templates(pattern)
            except Exception as exc:
                if _is_missing(exc):
                    continue
                raise
            for item in items:
                name = _field(item, "name", "")
                if _skip(name, options.include_system):
                    continue
                path = base / "index-templates" / (safe_name(name) + ext)
                write_doc(path, index_template_doc(item), fmt)

    if "lifecycle-policies" in selected:
        for pattern in patterns:
            try:
                items = client.get_lifecycle_policies(pattern)
            except Exception as exc:
                if _is_missing(exc, lifecycle=True):
                    continue
                raise
            for item in items:
                name = _field(item, "name", "")
                if _skip(name, options.include_system):
                    continue
                doc = {
                    "kind": "LifecyclePolicy",
                    "metadata": {"name": name},
                    "spec": _field(item, "policy"),
                }
                path = base / "lifecycle-policies" / (safe_name(name) + ext)
                write_doc(path, doc, fmt)

    if "ingest-pipelines" in selected:
        for pattern in patterns:
            for item in client.get_ingest_pipelines(pattern):
                name = _field(item, "name", "")
                if _skip(name, options.include_system):
                    continue
                doc = {
                    "kind": "IngestPipeline",
                    "metadata": {"name": name},
                    "spec": _field(item, "body"),
                }
                path = base / "ingest-pipelines" / (safe_name(name) + ext)
                write_doc(path, doc, fmt)

    if "cluster-settings" in selected:
        settings = client.get_cluster_settings()
        doc = {
            "kind": "ClusterSettings",
            "metadata": {},
            "spec": {
                "persistent": _field(settings, "persistent"),
                "transient": _field(settings, "transient"),
            },
        }
        write_doc(base / "cluster-settings" / ("cluster-settings" + ext), doc, fmt)

    print(f"Exported resources to {options.directory}", file=out)