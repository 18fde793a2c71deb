"""Importing cloned cluster configuration from a directory tree."""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

import yaml

IMPORT_ORDER = (
    "component-templates",
    "index-templates",
    "lifecycle-policies",
    "ingest-pipelines",
    "cluster-settings",
)

_FOLDER_KINDS = {
    "component-templates": "ComponentTemplate",
    "index-templates": "IndexTemplate",
    "lifecycle-policies": "LifecyclePolicy",
    "ingest-pipelines": "IngestPipeline",
    "cluster-settings": "ClusterSettings",
}

_EXTENSIONS = (".yaml", ".yml", ".json")


@dataclass
class ImportOptions:
    """Settings for an import run."""

    directory: str = ""
    types: list[str] = field(default_factory=list)
    continue_on_error: bool = False
    dry_run: bool = False


def infer_kind(folder: str, obj: dict[str, Any]) -> str:
    """Return the document's kind, falling back to the kind its folder implies."""
    kind = obj.get("kind")
    if isinstance(kind, str) and kind:
        return kind
    return _FOLDER_KINDS.get(folder, "")


def extract_name(obj: dict[str, Any]) -> str:
    """Return ``metadata.name`` or an empty string."""
    metadata = obj.get("metadata")
    if isinstance(metadata, dict):
        name = metadata.get("name")
        if isinstance(name, str):
            return name
    return ""


def extract_spec(obj: dict[str, Any]) -> dict[str, Any]:
    """Return the ``spec`` mapping, or the whole document if it has none."""
    spec = obj.get("spec")
    if isinstance(spec, dict):
        return spec
    return obj


def apply_one(client: Any, kind: str, name: str, spec: dict[str, Any]) -> Any:
    """Create or update one resource of the given kind."""
    if kind == "ComponentTemplate":
        return client.create_component_template(name, spec)
    if kind == "IndexTemplate":
        return client.create_index_template(name, spec)
    if kind == "LifecyclePolicy":
        return client.create_lifecycle_policy(name, spec)
    if kind == "IngestPipeline":
        return client.create_ingest_pipeline(name, spec)
    if kind == "ClusterSettings":
        return client.update_cluster_settings(spec)
    raise ValueError(f"unsupported kind: {kind}")


def collect_files(directory: str | Path) -> list[str]:
    """Return the sorted paths of all YAML and JSON files below ``directory``."""
    found = [
        os.path.join(root, name)
        for root, _dirs, files in os.walk(directory)
        for name in files
        if name.endswith(_EXTENSIONS)
    ]
    return sorted(found)


def _parse(path: str, data: bytes) -> dict[str, Any]:
    if path.endswith(".json"):
        document = json.loads(data)
    else:
        document = yaml.safe_load(data)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"{path}: document is not a mapping")
    return document


def run_import(
    client: Any,
    options: ImportOptions,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """Apply every document found under the option's directory, type by type."""
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    if not options.directory:
        raise ValueError("must provide --dir input directory")

    selected = set(options.types) if options.types else set(IMPORT_ORDER)

    for folder in IMPORT_ORDER:
        if folder not in selected:
            continue
        for path in collect_files(os.path.join(options.directory, folder)):
            try:
                data = Path(path).read_bytes()
            except OSError as exc:
                if options.continue_on_error:
                    print(f"[WARN] read {path}: {exc}", file=err)
                    continue
                raise
            try:
                obj = _parse(path, data)
            except (ValueError, yaml.YAMLError) as exc:
                if options.continue_on_error:
                    print(f"[WARN] parse {path}: {exc}", file=err)
                    continue
                raise

            kind = infer_kind(folder, obj)
            name = extract_name(obj)
            spec = extract_spec(obj)
            if options.dry_run:
                print(f"Would apply {kind}/{name} from {path}", file=out)
                continue
            try:
                apply_one(client, kind, name, spec)
            except Exception as exc:
                if options.continue_on_error:
                    print(f"[WARN] apply {path}: {exc}", file=err)
                    continue
                raise RuntimeError(f"{path}: {exc}") from exc
            print(f"Applied {kind}/{name}", file=out)


def _split_list(text: str) -> list[str]:
    return text.split(",")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``clone import`` command."""
    parser = argparse.ArgumentParser(
        prog="clone import",
        description="Import cluster configuration from a directory",
    )
    parser.add_argument("-d", "--dir", dest="directory", default="", help="input directory")
    parser.add_argument(
        "--types",
        action="extend",
        type=_split_list,
        default=[],
        help=(
            "resource types to import (component-templates,index-templates,"
            "lifecycle-policies,ingest-pipelines,cluster-settings)"
        ),
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="continue when a file fails",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="show planned operations without applying",
    )
    return parser