"""Table rows for listing cluster resources, and the ``get`` command parser."""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from typing import Any


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def component_template_rows(client: Any, pattern: str = "") -> list[dict[str, Any]]:
    """Return one row per component template matching ``pattern``."""
    return [
        {"NAME": _field(item, "name", ""), "VERSION": _field(item, "version", 0)}
        for item in client.get_component_templates(pattern)
    ]


def data_stream_rows(client: Any, pattern: str = "") -> list[dict[str, Any]]:
    """Return one row per data stream matching ``pattern``."""
    rows = []
    for stream in client.get_data_streams(pattern):
        indices = _field(stream, "indices") or []
        rows.append(
            {
                "NAME": _field(stream, "name", ""),
                "STATUS": _field(stream, "status", ""),
                "INDICES": len(indices),
                "GENERATION": _field(stream, "generation", 0),
                "TEMPLATE": _field(stream, "template", ""),
                "TIMESTAMP": _field(_field(stream, "timestamp_field"), "name", ""),
            }
        )
    return rows


def index_template_rows(client: Any, pattern: str = "") -> list[dict[str, Any]]:
    """Return one row per composable index template matching ``pattern``."""
    return [
        {
            "NAME": _field(item, "name", ""),
            "PATTERNS": _field(item, "index_patterns"),
            "PRIORITY": _field(item, "priority", 0),
            "VERSION": _field(item, "version", 0),
        }
        for item in client.get_index_templates(pattern)
    ]


def index_rows(client: Any, pattern: str = "") -> list[dict[str, Any]]:
    """Return one row per index matching ``pattern``."""
    return [
        {
            "NAME": _field(index, "name", ""),
            "HEALTH": _field(index, "health", ""),
            "STATUS": _field(index, "status", ""),
            "UUID": _field(index, "uuid", ""),
            "PRI": _field(index, "primary", ""),
            "REP": _field(index, "replica", ""),
            "DOCS.COUNT": _field(index, "docs_count", ""),
            "STORE.SIZE": _field(index, "store_size", ""),
        }
        for index in client.get_indices(pattern)
    ]


def lifecycle_policy_rows(client: Any, pattern: str = "") -> list[dict[str, Any]]:
    """Return one row per lifecycle policy matching ``pattern``."""
    return [
        {
            "NAME": _field(policy, "name", ""),
            "VERSION": _field(policy, "version", 0),
            "MODIFIED_DATE": _field(policy, "modified_date", ""),
        }
        for policy in client.get_lifecycle_policies(pattern)
    ]


def shard_rows(client: Any, pattern: str = "") -> list[dict[str, Any]]:
    """Return one row per shard allocation of the indices matching ``pattern``."""
    return [
        {
            "INDEX": _field(row, "index", ""),
            "SHARD": _field(row, "shard", ""),
            "PRI/REP": _field(row, "primary_or_replica", ""),
            "STATE": _field(row, "state", ""),
            "DOCS": _field(row, "docs", ""),
            "STORE": _field(row, "store", ""),
            "IP": _field(row, "ip", ""),
            "NODE": _field(row, "node", ""),
            "UNASSIGN": _field(row, "unassigned_reason", ""),
        }
        for row in client.get_shards(pattern)
    ]


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``get`` command."""
    parser = argparse.ArgumentParser(
        prog="get",
        description="Get and display one or many resources from the search cluster.",
    )
    commands = parser.add_subparsers(dest="command", title="Available Commands")

    indices = commands.add_parser(
        "indices",
        aliases=["index", "idx"],
        help="List indices",
        description="List all indices or indices matching a pattern.",
    )
    indices.add_argument("pattern", nargs="?", default="", metavar="INDEX_PATTERN")
    indices.set_defaults(resource="indices")

    nodes = commands.add_parser(
        "nodes",
        aliases=["node", "no"],
        help="List nodes",
        description="List all nodes with optional filtering, sorting, and custom columns.",
    )
    nodes.add_argument("node_name", nargs="?", default="", metavar="NODE_NAME")
    nodes.add_argument(
        "--role",
        default="",
        help="Filter by node role (substring match, e.g. data, master, ingest)",
    )
    nodes.add_argument(
        "--selector", default="", help="Reserved for attribute filtering (key=value[,key=value])"
    )
    nodes.add_argument("--name", default="", help="Filter by node name or IP substring")
    nodes.add_argument(
        "--sort",
        default="",
        help=(
            "Comma-separated sort columns (case-insensitive). Common: NAME, IP, CPU, "
            "HEAP.PERCENT, RAM.PERCENT, LOAD_1M, LOAD_5M, LOAD_15M"
        ),
    )
    nodes.add_argument("--desc", action="store_true", help="Sort in descending order")
    nodes.add_argument(
        "--limit", type=int, default=0, help="Limit number of rows after filtering and sorting"
    )
    nodes.add_argument(
        "--columns",
        default="",
        help=(
            "Override table columns (CSV). Default: NAME,HOST,IP,HEAP.PERCENT,RAM.PERCENT,"
            "CPU,LOAD_1M,ROLE,MASTER. With -o wide: adds LOAD_5M,LOAD_15M"
        ),
    )
    nodes.set_defaults(resource="nodes")

    streams = commands.add_parser(
        "datastreams",
        aliases=["datastream", "ds"],
        help="List data streams",
        description="List all data streams or data streams matching a pattern.",
    )
    streams.add_argument("pattern", nargs="?", default="", metavar="PATTERN")
    streams.set_defaults(resource="datastreams")

    index_templates = commands.add_parser(
        "index-templates",
        aliases=["idx-templates", "template", "it", "index-template", "indextemplates", "indextemplate"],
        help="Get index templates",
        description="Get index templates from the search cluster.",
    )
    index_templates.add_argument("pattern", nargs="?", default="", metavar="PATTERN")
    index_templates.set_defaults(resource="index-templates")

    component_templates = commands.add_parser(
        "component-templates",
        aliases=[
            "componenttemplates",
            "component-template",
            "componenttemplate",
            "ct",
            "comp-templates",
            "comp-template",
        ],
        help="Get component templates",
        description="Get component templates from the search cluster.",
    )
    component_templates.add_argument("pattern", nargs="?", default="", metavar="PATTERN")
    component_templates.set_defaults(resource="component-templates")

    policies = commands.add_parser(
        "lifecycle-policies",
        aliases=[
            "lifecyclepolicies",
            "lifecycle-policy",
            "lifecyclepolicy",
            "ilm",
            "ism",
            "lp",
            "lifecycle",
        ],
        help="Get lifecycle policies",
        description=(
            "Get lifecycle policies from the search cluster "
            "(ILM for Elasticsearch, ISM for OpenSearch)."
        ),
    )
    policies.add_argument("pattern", nargs="?", default="", metavar="PATTERN")
    policies.set_defaults(resource="lifecycle-policies")

    shards = commands.add_parser(
        "shards",
        aliases=["shard"],
        help="List shard allocations",
        description="List shard allocations for the cluster or matching indices.",
    )
    shards.add_argument("pattern", nargs="?", default="", metavar="INDEX_PATTERN")
    shards.set_defaults(resource="shards")

    return parser