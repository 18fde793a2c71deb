"""Detailed views of single cluster resources, and the ``describe`` command parser."""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from typing import Any

_STRUCTURED_FORMATS = ("json", "yaml")


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _structured(output_format: str) -> bool:
    return output_format in _STRUCTURED_FORMATS


def describe_index(client: Any, name: str) -> dict[str, Any]:
    """Return the details of one index as labelled values."""
    index = client.get_index(name)
    return {
        "Name": _field(index, "name", ""),
        "Health": _field(index, "health", ""),
        "Status": _field(index, "status", ""),
        "UUID": _field(index, "uuid", ""),
        "Primary Shards": _field(index, "primary", ""),
        "Replica Shards": _field(index, "replica", ""),
        "Documents Count": _field(index, "docs_count", ""),
        "Documents Deleted": _field(index, "docs_deleted", ""),
        "Store Size": _field(index, "store_size", ""),
        "Primary Store Size": _field(index, "primary_store_size", ""),
    }


def describe_node(client: Any, node_id: str, output_format: str = "table") -> Any:
    """Return a node as fetched for JSON/YAML output, or as labelled values otherwise."""
    node = client.get_node(node_id)
    if _structured(output_format):
        return node
    return {
        "Name": _field(node, "name", ""),
        "Host": _field(node, "host", ""),
        "IP": _field(node, "ip", ""),
        "NodeRole": _field(node, "node_role", ""),
        "Master": _field(node, "master", ""),
        "CPU": _field(node, "cpu", ""),
        "RAMPercent": _field(node, "ram_percent", ""),
        "HeapPercent": _field(node, "heap_percent", ""),
        "Load1m": _field(node, "load_1m", ""),
        "Load5m": _field(node, "load_5m", ""),
        "Load15m": _field(node, "load_15m", ""),
    }


def describe_data_stream(client: Any, name: str, output_format: str = "table") -> Any:
    """Return a data stream as fetched for JSON/YAML output, or as labelled values."""
    stream = client.get_data_stream(name)
    if _structured(output_format):
        return stream
    indices = [
        {
            "IndexName": _field(index, "index_name", ""),
            "IndexUUID": _field(index, "index_uuid", ""),
            "PreferILM": _field(index, "prefer_ilm", False),
            "ManagedBy": _field(index, "managed_by", ""),
        }
        for index in _field(stream, "indices") or []
    ]
    return {
        "Name": _field(stream, "name", ""),
        "Generation": _field(stream, "generation", 0),
        "Status": _field(stream, "status", ""),
        "TimestampField": _field(stream, "timestamp_field"),
        "Template": _field(stream, "template", ""),
        "Hidden": _field(stream, "hidden", False),
        "System": _field(stream, "system", False),
        "ILMPolicy": _field(stream, "ilm_policy", ""),
        "Indices": indices,
    }


def describe_index_template(
    client: Any, name: str, output_format: str = "table", show_body: bool = False
) -> Any:
    """Return a composable index template, summarised unless JSON/YAML is wanted."""
    template = client.get_index_template(name)
    if _structured(output_format):
        return template
    data: dict[str, Any] = {
        "Name": _field(template, "name", ""),
        "IndexPatterns": _field(template, "index_patterns"),
        "Priority": _field(template, "priority", 0),
        "Version": _field(template, "version", 0),
        "ComposedOf": _field(template, "composed_of"),
    }
    if show_body:
        data["Template"] = _field(template, "template")
        meta = _field(template, "meta")
        if meta:
            data["Meta"] = meta
        data_stream = _field(template, "data_stream")
        if data_stream:
            data["DataStream"] = data_stream
    return data


def describe_component_template(
    client: Any, name: str, output_format: str = "table", show_body: bool = False
) -> Any:
    """Return a component template, summarised unless JSON/YAML is wanted."""
    template = client.get_component_template(name)
    if _structured(output_format):
        return template
    data: dict[str, Any] = {
        "Name": _field(template, "name", ""),
        "Version": _field(template, "version", 0),
    }
    if show_body:
        data["Template"] = _field(template, "template")
        meta = _field(template, "meta")
        if meta:
            data["Meta"] = meta
    return data


def describe_lifecycle_policy(
    client: Any, name: str, output_format: str = "table", show_body: bool = False
) -> Any:
    """Return a lifecycle policy, summarised unless JSON/YAML is wanted."""
    policy = client.get_lifecycle_policy(name)
    if _structured(output_format):
        return policy
    data: dict[str, Any] = {
        "Name": _field(policy, "name", ""),
        "Version": _field(policy, "version", 0),
        "ModifiedDate": _field(policy, "modified_date", ""),
    }
    if show_body:
        data["Policy"] = _field(policy, "policy")
    return data


def explain_allocation(
    client: Any,
    index: str,
    shard: int = 0,
    primary: bool = False,
    include_yes: bool = False,
    include_disk: bool = False,
) -> Any:
    """Ask the cluster why a shard is, or is not, allocated where it is."""
    if not index:
        raise ValueError("--index is required")
    if shard < 0:
        raise ValueError("--shard must be >= 0")
    request = {"index": index, "shard": shard, "primary": primary}
    return client.explain_allocation(request, include_yes, include_disk)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``describe`` command."""
    parser = argparse.ArgumentParser(
        prog="describe",
        description="Show detailed information about a specific resource.",
    )
    commands = parser.add_subparsers(dest="command", title="Available Commands")

    index = commands.add_parser(
        "index",
        aliases=["idx"],
        help="Describe an index",
        description="Show detailed information about a specific index.",
    )
    index.add_argument("name", metavar="INDEX_NAME")
    index.set_defaults(resource="index")

    policy = commands.add_parser(
        "lifecycle-policy",
        aliases=[
            "lifecyclepolicy",
            "lifecycle-policies",
            "lifecyclepolicies",
            "ilm",
            "ism",
            "lp",
            "lifecycle",
        ],
        help="Describe a lifecycle policy",
        description="Show detailed information about a specific lifecycle policy (ILM or ISM).",
    )
    policy.add_argument("name", metavar="NAME")
    policy.add_argument(
        "--show-body", action="store_true", help="include full policy body in table output"
    )
    policy.set_defaults(resource="lifecycle-policy")

    index_template = commands.add_parser(
        "index-template",
        aliases=["idx-templates", "template", "it", "indextemplates", "indextemplate"],
        help="Describe an index template",
        description="Show detailed information about a specific composable index template.",
    )
    index_template.add_argument("name", metavar="NAME")
    index_template.add_argument(
        "--show-body", action="store_true", help="include full template body in table output"
    )
    index_template.set_defaults(resource="index-template")

    component_template = commands.add_parser(
        "component-template",
        aliases=[
            "componenttemplates",
            "componenttemplate",
            "ct",
            "comp-templates",
            "comp-template",
        ],
        help="Describe a component template",
        description="Show detailed information about a specific component template.",
    )
    component_template.add_argument("name", metavar="NAME")
    component_template.add_argument(
        "--show-body", action="store_true", help="include full template body in table output"
    )
    component_template.set_defaults(resource="component-template")

    stream = commands.add_parser(
        "datastream",
        aliases=["datastreams", "ds"],
        help="Describe a data stream",
        description="Show detailed information about a specific data stream.",
    )
    stream.add_argument("name", metavar="NAME")
    stream.set_defaults(resource="datastream")

    node = commands.add_parser(
        "node",
        aliases=["no"],
        help="Describe a node",
        description="Show detailed information about a specific node by name or IP.",
    )
    node.add_argument("node_id", metavar="NODE_ID")
    node.set_defaults(resource="node")

    allocation = commands.add_parser(
        "allocation",
        help="Explain shard allocation decisions",
        description=(
            "Explain shard allocation decisions for a given shard using the cluster "
            "allocation explain API."
        ),
    )
    allocation.add_argument("--index", default="", help="index name")
    allocation.add_argument("--shard", type=int, default=0, help="shard number (required)")
    allocation.add_argument(
        "--primary", action="store_true", help="explain primary shard (default replica)"
    )
    allocation.add_argument("--include-yes", action="store_true", help="include yes decisions")
    allocation.add_argument("--include-disk", action="store_true", help="include disk info")
    allocation.set_defaults(resource="allocation")

    return parser