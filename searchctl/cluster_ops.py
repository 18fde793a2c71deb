"""Cluster-wide operations and configuration commands."""

from __future__ import annotations

import argparse
import json
from collections.abc import Mapping
from typing import Any

_HEALTH_FIELDS = (
    ("Cluster Name", "cluster_name"),
    ("Status", "status"),
    ("Timed Out", "timed_out"),
    ("Number of Nodes", "number_of_nodes"),
    ("Number of Data Nodes", "number_of_data_nodes"),
    ("Active Primary Shards", "active_primary_shards"),
    ("Active Shards", "active_shards"),
    ("Relocating Shards", "relocating_shards"),
    ("Initializing Shards", "initializing_shards"),
    ("Unassigned Shards", "unassigned_shards"),
)

_INFO_FIELDS = (
    ("Name", "name"),
    ("Cluster Name", "cluster_name"),
    ("Cluster UUID", "cluster_uuid"),
    ("Version", "version"),
    ("Tagline", "tagline"),
)


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def cluster_health(client: Any) -> dict[str, Any]:
    """Return the cluster health as labelled values."""
    health = client.cluster_health()
    return {label: _field(health, name) for label, name in _HEALTH_FIELDS}


def cluster_info(client: Any) -> dict[str, Any]:
    """Return general cluster information as labelled values."""
    info = client.cluster_info()
    return {label: _field(info, name) for label, name in _INFO_FIELDS}


def pending_tasks(client: Any) -> dict[str, Any]:
    """Return the cluster's pending tasks and their count."""
    tasks = _field(client.cluster_pending_tasks(), "tasks") or []
    return {"Tasks": tasks, "Count": len(tasks)}


def allocation_settings_body(
    enable: str = "", rebalance: str = "", awareness: str = ""
) -> dict[str, Any]:
    """Build the transient settings update for shard allocation options."""
    transient: dict[str, Any] = {}
    if enable:
        transient["cluster.routing.allocation.enable"] = enable
    if rebalance:
        transient["cluster.routing.rebalance.enable"] = rebalance
    if awareness:
        transient["cluster.routing.allocation.awareness.attributes"] = awareness.strip()
    return {"transient": transient, "persistent": {}}


def update_allocation_settings(
    client: Any, enable: str = "", rebalance: str = "", awareness: str = ""
) -> Any:
    """Apply allocation settings, or fetch the current settings when none are given.

    Returns the current cluster settings in the first case and the update body
    that was sent in the second.
    """
    if not (enable or rebalance or awareness):
        return client.get_cluster_settings()
    body = allocation_settings_body(enable, rebalance, awareness)
    client.update_cluster_settings(body)
    return body


def use_context(name: str) -> str:
    """Return the message reporting a switch to the named context."""
    return f"Switched to context {json.dumps(name, ensure_ascii=False)}"


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``cluster`` and ``config`` commands."""
    parser = argparse.ArgumentParser(prog="searchctl")
    commands = parser.add_subparsers(dest="command")

    cluster = commands.add_parser(
        "cluster", help="Cluster operations", description="Perform cluster-wide operations."
    )
    cluster_commands = cluster.add_subparsers(dest="subcommand")
    cluster_commands.add_parser(
        "health", help="Show cluster health", description="Display the health status of the cluster."
    )
    cluster_commands.add_parser(
        "info",
        help="Show cluster information",
        description="Display general information about the cluster.",
    )
    stats = cluster_commands.add_parser(
        "stats", help="Show cluster statistics", description="Display cluster statistics summary."
    )
    stats.add_argument("--raw", action="store_true", help="output full cluster stats payload")
    state = cluster_commands.add_parser(
        "state",
        help="Show cluster state",
        description="Display cluster state with optional metric and index filtering.",
    )
    state.add_argument(
        "--metrics",
        default="",
        help="comma-separated metrics (e.g. metadata,routing_table,blocks,nodes)",
    )
    state.add_argument("--indices", default="", help="indices filter for state")
    state.add_argument(
        "--master-timeout", default="", help="timeout for connecting to master (e.g. 30s)"
    )
    state.add_argument("--raw", action="store_true", help="output full cluster state payload")
    cluster_commands.add_parser(
        "pending-tasks", help="Show cluster pending tasks", description="Display cluster pending tasks."
    )
    allocation = cluster_commands.add_parser(
        "allocation-settings",
        help="Get or set cluster shard allocation settings",
        description=(
            "Get or set cluster shard allocation settings like enable, rebalance, "
            "and awareness attributes."
        ),
    )
    allocation.add_argument(
        "--enable", default="", help="allocation enable (all|primaries|new_primaries|none)"
    )
    allocation.add_argument(
        "--rebalance", default="", help="rebalance enable (all|primaries|replicas|none)"
    )
    allocation.add_argument(
        "--awareness-attrs",
        dest="awareness",
        default="",
        help="allocation awareness attributes (comma-separated)",
    )

    config = commands.add_parser(
        "config",
        help="Modify searchctl configuration",
        description="Display and modify searchctl configuration settings.",
    )
    config_commands = config.add_subparsers(dest="subcommand")
    config_commands.add_parser(
        "view",
        help="Display current configuration",
        description="Display the current searchctl configuration.",
    )
    use = config_commands.add_parser(
        "use-context",
        help="Set the current context",
        description="Set the current context for searchctl operations.",
    )
    use.add_argument("context_name", metavar="CONTEXT_NAME")
    return parser