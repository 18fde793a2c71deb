"""Summaries of cluster statistics and cluster state."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_DEFAULT_STATE_METRICS = ("metadata", "routing_table", "nodes", "blocks")


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def to_float(value: Any) -> float:
    """Convert a number or a numeric string prefix to float; anything else is 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value.lstrip())
        return float(match.group()) if match else 0.0
    return 0.0


def format_bytes(value: Any) -> str:
    """Render a byte count in binary units, e.g. ``1.5 KB``."""
    amount = to_float(value)
    unit = 0
    while amount >= 1024.0 and unit < len(_UNITS) - 1:
        amount /= 1024.0
        unit += 1
    if unit == 0:
        return f"{amount:.0f} {_UNITS[unit]}"
    return f"{amount:.1f} {_UNITS[unit]}"


def split_and_trim(text: str) -> list[str]:
    """Split a comma list, dropping blanks and turning dashes into underscores."""
    return [part.strip().replace("-", "_") for part in text.split(",") if part.strip()]


def _get(mapping: Any, key: str) -> Any:
    return mapping.get(key) if isinstance(mapping, Mapping) else None


def stats_summary(stats: Any) -> dict[str, Any]:
    """Condense a cluster stats payload into labelled values."""
    nodes = _field(stats, "nodes")
    indices = _field(stats, "indices")
    summary: dict[str, Any] = {"Cluster Name": _field(stats, "cluster_name", "")}

    count = _get(nodes, "count")
    if isinstance(count, Mapping):
        if "total" in count:
            summary["Nodes"] = count["total"]
        if "data" in count:
            summary["Data Nodes"] = count["data"]
    index_count = _get(indices, "count")
    if index_count is not None:
        summary["Indices"] = index_count
    shards = _get(indices, "shards")
    if isinstance(shards, Mapping):
        if "total" in shards:
            summary["Shards Total"] = shards["total"]
        if "primaries" in shards:
            summary["Shards Primaries"] = shards["primaries"]
    docs = _get(indices, "docs")
    if isinstance(docs, Mapping) and "count" in docs:
        summary["Docs Count"] = docs["count"]
    store = _get(indices, "store")
    if isinstance(store, Mapping) and "size_in_bytes" in store:
        summary["Store"] = format_bytes(store["size_in_bytes"])
    fs = _get(nodes, "fs")
    if isinstance(fs, Mapping):
        if "total_in_bytes" in fs:
            summary["FS Total"] = format_bytes(fs["total_in_bytes"])
        if "available_in_bytes" in fs:
            summary["FS Available"] = format_bytes(fs["available_in_bytes"])
    jvm = _get(nodes, "jvm")
    mem = _get(jvm, "mem")
    if isinstance(mem, Mapping):
        if "heap_used_in_bytes" in mem:
            summary["JVM Heap Used"] = format_bytes(mem["heap_used_in_bytes"])
        if "heap_max_in_bytes" in mem:
            summary["JVM Heap Max"] = format_bytes(mem["heap_max_in_bytes"])
    return summary


def state_summary(state: Any, metrics: list[str] | None = None) -> dict[str, Any]:
    """Condense a cluster state payload, covering the requested metrics."""
    metrics = list(metrics or [])
    selected = set(metrics) if metrics else set(_DEFAULT_STATE_METRICS)
    data: dict[str, Any] = {
        "Cluster Name": _field(state, "cluster_name", ""),
        "State UUID": _field(state, "state_uuid", ""),
        "Metrics": ",".join(metrics) if metrics else "all",
    }

    if "metadata" in selected:
        md_indices = _get(_field(state, "metadata"), "indices")
        if isinstance(md_indices, Mapping):
            data["Metadata Indices"] = len(md_indices)

    if "routing_table" in selected:
        rt_indices = _get(_field(state, "routing_table"), "indices")
        if isinstance(rt_indices, Mapping):
            data["Routing Indices"] = len(rt_indices)
            total = primaries = replicas = 0
            for index in rt_indices.values():
                shards = _get(index, "shards")
                if not isinstance(shards, Mapping):
                    continue
                for allocations in shards.values():
                    if not isinstance(allocations, list):
                        continue
                    total += len(allocations)
                    for allocation in allocations:
                        if not isinstance(allocation, Mapping):
                            continue
                        if allocation.get("primary") is True:
                            primaries += 1
                        else:
                            replicas += 1
            data["Routing Shards Total"] = total
            data["Routing Shards Primaries"] = primaries
            data["Routing Shards Replicas"] = replicas

    if "nodes" in selected:
        data["Nodes In State"] = len(_field(state, "nodes") or {})

    if "blocks" in selected:
        blocked = _get(_field(state, "blocks"), "indices")
        if isinstance(blocked, Mapping):
            data["Blocked Indices"] = len(blocked)
            names = list(blocked)[:10]
            if names:
                data["Blocked Index Names"] = ",".join(names)
    return data