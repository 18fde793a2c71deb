"""Listing cluster nodes with filtering, sorting and column selection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import cmp_to_key
from typing import Any

_DEFAULT_COLUMNS = (
    "NAME",
    "HOST",
    "IP",
    "HEAP.PERCENT",
    "RAM.PERCENT",
    "CPU",
    "LOAD_1M",
    "ROLE",
    "MASTER",
)
_WIDE_COLUMNS = ("LOAD_5M", "LOAD_15M")

_COLUMN_FIELDS = {
    "NAME": "name",
    "HOST": "host",
    "IP": "ip",
    "HEAP.PERCENT": "heap_percent",
    "RAM.PERCENT": "ram_percent",
    "CPU": "cpu",
    "LOAD_1M": "load_1m",
    "LOAD_5M": "load_5m",
    "LOAD_15M": "load_15m",
    "ROLE": "node_role",
    "MASTER": "master",
}

# filter word -> role letters that satisfy it
_ROLE_ALIASES = {
    "data": "d",
    "d": "d",
    "ingest": "i",
    "i": "i",
    "ml": "ml",
    "machine_learning": "ml",
    "transform": "t",
    "t": "t",
    "remote": "r",
    "remote_cluster_client": "r",
    "r": "r",
    "voting": "v",
    "voting_only": "v",
    "v": "v",
}


def _field(obj: Any, name: str, default: Any = "") -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def default_columns() -> list[str]:
    """Return the columns shown when none are requested."""
    return list(_DEFAULT_COLUMNS)


def parse_columns(csv: str) -> list[str]:
    """Split a comma list of column names, upper-casing and dropping blanks."""
    return [part.strip().upper() for part in csv.split(",") if part.strip()]


def parse_selector(selector: str) -> dict[str, str]:
    """Parse ``key=value[,key=value]`` pairs; pairs without ``=`` are ignored."""
    result: dict[str, str] = {}
    for pair in selector.split(","):
        pair = pair.strip()
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        if sep:
            result[key.strip()] = value.strip()
    return result


def value_for_column(column: str, node: Any) -> Any:
    """Return the node's value for a column name, or an empty string if unknown."""
    field_name = _COLUMN_FIELDS.get(column.upper())
    if field_name is None:
        return ""
    return _field(node, field_name)


def matches_role(node: Any, role_filter: str) -> bool:
    """Tell whether a node carries the role named by a friendly name or role letter."""
    wanted = role_filter.strip().lower()
    if not wanted:
        return True
    roles = _text(_field(node, "node_role")).lower()
    if wanted in ("master", "m"):
        return _field(node, "master") == "*" or "m" in roles
    if wanted in ("coordinating", "coord", "-"):
        return roles in ("-", "")
    return _ROLE_ALIASES.get(wanted, wanted) in roles


def filter_nodes(
    nodes: Iterable[Any],
    role_filter: str = "",
    selector: str = "",
    name_filter: str = "",
) -> list[Any]:
    """Keep the nodes matching the role and name filters.

    The selector is accepted but not applied: node attributes are not part of
    the node listing.
    """
    role_filter = role_filter.strip().lower()
    name_filter = name_filter.strip().lower()
    kept = []
    for node in nodes:
        if role_filter and not matches_role(node, role_filter):
            continue
        if name_filter:
            haystack = f"{_text(_field(node, 'name'))} {_text(_field(node, 'ip'))}".lower()
            if name_filter not in haystack:
                continue
        kept.append(node)
    return kept


def _as_number(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def sort_nodes(nodes: Iterable[Any], sort_by: str, descending: bool = False) -> list[Any]:
    """Return the nodes sorted stably by one or more comma-separated columns.

    Values that both read as numbers compare numerically, others as text.
    """
    columns = parse_columns(sort_by)

    def less(a: Any, b: Any) -> bool:
        for column in columns:
            left = _text(value_for_column(column, a))
            right = _text(value_for_column(column, b))
            if left == right:
                continue
            left_num, right_num = _as_number(left), _as_number(right)
            if left_num is not None and right_num is not None:
                return left_num > right_num if descending else left_num < right_num
            return left > right if descending else left < right
        return False

    def compare(a: Any, b: Any) -> int:
        if less(a, b):
            return -1
        if less(b, a):
            return 1
        return 0

    return sorted(nodes, key=cmp_to_key(compare))


def node_rows(nodes: Iterable[Any], columns: list[str]) -> list[dict[str, Any]]:
    """Build table rows; each carries its column order under ``__columns``."""
    order = ",".join(columns)
    rows = []
    for node in nodes:
        row: dict[str, Any] = {"__columns": order}
        row.update((column, value_for_column(column, node)) for column in columns)
        rows.append(row)
    return rows


def list_nodes(
    client: Any,
    role_filter: str = "",
    selector: str = "",
    name_filter: str = "",
    sort_by: str = "",
    descending: bool = False,
    limit: int = 0,
    columns_csv: str = "",
    wide: bool = False,
) -> list[dict[str, Any]]:
    """Fetch the cluster's nodes and return them as filtered, sorted table rows."""
    nodes = filter_nodes(client.get_nodes(), role_filter, selector, name_filter)
    if sort_by:
        nodes = sort_nodes(nodes, sort_by, descending)
    if 0 < limit < len(nodes):
        nodes = nodes[:limit]

    columns = default_columns()
    if wide:
        columns.extend(_WIDE_COLUMNS)
    if columns_csv:
        columns = parse_columns(columns_csv)
    return node_rows(nodes, columns)