import pytest

from searchctl.cluster_summary import (
    format_bytes,
    split_and_trim,
    state_summary,
    stats_summary,
    to_float,
)


@pytest.mark.parametrize("value", [7, 7.0, "7", " 7.0"])
def test_to_float_numbers_and_strings(value):
    assert to_float(value) == 7.0


@pytest.mark.parametrize("value", [None, "abc", [], True])
def test_to_float_unusable_is_zero(value):
    assert to_float(value) == 0.0


def test_format_bytes_small_and_kilo():
    assert format_bytes(0) == "0 B"
    assert format_bytes(1024) == "1.0 KB"


def test_format_bytes_string_matches_number():
    assert format_bytes("2048") == format_bytes(2048)


def test_format_bytes_caps_at_largest_unit():
    assert format_bytes(1024 ** 7).endswith(" PB")


def test_split_and_trim():
    assert split_and_trim(" metadata , routing-table,, ") == ["metadata", "routing_table"]
    assert split_and_trim("") == []


def test_stats_summary_full():
    stats = {
        "cluster_name": "demo",
        "nodes": {
            "count": {"total": 3, "data": 2},
            "fs": {"total_in_bytes": 4096, "available_in_bytes": 2048},
            "jvm": {"mem": {"heap_used_in_bytes": 512, "heap_max_in_bytes": 1024}},
        },
        "indices": {
            "count": 5,
            "shards": {"total": 10, "primaries": 5},
            "docs": {"count": 99},
            "store": {"size_in_bytes": 4096},
        },
    }
    summary = stats_summary(stats)
    assert summary["Cluster Name"] == "demo"
    assert summary["Nodes"] == 3
    assert summary["Data Nodes"] == 2
    assert summary["Indices"] == 5
    assert summary["Shards Total"] == 10
    assert summary["Docs Count"] == 99
    assert summary["Store"] == format_bytes(4096)
    assert summary["FS Available"] == format_bytes(2048)
    assert summary["JVM Heap Max"] == format_bytes(1024)


def test_stats_summary_empty():
    assert stats_summary({"cluster_name": "x", "nodes": None, "indices": {}}) == {"Cluster Name": "x"}


def _state():
    return {
        "cluster_name": "demo",
        "state_uuid": "uuid-1",
        "metadata": {"indices": {"a": {}, "b": {}}},
        "routing_table": {
            "indices": {
                "a": {"shards": {"0": [{"primary": True}, {"primary": False}]}},
                "b": {"shards": {"0": [{"primary": True}]}},
            }
        },
        "nodes": {"n1": {}, "n2": {}},
        "blocks": {"indices": {f"idx{i:02d}": {} for i in range(12)}},
    }


def test_state_summary_defaults():
    data = state_summary(_state(), [])
    assert data["Metrics"] == "all"
    assert data["Metadata Indices"] == 2
    assert data["Routing Indices"] == 2
    assert data["Routing Shards Total"] == data["Routing Shards Primaries"] + data["Routing Shards Replicas"]
    assert data["Routing Shards Primaries"] == 2
    assert data["Nodes In State"] == 2
    assert data["Blocked Indices"] == 12
    assert len(data["Blocked Index Names"].split(",")) == 10


def test_state_summary_selected_metrics():
    data = state_summary(_state(), ["nodes"])
    assert data == {
        "Cluster Name": "demo",
        "State UUID": "uuid-1",
        "Metrics": "nodes",
        "Nodes In State": 2,
    }