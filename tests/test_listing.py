from types import SimpleNamespace

import pytest

from searchctl.listing import (
    build_parser,
    component_template_rows,
    data_stream_rows,
    index_rows,
    index_template_rows,
    lifecycle_policy_rows,
    shard_rows,
)


class FakeClient:
    def __init__(self):
        self.patterns = []

    def get_component_templates(self, pattern):
        self.patterns.append(pattern)
        return [{"name": "base", "version": 3}]

    def get_data_streams(self, pattern):
        self.patterns.append(pattern)
        return [
            {
                "name": "logs-app",
                "status": "GREEN",
                "indices": [{"index_name": ".ds-1"}, {"index_name": ".ds-2"}],
                "generation": 2,
                "template": "logs",
                "timestamp_field": {"name": "@timestamp"},
            }
        ]

    def get_index_templates(self, pattern):
        self.patterns.append(pattern)
        return [{"name": "logs", "index_patterns": ["logs-*"], "priority": 100, "version": 1}]

    def get_indices(self, pattern):
        self.patterns.append(pattern)
        return [
            SimpleNamespace(
                name="idx",
                health="green",
                status="open",
                uuid="abc",
                primary="1",
                replica="0",
                docs_count="42",
                store_size="1kb",
            )
        ]

    def get_lifecycle_policies(self, pattern):
        self.patterns.append(pattern)
        return [{"name": "hot", "version": 5, "modified_date": "2024-01-01"}]

    def get_shards(self, pattern):
        self.patterns.append(pattern)
        return [
            {
                "index": "idx",
                "shard": "0",
                "primary_or_replica": "p",
                "state": "STARTED",
                "docs": "10",
                "store": "1kb",
                "ip": "127.0.0.1",
                "node": "n1",
                "unassigned_reason": "",
            }
        ]


def test_component_template_rows():
    client = FakeClient()
    assert component_template_rows(client, "b*") == [{"NAME": "base", "VERSION": 3}]
    assert client.patterns == ["b*"]


def test_data_stream_rows():
    rows = data_stream_rows(FakeClient(), "")
    assert rows == [
        {
            "NAME": "logs-app",
            "STATUS": "GREEN",
            "INDICES": 2,
            "GENERATION": 2,
            "TEMPLATE": "logs",
            "TIMESTAMP": "@timestamp",
        }
    ]


def test_index_template_rows():
    assert index_template_rows(FakeClient()) == [
        {"NAME": "logs", "PATTERNS": ["logs-*"], "PRIORITY": 100, "VERSION": 1}
    ]


def test_index_rows_from_objects():
    row = index_rows(FakeClient(), "idx")[0]
    assert row["NAME"] == "idx"
    assert row["DOCS.COUNT"] == "42"
    assert row["PRI"] == "1"
    assert set(row) == {
        "NAME", "HEALTH", "STATUS", "UUID", "PRI", "REP", "DOCS.COUNT", "STORE.SIZE"
    }


def test_lifecycle_policy_rows():
    assert lifecycle_policy_rows(FakeClient()) == [
        {"NAME": "hot", "VERSION": 5, "MODIFIED_DATE": "2024-01-01"}
    ]


def test_shard_rows():
    row = shard_rows(FakeClient(), "idx")[0]
    assert row["PRI/REP"] == "p"
    assert row["STATE"] == "STARTED"
    assert row["UNASSIGN"] == ""


def test_get_help_mentions_display_one_or_many():
    assert "display one or many" in build_parser().format_help()


def test_get_without_subcommand_selects_nothing():
    args = build_parser().parse_args([])
    assert args.command is None


@pytest.mark.parametrize("name", ["indices", "nodes"])
def test_get_valid_subcommands(name):
    args = build_parser().parse_args([name])
    assert args.resource == name


@pytest.mark.parametrize(
    "argv, resource",
    [(["ds"], "datastreams"), (["it"], "index-templates"), (["ilm"], "lifecycle-policies"),
     (["ct", "x*"], "component-templates"), (["shard"], "shards")],
)
def test_get_aliases(argv, resource):
    assert build_parser().parse_args(argv).resource == resource


def test_nodes_options():
    args = build_parser().parse_args(["nodes", "--sort", "CPU", "--desc", "--limit", "3"])
    assert (args.sort, args.desc, args.limit) == ("CPU", True, 3)