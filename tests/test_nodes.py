import pytest

from searchctl.nodes import (
    default_columns,
    filter_nodes,
    list_nodes,
    matches_role,
    node_rows,
    parse_columns,
    parse_selector,
    sort_nodes,
    value_for_column,
)


def make_node(name, ip="10.0.0.1", role="dim", master="-", cpu="5", heap="40"):
    return {
        "name": name,
        "host": ip,
        "ip": ip,
        "heap_percent": heap,
        "ram_percent": "50",
        "cpu": cpu,
        "load_1m": "0.5",
        "load_5m": "0.4",
        "load_15m": "0.3",
        "node_role": role,
        "master": master,
    }


class FakeClient:
    def __init__(self, nodes):
        self.nodes = nodes

    def get_nodes(self):
        return list(self.nodes)


def test_default_columns():
    assert default_columns() == [
        "NAME", "HOST", "IP", "HEAP.PERCENT", "RAM.PERCENT", "CPU", "LOAD_1M", "ROLE", "MASTER",
    ]


def test_default_columns_returns_fresh_list():
    first = default_columns()
    first.append("EXTRA")
    assert "EXTRA" not in default_columns()


def test_parse_columns_uppercases_and_drops_blanks():
    assert parse_columns(" name, ip ,,cpu ") == ["NAME", "IP", "CPU"]


def test_parse_selector():
    assert parse_selector("zone=a, rack = r1 ,bad,") == {"zone": "a", "rack": "r1"}


def test_value_for_column_case_insensitive_and_unknown():
    node = make_node("es-1")
    assert value_for_column("name", node) == "es-1"
    assert value_for_column("ROLE", node) == "dim"
    assert value_for_column("NOPE", node) == ""


@pytest.mark.parametrize(
    "role,master,wanted,expected",
    [
        ("dim", "-", "data", True),
        ("dim", "-", "ml", False),
        ("d", "*", "master", True),
        ("d", "-", "m", False),
        ("-", "-", "coordinating", True),
        ("di", "-", "coord", False),
        ("dimr", "-", "remote", True),
        ("dim", "-", "", True),
        ("dim", "-", "im", True),
    ],
)
def test_matches_role(role, master, wanted, expected):
    assert matches_role(make_node("n", role=role, master=master), wanted) is expected


def test_filter_nodes_by_role_and_name():
    nodes = [
        make_node("es-data-1", role="d"),
        make_node("es-master-1", role="m"),
        make_node("es-data-2", ip="10.0.0.9", role="di"),
    ]
    assert [n["name"] for n in filter_nodes(nodes, "data")] == ["es-data-1", "es-data-2"]
    assert [n["name"] for n in filter_nodes(nodes, name_filter="10.0.0.9")] == ["es-data-2"]
    assert [n["name"] for n in filter_nodes(nodes, " DATA ", "", "ES-DATA-1")] == ["es-data-1"]


def test_sort_nodes_numeric_ascending_and_descending():
    nodes = [make_node("a", cpu="10"), make_node("b", cpu="9"), make_node("c", cpu="20")]
    assert [n["name"] for n in sort_nodes(nodes, "cpu")] == ["b", "a", "c"]
    assert [n["name"] for n in sort_nodes(nodes, "CPU", True)] == ["c", "a", "b"]


def test_sort_nodes_text_and_multi_column():
    nodes = [
        make_node("b", cpu="5", heap="30"),
        make_node("a", cpu="5", heap="70"),
        make_node("c", cpu="1", heap="10"),
    ]
    assert [n["name"] for n in sort_nodes(nodes, "name")] == ["a", "b", "c"]
    assert [n["name"] for n in sort_nodes(nodes, "cpu,heap.percent", True)] == ["a", "b", "c"]


def test_sort_nodes_is_stable_for_ties():
    nodes = [make_node("x"), make_node("y"), make_node("z")]
    assert sort_nodes(nodes, "cpu") == nodes


def test_node_rows_records_column_order():
    rows = node_rows([make_node("es-1")], ["NAME", "IP"])
    assert rows == [{"__columns": "NAME,IP", "NAME": "es-1", "IP": "10.0.0.1"}]


def test_list_nodes_default_and_wide_columns():
    client = FakeClient([make_node("es-1")])
    rows = list_nodes(client)
    assert rows[0]["__columns"] == ",".join(default_columns())
    wide = list_nodes(client, wide=True)
    assert wide[0]["__columns"].split(",")[-2:] == ["LOAD_5M", "LOAD_15M"]
    assert wide[0]["LOAD_15M"] == "0.3"


def test_list_nodes_sort_limit_and_columns():
    client = FakeClient(
        [make_node("a", cpu="3"), make_node("b", cpu="7"), make_node("c", cpu="5")]
    )
    rows = list_nodes(client, sort_by="cpu", descending=True, limit=2, columns_csv="name,cpu")
    assert rows == [
        {"__columns": "NAME,CPU", "NAME": "b", "CPU": "7"},
        {"__columns": "NAME,CPU", "NAME": "c", "CPU": "5"},
    ]


def test_list_nodes_limit_beyond_length_keeps_all():
    client = FakeClient([make_node("a"), make_node("b")])
    assert len(list_nodes(client, limit=10)) == 2