"""Creating indices, data streams and index templates."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from searchctl.apply import default_index_template, read_template_from_file


def create_index(client: Any, name: str, dry_run: bool = False) -> str:
    """Create an index and return the message to report."""
    if dry_run:
        return f"Would create index: {name}"
    client.create_index(name, None)
    return f"Index {name} created successfully"


def create_data_stream(client: Any, name: str, dry_run: bool = False) -> str:
    """Create a data stream and return the message to report.

    A matching index template with data_stream configuration must already exist.
    """
    if dry_run:
        return f"Would create data stream: {name}"
    client.create_data_stream(name)
    return f"Data stream {name} created successfully"


def create_index_template(
    client: Any, name: str, filename: str | Path | None = None, dry_run: bool = False
) -> str:
    """Create an index template from a file, or a default one, and return the message."""
    if dry_run:
        return f"Would create index template: {name}"
    body = read_template_from_file(filename) if filename else default_index_template(name)
    client.create_index_template(name, body)
    return f"Index template {name} created successfully"


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``create`` command."""
    parser = argparse.ArgumentParser(
        prog="create",
        description="Create a new resource in the search cluster.",
    )
    commands = parser.add_subparsers(dest="command", title="Available Commands")

    index = commands.add_parser(
        "index",
        aliases=["idx"],
        help="Create an index",
        description="Create a new index in the search cluster.",
    )
    index.add_argument("name", metavar="INDEX_NAME")
    index.set_defaults(resource="index")

    stream = commands.add_parser(
        "datastream",
        aliases=["ds"],
        help="Create a data stream",
        description=(
            "Create a new data stream in the search cluster. Note: A matching index "
            "template with data_stream configuration must exist before creating the "
            "data stream."
        ),
    )
    stream.add_argument("name", metavar="DATA_STREAM_NAME")
    stream.set_defaults(resource="datastream")

    template = commands.add_parser(
        "index-template",
        aliases=["template", "it"],
        help="Create an index template",
        description="Create a new index template in the search cluster.",
    )
    template.add_argument("name", metavar="TEMPLATE_NAME")
    template.add_argument(
        "-f", "--filename", default="", help="Template definition file (YAML)"
    )
    template.set_defaults(resource="index-template")

    return parser