"""Deleting indices, data streams, templates and lifecycle policies."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Mapping
from typing import Any, Callable, TextIO


class DeletionError(Exception):
    """Raised when a deletion cannot be carried out or partly fails."""

    def __init__(self, message: str, failures: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.failures = list(failures)


def _field(obj: Any, name: str, default: Any = "") -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _streams(stdin: TextIO | None, out: TextIO | None) -> tuple[TextIO, TextIO]:
    return (
        stdin if stdin is not None else sys.stdin,
        out if out is not None else sys.stdout,
    )


def matching_names(names: Iterable[str], pattern: str) -> list[str]:
    """Return the names matching ``pattern``.

    A pattern ending in ``*`` matches by prefix; any other pattern must match exactly.
    """
    if pattern.endswith("*"):
        prefix = pattern[:-1]
        return [name for name in names if name.startswith(prefix)]
    return [name for name in names if name == pattern]


def matching_indices(client: Any, pattern: str) -> list[str]:
    """Return the names of the cluster's indices that match ``pattern``."""
    names = (_field(index, "name") for index in client.get_indices("*"))
    return matching_names(names, pattern)


def matching_data_streams(client: Any, pattern: str) -> list[str]:
    """Return the names of the cluster's data streams that match ``pattern``."""
    names = (_field(stream, "name") for stream in client.get_data_streams("*"))
    return matching_names(names, pattern)


def _is_yes(response: str) -> bool:
    return response.strip().lower() in ("y", "yes")


def confirm(
    action: str,
    assume_yes: bool = False,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> bool:
    """Ask whether to go ahead with ``action``; end of input counts as no."""
    if assume_yes:
        return True
    stdin, out = _streams(stdin, out)
    out.write(f"Are you sure you want to {action}? (y/N): ")
    out.flush()
    response = stdin.readline()
    if not response:
        return False
    return _is_yes(response)


def _delete_matching(
    client: Any,
    pattern: str,
    *,
    assume_yes: bool,
    dry_run: bool,
    stdin: TextIO | None,
    out: TextIO | None,
    singular: str,
    plural: str,
    title: str,
    find: Callable[[Any, str], list[str]],
    remove: Callable[[str], Any],
) -> list[str]:
    stdin, out = _streams(stdin, out)
    wildcard = "*" in pattern

    if dry_run:
        if wildcard:
            print(f"Would delete {plural} matching pattern: {pattern}", file=out)
        else:
            print(f"Would delete {singular}: {pattern}", file=out)
        return []

    if not wildcard:
        if not confirm(f"delete {singular} '{pattern}'", assume_yes, stdin, out):
            print("Delete operation cancelled.", file=out)
            return []
        remove(pattern)
        print(f"{title} {pattern} deleted successfully", file=out)
        return [pattern]

    print(f"Wildcard pattern detected: {pattern}", file=out)
    names = find(client, pattern)
    if not names:
        print(f"No {plural} match pattern: {pattern}", file=out)
        return []

    print(f"Found {len(names)} matching {plural}:", file=out)
    for name in names:
        print(f"  - {name}", file=out)

    action = f"delete {len(names)} {plural} matching pattern '{pattern}'"
    if not confirm(action, assume_yes, stdin, out):
        print("Delete operation cancelled.", file=out)
        return []

    deleted: list[str] = []
    failures: list[str] = []
    for name in names:
        print(f"Deleting {singular}: {name}", file=out)
        try:
            remove(name)
        except Exception as exc:
            failures.append(f"failed to delete {name}: {exc}")
        else:
            deleted.append(name)
            print(f"Successfully deleted {singular}: {name}", file=out)

    if failures:
        raise DeletionError(
            "Errors occurred during deletion:\n" + "\n".join(failures), failures
        )
    print(f"All matching {plural} deleted successfully", file=out)
    return deleted


def delete_indices(
    client: Any,
    pattern: str,
    assume_yes: bool = False,
    dry_run: bool = False,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> list[str]:
    """Delete an index, or every index matching a ``prefix*`` pattern.

    Returns the names that were deleted.
    """
    return _delete_matching(
        client,
        pattern,
        assume_yes=assume_yes,
        dry_run=dry_run,
        stdin=stdin,
        out=out,
        singular="index",
        plural="indices",
        title="Index",
        find=matching_indices,
        remove=client.delete_index,
    )


def delete_data_streams(
    client: Any,
    pattern: str,
    assume_yes: bool = False,
    dry_run: bool = False,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> list[str]:
    """Delete a data stream, or every data stream matching a ``prefix*`` pattern.

    Returns the names that were deleted.
    """
    return _delete_matching(
        client,
        pattern,
        assume_yes=assume_yes,
        dry_run=dry_run,
        stdin=stdin,
        out=out,
        singular="data stream",
        plural="data streams",
        title="Data stream",
        find=matching_data_streams,
        remove=client.delete_data_stream,
    )


def _delete_named(
    name: str,
    *,
    noun: str,
    title: str,
    remove: Callable[[str], Any],
    assume_yes: bool,
    dry_run: bool,
    stdin: TextIO | None,
    out: TextIO | None,
) -> bool:
    stdin, out = _streams(stdin, out)
    if dry_run:
        print(f"Would delete {noun}: {name}", file=out)
        return False
    if not assume_yes:
        out.write(f"Are you sure you want to delete {noun} '{name}'? (y/N): ")
        out.flush()
        response = stdin.readline()
        if not response:
            raise DeletionError("error reading input: EOF")
        if not _is_yes(response):
            print("Operation cancelled", file=out)
            return False
    remove(name)
    print(f"{title} {name} deleted successfully", file=out)
    return True


def delete_index_template(
    client: Any,
    name: str,
    assume_yes: bool = False,
    dry_run: bool = False,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> bool:
    """Delete an index template; returns whether it was deleted."""
    return _delete_named(
        name,
        noun="index template",
        title="Index template",
        remove=client.delete_index_template,
        assume_yes=assume_yes,
        dry_run=dry_run,
        stdin=stdin,
        out=out,
    )


def delete_component_template(
    client: Any,
    name: str,
    assume_yes: bool = False,
    dry_run: bool = False,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> bool:
    """Delete a component template; returns whether it was deleted."""
    return _delete_named(
        name,
        noun="component template",
        title="Component template",
        remove=client.delete_component_template,
        assume_yes=assume_yes,
        dry_run=dry_run,
        stdin=stdin,
        out=out,
    )


def delete_lifecycle_policy(
    client: Any,
    name: str,
    assume_yes: bool = False,
    dry_run: bool = False,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> bool:
    """Delete a lifecycle policy (ILM or ISM); returns whether it was deleted."""
    return _delete_named(
        name,
        noun="lifecycle policy",
        title="Lifecycle policy",
        remove=client.delete_lifecycle_policy,
        assume_yes=assume_yes,
        dry_run=dry_run,
        stdin=stdin,
        out=out,
    )


def _add_yes(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="automatically confirm deletion without prompting",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``delete`` command."""
    parser = argparse.ArgumentParser(
        prog="delete",
        description="Delete a resource from the search cluster.",
    )
    commands = parser.add_subparsers(dest="command", title="Available Commands")

    index = commands.add_parser(
        "index",
        aliases=["idx"],
        help="Delete an index or indices matching a pattern",
        description=(
            "Delete an index or indices matching a pattern from the search cluster. "
            "Supports wildcards like 'logs-*'."
        ),
    )
    index.add_argument("name", metavar="INDEX_NAME_OR_PATTERN")
    _add_yes(index)
    index.set_defaults(resource="index")

    stream = commands.add_parser(
        "datastream",
        aliases=["datastreams", "ds"],
        help="Delete a data stream or data streams matching a pattern",
        description=(
            "Delete a data stream or data streams matching a pattern and all their "
            "backing indices from the search cluster. Supports wildcards like 'logs-*'."
        ),
    )
    stream.add_argument("name", metavar="DATA_STREAM_NAME_OR_PATTERN")
    _add_yes(stream)
    stream.set_defaults(resource="datastream")

    index_template = commands.add_parser(
        "index-template",
        aliases=["idx-templates", "template", "it", "indextemplates", "indextemplate"],
        help="Delete an index template",
        description="Delete an index template from the search cluster.",
    )
    index_template.add_argument("name", metavar="TEMPLATE_NAME")
    _add_yes(index_template)
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
        help="Delete a component template",
        description="Delete a component template from the search cluster.",
    )
    component_template.add_argument("name", metavar="TEMPLATE_NAME")
    _add_yes(component_template)
    component_template.set_defaults(resource="component-template")

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
        help="Delete a lifecycle policy",
        description=(
            "Delete a lifecycle policy from the search cluster "
            "(ILM for Elasticsearch, ISM for OpenSearch)."
        ),
    )
    policy.add_argument("name", metavar="POLICY_NAME")
    _add_yes(policy)
    policy.set_defaults(resource="lifecycle-policy")

    return parser