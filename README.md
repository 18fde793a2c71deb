# searchctl

Python building blocks for managing Elasticsearch and OpenSearch clusters:
listing and describing indices, nodes, shards, data streams, index and
component templates and lifecycle policies; creating and deleting them;
summarising cluster stats and state; adjusting shard allocation settings; and
cloning a cluster's configuration to a directory of YAML or JSON files and back.

## Modules

| Module | Purpose |
| --- | --- |
| `searchctl.apply` | Load a resource document (`IndexTemplate`, `ComponentTemplate`, `LifecyclePolicy`) from a YAML file and apply it; default and file-based index template bodies. |
| `searchctl.clone_export` | `run_export` writes component templates, index templates, lifecycle policies, ingest pipelines and cluster settings into a directory tree. |
| `searchctl.clone_import` | `run_import` reads such a directory tree back and applies it, in dependency order. |
| `searchctl.cluster_summary` | `stats_summary` and `state_summary` condense cluster stats and state payloads; `format_bytes` renders byte counts. |
| `searchctl.cluster_ops` | Cluster health, info, pending tasks and shard allocation settings. |
| `searchctl.nodes` | Node listing with role and name filters, multi-column sorting, row limits and custom columns. |
| `searchctl.listing` | Table rows for indices, data streams, index and component templates, lifecycle policies and shards. |
| `searchctl.create` | Create indices, data streams and index templates, with a dry-run mode. |
| `searchctl.describe` | Detailed views of a single index, node, data stream, template or policy, and shard allocation explanations. |
| `searchctl.delete` | Delete resources, with `prefix*` wildcard matching and confirmation prompts. |

`clone_import`, `cluster_ops`, `listing`, `create`, `describe` and `delete`
each offer `build_parser()`, returning an `argparse` parser with the options
and sub-commands of that group.

## The client object

Functions that talk to a cluster take a `client` as their first argument and
call methods on it, for example `get_indices(pattern)`, `get_nodes()`,
`get_data_streams(pattern)`, `create_index_template(name, body)`,
`delete_index(name)`, `get_cluster_settings()`,
`update_cluster_settings(body)` and `explain_allocation(request, include_yes,
include_disk)`. The values it returns may be mappings or objects with
attributes; fields are read by snake_case name (`name`, `index_patterns`,
`heap_percent`, `node_role`, ...).

## Examples

Byte sizes and metric lists, as shown in cluster summaries:

```python
from searchctl.cluster_summary import format_bytes, split_and_trim

format_bytes(512)                          # "512 B"
format_bytes(1536)                         # "1.5 KB"
split_and_trim("metadata, routing-table")  # ["metadata", "routing_table"]
```

Choosing node columns:

```python
from searchctl.nodes import default_columns, parse_columns

default_columns()
# ["NAME", "HOST", "IP", "HEAP.PERCENT", "RAM.PERCENT", "CPU", "LOAD_1M", "ROLE", "MASTER"]
parse_columns("name, ip ,cpu")             # ["NAME", "IP", "CPU"]
```

`list_nodes(client, role_filter="data", sort_by="CPU,HEAP.PERCENT",
descending=True, limit=10)` returns rows for the ten busiest data nodes; each
row carries its column order under the key `__columns`.

Wildcard matching used by deletions (a trailing `*` is a prefix match,
anything else must match exactly):

```python
from searchctl.delete import matching_names

matching_names(["logs-a", "logs-b", "metrics"], "logs-*")  # ["logs-a", "logs-b"]
```

Deleting by pattern asks for confirmation on `stdin` unless `assume_yes=True`;
if some deletions fail, `DeletionError` is raised and lists them in
`failures`.

Applying a resource file:

```yaml
kind: IndexTemplate
metadata:
  name: logs
spec:
  index_patterns: ["logs-*"]
  priority: 100
```

```python
from searchctl.apply import apply_configuration_from_file

apply_configuration_from_file(client, "logs-template.yaml")
```

An unsupported `kind`, or a missing `metadata.name` or `spec`, raises
`searchctl.apply.ApplyError`.

## Clone layout

`run_export(client, ExportOptions(directory="backup"))` writes
`manifest.yaml` and one sub-directory per resource type:
`component-templates`, `index-templates`, `lifecycle-policies`,
`ingest-pipelines` and `cluster-settings`. Files are YAML, or JSON when
`output_format="json"`. Names beginning with `.` are treated as system
resources and skipped unless `include_system=True`. A type whose endpoint
answers 404 or "not found" is skipped for templates and lifecycle policies.

`run_import(client, ImportOptions(directory="backup"))` walks the same
sub-directories in that order, so component templates exist before the index
templates composed of them. `dry_run=True` only reports what would be applied;
`continue_on_error=True` turns failing files into warnings.

## What the package does not do

It contains no HTTP client for Elasticsearch or OpenSearch: you supply the
`client` object. It has no installed command and no code that dispatches the
parsers from `build_parser()` to the functions, no output formatter for
tables, JSON or YAML, and no stored configuration: `use_context` only returns
the message reporting the switch.

## Tests

The test suite uses pytest; install the `test` extra to get it.