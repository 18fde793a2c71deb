"""Building blocks for managing Elasticsearch and OpenSearch clusters."""

__version__ = "0.1.0"

__all__ = [
    "apply",
    "clone_export",
    "clone_import",
    "cluster_ops",
    "cluster_summary",
    "create",
    "delete",
    "describe",
    "listing",
    "nodes",
]