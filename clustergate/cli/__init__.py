"""CLI argument parsing and handling."""

from __future__ import annotations

from clustergate.cli.parsing import (
    parse_bool_parameter,
    parse_disk_size_parameter,
    parse_labels_parameter,
    parse_list_parameter,
    parse_policy_document_parameter,
)

__all__ = [
    "parse_bool_parameter",
    "parse_disk_size_parameter",
    "parse_labels_parameter",
    "parse_list_parameter",
    "parse_policy_document_parameter",
]
