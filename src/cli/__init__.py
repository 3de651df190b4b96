"""Console helpers for command-line runs."""

from .console import console, ok, fail, dim, header, metrics_table, print_summary

__all__ = [
    "console",
    "ok",
    "fail",
    "dim",
    "header",
    "metrics_table",
    "print_summary",
]
