"""Command-line interface tools."""

from .search import load_dataset, main, run_search

__all__ = [
    "load_dataset",
    "main",
    "run_search",
]
