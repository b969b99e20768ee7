"""
Aggregator Module
"""
from .data_aggregator import Aggregator, dedupe_by_key, print_summary, title_key

__all__ = [
    "Aggregator",
    "dedupe_by_key",
    "print_summary",
    "title_key",
]
