"""Network access for the acquisition engine."""

from .fetcher import BoundedFetcher

__all__ = [
    "BoundedFetcher",
]
