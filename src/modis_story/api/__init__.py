"""
HTTP layer for the MODIS state data story.

Provides the low-level client used to fetch remote datasets and boundaries.
"""

from .client import HttpClient

__all__ = [
    "HttpClient",
]
