"""
Quake Log Retrieval

Utilities for downloading server logs or reading them from disk.
"""

__all__ = ['log_fetcher']

from .log_fetcher import LogFetcher, DEFAULT_LOG_URL
