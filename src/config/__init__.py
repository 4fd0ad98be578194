# Configuration package initialization
"""
Quake Log Tools - Configuration System

Quick Usage:
    from config import Config

    config = Config(profile='my_server')
    url = config.get('log_source.url')
"""

from config.config import Config

__all__ = ['Config']
