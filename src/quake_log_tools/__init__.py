"""
Quake Log Tools - Python package for Quake 3 Arena server log analysis

This package fetches Quake 3 Arena server logs and derives per-match
statistics: total kills, per-player net score and causes of death.
"""

__version__ = '1.0.0'
