"""
Quake Log Analysis Tools

Command line tools built on top of the match parser.
"""

from .match_report import MatchReportTool, format_report, sort_by_value_descending

__all__ = [
    'MatchReportTool',
    'format_report',
    'sort_by_value_descending',
]
