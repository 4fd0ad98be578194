"""
Quake Log Parsing

Event classification and the single-pass match parser that turns a Quake 3
Arena server log into per-match statistics.
"""

from .events import EventKind, ClassifiedLine, classify_line
from .models import MatchRecord, AccumulatorState
from .match_parser import MatchParser, WORLD_ENTITY, parse_log_lines, parse_log_text

__all__ = [
    'EventKind',
    'ClassifiedLine',
    'classify_line',
    'MatchRecord',
    'AccumulatorState',
    'MatchParser',
    'WORLD_ENTITY',
    'parse_log_lines',
    'parse_log_text',
]
