"""
Quake Log Event Classifier

Recognizes the timestamp-prefixed events of a Quake 3 Arena server log
(e.g. '0:00 InitGame:', '20:38 ClientConnect:', '20:54 Kill:') and tags the
ones the match parser tracks. Every other line, including valid events such
as item pickups or client connects, is dropped.
"""

import re
from enum import Enum
from typing import NamedTuple, Optional

# '<minutes>:<seconds>' followed by whitespace and a bare tag ending in a colon
EVENT_PATTERN = re.compile(r'\d+:\d+\s+([^\s:]+):', re.ASCII)


class EventKind(str, Enum):
    """Event types tracked by the match parser, valued by their literal log tag."""

    GAME_START = "InitGame"
    GAME_END = "ShutdownGame"
    KILL = "Kill"
    PLAYER_INFO_CHANGED = "ClientUserinfoChanged"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["EventKind"]:
        try:
            return cls(tag)
        except ValueError:
            return None


class ClassifiedLine(NamedTuple):
    """A recognized event tag together with the raw line it came from."""

    kind: EventKind
    line: str


def classify_line(line: str) -> Optional[ClassifiedLine]:
    """
    Classify a single log line.

    Args:
        line: One raw line of the log.

    Returns:
        A ClassifiedLine for tracked events, None for anything else.
    """
    match = EVENT_PATTERN.search(line)
    if not match:
        return None

    kind = EventKind.from_tag(match.group(1))
    if kind is None:
        return None

    return ClassifiedLine(kind, line.rstrip('\r\n'))
