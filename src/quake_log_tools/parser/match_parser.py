"""
Quake Log Match Parser

Scans the lines of a Quake 3 Arena server log once, in order, and folds the
tracked events into per-match statistics: total kills, per-player net score
and per-cause-of-death counts.

Scoring rules:
- A player gains a point for killing another player.
- A player loses a point when killed by <world> or when killing themselves.

Malformed or untracked lines never raise; they are ignored.
"""

import logging
import re
from typing import Callable, Dict, Iterable, List

from .events import EventKind, classify_line
from .models import AccumulatorState, MatchRecord

logger = logging.getLogger(__name__)

# Killer name used for environment deaths (falling, trigger hurt, lava...)
WORLD_ENTITY = "<world>"


class MatchParser:
    """
    Single-pass parser turning log lines into MatchRecord values.

    A parser instance owns the state of exactly one pass; use a new instance
    (or parse_log_lines) for every log.
    """

    # e.g. '21:07 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT'
    KILL_PATTERN = re.compile(r'\d+:\d+ Kill: \d+ \d+ \d+: (.+) killed (.+) by (\S+)', re.ASCII)
    # e.g. '3:47 ClientUserinfoChanged: 5 n\Assasinu Credi\t\0\model\sarge...'
    USERINFO_PATTERN = re.compile(r'\d+:\d+ ClientUserinfoChanged: \d+ n\\([^\\]+)\\', re.ASCII)

    def __init__(self) -> None:
        self.state = AccumulatorState()
        self._consumed = False
        self._handlers: Dict[EventKind, Callable[[str], None]] = {
            EventKind.GAME_START: self._handle_init_game,
            EventKind.GAME_END: self._handle_shutdown_game,
            EventKind.KILL: self._handle_kill,
            EventKind.PLAYER_INFO_CHANGED: self._handle_client_userinfo_changed,
        }

    def parse(self, lines: Iterable[str]) -> List[MatchRecord]:
        """
        Parse an ordered sequence of log lines.

        Args:
            lines: The log lines, in file order.

        Returns:
            Match records in the order the matches were closed.

        Raises:
            RuntimeError: If this parser has already been used.
        """
        if self._consumed:
            raise RuntimeError("MatchParser instances are single use; create a new parser")
        self._consumed = True

        for line_num, line in enumerate(lines, 1):
            event = classify_line(line)
            if event is None:
                continue
            self._handlers[event.kind](event.line)
            logger.debug(f"Line {line_num}: handled {event.kind.value}")

        matches = self.state.finish()
        logger.info(f"Parsed {len(matches)} matches with "
                    f"{sum(m.total_kills for m in matches)} kills in total")
        return matches

    def _handle_init_game(self, line: str) -> None:
        # Two InitGame events in a row happen in real logs; the first match is closed
        if self.state.game_in_progress:
            logger.debug("InitGame without ShutdownGame, closing the running match")
        self.state.open_match()

    def _handle_shutdown_game(self, line: str) -> None:
        self.state.close_match()

    def _handle_kill(self, line: str) -> None:
        if not self.state.game_in_progress:
            logger.debug(f"Kill outside of a match ignored: {line}")
            return

        match = self.KILL_PATTERN.search(line)
        if not match:
            logger.debug(f"Malformed kill line ignored: {line}")
            return

        killer, victim, cause = match.groups()
        current = self.state.current

        if killer == WORLD_ENTITY or killer == victim:
            current.add_score(victim, -1)
        else:
            current.add_score(killer, 1)

        current.record_kill(cause)

    def _handle_client_userinfo_changed(self, line: str) -> None:
        if not self.state.game_in_progress:
            return

        match = self.USERINFO_PATTERN.search(line)
        if not match:
            logger.debug(f"Malformed ClientUserinfoChanged line ignored: {line}")
            return

        self.state.current.register_player(match.group(1))


def parse_log_lines(lines: Iterable[str]) -> List[MatchRecord]:
    """Parse log lines with a fresh MatchParser."""
    return MatchParser().parse(lines)


def parse_log_text(text: str) -> List[MatchRecord]:
    """Parse a whole log given as a single string."""
    return parse_log_lines(text.split("\n"))
