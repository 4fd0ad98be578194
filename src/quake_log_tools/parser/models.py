"""
Data structures produced and threaded through a match parsing pass.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any


@dataclass
class MatchRecord:
    """Statistics of one match: kills, per-player net score and causes of death."""
    total_kills: int = 0
    player_scores: Dict[str, int] = field(default_factory=dict)
    cause_of_death: Dict[str, int] = field(default_factory=dict)

    def add_score(self, player: str, delta: int) -> None:
        self.player_scores[player] = self.player_scores.get(player, 0) + delta

    def register_player(self, player: str) -> None:
        self.player_scores.setdefault(player, 0)

    def record_kill(self, cause: str) -> None:
        self.total_kills += 1
        self.cause_of_death[cause] = self.cause_of_death.get(cause, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the record to a JSON-friendly dictionary.

        Returns:
            Dictionary with total_kills, sorted players, kills per player and
            kills_by_means.
        """
        return {
            "total_kills": self.total_kills,
            "players": sorted(self.player_scores),
            "kills": dict(self.player_scores),
            "kills_by_means": dict(self.cause_of_death),
        }


@dataclass
class AccumulatorState:
    """
    Mutable state of a single parsing pass.

    ``current`` is only meaningful while ``game_in_progress`` is set;
    ``completed`` holds closed matches in closing order.
    """
    game_in_progress: bool = False
    current: Optional[MatchRecord] = None
    completed: List[MatchRecord] = field(default_factory=list)

    def open_match(self) -> None:
        if self.game_in_progress:
            self.close_match()
        self.current = MatchRecord()
        self.game_in_progress = True

    def close_match(self) -> None:
        if not self.game_in_progress:
            return
        self.completed.append(self.current)
        self.current = None
        self.game_in_progress = False

    def finish(self) -> List[MatchRecord]:
        # A log may end without a ShutdownGame event
        self.close_match()
        return self.completed
