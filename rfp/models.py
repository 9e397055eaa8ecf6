"""Data models for the RFP tournament results engine."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple


class TournamentCategory(IntEnum):
    """Tournament tier. Drives the points multipliers."""
    FEDERAL = 1
    REGIONAL = 2


class Cup(str, Enum):
    """Bracket tier: A (primary), B (secondary), C (consolation)."""
    A = 'A'
    B = 'B'
    C = 'C'


class CupPosition(str, Enum):
    """Furthest stage a team reached in a cup bracket.

    Values are the labels used in the manual results sheet.
    """
    WINNER = '1'
    RUNNER_UP = '2'
    THIRD_PLACE = '3'
    SEMI_FINAL = '1/2'
    QUARTER_FINAL = '1/4'
    ROUND_OF_16 = '1/8'

    # Aliases used by the bracket sheets
    ROUND_OF_4 = '1/2'
    ROUND_OF_8 = '1/4'

    @property
    def priority(self) -> int:
        """Ranking used to keep the best stage when a team appears twice."""
        return _POSITION_PRIORITY[self]


_POSITION_PRIORITY = {
    CupPosition.WINNER: 5,
    CupPosition.RUNNER_UP: 4,
    CupPosition.THIRD_PLACE: 3,
    CupPosition.SEMI_FINAL: 2,
    CupPosition.QUARTER_FINAL: 1,
    CupPosition.ROUND_OF_16: 0,
}


@dataclass(frozen=True)
class Player:
    """Roster entry. Owned by the external roster store."""
    id: int
    name: str
    gender: Optional[str] = None


@dataclass(frozen=True)
class TeamEntry:
    """A registered team within one parsing run.

    order_num is a correlation key for the run only; team identity is the
    set of player ids.
    """
    order_num: int
    players: Tuple[Player, ...] = field(default_factory=tuple)

    @property
    def player_ids(self) -> frozenset:
        return frozenset(p.id for p in self.players)

    @property
    def player_names(self) -> list[str]:
        return [p.name for p in self.players]

    def has_player(self, player: Player) -> bool:
        return player.id in self.player_ids

    def same_team(self, other: 'TeamEntry') -> bool:
        return self.player_ids == other.player_ids

    def __str__(self) -> str:
        return f'#{self.order_num} ({", ".join(self.player_names)})'


@dataclass(frozen=True)
class QualifyingResult:
    """Wins and losses of a team in the Swiss or group stage."""
    wins: int
    losses: int

    @property
    def rounds(self) -> int:
        return self.wins + self.losses


@dataclass(frozen=True)
class TournamentResult:
    """Final per-team output of a parse run."""
    team: TeamEntry
    cup: Optional[Cup]
    cup_position: Optional[CupPosition]
    qualifying_wins: int
    points: int
    wins: int
    losses: int
