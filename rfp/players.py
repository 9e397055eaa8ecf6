"""Resolving human-typed player names to roster entries and teams."""

import logging
from typing import Optional, Sequence

from .exceptions import PlayerAmbiguous, PlayerNotFound, TeamNotFound
from .models import Player, TeamEntry
from .names import normalize_name, split_player_names
from .roster import RosterLookup

logger = logging.getLogger('rfp.players')


def find_team_for_player(player: Player, teams: Sequence[TeamEntry]) -> Optional[TeamEntry]:
    """Registered team whose player set contains the player, if any."""
    for team in teams:
        if team.has_player(player):
            return team
    return None


class PlayerResolver:
    """Maps a raw name to exactly one roster entry."""

    def __init__(self, roster: RosterLookup):
        self.roster = roster

    async def resolve(self, raw_name: str, cell: Optional[str] = None) -> Player:
        """
        Resolve a name typed in the workbook.

        Args:
            raw_name: Name as written in the cell
            cell: Cell address, used in error messages

        Raises:
            PlayerNotFound: No roster entry matches
            PlayerAmbiguous: More than one roster entry matches
        """
        query = normalize_name(raw_name)
        if not query:
            raise PlayerNotFound(str(raw_name), cell)

        candidates = await self.roster.find_players(query)

        if not candidates:
            raise PlayerNotFound(str(raw_name).strip(), cell)
        if len(candidates) > 1:
            raise PlayerAmbiguous(str(raw_name).strip(), candidates, cell)

        player = candidates[0]
        logger.debug(f'Resolved "{raw_name}" -> {player.name} (id {player.id})')
        return player

    async def resolve_team(
        self,
        cell_value,
        teams: Sequence[TeamEntry],
        cell: Optional[str] = None,
    ) -> TeamEntry:
        """
        Resolve the team written in a cell.

        The cell holds one player name or a comma-separated team list; the
        first name identifies the team.

        Raises:
            PlayerNotFound, PlayerAmbiguous: The name cannot be resolved
            TeamNotFound: The player is not in any registered team
        """
        names = split_player_names(cell_value)
        if not names:
            raise PlayerNotFound(str(cell_value or ''), cell)

        player = await self.resolve(names[0], cell)
        team = find_team_for_player(player, teams)
        if team is None:
            raise TeamNotFound(player.name, cell)
        return team
