"""Shared fixtures."""

import pytest

from builders import ROSTER_PLAYERS

from rfp.models import TeamEntry
from rfp.players import PlayerResolver
from rfp.roster import DataFrameRoster


@pytest.fixture
def players():
    return ROSTER_PLAYERS


@pytest.fixture
def roster():
    return DataFrameRoster.from_players(ROSTER_PLAYERS)


@pytest.fixture
def resolver(roster):
    return PlayerResolver(roster)


@pytest.fixture
def single_player_teams():
    """16 one-player teams, order_num 1..16."""
    return [TeamEntry(order_num=i + 1, players=(p,)) for i, p in enumerate(ROSTER_PLAYERS[:16])]
