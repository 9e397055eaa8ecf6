"""Roster lookup: the player registry the engine resolves names against.

The engine only needs one capability from the roster store, an awaitable
candidate search. Production deployments plug in their database; the
polars-backed DataFrameRoster serves the CLI and tests.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Protocol

import polars as pl

from .models import Player
from .names import normalize_name
from .schemas import RosterFile
from .utils import load_json

logger = logging.getLogger('rfp.roster')

ROSTER_SCHEMA = {'id': pl.Int64, 'name': pl.Utf8, 'gender': pl.Utf8}


class RosterLookup(Protocol):
    """Asynchronous player search against the external roster store."""

    async def find_players(self, query: str) -> list[Player]:
        """
        Return every player whose normalized name contains the normalized
        query as whole words.
        """
        ...


class DataFrameRoster:
    """In-memory roster backed by a polars DataFrame."""

    def __init__(self, players: pl.DataFrame):
        missing = {'id', 'name'} - set(players.columns)
        if missing:
            raise ValueError(f'Roster is missing columns: {", ".join(sorted(missing))}')

        if 'gender' not in players.columns:
            players = players.with_columns(pl.lit(None, dtype=pl.Utf8).alias('gender'))

        self._players = players.select(
            pl.col('id').cast(pl.Int64),
            pl.col('name').cast(pl.Utf8),
            pl.col('gender').cast(pl.Utf8),
        ).with_columns(
            pl.col('name')
            .map_elements(normalize_name, return_dtype=pl.Utf8)
            .alias('search_name')
        )
        logger.debug(f'Roster loaded with {self._players.height} players')

    @classmethod
    def from_players(cls, players: Iterable[Player]) -> 'DataFrameRoster':
        records = [{'id': p.id, 'name': p.name, 'gender': p.gender} for p in players]
        return cls(pl.DataFrame(records, schema=ROSTER_SCHEMA))

    @classmethod
    def from_json(cls, path: Path | str) -> 'DataFrameRoster':
        """Load a roster.json file ({"players": [{"id", "name", "gender"}]})."""
        roster = load_json(path, schema=RosterFile)
        records = [p.model_dump() for p in roster.players]
        return cls(pl.DataFrame(records, schema=ROSTER_SCHEMA))

    @classmethod
    def from_csv(cls, path: Path | str) -> 'DataFrameRoster':
        """Load a CSV export with at least "id" and "name" columns."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f'Roster file not found: {path}')
        return cls(pl.read_csv(path))

    @classmethod
    def from_file(cls, path: Path | str) -> 'DataFrameRoster':
        if Path(path).suffix.lower() == '.csv':
            return cls.from_csv(path)
        return cls.from_json(path)

    @property
    def size(self) -> int:
        return self._players.height

    async def find_players(self, query: str) -> list[Player]:
        query = normalize_name(query)
        if not query:
            return []

        # Cheap literal prefilter, then whole-word check on the survivors
        matches = self._players.filter(pl.col('search_name').str.contains(query, literal=True))
        token = re.compile(rf'(?:^|\s){re.escape(query)}(?:\s|$)')

        return [
            Player(id=row['id'], name=row['name'], gender=row['gender'])
            for row in matches.iter_rows(named=True)
            if token.search(row['search_name'])
        ]
