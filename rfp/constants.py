"""Spreadsheet layout constants for tournament workbooks."""

import re
from typing import NamedTuple

from .models import Cup, CupPosition


def _column_cells(column: str, first_row: int, last_row: int, step: int) -> tuple[str, ...]:
    return tuple(f'{column}{row}' for row in range(first_row, last_row + 1, step))


class BracketStage(NamedTuple):
    position: CupPosition
    cells: tuple[str, ...]


class BracketLayout(NamedTuple):
    size: int
    anchors: tuple[str, str, str]  # all three must be occupied
    stages: tuple[BracketStage, ...]


# Cup sheet titles (matched against normalized titles, Latin or Cyrillic letter)
CUP_SHEET_PATTERNS = {
    Cup.A: re.compile(r'^кубок [aа]$'),
    Cup.B: re.compile(r'^кубок [bб]$'),
    Cup.C: re.compile(r'^кубок [cс]$'),
}

# Bracket grids by team count. Each round column lists every participant of
# that round; the next column to the right lists the teams that advanced.
BRACKET_LAYOUTS = {
    16: BracketLayout(
        size=16,
        anchors=('B4', 'B36', 'B64'),
        stages=(
            BracketStage(CupPosition.ROUND_OF_16, _column_cells('B', 4, 64, 4)),
            BracketStage(CupPosition.QUARTER_FINAL, _column_cells('F', 6, 62, 8)),
            BracketStage(CupPosition.SEMI_FINAL, ('J10', 'J26', 'J42', 'J58')),
            BracketStage(CupPosition.RUNNER_UP, ('N18', 'N50')),
            BracketStage(CupPosition.WINNER, ('R34',)),
            BracketStage(CupPosition.THIRD_PLACE, ('J70',)),
        ),
    ),
    8: BracketLayout(
        size=8,
        anchors=('B4', 'B20', 'B32'),
        stages=(
            BracketStage(CupPosition.QUARTER_FINAL, _column_cells('B', 4, 32, 4)),
            BracketStage(CupPosition.SEMI_FINAL, ('F6', 'F14', 'F22', 'F30')),
            BracketStage(CupPosition.RUNNER_UP, ('J10', 'J26')),
            BracketStage(CupPosition.WINNER, ('N18',)),
            BracketStage(CupPosition.THIRD_PLACE, ('F38',)),
        ),
    ),
    4: BracketLayout(
        size=4,
        anchors=('B4', 'B8', 'B16'),
        stages=(
            BracketStage(CupPosition.SEMI_FINAL, ('B4', 'B8', 'B12', 'B16')),
            BracketStage(CupPosition.RUNNER_UP, ('F6', 'F14')),
            BracketStage(CupPosition.WINNER, ('J10',)),
            BracketStage(CupPosition.THIRD_PLACE, ('B22',)),
        ),
    ),
}

# Largest grid first: a 16 team grid also fills the 8 and 4 team anchors
GRID_DETECTION_ORDER = (16, 8, 4)

# Crossover ("stuck") play-in between cups A and B, 16 teams in 8 matches
CROSSOVER_PARTICIPANT_CELLS = _column_cells('B', 4, 64, 4)
CROSSOVER_WINNER_CELLS = _column_cells('F', 6, 62, 8)

# Team-count ranges for the points table, upper bound inclusive
TEAM_COUNT_RANGES = (
    (12, '8-12'),
    (18, '13-18'),
    (24, '19-24'),
    (30, '25-30'),
    (36, '31-36'),
)
TEAM_COUNT_RANGE_MAX = '36+'

# Players per team: singles up to a triplette with one substitute
MAX_TEAM_PLAYERS = 4
