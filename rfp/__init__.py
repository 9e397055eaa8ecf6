from .models import (
    Player,
    TeamEntry,
    QualifyingResult,
    TournamentResult,
    TournamentCategory,
    Cup,
    CupPosition,
)
from .exceptions import (
    RatingEngineError,
    StructuralError,
    NoQualifyingData,
    UnsupportedGridSize,
    CellError,
    PlayerNotFound,
    PlayerAmbiguous,
    TeamNotFound,
    MissingCellValue,
    InvalidCellValue,
    SheetValidationError,
)
from .names import normalize_name
from .roster import RosterLookup, DataFrameRoster
from .players import PlayerResolver, find_team_for_player
from .excel_parser import load_workbook, parse_registration_sheet, parse_manual_results
from .qualifying import parse_swiss_results, parse_group_results, parse_qualifying_stage
from .bracket import detect_grid_size, decode_bracket
from .crossover import parse_crossover_sheet
from .scoring import (
    get_points,
    get_points_by_qualifying_stage,
    get_all_points_config,
    get_points_example,
)
from .wins_losses import calculate_wins, calculate_losses, calculate_wins_and_losses
from .parser import TournamentParser, parse_tournament_file, results_to_records

__all__ = [
    # Models
    'Player',
    'TeamEntry',
    'QualifyingResult',
    'TournamentResult',
    'TournamentCategory',
    'Cup',
    'CupPosition',
    # Errors
    'RatingEngineError',
    'StructuralError',
    'NoQualifyingData',
    'UnsupportedGridSize',
    'CellError',
    'PlayerNotFound',
    'PlayerAmbiguous',
    'TeamNotFound',
    'MissingCellValue',
    'InvalidCellValue',
    'SheetValidationError',
    # Names and roster
    'normalize_name',
    'RosterLookup',
    'DataFrameRoster',
    'PlayerResolver',
    'find_team_for_player',
    # Sheet parsers
    'load_workbook',
    'parse_registration_sheet',
    'parse_manual_results',
    'parse_swiss_results',
    'parse_group_results',
    'parse_qualifying_stage',
    'detect_grid_size',
    'decode_bracket',
    'parse_crossover_sheet',
    # Scoring
    'get_points',
    'get_points_by_qualifying_stage',
    'get_all_points_config',
    'get_points_example',
    'calculate_wins',
    'calculate_losses',
    'calculate_wins_and_losses',
    # Orchestration
    'TournamentParser',
    'parse_tournament_file',
    'results_to_records',
]
