"""Validation functions for workbooks, registered teams and computed results."""

from typing import Mapping, Optional, Sequence

from openpyxl.workbook.workbook import Workbook

from .constants import CUP_SHEET_PATTERNS
from .models import Cup, CupPosition, TeamEntry, TournamentResult
from .qualifying import group_sheet_pattern
from .schemas import ParserConfig
from .sheets import find_sheet, find_sheets, is_empty

# Cyrillic letters people type instead of the Latin cup names
_CUP_LETTERS = {
    'A': Cup.A,
    'А': Cup.A,
    'B': Cup.B,
    'Б': Cup.B,
    'В': Cup.B,
    'C': Cup.C,
    'С': Cup.C,
}


def parse_cup_value(value) -> Optional[Cup]:
    """
    Interpret a cup cell.

    Accepts Latin or Cyrillic letters in any case ("a", "А", "Б", "В", "с").

    Returns:
        Cup, or None when the value is not a cup name
    """
    if is_empty(value):
        return None
    return _CUP_LETTERS.get(str(value).strip().upper())


def parse_cup_position(value) -> Optional[CupPosition]:
    """
    Interpret a position cell: "1", "2", "3", "1/2", "1/4" or "1/8".

    Numeric cells (1, 2.0) are accepted for the whole-number places.

    Returns:
        CupPosition, or None when the value is not a known position
    """
    if is_empty(value) or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip().replace(' ', '')
    try:
        return CupPosition(text)
    except ValueError:
        return None


def validate_document_structure(workbook: Workbook, config: ParserConfig) -> list[str]:
    """
    Check that a workbook has every sheet the parser needs.

    Checks:
    - A manual results sheet alone is enough
    - Registration sheet present
    - Every required cup sheet present
    - Swiss results or at least one group sheet present

    Returns:
        List of error messages (empty if valid)
    """
    if find_sheet(workbook, config.manual_sheet_name) is not None:
        return []

    errors = []
    sheet_list = ', '.join(workbook.sheetnames)

    if not any(find_sheet(workbook, name) for name in config.registration_sheet_names):
        errors.append(
            f'Registration sheet not found (expected "{config.registration_sheet_names[0]}"). '
            f'Sheets in file: {sheet_list}'
        )

    for cup_name in config.required_cups:
        if find_sheet(workbook, CUP_SHEET_PATTERNS[Cup(cup_name)]) is None:
            errors.append(f'Sheet "Кубок {cup_name}" not found. Sheets in file: {sheet_list}')

    has_swiss = find_sheet(workbook, config.swiss_sheet_name) is not None
    has_groups = bool(find_sheets(workbook, group_sheet_pattern(config.group_sheet_marker)))
    if not has_swiss and not has_groups:
        errors.append(
            f'No qualifying stage sheets: expected "{config.swiss_sheet_name}" '
            f'or sheets named "{config.group_sheet_marker} ..."'
        )

    return errors


def validate_teams(teams: Sequence[TeamEntry]) -> list[str]:
    """
    Sanity checks on the registered teams.

    Checks:
    - No player registered in two teams
    - No two entries with the same players

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    owners: dict[int, TeamEntry] = {}
    for team in teams:
        for player in team.players:
            first = owners.setdefault(player.id, team)
            if first is not team:
                warnings.append(
                    f'{player.name} is registered in teams #{first.order_num} and #{team.order_num}'
                )

    for index, team in enumerate(teams):
        first = next((other for other in teams[:index] if other.same_team(team)), None)
        if first is not None:
            warnings.append(f'Teams #{first.order_num} and #{team.order_num} have the same players')

    return warnings


def validate_crossover(
    crossover: Mapping[int, bool],
    cups: Mapping[int, Cup],
) -> list[str]:
    """
    Check crossover outcomes against the cup sheets.

    A crossover winner moves up to cup A, a loser drops to cup B.

    Args:
        crossover: order_num -> True if the team won its crossover match
        cups: order_num -> cup the team was decoded in

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    for order_num, promoted in sorted(crossover.items()):
        cup = cups.get(order_num)
        if promoted and cup != Cup.A:
            warnings.append(
                f'Team #{order_num} won the crossover but is in cup {cup.value if cup else "-"}'
            )
        elif not promoted and cup == Cup.A:
            warnings.append(f'Team #{order_num} lost the crossover but is in cup A')

    return warnings


def validate_results(results: Sequence[TournamentResult]) -> list[str]:
    """
    Check that computed results are internally consistent.

    Sanity checks:
    - Cup and position are set together
    - Totals never below the qualifying wins
    - No negative values

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    for result in results:
        team = str(result.team)
        if (result.cup is None) != (result.cup_position is None):
            cup = result.cup.value if result.cup else '-'
            position = result.cup_position.value if result.cup_position else '-'
            warnings.append(f'{team} has cup {cup} but position {position}')
        if result.wins < result.qualifying_wins:
            warnings.append(
                f'{team} has {result.wins} wins, fewer than {result.qualifying_wins} qualifying wins'
            )
        if min(result.points, result.wins, result.losses) < 0:
            warnings.append(
                f'{team} has negative totals (points {result.points}, '
                f'wins {result.wins}, losses {result.losses})'
            )

    return warnings
