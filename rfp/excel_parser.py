"""Excel parsing of the registration and manual results sheets."""

import io
import logging
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .config import get_config
from .constants import MAX_TEAM_PLAYERS
from .exceptions import (
    CellError,
    InvalidCellValue,
    MissingCellValue,
    SheetValidationError,
    StructuralError,
)
from .models import TeamEntry, TournamentResult
from .names import split_player_names
from .players import PlayerResolver
from .schemas import ParserConfig
from .sheets import find_header_cell, find_sheet, get_value, is_empty, iter_column, require_header
from .utils import parse_int_cell
from .validators import parse_cup_position, parse_cup_value
from .wins_losses import calculate_wins_and_losses

logger = logging.getLogger('rfp.excel_parser')


def load_workbook(source: str | Path | bytes) -> Workbook:
    """
    Open a tournament workbook from a path or raw .xlsx bytes.

    Formulas are read as their cached values.
    """
    if isinstance(source, bytes):
        return openpyxl.load_workbook(io.BytesIO(source), data_only=True)
    return openpyxl.load_workbook(source, data_only=True)


def find_registration_sheet(workbook: Workbook, config: ParserConfig) -> Optional[Worksheet]:
    for name in config.registration_sheet_names:
        sheet = find_sheet(workbook, name)
        if sheet is not None:
            return sheet
    return None


async def parse_registration_sheet(
    workbook: Workbook,
    resolver: PlayerResolver,
    config: Optional[ParserConfig] = None,
) -> list[TeamEntry]:
    """
    Read the registered teams.

    Every cell below the "Команда" header holds a comma-separated player
    list; reading stops at the first empty cell. All unresolved names are
    reported together.

    Returns:
        Teams in sheet order, order_num starting at 1

    Raises:
        StructuralError: The sheet or its header is missing
        SheetValidationError: One or more names could not be resolved
    """
    config = config or get_config()

    sheet = find_registration_sheet(workbook, config)
    if sheet is None:
        raise StructuralError(
            f'Registration sheet not found. Expected one of: '
            f'{", ".join(config.registration_sheet_names)}. '
            f'Sheets in file: {", ".join(workbook.sheetnames)}'
        )
    logger.info(f'Registration sheet: "{sheet.title}"')

    header = require_header(sheet, config.team_header)

    teams: list[TeamEntry] = []
    errors: list[CellError] = []

    for cell, value in iter_column(sheet, header.below()):
        if is_empty(value):
            break

        names = split_player_names(value)
        if len(names) > MAX_TEAM_PLAYERS:
            errors.append(
                InvalidCellValue(cell.address, value, f'at most {MAX_TEAM_PLAYERS} players')
            )
            continue

        players = []
        for raw_name in names:
            try:
                players.append(await resolver.resolve(raw_name, cell.address))
            except CellError as e:
                errors.append(e)

        if players:
            teams.append(TeamEntry(order_num=len(teams) + 1, players=tuple(players)))

    if errors:
        raise SheetValidationError(sheet.title, errors)

    logger.info(f'Registered teams: {len(teams)}')
    return teams


async def parse_manual_results(
    workbook: Workbook,
    resolver: PlayerResolver,
    config: Optional[ParserConfig] = None,
) -> Optional[list[TournamentResult]]:
    """
    Read a fully manual results sheet ("Ручной ввод").

    One row per team with the team's players, cup, position and points;
    an optional "победы" column holds qualifying wins. Bracket decoding is
    skipped entirely and points are taken as written.

    Returns:
        Results in sheet order, or None when the workbook has no manual sheet

    Raises:
        StructuralError: A required header is missing
        SheetValidationError: Any row could not be interpreted
    """
    config = config or get_config()

    sheet = find_sheet(workbook, config.manual_sheet_name)
    if sheet is None:
        return None
    logger.info(f'Manual results sheet: "{sheet.title}"')

    team_header = require_header(sheet, config.team_header)
    cup_column = require_header(sheet, config.cup_header).column
    position_column = require_header(sheet, config.position_header).column
    points_column = require_header(sheet, config.points_header).column
    wins_header = find_header_cell(sheet, config.wins_header)

    results: list[TournamentResult] = []
    errors: list[CellError] = []

    for cell, value in iter_column(sheet, team_header.below()):
        if is_empty(value):
            break
        row = cell.row
        row_errors: list[CellError] = []

        names = split_player_names(value)
        if len(names) > MAX_TEAM_PLAYERS:
            row_errors.append(
                InvalidCellValue(cell.address, value, f'at most {MAX_TEAM_PLAYERS} players')
            )
            names = []

        players = []
        for raw_name in names:
            try:
                players.append(await resolver.resolve(raw_name, cell.address))
            except CellError as e:
                row_errors.append(e)

        cup_address = f'{cup_column}{row}'
        cup_value = get_value(sheet, cup_address)
        cup = None
        if not is_empty(cup_value):
            cup = parse_cup_value(str(cup_value))
            if cup is None:
                row_errors.append(InvalidCellValue(cup_address, cup_value, 'A, B or C'))

        position_address = f'{position_column}{row}'
        position_value = get_value(sheet, position_address)
        position = None
        if not is_empty(position_value):
            position = parse_cup_position(position_value)
            if position is None:
                row_errors.append(
                    InvalidCellValue(position_address, position_value, '1, 2, 3, 1/2, 1/4 or 1/8')
                )

        if cup is not None and is_empty(position_value):
            row_errors.append(MissingCellValue(position_address, 'cup position'))
        if position is not None and is_empty(cup_value):
            row_errors.append(MissingCellValue(cup_address, 'cup'))

        points_address = f'{points_column}{row}'
        points_value = get_value(sheet, points_address)
        points = None
        if is_empty(points_value):
            row_errors.append(MissingCellValue(points_address, 'points'))
        else:
            points = parse_int_cell(points_value)
            if points is None or points < 0:
                row_errors.append(InvalidCellValue(points_address, points_value, 'a number'))

        qualifying_wins = 0
        if wins_header is not None:
            wins_address = f'{wins_header.column}{row}'
            wins_value = get_value(sheet, wins_address)
            parsed_wins = parse_int_cell(wins_value)
            if parsed_wins is None or parsed_wins < 0:
                row_errors.append(InvalidCellValue(wins_address, wins_value, 'a number of wins'))
            else:
                qualifying_wins = parsed_wins

        if row_errors:
            errors.extend(row_errors)
            continue
        if not players:
            continue

        wins, losses = calculate_wins_and_losses(position, qualifying_wins, config.swiss_rounds)
        team = TeamEntry(order_num=len(results) + 1, players=tuple(players))
        results.append(
            TournamentResult(
                team=team,
                cup=cup,
                cup_position=position,
                qualifying_wins=qualifying_wins,
                points=points,
                wins=wins,
                losses=losses,
            )
        )

    if errors:
        raise SheetValidationError(sheet.title, errors)

    logger.info(f'Manual results: {len(results)} teams')
    return results
