"""Qualifying stage results: Swiss system summary or round-robin groups."""

import logging
import re
from typing import Optional, Sequence

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .config import get_config
from .exceptions import CellError, InvalidCellValue, NoQualifyingData, SheetValidationError
from .models import QualifyingResult, TeamEntry
from .names import normalize_name
from .players import PlayerResolver
from .schemas import ParserConfig
from .sheets import find_sheet, find_sheets, get_value, is_empty, iter_column, require_header
from .utils import parse_int_cell

logger = logging.getLogger('rfp.qualifying')


def group_sheet_pattern(marker: str) -> re.Pattern:
    """Pattern matching every normalized sheet title that contains the marker."""
    return re.compile(re.escape(normalize_name(marker)))


def _is_bye(value, config: ParserConfig) -> bool:
    return normalize_name(value) in {normalize_name(m) for m in config.bye_markers}


def _read_wins(sheet: Worksheet, address: str) -> int:
    value = get_value(sheet, address)
    wins = parse_int_cell(value)
    if wins is None or wins < 0:
        raise InvalidCellValue(address, value, 'a number of wins')
    return wins


async def parse_swiss_results(
    sheet: Worksheet,
    resolver: PlayerResolver,
    teams: Sequence[TeamEntry],
    config: Optional[ParserConfig] = None,
) -> dict[int, QualifyingResult]:
    """
    Read the Swiss system summary sheet.

    Rows are read below the "Команда" header until a blank cell or a bye
    marker. Wins come from the "Результат" column of the same row; losses
    are the remaining rounds.

    Returns:
        order_num -> QualifyingResult

    Raises:
        StructuralError: A header is missing
        SheetValidationError: Any row could not be interpreted
    """
    config = config or get_config()

    team_header = require_header(sheet, config.team_header)
    result_column = require_header(sheet, config.result_header).column

    results: dict[int, QualifyingResult] = {}
    errors: list[CellError] = []

    for cell, value in iter_column(sheet, team_header.below()):
        if is_empty(value) or _is_bye(value, config):
            break
        try:
            team = await resolver.resolve_team(value, teams, cell.address)
            wins = _read_wins(sheet, f'{result_column}{cell.row}')
        except CellError as e:
            errors.append(e)
            continue

        if team.order_num in results:
            errors.append(CellError(f'team {team} is listed more than once', cell.address))
            continue
        results[team.order_num] = QualifyingResult(
            wins=wins, losses=max(0, config.swiss_rounds - wins)
        )

    if errors:
        raise SheetValidationError(sheet.title, errors)

    logger.info(f'Swiss results: {len(results)} teams')
    return results


async def parse_group_sheet(
    sheet: Worksheet,
    resolver: PlayerResolver,
    teams: Sequence[TeamEntry],
    config: Optional[ParserConfig] = None,
) -> dict[int, QualifyingResult]:
    """
    Read one round-robin group.

    Empty rows inside the table are tolerated; reading stops after
    config.group_empty_rows_limit consecutive ones. Every team in a group
    plays all the others, so losses = group size - 1 - wins.
    """
    config = config or get_config()

    team_header = require_header(sheet, config.team_header)
    wins_column = require_header(sheet, config.wins_header).column

    entries: list[tuple[TeamEntry, int]] = []
    errors: list[CellError] = []
    empty_rows = 0

    for cell, value in iter_column(sheet, team_header.below()):
        if is_empty(value):
            empty_rows += 1
            if empty_rows >= config.group_empty_rows_limit:
                break
            continue
        empty_rows = 0
        if _is_bye(value, config):
            continue

        try:
            team = await resolver.resolve_team(value, teams, cell.address)
            wins = _read_wins(sheet, f'{wins_column}{cell.row}')
        except CellError as e:
            errors.append(e)
            continue
        entries.append((team, wins))

    if errors:
        raise SheetValidationError(sheet.title, errors)

    group_size = len(entries)
    logger.debug(f'Group "{sheet.title}": {group_size} teams')
    return {
        team.order_num: QualifyingResult(wins=wins, losses=max(0, group_size - 1 - wins))
        for team, wins in entries
    }


async def parse_group_results(
    workbook: Workbook,
    resolver: PlayerResolver,
    teams: Sequence[TeamEntry],
    config: Optional[ParserConfig] = None,
) -> dict[int, QualifyingResult]:
    """
    Merge the results of every group sheet, in workbook order.

    Raises:
        SheetValidationError: A team is listed in more than one group
    """
    config = config or get_config()

    teams_by_num = {team.order_num: team for team in teams}
    results: dict[int, QualifyingResult] = {}
    group_of: dict[int, str] = {}
    for sheet in find_sheets(workbook, group_sheet_pattern(config.group_sheet_marker)):
        group = await parse_group_sheet(sheet, resolver, teams, config)

        errors = [
            CellError(f'team {teams_by_num[order_num]} is already in "{group_of[order_num]}"')
            for order_num in group
            if order_num in results
        ]
        if errors:
            raise SheetValidationError(sheet.title, errors)

        results.update(group)
        group_of.update(dict.fromkeys(group, sheet.title))

    logger.info(f'Group results: {len(results)} teams')
    return results


async def parse_qualifying_stage(
    workbook: Workbook,
    resolver: PlayerResolver,
    teams: Sequence[TeamEntry],
    config: Optional[ParserConfig] = None,
) -> dict[int, QualifyingResult]:
    """
    Qualifying results from the Swiss summary if present, otherwise groups.

    Raises:
        NoQualifyingData: The chosen source yields no teams
        StructuralError, SheetValidationError: From the sheet parsers
    """
    config = config or get_config()

    swiss_sheet = find_sheet(workbook, config.swiss_sheet_name)
    if swiss_sheet is not None:
        logger.info(f'Qualifying stage: Swiss system ("{swiss_sheet.title}")')
        results = await parse_swiss_results(swiss_sheet, resolver, teams, config)
    else:
        logger.info('Qualifying stage: groups')
        results = await parse_group_results(workbook, resolver, teams, config)

    if not results:
        raise NoQualifyingData()
    return results
