"""Crossover ("стык") play-in between cups A and B."""

import logging
import re
from typing import Optional, Sequence

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .config import get_config
from .constants import CROSSOVER_PARTICIPANT_CELLS, CROSSOVER_WINNER_CELLS
from .exceptions import CellError, MissingCellValue, SheetValidationError
from .models import TeamEntry
from .players import PlayerResolver
from .schemas import ParserConfig
from .sheets import find_sheet, get_value, is_empty

logger = logging.getLogger('rfp.crossover')


def find_crossover_sheet(
    workbook: Workbook, config: Optional[ParserConfig] = None
) -> Optional[Worksheet]:
    config = config or get_config()
    return find_sheet(workbook, re.compile(config.crossover_sheet_pattern))


async def parse_crossover_sheet(
    sheet: Worksheet,
    resolver: PlayerResolver,
    teams: Sequence[TeamEntry],
) -> dict[int, bool]:
    """
    Read crossover outcomes.

    Every participant starts as eliminated; teams in the winners column
    are then marked as promoted.

    Returns:
        order_num -> True if the team won its crossover match

    Raises:
        SheetValidationError: Cells are empty or name unknown players
    """
    outcomes: dict[int, bool] = {}
    errors: list[CellError] = []

    for cells, promoted in ((CROSSOVER_PARTICIPANT_CELLS, False), (CROSSOVER_WINNER_CELLS, True)):
        for address in cells:
            value = get_value(sheet, address)
            if is_empty(value):
                errors.append(MissingCellValue(address, 'team'))
                continue
            try:
                team = await resolver.resolve_team(value, teams, address)
            except CellError as e:
                errors.append(e)
                continue
            outcomes[team.order_num] = promoted

    if errors:
        raise SheetValidationError(sheet.title, errors)

    promoted_count = sum(outcomes.values())
    logger.info(f'Crossover: {len(outcomes)} teams, {promoted_count} promoted')
    return outcomes
