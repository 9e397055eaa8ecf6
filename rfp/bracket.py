"""Decoding single-elimination cup brackets laid out at fixed cells."""

import logging
from typing import Sequence

from openpyxl.worksheet.worksheet import Worksheet

from .constants import BRACKET_LAYOUTS, GRID_DETECTION_ORDER, BracketLayout
from .exceptions import CellError, MissingCellValue, SheetValidationError, UnsupportedGridSize
from .models import CupPosition, TeamEntry
from .players import PlayerResolver
from .sheets import get_value, is_empty

logger = logging.getLogger('rfp.bracket')


def detect_grid_size(sheet: Worksheet) -> BracketLayout:
    """
    Pick the bracket layout whose anchor cells are all occupied.

    Larger grids are tried first.

    Raises:
        UnsupportedGridSize: No layout matches
    """
    for size in GRID_DETECTION_ORDER:
        layout = BRACKET_LAYOUTS[size]
        if all(not is_empty(get_value(sheet, address)) for address in layout.anchors):
            logger.debug(f'Sheet "{sheet.title}": {size} team grid')
            return layout
    raise UnsupportedGridSize(sheet.title)


async def decode_bracket(
    sheet: Worksheet,
    resolver: PlayerResolver,
    teams: Sequence[TeamEntry],
) -> dict[int, CupPosition]:
    """
    Read the furthest stage every team reached in a cup sheet.

    A team appears once per round it played; the best stage wins. The
    third place cell is optional, every other cell is required.

    Returns:
        order_num -> CupPosition

    Raises:
        UnsupportedGridSize: The grid is not recognized
        SheetValidationError: Cells are empty or name unknown players
    """
    layout = detect_grid_size(sheet)

    positions: dict[int, CupPosition] = {}
    errors: list[CellError] = []

    for stage in layout.stages:
        for address in stage.cells:
            value = get_value(sheet, address)
            if is_empty(value):
                if stage.position != CupPosition.THIRD_PLACE:
                    errors.append(MissingCellValue(address, 'team'))
                continue

            try:
                team = await resolver.resolve_team(value, teams, address)
            except CellError as e:
                errors.append(e)
                continue

            current = positions.get(team.order_num)
            if current is None or stage.position.priority > current.priority:
                positions[team.order_num] = stage.position

    if errors:
        raise SheetValidationError(sheet.title, errors)

    logger.info(f'Sheet "{sheet.title}": {len(positions)} teams decoded ({layout.size} team grid)')
    return positions
