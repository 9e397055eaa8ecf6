"""Workbook and roster builders shared by the tests."""

import openpyxl

from rfp.constants import BRACKET_LAYOUTS, CROSSOVER_PARTICIPANT_CELLS, CROSSOVER_WINNER_CELLS
from rfp.models import CupPosition, Player

SURNAMES = [
    'Иванов', 'Петров', 'Сидоров', 'Смирнов', 'Кузнецов', 'Попов', 'Васильев', 'Соколов',
    'Михайлов', 'Новиков', 'Федоров', 'Морозов', 'Волков', 'Алексеев', 'Лебедев', 'Семенов',
    'Егоров', 'Павлов', 'Козлов', 'Степанов', 'Николаев', 'Орлов', 'Андреев', 'Макаров',
    'Никитин', 'Захаров', 'Зайцев', 'Соловьев', 'Борисов', 'Яковлев', 'Григорьев', 'Романов',
    'Воробьев', 'Сергеев', 'Фролов', 'Александров', 'Дмитриев', 'Королев', 'Гусев', 'Киселев',
]
FIRST_NAMES = ['Иван', 'Петр', 'Олег', 'Денис', 'Антон']

ROSTER_PLAYERS = [
    Player(id=i + 1, name=f'{surname} {FIRST_NAMES[i % len(FIRST_NAMES)]}')
    for i, surname in enumerate(SURNAMES)
]


def make_workbook(sheets: dict) -> openpyxl.Workbook:
    """Workbook with one sheet per title, cells given as {address: value}."""
    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)
    for title, cells in sheets.items():
        sheet = workbook.create_sheet(title)
        for address, value in cells.items():
            sheet[address] = value
    return workbook


def column_cells(header: str, values: list, column: str = 'B', header_row: int = 2) -> dict:
    """A header with values listed below it."""
    cells = {f'{column}{header_row}': header}
    for offset, value in enumerate(values, start=1):
        cells[f'{column}{header_row + offset}'] = value
    return cells


def registration_cells(teams: list[str]) -> dict:
    return column_cells('Команда', teams)


def table_cells(headers: list[str], rows: list[tuple], header_row: int = 2) -> dict:
    """A table starting at column B: one column per header."""
    columns = 'BCDEFGH'
    cells = {}
    for index, header in enumerate(headers):
        cells[f'{columns[index]}{header_row}'] = header
    for offset, row in enumerate(rows, start=1):
        for index, value in enumerate(row):
            if value is not None:
                cells[f'{columns[index]}{header_row + offset}'] = value
    return cells


def bracket_cells(size: int, entrants: list[str], third_place: bool = True) -> dict:
    """
    Fill a bracket grid where the upper team of every match wins.

    For 8 entrants e0..e7: e0 wins, e4 is runner-up, e2 takes third
    place, e6 loses the semifinal, odd entrants lose the quarterfinal.
    """
    layout = BRACKET_LAYOUTS[size]
    cells = {}
    current = list(entrants)
    semifinal_losers = []

    for stage in layout.stages:
        if stage.position == CupPosition.THIRD_PLACE:
            continue
        for address, name in zip(stage.cells, current):
            cells[address] = name
        if stage.position == CupPosition.SEMI_FINAL:
            semifinal_losers = current[1::2]
        current = current[::2]

    if third_place:
        third_stage = next(s for s in layout.stages if s.position == CupPosition.THIRD_PLACE)
        cells[third_stage.cells[0]] = semifinal_losers[0]
    return cells


def crossover_cells(entrants: list[str]) -> dict:
    """Crossover sheet where the upper team of every match is promoted."""
    cells = dict(zip(CROSSOVER_PARTICIPANT_CELLS, entrants))
    cells.update(zip(CROSSOVER_WINNER_CELLS, entrants[::2]))
    return cells
